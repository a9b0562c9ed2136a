"""Booking service — turn a submitted intake form into a stored consultation.

Pipeline: normalize -> validate -> score -> assemble -> insert, then the
best-effort side effects (activity entry, emails). Validation errors are
raised before anything is computed or written; a failed insert surfaces
as PersistenceError and nothing else happens.
"""

import logging
import secrets
import string
import time
from datetime import datetime, timezone

from consultdesk.services import store
from consultdesk.services.activity_service import log_event
from consultdesk.services.email_service import send_booking_emails
from consultdesk.services.intake import (
    IntakeValidationError,
    normalize_form,
    parse_date,
    validate_intake,
)
from consultdesk.services.scoring import score_form

logger = logging.getLogger(__name__)

ID_PREFIX = "CONS"
ID_SUFFIX_LENGTH = 9
ID_ALPHABET = string.ascii_lowercase + string.digits

# Stored as NULL when left blank on the form.
OPTIONAL_FIELDS = [
    "phone",
    "secondary_date",
    "secondary_time",
    "ai_experience",
    "hear_about_us",
    "additional_notes",
]


def generate_consultation_id(now_ms=None):
    """CONS-<epoch millis>-<9 random lowercase alphanumerics>."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_SUFFIX_LENGTH))
    return f"{ID_PREFIX}-{now_ms}-{suffix}"


def assemble_record(form, now=None):
    """Build the insert dict for an already-validated, normalized form.

    Derived fields are computed here, once, from this snapshot.
    """
    now = now or datetime.now(timezone.utc)

    record = {
        field: form.get(field) or ""
        for field in (
            "first_name", "last_name", "email", "phone", "company", "title",
            "industry", "company_size", "timezone", "preferred_time",
            "secondary_time", "urgency", "current_challenges", "ai_experience",
            "hear_about_us", "additional_notes",
        )
    }
    record["preferred_date"] = parse_date(form["preferred_date"])
    record["secondary_date"] = parse_date(form.get("secondary_date") or "")
    record["specific_interests"] = list(form.get("specific_interests") or [])

    for field in OPTIONAL_FIELDS:
        if record[field] in ("", None):
            record[field] = None

    record.update(score_form(form))
    record["consultation_id"] = generate_consultation_id(int(now.timestamp() * 1000))
    record["status"] = "pending"
    record["created_at"] = now
    return record


def submit_consultation(data, today=None):
    """Validate, score and store a booking.

    Args:
        data:  Raw request data (dict-like).
        today: Override for the current calendar day (tests).

    Returns:
        The stored ConsultationRequest.

    Raises:
        IntakeValidationError: One or more fields failed validation.
        PersistenceError: The insert failed.
    """
    form = normalize_form(data)
    errors = validate_intake(form, today=today)
    if errors:
        logger.info(f"Booking rejected — invalid fields: {', '.join(sorted(errors))}")
        raise IntakeValidationError(errors)

    record = assemble_record(form)
    consultation = store.insert("consultations", record)
    logger.info(
        f"Consultation {consultation.consultation_id} booked by {consultation.email} "
        f"(value={consultation.estimated_value}, priority={consultation.priority_score})"
    )

    log_event(
        "consultation_booked",
        "New consultation request received",
        description=(
            f"{consultation.full_name} from {consultation.company} requested "
            f"{consultation.preferred_date.isoformat()} at {consultation.preferred_time}"
        ),
        consultation_id=consultation.consultation_id,
        value=consultation.estimated_value,
        actionable=True,
    )

    try:
        send_booking_emails(consultation)
    except Exception as e:
        logger.error(f"Booking emails for {consultation.consultation_id} failed: {e}")

    return consultation
