"""Consultation admin service — filtering, stats, status changes, export.

Filtering and aggregation run in SQL rather than over a fetched list.
Status changes follow VALID_TRANSITIONS; derived fields are never
written here.
"""

import csv
import io
import logging
from datetime import datetime, time, timezone

from sqlalchemy import func, or_

from consultdesk.extensions import db
from consultdesk.models.consultation import ConsultationRequest
from consultdesk.services import store
from consultdesk.services.activity_service import log_event
from consultdesk.services.intake import parse_date

logger = logging.getLogger(__name__)

VALID_TRANSITIONS = {
    "pending": {"confirmed", "rejected", "cancelled"},
    "confirmed": {"completed", "rejected", "cancelled"},
    "completed": {"rejected", "cancelled"},
    "rejected": {"cancelled"},
    "cancelled": {"rejected"},
}

STATUS_TITLES = {
    "confirmed": "Consultation confirmed with client",
    "completed": "Consultation completed",
    "rejected": "Consultation rejected",
    "cancelled": "Consultation cancelled",
}

CSV_COLUMNS = [
    "consultation_id",
    "created_at",
    "status",
    "first_name",
    "last_name",
    "email",
    "phone",
    "company",
    "title",
    "industry",
    "company_size",
    "urgency",
    "preferred_date",
    "preferred_time",
    "timezone",
    "estimated_value",
    "priority_score",
]


def list_consultations(status=None, urgency=None, industry=None,
                       date_from=None, date_to=None, search=None):
    """Newest-first consultations matching every supplied filter.

    date_from/date_to are inclusive calendar days on created_at.
    search matches first/last name, company and email, case-insensitive.
    """
    query = ConsultationRequest.query

    if status:
        query = query.filter(ConsultationRequest.status == status)
    if urgency:
        query = query.filter(ConsultationRequest.urgency == urgency)
    if industry and industry != "all":
        query = query.filter(ConsultationRequest.industry.ilike(f"%{industry}%"))

    start = parse_date(date_from) if date_from else None
    if start:
        query = query.filter(
            ConsultationRequest.created_at >= datetime.combine(start, time.min, tzinfo=timezone.utc)
        )
    end = parse_date(date_to) if date_to else None
    if end:
        query = query.filter(
            ConsultationRequest.created_at <= datetime.combine(end, time.max, tzinfo=timezone.utc)
        )

    if search:
        like = f"%{search}%"
        query = query.filter(
            or_(
                ConsultationRequest.first_name.ilike(like),
                ConsultationRequest.last_name.ilike(like),
                ConsultationRequest.company.ilike(like),
                ConsultationRequest.email.ilike(like),
            )
        )

    consultations = query.order_by(ConsultationRequest.created_at.desc()).all()

    logger.debug(
        "Fetched %d consultations (status=%s, urgency=%s, industry=%s, search=%s)",
        len(consultations), status, urgency, industry, search,
    )
    return consultations


def get_stats():
    """Dashboard totals: overall, per-status counts and summed estimated value."""
    rows = (
        db.session.query(
            ConsultationRequest.status,
            func.count(ConsultationRequest.id),
            func.coalesce(func.sum(ConsultationRequest.estimated_value), 0),
        )
        .group_by(ConsultationRequest.status)
        .all()
    )

    stats = {status: 0 for status in ConsultationRequest.STATUSES}
    stats["total"] = 0
    stats["total_value"] = 0
    for status, count, value in rows:
        stats[status] = count
        stats["total"] += count
        stats["total_value"] += int(value or 0)
    return stats


def upcoming(limit=5):
    """Open (pending/confirmed) consultations, soonest preferred date first."""
    return (
        ConsultationRequest.query
        .filter(ConsultationRequest.status.in_(["pending", "confirmed"]))
        .order_by(ConsultationRequest.preferred_date.asc(),
                  ConsultationRequest.created_at.asc())
        .limit(limit)
        .all()
    )


def get_consultation(consultation_pk):
    consultation = store.get("consultations", consultation_pk)
    if consultation is None:
        raise ValueError("Consultation not found.")
    return consultation


def update_status(consultation_pk, new_status, admin_notes=None, actor_user_id=None):
    """Move a consultation to a new status and/or replace its admin notes.

    Raises:
        ValueError: Unknown status, invalid transition, or record not found.
    """
    if new_status not in ConsultationRequest.STATUSES:
        raise ValueError(f"Invalid status '{new_status}'.")

    consultation = get_consultation(consultation_pk)
    old_status = consultation.status

    if new_status != old_status and new_status not in VALID_TRANSITIONS.get(old_status, set()):
        raise ValueError(
            f"Cannot change status from '{old_status}' to '{new_status}'."
        )

    patch = {"status": new_status}
    if admin_notes is not None and admin_notes.strip():
        patch["admin_notes"] = admin_notes.strip()

    consultation = store.update("consultations", consultation_pk, patch)

    if new_status != old_status:
        event_type = f"consultation_{new_status}"
        title = STATUS_TITLES[new_status]
    else:
        event_type = "consultation_updated"
        title = "Consultation notes updated"

    log_event(
        event_type,
        title,
        description=f"{consultation.full_name} ({consultation.company}): {old_status} -> {new_status}",
        consultation_id=consultation.consultation_id,
        value=consultation.estimated_value,
        actor_user_id=actor_user_id,
    )
    return consultation


def delete_consultation(consultation_pk, actor_user_id=None):
    consultation = get_consultation(consultation_pk)
    ref = consultation.consultation_id
    name = consultation.full_name
    company = consultation.company

    store.delete("consultations", consultation_pk)

    log_event(
        "consultation_deleted",
        "Consultation deleted",
        description=f"{name} ({company})",
        consultation_id=ref,
        actor_user_id=actor_user_id,
    )


def export_csv(consultations):
    """Render consultations as CSV text with CSV_COLUMNS as the header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_COLUMNS + ["specific_interests"])
    for c in consultations:
        row = []
        for column in CSV_COLUMNS:
            value = getattr(c, column)
            row.append(value.isoformat() if hasattr(value, "isoformat") else value)
        row.append("; ".join(c.specific_interests or []))
        writer.writerow(row)
    return buffer.getvalue()
