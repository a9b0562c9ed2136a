"""Consultation intake — form options and validation.

validate_intake() checks every field independently and returns a dict of
field name -> error message. An empty dict means the submission is valid.
Nothing here touches the database.
"""

import html
import re
from datetime import date

import bleach

# Simple email regex — not exhaustive, just sanity-check
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_PHONE_LENGTH = 10

INDUSTRIES = [
    "Broadcasting",
    "Digital Media",
    "Publishing",
    "Newspapers",
    "Radio",
    "Television",
    "Streaming",
    "Podcasting",
    "Content Creation",
    "Marketing Agency",
    "Other",
]

COMPANY_SIZES = [
    "1-10 employees",
    "11-50 employees",
    "51-100 employees",
    "101-500 employees",
    "501-1000 employees",
    "1000+ employees",
]

TIMEZONES = [
    "Pacific Time (PT)",
    "Mountain Time (MT)",
    "Central Time (CT)",
    "Eastern Time (ET)",
    "GMT/UTC",
    "Central European Time (CET)",
    "Asia Pacific (APAC)",
    "Other",
]

TIME_SLOTS = [
    "9:00 AM",
    "10:00 AM",
    "11:00 AM",
    "12:00 PM",
    "1:00 PM",
    "2:00 PM",
    "3:00 PM",
    "4:00 PM",
    "5:00 PM",
]

INTEREST_TAGS = [
    "Content Automation",
    "Audience Analytics",
    "Personalization",
    "Content Creation",
    "Workflow Optimization",
    "Cost Reduction",
    "Revenue Growth",
    "Competitive Advantage",
    "Team Training",
]

URGENCY_LEVELS = ["low", "medium", "high"]
DEFAULT_URGENCY = "medium"

TEXT_FIELDS = [
    "first_name",
    "last_name",
    "email",
    "phone",
    "company",
    "title",
    "industry",
    "company_size",
    "timezone",
    "preferred_date",
    "preferred_time",
    "secondary_date",
    "secondary_time",
    "urgency",
    "current_challenges",
    "ai_experience",
    "hear_about_us",
    "additional_notes",
]

FREE_TEXT_FIELDS = [
    "current_challenges",
    "ai_experience",
    "hear_about_us",
    "additional_notes",
]

# Field -> message, checked in this order.
REQUIRED_FIELDS = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "email": "Email is required",
    "company": "Company is required",
    "title": "Title is required",
    "industry": "Industry is required",
    "company_size": "Company size is required",
    "timezone": "Timezone is required",
    "preferred_date": "Preferred date is required",
    "preferred_time": "Preferred time is required",
    "current_challenges": "Please describe your current challenges",
}


class IntakeValidationError(ValueError):
    """Raised when a booking fails validation. Carries the field errors."""

    def __init__(self, errors):
        self.errors = dict(errors)
        super().__init__(
            "Invalid consultation request: " + ", ".join(sorted(self.errors))
        )


def form_options():
    """Fixed choices rendered by the booking form."""
    return {
        "industries": INDUSTRIES,
        "company_sizes": COMPANY_SIZES,
        "timezones": TIMEZONES,
        "time_slots": TIME_SLOTS,
        "interests": INTEREST_TAGS,
        "urgency_levels": URGENCY_LEVELS,
    }


def sanitize_text(text):
    """Strip all HTML tags from user input, keeping the text as typed."""
    if not text:
        return text
    return html.unescape(bleach.clean(text, tags=[], strip=True)).strip()


def normalize_form(data):
    """Coerce raw request data into stripped strings + a deduplicated tag list.

    Missing keys become "". Free-text fields lose any markup here, so the
    required checks see what will actually be stored. `specific_interests`
    may arrive as a list (JSON, multi-value form) or a comma-separated
    string; anything else is passed through for validate_intake to reject.
    """
    form = {}
    for field in TEXT_FIELDS:
        value = data.get(field)
        form[field] = str(value).strip() if value is not None else ""

    for field in FREE_TEXT_FIELDS:
        form[field] = sanitize_text(form[field])

    if not form["urgency"]:
        form["urgency"] = DEFAULT_URGENCY

    raw = data.get("specific_interests") or []
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, (list, tuple)):
        form["specific_interests"] = raw
        return form

    interests = []
    for tag in raw:
        tag = str(tag).strip()
        if tag and tag not in interests:
            interests.append(tag)
    form["specific_interests"] = interests
    return form


def parse_date(value):
    """Parse a YYYY-MM-DD string. Returns None when it can't be parsed."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value[:10])
    except (TypeError, ValueError):
        return None


def validate_intake(form, today=None):
    """Validate a normalized booking form.

    Args:
        form:  Output of normalize_form().
        today: Override for the current calendar day (tests).

    Returns:
        Dict of field -> error message; empty when valid.
    """
    today = today or date.today()
    errors = {}

    for field, message in REQUIRED_FIELDS.items():
        if not (form.get(field) or "").strip():
            errors[field] = message

    email = (form.get("email") or "").strip()
    if email and not EMAIL_RE.match(email):
        errors["email"] = "Please enter a valid email address"

    phone = (form.get("phone") or "").strip()
    if phone and len(phone) < MIN_PHONE_LENGTH:
        errors["phone"] = "Please enter a valid phone number"

    preferred = (form.get("preferred_date") or "").strip()
    if preferred:
        parsed = parse_date(preferred)
        if parsed is None:
            errors["preferred_date"] = "Please enter a valid date"
        elif parsed < today:
            errors["preferred_date"] = "Please select a future date"

    secondary = (form.get("secondary_date") or "").strip()
    if secondary and parse_date(secondary) is None:
        errors["secondary_date"] = "Please enter a valid date"

    if not isinstance(form.get("specific_interests", []), list):
        errors["specific_interests"] = "Please choose interests from the list"

    return errors
