"""ConsultationRequest model.

One row per submitted booking. Contact, firmographic, scheduling and
qualification fields are copied from the validated intake form. The
derived fields (estimated_value, priority_score) are computed once at
submission and may not be changed afterwards.

Lifecycle: pending -> confirmed -> completed, or any -> rejected/cancelled.
"""

import uuid

from sqlalchemy.orm import validates

from consultdesk.extensions import db


class ConsultationRequest(db.Model):
    __tablename__ = "consultations"

    STATUSES = [
        "pending",
        "confirmed",
        "completed",
        "rejected",
        "cancelled",
    ]

    DERIVED_FIELDS = ("estimated_value", "priority_score")

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    consultation_id = db.Column(
        db.String(64), unique=True, nullable=False, index=True
    )  # CONS-<epoch millis>-<suffix>

    # --- Contact ---
    first_name = db.Column(db.String(255), nullable=False)
    last_name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(50), nullable=True)

    # --- Firmographic ---
    company = db.Column(db.String(255), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    industry = db.Column(db.String(100), nullable=False)
    company_size = db.Column(db.String(50), nullable=False)

    # --- Scheduling ---
    timezone = db.Column(db.String(100), nullable=False)
    preferred_date = db.Column(db.Date, nullable=False)
    preferred_time = db.Column(db.String(20), nullable=False)
    secondary_date = db.Column(db.Date, nullable=True)
    secondary_time = db.Column(db.String(20), nullable=True)

    # --- Qualification ---
    urgency = db.Column(db.String(20), nullable=False, default="medium")
    current_challenges = db.Column(db.Text, nullable=False)
    ai_experience = db.Column(db.Text, nullable=True)
    specific_interests = db.Column(db.JSON, nullable=False, default=list)
    hear_about_us = db.Column(db.String(255), nullable=True)
    additional_notes = db.Column(db.Text, nullable=True)

    # --- Derived (write-once) ---
    estimated_value = db.Column(db.Integer, nullable=False)
    priority_score = db.Column(db.Integer, nullable=False)

    # --- Lifecycle ---
    status = db.Column(db.String(50), default="pending", nullable=False, index=True)
    admin_notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now(), index=True
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    @validates(*DERIVED_FIELDS)
    def _validate_derived(self, key, value):
        current = getattr(self, key)
        if current is not None and value != current:
            raise ValueError(f"{key} is computed at submission and cannot be changed.")
        return value

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def to_summary(self):
        """Short dict returned to the visitor after booking."""
        return {
            "consultation_id": self.consultation_id,
            "name": self.full_name,
            "email": self.email,
            "company": self.company,
            "preferred_date": self.preferred_date.isoformat() if self.preferred_date else None,
            "preferred_time": self.preferred_time,
        }

    def __repr__(self):
        return f"<ConsultationRequest {self.consultation_id} ({self.status})>"
