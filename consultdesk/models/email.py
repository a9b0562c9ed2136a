"""Email template and email log models.

Template variables use {{variable}} syntax and are filled from a
consultation request:
  {{first_name}}       — prospect's first name
  {{last_name}}        — prospect's last name
  {{company}}          — company name
  {{preferred_date}}   — requested date (YYYY-MM-DD)
  {{preferred_time}}   — requested time slot
  {{consultation_id}}  — CONS-... reference
"""

import html
import uuid
from datetime import datetime, timezone

from consultdesk.extensions import db


class EmailTemplate(db.Model):
    __tablename__ = "email_templates"

    TYPES = [
        "consultation_confirmation",
        "consultation_reminder",
        "follow_up",
        "newsletter",
        "custom",
    ]
    STATUSES = ["draft", "active"]

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(50), nullable=False, default="custom")
    subject = db.Column(db.String(255), nullable=False)
    body = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="draft")
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    @staticmethod
    def _replace(text, consultation, escape=False):
        replacements = {
            "{{first_name}}": consultation.first_name or "",
            "{{last_name}}": consultation.last_name or "",
            "{{company}}": consultation.company or "",
            "{{preferred_date}}": (
                consultation.preferred_date.isoformat()
                if consultation.preferred_date else ""
            ),
            "{{preferred_time}}": consultation.preferred_time or "",
            "{{consultation_id}}": consultation.consultation_id or "",
        }
        for placeholder, value in replacements.items():
            text = text.replace(placeholder, html.escape(value) if escape else value)
        return text

    def render_subject(self, consultation):
        return self._replace(self.subject, consultation)

    def render(self, consultation):
        """Replace template variables with consultation-specific values."""
        return self._replace(self.body, consultation, escape=True)

    def __repr__(self):
        return f"<EmailTemplate {self.name} ({self.status})>"


class EmailLog(db.Model):
    __tablename__ = "email_logs"

    STATUSES = ["queued", "skipped"]

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    recipient = db.Column(db.String(500), nullable=False)
    subject = db.Column(db.String(255), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="queued")
    template_type = db.Column(db.String(50), nullable=True)
    consultation_id = db.Column(db.String(64), nullable=True)
    error = db.Column(db.Text, nullable=True)
    sent_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self):
        return f"<EmailLog {self.recipient} {self.status}>"
