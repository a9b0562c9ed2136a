"""ActivityEntry model — admin activity feed.

Denormalized trail of create/update/delete events across the admin
application, plus manual notes. Each entry carries the icon and color
tag the dashboard renders it with.
"""

import uuid
from datetime import datetime, timezone

from consultdesk.extensions import db


class ActivityEntry(db.Model):
    __tablename__ = "activities"

    TYPES = [
        "consultation_booked",
        "consultation_confirmed",
        "consultation_completed",
        "consultation_rejected",
        "consultation_cancelled",
        "consultation_updated",
        "consultation_deleted",
        "content_published",
        "lead_converted",
        "speaking_confirmed",
        "settings_updated",
        "template_updated",
        "urgent_follow_up",
        "note",
    ]

    ICONS = [
        "FiMessageSquare",
        "FiCalendar",
        "FiEdit3",
        "FiDollarSign",
        "FiAward",
        "FiCheckCircle",
        "FiUser",
        "FiTag",
        "FiActivity",
        "FiSettings",
        "FiTrash2",
        "FiXCircle",
    ]

    COLORS = ["blue", "green", "purple", "yellow", "red", "orange", "gray"]

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    type = db.Column(db.String(50), nullable=False, default="note", index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    icon = db.Column(db.String(50), nullable=False, default="FiMessageSquare")
    color = db.Column(db.String(20), nullable=False, default="blue")
    actionable = db.Column(db.Boolean, nullable=False, default=False)
    follow_up = db.Column(db.Boolean, nullable=False, default=False)
    completed = db.Column(db.Boolean, nullable=False, default=False)
    consultation_id = db.Column(db.String(64), nullable=True)  # CONS-... ref, not an FK
    value = db.Column(db.Integer, nullable=True)
    actor_user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id"),
        nullable=True,
    )
    timestamp = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    # --- Relationships ---
    actor = db.relationship("User", lazy="joined")

    def __repr__(self):
        return f"<ActivityEntry {self.type}: {self.title}>"
