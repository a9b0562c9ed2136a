"""Singleton settings rows for the admin screens.

Each table holds at most one row. The services layer upserts it; the
DEFAULTS below are what a fresh install shows before the first save.
"""

import uuid

from consultdesk.extensions import db


class AdminSettings(db.Model):
    """General dashboard settings, stored as four JSON sections."""

    __tablename__ = "admin_settings"

    SECTIONS = ("profile", "notifications", "business", "integrations")

    DEFAULTS = {
        "profile": {
            "name": "Guy Tasaka",
            "email": "guy@tasakadigital.com",
            "phone": "",
            "title": "AI Strategy Consultant",
            "bio": "",
            "timezone": "Pacific Time (PT)",
        },
        "notifications": {
            "emailConsultations": True,
            "emailLeads": True,
            "emailWeeklyReport": True,
            "smsUrgent": False,
            "desktopNotifications": True,
        },
        "business": {
            "consultationDuration": 60,
            "consultationRate": 500,
            "autoConfirmation": False,
            "requireApproval": True,
            "workingHours": {"start": "09:00", "end": "17:00"},
            "workingDays": ["monday", "tuesday", "wednesday", "thursday", "friday"],
        },
        "integrations": {
            "calendly": False,
            "zoom": True,
            "slack": False,
            "hubspot": False,
        },
    }

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    profile = db.Column(db.JSON, nullable=False, default=dict)
    notifications = db.Column(db.JSON, nullable=False, default=dict)
    business = db.Column(db.JSON, nullable=False, default=dict)
    integrations = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self):
        return f"<AdminSettings {self.id}>"


class SeoSettings(db.Model):
    __tablename__ = "seo_settings"

    FIELDS = (
        "site_title",
        "site_description",
        "keywords",
        "canonical_url",
        "og_title",
        "og_description",
        "og_image",
        "og_type",
        "twitter_card",
        "twitter_site",
        "twitter_creator",
        "robots_txt",
        "schema_markup",
    )

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    site_title = db.Column(db.String(255), nullable=True)
    site_description = db.Column(db.Text, nullable=True)
    keywords = db.Column(db.Text, nullable=True)
    canonical_url = db.Column(db.String(500), nullable=True)
    og_title = db.Column(db.String(255), nullable=True)
    og_description = db.Column(db.Text, nullable=True)
    og_image = db.Column(db.String(500), nullable=True)
    og_type = db.Column(db.String(50), nullable=True, default="website")
    twitter_card = db.Column(db.String(50), nullable=True, default="summary_large_image")
    twitter_site = db.Column(db.String(100), nullable=True)
    twitter_creator = db.Column(db.String(100), nullable=True)
    robots_txt = db.Column(db.Text, nullable=True)
    schema_markup = db.Column(db.Text, nullable=True)  # JSON-LD, stored verbatim
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self):
        return f"<SeoSettings {self.site_title!r}>"


class AnalyticsSettings(db.Model):
    __tablename__ = "analytics_settings"

    FIELDS = (
        "google_analytics_id",
        "facebook_pixel_id",
        "linkedin_pixel_id",
        "microsoft_clarity_id",
        "cdp_tracking_code",
        "custom_scripts",
        "is_active",
    )

    id = db.Column(
        db.String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    google_analytics_id = db.Column(db.String(50), nullable=True)  # G-XXXXXXX
    facebook_pixel_id = db.Column(db.String(50), nullable=True)
    linkedin_pixel_id = db.Column(db.String(50), nullable=True)
    microsoft_clarity_id = db.Column(db.String(50), nullable=True)
    cdp_tracking_code = db.Column(db.Text, nullable=True)
    custom_scripts = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(
        db.DateTime(timezone=True), server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self):
        return f"<AnalyticsSettings active={self.is_active}>"
