"""Settings service — singleton general/SEO/analytics rows, sitemap.

Each settings table holds one row. save_* upserts it and appends a
settings_updated activity entry.
"""

import copy
from datetime import date

from flask import current_app, render_template

from consultdesk.models.settings import AdminSettings, AnalyticsSettings, SeoSettings
from consultdesk.services import store
from consultdesk.services.activity_service import log_event

SITEMAP_URLS = [
    {"path": "/", "priority": "1.0", "changefreq": "weekly"},
    {"path": "/admin", "priority": "0.3", "changefreq": "monthly"},
]

DEFAULT_ROBOTS_TXT = "User-agent: *\nDisallow: /admin\nDisallow: /auth\n"


def _singleton(collection):
    rows = store.query(collection, order_by="created_at", limit=1)
    return rows[0] if rows else None


def _upsert(collection, fields):
    row = _singleton(collection)
    if row is None:
        return store.insert(collection, fields)
    return store.update(collection, row.id, fields)


# ──────────────────────────────────────────────
# General settings
# ──────────────────────────────────────────────

def get_admin_settings():
    """Stored sections merged over AdminSettings.DEFAULTS."""
    merged = copy.deepcopy(AdminSettings.DEFAULTS)
    row = _singleton("admin_settings")
    if row is not None:
        for section in AdminSettings.SECTIONS:
            merged[section].update(getattr(row, section) or {})
    return merged


def save_admin_settings(sections, actor_user_id=None):
    """Replace the given sections (dicts) and keep the rest.

    Raises:
        ValueError: Unknown section name or non-dict section value.
    """
    current = get_admin_settings()
    for name, values in sections.items():
        if name not in AdminSettings.SECTIONS:
            raise ValueError(f"Unknown settings section '{name}'.")
        if not isinstance(values, dict):
            raise ValueError(f"Settings section '{name}' must be a mapping.")
        current[name].update(values)

    row = _upsert("admin_settings", current)
    log_event(
        "settings_updated",
        "Settings updated",
        description="System settings were updated",
        actor_user_id=actor_user_id,
    )
    return row


# ──────────────────────────────────────────────
# SEO
# ──────────────────────────────────────────────

def get_seo_settings():
    return _singleton("seo_settings")


def save_seo_settings(data, actor_user_id=None):
    fields = {
        name: (data.get(name) or "").strip() or None
        for name in SeoSettings.FIELDS
        if name in data
    }
    row = _upsert("seo_settings", fields)
    log_event(
        "settings_updated",
        "SEO settings updated",
        description="Search and social card settings were updated",
        actor_user_id=actor_user_id,
    )
    return row


def canonical_url():
    seo = get_seo_settings()
    base = (seo.canonical_url if seo and seo.canonical_url else None) \
        or current_app.config.get("APP_BASE_URL", "")
    return base.rstrip("/")


def render_sitemap(today=None):
    """sitemap.xml for the public pages, rooted at the canonical URL."""
    today = today or date.today()
    return render_template(
        "seo/sitemap.xml",
        base_url=canonical_url(),
        urls=SITEMAP_URLS,
        lastmod=today.isoformat(),
    )


def robots_txt():
    seo = get_seo_settings()
    if seo and seo.robots_txt:
        return seo.robots_txt
    return DEFAULT_ROBOTS_TXT + f"Sitemap: {canonical_url()}/sitemap.xml\n"


# ──────────────────────────────────────────────
# Analytics
# ──────────────────────────────────────────────

def get_analytics_settings():
    return _singleton("analytics_settings")


def save_analytics_settings(data, actor_user_id=None):
    fields = {}
    for name in AnalyticsSettings.FIELDS:
        if name == "is_active":
            fields[name] = str(data.get(name, "")).lower() in ("1", "true", "yes", "on")
        elif name in data:
            fields[name] = (data.get(name) or "").strip() or None

    row = _upsert("analytics_settings", fields)
    log_event(
        "settings_updated",
        "Analytics settings updated",
        description="Tracking and pixel settings were updated",
        actor_user_id=actor_user_id,
    )
    return row
