"""Tests for general, SEO and analytics settings plus sitemap/robots."""

from datetime import date

import pytest

from consultdesk.models.activity import ActivityEntry
from consultdesk.models.settings import AdminSettings, AnalyticsSettings, SeoSettings
from consultdesk.services import settings_service


def login_admin(client):
    return client.post(
        "/auth/login",
        data={"email": "admin@tasakadigital.com", "password": "admin123"},
        follow_redirects=True,
    )


# ══════════════════════════════════════════════
#  GENERAL SETTINGS
# ══════════════════════════════════════════════

class TestAdminSettings:

    def test_defaults_before_first_save(self):
        settings = settings_service.get_admin_settings()
        assert settings["profile"]["name"] == "Guy Tasaka"
        assert settings["business"]["consultationDuration"] == 60
        assert settings["business"]["workingHours"] == {"start": "09:00", "end": "17:00"}

    def test_defaults_are_not_mutated(self):
        settings = settings_service.get_admin_settings()
        settings["profile"]["name"] = "Someone Else"
        assert AdminSettings.DEFAULTS["profile"]["name"] == "Guy Tasaka"

    def test_save_merges_sections(self):
        settings_service.save_admin_settings({"profile": {"phone": "555-000-1111"}})
        settings_service.save_admin_settings({"integrations": {"slack": True}})

        settings = settings_service.get_admin_settings()
        assert settings["profile"]["phone"] == "555-000-1111"
        assert settings["profile"]["name"] == "Guy Tasaka"
        assert settings["integrations"]["slack"] is True
        assert AdminSettings.query.count() == 1

    def test_save_logs_activity(self):
        settings_service.save_admin_settings({"notifications": {"smsUrgent": True}})
        entry = ActivityEntry.query.filter_by(type="settings_updated").one()
        assert entry.title == "Settings updated"
        assert entry.icon == "FiSettings"

    def test_unknown_section_rejected(self):
        with pytest.raises(ValueError):
            settings_service.save_admin_settings({"billing": {}})

    def test_settings_form(self, client, seed_data):
        login_admin(client)
        resp = client.get("/admin/settings")
        assert resp.status_code == 200
        assert b"General Settings" in resp.data

        resp = client.post(
            "/admin/settings",
            data={
                "profile.name": "Guy T.",
                "business.consultationDuration": "45",
                "business.workingHours.start": "08:30",
                "business.workingDays": ["monday", "wednesday"],
                "notifications.smsUrgent": "1",
            },
            follow_redirects=True,
        )
        assert b"Settings saved." in resp.data

        settings = settings_service.get_admin_settings()
        assert settings["profile"]["name"] == "Guy T."
        assert settings["profile"]["email"] == "guy@tasakadigital.com"
        assert settings["business"]["consultationDuration"] == 45
        assert settings["business"]["workingHours"] == {"start": "08:30", "end": "17:00"}
        assert settings["business"]["workingDays"] == ["monday", "wednesday"]
        assert settings["notifications"]["smsUrgent"] is True
        # unchecked boxes turn off
        assert settings["notifications"]["emailLeads"] is False


# ══════════════════════════════════════════════
#  SEO
# ══════════════════════════════════════════════

class TestSeoSettings:

    def test_save_and_read(self):
        settings_service.save_seo_settings({
            "site_title": "Tasaka Digital",
            "keywords": "ai, media",
            "twitter_site": "",
        })
        seo = settings_service.get_seo_settings()
        assert seo.site_title == "Tasaka Digital"
        assert seo.twitter_site is None
        assert SeoSettings.query.count() == 1

    def test_second_save_updates_same_row(self):
        settings_service.save_seo_settings({"site_title": "One"})
        settings_service.save_seo_settings({"site_title": "Two"})
        assert SeoSettings.query.count() == 1
        assert settings_service.get_seo_settings().site_title == "Two"

    def test_landing_page_uses_seo_tags(self, client):
        settings_service.save_seo_settings({
            "site_title": "AI Strategy for Broadcasters",
            "site_description": "Book a strategy session.",
        })
        resp = client.get("/")
        assert b"<title>AI Strategy for Broadcasters" in resp.data
        assert b'content="Book a strategy session."' in resp.data

    def test_seo_form(self, client, seed_data):
        login_admin(client)
        resp = client.post(
            "/admin/seo",
            data={"site_title": "Tasaka", "canonical_url": "https://tasakadigital.com/"},
            follow_redirects=True,
        )
        assert b"SEO settings saved." in resp.data
        assert settings_service.get_seo_settings().canonical_url == "https://tasakadigital.com/"


# ══════════════════════════════════════════════
#  SITEMAP / ROBOTS
# ══════════════════════════════════════════════

class TestSitemapAndRobots:

    def test_sitemap_uses_app_base_url(self, app):
        with app.test_request_context():
            xml = settings_service.render_sitemap(today=date(2026, 3, 10))
        assert "<loc>http://localhost:5000/</loc>" in xml
        assert "<lastmod>2026-03-10</lastmod>" in xml

    def test_sitemap_prefers_canonical_url(self, client):
        settings_service.save_seo_settings({"canonical_url": "https://tasakadigital.com/"})
        resp = client.get("/sitemap.xml")
        assert resp.status_code == 200
        assert resp.mimetype == "application/xml"
        assert b"<loc>https://tasakadigital.com/</loc>" in resp.data

    def test_default_robots(self, client):
        resp = client.get("/robots.txt")
        assert resp.mimetype == "text/plain"
        body = resp.get_data(as_text=True)
        assert "Disallow: /admin" in body
        assert "Sitemap: http://localhost:5000/sitemap.xml" in body

    def test_custom_robots(self, client):
        settings_service.save_seo_settings({"robots_txt": "User-agent: *\nAllow: /\n"})
        resp = client.get("/robots.txt")
        assert resp.get_data(as_text=True) == "User-agent: *\nAllow: /"


# ══════════════════════════════════════════════
#  ANALYTICS
# ══════════════════════════════════════════════

class TestAnalyticsSettings:

    def test_save_and_read(self):
        settings_service.save_analytics_settings({
            "google_analytics_id": "G-ABC123",
            "is_active": "on",
        })
        analytics = settings_service.get_analytics_settings()
        assert analytics.google_analytics_id == "G-ABC123"
        assert analytics.is_active is True
        assert AnalyticsSettings.query.count() == 1

    def test_missing_checkbox_means_inactive(self):
        settings_service.save_analytics_settings({"is_active": "on"})
        settings_service.save_analytics_settings({"facebook_pixel_id": "123"})
        analytics = settings_service.get_analytics_settings()
        assert analytics.is_active is False
        assert analytics.facebook_pixel_id == "123"

    def test_active_tracking_renders_on_landing(self, client):
        settings_service.save_analytics_settings({
            "google_analytics_id": "G-ABC123",
            "is_active": "1",
        })
        resp = client.get("/")
        assert b"googletagmanager.com/gtag/js?id=G-ABC123" in resp.data

    def test_inactive_tracking_not_rendered(self, client):
        settings_service.save_analytics_settings({"google_analytics_id": "G-ABC123"})
        resp = client.get("/")
        assert b"G-ABC123" not in resp.data

    def test_analytics_form(self, client, seed_data):
        login_admin(client)
        resp = client.get("/admin/analytics")
        assert b"Analytics Settings" in resp.data
        resp = client.post(
            "/admin/analytics",
            data={"linkedin_pixel_id": "LI-9", "is_active": "1"},
            follow_redirects=True,
        )
        assert b"Analytics settings saved." in resp.data
        assert settings_service.get_analytics_settings().linkedin_pixel_id == "LI-9"
