"""SEO blueprint — public /sitemap.xml and /robots.txt."""

from flask import Blueprint, Response

from consultdesk.services import settings_service

seo_bp = Blueprint("seo", __name__)


@seo_bp.route("/sitemap.xml")
def sitemap():
    return Response(settings_service.render_sitemap(), mimetype="application/xml")


@seo_bp.route("/robots.txt")
def robots():
    return Response(settings_service.robots_txt(), mimetype="text/plain")
