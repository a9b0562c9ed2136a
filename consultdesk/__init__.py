import os
import logging

import click
from flask import Flask, render_template
from werkzeug.security import generate_password_hash

from consultdesk.config import config_by_name
from consultdesk.extensions import db, migrate, login_manager, csrf, limiter


def create_app(config_name=None):
    """Application factory."""

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # --- Validate required env vars (skip in testing) ---
    if config_name != "testing":
        try:
            config_by_name[config_name].validate()
        except RuntimeError as e:
            app.logger.warning(f"Config validation: {e}")

    # --- Init extensions ---
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    # --- Import models so Alembic can discover them ---
    with app.app_context():
        from consultdesk import models  # noqa: F401

    # --- Register blueprints ---
    from consultdesk.blueprints.auth import auth_bp
    from consultdesk.blueprints.booking import booking_bp
    from consultdesk.blueprints.admin import admin_bp
    from consultdesk.blueprints.seo import seo_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(booking_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(seo_bp)

    # Public booking API is hit by the landing page JS without a CSRF token
    csrf.exempt(booking_bp)

    # --- Root route ---
    @app.route("/")
    def index():
        """Landing page with the consultation booking form."""
        from consultdesk.blueprints.booking import render_landing

        return render_landing()

    # --- Error handlers ---
    @app.errorhandler(403)
    def forbidden(e):
        return render_template("errors/403.html"), 403

    @app.errorhandler(404)
    def not_found(e):
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def server_error(e):
        return render_template("errors/500.html"), 500

    # --- CLI commands ---
    register_cli(app)

    # --- Security headers ---
    @app.after_request
    def add_security_headers(response):
        """Add security headers to every response."""
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = (
            "camera=(), microphone=(), geolocation=()"
        )
        # Analytics pixels load third-party scripts, so script-src stays open to https
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline' https:; "
            "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com; "
            "img-src 'self' data: https:; "
            "font-src 'self' https://fonts.gstatic.com; "
            "connect-src 'self' https:; "
            "base-uri 'self'; "
            "form-action 'self'; "
            "frame-ancestors 'none';"
        )
        if not app.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response

    # --- Logging ---
    if not app.debug:
        logging.basicConfig(level=logging.INFO)

    return app


def register_cli(app):
    """Register custom CLI commands with the Flask app."""

    @app.cli.command("seed-admin")
    @click.option("--email", default="admin@tasakadigital.com", help="Admin email")
    @click.option("--password", prompt=True, hide_input=True, help="Admin password")
    @click.option("--name", default="Admin", help="Display name")
    def seed_admin(email, password, name):
        """Create the dashboard admin user.

        Usage:
            flask seed-admin
            flask seed-admin --email admin@example.com --password s3cret
        """
        from consultdesk.models.user import User

        email = email.lower().strip()
        existing = User.query.filter_by(email=email).first()
        if existing:
            click.echo(f"Admin user already exists: {email}")
            return

        admin = User(
            email=email,
            password_hash=generate_password_hash(password),
            full_name=name,
            is_admin=True,
        )
        db.session.add(admin)
        db.session.commit()
        click.echo(f"Created admin user: {email}")

    @app.cli.command("consultation-stats")
    def consultation_stats():
        """Print consultation counts and total estimated value."""
        from consultdesk.services.consultation_service import get_stats

        stats = get_stats()
        click.echo("")
        click.echo("=" * 40)
        click.echo(f"  Total:        {stats['total']}")
        click.echo(f"  Pending:      {stats['pending']}")
        click.echo(f"  Confirmed:    {stats['confirmed']}")
        click.echo(f"  Completed:    {stats['completed']}")
        click.echo(f"  Rejected:     {stats['rejected']}")
        click.echo(f"  Cancelled:    {stats['cancelled']}")
        click.echo(f"  Total value:  ${stats['total_value']:,}")
        click.echo("=" * 40)

    @app.cli.command("generate-sitemap")
    @click.option("--output", default="sitemap.xml", help="File to write")
    def generate_sitemap(output):
        """Write sitemap.xml for the public pages."""
        from consultdesk.services.settings_service import render_sitemap

        with app.test_request_context():
            xml = render_sitemap()
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(xml)
        click.echo(f"Sitemap written to {output}")
