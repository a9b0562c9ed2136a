"""
Email service — SMTP delivery, booking emails, editable templates.

Messages are sent on a background thread so a slow SMTP server never
holds up a booking. Every send attempt is recorded in email_logs.

Usage:
    from consultdesk.services.email_service import send_email

    send_email(
        to="prospect@example.com",
        subject="Hello",
        template="emails/booking_confirmation.html",
        context={"consultation": consultation},
    )
"""

import logging
import smtplib
import threading
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import bleach
from flask import current_app, render_template

from consultdesk.models.email import EmailLog, EmailTemplate
from consultdesk.services import store
from consultdesk.services.activity_service import log_event

logger = logging.getLogger(__name__)


def _send_smtp(app, msg):
    """Send an email via SMTP in a background thread (non-blocking)."""
    with app.app_context():
        host = app.config.get("MAIL_SMTP_HOST", "smtp.gmail.com")
        port = app.config.get("MAIL_SMTP_PORT", 587)
        username = app.config.get("MAIL_USERNAME")
        password = app.config.get("MAIL_PASSWORD")

        try:
            with smtplib.SMTP(host, port, timeout=30) as server:
                server.ehlo()
                server.starttls()
                server.ehlo()
                server.login(username, password)
                server.send_message(msg)
            logger.info(f"Email sent to {msg['To']} — {msg['Subject']}")
        except Exception as e:
            logger.error(f"Failed to send email to {msg['To']}: {e}")


def _smtp_configured(app):
    return bool(app.config.get("MAIL_USERNAME") and app.config.get("MAIL_PASSWORD"))


def send_email(to, subject, template=None, context=None, reply_to=None,
               html_body=None, template_type=None, consultation_id=None):
    """
    Send an HTML email and record it in email_logs.

    Args:
        to:              Recipient email address (str or list).
        subject:         Email subject line.
        template:        Path to Jinja2 HTML template (relative to templates/).
        context:         Dict of variables to pass to the template.
        reply_to:        Optional reply-to address.
        html_body:       Pre-rendered HTML; used instead of `template`.
        template_type:   Label stored on the log row.
        consultation_id: CONS-... reference stored on the log row.

    Returns:
        The EmailLog row.
    """
    app = current_app._get_current_object()
    context = context or {}

    from_name = app.config.get("MAIL_FROM_NAME", "Tasaka Digital")
    from_email = app.config.get("MAIL_FROM_ADDRESS") or app.config.get("MAIL_USERNAME") or ""

    if html_body is None:
        html_body = render_template(template, **context)

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{from_name} <{from_email}>"
    msg["To"] = to if isinstance(to, str) else ", ".join(to)

    if reply_to:
        msg["Reply-To"] = reply_to

    msg.attach(MIMEText(html_body, "html"))

    status = "queued"
    if not _smtp_configured(app):
        logger.warning("Email not sent — MAIL_USERNAME or MAIL_PASSWORD not configured.")
        status = "skipped"

    log = store.insert("email_logs", {
        "recipient": msg["To"],
        "subject": subject,
        "status": status,
        "template_type": template_type,
        "consultation_id": consultation_id,
    })

    if status == "queued":
        # Send in background thread so the request doesn't block
        thread = threading.Thread(target=_send_smtp, args=(app, msg))
        thread.daemon = True
        thread.start()

    return log


def send_booking_emails(consultation):
    """Owner notification + prospect confirmation for a new booking.

    An active `consultation_confirmation` template, if one exists,
    replaces the built-in confirmation email.
    """
    owner = current_app.config.get("MAIL_NOTIFY_TO")
    if owner:
        send_email(
            to=owner,
            subject=f"New consultation request from {consultation.full_name}",
            template="emails/booking_notification.html",
            context={"consultation": consultation},
            reply_to=consultation.email,
            template_type="booking_notification",
            consultation_id=consultation.consultation_id,
        )

    custom = active_template("consultation_confirmation")
    if custom is not None:
        send_email(
            to=consultation.email,
            subject=custom.render_subject(consultation),
            template="emails/custom_template.html",
            context={"body": custom.render(consultation)},
            template_type=custom.type,
            consultation_id=consultation.consultation_id,
        )
    else:
        send_email(
            to=consultation.email,
            subject="Your consultation request — Tasaka Digital",
            template="emails/booking_confirmation.html",
            context={"consultation": consultation},
            template_type="consultation_confirmation",
            consultation_id=consultation.consultation_id,
        )


# ──────────────────────────────────────────────
# Templates
# ──────────────────────────────────────────────

def list_templates():
    return store.query("email_templates", order_by="-created_at")


def get_template(template_id):
    return store.get("email_templates", template_id)


def active_template(template_type):
    """Most recently updated active template of a type, or None."""
    rows = store.query(
        "email_templates",
        filters={"type": template_type, "status": "active"},
        order_by="-updated_at",
        limit=1,
    )
    return rows[0] if rows else None


def save_template(data, template_id=None, actor_user_id=None):
    """Create or update an email template.

    Raises:
        ValueError: Missing name/subject/body, or unknown type/status.
    """
    name = (data.get("name") or "").strip()
    subject = (data.get("subject") or "").strip()
    # Bodies are HTML; strip scripts but keep basic markup.
    body = bleach.clean(
        data.get("body") or "",
        tags=bleach.sanitizer.ALLOWED_TAGS | {"p", "br", "h1", "h2", "h3", "div", "span"},
        strip=True,
    ).strip()
    template_type = (data.get("type") or "custom").strip()
    status = (data.get("status") or "draft").strip()

    if not name:
        raise ValueError("Template name is required.")
    if not subject:
        raise ValueError("Subject is required.")
    if not body:
        raise ValueError("Template body is required.")
    if template_type not in EmailTemplate.TYPES:
        raise ValueError(f"Invalid template type '{template_type}'.")
    if status not in EmailTemplate.STATUSES:
        raise ValueError(f"Invalid template status '{status}'.")

    fields = {
        "name": name,
        "subject": subject,
        "body": body,
        "type": template_type,
        "status": status,
    }

    if template_id:
        if store.get("email_templates", template_id) is None:
            raise ValueError("Template not found.")
        template = store.update("email_templates", template_id, fields)
        title = "Email template updated"
    else:
        template = store.insert("email_templates", fields)
        title = "Email template created"

    log_event(
        "template_updated",
        title,
        description=f"{name} ({template_type}, {status})",
        actor_user_id=actor_user_id,
    )
    return template


def delete_template(template_id, actor_user_id=None):
    template = store.get("email_templates", template_id)
    if template is None:
        raise ValueError("Template not found.")
    name = template.name
    store.delete("email_templates", template_id)
    log_event(
        "template_updated",
        "Email template deleted",
        description=name,
        actor_user_id=actor_user_id,
    )


def recent_logs(limit=50):
    return store.query("email_logs", order_by="-sent_at", limit=limit)
