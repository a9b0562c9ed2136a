"""Admin blueprint — /admin/*

Consultation pipeline, activity feed, settings screens.
All routes protected by @admin_required decorator.

Route Map:
  GET  /admin/                                   — Dashboard overview
  GET  /admin/consultations                      — Filterable list
  GET  /admin/consultations.csv                  — CSV export of the filtered list
  GET  /admin/consultations/<id>                 — Consultation detail
  POST /admin/consultations/<id>/status          — Change status / admin notes
  POST /admin/consultations/<id>/delete          — Delete consultation
  GET  /admin/activity                           — Activity feed + stats
  POST /admin/activity                           — Add manual entry
  POST /admin/activity/<id>/complete             — Mark entry completed
  POST /admin/activity/<id>/delete               — Delete entry
  GET/POST /admin/settings                       — General settings
  GET/POST /admin/seo                            — SEO settings
  GET/POST /admin/analytics                      — Analytics settings
  GET  /admin/emails                             — Templates + recent logs
  GET/POST /admin/emails/new                     — Create template
  GET/POST /admin/emails/<id>                    — Edit template
  POST /admin/emails/<id>/delete                 — Delete template
"""

from flask import (
    Blueprint,
    Response,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import current_user

from consultdesk.decorators import admin_required
from consultdesk.models.activity import ActivityEntry
from consultdesk.models.consultation import ConsultationRequest
from consultdesk.models.email import EmailTemplate
from consultdesk.models.settings import AdminSettings
from consultdesk.services import (
    activity_service,
    consultation_service,
    email_service,
    settings_service,
)
from consultdesk.services.intake import INDUSTRIES, URGENCY_LEVELS
from consultdesk.services.store import PersistenceError

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


def _consultation_filters():
    return {
        "status": request.args.get("status") or None,
        "urgency": request.args.get("urgency") or None,
        "industry": request.args.get("industry") or None,
        "date_from": request.args.get("date_from") or None,
        "date_to": request.args.get("date_to") or None,
        "search": (request.args.get("q") or "").strip() or None,
    }


# ══════════════════════════════════════════════
#  DASHBOARD
# ══════════════════════════════════════════════

@admin_bp.route("/")
@admin_required
def dashboard():
    """Admin dashboard — consultation stats, upcoming sessions, recent activity."""
    stats = consultation_service.get_stats()
    upcoming = consultation_service.upcoming(limit=5)
    recent_activity = activity_service.list_entries(limit=10)

    return render_template(
        "admin/dashboard.html",
        stats=stats,
        upcoming=upcoming,
        recent_activity=recent_activity,
    )


# ══════════════════════════════════════════════
#  CONSULTATIONS
# ══════════════════════════════════════════════

@admin_bp.route("/consultations")
@admin_required
def consultation_list():
    """All consultations, filtered server-side by the query string."""
    filters = _consultation_filters()
    consultations = consultation_service.list_consultations(**filters)

    return render_template(
        "admin/consultations.html",
        consultations=consultations,
        filters=filters,
        statuses=ConsultationRequest.STATUSES,
        urgency_levels=URGENCY_LEVELS,
        industries=INDUSTRIES,
        total_value=sum(c.estimated_value or 0 for c in consultations),
    )


@admin_bp.route("/consultations.csv")
@admin_required
def consultation_export():
    consultations = consultation_service.list_consultations(**_consultation_filters())
    return Response(
        consultation_service.export_csv(consultations),
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=consultations.csv"},
    )


@admin_bp.route("/consultations/<consultation_id>")
@admin_required
def consultation_detail(consultation_id):
    try:
        consultation = consultation_service.get_consultation(consultation_id)
    except ValueError as e:
        flash(str(e), "error")
        return redirect(url_for("admin.consultation_list"))

    allowed = sorted(consultation_service.VALID_TRANSITIONS.get(consultation.status, set()))
    return render_template(
        "admin/consultation_detail.html",
        consultation=consultation,
        allowed_statuses=allowed,
    )


@admin_bp.route("/consultations/<consultation_id>/status", methods=["POST"])
@admin_required
def consultation_status(consultation_id):
    """Change status (pending/confirmed/completed/rejected/cancelled) and notes."""
    new_status = request.form.get("status", "").strip()
    admin_notes = request.form.get("admin_notes")

    try:
        consultation_service.update_status(
            consultation_id,
            new_status,
            admin_notes=admin_notes,
            actor_user_id=current_user.id,
        )
        flash(f"Consultation marked {new_status}.", "success")
    except ValueError as e:
        flash(str(e), "error")
    except PersistenceError:
        flash("Could not save the change. Please try again.", "error")

    return redirect(url_for("admin.consultation_detail", consultation_id=consultation_id))


@admin_bp.route("/consultations/<consultation_id>/delete", methods=["POST"])
@admin_required
def consultation_delete(consultation_id):
    try:
        consultation_service.delete_consultation(
            consultation_id, actor_user_id=current_user.id
        )
        flash("Consultation deleted.", "success")
    except ValueError as e:
        flash(str(e), "error")
    except PersistenceError:
        flash("Could not delete the consultation. Please try again.", "error")

    return redirect(url_for("admin.consultation_list"))


# ══════════════════════════════════════════════
#  ACTIVITY FEED
# ══════════════════════════════════════════════

@admin_bp.route("/activity", methods=["GET"])
@admin_required
def activity_feed():
    activity_type = request.args.get("type") or "all"
    search = (request.args.get("q") or "").strip() or None

    return render_template(
        "admin/activity.html",
        activities=activity_service.list_entries(activity_type=activity_type, search=search),
        stats=activity_service.feed_stats(),
        activity_type=activity_type,
        search=search or "",
        types=ActivityEntry.TYPES,
        icons=ActivityEntry.ICONS,
        colors=ActivityEntry.COLORS,
    )


@admin_bp.route("/activity", methods=["POST"])
@admin_required
def activity_add():
    try:
        activity_service.add_entry(
            title=request.form.get("title"),
            description=request.form.get("description"),
            activity_type=request.form.get("type") or "note",
            icon=request.form.get("icon") or "FiMessageSquare",
            color=request.form.get("color") or "blue",
            actionable=bool(request.form.get("actionable")),
            follow_up=bool(request.form.get("follow_up")),
            actor_user_id=current_user.id,
        )
        flash("Activity added.", "success")
    except ValueError as e:
        flash(str(e), "error")
    except PersistenceError:
        flash("Failed to save activity.", "error")

    return redirect(url_for("admin.activity_feed"))


@admin_bp.route("/activity/<entry_id>/complete", methods=["POST"])
@admin_required
def activity_complete(entry_id):
    try:
        activity_service.complete_entry(entry_id)
        flash("Marked as done.", "success")
    except ValueError as e:
        flash(str(e), "error")
    except PersistenceError:
        flash("Failed to update activity.", "error")
    return redirect(url_for("admin.activity_feed"))


@admin_bp.route("/activity/<entry_id>/delete", methods=["POST"])
@admin_required
def activity_delete(entry_id):
    try:
        activity_service.delete_entry(entry_id)
        flash("Activity deleted.", "success")
    except ValueError as e:
        flash(str(e), "error")
    except PersistenceError:
        flash("Failed to delete activity.", "error")
    return redirect(url_for("admin.activity_feed"))


# ══════════════════════════════════════════════
#  SETTINGS
# ══════════════════════════════════════════════

def _coerce(value, default):
    """Convert a submitted form string to the type of its default."""
    if isinstance(default, bool):
        return value is not None and value.lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError):
            return default
    return (value or "").strip()


@admin_bp.route("/settings", methods=["GET", "POST"])
@admin_required
def settings():
    """General settings. Form fields are named <section>.<key>[.<subkey>]."""
    current = settings_service.get_admin_settings()

    if request.method == "POST":
        sections = {}
        for section in AdminSettings.SECTIONS:
            values = {}
            for key, default in current[section].items():
                field = f"{section}.{key}"
                if isinstance(default, dict):
                    values[key] = {
                        sub: (request.form.get(f"{field}.{sub}") or sub_default).strip()
                        for sub, sub_default in default.items()
                    }
                elif isinstance(default, list):
                    values[key] = request.form.getlist(field)
                elif isinstance(default, bool) or field in request.form:
                    # unchecked checkboxes are absent from the POST body
                    values[key] = _coerce(request.form.get(field), default)
            sections[section] = values

        try:
            settings_service.save_admin_settings(sections, actor_user_id=current_user.id)
            flash("Settings saved.", "success")
        except (ValueError, PersistenceError) as e:
            flash(f"Error saving settings: {e}", "error")
        return redirect(url_for("admin.settings"))

    return render_template("admin/settings.html", settings=current)


@admin_bp.route("/seo", methods=["GET", "POST"])
@admin_required
def seo():
    if request.method == "POST":
        try:
            settings_service.save_seo_settings(request.form, actor_user_id=current_user.id)
            flash("SEO settings saved.", "success")
        except PersistenceError:
            flash("Error saving SEO settings.", "error")
        return redirect(url_for("admin.seo"))

    return render_template(
        "admin/seo.html",
        seo=settings_service.get_seo_settings(),
        canonical_url=settings_service.canonical_url(),
    )


@admin_bp.route("/analytics", methods=["GET", "POST"])
@admin_required
def analytics():
    if request.method == "POST":
        try:
            settings_service.save_analytics_settings(request.form, actor_user_id=current_user.id)
            flash("Analytics settings saved.", "success")
        except PersistenceError:
            flash("Error saving analytics settings.", "error")
        return redirect(url_for("admin.analytics"))

    return render_template(
        "admin/analytics.html",
        analytics=settings_service.get_analytics_settings(),
    )


# ══════════════════════════════════════════════
#  EMAIL TEMPLATES
# ══════════════════════════════════════════════

@admin_bp.route("/emails")
@admin_required
def email_overview():
    return render_template(
        "admin/emails.html",
        templates=email_service.list_templates(),
        logs=email_service.recent_logs(limit=50),
    )


@admin_bp.route("/emails/new", methods=["GET", "POST"])
@admin_required
def email_template_new():
    if request.method == "POST":
        error = None
        try:
            email_service.save_template(request.form, actor_user_id=current_user.id)
        except ValueError as e:
            error = str(e)
        except PersistenceError:
            error = "Could not save the template. Please try again."
        if error:
            flash(error, "error")
            return render_template(
                "admin/email_template_form.html",
                template=None,
                form_data=request.form,
                types=EmailTemplate.TYPES,
                statuses=EmailTemplate.STATUSES,
            )
        flash("Template created.", "success")
        return redirect(url_for("admin.email_overview"))

    return render_template(
        "admin/email_template_form.html",
        template=None,
        form_data={},
        types=EmailTemplate.TYPES,
        statuses=EmailTemplate.STATUSES,
    )


@admin_bp.route("/emails/<template_id>", methods=["GET", "POST"])
@admin_required
def email_template_edit(template_id):
    template = email_service.get_template(template_id)
    if template is None:
        flash("Template not found.", "error")
        return redirect(url_for("admin.email_overview"))

    if request.method == "POST":
        error = None
        try:
            email_service.save_template(
                request.form, template_id=template_id, actor_user_id=current_user.id
            )
        except ValueError as e:
            error = str(e)
        except PersistenceError:
            error = "Could not save the template. Please try again."
        if error:
            flash(error, "error")
            return render_template(
                "admin/email_template_form.html",
                template=template,
                form_data=request.form,
                types=EmailTemplate.TYPES,
                statuses=EmailTemplate.STATUSES,
            )
        flash("Template saved.", "success")
        return redirect(url_for("admin.email_overview"))

    return render_template(
        "admin/email_template_form.html",
        template=template,
        form_data={
            "name": template.name,
            "type": template.type,
            "subject": template.subject,
            "body": template.body,
            "status": template.status,
        },
        types=EmailTemplate.TYPES,
        statuses=EmailTemplate.STATUSES,
    )


@admin_bp.route("/emails/<template_id>/delete", methods=["POST"])
@admin_required
def email_template_delete(template_id):
    try:
        email_service.delete_template(template_id, actor_user_id=current_user.id)
        flash("Template deleted.", "success")
    except ValueError as e:
        flash(str(e), "error")
    except PersistenceError:
        flash("Could not delete the template. Please try again.", "error")
    return redirect(url_for("admin.email_overview"))
