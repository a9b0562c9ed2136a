"""
Booking blueprint — /book

Public consultation booking. Accepts JSON (the landing page modal) or a
plain form POST. JSON callers get JSON back; form callers get the
landing page re-rendered with errors, or the thank-you page.

Route Map:
  GET  /book/options  — fixed choices for the form
  POST /book          — submit a consultation request
"""

import logging

from flask import Blueprint, jsonify, render_template, request

from consultdesk.extensions import limiter
from consultdesk.services import booking_service, settings_service
from consultdesk.services.intake import IntakeValidationError, form_options
from consultdesk.services.store import PersistenceError

booking_bp = Blueprint("booking", __name__, url_prefix="/book")

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to book consultation. Please try again."


def render_landing(status=200, errors=None, form_data=None, submit_error=None):
    """Landing page with the booking form plus the stored SEO/analytics tags."""
    return render_template(
        "landing.html",
        options=form_options(),
        errors=errors or {},
        form_data=form_data or {},
        submit_error=submit_error,
        seo=settings_service.get_seo_settings(),
        analytics=settings_service.get_analytics_settings(),
    ), status


def _request_data():
    if request.is_json:
        return request.get_json(silent=True)
    data = request.form.to_dict()
    if "specific_interests" in request.form:
        data["specific_interests"] = request.form.getlist("specific_interests")
    return data


@booking_bp.route("/options", methods=["GET"])
def options():
    return jsonify(form_options())


@booking_bp.route("", methods=["POST"])
@limiter.limit("10 per hour")
def submit():
    """
    Accept a consultation booking.

    Returns (JSON): 201 { ok: true, consultation: {...} }
                    422 { ok: false, errors: { field: message } }
                    500 { ok: false, error: "..." }
    """
    data = _request_data()
    if request.is_json and (not data or not isinstance(data, dict)):
        return jsonify(ok=False, error="Invalid request."), 400
    data = data or {}

    try:
        consultation = booking_service.submit_consultation(data)
    except IntakeValidationError as e:
        if request.is_json:
            return jsonify(ok=False, errors=e.errors), 422
        return render_landing(422, errors=e.errors, form_data=data)
    except PersistenceError as e:
        logger.error(f"Booking failed: {e}")
        if request.is_json:
            return jsonify(ok=False, error=GENERIC_FAILURE), 500
        return render_landing(500, form_data=data, submit_error=GENERIC_FAILURE)

    if request.is_json:
        return jsonify(ok=True, consultation=consultation.to_summary()), 201
    return render_template("booking/thanks.html", consultation=consultation), 201
