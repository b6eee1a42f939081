import logging
from flask import Blueprint, current_app, jsonify, redirect, render_template, request, url_for
from flask_jwt_extended import get_jwt
from routes.auth_routes import login_required, token_required
from services.dashboard_service import TrialExpiredError, build_dashboard, format_duration, save_integration
from services.data_service import DataServiceError
from services.notifications import notify

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__)

SAVE_SUCCESS = "Integrations saved successfully!"
SAVE_FAILED = "Failed to save integrations. Please try again."
TRIAL_ENDED = "Your {days}-day trial has ended. Please upgrade to continue using CallBot AI."


def trial_ended_message():
    return TRIAL_ENDED.format(days=current_app.config["TRIAL_DAYS"])


def _render_dashboard(current_user, form=None, status=200):
    view = build_dashboard(current_user.id)
    integration = view["integration"]
    if form is None:
        form = {
            "twilio_phone_number": (integration.twilio_phone_number if integration else None) or "",
            "whatsapp_business_id": (integration.whatsapp_business_id if integration else None) or "",
        }
    return render_template(
        "dashboard.html",
        user=current_user,
        view=view,
        form=form,
        csrf_token=get_jwt().get("csrf"),
    ), status


# ---------------- PAGE ----------------
@dashboard_bp.route("/dashboard", methods=["GET"])
@login_required
def dashboard(current_user):
    return _render_dashboard(current_user)


@dashboard_bp.route("/dashboard/integrations", methods=["POST"])
@login_required
def save_integrations(current_user):
    form = {
        "twilio_phone_number": request.form.get("twilio_phone_number", ""),
        "whatsapp_business_id": request.form.get("whatsapp_business_id", ""),
    }
    try:
        save_integration(current_user.id, form["twilio_phone_number"], form["whatsapp_business_id"])
    except TrialExpiredError:
        notify("Error", trial_ended_message(), "destructive")
        return _render_dashboard(current_user, form, 403)
    except DataServiceError as e:
        logger.error("Saving integrations failed for user %s: %s", current_user.id, e)
        notify("Error", SAVE_FAILED, "destructive")
        # keep what the user typed
        return _render_dashboard(current_user, form, 500)

    notify("Success", SAVE_SUCCESS)
    # redirect so the next read reflects the write
    return redirect(url_for("dashboard.dashboard"))


# ---------------- JSON API ----------------
@dashboard_bp.route("/api/dashboard", methods=["GET"])
@token_required
def dashboard_summary(current_user):
    view = build_dashboard(current_user.id)
    profile = view["profile"]
    integration = view["integration"]
    return jsonify({
        "profile": profile.to_dict() if profile else None,
        "integration": integration.to_dict() if integration else None,
        "call_logs": [
            dict(log.to_dict(), formatted_duration=format_duration(log.duration))
            for log in view["call_logs"]
        ],
        "trial_expired": view["trial_expired"],
        "welcome_name": view["welcome_name"],
        "business_type": view["business_type"],
        "prompt_preview": view["prompt_preview"],
        "errors": view["errors"]
    })
