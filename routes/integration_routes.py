from flask import Blueprint, jsonify, request
from routes.auth_routes import token_required
from routes.dashboard_routes import SAVE_FAILED, SAVE_SUCCESS, trial_ended_message
from services.dashboard_service import TrialExpiredError, load_integration, save_integration
from services.data_service import DataServiceError

integration_bp = Blueprint("integrations", __name__)


@integration_bp.route("/api/integration", methods=["GET"])
@token_required
def get_integration(current_user):
    try:
        integration = load_integration(current_user.id)
    except DataServiceError as e:
        return jsonify({"error": "Failed to load integration", "message": str(e)}), 500
    return jsonify({"integration": integration.to_dict() if integration else None})


@integration_bp.route("/api/integration", methods=["PUT"])
@token_required
def put_integration(current_user):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"message": "Invalid JSON or Content-Type not set to application/json"}), 400
    try:
        integration, created = save_integration(
            current_user.id,
            data.get("twilio_phone_number"),
            data.get("whatsapp_business_id")
        )
    except TrialExpiredError:
        return jsonify({"error": "Trial expired", "message": trial_ended_message()}), 403
    except DataServiceError as e:
        return jsonify({"error": SAVE_FAILED, "message": str(e)}), 500

    return jsonify({
        "message": SAVE_SUCCESS,
        "created": created,
        "integration": integration.to_dict()
    }), 201 if created else 200
