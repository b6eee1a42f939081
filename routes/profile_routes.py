from flask import Blueprint, jsonify, request
from routes.auth_routes import token_required
from services.dashboard_service import is_trial_expired, load_profile
from services.data_service import DataServiceError, RecordNotFound
from services.profile_service import ProfileExistsError, create_profile

profile_bp = Blueprint('profile', __name__)


@profile_bp.route('/api/profile', methods=['GET'])
@token_required
def get_profile(current_user):
    try:
        profile = load_profile(current_user.id)
    except RecordNotFound:
        return jsonify({"message": "Profile not found"}), 404
    except DataServiceError as e:
        return jsonify({"error": "Failed to load profile", "message": str(e)}), 500

    return jsonify({
        "profile": profile.to_dict(),
        "trial_expired": is_trial_expired(profile.trial_start)
    })


# Onboarding: creates the profile and starts the trial
@profile_bp.route('/api/profile', methods=['POST'])
@token_required
def onboard(current_user):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"message": "Invalid JSON or Content-Type not set to application/json"}), 400
    if not data.get("company_name"):
        return jsonify({"message": "Company name is required"}), 400
    try:
        profile = create_profile(current_user.id, data)
    except ProfileExistsError as e:
        return jsonify({"message": str(e)}), 409
    except DataServiceError as e:
        return jsonify({"error": "Failed to create profile", "message": str(e)}), 500
    return jsonify({"message": "Profile created", "profile": profile.to_dict()}), 201
