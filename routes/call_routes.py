from flask import Blueprint, jsonify
from routes.auth_routes import token_required
from services.dashboard_service import format_duration, load_call_logs
from services.data_service import DataServiceError

call_bp = Blueprint('call_bp', __name__)


@call_bp.route("/api/call-logs", methods=["GET"])
@token_required
def get_call_logs(current_user):
    try:
        logs = load_call_logs(current_user.id)
    except DataServiceError as e:
        return jsonify({"error": "Failed to load call logs", "message": str(e)}), 500
    return jsonify([
        dict(log.to_dict(), formatted_duration=format_duration(log.duration))
        for log in logs
    ])
