import logging
from flask import Flask, g, jsonify, redirect, request, url_for
from flask_cors import CORS
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import CSRFError, JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from config import Config
from extensions import db, jwt
import models  # noqa: F401  registers the tables
from routes import api_auth_bp, auth_bp, call_bp, dashboard_bp, integration_bp, profile_bp, website_bp
from services.dashboard_service import format_call_date, format_duration
from services.notifications import notify, pending_toasts

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=getattr(logging, app.config["LOG_LEVEL"], logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    logger.info("Database URI: %s", app.config.get("SQLALCHEMY_DATABASE_URI"))

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True
    )

    db.init_app(app)
    jwt.init_app(app)

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(api_auth_bp, url_prefix="/api/auth")
    app.register_blueprint(website_bp)  # No prefix for the marketing pages
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(integration_bp)
    app.register_blueprint(call_bp)
    app.register_blueprint(profile_bp)

    app.jinja_env.filters["duration"] = format_duration
    app.jinja_env.filters["call_date"] = format_call_date
    app.jinja_env.globals["pending_toasts"] = pending_toasts

    @app.before_request
    def load_user_context_from_token():
        """
        Put the signed-in user's id on g. A missing, expired or tampered
        token just means nobody is signed in. A dashboard form posted without
        its CSRF token goes back to the dashboard with an error toast.
        """
        try:
            verify_jwt_in_request(optional=True)
            g.user_id = get_jwt_identity()
        except CSRFError as e:
            g.user_id = None
            if request.blueprint != "dashboard":
                logger.debug("Ignoring token without CSRF value on %s: %s", request.path, e)
                return None
            logger.warning("Rejected dashboard form without a CSRF token on %s", request.path)
            notify("Error", "Your session could not be verified. Please try again.", "destructive")
            return redirect(url_for("dashboard.dashboard"))
        except (JWTExtendedException, PyJWTError) as e:
            logger.debug("Ignoring unusable token on %s: %s", request.path, e)
            g.user_id = None

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e):
        db.session.rollback()
        logger.error("Database integrity error: %s", e.orig)
        return jsonify({"error": "Database integrity error", "message": str(e.orig)}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if request.path.startswith("/api/") and e.code >= 400:
            return jsonify({"error": e.name, "message": e.description}), e.code
        return e

    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        logger.info("Tables created")

    return app


app = create_app()

if __name__ == "__main__":
    with app.app_context():
        db.create_all()
    app.run(host="0.0.0.0", port=5000, debug=True)
