import logging
from functools import wraps
from flask import Blueprint, current_app, g, jsonify, redirect, render_template, request, url_for
from flask_jwt_extended import create_access_token, set_access_cookies, unset_jwt_cookies
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash
from extensions import db
from models.user import User
from services.data_service import DataServiceError
from services.notifications import notify
from services.profile_service import create_profile

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)
api_auth_bp = Blueprint("api_auth", __name__)

NICHES = [
    ("dental-clinic", "Dental clinic"),
    ("law-firm", "Law firm"),
    ("real-estate", "Real estate"),
    ("home-services", "Home services"),
    ("restaurant", "Restaurant"),
    ("other", "Other"),
]


class AuthError(Exception):
    def __init__(self, message, status=400):
        super().__init__(message)
        self.message = message
        self.status = status


def get_current_user():
    """The signed-in user for this request, or None."""
    user_id = g.get("user_id")
    if not user_id:
        return None
    return db.session.get(User, user_id)


# Decorator for JSON endpoints: 401 without a valid token
def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        current_user = get_current_user()
        if not current_user:
            return jsonify({'message': 'Token is missing or invalid!'}), 401
        return f(current_user, *args, **kwargs)
    return decorated


# Decorator for pages: send signed-out visitors to the sign-in page
def login_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        current_user = get_current_user()
        if not current_user:
            return redirect(url_for("auth.auth_page"))
        return f(current_user, *args, **kwargs)
    return decorated


def register_user(email, password):
    email = (email or "").strip().lower()
    if not email or not password:
        raise AuthError("Email and password are required")
    if User.query.filter_by(email=email).first():
        raise AuthError("User already exists", 409)

    user = User(email=email, password=generate_password_hash(password))
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise AuthError("User already exists", 409)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(email, password):
    email = (email or "").strip().lower()
    user = User.query.filter(User.email.ilike(email)).first() if email else None
    if not user or not check_password_hash(user.password, password or ""):
        logger.warning("Failed sign-in for %s from %s", email or "<empty>", request.remote_addr)
        raise AuthError("Invalid credentials", 401)
    logger.info("User %s signed in", user.id)
    return user


def _signed_in_redirect(user):
    response = redirect(url_for("dashboard.dashboard"))
    set_access_cookies(response, create_access_token(identity=user.id))
    return response


# ---------------- PAGES ----------------
@auth_bp.route("", methods=["GET"])
def auth_page():
    if get_current_user():
        return redirect(url_for("dashboard.dashboard"))
    return render_template("auth.html", niches=NICHES)


@auth_bp.route("/signup", methods=["POST"])
def signup():
    try:
        user = register_user(request.form.get("email"), request.form.get("password"))
        create_profile(user.id, request.form)
    except AuthError as e:
        notify("Error", e.message, "destructive")
        return redirect(url_for("auth.auth_page"))
    except DataServiceError:
        notify("Error", "Could not set up your business profile. Please try again.", "destructive")
        return redirect(url_for("auth.auth_page"))
    notify("Welcome", f"Your {current_app.config['TRIAL_DAYS']}-day free trial has started.")
    return _signed_in_redirect(user)


@auth_bp.route("/login", methods=["POST"])
def login():
    try:
        user = authenticate(request.form.get("email"), request.form.get("password"))
    except AuthError as e:
        notify("Error", e.message, "destructive")
        return redirect(url_for("auth.auth_page"))
    return _signed_in_redirect(user)


@auth_bp.route("/logout", methods=["POST"])
def logout():
    response = redirect(url_for("website.index"))
    unset_jwt_cookies(response)
    return response


# ---------------- JSON API ----------------
@api_auth_bp.route("/signup", methods=["POST"])
def api_signup():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"message": "Invalid JSON or Content-Type not set to application/json"}), 400
    try:
        user = register_user(data.get("email"), data.get("password"))
    except AuthError as e:
        return jsonify({"message": e.message}), e.status
    return jsonify({"message": "Signup success", "user": user.to_dict()}), 201


@api_auth_bp.route("/login", methods=["POST"])
def api_login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"message": "Invalid JSON or Content-Type not set to application/json"}), 400
    try:
        user = authenticate(data.get("email"), data.get("password"))
    except AuthError as e:
        return jsonify({"message": e.message}), e.status
    return jsonify({
        "token": create_access_token(identity=user.id),
        "user": user.to_dict()
    })


@api_auth_bp.route("/me", methods=["GET"])
@token_required
def me(current_user):
    return jsonify({"user": current_user.to_dict()})
