from flask import Blueprint, jsonify, redirect, render_template, url_for
from routes.auth_routes import get_current_user

website_bp = Blueprint("website", __name__)

PLANS = [
    {
        "name": "Starter",
        "price": "$49",
        "features": ["100 calls/month", "Basic AI voice", "Call summaries"],
        "popular": False
    },
    {
        "name": "Pro",
        "price": "$149",
        "features": ["500 calls/month", "Advanced AI voice", "Appointment booking", "CRM integration"],
        "popular": True
    },
    {
        "name": "Business",
        "price": "$299",
        "features": ["Unlimited calls", "Premium AI voice", "Priority support", "Custom integrations"],
        "popular": False
    }
]

FEATURES = [
    {"icon": "bot", "title": "Voice AI", "desc": "Natural conversation AI that sounds human", "color": "blue"},
    {"icon": "file", "title": "Appointment Booking", "desc": "Automatically schedule meetings and appointments", "color": "green"},
    {"icon": "file", "title": "Call Summary Logs", "desc": "Detailed transcripts and action items", "color": "purple"},
]

STEPS = [
    {"icon": "phone", "title": "Customer Calls", "desc": "Your customers call your business number as usual", "color": "blue"},
    {"icon": "bot", "title": "AI Responds", "desc": "Our AI answers in natural voice, handling inquiries professionally", "color": "green"},
    {"icon": "file", "title": "Summary Sent", "desc": "Get detailed call summaries and next steps instantly", "color": "purple"},
]


@website_bp.route("/")
def index():
    if get_current_user():
        return redirect(url_for("dashboard.dashboard"))
    return render_template("index.html", plans=PLANS, features=FEATURES, steps=STEPS)


@website_bp.route("/pricing")
def pricing():
    return render_template("pricing.html", plans=PLANS)


# --- Public List ---
@website_bp.route("/api/plans", methods=["GET"])
def get_plans():
    return jsonify(PLANS)
