from datetime import date, time, timedelta
from werkzeug.security import generate_password_hash
from app import app
from extensions import db
from models import CallLog, User
from services.data_service import UserScopedTable
from services.profile_service import create_profile

DEMO_EMAIL = "demo@callbot.ai"
DEMO_PASSWORD = "demo1234"


def seed_demo():
    """Seeds a demo account with a business profile and a few handled calls."""

    call_logs_data = [
        {"days_ago": 0, "call_time": time(9, 15), "duration": 65,
         "summary": "Caller asked about opening hours; told 9am to 6pm on weekdays."},
        {"days_ago": 0, "call_time": time(14, 2), "duration": 212,
         "summary": "Booked a cleaning appointment for next Tuesday at 10am."},
        {"days_ago": 1, "call_time": time(11, 40), "duration": None,
         "summary": None},
        {"days_ago": 3, "call_time": time(16, 55), "duration": 3661,
         "summary": "Long insurance question; customer wants a callback from billing."},
    ]

    with app.app_context():
        db.create_all()
        print("🌱 Seeding demo account...")

        user = User.query.filter_by(email=DEMO_EMAIL).first()
        if user:
            print(f"   - Skipping '{DEMO_EMAIL}', already exists.")
            return

        user = User(email=DEMO_EMAIL, password=generate_password_hash(DEMO_PASSWORD))
        db.session.add(user)
        db.session.commit()

        create_profile(user.id, {
            "company_name": "Bright Smile Dental",
            "niche": "dental-clinic",
            "description": "Family dental practice offering cleanings, fillings and whitening.",
        })

        calls = UserScopedTable(CallLog, user.id)
        today = date.today()
        for data in call_logs_data:
            calls.insert({
                "call_date": today - timedelta(days=data["days_ago"]),
                "call_time": data["call_time"],
                "duration": data["duration"],
                "summary": data["summary"],
            })
            print(f"   + Adding call from {data['days_ago']} day(s) ago.")

        print(f"✅ Demo account ready: {DEMO_EMAIL} / {DEMO_PASSWORD}")


if __name__ == "__main__":
    seed_demo()
