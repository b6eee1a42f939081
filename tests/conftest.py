from datetime import timedelta
import pytest
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash
from app import create_app
from config import TestConfig
from extensions import db
from models import CallLog, Integration, Profile, User
from models.common import utcnow


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


class CsrfTestConfig(TestConfig):
    JWT_COOKIE_CSRF_PROTECT = True


# Cookie CSRF on, as in production
@pytest.fixture
def csrf_client():
    app = create_app(CsrfTestConfig)
    with app.app_context():
        db.create_all()
        yield app.test_client()
        db.session.remove()
        db.drop_all()


@pytest.fixture
def make_user(app):
    def _make(email="owner@example.com", password="secret123"):
        user = User(email=email, password=generate_password_hash(password))
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture
def make_profile(app):
    def _make(user, trial_days_ago=0, **fields):
        fields.setdefault("company_name", "Bright Smile Dental")
        fields.setdefault("niche", "dental-clinic")
        fields.setdefault("description", "Family dental practice")
        trial_start = None if trial_days_ago is None else utcnow() - timedelta(days=trial_days_ago)
        profile = Profile(user_id=user.id, trial_start=trial_start, onboarding_completed=True, **fields)
        db.session.add(profile)
        db.session.commit()
        return profile
    return _make


@pytest.fixture
def make_integration(app):
    def _make(user, twilio_phone_number="+15550001111", whatsapp_business_id="wa-123"):
        integration = Integration(
            user_id=user.id,
            twilio_phone_number=twilio_phone_number,
            whatsapp_business_id=whatsapp_business_id
        )
        db.session.add(integration)
        db.session.commit()
        return integration
    return _make


@pytest.fixture
def make_call_log(app):
    def _make(user, call_date, call_time, duration=None, summary=None):
        log = CallLog(user_id=user.id, call_date=call_date, call_time=call_time, duration=duration, summary=summary)
        db.session.add(log)
        db.session.commit()
        return log
    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(identity=user.id)}"}
    return _headers
