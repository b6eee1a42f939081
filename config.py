import os
from datetime import timedelta
from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, ".env"))


def env_flag(name, default="false"):
    return os.environ.get(name, default).lower() in ['true', 'on', '1']


class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or "sqlite:///" + os.path.join(basedir, "callbot.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.environ.get("SECRET_KEY") or "a-dev-secret-key-that-is-not-so-secret"

    # Flask-JWT-Extended: the JSON API sends a Bearer header, the pages use cookies
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY") or SECRET_KEY
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get("JWT_EXPIRES_HOURS", 24)))
    JWT_COOKIE_SECURE = env_flag("JWT_COOKIE_SECURE")
    JWT_COOKIE_CSRF_PROTECT = True
    JWT_CSRF_CHECK_FORM = True

    TRIAL_DAYS = int(os.environ.get("TRIAL_DAYS", 7))
    CALL_LOG_LIMIT = int(os.environ.get("CALL_LOG_LIMIT", 10))

    CORS_ORIGINS = os.environ.get(
        "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    ).split(",")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SECRET_KEY = "test-secret-key-for-the-callbot-suite"
    JWT_SECRET_KEY = "test-jwt-secret-key-for-the-callbot-suite"
    JWT_COOKIE_CSRF_PROTECT = False
    TRIAL_DAYS = 7
    CALL_LOG_LIMIT = 10
