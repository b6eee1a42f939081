import logging
from datetime import timezone
from flask import current_app, has_app_context
from models import CallLog, Integration, Profile
from models.common import utcnow
from services.data_service import DataServiceError, UserScopedTable

logger = logging.getLogger(__name__)

DEFAULT_TRIAL_DAYS = 7
DEFAULT_CALL_LOG_LIMIT = 10


class TrialExpiredError(Exception):
    pass


def _setting(key, default):
    if has_app_context():
        return current_app.config.get(key, default)
    return default


def _naive_utc(value):
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# ---------------- Derived values ----------------

def is_trial_expired(trial_start, now=None, trial_days=None):
    """
    True once more than `trial_days` whole days have passed since trial_start.
    A profile without a trial start never expires.
    """
    if not trial_start:
        return False
    if trial_days is None:
        trial_days = _setting("TRIAL_DAYS", DEFAULT_TRIAL_DAYS)
    elapsed = _naive_utc(now or utcnow()) - _naive_utc(trial_start)
    # timedelta.days is already floored
    return elapsed.days > trial_days


def format_duration(seconds):
    if not seconds:
        return "N/A"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


def format_call_date(call_date):
    return f"{call_date.month}/{call_date.day}/{call_date.year}"


def business_type_label(niche, default="Not specified"):
    # only the first hyphen becomes a space: 'real-estate' -> 'real estate'
    return niche.replace("-", " ", 1) if niche else default


def welcome_name(profile):
    return (profile.company_name if profile else None) or "there"


def prompt_preview(profile):
    niche = business_type_label(profile.niche, "") if profile else ""
    company = (profile.company_name if profile else None) or ""
    description = (profile.description if profile else None) or ""
    return (
        f"You are a voice assistant for a {niche} business named {company}. "
        f"Begin each call with \"Welcome to {company}, how may I help you?\" "
        f"Respond like a human staff member using this description: {description}"
    )


def sort_call_logs(call_logs):
    """Most recent first by (call_date, call_time)."""
    return sorted(call_logs, key=lambda log: (log.call_date, log.call_time), reverse=True)


# ---------------- Queries ----------------

def load_profile(user_id):
    return UserScopedTable(Profile, user_id).single()


def load_integration(user_id):
    return UserScopedTable(Integration, user_id).maybe_single()


def load_call_logs(user_id, limit=None):
    if limit is None:
        limit = _setting("CALL_LOG_LIMIT", DEFAULT_CALL_LOG_LIMIT)
    rows = UserScopedTable(CallLog, user_id).select(
        order_by=[("call_date", False), ("call_time", False)],
        limit=limit
    )
    return sort_call_logs(rows)


def _load_panel(name, loader, user_id, errors, default=None):
    try:
        return loader(user_id)
    except DataServiceError as e:
        logger.warning("Failed to load %s for user %s: %s", name, user_id, e)
        errors[name] = str(e)
        return default


def build_dashboard(user_id, now=None):
    """
    Load the three dashboard panels independently and derive the values the
    page shows. A failing panel is reported in `errors` and left empty; the
    others still load.
    """
    errors = {}
    profile = _load_panel("profile", load_profile, user_id, errors)
    integration = _load_panel("integration", load_integration, user_id, errors)
    call_logs = _load_panel("call_logs", load_call_logs, user_id, errors, default=[])

    return {
        "profile": profile,
        "integration": integration,
        "call_logs": call_logs,
        "errors": errors,
        "trial_expired": is_trial_expired(profile.trial_start if profile else None, now=now),
        "welcome_name": welcome_name(profile),
        "business_type": business_type_label(profile.niche if profile else None),
        "prompt_preview": prompt_preview(profile),
    }


# ---------------- Mutations ----------------

def save_integration(user_id, twilio_phone_number, whatsapp_business_id, now=None):
    """
    Update the user's integration row if there is one, otherwise create it.
    Empty strings are stored as NULL. Returns (integration, created).
    """
    profile = UserScopedTable(Profile, user_id).maybe_single()
    if is_trial_expired(profile.trial_start if profile else None, now=now):
        raise TrialExpiredError("The free trial has ended; integrations can no longer be edited")

    values = {
        "twilio_phone_number": twilio_phone_number or None,
        "whatsapp_business_id": whatsapp_business_id or None,
        "updated_at": _naive_utc(now) if now else utcnow(),
    }

    table = UserScopedTable(Integration, user_id)
    existing = table.maybe_single()
    if existing:
        integration = table.update(existing.id, values)
        logger.info("Updated integration %s for user %s", integration.id, user_id)
        return integration, False

    integration = table.insert(values)
    logger.info("Created integration %s for user %s", integration.id, user_id)
    return integration, True
