import logging
from models import Profile
from models.common import utcnow
from services.data_service import UserScopedTable

logger = logging.getLogger(__name__)

ONBOARDING_FIELDS = ("company_name", "niche", "description", "website", "user_type")


class ProfileExistsError(Exception):
    pass


def create_profile(user_id, data):
    """
    Onboarding: create the user's profile and start the free trial.
    trial_start is always set here and never taken from the input.
    """
    table = UserScopedTable(Profile, user_id)
    if table.maybe_single() is not None:
        raise ProfileExistsError("Profile already exists for this user")

    values = {field: (data.get(field) or None) for field in ONBOARDING_FIELDS}
    values["trial_start"] = utcnow()
    values["onboarding_completed"] = True
    profile = table.insert(values)
    logger.info("Onboarded user %s as '%s'", user_id, profile.company_name)
    return profile
