from .user import User
from .profile import Profile
from .integration import Integration
from .call import CallLog

# Ensure all models are imported here so SQLAlchemy knows about them
