from .auth_routes import auth_bp, api_auth_bp
from .website_routes import website_bp
from .dashboard_routes import dashboard_bp
from .integration_routes import integration_bp
from .call_routes import call_bp
from .profile_routes import profile_bp
