"""HTTP layer for driver-auth.

Registered on the app by driver_auth.main.create_app():
- auth_bp: POST /signup, POST /signin
"""

from .auth import AUTH_SERVICE_EXTENSION, auth_bp, get_auth_service
from .responses import error_response
from .validation import validate_request

__all__ = [
    "AUTH_SERVICE_EXTENSION",
    "auth_bp",
    "get_auth_service",
    "error_response",
    "validate_request",
]
