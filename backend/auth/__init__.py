"""Authentication module."""

from .routes import router
from .controller import SocialAuthController, router as social_auth_router
from .dependencies import get_current_user, get_optional_user
from .jwt import create_access_token, create_refresh_token, verify_token

__all__ = [
    "router",
    "social_auth_router",
    "SocialAuthController",
    "get_current_user",
    "get_optional_user",
    "create_access_token",
    "create_refresh_token",
    "verify_token",
]
