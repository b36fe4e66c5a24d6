"""
Social login routes for WeChat.

The controller only sequences its collaborators: a provider registry that
builds the WeChat client, a SocialAuthManager that exchanges the grant for a
profile, and a SocialAuthUserManager that logs in or registers the account.
"""

import logging
import secrets
from typing import Iterable, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from config import COOKIE_SECURE, LOGIN_SUCCESS_URL, LOGIN_URL, WECHAT_SCOPES
from database.database import get_db
from database.models import User

from .dependencies import get_optional_user
from .manager import SocialAuthManager
from .messages import flash, pop_messages
from .providers import CallbackError, ProviderRegistry, provider_registry
from .user_manager import AccountError, LoginResult, SocialAuthUserManager

logger = logging.getLogger(__name__)

STATE_SESSION_KEY = "oauth2state"
AUTH_FAILED_MESSAGE = "You could not be authenticated, please contact the administrator"


class SocialAuthController:
    """Redirects users to WeChat and handles the callback."""

    def __init__(
        self,
        network_manager: ProviderRegistry,
        auth_manager: SocialAuthManager,
        user_manager: SocialAuthUserManager,
        provider_name: str = "wechat",
        scopes: Iterable[str] = WECHAT_SCOPES,
        login_url: str = LOGIN_URL,
        success_url: str = LOGIN_SUCCESS_URL,
    ):
        self.network_manager = network_manager
        self.auth_manager = auth_manager
        self.user_manager = user_manager
        self.provider_name = provider_name
        self.scopes = list(scopes)
        self.login_url = login_url
        self.success_url = success_url

    @classmethod
    def create(cls, db: Session) -> "SocialAuthController":
        """Build the controller from the application's collaborators."""
        return cls(
            provider_registry,
            SocialAuthManager(),
            SocialAuthUserManager(db, provider="wechat"),
        )

    def redirect_to_provider(self, request: Request) -> RedirectResponse:
        """
        Redirect the user to the provider's consent page.

        The generated state is kept in the session and checked by callback().
        """
        client = self.network_manager.create(self.provider_name)
        client.set_scopes(self.scopes)

        state = secrets.token_urlsafe(24)
        request.session[STATE_SESSION_KEY] = state

        return RedirectResponse(client.get_authorization_url(state), status_code=302)

    async def callback(
        self, request: Request, code: Optional[str], state: Optional[str]
    ) -> RedirectResponse:
        """
        Log in the user the provider redirected back to us.

        A forged state or a missing code counts as "no profile": the user is
        sent back to the login page with an error message. Provider and
        transport errors propagate.
        """
        client = self.network_manager.create(self.provider_name)

        try:
            self._check_state(request, state)
            await self.auth_manager.set_client(client).authenticate(code)
            self.auth_manager.create_service()
            profile = await self.auth_manager.get_user_info()
        except CallbackError as e:
            logger.warning(f"{self.provider_name} callback failed: {e}")
            profile = None

        if profile:
            try:
                result = self.user_manager.authenticate_user(
                    profile.email,
                    profile.name,
                    profile.provider_user_id,
                    profile.avatar_url,
                )
            except AccountError as e:
                flash(request, str(e), "error")
                return RedirectResponse(self.login_url, status_code=302)
            return self._login_response(request, result)

        flash(request, AUTH_FAILED_MESSAGE, "error")
        return RedirectResponse(self.login_url, status_code=302)

    def _check_state(self, request: Request, state: Optional[str]) -> None:
        expected = request.session.pop(STATE_SESSION_KEY, None)
        if not expected or not state or not secrets.compare_digest(
            expected.encode(), state.encode()
        ):
            raise CallbackError("Invalid OAuth state")

    def _login_response(self, request: Request, result: LoginResult) -> RedirectResponse:
        request.session["user_id"] = result.user.id
        response = RedirectResponse(self.success_url, status_code=302)
        for key, value in (
            ("access_token", result.access_token),
            ("refresh_token", result.refresh_token),
        ):
            response.set_cookie(
                key=key,
                value=value,
                httponly=True,
                secure=COOKIE_SECURE,
                samesite="lax",
                path="/",
            )
        return response


def get_social_auth_controller(db: Session = Depends(get_db)) -> SocialAuthController:
    """FastAPI dependency building a controller per request."""
    return SocialAuthController.create(db)


router = APIRouter(prefix="/user/login", tags=["social-auth"])


@router.get("", name="user.login")
async def login_page(request: Request, user: Optional[User] = Depends(get_optional_user)):
    """Login landing page: pending messages and the available providers."""
    return {
        "authenticated": user is not None,
        "messages": pop_messages(request),
        "providers": [
            {"name": name, "url": f"{router.prefix}/{name}"}
            for name in provider_registry.names()
        ],
    }


@router.get("/wechat", name="social_auth_wechat.redirect_to_wechat")
async def redirect_to_wechat(
    request: Request,
    controller: SocialAuthController = Depends(get_social_auth_controller),
):
    """Redirect to the WeChat authorization page."""
    return controller.redirect_to_provider(request)


@router.get("/wechat/callback", name="social_auth_wechat.callback")
async def wechat_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    controller: SocialAuthController = Depends(get_social_auth_controller),
):
    """Handle the WeChat OAuth callback."""
    return await controller.callback(request, code, state)
