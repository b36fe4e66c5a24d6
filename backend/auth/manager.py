"""Drives a provider client through token exchange and profile retrieval."""

import logging
from typing import Optional

from .providers.base import CallbackError, OAuthError, OAuthProvider, OAuthUserInfo

logger = logging.getLogger(__name__)


class SocialAuthManager:
    """
    Holds the per-request state of one social login.

    Usage mirrors the callback sequence::

        await manager.set_client(client).authenticate(code)
        manager.create_service()
        profile = await manager.get_user_info()
    """

    def __init__(self):
        self.client: Optional[OAuthProvider] = None
        self._token: Optional[dict] = None
        self._service_ready = False

    def set_client(self, client: OAuthProvider) -> "SocialAuthManager":
        """Use client for the following calls and forget any previous token."""
        self.client = client
        self._token = None
        self._service_ready = False
        return self

    async def authenticate(self, code: Optional[str]) -> "SocialAuthManager":
        """
        Exchange the authorization code for a token.

        Raises:
            CallbackError: If no code was supplied
            OAuthError: If the provider rejects the code
        """
        if self.client is None:
            raise RuntimeError("set_client() must be called before authenticate()")
        if not code:
            raise CallbackError("Authorization code missing from callback")

        self._token = await self.client.exchange_code(code)
        logger.debug(f"Obtained {self.client.name} access token")
        return self

    def create_service(self) -> "SocialAuthManager":
        """Prepare profile retrieval from the obtained token."""
        if not self._token or not self._token.get("access_token"):
            raise OAuthError("No access token available; authenticate() first")
        self._service_ready = True
        return self

    def get_access_token(self) -> Optional[str]:
        if not self._token:
            return None
        return self._token.get("access_token")

    async def get_user_info(self) -> Optional[OAuthUserInfo]:
        """Return the provider profile, or None if none could be retrieved."""
        if not self._service_ready:
            return None
        user_info = await self.client.get_user_info(self._token)
        return user_info or None
