"""Base class for OAuth providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass
class OAuthUserInfo:
    """Standardized user info from OAuth providers."""

    provider: str
    provider_user_id: str
    email: Optional[str]
    name: Optional[str]
    avatar_url: Optional[str] = None


class OAuthError(Exception):
    """Provider rejected the request or the grant could not be used."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class CallbackError(OAuthError):
    """The callback request itself is unusable (bad state, no code)."""


class OAuthProvider(ABC):
    """Abstract base class for OAuth providers."""

    def __init__(self, scopes: Optional[Iterable[str]] = None):
        self._scopes: List[str] = list(scopes or [])

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'wechat')."""
        pass

    @property
    def scopes(self) -> List[str]:
        """Permissions that will be requested from the provider."""
        return list(self._scopes)

    def set_scopes(self, scopes: Iterable[str]) -> "OAuthProvider":
        """Replace the requested scopes."""
        self._scopes = list(scopes)
        return self

    @abstractmethod
    def get_authorization_url(self, state: str, **kwargs) -> str:
        """
        Generate authorization URL.

        Args:
            state: CSRF protection state parameter
            **kwargs: Provider-specific params

        Returns:
            Full authorization URL to redirect user to
        """
        pass

    @abstractmethod
    async def exchange_code(self, code: str) -> dict:
        """
        Exchange authorization code for tokens.

        Args:
            code: Authorization code from callback

        Returns:
            Token response dict with access_token, etc.

        Raises:
            OAuthError: If the provider refuses the code
        """
        pass

    @abstractmethod
    async def get_user_info(self, token: dict) -> Optional[OAuthUserInfo]:
        """
        Fetch user info using the token response.

        Args:
            token: Token response returned by exchange_code

        Returns:
            Standardized user info
        """
        pass
