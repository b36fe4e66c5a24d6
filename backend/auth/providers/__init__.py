"""OAuth provider implementations."""

from .base import CallbackError, OAuthError, OAuthProvider, OAuthUserInfo
from .registry import ProviderNotConfiguredError, ProviderRegistry, build_registry, provider_registry
from .wechat import WeChatProvider

__all__ = [
    "CallbackError",
    "OAuthError",
    "OAuthProvider",
    "OAuthUserInfo",
    "ProviderNotConfiguredError",
    "ProviderRegistry",
    "WeChatProvider",
    "build_registry",
    "provider_registry",
]
