"""Registry that builds provider clients by name."""

import logging
from typing import Callable, Dict, List

from config import WECHAT_APP_ID, WECHAT_APP_SECRET
from .base import OAuthProvider
from .wechat import WeChatProvider

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[], OAuthProvider]


class ProviderNotConfiguredError(LookupError):
    """No provider is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"OAuth provider '{name}' is not configured")
        self.name = name


class ProviderRegistry:
    """
    Maps provider names to factories.

    Every call to create() returns a fresh client so scopes set during one
    request never leak into another.
    """

    def __init__(self):
        self._factories: Dict[str, ProviderFactory] = {}

    def register(self, name: str, factory: ProviderFactory) -> None:
        """Register (or replace) the factory for a provider name."""
        self._factories[name] = factory
        logger.debug(f"Registered OAuth provider '{name}'")

    def create(self, name: str) -> OAuthProvider:
        """
        Build a client for the named provider.

        Raises:
            ProviderNotConfiguredError: If nothing is registered under name
        """
        factory = self._factories.get(name)
        if factory is None:
            raise ProviderNotConfiguredError(name)
        return factory()

    def names(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories


def build_registry() -> ProviderRegistry:
    """Create the registry with every provider that has credentials."""
    registry = ProviderRegistry()

    if WECHAT_APP_ID and WECHAT_APP_SECRET:
        registry.register("wechat", WeChatProvider)
        logger.info("WeChat OAuth configured")
    else:
        logger.warning("WeChat OAuth not configured - WeChat login will be disabled")

    return registry


provider_registry = build_registry()
