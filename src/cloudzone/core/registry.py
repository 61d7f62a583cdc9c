"""Registry of cloud providers keyed by name."""

from __future__ import annotations

import logging
import threading
from typing import Iterator

from cloudzone.core.errors import RegistryError
from cloudzone.core.providers import AWSProvider, AzureProvider, DefaultProvider, Provider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Cloud provider registry.

    Providers are registered during initialization and the registry is
    then sealed. Lookups of unknown names never fail: they get a
    DefaultProvider carrying the requested name.
    """

    def __init__(self) -> None:
        self._providers: dict[str, Provider] = {}
        self._lock = threading.Lock()
        self._sealed = False

    @classmethod
    def with_builtin_providers(cls) -> ProviderRegistry:
        """Create a sealed registry holding the built-in vendor providers."""
        registry = cls()
        for provider in (AWSProvider(), AzureProvider()):
            registry.register(provider.name, provider)
        registry.seal()
        return registry

    def register(self, name: str, provider: Provider) -> None:
        """
        Register a provider under ``name``.

        Raises:
            RegistryError: If the name is taken or the registry is sealed
        """
        with self._lock:
            if self._sealed:
                raise RegistryError(f"Registry is sealed, cannot register provider: {name}")
            if name in self._providers:
                raise RegistryError(f"Provider already registered: {name}")
            self._providers[name] = provider
        logger.debug("Registered provider %s as %r", provider, name)

    def seal(self) -> None:
        """Reject any further registration."""
        with self._lock:
            self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def get(self, name: str) -> Provider | None:
        """Get a registered provider, or None."""
        with self._lock:
            return self._providers.get(name)

    def resolve(self, name: str) -> Provider:
        """Get the provider registered under ``name``, or a default one."""
        with self._lock:
            provider = self._providers.get(name)
        if provider is None:
            logger.debug("No provider registered as %r, using default", name)
            return DefaultProvider(name)
        return provider

    def names(self) -> list[str]:
        """Registered provider names, sorted."""
        with self._lock:
            return sorted(self._providers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._providers)

    def __iter__(self) -> Iterator[Provider]:
        with self._lock:
            providers = list(self._providers.values())
        return iter(providers)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._providers
