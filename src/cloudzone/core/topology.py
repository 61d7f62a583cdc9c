"""Topology context tying the registry, prober and node directory together."""

from __future__ import annotations

import logging

from cloudzone.core.nodes import FileNodeDirectory, NodeDirectory
from cloudzone.core.providers import Provider
from cloudzone.core.registry import ProviderRegistry
from cloudzone.core.resolver import (
    EnvironmentProber,
    EnvVarProber,
    ProviderResolver,
    StaticProber,
    ZoneAggregator,
)
from cloudzone.core.schema import TopologyConfig

logger = logging.getLogger(__name__)


class Topology:
    """
    Long-lived context owning the provider registry.

    Build one during startup (see from_config) and share it afterwards.
    The registry should be fully populated before the context is handed
    to other threads.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        prober: EnvironmentProber,
        directory: NodeDirectory,
    ) -> None:
        self._registry = registry
        self._prober = prober
        self._directory = directory
        self._resolver = ProviderResolver(registry, prober)
        self._aggregator = ZoneAggregator(self._resolver, directory)

    @classmethod
    def from_config(cls, config: TopologyConfig, directory: NodeDirectory | None = None) -> Topology:
        """
        Initialize a topology from configuration.

        Args:
            config: Topology configuration
            directory: Node directory to use instead of ``config.nodes``

        Raises:
            ValueError: If no node directory is configured
        """
        registry = ProviderRegistry.with_builtin_providers()

        prober: EnvironmentProber
        if config.provider:
            prober = StaticProber(config.provider)
        else:
            prober = EnvVarProber(config.provider_env)

        if directory is None:
            if config.nodes is None:
                raise ValueError("No node directory configured")
            directory = FileNodeDirectory(config.nodes)

        logger.debug("Topology initialized with providers: %s", ", ".join(registry.names()))
        return cls(registry, prober, directory)

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    @property
    def prober(self) -> EnvironmentProber:
        return self._prober

    @property
    def directory(self) -> NodeDirectory:
        return self._directory

    @property
    def resolver(self) -> ProviderResolver:
        return self._resolver

    @property
    def aggregator(self) -> ZoneAggregator:
        return self._aggregator

    def active_provider(self) -> Provider:
        return self._resolver.active_provider()

    def is_registered(self, provider: Provider) -> bool:
        """Whether ``provider`` is a registered vendor rather than the fallback."""
        return self._registry.get(provider.name) is provider

    def zone_counts(self) -> dict[str, int]:
        """Count nodes per zone. See ZoneAggregator.zone_counts."""
        return self._aggregator.zone_counts()
