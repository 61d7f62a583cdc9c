"""Active provider selection and zone aggregation."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections import defaultdict

from cloudzone.core.errors import DirectoryUnavailableError
from cloudzone.core.nodes import Node, NodeDirectory
from cloudzone.core.providers import Provider
from cloudzone.core.registry import ProviderRegistry
from cloudzone.core.schema import DEFAULT_PROVIDER_ENV

logger = logging.getLogger(__name__)


class EnvironmentProber(ABC):
    """Reports which cloud provider the current environment runs on."""

    @abstractmethod
    def provider_name(self) -> str:
        """Name of the current provider, or an empty string if unknown."""


class StaticProber(EnvironmentProber):
    """Prober that always reports the same provider name."""

    def __init__(self, name: str) -> None:
        self._name = name

    def provider_name(self) -> str:
        return self._name


class EnvVarProber(EnvironmentProber):
    """Prober reading the provider name from an environment variable."""

    def __init__(self, variable: str = DEFAULT_PROVIDER_ENV) -> None:
        self._variable = variable

    @property
    def variable(self) -> str:
        return self._variable

    def provider_name(self) -> str:
        return os.environ.get(self._variable, "").strip()


class ProviderResolver:
    """
    Selects the provider for the current environment.

    Every call asks the prober again; nothing is cached.
    """

    def __init__(self, registry: ProviderRegistry, prober: EnvironmentProber) -> None:
        self._registry = registry
        self._prober = prober

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    def active_provider(self) -> Provider:
        """Get the provider for the current environment (never fails)."""
        return self._registry.resolve(self._prober.provider_name())

    def zone_of(self, node: Node | None) -> str:
        """Resolve a single node's zone with the active provider."""
        return self.active_provider().get_zone(node)


class ZoneAggregator:
    """
    Counts cluster nodes per failure-domain zone.

    Aggregation is best-effort: nodes whose zone cannot be resolved are
    left out of the result. Only a directory failure aborts a call.
    """

    def __init__(self, resolver: ProviderResolver, directory: NodeDirectory) -> None:
        self._resolver = resolver
        self._directory = directory

    def _fetch_nodes(self) -> list[Node]:
        try:
            return self._directory.list_nodes()
        except DirectoryUnavailableError:
            raise
        except Exception as e:
            raise DirectoryUnavailableError(f"Node directory failed: {e}") from e

    def zone_counts(self) -> dict[str, int]:
        """
        Build a map of zone -> number of nodes in that zone.

        Raises:
            DirectoryUnavailableError: If the node list cannot be fetched
        """
        return self.zone_counts_by_provider()[1]

    def zone_counts_by_provider(self) -> tuple[Provider, dict[str, int]]:
        """Like zone_counts, also returning the provider that resolved the zones."""
        nodes = self._fetch_nodes()

        # One provider for the whole pass
        provider = self._resolver.active_provider()

        zones: dict[str, int] = defaultdict(int)
        for node in nodes:
            try:
                zone = provider.get_zone(node)
            except Exception as e:
                logger.debug("Skipping node %s: %s", getattr(node, "name", node), e)
                continue
            zones[zone] += 1

        return provider, dict(zones)

    def zone_of_nodes(self) -> list[tuple[Node, str | None]]:
        """
        Resolve every node's zone individually.

        Unresolvable nodes are paired with None instead of being dropped.

        Raises:
            DirectoryUnavailableError: If the node list cannot be fetched
        """
        nodes = self._fetch_nodes()
        provider = self._resolver.active_provider()

        results: list[tuple[Node, str | None]] = []
        for node in nodes:
            try:
                results.append((node, provider.get_zone(node)))
            except Exception as e:
                logger.debug("No zone for node %s: %s", getattr(node, "name", node), e)
                results.append((node, None))
        return results
