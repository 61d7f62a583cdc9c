"""Cloud provider implementations for zone resolution."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cloudzone.core.errors import InvalidNodeError, ZoneNotFoundError
from cloudzone.core.nodes import Node

# Well-known topology labels
ZONE_LABEL = "topology.kubernetes.io/zone"
REGION_LABEL = "topology.kubernetes.io/region"
LEGACY_ZONE_LABEL = "failure-domain.beta.kubernetes.io/zone"
LEGACY_REGION_LABEL = "failure-domain.beta.kubernetes.io/region"

AWS = "aws"
AZURE = "azure"


class Provider(ABC):
    """
    Zone resolution strategy for one cloud substrate.

    Implementations must be stateless (or synchronize internally) and
    must not modify the nodes they inspect.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the cloud provider."""

    @abstractmethod
    def get_zone(self, node: Node | None) -> str:
        """Return the failure-domain zone of ``node``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


def _require_node(node: Node | None) -> Node:
    if node is None:
        raise InvalidNodeError("node cannot be None")
    return node


def _first_label(node: Node, *keys: str) -> str:
    """Value of the first non-empty label among ``keys``."""
    for key in keys:
        value = node.label(key)
        if value:
            return value
    return ""


class DefaultProvider(Provider):
    """
    Fallback provider for environments with no registered vendor.

    Reads the standard zone label. A node without the label resolves
    to the empty zone rather than an error.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_zone(self, node: Node | None) -> str:
        return _require_node(node).label(ZONE_LABEL)


class AWSProvider(Provider):
    """Amazon Web Services: zone label, falling back to the legacy beta label."""

    @property
    def name(self) -> str:
        return AWS

    def get_zone(self, node: Node | None) -> str:
        node = _require_node(node)
        zone = _first_label(node, ZONE_LABEL, LEGACY_ZONE_LABEL)
        if not zone:
            raise ZoneNotFoundError(f"No zone label on node {node.name}")
        return zone


class AzureProvider(Provider):
    """
    Microsoft Azure.

    Zonal clusters label nodes as ``<region>-<n>``. Non-zonal clusters
    only report a fault domain number, which is qualified with the
    region so fault domains of different regions stay distinct.
    """

    @property
    def name(self) -> str:
        return AZURE

    def get_zone(self, node: Node | None) -> str:
        node = _require_node(node)
        zone = _first_label(node, ZONE_LABEL, LEGACY_ZONE_LABEL)
        if not zone:
            raise ZoneNotFoundError(f"No zone label on node {node.name}")

        if zone.isdigit():
            region = _first_label(node, REGION_LABEL, LEGACY_REGION_LABEL)
            if region:
                return f"{region}-{zone}"
        return zone
