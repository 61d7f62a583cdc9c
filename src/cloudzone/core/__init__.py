"""Core zone resolution: providers, registry, resolver and aggregation."""

from cloudzone.core.errors import (
    CloudZoneError,
    DirectoryUnavailableError,
    InvalidNodeError,
    RegistryError,
    ZoneNotFoundError,
)
from cloudzone.core.nodes import FileNodeDirectory, Node, NodeDirectory, NodeList, StaticNodeDirectory
from cloudzone.core.providers import (
    REGION_LABEL,
    ZONE_LABEL,
    AWSProvider,
    AzureProvider,
    DefaultProvider,
    Provider,
)
from cloudzone.core.registry import ProviderRegistry
from cloudzone.core.resolver import (
    EnvironmentProber,
    EnvVarProber,
    ProviderResolver,
    StaticProber,
    ZoneAggregator,
)
from cloudzone.core.schema import NodeSchema, TopologyConfig
from cloudzone.core.topology import Topology

__all__ = [
    "CloudZoneError",
    "DirectoryUnavailableError",
    "InvalidNodeError",
    "RegistryError",
    "ZoneNotFoundError",
    "Node",
    "NodeList",
    "NodeDirectory",
    "StaticNodeDirectory",
    "FileNodeDirectory",
    "ZONE_LABEL",
    "REGION_LABEL",
    "Provider",
    "DefaultProvider",
    "AWSProvider",
    "AzureProvider",
    "ProviderRegistry",
    "EnvironmentProber",
    "StaticProber",
    "EnvVarProber",
    "ProviderResolver",
    "ZoneAggregator",
    "NodeSchema",
    "TopologyConfig",
    "Topology",
]
