"""
Cloudzone - Cloud topology resolution for cluster nodes.

This package provides tools for:
- Registering zone resolution strategies per cloud provider
- Selecting the provider for the current environment
- Resolving each node's failure-domain zone
- Counting cluster nodes per zone for storage placement
"""

__version__ = "0.1.0"

from cloudzone.core.providers import Provider, DefaultProvider
from cloudzone.core.registry import ProviderRegistry
from cloudzone.core.resolver import ProviderResolver, ZoneAggregator
from cloudzone.core.topology import Topology

__all__ = [
    "__version__",
    "Provider",
    "DefaultProvider",
    "ProviderRegistry",
    "ProviderResolver",
    "ZoneAggregator",
    "Topology",
]
