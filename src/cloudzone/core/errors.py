"""Exceptions raised by cloudzone."""

from __future__ import annotations


class CloudZoneError(Exception):
    """Base class for all cloudzone errors."""

    pass


class InvalidNodeError(CloudZoneError, ValueError):
    """Raised when a provider is asked for the zone of a missing node."""

    pass


class ZoneNotFoundError(CloudZoneError, LookupError):
    """Raised when a vendor provider finds no zone label on a node."""

    pass


class DirectoryUnavailableError(CloudZoneError):
    """
    Raised when the node directory cannot return a node list.

    Aborts the whole aggregation call. ``zones`` is always empty so callers
    that report "no result" can use it directly.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.zones: dict[str, int] = {}


class RegistryError(CloudZoneError):
    """Raised on duplicate or late provider registration."""

    pass
