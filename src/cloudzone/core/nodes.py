"""Cluster nodes and the directories that list them."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterator

import yaml
from pydantic import ValidationError

from cloudzone.core.errors import DirectoryUnavailableError
from cloudzone.core.schema import NodeListSchema, NodeSchema

logger = logging.getLogger(__name__)


class Node:
    """
    Represents a cluster node.

    A node is read-only from cloudzone's point of view: providers
    inspect its labels but never change them.
    """

    def __init__(
        self,
        name: str,
        labels: dict[str, str] | None = None,
        annotations: dict[str, str] | None = None,
    ) -> None:
        self._schema = NodeSchema(name=name, labels=labels or {}, annotations=annotations or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Node:
        """Create a node from a dictionary with ``name`` and ``labels``."""
        schema = NodeSchema(**data)
        return cls(schema.name, schema.labels, schema.annotations)

    @property
    def name(self) -> str:
        return self._schema.name

    @property
    def labels(self) -> dict[str, str]:
        """Copy of the node's labels."""
        return dict(self._schema.labels)

    @property
    def annotations(self) -> dict[str, str]:
        return dict(self._schema.annotations)

    def label(self, key: str, default: str = "") -> str:
        """Get a label value, or ``default`` if the label is not set."""
        return self._schema.labels.get(key, default)

    def has_label(self, key: str) -> bool:
        return key in self._schema.labels

    def to_dict(self) -> dict[str, Any]:
        return self._schema.model_dump()

    def __repr__(self) -> str:
        return f"Node({self.name}, labels={len(self._schema.labels)})"


class NodeList:
    """Ordered collection of nodes as returned by a directory."""

    def __init__(self, nodes: list[Node]) -> None:
        self._nodes = nodes

    @classmethod
    def load(cls, path: str | Path) -> NodeList:
        """Load nodes from YAML file."""
        path = Path(path)
        with path.open() as f:
            data = yaml.safe_load(f) or {}

        # Validate with schema
        schema = NodeListSchema(**data)

        return cls([Node(n.name, n.labels, n.annotations) for n in schema.nodes])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NodeList:
        """Create node list from dictionary."""
        schema = NodeListSchema(**data)
        return cls([Node(n.name, n.labels, n.annotations) for n in schema.nodes])

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)


class NodeDirectory(ABC):
    """
    Source of the cluster's current node list.

    Implementations raise DirectoryUnavailableError when the list
    cannot be produced.
    """

    @abstractmethod
    def list_nodes(self) -> list[Node]:
        """Return every node currently in the cluster."""


class StaticNodeDirectory(NodeDirectory):
    """Directory over a fixed, in-memory node list."""

    def __init__(self, nodes: list[Node] | NodeList) -> None:
        self._nodes = list(nodes)

    def list_nodes(self) -> list[Node]:
        return list(self._nodes)


class FileNodeDirectory(NodeDirectory):
    """
    Directory backed by a YAML node file.

    The file is re-read on every call so edits are picked up without
    restarting.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def list_nodes(self) -> list[Node]:
        logger.debug("Reading node directory %s", self._path)
        try:
            nodes = NodeList.load(self._path)
        except OSError as e:
            raise DirectoryUnavailableError(f"Cannot read node directory {self._path}: {e}") from e
        except yaml.YAMLError as e:
            raise DirectoryUnavailableError(f"Malformed node directory {self._path}: {e}") from e
        except (ValidationError, TypeError) as e:
            raise DirectoryUnavailableError(f"Invalid node directory {self._path}: {e}") from e
        return list(nodes)
