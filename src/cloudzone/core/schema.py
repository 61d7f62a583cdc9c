"""Pydantic schemas for nodes and topology configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_PROVIDER_ENV = "CLOUDZONE_PROVIDER"


class NodeSchema(BaseModel):
    """
    Schema for a cluster node.

    Nodes are identified by name. Labels carry topology information
    such as the failure-domain zone.
    """

    name: str
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)

    @field_validator("labels", "annotations", mode="before")
    @classmethod
    def normalize_mapping(cls, v: Any) -> dict[str, str]:
        """Accept null mappings and unquoted scalar values from YAML."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(key): "" if value is None else str(value) for key, value in v.items()}
        return v


class NodeListSchema(BaseModel):
    """Schema for a node directory file."""

    nodes: list[NodeSchema] = Field(default_factory=list)

    @field_validator("nodes")
    @classmethod
    def validate_unique_names(cls, v: list[NodeSchema]) -> list[NodeSchema]:
        """Node names must be unique within a directory."""
        seen: set[str] = set()
        for node in v:
            if node.name in seen:
                raise ValueError(f"Duplicate node name: {node.name}")
            seen.add(node.name)
        return v


class TopologyConfig(BaseModel):
    """
    Configuration for a topology context.

    ``provider`` pins the provider name. When unset, the name is read
    from the ``provider_env`` environment variable at resolution time.
    """

    provider: str | None = None
    provider_env: str = DEFAULT_PROVIDER_ENV
    nodes: Path | None = None

    @classmethod
    def load(cls, path: str | Path) -> TopologyConfig:
        """Load configuration from a YAML file."""
        path = Path(path)
        with path.open() as f:
            data = yaml.safe_load(f) or {}

        config = cls(**data)

        # Relative node paths are relative to the config file
        if config.nodes is not None and not config.nodes.is_absolute():
            config.nodes = path.parent / config.nodes

        return config
