"""Tests for nodes module."""

import pytest
import yaml

from cloudzone.core.errors import DirectoryUnavailableError
from cloudzone.core.nodes import FileNodeDirectory, Node, NodeList, StaticNodeDirectory
from cloudzone.core.providers import ZONE_LABEL, DefaultProvider
from cloudzone.core.registry import ProviderRegistry
from cloudzone.core.resolver import ProviderResolver, StaticProber, ZoneAggregator


@pytest.fixture
def sample_nodes_data():
    """Sample node directory data for testing."""
    return {
        "nodes": [
            {
                "name": "worker-1",
                "labels": {
                    ZONE_LABEL: "us-east-1a",
                    "kubernetes.io/os": "linux",
                },
            },
            {
                "name": "worker-2",
                "labels": {ZONE_LABEL: "us-east-1b"},
            },
            {
                "name": "control-plane",
                "labels": None,
            },
        ]
    }


@pytest.fixture
def nodes_file(tmp_path, sample_nodes_data):
    path = tmp_path / "nodes.yml"
    path.write_text(yaml.safe_dump(sample_nodes_data))
    return path


class TestNode:
    """Tests for Node class."""

    def test_node_properties(self):
        """Test basic node properties."""
        node = Node("worker-1", labels={ZONE_LABEL: "a"})

        assert node.name == "worker-1"
        assert node.label(ZONE_LABEL) == "a"
        assert node.has_label(ZONE_LABEL)
        assert not node.has_label("missing")
        assert node.label("missing") == ""
        assert node.label("missing", "fallback") == "fallback"

    def test_labels_are_copied(self):
        """Test callers cannot modify a node through its labels."""
        node = Node("worker-1", labels={ZONE_LABEL: "a"})
        node.labels[ZONE_LABEL] = "b"
        assert node.label(ZONE_LABEL) == "a"

    def test_from_dict(self):
        node = Node.from_dict({"name": "n", "labels": {"k": "v"}})
        assert node.labels == {"k": "v"}
        assert node.to_dict()["name"] == "n"


class TestNodeList:
    """Tests for NodeList class."""

    def test_from_dict(self, sample_nodes_data):
        """Test node list creation from dictionary."""
        nodes = NodeList.from_dict(sample_nodes_data)

        assert len(nodes) == 3
        assert [n.name for n in nodes] == ["worker-1", "worker-2", "control-plane"]
        assert list(nodes)[2].labels == {}

    def test_duplicate_names(self):
        """Test duplicate node names are rejected."""
        with pytest.raises(ValueError) as exc_info:
            NodeList.from_dict({"nodes": [{"name": "a"}, {"name": "a"}]})
        assert "Duplicate node name" in str(exc_info.value)

    def test_load(self, nodes_file):
        nodes = NodeList.load(nodes_file)
        assert len(nodes) == 3


class TestNodeDirectories:
    """Tests for node directory implementations."""

    def test_static_directory(self):
        """Test the static directory returns a copy of its nodes."""
        directory = StaticNodeDirectory([Node("a"), Node("b")])

        listed = directory.list_nodes()
        listed.clear()
        assert [n.name for n in directory.list_nodes()] == ["a", "b"]

    def test_file_directory(self, nodes_file):
        """Test nodes are read from the YAML file."""
        directory = FileNodeDirectory(nodes_file)
        assert [n.name for n in directory.list_nodes()] == ["worker-1", "worker-2", "control-plane"]

    def test_file_directory_rereads(self, nodes_file):
        """Test file changes are picked up on the next call."""
        directory = FileNodeDirectory(nodes_file)
        assert len(directory.list_nodes()) == 3

        nodes_file.write_text(yaml.safe_dump({"nodes": [{"name": "only"}]}))
        assert [n.name for n in directory.list_nodes()] == ["only"]

    def test_file_directory_empty_file(self, tmp_path):
        """Test an empty file is an empty directory."""
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert FileNodeDirectory(path).list_nodes() == []

    def test_file_directory_missing(self, tmp_path):
        """Test a missing file is a directory failure."""
        directory = FileNodeDirectory(tmp_path / "missing.yml")

        with pytest.raises(DirectoryUnavailableError) as exc_info:
            directory.list_nodes()
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_file_directory_malformed(self, tmp_path):
        """Test malformed YAML is a directory failure."""
        path = tmp_path / "bad.yml"
        path.write_text("nodes: [unclosed")

        with pytest.raises(DirectoryUnavailableError) as exc_info:
            FileNodeDirectory(path).list_nodes()
        assert "Malformed" in str(exc_info.value)

    def test_file_directory_invalid(self, tmp_path):
        """Test schema violations are a directory failure."""
        path = tmp_path / "invalid.yml"
        path.write_text(yaml.safe_dump({"nodes": [{"labels": {"a": "b"}}]}))

        with pytest.raises(DirectoryUnavailableError) as exc_info:
            FileNodeDirectory(path).list_nodes()
        assert "Invalid" in str(exc_info.value)

    def test_numeric_label_values(self, tmp_path):
        """Test unquoted numeric label values are read as strings."""
        path = tmp_path / "nodes.yml"
        path.write_text(f"nodes:\n  - name: aks-1\n    labels:\n      {ZONE_LABEL}: 1\n")

        node = FileNodeDirectory(path).list_nodes()[0]
        assert node.label(ZONE_LABEL) == "1"

    def test_null_label_value(self, tmp_path):
        """Test a label without a value reads as the empty string."""
        path = tmp_path / "nodes.yml"
        path.write_text(f"nodes:\n  - name: a\n    labels:\n      {ZONE_LABEL}:\n")

        node = FileNodeDirectory(path).list_nodes()[0]
        assert node.label(ZONE_LABEL) == ""
        assert DefaultProvider("x").get_zone(node) == ""

    @pytest.mark.parametrize("provider_name, expected", [("x", {"": 1}), ("aws", {})])
    def test_null_zone_label_counts(self, tmp_path, provider_name, expected):
        """Test an empty zone label counts as '' by default and is skipped by vendors."""
        path = tmp_path / "nodes.yml"
        path.write_text(f"nodes:\n  - name: a\n    labels:\n      {ZONE_LABEL}:\n")

        resolver = ProviderResolver(ProviderRegistry.with_builtin_providers(), StaticProber(provider_name))
        aggregator = ZoneAggregator(resolver, FileNodeDirectory(path))
        assert aggregator.zone_counts() == expected
