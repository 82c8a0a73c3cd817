"""Tests for TopologyResolver."""

import pytest

from cassandra_metrics.collectors.topology import TopologyResolver
from cassandra_metrics.utils.metrics import NodeInfo


@pytest.fixture
def resolver(logger):
    return TopologyResolver([
        {"node_ip": "10.0.0.1", "hostname": "node1.example.com", "dc": "dc1"},
        {"node_ip": "10.0.0.2", "hostname": "node2.example.com", "dc": "dc2"},
        {"node_ip": "10.0.0.3", "hostname": "node3.example.com", "dc": "dc1"},
    ], logger)


class TestTopologyResolver:
    """Test suite for TopologyResolver."""

    def test_node_ids_in_listing_order(self, resolver):
        assert resolver.node_ids() == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]

    def test_select_all_nodes(self, resolver):
        assert resolver.select_nodes("all") == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]

    def test_select_explicit_nodes(self, resolver):
        assert resolver.select_nodes(["10.0.0.2"]) == ["10.0.0.2"]

    def test_resolve_datacenters_filters_to_requested(self, resolver):
        assert resolver.resolve_datacenters(["10.0.0.1", "10.0.0.3"]) == {
            "10.0.0.1": "dc1",
            "10.0.0.3": "dc1",
        }

    def test_resolve_hostnames_filters_to_requested(self, resolver):
        assert resolver.resolve_hostnames(["10.0.0.2"]) == {"10.0.0.2": "node2.example.com"}

    def test_unknown_node_yields_no_entry(self, resolver):
        assert resolver.resolve_hostnames(["10.9.9.9"]) == {}
        assert resolver.resolve_datacenters(["10.9.9.9", "10.0.0.1"]) == {"10.0.0.1": "dc1"}

    def test_resolve_builds_node_info(self, resolver):
        topology = resolver.resolve(["10.0.0.1", "10.9.9.9"])

        assert topology == {
            "10.0.0.1": NodeInfo(node_id="10.0.0.1", datacenter="dc1", hostname="node1.example.com")
        }

    def test_listing_entries_without_ip_are_ignored(self, logger):
        resolver = TopologyResolver([{"hostname": "ghost"}, {"node_ip": "10.0.0.1"}], logger)

        assert resolver.node_ids() == ["10.0.0.1"]
        assert resolver.resolve(["10.0.0.1"])["10.0.0.1"].hostname is None
