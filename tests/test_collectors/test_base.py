"""Tests for BaseCollector class."""

import io
import logging

import pytest

from cassandra_metrics.collectors.base import BaseCollector
from cassandra_metrics.services.graphite_emitter import GraphiteEmitter
from cassandra_metrics.utils.metrics import NodeInfo

from conftest import RecordingEmitter


class MockCollector(BaseCollector):
    """Mock collector for testing BaseCollector functionality."""

    def __init__(self, config, logger=None):
        if logger is None:
            logger = logging.getLogger(__name__)
        super().__init__(config, None, RecordingEmitter(), logger)

    async def collect(self, cluster, node_ids, topology, timestamp):
        """Mock collect method."""
        return 0


TOPOLOGY = {
    "10.0.0.1": NodeInfo(node_id="10.0.0.1", datacenter="dc1", hostname="node1.example.com"),
    "10.0.0.2": NodeInfo(node_id="10.0.0.2", datacenter="dc1", hostname=None),
}


class TestBaseCollector:
    """Test suite for BaseCollector."""

    def test_resolve_host_known_node(self, config):
        collector = MockCollector(config)

        assert collector._resolve_host("prod", "10.0.0.1", TOPOLOGY) == "node1.example.com"

    def test_resolve_host_fallback_to_node_id(self, config):
        collector = MockCollector(config)

        assert collector._resolve_host("prod", "10.0.0.9", TOPOLOGY) == "10.0.0.9"
        # Listed node without a hostname is treated the same way
        assert collector._resolve_host("prod", "10.0.0.2", TOPOLOGY) == "10.0.0.2"

    def test_resolve_host_skip_policy(self, config_factory):
        collector = MockCollector(config_factory(naming={"missing_host_policy": "skip"}))

        assert collector._resolve_host("prod", "10.0.0.9", TOPOLOGY) is None

    def test_degraded_node_warned_once(self, config, caplog):
        logger = logging.getLogger("test_base")
        collector = MockCollector(config, logger)

        with caplog.at_level(logging.WARNING, logger="test_base"):
            collector._resolve_host("prod", "10.0.0.9", TOPOLOGY)
            collector._resolve_host("prod", "10.0.0.9", TOPOLOGY)

        assert len([r for r in caplog.records if "10.0.0.9" in r.getMessage()]) == 1

    def test_emit_names_every_leaf(self, config):
        collector = MockCollector(config)
        flat = {
            ("10.0.0.1", "heap-used"): 512.0,
            ("10.0.0.1", "app.users", "cf-read-ops"): 4.0,
        }

        emitted = collector._emit(flat, "prod", TOPOLOGY, 1000)

        assert emitted == 2
        assert [line.render() for line in collector.emitter.lines] == [
            "cassandra.node1_example_com.heap-used 512.0 1000",
            "cassandra.node1_example_com.app.users.cf-read-ops 4.0 1000",
        ]

    def test_emit_empty(self, config):
        collector = MockCollector(config)

        assert collector._emit({}, "prod", TOPOLOGY, 1000) == 0

    def test_abstract_base_cannot_be_instantiated(self, config):
        with pytest.raises(TypeError):
            BaseCollector(config, None, GraphiteEmitter(io.StringIO()), logging.getLogger(__name__))
