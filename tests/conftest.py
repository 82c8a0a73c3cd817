"""Shared pytest configuration and fixtures."""

import io

import pytest
import httpx

from cassandra_metrics.config.loader import ConfigLoader
from cassandra_metrics.services.graphite_emitter import GraphiteEmitter
from cassandra_metrics.utils.logger import setup_logger


CLUSTER_METRICS = ["heap-used", "os-load", "read-ops"]
KEYSPACE_METRICS = ["cf-read-ops", "cf-live-sstables"]

NODES = [
    {"node_ip": "10.0.0.1", "hostname": "node1.example.com", "dc": "dc1"},
    {"node_ip": "10.0.0.2", "hostname": "node2.example.com", "dc": "dc2"},
]

KEYSPACES = {
    "app": {"column_families": {"users": {}}},
    "system": {"column_families": {"local": {}, "peers": {}}},
    "OpsCenter": {"column_families": {"rollups60": {}}},
}


class FakeOpsCenter:
    """In-memory OpsCenter REST API served through httpx.MockTransport."""

    def __init__(self, clusters=("prod",), nodes=None, keyspaces=None):
        self.clusters = list(clusters)
        self.nodes = NODES if nodes is None else nodes
        self.keyspaces = KEYSPACES if keyspaces is None else keyspaces
        self.session_id = "session-123"
        self.reject_login = False
        self.failing_column_families = set()
        self.label_column_families = True
        self.node_records = None
        self.requests = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def metric_requests(self):
        return [r for r in self.requests if r.url.path.endswith("/new-metrics")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/login":
            if self.reject_login:
                return httpx.Response(401, json={"message": "bad credentials"})
            return httpx.Response(200, json={"sessionid": self.session_id})

        if request.headers.get("opscenter-session") != self.session_id:
            return httpx.Response(401, json={"message": "no session"})

        if path == "/cluster-configs":
            return httpx.Response(200, json={name: {} for name in self.clusters})

        cluster, _, resource = path.lstrip("/").partition("/")
        if cluster not in self.clusters:
            return httpx.Response(404, json={"message": "unknown cluster"})

        if resource == "nodes":
            return httpx.Response(200, json=self.nodes)
        if resource == "keyspaces":
            return httpx.Response(200, json=self.keyspaces)
        if resource == "new-metrics":
            return self._new_metrics(request)

        return httpx.Response(404)

    def _new_metrics(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        column_family = params.get("columnfamilies")
        if column_family in self.failing_column_families:
            return httpx.Response(500, text="internal error")

        timestamp = int(params["start"])
        data = {}
        for node in params["nodes"].split(","):
            if self.node_records is not None:
                data[node] = self.node_records
                continue
            records = []
            for index, metric in enumerate(params["metrics"].split(",")):
                record = {"metric": metric, "data-points": [[float(index + 1), timestamp]]}
                if column_family and self.label_column_families:
                    record["columnfamily"] = column_family
                records.append(record)
            data[node] = records
        return httpx.Response(200, json={"data": data})


def make_config(**sections):
    """Build a validated config; keyword arguments override whole sections."""
    raw = {
        "opscenter": {"host": "opscenter.local", "user": "admin", "password": "secret"},
        "collection": {"metrics": CLUSTER_METRICS, "keyspace_metrics": KEYSPACE_METRICS},
        "naming": {"scheme": "cassandra", "host_format": True},
    }
    raw.update(sections)
    return ConfigLoader.load_from_dict(raw)


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test")


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def opscenter():
    return FakeOpsCenter()


@pytest.fixture
def config_factory():
    return make_config


class RecordingEmitter(GraphiteEmitter):
    """GraphiteEmitter that also keeps every emitted line."""

    def __init__(self):
        super().__init__(io.StringIO())
        self.lines = []

    def write(self, line):
        super().write(line)
        self.lines.append(line)
