"""Metric data structures shared by collectors and the emitter."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union
import time

# Path segment: object key (str) or array index (int)
PathSegment = Union[str, int]
MetricPath = Tuple[PathSegment, ...]
FlatMetrics = Dict[MetricPath, Any]

# node_id -> metric name -> value (or node_id -> cf id -> metric name -> value)
NodeMetricRecord = Dict[str, Dict[str, Any]]

DEFAULT_LAG_SECONDS = 300


@dataclass
class NodeInfo:
    """Topology entry for one Cassandra node."""

    node_id: str
    datacenter: Optional[str] = None
    hostname: Optional[str] = None


TopologyInfo = Dict[str, NodeInfo]


@dataclass
class MetricLine:
    """One emitted Graphite line."""

    name: str
    value: Any
    timestamp: int

    def render(self) -> str:
        return f"{self.name} {self.value} {self.timestamp}"


@dataclass
class RunSummary:
    """Outcome of one collection cycle."""

    timestamp: int
    clusters: List[str] = field(default_factory=list)
    metrics_emitted: int = 0
    column_families: int = 0


def collection_timestamp(lag_seconds: int = DEFAULT_LAG_SECONDS, now: Optional[float] = None) -> int:
    """
    Compute the shared timestamp for one run.

    OpsCenter aggregates into one-minute buckets, so the most recent
    settled window is read by looking `lag_seconds` into the past.

    Args:
        lag_seconds: Seconds to subtract from the current time
        now: Current epoch time (defaults to time.time())

    Returns:
        int: Epoch seconds used as start, end and emitted timestamp
    """
    if now is None:
        now = time.time()
    return int(now) - lag_seconds
