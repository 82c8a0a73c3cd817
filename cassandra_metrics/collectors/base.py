"""Base collector abstract class for OpsCenter metric collectors."""

from abc import ABC, abstractmethod
from typing import List, Set, Tuple
import logging

from ..config.models import CassandraMetricsConfig
from ..services.opscenter_client import OpsCenterClient
from ..services.graphite_emitter import GraphiteEmitter
from ..utils.metrics import FlatMetrics, TopologyInfo
from .naming import compose_name, scheme_prefix


class BaseCollector(ABC):
    """Abstract base class for all collectors."""

    def __init__(
        self,
        config: CassandraMetricsConfig,
        api: OpsCenterClient,
        emitter: GraphiteEmitter,
        logger: logging.Logger
    ):
        """
        Initialize base collector.

        Args:
            config: Full collector configuration
            api: Logged-in OpsCenter client
            emitter: Sink for metric lines
            logger: Logger instance
        """
        self.config = config
        self.api = api
        self.emitter = emitter
        self.logger = logger.getChild(self.__class__.__name__)
        self._degraded_nodes: Set[Tuple[str, str]] = set()

    @abstractmethod
    async def collect(
        self,
        cluster: str,
        node_ids: List[str],
        topology: TopologyInfo,
        timestamp: int
    ) -> int:
        """
        Fetch, normalize and emit one phase of metrics for a cluster.

        Returns:
            int: Number of metric lines emitted

        Raises:
            CassandraMetricsError: Any fatal collection error
        """
        pass

    def _resolve_host(self, cluster: str, node_id: str, topology: TopologyInfo):
        """
        Hostname segment for a node, applying the missing-host policy.

        Returns:
            str or None: Hostname, the node id as fallback, or None to skip
        """
        info = topology.get(node_id)
        if info is not None and info.hostname:
            return info.hostname

        policy = self.config.naming.missing_host_policy
        if (cluster, node_id) not in self._degraded_nodes:
            self._degraded_nodes.add((cluster, node_id))
            if policy == "skip":
                self.logger.warning(f"No hostname for node {node_id} in {cluster}, skipping its metrics")
            else:
                self.logger.warning(f"No hostname for node {node_id} in {cluster}, using node id")

        if policy == "skip":
            return None
        return node_id

    def _emit(
        self,
        flat: FlatMetrics,
        cluster: str,
        topology: TopologyInfo,
        timestamp: int
    ) -> int:
        """
        Name each flattened leaf and hand it to the emitter.

        Args:
            flat: Flattened node-keyed metrics (path[0] is the node id)
            cluster: Cluster the metrics belong to
            topology: Node topology for the cluster
            timestamp: Shared run timestamp

        Returns:
            int: Number of lines emitted
        """
        naming = self.config.naming
        prefix = scheme_prefix(
            naming.scheme,
            cluster if naming.include_cluster else None,
            naming.bucket_format
        )

        emitted = 0
        for path, value in flat.items():
            node_id = path[0]
            hostname = self._resolve_host(cluster, node_id, topology)
            if hostname is None:
                continue

            datacenter = None
            if naming.include_datacenter and node_id in topology:
                datacenter = topology[node_id].datacenter

            name = compose_name(prefix, hostname, path, naming.host_format, datacenter)
            self.emitter.output(name, value, timestamp)
            emitted += 1

        return emitted
