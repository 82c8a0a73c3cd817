"""Collection workflow: one pass over every configured cluster."""

import logging
import time
from typing import List

import httpx

from .collectors.cluster_collector import ClusterCollector
from .collectors.keyspace_collector import KeyspaceCollector
from .collectors.topology import TopologyResolver
from .config.models import CassandraMetricsConfig
from .services.graphite_emitter import GraphiteEmitter
from .services.opscenter_client import OpsCenterClient
from .utils.logger import setup_logger
from .utils.metrics import RunSummary, collection_timestamp


class CollectionWorkflow:
    """
    Orchestrates one collect-and-forward run.

    Clusters are processed one after the other; within a cluster the
    cluster-wide phase runs before the keyspace phase. Only the per
    column family fetches of the keyspace phase run concurrently.
    """

    def __init__(
        self,
        config: CassandraMetricsConfig,
        emitter: GraphiteEmitter = None,
        logger: logging.Logger = None,
        transport: httpx.AsyncBaseTransport = None
    ):
        """
        Initialize collection workflow.

        Args:
            config: Validated configuration
            emitter: Metric sink (stdout Graphite writer by default)
            logger: Optional logger instance
            transport: Optional httpx transport for the OpsCenter client
        """
        self.config = config
        self.emitter = emitter or GraphiteEmitter()
        self.logger = logger or setup_logger("workflow")
        self.transport = transport

    async def _clusters(self, api: OpsCenterClient) -> List[str]:
        clusters = self.config.collection.clusters
        if clusters == "all":
            return await api.list_clusters()
        return list(clusters)

    async def run(self) -> RunSummary:
        """
        Collect and emit metrics for every configured cluster.

        Returns:
            RunSummary: Clusters processed and lines emitted

        Raises:
            CassandraMetricsError: On authentication, API or collection failure
        """
        collection = self.config.collection
        timestamp = collection_timestamp(collection.lag_seconds)
        summary = RunSummary(timestamp=timestamp)
        start_time = time.time()

        async with OpsCenterClient(self.config.opscenter, self.logger, self.transport) as api:
            await api.login()

            cluster_collector = ClusterCollector(self.config, api, self.emitter, self.logger)
            keyspace_collector = KeyspaceCollector(self.config, api, self.emitter, self.logger)

            clusters = await self._clusters(api)
            self.logger.info(f"Collecting metrics for {len(clusters)} cluster(s) at {timestamp}")

            for cluster in clusters:
                resolver = TopologyResolver(await api.list_nodes(cluster), self.logger)
                node_ids = resolver.select_nodes(collection.nodes)
                if not node_ids:
                    self.logger.warning(f"No nodes to query for cluster {cluster}, skipping")
                    continue

                topology = resolver.resolve(node_ids)

                if collection.collect_cluster_metrics:
                    summary.metrics_emitted += await cluster_collector.collect(
                        cluster, node_ids, topology, timestamp
                    )

                if collection.collect_keyspace_metrics:
                    summary.metrics_emitted += await keyspace_collector.collect(
                        cluster, node_ids, topology, timestamp
                    )
                    summary.column_families += len(keyspace_collector.column_families)

                summary.clusters.append(cluster)

        self.emitter.flush()

        self.logger.info(
            f"Collection complete: {summary.metrics_emitted} metric(s) from "
            f"{len(summary.clusters)} cluster(s) in {time.time() - start_time:.1f}s"
        )
        return summary
