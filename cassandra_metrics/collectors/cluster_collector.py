"""Cluster-wide (non-keyspace) metrics collector."""

from typing import List

from ..utils.metrics import TopologyInfo
from .base import BaseCollector
from .flattener import flatten
from .record_reader import extract_data, read_node_metrics


class ClusterCollector(BaseCollector):
    """JVM, OS and thread pool metrics, fetched in a single request."""

    async def collect(
        self,
        cluster: str,
        node_ids: List[str],
        topology: TopologyInfo,
        timestamp: int
    ) -> int:
        collection = self.config.collection

        body = await self.api.fetch_metrics(
            cluster,
            node_ids,
            collection.metrics,
            collection.aggregation,
            None,
            timestamp
        )

        metrics = read_node_metrics(extract_data(body))
        emitted = self._emit(flatten(metrics), cluster, topology, timestamp)

        self.logger.info(f"Emitted {emitted} cluster-wide metric(s) for {cluster}")
        return emitted
