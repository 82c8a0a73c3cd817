"""Resolve node identifiers to datacenter and hostname."""

import logging
from typing import Dict, Iterable, List, Union

from ..utils.metrics import NodeInfo, TopologyInfo


class TopologyResolver:
    """
    Lookups over one cluster's OpsCenter node listing.

    Built once per cluster per run from ``GET /{cluster}/nodes`` and
    shared read-only by the collectors.
    """

    def __init__(self, node_info: List[dict], logger: logging.Logger = None):
        """
        Args:
            node_info: ``[{"node_ip": ..., "hostname": ..., "dc": ...}, ...]``
            logger: Optional logger instance
        """
        self.node_info = [node for node in node_info if node.get("node_ip")]
        self.logger = logger or logging.getLogger(__name__)

    def node_ids(self) -> List[str]:
        """All node identifiers known to OpsCenter, in listing order."""
        return [node["node_ip"] for node in self.node_info]

    def select_nodes(self, requested: Union[str, List[str]]) -> List[str]:
        """
        Node identifiers to query.

        Args:
            requested: "all" or an explicit list of node ids

        Returns:
            List[str]: Every listed node for "all", otherwise the given list
        """
        if requested == "all":
            return self.node_ids()
        return list(requested)

    def _project(self, node_ids: Iterable[str], field: str) -> Dict[str, str]:
        wanted = set(node_ids)
        return {
            node["node_ip"]: node.get(field)
            for node in self.node_info
            if node["node_ip"] in wanted
        }

    def resolve_datacenters(self, node_ids: Iterable[str]) -> Dict[str, str]:
        """Map each requested node id found in the listing to its datacenter."""
        return self._project(node_ids, "dc")

    def resolve_hostnames(self, node_ids: Iterable[str]) -> Dict[str, str]:
        """Map each requested node id found in the listing to its hostname."""
        return self._project(node_ids, "hostname")

    def resolve(self, node_ids: Iterable[str]) -> TopologyInfo:
        """
        Build TopologyInfo for the requested nodes.

        Nodes missing from the listing get no entry.
        """
        node_ids = list(node_ids)
        datacenters = self.resolve_datacenters(node_ids)
        hostnames = self.resolve_hostnames(node_ids)

        topology: TopologyInfo = {
            node_id: NodeInfo(
                node_id=node_id,
                datacenter=datacenters.get(node_id),
                hostname=hostnames.get(node_id),
            )
            for node_id in node_ids
            if node_id in hostnames
        }

        missing = [node_id for node_id in node_ids if node_id not in topology]
        if missing:
            self.logger.warning(f"Nodes not found in OpsCenter node listing: {', '.join(missing)}")

        return topology
