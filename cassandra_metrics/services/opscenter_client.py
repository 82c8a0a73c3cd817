"""Async client for the DataStax OpsCenter REST API."""

import logging
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

import httpx

from ..config.models import OpsCenterConfig
from ..errors import AuthenticationError, MetricsApiError

SESSION_HEADER = "opscenter-session"
METRICS_STEP_SECONDS = "60"


class OpsCenterClient:
    """
    OpsCenter REST client.

    Use as an async context manager; ``login`` must succeed before any
    other call. One underlying httpx.AsyncClient is shared by all
    requests, including concurrent column family fetches.
    """

    def __init__(
        self,
        config: OpsCenterConfig,
        logger: logging.Logger = None,
        transport: httpx.AsyncBaseTransport = None
    ):
        """
        Initialize OpsCenter client.

        Args:
            config: OpsCenter connection configuration
            logger: Optional logger instance
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.config = config
        self.logger = (logger or logging.getLogger(__name__)).getChild(self.__class__.__name__)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self.session_id: Optional[str] = None

    async def __aenter__(self) -> "OpsCenterClient":
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            transport=self._transport
        )
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("OpsCenterClient used outside of 'async with'")
        return self._client

    async def login(self) -> str:
        """
        Open an API session.

        Returns:
            str: Session id sent with every later request

        Raises:
            AuthenticationError: If OpsCenter returns no session id
            MetricsApiError: On transport errors
        """
        try:
            response = await self.client.post(
                "/login",
                data={"username": self.config.user, "password": self.config.password}
            )
        except httpx.RequestError as e:
            raise MetricsApiError(f"Login request to {self.config.base_url} failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        session_id = body.get("sessionid") if isinstance(body, dict) else None
        if not session_id:
            raise AuthenticationError("Incorrect user or password")

        self.session_id = session_id
        self.logger.info(f"Logged in to OpsCenter at {self.config.base_url}")
        return session_id

    async def _get_json(self, path: str, params: Dict[str, Any] = None) -> Any:
        """
        GET a path with the session header and decode the JSON body.

        Raises:
            MetricsApiError: On transport error, non-2xx status or invalid JSON
        """
        headers = {SESSION_HEADER: self.session_id} if self.session_id else {}
        try:
            response = await self.client.get(path, params=params, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise MetricsApiError(
                f"GET {path} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise MetricsApiError(f"GET {path} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MetricsApiError(f"GET {path} returned invalid JSON: {e}") from e

    async def list_clusters(self) -> List[str]:
        """Names of all clusters managed by this OpsCenter."""
        cluster_configs = await self._get_json("/cluster-configs")
        if not isinstance(cluster_configs, dict):
            raise MetricsApiError("cluster-configs response is not a mapping")
        return list(cluster_configs.keys())

    async def list_nodes(self, cluster: str) -> List[dict]:
        """Node listing for a cluster: ``[{node_ip, hostname, dc, ...}]``."""
        nodes = await self._get_json(f"/{quote(cluster, safe='')}/nodes")
        if not isinstance(nodes, list):
            raise MetricsApiError(f"nodes response for {cluster} is not a list")
        return nodes

    async def list_column_families(
        self,
        cluster: str,
        keyspace: str = "all",
        ignore_keyspaces: Iterable[str] = ()
    ) -> List[str]:
        """
        Enumerate ``keyspace.columnfamily`` identifiers.

        Args:
            cluster: Cluster name
            keyspace: "all" for every non-ignored keyspace, or one keyspace name
            ignore_keyspaces: Keyspaces skipped when keyspace is "all"

        Returns:
            List[str]: Column family ids in OpsCenter's listing order

        Raises:
            MetricsApiError: If a named keyspace does not exist
        """
        keyspace_info = await self._get_json(f"/{quote(cluster, safe='')}/keyspaces")
        if not isinstance(keyspace_info, dict):
            raise MetricsApiError(f"keyspaces response for {cluster} is not a mapping")

        if keyspace == "all":
            ignored = set(ignore_keyspaces)
            selected = [name for name in keyspace_info if name not in ignored]
        elif keyspace in keyspace_info:
            selected = [keyspace]
        else:
            raise MetricsApiError(f"Keyspace '{keyspace}' not found in cluster {cluster}")

        column_families = []
        for name in selected:
            for cf in (keyspace_info[name] or {}).get("column_families") or {}:
                column_families.append(f"{name}.{cf}")
        return column_families

    async def fetch_metrics(
        self,
        cluster: str,
        node_ids: Iterable[str],
        metric_names: Iterable[str],
        aggregate: str,
        column_family: Optional[str],
        timestamp: int
    ) -> Any:
        """
        Fetch one window of metrics from ``/{cluster}/new-metrics``.

        Args:
            cluster: Cluster name
            node_ids: Nodes to query
            metric_names: OpsCenter metric names
            aggregate: "1" to aggregate across nodes, "0" otherwise
            column_family: ``keyspace.columnfamily`` or None for cluster-wide metrics
            timestamp: Window start and end (epoch seconds)

        Returns:
            Decoded JSON body
        """
        params = {
            "nodes": ",".join(node_ids),
            "node_aggregation": aggregate,
            "metrics": ",".join(metric_names),
            "step": METRICS_STEP_SECONDS,
            "start": str(timestamp),
            "end": str(timestamp),
        }
        if column_family is not None:
            params["columnfamilies"] = column_family

        self.logger.debug(f"Fetching metrics for {cluster} ({column_family or 'cluster-wide'})")
        return await self._get_json(f"/{quote(cluster, safe='')}/new-metrics", params=params)
