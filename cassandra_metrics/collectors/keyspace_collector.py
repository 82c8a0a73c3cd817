"""Per column family metrics collector with concurrent fan-out."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Sequence

from ..errors import CollectionError
from ..utils.metrics import TopologyInfo
from .base import BaseCollector
from .flattener import flatten
from .record_reader import extract_data, read_column_family_metrics


async def fan_out(
    keys: Sequence[str],
    fetch: Callable[[str], Awaitable[Any]],
    logger: logging.Logger = None
) -> List[Any]:
    """
    Run ``fetch(key)`` for every key concurrently and join the results.

    All fetches are scheduled before any is awaited. The call returns
    only after every fetch has finished, with results in the order of
    ``keys`` regardless of completion order.

    Args:
        keys: Entities to fetch, in emission order
        fetch: Coroutine function fetching one entity
        logger: Optional logger for per-entity failures

    Returns:
        List[Any]: ``results[i]`` is the result for ``keys[i]``

    Raises:
        CollectionError: If any fetch failed; names the first failing key
            in submission order
    """
    logger = logger or logging.getLogger(__name__)

    results = await asyncio.gather(*(fetch(key) for key in keys), return_exceptions=True)

    failures = [
        (key, result)
        for key, result in zip(keys, results)
        if isinstance(result, BaseException)
    ]
    for key, error in failures:
        logger.error(f"Fetch failed for {key}: {error}")

    if failures:
        key, error = failures[0]
        raise CollectionError(
            f"{len(failures)} of {len(keys)} fetch(es) failed, first: {key}: {error}",
            column_family=key
        ) from error

    return list(results)


class KeyspaceCollector(BaseCollector):
    """Column family metrics, one concurrent request per column family."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Column families enumerated by the last collect() call
        self.column_families: List[str] = []

    async def collect(
        self,
        cluster: str,
        node_ids: List[str],
        topology: TopologyInfo,
        timestamp: int
    ) -> int:
        collection = self.config.collection

        column_families = await self.api.list_column_families(
            cluster,
            collection.keyspace,
            collection.ignore_keyspaces
        )
        self.logger.info(f"Fetching metrics for {len(column_families)} column family(ies) in {cluster}")
        self.column_families = column_families

        async def fetch(column_family: str):
            return await self.api.fetch_metrics(
                cluster,
                node_ids,
                collection.keyspace_metrics,
                collection.aggregation,
                column_family,
                timestamp
            )

        bodies = await fan_out(column_families, fetch, self.logger)

        # Parse everything before emitting so a malformed body emits nothing
        flattened = [
            flatten(read_column_family_metrics(extract_data(body), column_family))
            for column_family, body in zip(column_families, bodies)
        ]

        emitted = 0
        for flat in flattened:
            emitted += self._emit(flat, cluster, topology, timestamp)

        self.logger.info(f"Emitted {emitted} keyspace metric(s) for {cluster}")
        return emitted
