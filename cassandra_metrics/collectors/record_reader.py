"""Convert OpsCenter new-metrics envelopes into per-node metric mappings."""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..errors import MetricsApiError
from ..utils.metrics import NodeMetricRecord

# OpsCenter data points are [value, timestamp] pairs
DATA_POINT_VALUE_INDEX = 0


def extract_data(body: Any) -> Dict[str, List[dict]]:
    """
    Return the ``data`` member of a new-metrics response body.

    Raises:
        MetricsApiError: If the body does not carry a ``data`` mapping
    """
    if not isinstance(body, dict) or not isinstance(body.get("data"), dict):
        raise MetricsApiError("new-metrics response has no 'data' mapping")
    return body["data"]


def _records(node: str, records: Any) -> List[dict]:
    if records is None:
        return []
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise MetricsApiError(f"Metric records for node {node} are not a list of objects")
    return records


def _first_values(node: str, records: List[dict]) -> Iterator[Tuple[dict, Any]]:
    """
    Yield (record, value) for each record holding at least one data point.

    Raises:
        MetricsApiError: If a record has no metric name or a malformed series
    """
    for record in records:
        metric = record.get("metric")
        if not isinstance(metric, str) or not metric:
            raise MetricsApiError(f"Metric record for node {node} has no metric name")

        points = record.get("data-points")
        if not points:
            # No data for this series in the window: omit, don't zero
            continue

        try:
            value = points[0][DATA_POINT_VALUE_INDEX]
        except (TypeError, IndexError, KeyError) as e:
            raise MetricsApiError(f"Malformed data points for {metric} on node {node}: {points!r}") from e
        if isinstance(value, (list, dict)):
            raise MetricsApiError(f"Malformed data points for {metric} on node {node}: {points!r}")

        yield record, value


def read_node_metrics(raw: Dict[str, List[dict]]) -> NodeMetricRecord:
    """
    Read cluster-wide metrics.

    Args:
        raw: ``{node_id: [{"metric": ..., "data-points": [[v, ts], ...]}, ...]}``

    Returns:
        NodeMetricRecord: ``{node_id: {metric: value}}``

    Raises:
        MetricsApiError: If a node's records are malformed
    """
    result: NodeMetricRecord = {}
    for node, records in raw.items():
        result[node] = {
            record["metric"]: value
            for record, value in _first_values(node, _records(node, records))
        }
    return result


def read_column_family_metrics(
    raw: Dict[str, List[dict]],
    column_family: Optional[str] = None
) -> NodeMetricRecord:
    """
    Read metrics for a single column family request.

    Each node's metrics are grouped under the record's ``columnfamily``
    identifier (``keyspace.columnfamily``). OpsCenter answers one column
    family per request, so the inner mapping has one key. Records that
    omit ``columnfamily`` fall back to ``column_family``, the id the
    request was made for.

    Args:
        raw: Same shape as for read_node_metrics, records carry ``columnfamily``
        column_family: Requested column family id

    Returns:
        NodeMetricRecord: ``{node_id: {cf_id: {metric: value}}}``, or
        ``{node_id: {}}`` for a node that returned no data points

    Raises:
        MetricsApiError: If records are malformed, or carry data points
            with no column family to file them under
    """
    result: NodeMetricRecord = {}
    for node, records in raw.items():
        grouped: Dict[str, Dict[str, Any]] = {}
        for record, value in _first_values(node, _records(node, records)):
            cf = record.get("columnfamily") or column_family
            if cf is None:
                raise MetricsApiError(
                    f"Metric record {record['metric']} for node {node} has no column family"
                )
            grouped.setdefault(cf, {})[record["metric"]] = value
        result[node] = grouped
    return result
