"""Flatten nested JSON metric payloads into path -> scalar mappings."""

from typing import Any, Optional

from ..utils.metrics import FlatMetrics, MetricPath


def flatten(value: Any, prefix: MetricPath = (), result: Optional[FlatMetrics] = None) -> FlatMetrics:
    """
    Flatten a JSON-like value into a mapping of paths to scalar leaves.

    Objects contribute their keys as path segments, arrays their integer
    indices. ``None`` leaves are dropped rather than reported as zero.

    Example:
        >>> flatten({"10.0.0.1": {"heap-used": 5, "gc": [1, None]}})
        {('10.0.0.1', 'heap-used'): 5, ('10.0.0.1', 'gc', 0): 1}

    Args:
        value: Nested dict/list/scalar structure (parsed JSON)
        prefix: Path of ``value`` within the root structure
        result: Mapping to fill; a new one is created when omitted

    Returns:
        FlatMetrics: One entry per non-null leaf, keyed by its full path
    """
    if result is None:
        result = {}

    if isinstance(value, dict):
        for key, child in value.items():
            flatten(child, prefix + (key,), result)
    elif isinstance(value, (list, tuple)):
        for index, child in enumerate(value):
            flatten(child, prefix + (index,), result)
    elif value is not None:
        result[prefix] = value

    return result
