"""Graphite metric name construction."""

from typing import Optional

from ..utils.metrics import MetricPath


def underscore(segment: str) -> str:
    """node1.example.com -> node1_example_com"""
    return segment.replace('.', '_')


def dotted(*segments) -> str:
    return '.'.join(str(segment) for segment in segments)


def scheme_prefix(scheme: str, cluster: Optional[str] = None, bucket_format: bool = False) -> str:
    """
    Naming scheme prefix, optionally followed by the cluster name.

    Args:
        scheme: Configured naming scheme (e.g. "cassandra")
        cluster: Cluster name to append, or None to leave the scheme alone
        bucket_format: Replace dots in the cluster name with underscores
    """
    if cluster is None:
        return scheme
    if bucket_format:
        cluster = underscore(cluster)
    return dotted(scheme, cluster)


def compose_name(
    scheme: str,
    hostname: str,
    path: MetricPath,
    host_format: bool = False,
    datacenter: Optional[str] = None
) -> str:
    """
    Build the dotted metric name for one flattened leaf.

    The first path segment is the node identifier that was used to look
    up ``hostname``, so it is dropped. Segments are joined as-is: a key
    that itself contains a dot (e.g. "ks.cf") reads as two segments.

    Example:
        >>> compose_name("cassandra", "node1.example.com", ("10.0.0.1", "heap-used"), True)
        'cassandra.node1_example_com.heap-used'

    Args:
        scheme: Naming scheme prefix
        hostname: Resolved hostname for path[0]
        path: Flattened path, node id first
        host_format: Replace dots in the hostname and datacenter with underscores
        datacenter: Optional datacenter segment placed before the hostname

    Returns:
        str: Dotted metric name
    """
    if host_format:
        hostname = underscore(hostname)
        if datacenter:
            datacenter = underscore(datacenter)

    segments = [scheme]
    if datacenter:
        segments.append(datacenter)
    segments.append(hostname)
    segments.extend(path[1:])

    return dotted(*segments)
