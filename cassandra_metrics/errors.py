"""Exception hierarchy for the OpsCenter metrics collector."""


class CassandraMetricsError(Exception):
    """Base class for all collector failures."""
    pass


class ConfigError(CassandraMetricsError):
    """Configuration is missing or invalid; raised before any network call."""
    pass


class AuthenticationError(CassandraMetricsError):
    """OpsCenter login did not return a session id."""
    pass


class MetricsApiError(CassandraMetricsError):
    """OpsCenter request failed or returned an unusable body."""
    pass


class CollectionError(CassandraMetricsError):
    """One or more column family fetches failed at the join barrier."""

    def __init__(self, message: str, column_family: str = None):
        super().__init__(message)
        self.column_family = column_family
