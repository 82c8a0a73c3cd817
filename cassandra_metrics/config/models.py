"""Pydantic configuration models for the OpsCenter metrics collector."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Union

from .defaults import METRICS_LIST, KEYSPACE_METRICS, IGNORE_KEYSPACES


def _split_csv(v):
    """Accept "a,b,c" as well as a YAML list."""
    if isinstance(v, str) and v != "all":
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class OpsCenterConfig(BaseModel):
    """Connection settings for the OpsCenter REST API."""
    host: str
    rest_port: int = Field(default=8888, ge=1, le=65535)
    use_ssl: bool = False
    user: str
    password: str
    timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator('host')
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Reject an empty host (e.g. an unset ${OPSCENTER_HOST})."""
        if not v.strip():
            raise ValueError('An opscenter host is required')
        return v.strip()

    @field_validator('user', 'password')
    @classmethod
    def validate_credentials(cls, v: str) -> str:
        if not v:
            raise ValueError('An opscenter user and password are required')
        return v

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.host}:{self.rest_port}"


class CollectionConfig(BaseModel):
    """What to collect: clusters, nodes, keyspaces and metric names."""
    clusters: Union[Literal["all"], List[str]] = "all"
    limit: Literal["all", "keyspace", "non-keyspace"] = "all"
    keyspace: str = "all"
    nodes: Union[Literal["all"], List[str]] = "all"
    metrics: List[str] = Field(default_factory=lambda: list(METRICS_LIST))
    keyspace_metrics: List[str] = Field(default_factory=lambda: list(KEYSPACE_METRICS))
    aggregation: Literal["0", "1"] = "0"
    lag_seconds: int = Field(default=300, ge=0)
    ignore_keyspaces: List[str] = Field(default_factory=lambda: list(IGNORE_KEYSPACES))

    @field_validator('clusters', 'nodes', 'metrics', 'keyspace_metrics', 'ignore_keyspaces', mode='before')
    @classmethod
    def split_comma_separated(cls, v):
        return _split_csv(v)

    @field_validator('aggregation', mode='before')
    @classmethod
    def coerce_aggregation(cls, v):
        """YAML reads 0/1 as integers."""
        if isinstance(v, bool):
            return "1" if v else "0"
        if isinstance(v, int):
            return str(v)
        return v

    @property
    def collect_cluster_metrics(self) -> bool:
        return self.limit != "keyspace"

    @property
    def collect_keyspace_metrics(self) -> bool:
        return self.limit != "non-keyspace"


class NamingConfig(BaseModel):
    """Graphite naming scheme configuration."""
    scheme: str = "cassandra"
    host_format: bool = False  # node1.example.com -> node1_example_com
    bucket_format: bool = False  # same rewrite for the cluster segment
    include_cluster: bool = False
    include_datacenter: bool = False
    missing_host_policy: Literal["node_id", "skip"] = "node_id"

    @field_validator('scheme')
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        v = v.strip().strip('.')
        if not v:
            raise ValueError('Naming scheme must not be empty')
        return v


class MonitoringConfig(BaseModel):
    """Collection schedule configuration."""
    schedule: str = "*/5 * * * *"  # Cron syntax

    @field_validator('schedule')
    @classmethod
    def validate_cron(cls, v: str) -> str:
        """Basic cron syntax validation."""
        parts = v.split()
        if len(parts) != 5:
            raise ValueError('Cron expression must have 5 parts: minute hour day month weekday')
        return v


class CassandraMetricsConfig(BaseModel):
    """Root configuration model for the collector."""
    opscenter: OpsCenterConfig
    collection: CollectionConfig = Field(default_factory=CollectionConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
