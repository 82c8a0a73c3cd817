"""Default OpsCenter metric names and ignored keyspaces."""

METRICS_LIST = [
    'cms-collection-count',
    'cms-collection-time',
    'data-load',
    'heap-committed',
    'heap-max',
    'heap-used',
    'key-cache-hits',
    'key-cache-requests',
    'key-cache-hit-rate',
    'nonheap-committed',
    'nonheap-max',
    'nonheap-used',
    'par-new-collection-count',
    'par-new-collection-time',
    'pending-compaction-tasks',
    'pending-flushes',
    'pending-gossip-stage',
    'pending-hinted-handoff',
    'pending-internal-response-stage',
    'pending-memtable-post-flush',
    'pending-migration-stage',
    'pending-misc-stage',
    'pending-read-stage',
    'pending-read-repair-stage',
    'pending-anti-entropy-stage',
    'pending-repl-on-write-tasks',
    'pending-request-response-stage',
    'pending-mutation-stage',
    'read-latency-op',
    'read-ops',
    'row-cache-hits',
    'row-cache-requests',
    'row-cache-hit-rate',
    'total-compactions-completed',
    'total-bytes-compacted',
    'write-latency-op',
    'write-ops',
    # OS metrics
    'os-cpu-idle',
    'os-cpu-iowait',
    'os-cpu-nice',
    'os-cpu-steal',
    'os-cpu-system',
    'os-cpu-user',
    'os-load',
    'os-memory-buffers',
    'os-memory-cached',
    'os-memory-free',
    'os-memory-used',
    'os-net-received',
]

KEYSPACE_METRICS = [
    'cf-keycache-hit-rate',
    'cf-keycache-hits',
    'cf-keycache-requests',
    'cf-live-disk-used',
    'cf-live-sstables',
    'cf-pending-tasks',
    'cf-read-latency-op',
    'cf-read-ops',
    'cf-rowcache-hit-rate',
    'cf-rowcache-hits',
    'cf-rowcache-requests',
    'cf-total-disk-used',
    'cf-write-latency-op',
    'cf-write-ops',
    'cf-bf-space-used',
    'cf-bf-false-positives',
    'cf-bf-false-ratio',
]

IGNORE_KEYSPACES = [
    'OpsCenter',
    'system',
    'system_auth',
    'dse_system',
    'dse_perf',
    'system_traces',
]
