"""Main application entry point for the Cassandra OpsCenter metrics collector."""

import argparse
import asyncio
import signal
import sys
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from .config.loader import ConfigLoader
from .config.models import CassandraMetricsConfig
from .config.settings import Settings
from .errors import CassandraMetricsError, ConfigError
from .services.graphite_emitter import GraphiteEmitter
from .utils.logger import setup_logger
from .utils.status import CheckStatus
from .workflow import CollectionWorkflow


class MetricsApp:
    """
    Collector application.

    Runs collection cycles once or on a cron schedule and maps their
    outcome to a check status.
    """

    def __init__(
        self,
        config_path: str = None,
        log_level: str = "INFO",
        emitter: GraphiteEmitter = None
    ):
        """
        Initialize collector application.

        Args:
            config_path: Path to configuration file
            log_level: Log level name
            emitter: Metric sink (stdout by default)

        Raises:
            FileNotFoundError: If the configuration file is missing
            ConfigError: If the configuration is invalid
        """
        self.config_path = config_path or Settings.config_path()
        self.logger = setup_logger("cassandra_metrics", log_level)
        self.emitter = emitter or GraphiteEmitter()

        self.config = self._load_config()
        self.workflow = CollectionWorkflow(self.config, self.emitter, self.logger)

    def _load_config(self) -> CassandraMetricsConfig:
        self.logger.info(f"Loading configuration from {self.config_path}")
        config = ConfigLoader.load_from_file(self.config_path)
        self.logger.info("Configuration loaded successfully")
        return config

    async def run_collection_cycle(self) -> CheckStatus:
        """
        Execute one complete collection cycle.

        Returns:
            CheckStatus: OK on success, UNKNOWN if the run was aborted
        """
        try:
            summary = await self.workflow.run()
        except CassandraMetricsError as e:
            self.logger.error(
                f"Collection cycle failed: {e}",
                exc_info=True,
                extra={"error_type": type(e).__name__}
            )
            return CheckStatus.UNKNOWN

        self.logger.info(
            "Collection cycle completed",
            extra={
                "clusters": summary.clusters,
                "metrics_emitted": summary.metrics_emitted,
                "column_families": summary.column_families,
                "metric_timestamp": summary.timestamp
            }
        )
        return CheckStatus.OK

    def _add_collection_job(self, scheduler, trigger):
        """
        Register the collection cycle with the scheduler.

        The first run is scheduled for now rather than awaited directly,
        so max_instances also covers it.
        """
        return scheduler.add_job(
            self.run_collection_cycle,
            trigger=trigger,
            id='collection_cycle',
            name='OpsCenter Metrics Collection',
            max_instances=1,  # Prevent overlapping executions
            coalesce=True,
            misfire_grace_time=60,
            next_run_time=datetime.now()
        )

    async def run_scheduled(self):
        """
        Run collection cycles on the configured cron schedule.

        The first cycle runs immediately. Runs until SIGINT/SIGTERM.
        """
        schedule = self.config.monitoring.schedule
        trigger = CronTrigger.from_crontab(schedule)

        loop = asyncio.get_running_loop()
        scheduler = AsyncIOScheduler(event_loop=loop)
        self._add_collection_job(scheduler, trigger)

        stop = asyncio.Event()
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(signum, stop.set)

        scheduler.start()
        self.logger.info(f"Scheduler started with cron: {schedule}")

        try:
            await stop.wait()
            self.logger.info("Shutdown signal received")
        finally:
            scheduler.shutdown(wait=False)
            self.logger.info("Scheduler stopped")


def main(argv=None):
    """
    CLI entry point.

    Parses command-line arguments and runs the collector.
    """
    parser = argparse.ArgumentParser(
        description='Collect Cassandra metrics from OpsCenter and print them in Graphite format',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Single pass, suitable for a Sensu/cron metric check
  python -m cassandra_metrics.main --run-once

  # Keep running on the schedule from the config file
  python -m cassandra_metrics.main --config /etc/cassandra-metrics/config.yaml
        """
    )

    parser.add_argument(
        '--config',
        default=Settings.config_path(),
        help='Path to configuration file (default: config/config.yaml or CASSANDRA_METRICS_CONFIG)'
    )

    parser.add_argument(
        '--run-once',
        action='store_true',
        help='Run one collection cycle and exit with its check status'
    )

    parser.add_argument(
        '--log-level',
        default=Settings.log_level(),
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO or LOG_LEVEL env var)'
    )

    args = parser.parse_args(argv)

    try:
        app = MetricsApp(config_path=args.config, log_level=args.log_level)
    except (FileNotFoundError, ConfigError) as e:
        setup_logger("cassandra_metrics", args.log_level).error(f"Configuration error: {e}")
        sys.exit(CheckStatus.UNKNOWN.exit_code)

    if args.run_once:
        status = asyncio.run(app.run_collection_cycle())
        sys.exit(status.exit_code)

    asyncio.run(app.run_scheduled())
    sys.exit(CheckStatus.OK.exit_code)


if __name__ == '__main__':
    main()
