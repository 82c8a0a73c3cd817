"""Environment settings."""

import os
from typing import Optional


DEFAULT_CONFIG_PATH = "config/config.yaml"


class Settings:
    """Application settings from environment variables."""

    @staticmethod
    def get(key: str, default: Optional[str] = None) -> str:
        """
        Get environment variable value.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            str: Environment variable value, "" if unset and no default
        """
        return os.getenv(key, default) or ""

    @staticmethod
    def log_level() -> str:
        return Settings.get("LOG_LEVEL", "INFO").upper()

    @staticmethod
    def config_path() -> str:
        return Settings.get("CASSANDRA_METRICS_CONFIG", DEFAULT_CONFIG_PATH)
