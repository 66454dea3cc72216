#!/usr/bin/env python3
"""
Configuration Management for tezsync

Handles environment-based configuration with defaults and validation.
Supports development, test and production environments.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class IndexerConfig:
    """TzKT indexer API configuration."""

    base_url: str = "https://api.tzkt.io"
    timeout: int = 30
    page_size: int = 100  # Operations per request, TzKT caps this at 1000


@dataclass
class Config:
    """
    Main configuration class for tezsync.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    snapshot_dir: Path

    indexer: IndexerConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("TEZSYNC_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_tezsync"
            data_dir = Path(os.getenv("TEZSYNC_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("TEZSYNC_DATA_DIR", "./data")).expanduser().resolve()

        snapshot_dir = data_dir / "accounts"

        # Ensure directories exist
        for directory in [data_dir, snapshot_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        indexer = IndexerConfig(
            base_url=os.getenv("TZKT_API_URL", "https://api.tzkt.io").rstrip("/"),
            timeout=int(os.getenv("TZKT_TIMEOUT", "30")),
            page_size=int(os.getenv("TZKT_PAGE_SIZE", "100")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            snapshot_dir=snapshot_dir,
            indexer=indexer,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [
            ("data_dir", self.data_dir),
            ("snapshot_dir", self.snapshot_dir),
        ]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if not self.indexer.base_url.startswith(("http://", "https://")):
            errors.append(f"TZKT_API_URL must be an http(s) URL: {self.indexer.base_url}")
        if self.environment == Environment.PRODUCTION and not self.indexer.base_url.startswith("https://"):
            errors.append("TZKT_API_URL must use https in production")

        if self.indexer.timeout <= 0:
            errors.append("TzKT timeout must be positive")
        if not 1 <= self.indexer.page_size <= 1000:
            errors.append("TzKT page size must be 1-1000")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from external libraries in production
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("aiohttp").setLevel(logging.WARNING)
            logging.getLogger("asyncio").setLevel(logging.WARNING)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if isinstance(field_value, IndexerConfig):
                result[field_name] = dict(field_value.__dict__)
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
