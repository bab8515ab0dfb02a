"""
Configuration management for subnet.

Loads runtime limits from environment variables or a .env file.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import os
from pathlib import Path
from dataclasses import dataclass

from dotenv import load_dotenv


# Check common locations for .env
ENV_LOCATIONS = [
    Path.home() / ".subnet" / ".env",
    Path.home() / ".config" / "subnet" / ".env",
    Path.cwd() / ".env",
]

DEFAULT_MAX_EXPAND = 1 << 20
DEFAULT_LOG_LEVEL = "WARNING"


def load_env_file() -> Path | None:
    """Load the first .env file found, returning its path."""
    for env_path in ENV_LOCATIONS:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


@dataclass
class SubnetConfig:
    """Runtime limits and defaults."""

    # Largest number of values subnet(), hosts() or to() may materialize
    max_expand: int = DEFAULT_MAX_EXPAND

    # Level used when the CLI sets up logging
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "SubnetConfig":
        """Load configuration from environment variables."""
        load_env_file()
        return cls(
            max_expand=int(os.getenv("SUBNET_MAX_EXPAND", DEFAULT_MAX_EXPAND)),
            log_level=os.getenv("SUBNET_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )


# Global config instance
_config: SubnetConfig | None = None


def get_config() -> SubnetConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = SubnetConfig.from_env()
    return _config


def set_config(config: SubnetConfig | None) -> None:
    """Set the global configuration instance (None reloads from env on next use)."""
    global _config
    _config = config
