"""
Module 07 - CLI Configuration

Configuration management for the BallotProof CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path


# Environment variable prefix
ENV_PREFIX = "BALLOTPROOF_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Whitelist generation
    enforce_checksum: bool = True
    self_check: bool = True
    address_column: str | None = None
    has_header: bool = True

    # Output
    out_dir: str = "."

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    config = CLIConfig()

    if os.getenv(f"{ENV_PREFIX}ENFORCE_CHECKSUM"):
        config.enforce_checksum = os.getenv(f"{ENV_PREFIX}ENFORCE_CHECKSUM", "true").lower() == "true"
    if os.getenv(f"{ENV_PREFIX}SELF_CHECK"):
        config.self_check = os.getenv(f"{ENV_PREFIX}SELF_CHECK", "true").lower() == "true"
    if os.getenv(f"{ENV_PREFIX}ADDRESS_COLUMN"):
        config.address_column = os.getenv(f"{ENV_PREFIX}ADDRESS_COLUMN")
    if os.getenv(f"{ENV_PREFIX}OUT_DIR"):
        config.out_dir = os.getenv(f"{ENV_PREFIX}OUT_DIR", ".")

    config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()

    whitelist = data.get("whitelist", {})
    config.enforce_checksum = whitelist.get("enforce_checksum", config.enforce_checksum)
    config.self_check = whitelist.get("self_check", config.self_check)
    config.address_column = whitelist.get("address_column", config.address_column)
    config.has_header = whitelist.get("has_header", config.has_header)

    config.out_dir = data.get("out_dir", config.out_dir)

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path and config_path.exists():
        config = load_config_from_file(config_path)

    default_paths = [
        Path.cwd() / "ballotproof.json",
        Path.cwd() / ".ballotproof.json",
        Path.home() / ".config" / "ballotproof" / "config.json",
    ]

    if config_path is None:
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    env_config = load_config_from_env()

    # env takes precedence
    if os.getenv(f"{ENV_PREFIX}ENFORCE_CHECKSUM"):
        config.enforce_checksum = env_config.enforce_checksum
    if os.getenv(f"{ENV_PREFIX}SELF_CHECK"):
        config.self_check = env_config.self_check
    if os.getenv(f"{ENV_PREFIX}ADDRESS_COLUMN"):
        config.address_column = env_config.address_column
    if os.getenv(f"{ENV_PREFIX}OUT_DIR"):
        config.out_dir = env_config.out_dir
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = env_config.log_level
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = env_config.log_file

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "whitelist": {
    "enforce_checksum": true,
    "self_check": true,
    "address_column": null,
    "has_header": true
  },
  "out_dir": ".",
  "log_level": "INFO",
  "log_file": null
}
"""
