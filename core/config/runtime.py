"""
Runtime Configuration

Central configuration for whitelist generation and the HTTP service.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "BALLOTPROOF_"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class WhitelistConfig:
    """Configuration for whitelist generation."""
    enforce_checksum: bool = True
    address_column: Optional[str] = None  # header name or index; None = first column
    has_header: bool = True
    self_check: bool = True


@dataclass
class ApiConfig:
    """Configuration for the HTTP service."""
    host: str = "127.0.0.1"
    port: int = 8000
    registry_owner: Optional[str] = None  # address allowed to pause/unpause


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (BALLOTPROOF_* and .env)
    - A JSON-compatible dictionary (ballotproof.json)
    - Programmatic construction
    """
    whitelist: WhitelistConfig = field(default_factory=WhitelistConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - BALLOTPROOF_ENFORCE_CHECKSUM: Reject bad mixed-case checksums (true/false)
        - BALLOTPROOF_ADDRESS_COLUMN: CSV column holding addresses
        - BALLOTPROOF_SELF_CHECK: Verify every proof after generation (true/false)
        - BALLOTPROOF_API_HOST / BALLOTPROOF_API_PORT: HTTP bind address
        - BALLOTPROOF_REGISTRY_OWNER: Owner address of the ballot registry
        - BALLOTPROOF_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}ENFORCE_CHECKSUM"):
            overrides.setdefault("whitelist", {})["enforce_checksum"] = _env_bool(
                f"{ENV_PREFIX}ENFORCE_CHECKSUM", "true"
            )
        if os.getenv(f"{ENV_PREFIX}ADDRESS_COLUMN"):
            overrides.setdefault("whitelist", {})["address_column"] = os.getenv(
                f"{ENV_PREFIX}ADDRESS_COLUMN"
            )
        if os.getenv(f"{ENV_PREFIX}SELF_CHECK"):
            overrides.setdefault("whitelist", {})["self_check"] = _env_bool(
                f"{ENV_PREFIX}SELF_CHECK", "true"
            )

        if os.getenv(f"{ENV_PREFIX}API_HOST"):
            overrides.setdefault("api", {})["host"] = os.getenv(f"{ENV_PREFIX}API_HOST")
        if os.getenv(f"{ENV_PREFIX}API_PORT"):
            overrides.setdefault("api", {})["port"] = int(os.getenv(f"{ENV_PREFIX}API_PORT", "8000"))
        if os.getenv(f"{ENV_PREFIX}REGISTRY_OWNER"):
            overrides.setdefault("api", {})["registry_owner"] = os.getenv(
                f"{ENV_PREFIX}REGISTRY_OWNER"
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        whitelist_data = data.get("whitelist", {})
        api_data = data.get("api", {})

        whitelist = WhitelistConfig(**whitelist_data) if whitelist_data else WhitelistConfig()
        api = ApiConfig(**api_data) if api_data else ApiConfig()

        return cls(
            whitelist=whitelist,
            api=api,
            log_level=data.get("log_level", "INFO"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        Lets a config file load first, then env vars overlay it.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("whitelist", {}).items():
            setattr(new_config.whitelist, key, value)
        for key, value in overrides.get("api", {}).items():
            setattr(new_config.api, key, value)
        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        return {
            "whitelist": {
                "enforce_checksum": self.whitelist.enforce_checksum,
                "address_column": self.whitelist.address_column,
                "has_header": self.whitelist.has_header,
                "self_check": self.whitelist.self_check,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
                "registry_owner": self.api.registry_owner,
            },
            "log_level": self.log_level,
            "extra": dict(self.extra),
        }
