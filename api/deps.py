"""
Module 08 - API Dependencies

Dependency injection for the API.
Provides the runtime configuration and the process-wide ballot registry.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from core.ballots import BallotRegistry
from core.config.runtime import RuntimeConfig

logger = logging.getLogger(__name__)


_registry: BallotRegistry | None = None
_registry_lock = threading.Lock()


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./ballotproof.json
      2. ./.ballotproof.json
      3. ~/.config/ballotproof/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "ballotproof.json",
        Path.cwd() / ".ballotproof.json",
        Path.home() / ".config" / "ballotproof" / "config.json",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                logger.info(f"Loaded config from {path}")
                config = RuntimeConfig.from_dict(data)
                break
            except Exception as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_runtime_config() -> RuntimeConfig:
    return _load_runtime_config()


def get_registry() -> BallotRegistry:
    """
    Return the registry shared by every request.

    Created on first use; the owner (allowed to pause/unpause) comes from
    api.registry_owner or BALLOTPROOF_REGISTRY_OWNER.
    """
    global _registry
    with _registry_lock:
        if _registry is None:
            config = _load_runtime_config()
            _registry = BallotRegistry(owner=config.api.registry_owner)
            logger.info(
                f"Created ballot registry (owner={_registry.owner or 'none'})"
            )
        return _registry


def set_registry(registry: BallotRegistry | None) -> None:
    """Replace the shared registry (None resets it to lazy creation)."""
    global _registry
    with _registry_lock:
        _registry = registry
