"""
Runtime Configuration Module

Provides configuration loading and management.
"""

from .runtime import ApiConfig, RuntimeConfig, WhitelistConfig

__all__ = [
    "ApiConfig",
    "RuntimeConfig",
    "WhitelistConfig",
]
