"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from privacyx.config import settings

    print(settings.environment)
    print(settings.chain.rpc_url)
"""

from privacyx.config.settings import (
    ChainMode,
    ChainSettings,
    Environment,
    LogLevel,
    Settings,
    get_settings,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "ChainSettings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
    "ChainMode",
]
