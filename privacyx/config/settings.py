"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ChainMode(str, Enum):
    """Chain transport mode."""

    MOCK = "mock"
    RPC = "rpc"


class ChainSettings(BaseSettings):
    """Chain and pass contract configuration."""

    model_config = SettingsConfigDict(env_prefix="PRIVACYX_")

    mode: ChainMode = ChainMode.RPC
    chain_id: int | None = None
    rpc_url: str = ""

    # Pass contracts
    balance_pass_address: str = ""
    identity_pass_address: str = ""
    reputation_pass_address: str = ""

    receipt_timeout_seconds: float = Field(default=120.0, gt=0)
    event_poll_interval_seconds: float = Field(default=2.0, gt=0)

    @property
    def has_rpc(self) -> bool:
        """Check if an RPC endpoint is configured."""
        return bool(self.rpc_url.strip())


class Settings(BaseSettings):
    """
    Main SDK settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    log_level: LogLevel = LogLevel.INFO
    json_logs: bool = False

    # Chain configuration
    chain: ChainSettings = Field(default_factory=ChainSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: SDK settings singleton.
    """
    return Settings()
