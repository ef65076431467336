"""
PrivacyX Facade
===============

Builds the chain provider and the pass clients from a single config.

Usage:
    px = PrivacyX(
        chain_id=1,
        provider="https://mainnet.example/rpc",
        balance_pass_address="0x8333b589ad3a8a5fce735631e8edf693c6ae0472",
    )
    root = await px.balance_pass.get_root()

Version: 0.1.0
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from privacyx.blockchain.client import ChainClient, build_chain_client, get_chain_client
from privacyx.blockchain.providers import resolve_provider
from privacyx.config import Settings, get_settings
from privacyx.errors import ConfigError
from privacyx.logging import get_logger
from privacyx.passes import BalancePass, IdentityPass, ReputationPass

logger = get_logger(__name__)


class PassConfig(BaseModel):
    """Configuration of a PrivacyX client."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    chain_id: int | None = None
    provider: Any = None
    injected: Any = None

    balance_pass_address: str | None = None
    identity_pass_address: str | None = None
    reputation_pass_address: str | None = None

    receipt_timeout_seconds: float | None = None
    event_poll_interval_seconds: float | None = None


class PrivacyX:
    """
    Entry point of the SDK.

    Attributes:
        chain_id: Configured chain id
        provider: Resolved ChainClient shared by every pass
        balance_pass: BalancePass client
        identity_pass: IdentityPass client
        reputation_pass: ReputationPass placeholder
    """

    def __init__(self, config: PassConfig | None = None, **overrides: Any) -> None:
        if config is None:
            config = PassConfig(**overrides)
        elif overrides:
            config = config.model_copy(update=overrides)

        if not config.chain_id:
            raise ConfigError("Missing chain_id in PrivacyX config")

        self.config = config
        self.chain_id = config.chain_id
        self.provider: ChainClient = resolve_provider(
            config.provider,
            injected=config.injected,
            poll_interval=config.event_poll_interval_seconds,
        )

        pass_kwargs: dict[str, Any] = {"receipt_timeout": config.receipt_timeout_seconds}

        self.balance_pass = BalancePass(
            self.chain_id, self.provider, config.balance_pass_address, **pass_kwargs
        )
        self.identity_pass = IdentityPass(
            self.chain_id, self.provider, config.identity_pass_address, **pass_kwargs
        )
        self.reputation_pass = ReputationPass(
            self.chain_id, self.provider, config.reputation_pass_address
        )

        logger.info(
            "privacyx_initialized",
            chain_id=self.chain_id,
            mode=self.provider.mode.value,
            balance_pass=config.balance_pass_address,
            identity_pass=config.identity_pass_address,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PrivacyX":
        """
        Build a client from environment settings (`PRIVACYX_*`).

        Without explicit settings the provider is the process-wide chain
        client; otherwise one is built from `settings.chain`.
        """
        if settings is None:
            chain, provider = get_settings().chain, get_chain_client()
        else:
            chain = settings.chain
            provider = build_chain_client(chain)
        return cls(
            PassConfig(
                chain_id=chain.chain_id,
                provider=provider,
                balance_pass_address=chain.balance_pass_address or None,
                identity_pass_address=chain.identity_pass_address or None,
                reputation_pass_address=chain.reputation_pass_address or None,
                receipt_timeout_seconds=chain.receipt_timeout_seconds,
            )
        )

    async def close(self) -> None:
        """Stop every subscription and disconnect the provider."""
        self.balance_pass.remove_all_listeners()
        self.identity_pass.remove_all_listeners()
        await self.provider.disconnect()

    async def __aenter__(self) -> "PrivacyX":
        await self.provider.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


def create_privacyx(config: PassConfig | None = None, **overrides: Any) -> PrivacyX:
    """Functional alias of `PrivacyX(...)`."""
    return PrivacyX(config, **overrides)
