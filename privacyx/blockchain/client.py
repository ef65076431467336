"""
Chain Client Interface
======================

Abstract base class and models for the chain transport used by the
pass clients.

Version: 0.1.0
"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from privacyx.blockchain.signer import Signer
from privacyx.config import ChainMode, ChainSettings, settings
from privacyx.errors import ProviderError
from privacyx.logging import get_logger

logger = get_logger(__name__)


class TxReceipt(BaseModel):
    """Receipt of a mined transaction."""

    tx_hash: str = Field(..., description="Transaction hash")
    block_number: int | None = Field(default=None, description="Block number")
    status: int = Field(default=1, description="1 on success, 0 when reverted")
    gas_used: int | None = None

    raw: dict[str, Any] = Field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == 1


class ChainEvent(BaseModel):
    """A decoded contract event log."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    address: str
    args: dict[str, Any] = Field(default_factory=dict)
    tx_hash: str | None = None
    block_number: int | None = None
    log_index: int | None = None

    raw: Any = None


EventHandler = Callable[[ChainEvent], Awaitable[None] | None]


async def dispatch_event(handler: Callable[[Any], Any], payload: Any) -> None:
    """Call a sync or async handler."""
    result = handler(payload)
    if inspect.isawaitable(result):
        await result


class Subscription:
    """
    Handle for an event subscription.

    `unsubscribe()` may be called any number of times.
    """

    def __init__(self, event_name: str, cancel: Callable[[], None]) -> None:
        self.event_name = event_name
        self._cancel: Callable[[], None] | None = cancel

    @property
    def active(self) -> bool:
        return self._cancel is not None

    def unsubscribe(self) -> None:
        cancel, self._cancel = self._cancel, None
        if cancel is not None:
            cancel()
            logger.debug("event_unsubscribed", event_name=self.event_name)

    def __repr__(self) -> str:
        return f"Subscription(event_name={self.event_name!r}, active={self.active})"


class ChainClient(ABC):
    """
    Abstract base class for chain transports.

    Implements the Strategy pattern for different chain modes.
    """

    @property
    @abstractmethod
    def mode(self) -> ChainMode:
        """Get the chain mode."""
        ...

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the chain."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect and stop all event subscriptions."""
        ...

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        """Check transport health."""
        ...

    @abstractmethod
    async def get_chain_id(self) -> int:
        """Chain id reported by the node."""
        ...

    @abstractmethod
    async def get_block_number(self) -> int:
        """Latest block number."""
        ...

    # =========================================================================
    # Contracts
    # =========================================================================

    @abstractmethod
    async def call(
        self,
        address: str,
        abi: list[dict[str, Any]],
        function: str,
        args: tuple[Any, ...] = (),
    ) -> Any:
        """
        Execute a read-only contract call.

        Args:
            address: Contract address
            abi: Contract ABI
            function: Function name
            args: Positional arguments

        Returns:
            Decoded return value, as produced by the transport
        """
        ...

    @abstractmethod
    async def transact(
        self,
        signer: Signer,
        address: str,
        abi: list[dict[str, Any]],
        function: str,
        args: tuple[Any, ...] = (),
    ) -> str:
        """
        Sign and send a contract transaction.

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        ...

    @abstractmethod
    async def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: float | None = None,
    ) -> TxReceipt:
        """
        Wait until a transaction is mined.

        Args:
            tx_hash: Transaction hash
            timeout: Seconds to wait, transport default when None

        Returns:
            TxReceipt of the mined transaction
        """
        ...

    @abstractmethod
    async def subscribe(
        self,
        address: str,
        abi: list[dict[str, Any]],
        event: str,
        handler: EventHandler,
    ) -> Subscription:
        """
        Listen for a contract event until unsubscribed.

        Args:
            address: Contract address
            abi: Contract ABI
            event: Event name
            handler: Called with every decoded ChainEvent

        Returns:
            Subscription handle
        """
        ...


# Global client instance
_client: ChainClient | None = None


def build_chain_client(chain: ChainSettings) -> ChainClient:
    """
    Build a chain client for the given chain settings.

    Raises:
        ProviderError: In RPC mode without an RPC URL
    """
    if chain.mode == ChainMode.MOCK:
        from privacyx.blockchain.mock import MockChainClient

        return MockChainClient(chain_id=chain.chain_id or MockChainClient.DEFAULT_CHAIN_ID)
    if chain.mode == ChainMode.RPC:
        if not chain.has_rpc:
            raise ProviderError("no provider found: set PRIVACYX_RPC_URL or use PRIVACYX_MODE=mock")
        from privacyx.blockchain.web3_client import Web3ChainClient

        return Web3ChainClient.from_url(
            chain.rpc_url,
            poll_interval=chain.event_poll_interval_seconds,
        )
    raise ValueError(f"Unknown chain mode: {chain.mode}")


def get_chain_client() -> ChainClient:
    """
    Get the configured chain client instance.

    Returns:
        ChainClient instance based on settings
    """
    global _client

    if _client is None:
        _client = build_chain_client(settings.chain)
        logger.info(
            "chain_client_initialized",
            mode=settings.chain.mode.value,
        )

    return _client


def set_chain_client(client: ChainClient) -> None:
    """
    Set a custom chain client.

    Args:
        client: ChainClient instance
    """
    global _client
    _client = client
    logger.info(
        "chain_client_set",
        mode=client.mode.value,
    )


def reset_chain_client() -> None:
    """Reset the client to be re-initialized."""
    global _client
    _client = None
