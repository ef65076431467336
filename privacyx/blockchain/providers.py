"""
Provider Resolution
===================

Turns whatever the caller hands over into a ChainClient.

Resolution order:
    1. an existing ChainClient (returned unchanged) or AsyncWeb3 instance
    2. an explicitly injected web3 async provider (e.g. a wallet bridge)
    3. an RPC URL string
    4. ProviderError

Nothing is auto-detected from the host: a wallet provider has to be
passed as `injected`.
"""

from typing import Any

from web3 import AsyncWeb3

from privacyx.blockchain.client import ChainClient
from privacyx.blockchain.web3_client import Web3ChainClient
from privacyx.errors import ProviderError
from privacyx.logging import get_logger

logger = get_logger(__name__)


def resolve_provider(
    value: Any = None,
    *,
    injected: Any = None,
    poll_interval: float | None = None,
) -> ChainClient:
    """
    Resolve a usable chain client.

    Args:
        value: ChainClient, AsyncWeb3 instance or RPC URL
        injected: Web3 async provider supplied by the host application
        poll_interval: Event poll interval for clients built here

    Returns:
        ChainClient

    Raises:
        ProviderError: If nothing resolvable was supplied
    """
    if isinstance(value, ChainClient):
        return value

    if isinstance(value, AsyncWeb3):
        return Web3ChainClient(value, poll_interval=poll_interval)

    if injected is not None:
        logger.debug("provider_resolved", source="injected")
        return Web3ChainClient.from_provider(injected, poll_interval=poll_interval)

    if isinstance(value, str) and value.strip():
        logger.debug("provider_resolved", source="rpc_url")
        return Web3ChainClient.from_url(value.strip(), poll_interval=poll_interval)

    raise ProviderError("no provider found")
