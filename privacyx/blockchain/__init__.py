"""
Blockchain Module
=================

Chain transport used by the pass clients.

Supports:
- Mock (development/testing, in-memory pass contracts)
- RPC (web3.py AsyncWeb3 over JSON-RPC or an injected provider)

Usage:
    from privacyx.blockchain import resolve_provider, LocalSigner

    chain = resolve_provider("http://127.0.0.1:8545")
    signer = LocalSigner.from_key(private_key)

    block = await chain.get_block_number()
"""

from privacyx.blockchain.client import (
    ChainClient,
    ChainEvent,
    Subscription,
    TxReceipt,
    build_chain_client,
    get_chain_client,
    reset_chain_client,
    set_chain_client,
)
from privacyx.blockchain.hexutil import bytes32_to_hex, int_to_bytes32, to_bytes32
from privacyx.blockchain.mock import MockChainClient
from privacyx.blockchain.providers import resolve_provider
from privacyx.blockchain.signer import LocalSigner, Signer, ensure_signer
from privacyx.blockchain.web3_client import Web3ChainClient

__all__ = [
    # Client
    "ChainClient",
    "build_chain_client",
    "get_chain_client",
    "set_chain_client",
    "reset_chain_client",
    "resolve_provider",
    # Models
    "ChainEvent",
    "Subscription",
    "TxReceipt",
    # Signers
    "Signer",
    "LocalSigner",
    "ensure_signer",
    # Hex helpers
    "to_bytes32",
    "int_to_bytes32",
    "bytes32_to_hex",
    # Implementations
    "MockChainClient",
    "Web3ChainClient",
]
