"""
Status Helpers
==============

Building blocks for status pages: chain health and the state of an
identity pass (issuer root, nullifier usage).

Usage:
    status = await identity_status(id_pass, issuer_hex, nullifier_hex, expected_root=root)
    if status.root_matches and not status.nullifier_used:
        ...
"""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from privacyx.blockchain.client import ChainClient
from privacyx.blockchain.hexutil import int_to_bytes32
from privacyx.logging import get_logger
from privacyx.passes.identity import IdentityPass
from privacyx.zk import parse_public_signals

logger = get_logger(__name__)


class IdentityPassStatus(BaseModel):
    """On-chain state of an identity pass for one issuer / nullifier."""

    chain_id: int | None = None
    contract_address: str | None = None
    issuer_hex: str
    nullifier_hex: str
    current_root: int
    nullifier_used: bool

    expected_root: int | None = None
    root_matches: bool | None = None


async def chain_health(provider: ChainClient) -> dict[str, Any]:
    """
    Report chain reachability.

    Errors are reported in the result rather than raised.
    """
    try:
        return {
            "status": "ok",
            "chain_id": await provider.get_chain_id(),
            "block_number": await provider.get_block_number(),
        }
    except Exception as e:
        logger.warning("chain_health_failed", error=str(e))
        return {"status": "error", "error": str(e)}


async def identity_status(
    identity_pass: IdentityPass,
    issuer_hex: str,
    nullifier_hex: str,
    expected_root: int | None = None,
) -> IdentityPassStatus:
    """
    Read the issuer root and nullifier usage of an identity pass.

    Args:
        identity_pass: Configured IdentityPass client
        issuer_hex: Issuer id (bytes32 hex)
        nullifier_hex: Nullifier hash (bytes32 hex)
        expected_root: Root the caller's proof was built against

    Returns:
        IdentityPassStatus
    """
    current_root = await identity_pass.get_current_root(issuer_hex)
    used = await identity_pass.is_nullifier_used(nullifier_hex)

    return IdentityPassStatus(
        chain_id=identity_pass.chain_id,
        contract_address=identity_pass.address,
        issuer_hex=issuer_hex,
        nullifier_hex=nullifier_hex,
        current_root=current_root,
        nullifier_used=used,
        expected_root=expected_root,
        root_matches=None if expected_root is None else current_root == expected_root,
    )


async def default_identity_status(
    identity_pass: IdentityPass,
    public_signals: Sequence[Any],
) -> IdentityPassStatus:
    """Status for the issuer and nullifier carried by identity public signals."""
    root, issuer, nullifier = parse_public_signals(public_signals, 3)
    return await identity_status(
        identity_pass,
        int_to_bytes32(issuer),
        int_to_bytes32(nullifier),
        expected_root=root,
    )
