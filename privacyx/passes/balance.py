"""
Balance Pass (PXP-101)
======================

Proves that a holder's balance is above the contract threshold without
revealing the account. Public signals: [root, nullifierHash].
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from privacyx.blockchain.client import Subscription, TxReceipt
from privacyx.passes.abis import BALANCE_PASS_ABI
from privacyx.passes.base import PassClient
from privacyx.passes.events import AccessGrantedEvent
from privacyx.zk import Groth16Proof, SolidityCalldata


class BalancePass(PassClient):
    """
    Client of the PXP-101 BalancePass contract.

    Usage:
        balance_pass = BalancePass(chain_id=1, provider=rpc_url, address=address)
        root = await balance_pass.get_root()
        receipt = await balance_pass.submit_proof(signer, proof_json, ["<root>", "<nullifier>"])
    """

    name = "BalancePass"
    standard = "PXP-101"
    abi = BALANCE_PASS_ABI
    submit_function = "proveAndConsume"
    signal_names = ("root", "nullifierHash")

    # ---- Read methods ----------------------------------------------------

    async def get_root(self) -> int:
        """Current Merkle root of eligible balances."""
        return int(await self._read("get_root", "currentRoot"))

    async def get_threshold(self) -> int:
        """Balance threshold the proof must satisfy."""
        return int(await self._read("get_threshold", "requiredThreshold"))

    async def has_nullifier_been_used(self, nullifier_hex: str) -> bool:
        """Check whether a nullifier hash (bytes32 hex) was already consumed."""
        nullifier = self._to_bytes32("nullifier", nullifier_hex)
        return bool(await self._read("has_nullifier_been_used", "nullifiers", nullifier))

    # ---- Write methods ---------------------------------------------------

    async def submit_proof(
        self,
        signer: Any,
        proof: Mapping[str, Any] | Groth16Proof | SolidityCalldata,
        public_signals: Sequence[Any],
    ) -> TxReceipt:
        """
        Submit a balance proof via `proveAndConsume`.

        `proof` is either a snarkjs proof (`pi_a`/`pi_b`/`pi_c`) or an
        already mapped `{a, b, c}` object.
        """
        return await self._submit("submit_proof", signer, proof, public_signals)

    # ---- Events ----------------------------------------------------------

    async def on_access_granted(
        self,
        callback: Callable[[AccessGrantedEvent], Any],
    ) -> Subscription:
        """Subscribe to `AccessGranted` events."""
        return await self._subscribe(
            "on_access_granted",
            "AccessGranted",
            AccessGrantedEvent.from_chain_event,
            callback,
        )
