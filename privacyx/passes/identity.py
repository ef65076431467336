"""
Identity Pass (PXP-102)
=======================

Proves membership in an issuer's identity set. Public signals:
[root, issuerHash, nullifierHash].
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from privacyx.blockchain.client import Subscription, TxReceipt
from privacyx.passes.abis import IDENTITY_PASS_ABI
from privacyx.passes.base import PassClient
from privacyx.passes.events import IdentityPassUsedEvent
from privacyx.zk import Groth16Proof


class IdentityPass(PassClient):
    """
    Client of the PXP-102 IdentityPass contract.

    Responsibilities:
    - validate config (chain_id, provider, address)
    - read helpers: get_current_root, is_nullifier_used
    - submit_proof(signer, proof_json, public_signals_json)
    - event subscription: on_identity_pass_used

    The client does not depend on a specific deployment; pass the address.
    """

    name = "IdentityPass"
    standard = "PXP-102"
    abi = IDENTITY_PASS_ABI
    submit_function = "proveIdentity"
    signal_names = ("root", "issuerHash", "nullifierHash")

    # ---- Read methods ----------------------------------------------------

    async def get_current_root(self, issuer_hex: str) -> int:
        """
        Read the current Merkle root for an issuer.

        Args:
            issuer_hex: 0x-prefixed hex issuer id (bytes32)

        Returns:
            Root as an integer
        """
        issuer = self._to_bytes32("issuer", issuer_hex)
        return int(await self._read("get_current_root", "getCurrentRoot", issuer))

    async def is_nullifier_used(self, nullifier_hex: str) -> bool:
        """
        Check whether a nullifier hash has already been consumed.

        Args:
            nullifier_hex: 0x-prefixed hex nullifier (bytes32)
        """
        nullifier = self._to_bytes32("nullifier", nullifier_hex)
        return bool(await self._read("is_nullifier_used", "isNullifierUsed", nullifier))

    # ---- ZK proof submission ---------------------------------------------

    async def submit_proof(
        self,
        signer: Any,
        proof: Mapping[str, Any] | Groth16Proof,
        public_signals: Sequence[Any],
    ) -> TxReceipt:
        """
        Submit a Groth16 identity proof via `proveIdentity`.

        Args:
            signer: Signer authorizing the transaction
            proof: snarkjs proof JSON or a parsed Groth16Proof
            public_signals: [root, issuerHash, nullifierHash] as decimal
                strings or ints

        Returns:
            Receipt of the mined transaction

        Raises:
            SignerRequiredError: If no signer is given
            FormatError: If the proof or signals are malformed
            NullifierAlreadyUsedError: If the pass was already used
            ChainCallError: For any other transaction failure
        """
        return await self._submit("submit_proof", signer, proof, public_signals)

    # ---- Events ----------------------------------------------------------

    async def on_identity_pass_used(
        self,
        callback: Callable[[IdentityPassUsedEvent], Any],
    ) -> Subscription:
        """Subscribe to `IdentityPassUsed` events; call `unsubscribe()` on the result to stop."""
        return await self._subscribe(
            "on_identity_pass_used",
            "IdentityPassUsed",
            IdentityPassUsedEvent.from_chain_event,
            callback,
        )
