"""
Reputation Pass (PXP-103)
=========================

No contract is deployed yet: the client always reports itself as not
yet available and every method raises PassNotImplementedError.
"""

from typing import Any

from privacyx.passes.abis import REPUTATION_PASS_ABI
from privacyx.passes.base import PassClient, PassVariant


class ReputationPass(PassClient):
    """Placeholder client of the PXP-103 ReputationPass."""

    name = "ReputationPass"
    standard = "PXP-103"
    abi = REPUTATION_PASS_ABI

    def __init__(
        self,
        chain_id: int | None = None,
        provider: Any = None,
        address: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs["variant"] = PassVariant.NOT_YET_AVAILABLE
        super().__init__(chain_id, provider, address, **kwargs)

    async def get_scoring_model(self) -> None:
        self._require_available("get_scoring_model")

    async def get_user_score(self, identifier: str) -> None:
        self._require_available("get_user_score")

    async def submit_proof(self, signer: Any, proof: Any, public_signals: Any) -> None:
        self._require_available("submit_proof")
