"""
Pass Clients
============

Clients of the PrivacyX pass contracts.

- BalancePass (PXP-101)
- IdentityPass (PXP-102)
- ReputationPass (PXP-103, not yet available)

Usage:
    from privacyx.passes import IdentityPass

    id_pass = IdentityPass(chain_id=1, provider=rpc_url, address=address)
    root = await id_pass.get_current_root(issuer_hex)
"""

from privacyx.passes.abis import BALANCE_PASS_ABI, IDENTITY_PASS_ABI
from privacyx.passes.balance import BalancePass
from privacyx.passes.base import PassClient, PassVariant, wrap_chain_error
from privacyx.passes.events import AccessGrantedEvent, IdentityPassUsedEvent
from privacyx.passes.identity import IdentityPass
from privacyx.passes.reputation import ReputationPass

__all__ = [
    "PassClient",
    "PassVariant",
    "BalancePass",
    "IdentityPass",
    "ReputationPass",
    "AccessGrantedEvent",
    "IdentityPassUsedEvent",
    "BALANCE_PASS_ABI",
    "IDENTITY_PASS_ABI",
    "wrap_chain_error",
]
