"""
Pass event records re-emitted to subscribers.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from privacyx.blockchain.client import ChainEvent
from privacyx.blockchain.hexutil import bytes32_to_hex


class AccessGrantedEvent(BaseModel):
    """`AccessGranted(caller, nullifier, root)` from a balance pass."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    caller: str
    nullifier: str
    root: int
    raw: Any = None

    @classmethod
    def from_chain_event(cls, event: ChainEvent) -> "AccessGrantedEvent":
        return cls(
            caller=event.args["caller"],
            nullifier=bytes32_to_hex(event.args["nullifier"]),
            root=int(event.args["root"]),
            raw=event,
        )


class IdentityPassUsedEvent(BaseModel):
    """`IdentityPassUsed(caller, nullifier, issuer, root)` from an identity pass."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    caller: str
    nullifier: str
    issuer: str
    root: int
    raw: Any = None

    @classmethod
    def from_chain_event(cls, event: ChainEvent) -> "IdentityPassUsedEvent":
        return cls(
            caller=event.args["caller"],
            nullifier=bytes32_to_hex(event.args["nullifier"]),
            issuer=bytes32_to_hex(event.args["issuer"]),
            root=int(event.args["root"]),
            raw=event,
        )
