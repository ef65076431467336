"""
Signer Abstraction
==================

Write calls are authorized by a signer: anything exposing an `address`
and `sign_transaction(tx)`. An `eth_account` `LocalAccount` already
satisfies the protocol; `LocalSigner` is a thin named wrapper around it.
"""

from typing import Any, Protocol, runtime_checkable

from eth_account import Account
from eth_account.datastructures import SignedTransaction
from eth_account.signers.local import LocalAccount

from privacyx.errors import SignerRequiredError


@runtime_checkable
class Signer(Protocol):
    """Anything able to sign a transaction for a known address."""

    @property
    def address(self) -> str: ...

    def sign_transaction(self, transaction_dict: dict[str, Any]) -> SignedTransaction: ...


class LocalSigner:
    """Signer backed by a local private key (eth_account)."""

    def __init__(self, account: LocalAccount) -> None:
        self._account = account

    @classmethod
    def from_key(cls, private_key: str | bytes) -> "LocalSigner":
        return cls(Account.from_key(private_key))

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, transaction_dict: dict[str, Any]) -> SignedTransaction:
        return self._account.sign_transaction(transaction_dict)

    def __repr__(self) -> str:
        return f"LocalSigner(address={self.address!r})"


def ensure_signer(signer: Any, method: str) -> Signer:
    """
    Check that a write call received a usable signer.

    Raises:
        SignerRequiredError: If `signer` is missing or lacks the signer interface
    """
    if signer is None or not isinstance(signer, Signer):
        raise SignerRequiredError(f"{method} requires a signer (address + sign_transaction)")
    return signer
