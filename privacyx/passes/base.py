"""
Pass Client Base
================

Shared plumbing of the pass clients.

Every call checks, in order:
    1. the pass is available (variant)   -> PassNotImplementedError
    2. a contract address is configured  -> ConfigError
    3. writes only: a signer was given   -> SignerRequiredError

All checks happen before the transport is touched. Nothing is kept
between calls: a client never remembers that a signer was supplied.

Version: 0.1.0
"""

from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Any, ClassVar

from eth_utils import is_address, to_checksum_address

from privacyx.blockchain.client import ChainClient, ChainEvent, Subscription, TxReceipt, dispatch_event
from privacyx.blockchain.hexutil import to_bytes32
from privacyx.blockchain.providers import resolve_provider
from privacyx.blockchain.signer import ensure_signer
from privacyx.config import settings
from privacyx.errors import (
    ChainCallError,
    ConfigError,
    FormatError,
    NullifierAlreadyUsedError,
    PassNotImplementedError,
    PrivacyXError,
)
from privacyx.logging import get_logger
from privacyx.zk import Groth16Proof, SolidityCalldata, coerce_calldata, parse_public_signals

logger = get_logger(__name__)

NULLIFIER_USED_MARKER = "Nullifier already used"


class PassVariant(str, Enum):
    """Whether the pass contract can be used yet."""

    IMPLEMENTED = "implemented"
    NOT_YET_AVAILABLE = "not_yet_available"


def _error_text(err: BaseException) -> str:
    parts = [str(err), *(str(a) for a in err.args)]
    message = getattr(err, "message", None)
    if message:
        parts.append(str(message))
    return " ".join(parts)


def wrap_chain_error(err: Exception, message: str) -> ChainCallError:
    """Map a transport failure to ChainCallError, or NullifierAlreadyUsedError on reuse."""
    if NULLIFIER_USED_MARKER in _error_text(err):
        return NullifierAlreadyUsedError("This ZK pass has already been used", err)
    return ChainCallError(message, err)


class PassClient:
    """
    Generic client of a PrivacyX pass contract.

    Subclasses set the ABI, the submit function and the number of public
    signals their circuit exposes.
    """

    name: ClassVar[str] = "Pass"
    standard: ClassVar[str] = ""
    abi: ClassVar[list[dict[str, Any]]] = []
    submit_function: ClassVar[str] = ""
    signal_names: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        chain_id: int | None = None,
        provider: Any = None,
        address: str | None = None,
        *,
        variant: PassVariant = PassVariant.IMPLEMENTED,
        receipt_timeout: float | None = None,
    ) -> None:
        """
        Args:
            chain_id: Chain the pass is deployed on
            provider: ChainClient, AsyncWeb3 instance or RPC URL
            address: Pass contract address; calls fail until it is set
            variant: NOT_YET_AVAILABLE rejects every call
            receipt_timeout: Seconds to wait for a submission to be mined
        """
        self.variant = variant
        self.chain_id = chain_id
        self.receipt_timeout = receipt_timeout or settings.chain.receipt_timeout_seconds
        self._subscriptions: list[Subscription] = []

        if variant == PassVariant.NOT_YET_AVAILABLE:
            self.provider: ChainClient | None = resolve_provider(provider) if provider is not None else None
            self.address = address or None
            return

        if not chain_id:
            raise ConfigError(f"{self.name}: missing chain_id in constructor config")

        self.provider = resolve_provider(provider)
        self.address = self._normalize_address(address) if address else None

        if self.address is None:
            logger.warning(
                "pass_address_missing",
                pass_name=self.name,
                chain_id=chain_id,
                detail="read/write methods will raise until a valid address is set",
            )

    def _normalize_address(self, address: str) -> str:
        if not isinstance(address, str) or not is_address(address):
            raise FormatError(f"{self.name}: invalid contract address {address!r}")
        return to_checksum_address(address)

    def set_address(self, address: str) -> None:
        """Point the client at a (new) contract deployment."""
        self.address = self._normalize_address(address)

    @property
    def is_available(self) -> bool:
        return self.variant == PassVariant.IMPLEMENTED

    @property
    def is_configured(self) -> bool:
        return self.is_available and self.address is not None

    # ---- Internal helpers ------------------------------------------------

    def _require_available(self, method: str) -> None:
        if not self.is_available:
            raise PassNotImplementedError(
                f"{self.name}.{method}() is not implemented yet ({self.standard} WIP)"
            )

    def _require_address(self, method: str) -> tuple[ChainClient, str]:
        self._require_available(method)
        if self.address is None:
            raise ConfigError(f"{self.name}: contract address is not set")
        if self.provider is None:
            raise ConfigError(f"{self.name}: no provider configured")
        return self.provider, self.address

    def _to_bytes32(self, label: str, value: Any) -> str:
        return to_bytes32(f"{self.name} {label}", value)

    async def _read(self, method: str, function: str, *args: Any) -> Any:
        provider, address = self._require_address(method)
        try:
            return await provider.call(address, self.abi, function, args)
        except PrivacyXError:
            raise
        except Exception as e:
            raise wrap_chain_error(e, f"Failed to read {function}()") from e

    async def _submit(
        self,
        method: str,
        signer: Any,
        proof: Mapping[str, Any] | Groth16Proof | SolidityCalldata,
        public_signals: Sequence[Any],
    ) -> TxReceipt:
        provider, address = self._require_address(method)
        signer = ensure_signer(signer, f"{self.name}.{method}")

        signals = parse_public_signals(public_signals, len(self.signal_names))
        calldata = coerce_calldata(proof, signals)

        try:
            tx_hash = await provider.transact(
                signer, address, self.abi, self.submit_function, calldata.as_args()
            )
            logger.info(
                "proof_submitted",
                pass_name=self.name,
                contract=address,
                tx_hash=tx_hash,
            )
            receipt = await provider.wait_for_receipt(tx_hash, self.receipt_timeout)
        except PrivacyXError:
            raise
        except Exception as e:
            raise wrap_chain_error(e, "ZK proof transaction failed") from e

        if not receipt.succeeded:
            raise ChainCallError(f"ZK proof transaction reverted: {receipt.tx_hash}")

        logger.info(
            "proof_confirmed",
            pass_name=self.name,
            tx_hash=receipt.tx_hash,
            block_number=receipt.block_number,
        )
        return receipt

    async def _subscribe(
        self,
        method: str,
        event: str,
        to_record: Callable[[ChainEvent], Any],
        callback: Callable[[Any], Any],
    ) -> Subscription:
        if not callable(callback):
            raise PrivacyXError(f"{self.name}.{method} requires a callback function")
        provider, address = self._require_address(method)

        async def handler(chain_event: ChainEvent) -> None:
            await dispatch_event(callback, to_record(chain_event))

        try:
            subscription = await provider.subscribe(address, self.abi, event, handler)
        except PrivacyXError:
            raise
        except Exception as e:
            raise wrap_chain_error(e, f"Failed to subscribe to {event}") from e

        self._subscriptions = [s for s in self._subscriptions if s.active]
        self._subscriptions.append(subscription)
        return subscription

    def remove_all_listeners(self) -> None:
        """Cancel every event subscription made through this client."""
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.unsubscribe()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(chain_id={self.chain_id!r}, "
            f"address={self.address!r}, variant={self.variant.value!r})"
        )
