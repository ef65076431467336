"""
Mock Chain Client
=================

In-memory mock implementation of the pass contracts for development and
testing.

Proofs are not verified: any calldata with a known root and an unused
nullifier is accepted, mirroring the contract's bookkeeping only.

Version: 0.1.0
"""

import hashlib
import uuid
from dataclasses import dataclass, field
from typing import Any

from web3.exceptions import BadFunctionCallOutput, ContractLogicError, TimeExhausted

from privacyx.blockchain.client import (
    ChainClient,
    ChainEvent,
    EventHandler,
    Subscription,
    TxReceipt,
    dispatch_event,
)
from privacyx.blockchain.hexutil import int_to_bytes32, to_bytes32
from privacyx.blockchain.signer import Signer
from privacyx.config import ChainMode
from privacyx.logging import get_logger

logger = get_logger(__name__)


@dataclass
class MockPassContract:
    """State of a deployed pass contract."""

    kind: str
    address: str
    root: int = 0
    threshold: int = 0
    issuer_roots: dict[str, int] = field(default_factory=dict)
    used_nullifiers: set[str] = field(default_factory=set)


@dataclass
class MockTransaction:
    """A transaction accepted by the mock chain."""

    tx_hash: str
    sender: str
    address: str
    function: str
    args: tuple[Any, ...]
    block_number: int


def _revert(reason: str) -> ContractLogicError:
    return ContractLogicError(f"execution reverted: {reason}")


class MockChainClient(ChainClient):
    """
    In-memory mock chain client.

    Simulates the balance and identity pass contracts without requiring
    a node. Data is stored in memory and lost on restart.

    Usage:
        chain = MockChainClient()
        address = chain.deploy_identity_pass(issuer_roots={issuer_hex: root})
    """

    DEFAULT_CHAIN_ID = 31337

    def __init__(self, chain_id: int = DEFAULT_CHAIN_ID) -> None:
        """Initialize mock client with in-memory storage."""
        self.chain_id = chain_id
        self._connected = False
        self._block_number = 1000

        # In-memory storage
        self._contracts: dict[str, MockPassContract] = {}
        self._transactions: dict[str, MockTransaction] = {}
        self._subscribers: dict[tuple[str, str], list[EventHandler]] = {}
        self._failures: list[Exception] = []

        # Every transport operation, in order: (operation, detail)
        self.calls: list[tuple[str, str]] = []

        logger.debug("mock_chain_initialized", chain_id=chain_id)

    @property
    def mode(self) -> ChainMode:
        return ChainMode.MOCK

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def connect(self) -> None:
        """Simulate connection."""
        self._connected = True
        logger.info("mock_chain_connected")

    async def disconnect(self) -> None:
        """Simulate disconnection."""
        self._connected = False
        self._subscribers.clear()
        logger.info("mock_chain_disconnected")

    async def health_check(self) -> dict[str, Any]:
        """Check mock chain health."""
        return {
            "status": "healthy",
            "mode": self.mode.value,
            "connected": self._connected,
            "chain_id": self.chain_id,
            "block_number": self._block_number,
            "contracts": len(self._contracts),
            "transactions": len(self._transactions),
        }

    async def get_chain_id(self) -> int:
        self._record("get_chain_id", "")
        return self.chain_id

    async def get_block_number(self) -> int:
        self._record("get_block_number", "")
        return self._block_number

    def _generate_tx_hash(self) -> str:
        """Generate a mock transaction hash."""
        return "0x" + hashlib.sha256(uuid.uuid4().bytes).hexdigest()

    def _generate_address(self) -> str:
        return "0x" + hashlib.sha256(uuid.uuid4().bytes).hexdigest()[:40]

    def _next_block(self) -> int:
        """Get next block number."""
        self._block_number += 1
        return self._block_number

    def _record(self, operation: str, detail: str) -> None:
        self.calls.append((operation, detail))
        if self._failures:
            raise self._failures.pop(0)

    def _get_contract(self, address: str) -> MockPassContract:
        contract = self._contracts.get(address.lower())
        if contract is None:
            raise BadFunctionCallOutput(f"Could not transact with/call contract function, no contract at {address}")
        return contract

    # =========================================================================
    # Deployment
    # =========================================================================

    def deploy_balance_pass(
        self,
        root: int = 0,
        threshold: int = 0,
        address: str | None = None,
    ) -> str:
        """Deploy a mock balance pass and return its address."""
        address = (address or self._generate_address()).lower()
        self._contracts[address] = MockPassContract(
            kind="balance",
            address=address,
            root=root,
            threshold=threshold,
        )
        logger.debug("mock_balance_pass_deployed", address=address, root=root)
        return address

    def deploy_identity_pass(
        self,
        issuer_roots: dict[str, int] | None = None,
        address: str | None = None,
    ) -> str:
        """Deploy a mock identity pass and return its address."""
        address = (address or self._generate_address()).lower()
        self._contracts[address] = MockPassContract(
            kind="identity",
            address=address,
            issuer_roots={to_bytes32("issuer", k): v for k, v in (issuer_roots or {}).items()},
        )
        logger.debug("mock_identity_pass_deployed", address=address)
        return address

    def set_root(self, address: str, root: int, issuer: str | None = None) -> None:
        """Publish a new Merkle root (per issuer for identity passes)."""
        contract = self._get_contract(address)
        if issuer is None:
            contract.root = root
        else:
            contract.issuer_roots[to_bytes32("issuer", issuer)] = root

    def fail_next(self, error: Exception) -> None:
        """Raise `error` from the next transport operation."""
        self._failures.append(error)

    # =========================================================================
    # Contracts
    # =========================================================================

    async def call(
        self,
        address: str,
        abi: list[dict[str, Any]],
        function: str,
        args: tuple[Any, ...] = (),
    ) -> Any:
        """Execute a view function of a mock pass."""
        self._record("call", function)
        contract = self._get_contract(address)

        if function == "currentRoot":
            return contract.root
        if function == "requiredThreshold":
            return contract.threshold
        if function in ("nullifiers", "isNullifierUsed"):
            return to_bytes32("nullifier", args[0]) in contract.used_nullifiers
        if function == "getCurrentRoot":
            return contract.issuer_roots.get(to_bytes32("issuer", args[0]), 0)

        raise BadFunctionCallOutput(f"Function {function} not found on mock {contract.kind} pass")

    async def transact(
        self,
        signer: Signer,
        address: str,
        abi: list[dict[str, Any]],
        function: str,
        args: tuple[Any, ...] = (),
    ) -> str:
        """Apply a proof submission to a mock pass."""
        self._record("transact", function)
        contract = self._get_contract(address)

        if function == "proveAndConsume":
            root, nullifier_hash = args[3]
            event_name, issuer = "AccessGranted", None
            expected_root = contract.root
        elif function == "proveIdentity":
            root, issuer_hash, nullifier_hash = args[3]
            event_name, issuer = "IdentityPassUsed", int_to_bytes32(issuer_hash)
            expected_root = contract.issuer_roots.get(issuer)
        else:
            raise BadFunctionCallOutput(f"Function {function} not found on mock {contract.kind} pass")

        nullifier = int_to_bytes32(nullifier_hash)
        if nullifier in contract.used_nullifiers:
            raise _revert("Nullifier already used")
        if root != expected_root:
            raise _revert("Unknown root")

        contract.used_nullifiers.add(nullifier)

        tx_hash = self._generate_tx_hash()
        block_number = self._next_block()
        self._transactions[tx_hash] = MockTransaction(
            tx_hash=tx_hash,
            sender=signer.address,
            address=contract.address,
            function=function,
            args=args,
            block_number=block_number,
        )

        event_args: dict[str, Any] = {"caller": signer.address, "nullifier": nullifier}
        if issuer is not None:
            event_args["issuer"] = issuer
        event_args["root"] = root

        await self._emit(
            ChainEvent(
                name=event_name,
                address=contract.address,
                args=event_args,
                tx_hash=tx_hash,
                block_number=block_number,
                log_index=0,
            )
        )

        logger.debug(
            "mock_proof_accepted",
            address=contract.address,
            function=function,
            tx_hash=tx_hash,
        )
        return tx_hash

    async def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: float | None = None,
    ) -> TxReceipt:
        """Return the receipt of a mock transaction."""
        self._record("wait_for_receipt", tx_hash)
        tx = self._transactions.get(tx_hash)
        if tx is None:
            raise TimeExhausted(f"Transaction {tx_hash} is not in the chain after {timeout} seconds")

        return TxReceipt(
            tx_hash=tx.tx_hash,
            block_number=tx.block_number,
            status=1,
            gas_used=21000,
            raw={"from": tx.sender, "to": tx.address, "function": tx.function},
        )

    def get_transaction(self, tx_hash: str) -> MockTransaction | None:
        """Look up an accepted transaction (for tests)."""
        return self._transactions.get(tx_hash)

    # =========================================================================
    # Events
    # =========================================================================

    async def subscribe(
        self,
        address: str,
        abi: list[dict[str, Any]],
        event: str,
        handler: EventHandler,
    ) -> Subscription:
        """Register an in-process event handler."""
        self._record("subscribe", event)
        key = (address.lower(), event)
        self._subscribers.setdefault(key, []).append(handler)

        def cancel() -> None:
            handlers = self._subscribers.get(key, [])
            if handler in handlers:
                handlers.remove(handler)

        return Subscription(event, cancel)

    async def _emit(self, event: ChainEvent) -> None:
        for handler in list(self._subscribers.get((event.address.lower(), event.name), [])):
            try:
                await dispatch_event(handler, event)
            except Exception:
                logger.exception("event_handler_failed", event=event.name)

    def listener_count(self, address: str, event: str) -> int:
        return len(self._subscribers.get((address.lower(), event), []))

    # =========================================================================
    # Test Utilities
    # =========================================================================

    def clear_all(self) -> None:
        """Clear all mock data (for testing)."""
        self._contracts.clear()
        self._transactions.clear()
        self._subscribers.clear()
        self._failures.clear()
        self.calls.clear()
        self._block_number = 1000
        logger.debug("mock_chain_cleared")

    def get_stats(self) -> dict[str, int]:
        """Get storage statistics."""
        return {
            "contracts": len(self._contracts),
            "transactions": len(self._transactions),
            "subscriptions": sum(len(h) for h in self._subscribers.values()),
            "block_number": self._block_number,
        }
