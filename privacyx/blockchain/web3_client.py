"""
Web3 Chain Client
=================

ChainClient backed by web3.py's AsyncWeb3.

Reads go through `eth_call`, writes are built with `build_transaction`
(which also estimates gas, so reverts surface before anything is sent),
signed locally by the signer and sent raw. Events are polled with
`get_logs`; the transport gives no push delivery over HTTP.

Version: 0.1.0
"""

import asyncio
from typing import Any

from web3 import AsyncHTTPProvider, AsyncWeb3

from privacyx.blockchain.client import (
    ChainClient,
    ChainEvent,
    EventHandler,
    Subscription,
    TxReceipt,
    dispatch_event,
)
from privacyx.blockchain.signer import Signer
from privacyx.config import ChainMode, settings
from privacyx.logging import get_logger

logger = get_logger(__name__)


class Web3ChainClient(ChainClient):
    """
    JSON-RPC chain client.

    Usage:
        client = Web3ChainClient.from_url("http://127.0.0.1:8545")
        block = await client.get_block_number()
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        poll_interval: float | None = None,
    ) -> None:
        """
        Args:
            w3: Configured AsyncWeb3 instance
            poll_interval: Seconds between event polls
        """
        self.w3 = w3
        self.poll_interval = poll_interval or settings.chain.event_poll_interval_seconds
        self._tasks: set[asyncio.Task[None]] = set()
        self._chain_id: int | None = None

    @classmethod
    def from_url(cls, rpc_url: str, poll_interval: float | None = None) -> "Web3ChainClient":
        """Build a client over an HTTP JSON-RPC endpoint."""
        return cls(AsyncWeb3(AsyncHTTPProvider(rpc_url)), poll_interval=poll_interval)

    @classmethod
    def from_provider(cls, provider: Any, poll_interval: float | None = None) -> "Web3ChainClient":
        """Build a client over an existing web3 async provider."""
        return cls(AsyncWeb3(provider), poll_interval=poll_interval)

    @property
    def mode(self) -> ChainMode:
        return ChainMode.RPC

    async def connect(self) -> None:
        connected = await self.w3.is_connected()
        logger.info("web3_connected" if connected else "web3_unreachable", connected=connected)

    async def disconnect(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

        disconnect = getattr(self.w3.provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()
        logger.info("web3_disconnected")

    async def health_check(self) -> dict[str, Any]:
        return {
            "status": "healthy",
            "mode": self.mode.value,
            "connected": await self.w3.is_connected(),
            "chain_id": await self.get_chain_id(),
            "block_number": await self.get_block_number(),
            "subscriptions": len(self._tasks),
        }

    async def get_chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = int(await self.w3.eth.chain_id)
        return self._chain_id

    async def get_block_number(self) -> int:
        return int(await self.w3.eth.block_number)

    def _contract(self, address: str, abi: list[dict[str, Any]]) -> Any:
        return self.w3.eth.contract(address=AsyncWeb3.to_checksum_address(address), abi=abi)

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
        contract = self._contract(address, abi)
        return await getattr(contract.functions, function)(*args).call()

    async def transact(
        self,
        signer: Signer,
        address: str,
        abi: list[dict[str, Any]],
        function: str,
        args: tuple[Any, ...] = (),
    ) -> str:
        contract = self._contract(address, abi)
        sender = AsyncWeb3.to_checksum_address(signer.address)

        tx = await getattr(contract.functions, function)(*args).build_transaction(
            {
                "from": sender,
                "nonce": await self.w3.eth.get_transaction_count(sender),
                "chainId": await self.get_chain_id(),
            }
        )

        signed = signer.sign_transaction(tx)
        tx_hash = AsyncWeb3.to_hex(await self.w3.eth.send_raw_transaction(signed.raw_transaction))

        logger.info(
            "web3_transaction_sent",
            contract=address,
            function=function,
            sender=sender,
            tx_hash=tx_hash,
        )
        return tx_hash

    async def wait_for_receipt(
        self,
        tx_hash: str,
        timeout: float | None = None,
    ) -> TxReceipt:
        receipt = await self.w3.eth.wait_for_transaction_receipt(
            tx_hash,
            timeout=timeout or settings.chain.receipt_timeout_seconds,
        )
        return TxReceipt(
            tx_hash=AsyncWeb3.to_hex(receipt["transactionHash"]),
            block_number=receipt.get("blockNumber"),
            status=int(receipt.get("status", 1)),
            gas_used=receipt.get("gasUsed"),
            raw=dict(receipt),
        )

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
        contract_event = getattr(self._contract(address, abi).events, event)
        start_block = await self.get_block_number() + 1

        task = asyncio.create_task(
            self._poll(contract_event, event, handler, start_block),
            name=f"privacyx-{event}-{address}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        logger.debug("web3_event_subscribed", contract=address, event=event, from_block=start_block)
        return Subscription(event, task.cancel)

    async def _poll(
        self,
        contract_event: Any,
        event: str,
        handler: EventHandler,
        next_block: int,
    ) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)

            try:
                latest = await self.get_block_number()
                if latest < next_block:
                    continue
                logs = await contract_event.get_logs(from_block=next_block, to_block=latest)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                # The next poll retries the same block range.
                logger.warning("web3_event_poll_failed", event=event, error=str(e))
                continue

            for log in logs:
                try:
                    await dispatch_event(handler, self._to_chain_event(event, log))
                except Exception:
                    logger.exception("event_handler_failed", event=event)

            next_block = latest + 1

    @staticmethod
    def _to_chain_event(event: str, log: Any) -> ChainEvent:
        tx_hash = log.get("transactionHash")
        return ChainEvent(
            name=log.get("event", event),
            address=log.get("address", ""),
            args=dict(log.get("args", {})),
            tx_hash=AsyncWeb3.to_hex(tx_hash) if tx_hash is not None else None,
            block_number=log.get("blockNumber"),
            log_index=log.get("logIndex"),
            raw=log,
        )
