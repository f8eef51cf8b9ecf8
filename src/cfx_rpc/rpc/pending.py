"""
Pending transaction handle.

``send_transaction`` and ``send_raw_transaction`` return a
``PendingTransaction`` right away. Awaiting it performs the send (once) and
yields the transaction hash; the follow-up accessors (``get``, ``mined``,
``executed``, ``confirmed``) query the node only when called.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, Generator, Optional, Sequence

from cfx_rpc.errors import PendingTransactionTimeoutError, TransactionExecutionError
from cfx_rpc.utils.logging import get_logger

if TYPE_CHECKING:
    from cfx_rpc.rpc.cfx import Cfx

_logger = get_logger(__name__)

DEFAULT_CONFIRMATION_THRESHOLD = 1e-8


class PendingTransaction:
    """
    Deferred result of a state-mutating call.

    Example:
        ```python
        pending = client.cfx.send_transaction({"from": sender, "to": receiver, "value": 1})
        tx_hash = await pending
        receipt = await pending.executed()
        ```
    """

    def __init__(
        self,
        cfx: Cfx,
        send: Callable[..., Awaitable[str]],
        args: Sequence[Any] = (),
    ) -> None:
        self._cfx = cfx
        self._send = send
        self._args = tuple(args)
        self._task: Optional[asyncio.Future] = None

    def _hash_future(self) -> asyncio.Future:
        if self._task is None:
            self._task = asyncio.ensure_future(self._send(*self._args))
        return self._task

    def __await__(self) -> Generator[Any, None, str]:
        return self._hash_future().__await__()

    def __repr__(self) -> str:
        if self._task is None:
            state = "unsent"
        elif not self._task.done():
            state = "sending"
        elif self._task.cancelled():
            state = "cancelled"
        elif self._task.exception() is not None:
            state = "failed"
        else:
            state = self._task.result()
        return f"<PendingTransaction {state}>"

    async def hash(self) -> str:
        """Transaction hash (sends the transaction if not yet sent)."""
        return await self._hash_future()

    async def get(self, *, delay: float = 0) -> Optional[Dict[str, Any]]:
        """Fetch the transaction, after an optional ``delay`` in seconds."""
        tx_hash = await self
        if delay:
            await asyncio.sleep(delay)
        return await self._cfx.get_transaction_by_hash(tx_hash)

    async def _poll(
        self,
        stage: str,
        fetch: Callable[[str], Awaitable[Optional[Dict[str, Any]]]],
        delta: float,
        timeout: float,
    ) -> Dict[str, Any]:
        tx_hash = await self
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while True:
            value = await fetch(tx_hash)
            if value is not None:
                return value
            if loop.time() + delta > deadline:
                raise PendingTransactionTimeoutError(tx_hash, stage, timeout)
            _logger.debug("Waiting for transaction", extra={"tx_hash": tx_hash, "stage": stage})
            await asyncio.sleep(delta)

    async def mined(self, *, delta: float = 1, timeout: float = 60) -> Dict[str, Any]:
        """Wait until the transaction is packed into a block."""

        async def fetch(tx_hash: str) -> Optional[Dict[str, Any]]:
            tx = await self._cfx.get_transaction_by_hash(tx_hash)
            return tx if tx and tx.get("blockHash") else None

        return await self._poll("mined", fetch, delta, timeout)

    async def executed(self, *, delta: float = 1, timeout: float = 300) -> Dict[str, Any]:
        """
        Wait until the transaction has a receipt.

        Raises:
            TransactionExecutionError: If the receipt reports a failed outcome.
            PendingTransactionTimeoutError: If no receipt appears in time.
        """
        receipt = await self._poll("executed", self._cfx.get_transaction_receipt, delta, timeout)
        if receipt.get("outcomeStatus") not in (0, None):
            raise TransactionExecutionError(receipt.get("transactionHash") or await self, receipt)
        return receipt

    async def confirmed(
        self,
        *,
        delta: float = 1,
        timeout: float = 30 * 60,
        threshold: float = DEFAULT_CONFIRMATION_THRESHOLD,
    ) -> Dict[str, Any]:
        """
        Wait until the confirmation risk of the including block drops to ``threshold``.

        A ``None`` risk means the node no longer tracks the block and counts
        as confirmed.
        """
        limit = Decimal(str(threshold))

        async def fetch(tx_hash: str) -> Optional[Dict[str, Any]]:
            receipt = await self.executed(delta=delta, timeout=timeout)
            risk = await self._cfx.get_confirmation_risk_by_hash(receipt["blockHash"])
            if risk is None or risk <= limit:
                return receipt
            return None

        return await self._poll("confirmed", fetch, delta, timeout)
