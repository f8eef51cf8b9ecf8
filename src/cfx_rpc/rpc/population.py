"""
Transaction population engine.

Fills the missing fields of a ``TransactionIntent`` by querying chain state
in dependency order: sender, nonce, chain id, epoch height, type, gas and
storage limit, then the fee fields of the resolved type. A field the caller
already set is never replaced. Any failed query aborts the whole run; no
field is defaulted silently except a zero node gas price, which becomes
``MIN_GAS_PRICE``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

import pydantic

from cfx_rpc.address import AddressType
from cfx_rpc.constants import (
    BASE_FEE_BUFFER,
    MAX_GAS_LIMIT,
    MIN_GAS_PRICE,
    TRANSACTION_GAS,
    TRANSACTION_STORAGE_LIMIT,
)
from cfx_rpc.errors import RpcError, ValidationError
from cfx_rpc.types.transaction import TransactionIntent, TransactionType
from cfx_rpc.utils.logging import LogContext, get_logger

if TYPE_CHECKING:
    from cfx_rpc.rpc.cfx import Cfx

_logger = get_logger(__name__)

IntentLike = Union[TransactionIntent, Mapping[str, Any]]


def as_intent(intent: IntentLike) -> TransactionIntent:
    """
    Accept a ``TransactionIntent`` as is, or validate a mapping into one.

    Raises:
        ValidationError: If the mapping does not describe a transaction.
    """
    if isinstance(intent, TransactionIntent):
        return intent
    try:
        return TransactionIntent.model_validate(dict(intent))
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationError(
            f"Invalid transaction: {first['msg']}",
            field=field,
            details={"errors": [error["msg"] for error in e.errors()]},
        ) from e


def scale(value: int, ratio: Union[float, Decimal]) -> int:
    """``value * ratio`` rounded half-up to an integer."""
    product = Decimal(value) * Decimal(str(ratio))
    return int(product.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def max_fee_per_gas(priority_fee: int, base_fee: int) -> int:
    """``priority_fee + base_fee * 4/3`` with truncating integer division."""
    return priority_fee + (base_fee * BASE_FEE_BUFFER.numerator) // BASE_FEE_BUFFER.denominator


class TransactionPopulator:
    """Resolve a partial intent against the node behind ``cfx``."""

    def __init__(self, cfx: Cfx) -> None:
        self._cfx = cfx

    async def _pivot_base_fee(self, epoch_height: int) -> Optional[int]:
        block = await self._cfx.get_block_by_epoch_number(epoch_height, False)
        if block is None:
            raise RpcError(
                f"No pivot block at epoch {epoch_height}",
                method="cfx_getBlockByEpochNumber",
            )
        return block.get("baseFeePerGas")

    def _is_plain_transfer(self, intent: TransactionIntent) -> bool:
        codec = self._cfx.client.codec
        if not intent.to or not codec.is_valid(intent.to):
            return False
        if codec.decode(intent.to).address_type != AddressType.USER:
            return False
        return not intent.data and not intent.access_list

    async def populate(self, intent: IntentLike) -> TransactionIntent:
        """
        Fill every field required by the transaction's type.

        Args:
            intent: Intent to complete; a ``TransactionIntent`` is completed
                in place, a mapping is first copied into a new one.

        Returns:
            The completed intent.

        Raises:
            ValidationError: If a mapping does not describe a transaction.
            InvalidAddressError: If ``from`` is not a valid address.
            RpcError, TransportError: If any query fails.
            ContractRevertError: If the estimate simulation reverts.
        """
        intent = as_intent(intent)
        cfx = self._cfx
        client = cfx.client
        config = client.config

        intent.from_ = client.format_address(intent.from_)
        log = LogContext(_logger, sender=intent.from_)

        if intent.nonce is None:
            intent.nonce = await client.get_next_usable_nonce(intent.from_)
            log.debug("Resolved nonce", extra={"nonce": intent.nonce})

        if intent.chain_id is None:
            intent.chain_id = client.network_id
        if intent.chain_id is None:
            status = await cfx.get_status()
            intent.chain_id = status["chainId"]
            log.debug("Resolved chainId from status", extra={"chain_id": intent.chain_id})

        if intent.epoch_height is None:
            intent.epoch_height = await cfx.epoch_number()
            log.debug("Resolved epochHeight", extra={"epoch_height": intent.epoch_height})

        base_fee_per_gas: Optional[int] = None
        if intent.type is None:
            base_fee_per_gas = await self._pivot_base_fee(intent.epoch_height)
            if base_fee_per_gas is not None:
                intent.type = TransactionType.DYNAMIC_FEE
            elif intent.access_list:
                intent.type = TransactionType.ACCESS_LIST
            else:
                intent.type = TransactionType.LEGACY
            log.debug("Resolved type", extra={"tx_type": intent.type.name})

        if intent.gas is None or intent.storage_limit is None:
            if self._is_plain_transfer(intent):
                gas = TRANSACTION_GAS
                storage_limit = TRANSACTION_STORAGE_LIMIT
            else:
                estimate = await cfx.estimate_gas_and_collateral(intent)
                if config.default_gas_ratio:
                    gas = min(scale(estimate["gasUsed"], config.default_gas_ratio), MAX_GAS_LIMIT)
                else:
                    gas = estimate["gasLimit"]
                storage_limit = scale(estimate["storageCollateralized"], config.default_storage_ratio)

            if intent.gas is None:
                intent.gas = gas
            if intent.storage_limit is None:
                intent.storage_limit = storage_limit
            log.debug("Resolved gas", extra={"gas": intent.gas, "storage_limit": intent.storage_limit})

        if intent.type in (TransactionType.LEGACY, TransactionType.ACCESS_LIST):
            if intent.gas_price is None:
                if config.default_gas_price is None:
                    gas_price = await cfx.gas_price()
                    intent.gas_price = MIN_GAS_PRICE if gas_price == 0 else gas_price
                else:
                    intent.gas_price = config.default_gas_price
                log.debug("Resolved gasPrice", extra={"gas_price": intent.gas_price})

        elif intent.type == TransactionType.DYNAMIC_FEE:
            if intent.max_priority_fee_per_gas is None:
                intent.max_priority_fee_per_gas = await cfx.max_priority_fee_per_gas()
            if intent.max_fee_per_gas is None:
                if base_fee_per_gas is None:
                    base_fee_per_gas = await self._pivot_base_fee(intent.epoch_height)
                if base_fee_per_gas is None:
                    raise ValidationError(
                        "dynamic-fee transaction requested but the pivot block has no baseFeePerGas",
                        field="type",
                        value=intent.type,
                    )
                intent.max_fee_per_gas = max_fee_per_gas(intent.max_priority_fee_per_gas, base_fee_per_gas)
            log.debug(
                "Resolved fees",
                extra={
                    "max_priority_fee_per_gas": intent.max_priority_fee_per_gas,
                    "max_fee_per_gas": intent.max_fee_per_gas,
                },
            )

        return intent
