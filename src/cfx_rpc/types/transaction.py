"""
Transaction intent model.

A ``TransactionIntent`` is the caller's (possibly partial) description of a
transaction. The population engine fills in missing fields in place; fields
already set are never touched. Field names are snake_case in Python and
camelCase on the wire (``chainId``, ``epochHeight``...); both spellings are
accepted on input.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cfx_rpc import format
from cfx_rpc.constants import (
    TRANSACTION_TYPE_EIP1559,
    TRANSACTION_TYPE_EIP2930,
    TRANSACTION_TYPE_LEGACY,
)


class TransactionType(IntEnum):
    """Transaction envelope types."""

    LEGACY = TRANSACTION_TYPE_LEGACY
    ACCESS_LIST = TRANSACTION_TYPE_EIP2930
    DYNAMIC_FEE = TRANSACTION_TYPE_EIP1559


_COMMON_FIELDS: Tuple[str, ...] = (
    "from_",
    "nonce",
    "chain_id",
    "epoch_height",
    "type",
    "gas",
    "storage_limit",
)

REQUIRED_FIELDS: Dict[TransactionType, Tuple[str, ...]] = {
    TransactionType.LEGACY: _COMMON_FIELDS + ("gas_price",),
    TransactionType.ACCESS_LIST: _COMMON_FIELDS + ("gas_price",),
    TransactionType.DYNAMIC_FEE: _COMMON_FIELDS + ("max_priority_fee_per_gas", "max_fee_per_gas"),
}

_QUANTITY_FIELDS = (
    "value",
    "nonce",
    "chain_id",
    "epoch_height",
    "gas",
    "storage_limit",
    "gas_price",
    "max_priority_fee_per_gas",
    "max_fee_per_gas",
)


class TransactionIntent(BaseModel):
    """
    A transaction under construction.

    Quantities are held as non-negative Python ints; hex quantities are
    accepted on input and converted.

    Example:
        ```python
        intent = TransactionIntent.model_validate({
            "from": "0x1b716c51381e76900ebaa7999a488511a4e1fd0a",
            "to": "0x1e4b5ea4a8d3a9a7bd0b0a5a6c8c7d7f5e3b2a19",
            "value": 10**18,
        })
        ```
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="forbid",
        use_enum_values=False,
    )

    from_: str = Field(..., alias="from")
    to: Optional[str] = None
    value: Optional[int] = None
    data: Optional[str] = None
    access_list: Optional[List[Dict[str, Any]]] = Field(default=None, alias="accessList")
    nonce: Optional[int] = None
    chain_id: Optional[int] = Field(default=None, alias="chainId")
    epoch_height: Optional[int] = Field(default=None, alias="epochHeight")
    type: Optional[TransactionType] = None
    gas: Optional[int] = None
    storage_limit: Optional[int] = Field(default=None, alias="storageLimit")
    gas_price: Optional[int] = Field(default=None, alias="gasPrice")
    max_priority_fee_per_gas: Optional[int] = Field(default=None, alias="maxPriorityFeePerGas")
    max_fee_per_gas: Optional[int] = Field(default=None, alias="maxFeePerGas")

    @field_validator(*_QUANTITY_FIELDS, mode="before")
    @classmethod
    def _to_quantity(cls, value: Any) -> Optional[int]:
        if value is None:
            return None
        return format.big_uint(value)

    @field_validator("type", mode="before")
    @classmethod
    def _to_type(cls, value: Any) -> Optional[int]:
        if value is None or isinstance(value, TransactionType):
            return value
        return format.big_uint(value)

    @field_validator("data", mode="before")
    @classmethod
    def _to_hex_data(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return format.hex_(value)

    @property
    def missing_fields(self) -> List[str]:
        """Fields still required by the resolved type (all fee fields if untyped)."""
        if self.type is None:
            required = set(_COMMON_FIELDS)
            return sorted(name for name in required if getattr(self, name) is None)
        return [name for name in REQUIRED_FIELDS[self.type] if getattr(self, name) is None]

    @property
    def is_complete(self) -> bool:
        return self.type is not None and not self.missing_fields

    def to_dict(self) -> Dict[str, Any]:
        """Camel-cased dict of the fields that are set."""
        return self.model_dump(by_alias=True, exclude_none=True)
