"""
Scalar formatters.

Each formatter converts one native value to its wire representation (request
side) or one wire value to its native representation (response side).
Formatters are ``Formatter`` instances: plain callables that raise
``FormatError`` on bad input and can be turned into a nullable union with
``.or_null()``.

Hex and integer conversions go through ``eth_utils``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Union

from eth_utils import (
    add_0x_prefix,
    apply_formatter_to_array,
    apply_formatters_to_dict,
    is_0x_prefixed,
    is_bytes,
    is_hexstr,
    remove_0x_prefix,
    to_hex,
    to_int,
)

from cfx_rpc.constants import EPOCH_TAGS
from cfx_rpc.errors import FormatError

MAX_UINT256 = 2**256 - 1


class Formatter:
    """
    A named single-value conversion.

    Wraps ``fn`` so that ``ValueError``/``TypeError`` surface as
    ``FormatError`` carrying the formatter name.
    """

    def __init__(self, fn: Callable[[Any], Any], name: Optional[str] = None) -> None:
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "formatter")

    def __call__(self, value: Any) -> Any:
        try:
            return self._fn(value)
        except FormatError:
            raise
        except (ValueError, TypeError, KeyError) as e:
            raise FormatError(self.name, value, reason=str(e)) from e

    def __repr__(self) -> str:
        return f"<Formatter {self.name}>"

    def or_null(self) -> Formatter:
        """Union of this formatter with pass-through ``None``."""
        return Formatter(lambda v: None if v is None else self(v), f"{self.name}|null")


def formatter(fn: Callable[[Any], Any]) -> Formatter:
    """Decorator turning a function into a ``Formatter``."""
    return Formatter(fn, fn.__name__)


def array_of(item: Callable[[Any], Any], name: Optional[str] = None) -> Formatter:
    """Formatter applying ``item`` to every element of a list."""

    def _format(value: Any) -> List[Any]:
        if not isinstance(value, (list, tuple)):
            raise TypeError("expected a list")
        return list(apply_formatter_to_array(item, value))

    return Formatter(_format, name or f"[{getattr(item, 'name', 'item')}]")


def dict_of(fields: Dict[str, Callable[[Any], Any]], name: str) -> Formatter:
    """
    Formatter applying per-key formatters to a dict.

    Keys without a formatter are kept as is; keys with ``None`` values are
    passed through untouched.
    """
    guarded = {key: _none_safe(fn) for key, fn in fields.items()}

    def _format(value: Any) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise TypeError("expected an object")
        return dict(apply_formatters_to_dict(guarded, value))

    return Formatter(_format, name)


def _none_safe(fn: Callable[[Any], Any]) -> Callable[[Any], Any]:
    return lambda v: None if v is None else fn(v)


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


@formatter
def any_(value: Any) -> Any:
    return value


@formatter
def boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError("expected a bool")
    return value


@formatter
def big_uint(value: Any) -> int:
    """Wire quantity (hex string or integer) to a non-negative ``int``."""
    if isinstance(value, bool):
        raise TypeError("bool is not a quantity")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and is_0x_prefixed(value):
        number = to_int(hexstr=value)
    elif isinstance(value, str):
        number = int(value, 10)
    elif isinstance(value, Decimal) and value == value.to_integral_value():
        number = int(value)
    else:
        raise TypeError(f"cannot read {type(value).__name__} as integer")
    if number < 0:
        raise ValueError("must be non-negative")
    return number


@formatter
def big_uint_hex(value: Any) -> str:
    """Non-negative integer (or integer-like string) to a hex quantity."""
    return to_hex(big_uint(value))


@formatter
def hex_(value: Any) -> str:
    """Bytes, hex string or integer to a lowercase 0x-prefixed hex string."""
    if is_bytes(value):
        return to_hex(value)
    if isinstance(value, str):
        if value in ("", "0x"):
            return "0x"
        if not is_hexstr(value):
            raise ValueError("not a hex string")
        return add_0x_prefix(value.lower())
    if isinstance(value, int) and not isinstance(value, bool):
        return to_hex(value)
    raise TypeError(f"cannot read {type(value).__name__} as hex")


def _fixed_hex(length: int) -> Formatter:
    def _format(value: Any) -> str:
        result = hex_(value)
        if len(remove_0x_prefix(result)) != length:
            raise ValueError(f"expected {length} hex characters")
        return result

    return Formatter(_format, f"hex{length}")


hex32 = _fixed_hex(32)
hex64 = _fixed_hex(64)
block_hash = Formatter(hex64, "block_hash")
transaction_hash = Formatter(hex64, "transaction_hash")


@formatter
def fixed64(value: Any) -> Decimal:
    """32-byte hex fraction of ``2**256 - 1`` to a ``Decimal`` in [0, 1]."""
    return Decimal(to_int(hexstr=hex64(value))) / Decimal(MAX_UINT256)


# ---------------------------------------------------------------------------
# Epoch references
# ---------------------------------------------------------------------------


@formatter
def epoch_number(value: Any) -> str:
    """Epoch tag or number to its wire form."""
    if isinstance(value, str) and value in EPOCH_TAGS:
        return value
    return big_uint_hex(value)


epoch_number_or_undefined = epoch_number.or_null()


@formatter
def epoch_number_or_block_hash(value: Any) -> Union[str, Dict[str, Any]]:
    """
    Epoch tag/number, or a block reference object.

    A 32-byte hash string becomes ``{"blockHash": hash}``; an object with a
    ``blockHash`` key keeps its ``requirePivot`` flag.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        reference: Dict[str, Any] = {"blockHash": block_hash(value["blockHash"])}
        if "requirePivot" in value:
            reference["requirePivot"] = boolean(value["requirePivot"])
        return reference
    if isinstance(value, str) and is_0x_prefixed(value) and len(value) == 66:
        return {"blockHash": block_hash(value)}
    return epoch_number(value)

