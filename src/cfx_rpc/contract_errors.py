"""
Structured-error decoder for simulated calls.

Nodes report a reverted ``cfx_call`` / ``cfx_estimateGasAndCollateral`` as a
JSON-RPC error whose ``data`` member carries the ABI-encoded revert payload,
sometimes embedded in a longer message. ``decode_error`` turns such errors
into ``ContractRevertError`` and leaves everything else alone.
"""

from __future__ import annotations

import re
from typing import Any, Optional, Tuple

from eth_abi import decode
from eth_abi.exceptions import DecodingError

from cfx_rpc.constants import PANIC_SELECTOR, REVERT_SELECTOR
from cfx_rpc.errors import ContractRevertError, RpcError

_HEX_PAYLOAD = re.compile(r"0x[0-9a-fA-F]{8,}")


def _find_payload(data: Any) -> Optional[str]:
    if not isinstance(data, str):
        return None
    for match in _HEX_PAYLOAD.findall(data):
        lowered = match.lower()
        if lowered.startswith(REVERT_SELECTOR) or lowered.startswith(PANIC_SELECTOR):
            return lowered
    return None


def decode_revert_data(payload: str) -> Tuple[Optional[str], Optional[int]]:
    """
    Decode ``Error(string)`` or ``Panic(uint256)`` revert data.

    Args:
        payload: 0x-prefixed hex revert data, selector included.

    Returns:
        ``(reason, panic_code)``; both ``None`` if the payload is not decodable.
    """
    selector, body = payload[:10].lower(), payload[10:]
    try:
        raw = bytes.fromhex(body)
        if selector == REVERT_SELECTOR:
            (reason,) = decode(["string"], raw)
            return reason, None
        if selector == PANIC_SELECTOR:
            (code,) = decode(["uint256"], raw)
            return None, code
    except (ValueError, DecodingError):
        # ValueError: odd-length hex; DecodingError: truncated ABI data
        return None, None
    return None, None


def decode_error(error: BaseException) -> BaseException:
    """
    Decode a simulation failure into structured revert information.

    Args:
        error: Exception raised while dispatching a simulate-style call.

    Returns:
        A ``ContractRevertError`` if ``error`` is an ``RpcError`` carrying
        decodable revert data, otherwise ``error`` itself.
    """
    if not isinstance(error, RpcError) or isinstance(error, ContractRevertError):
        return error

    payload = _find_payload(error.data) or _find_payload(error.message)
    if payload is None:
        return error

    reason, panic_code = decode_revert_data(payload)
    if reason is None and panic_code is None:
        return error

    if reason is not None:
        message = f"execution reverted: {reason}"
    else:
        message = f"execution reverted: panic 0x{panic_code:02x}"
    decoded = ContractRevertError(
        message,
        reason=reason,
        panic_code=panic_code,
        rpc_code=error.rpc_code,
        data=error.data,
        method=error.method,
    )
    decoded.__cause__ = error
    return decoded
