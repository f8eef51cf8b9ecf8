"""
RPC-related exceptions for the cfx-rpc client.

These exceptions are raised while shaping, dispatching or decoding calls
to a Conflux node, and while resolving or tracking transactions.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from cfx_rpc.errors.base import CfxError


class ValidationError(CfxError):
    """
    Raised when caller input is malformed or conflicting.

    Validation errors are always detected before any network I/O.

    Example:
        >>> raise ValidationError("gas must be non-negative", field="gas")
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)

        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field
        self.value = value


class FormatError(ValidationError):
    """
    Raised when a value cannot be converted to its wire representation.

    Example:
        >>> raise FormatError("hex64", "0x12")
    """

    def __init__(
        self,
        formatter: str,
        value: Any,
        *,
        reason: Optional[str] = None,
    ) -> None:
        message = f"{formatter}: cannot format {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, value=value, details={"formatter": formatter})
        self.code = "FORMAT_ERROR"
        self.formatter = formatter
        self.reason = reason


class InvalidAddressError(ValidationError):
    """Raised when an address cannot be decoded or normalized."""

    def __init__(self, address: Any, *, reason: Optional[str] = None) -> None:
        message = f"Invalid address: {address!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, value=address)
        self.code = "INVALID_ADDRESS"
        self.address = address
        self.reason = reason


class LogFilterError(ValidationError):
    """
    Raised when a log filter mixes mutually exclusive options.

    Example:
        >>> raise LogFilterError("blockHashes", "fromEpoch")
    """

    def __init__(self, *options: str) -> None:
        super().__init__(
            "OverrideError, do not use `blockHashes` with `fromEpoch` or `toEpoch`, "
            "cause only `blockHashes` will take effect",
            details={"options": list(options)},
        )
        self.code = "LOG_FILTER_OVERRIDE"
        self.options = options


class NetworkIdMismatchError(ValidationError, AssertionError):
    """
    Raised when an address encodes a network id other than the client's.

    Also an AssertionError, matching how callers of simulate-style calls
    check for a failed precondition.
    """

    def __init__(self, address: str, address_network_id: int, network_id: int) -> None:
        super().__init__(
            "`to` address's networkId is not match current RPC's networkId",
            field="to",
            value=address,
            details={
                "address_network_id": address_network_id,
                "network_id": network_id,
            },
        )
        self.code = "NETWORK_ID_MISMATCH"
        self.address_network_id = address_network_id
        self.network_id = network_id


class UnknownMethodError(CfxError, AttributeError):
    """Raised when a method name is not present in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Unknown RPC method: {name}",
            code="UNKNOWN_METHOD",
            details={"name": name},
        )
        self.name = name


class RpcError(CfxError):
    """
    Raised when the node answers a call with a JSON-RPC error object.

    Attributes:
        rpc_code: JSON-RPC error code reported by the node.
        data: Optional ``data`` member of the error object.
    """

    def __init__(
        self,
        message: str,
        *,
        rpc_code: Optional[int] = None,
        data: Any = None,
        method: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if rpc_code is not None:
            details["rpc_code"] = rpc_code
        if data is not None:
            details["data"] = data

        super().__init__(message, code="RPC_ERROR", method=method, details=details)
        self.rpc_code = rpc_code
        self.data = data


class TransportError(CfxError):
    """Raised when the node cannot be reached or answers with a bad HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        method: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if url:
            details["url"] = url
        if status_code is not None:
            details["status_code"] = status_code

        super().__init__(message, code="TRANSPORT_ERROR", method=method, details=details)
        self.url = url
        self.status_code = status_code


class ContractRevertError(RpcError):
    """
    Raised when a simulated call reverts with decodable revert data.

    Attributes:
        reason: Decoded ``Error(string)`` message, if any.
        panic_code: Decoded ``Panic(uint256)`` code, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: Optional[str] = None,
        panic_code: Optional[int] = None,
        rpc_code: Optional[int] = None,
        data: Any = None,
        method: Optional[str] = None,
    ) -> None:
        super().__init__(message, rpc_code=rpc_code, data=data, method=method)
        self.code = "CONTRACT_REVERT"
        self.reason = reason
        self.panic_code = panic_code
        if reason is not None:
            self.details["reason"] = reason
        if panic_code is not None:
            self.details["panic_code"] = panic_code


class PendingTransactionTimeoutError(CfxError):
    """Raised when a pending transaction does not reach a state in time."""

    def __init__(self, tx_hash: str, stage: str, timeout: float) -> None:
        super().__init__(
            f"Transaction {tx_hash} not {stage} within {timeout}s",
            code="PENDING_TIMEOUT",
            details={"tx_hash": tx_hash, "stage": stage, "timeout_s": timeout},
        )
        self.tx_hash = tx_hash
        self.stage = stage
        self.timeout = timeout


class TransactionExecutionError(CfxError):
    """Raised when a mined transaction reports a failed outcome status."""

    def __init__(self, tx_hash: str, receipt: Dict[str, Any]) -> None:
        super().__init__(
            f"Transaction {tx_hash} executed with failure: {receipt.get('txExecErrorMsg')}",
            code="EXECUTION_FAILED",
            details={
                "tx_hash": tx_hash,
                "outcome_status": receipt.get("outcomeStatus"),
            },
        )
        self.tx_hash = tx_hash
        self.receipt = receipt


class WalletError(CfxError):
    """Raised when the wallet has no signer for an address."""

    def __init__(self, address: str) -> None:
        super().__init__(
            f"Wallet does not have account for {address}",
            code="WALLET_ACCOUNT_NOT_FOUND",
            details={"address": address},
        )
        self.address = address
