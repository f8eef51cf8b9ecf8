"""
Exception hierarchy for the cfx-rpc client.

All exceptions inherit from CfxError.
"""

from cfx_rpc.errors.base import CfxError
from cfx_rpc.errors.rpc import (
    ContractRevertError,
    FormatError,
    InvalidAddressError,
    LogFilterError,
    NetworkIdMismatchError,
    PendingTransactionTimeoutError,
    RpcError,
    TransactionExecutionError,
    TransportError,
    UnknownMethodError,
    ValidationError,
    WalletError,
)

__all__ = [
    "CfxError",
    # Validation
    "ValidationError",
    "FormatError",
    "InvalidAddressError",
    "LogFilterError",
    "NetworkIdMismatchError",
    # Dispatch
    "UnknownMethodError",
    "RpcError",
    "TransportError",
    "ContractRevertError",
    # Transactions
    "PendingTransactionTimeoutError",
    "TransactionExecutionError",
    "WalletError",
]
