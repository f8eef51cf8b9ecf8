"""
cfx-rpc - async JSON-RPC client for Conflux Core Space.

Quick Start:
    >>> from cfx_rpc import ClientConfig, ConfluxClient
    >>> import asyncio
    >>>
    >>> async def main():
    ...     config = ClientConfig.for_network("testnet")
    ...     async with ConfluxClient(config) as client:
    ...         balance = await client.cfx.get_balance("0x1b716c51381e76900ebaa7999a488511a4e1fd0a")
    ...         print(f"Balance: {balance} drip")
    ...
    >>> asyncio.run(main())

Modules:
- `client`: ConfluxClient, the entry point
- `config`: ClientConfig and network presets
- `rpc`: method registry, dispatcher, population engine, pending transactions
- `transport`: Transport protocol and the httpx-based HttpTransport
- `address`: AddressCodec protocol and the default hex codec
- `wallet`: Signer protocol and the signer registry
- `errors`: Exception hierarchy
- `utils`: Logging and retry helpers
"""

from cfx_rpc.version import __version__, __version_info__

# Client
from cfx_rpc.client import ConfluxClient
from cfx_rpc.config import (
    NETWORKS,
    ClientConfig,
    Network,
    NetworkConfig,
    get_network_config,
)

# RPC
from cfx_rpc.rpc import (
    Cfx,
    Dispatcher,
    MethodDescriptor,
    MethodRegistry,
    PendingTransaction,
    TransactionPopulator,
)

# Collaborators
from cfx_rpc.address import (
    AddressCodec,
    AddressType,
    Base32AddressCodec,
    DecodedAddress,
    HexAddressCodec,
)
from cfx_rpc.transport import HttpTransport, Transport
from cfx_rpc.wallet import SignedTransaction, Signer, Wallet

# Types
from cfx_rpc.types import REQUIRED_FIELDS, TransactionIntent, TransactionType

# Errors
from cfx_rpc.errors import (
    CfxError,
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
from cfx_rpc.contract_errors import decode_error

# Utils
from cfx_rpc.utils import RetryConfig, configure_logging, get_logger

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # Client
    "ConfluxClient",
    "ClientConfig",
    "Network",
    "NetworkConfig",
    "NETWORKS",
    "get_network_config",
    # RPC
    "Cfx",
    "Dispatcher",
    "MethodDescriptor",
    "MethodRegistry",
    "PendingTransaction",
    "TransactionPopulator",
    # Collaborators
    "AddressCodec",
    "AddressType",
    "DecodedAddress",
    "HexAddressCodec",
    "Base32AddressCodec",
    "Transport",
    "HttpTransport",
    "Signer",
    "SignedTransaction",
    "Wallet",
    # Types
    "TransactionIntent",
    "TransactionType",
    "REQUIRED_FIELDS",
    # Errors
    "CfxError",
    "ValidationError",
    "FormatError",
    "InvalidAddressError",
    "LogFilterError",
    "NetworkIdMismatchError",
    "UnknownMethodError",
    "RpcError",
    "TransportError",
    "ContractRevertError",
    "PendingTransactionTimeoutError",
    "TransactionExecutionError",
    "WalletError",
    "decode_error",
    # Utils
    "RetryConfig",
    "configure_logging",
    "get_logger",
]
