"""Constants for the cfx-rpc client.

This module defines the protocol constants used when shaping calls and
populating transactions: fixed transfer costs, gas bounds, fee defaults,
transaction type ids and revert selectors.
"""

from fractions import Fraction

# Transfer to a user account without data
TRANSACTION_GAS = 21_000
TRANSACTION_STORAGE_LIMIT = 0

# Gas Constants
MAX_GAS_LIMIT = 15_000_000
MIN_GAS_PRICE = 1  # Drip, substituted when the node reports zero
DEFAULT_GAS_RATIO = 1.1
DEFAULT_STORAGE_RATIO = 1.1

# maxFeePerGas = maxPriorityFeePerGas + baseFeePerGas * BASE_FEE_BUFFER
BASE_FEE_BUFFER = Fraction(4, 3)

# Transaction type ids
TRANSACTION_TYPE_LEGACY = 0
TRANSACTION_TYPE_EIP2930 = 1
TRANSACTION_TYPE_EIP1559 = 2

# Revert data selectors
REVERT_SELECTOR = "0x08c379a0"  # Error(string)
PANIC_SELECTOR = "0x4e487b71"  # Panic(uint256)

# Epoch tags accepted by the node
EPOCH_TAGS = (
    "earliest",
    "latest_checkpoint",
    "latest_finalized",
    "latest_confirmed",
    "latest_state",
    "latest_mined",
)

# Network Constants
RPC_TIMEOUT_SECONDS = 30
MAINNET_ID = 1029
TESTNET_ID = 1

__all__ = [
    "TRANSACTION_GAS",
    "TRANSACTION_STORAGE_LIMIT",
    "MAX_GAS_LIMIT",
    "MIN_GAS_PRICE",
    "DEFAULT_GAS_RATIO",
    "DEFAULT_STORAGE_RATIO",
    "BASE_FEE_BUFFER",
    "TRANSACTION_TYPE_LEGACY",
    "TRANSACTION_TYPE_EIP2930",
    "TRANSACTION_TYPE_EIP1559",
    "REVERT_SELECTOR",
    "PANIC_SELECTOR",
    "EPOCH_TAGS",
    "RPC_TIMEOUT_SECONDS",
    "MAINNET_ID",
    "TESTNET_ID",
]
