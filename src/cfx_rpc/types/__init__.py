"""
Typed values exchanged with the node.

- ``transaction``: ``TransactionIntent`` and ``TransactionType``
- ``formatters``: response formatters for structured results
"""

from cfx_rpc.types.transaction import REQUIRED_FIELDS, TransactionIntent, TransactionType

__all__ = [
    "TransactionIntent",
    "TransactionType",
    "REQUIRED_FIELDS",
]
