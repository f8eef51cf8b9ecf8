"""
RPC call pipeline.

- ``registry``: method descriptors and the registry
- ``dispatcher``: the generic call pipeline
- ``methods``: the ``cfx_*`` method table
- ``pending``: pending transaction handles
- ``population``: the transaction population engine
- ``cfx``: the ``cfx`` namespace tying them together
"""

from cfx_rpc.rpc.cfx import Cfx
from cfx_rpc.rpc.dispatcher import Dispatcher
from cfx_rpc.rpc.pending import PendingTransaction
from cfx_rpc.rpc.population import TransactionPopulator
from cfx_rpc.rpc.registry import MethodDescriptor, MethodRegistry

__all__ = [
    "Cfx",
    "Dispatcher",
    "MethodDescriptor",
    "MethodRegistry",
    "PendingTransaction",
    "TransactionPopulator",
]
