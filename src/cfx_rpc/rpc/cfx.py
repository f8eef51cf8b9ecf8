"""
The ``cfx`` namespace.

Every registered method is reachable as an async attribute under its Python
name, its wire name and its alias (``cfx.get_balance``,
``cfx.cfx_getBalance``; ``cfx.gas_price``, ``cfx.get_gas_price``). On top of
the table live the calls that need more than formatting: transaction
population and sending, and the guarded ``call`` / ``estimate`` pair.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Mapping, Union

from cfx_rpc import format
from cfx_rpc.contract_errors import decode_error
from cfx_rpc.errors import NetworkIdMismatchError, RpcError
from cfx_rpc.rpc.dispatcher import Dispatcher
from cfx_rpc.rpc.methods import cfx_methods
from cfx_rpc.rpc.pending import PendingTransaction
from cfx_rpc.rpc.population import IntentLike, TransactionPopulator, as_intent
from cfx_rpc.rpc.registry import MethodDescriptor, MethodRegistry
from cfx_rpc.types import formatters as cfx_format
from cfx_rpc.types.transaction import TransactionIntent
from cfx_rpc.utils.logging import get_logger

if TYPE_CHECKING:
    from cfx_rpc.client import ConfluxClient

_logger = get_logger(__name__)

CallOptions = Union[TransactionIntent, Mapping[str, Any]]


class Cfx:
    """
    RPC methods of the ``cfx`` namespace bound to one client.

    Example:
        ```python
        balance = await client.cfx.get_balance(address)
        block = await client.cfx.get_block_by_epoch_number("latest_state", False)
        receipt = await client.cfx.send_transaction(intent).executed()
        ```
    """

    def __init__(self, client: ConfluxClient) -> None:
        self.client = client
        self.registry = MethodRegistry(cfx_methods(client))
        self.dispatcher = Dispatcher(client.transport)
        self._populator = TransactionPopulator(self)

    def __getattr__(self, name: str) -> Callable[..., Awaitable[Any]]:
        registry = self.__dict__.get("registry")
        if registry is None or name.startswith("__"):
            raise AttributeError(name)
        return self._bind(registry.lookup(name))

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self.registry.names()))

    def _bind(self, descriptor: MethodDescriptor) -> Callable[..., Awaitable[Any]]:
        dispatcher = self.dispatcher

        async def method(*args: Any) -> Any:
            return await dispatcher.invoke(descriptor, *args)

        method.__name__ = descriptor.name
        method.__qualname__ = f"Cfx.{descriptor.name}"
        method.__doc__ = f"Call ``{descriptor.method}``."
        method.descriptor = descriptor  # type: ignore[attr-defined]
        return method

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def send_raw_transaction(self, raw_transaction: Union[str, bytes]) -> PendingTransaction:
        """
        Submit a signed transaction.

        The raw payload is validated immediately; the send itself happens
        when the returned handle is first awaited.
        """
        descriptor = self.registry.lookup("cfx_sendRawTransaction")
        method, params = Dispatcher.build_request(descriptor, (raw_transaction,))
        return PendingTransaction(self, self.dispatcher.invoke_raw, (method, params))

    def send_transaction(self, intent: IntentLike, *extra: Any) -> PendingTransaction:
        """
        Submit a transaction.

        If the client wallet holds a signer for ``from`` the intent is
        populated, signed locally and sent raw. Otherwise it is passed to
        ``cfx_sendTransaction`` for the node to sign; ``extra`` (e.g. an
        unlock password) is appended to that call's params.
        """
        return PendingTransaction(self, self._send_transaction, (intent, *extra))

    async def _send_transaction(self, intent: IntentLike, *extra: Any) -> str:
        intent = as_intent(intent)
        if self.client.wallet.has(intent.from_):
            raw_transaction = await self.populate_and_sign_transaction(intent)
            descriptor = self.registry.lookup("cfx_sendRawTransaction")
            return await self.dispatcher.invoke(descriptor, raw_transaction)

        return await self.dispatcher.invoke_raw(
            "cfx_sendTransaction",
            [self.client.format_call_tx(intent), *extra],
        )

    async def populate_transaction(self, intent: IntentLike) -> TransactionIntent:
        """Fill in nonce, chainId, epochHeight, type, gas, storageLimit and fees."""
        return await self._populator.populate(intent)

    async def populate_and_sign_transaction(self, intent: IntentLike) -> str:
        """
        Populate the intent and sign it with the wallet signer of ``from``.

        Returns:
            Hex encoded raw transaction.

        Raises:
            WalletError: If the wallet has no signer for ``from``.
        """
        intent = await self.populate_transaction(intent)
        signer = self.client.wallet.get(intent.from_)
        signed = await signer.sign_transaction(intent)
        return signed.serialize()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def _check_network_id(self, options: Dict[str, Any]) -> None:
        to = options.get("to")
        network_id = self.client.network_id
        codec = self.client.codec
        if not to or network_id is None or not codec.has_network_prefix(to):
            return
        address_network_id = codec.decode(to).network_id
        if address_network_id != network_id:
            raise NetworkIdMismatchError(to, address_network_id, network_id)

    def build_call_request(self, options: CallOptions, epoch: Any = None) -> Dict[str, Any]:
        """Wire request of ``call`` without sending it."""
        params = [
            self.client.format_call_tx(options),
            format.epoch_number_or_block_hash(epoch),
        ]
        if params[-1] is None:
            params.pop()
        return {"request": {"method": "cfx_call", "params": params}}

    def build_estimate_request(self, options: CallOptions, epoch: Any = None) -> Dict[str, Any]:
        """Wire request of ``estimate_gas_and_collateral`` plus its result decoder."""
        params = [
            self.client.format_call_tx(options),
            format.epoch_number_or_undefined(epoch),
        ]
        if params[-1] is None:
            params.pop()
        return {
            "request": {"method": "cfx_estimateGasAndCollateral", "params": params},
            "decoder": cfx_format.estimate,
        }

    async def _simulate(self, request: Dict[str, Any]) -> Any:
        try:
            return await self.dispatcher.invoke_raw(request["method"], request["params"])
        except RpcError as e:
            decoded = decode_error(e)
            if decoded is e:
                raise
            _logger.debug(
                "Simulation reverted",
                extra={"rpc_method": request["method"], "error": str(decoded)},
            )
            raise decoded from e

    async def call(self, options: CallOptions, epoch: Any = None) -> Any:
        """
        Virtually call a contract and return its output data.

        Raises:
            NetworkIdMismatchError: If ``to`` belongs to another network.
            ContractRevertError: If the call reverts with decodable data.
        """
        self._check_network_id(self.client.call_options(options))
        built = self.build_call_request(options, epoch)
        return await self._simulate(built["request"])

    async def estimate_gas_and_collateral(self, options: CallOptions, epoch: Any = None) -> Dict[str, int]:
        """
        Estimate gas and storage collateral of a transaction.

        Returns:
            ``{"gasUsed", "gasLimit", "storageCollateralized"}`` as ints.
        """
        self._check_network_id(self.client.call_options(options))
        built = self.build_estimate_request(options, epoch)
        result = await self._simulate(built["request"])
        return built["decoder"](result)

    # ------------------------------------------------------------------
    # Receipts
    # ------------------------------------------------------------------

    async def get_epoch_receipts_by_pivot_block_hash(self, pivot_block_hash: str) -> List[List[Dict[str, Any]]]:
        """All receipts of the epoch whose pivot block is ``pivot_block_hash``."""
        result = await self.dispatcher.invoke_raw(
            "cfx_getEpochReceipts",
            [f"hash:{format.block_hash(pivot_block_hash)}"],
        )
        return cfx_format.epoch_receipts(result)

