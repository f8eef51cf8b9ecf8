"""Conflux RPC client.

``ConfluxClient`` owns the configuration and the injected collaborators
(transport, address codec, wallet) and exposes the ``cfx`` namespace.

Example:
    >>> from cfx_rpc import ClientConfig, ConfluxClient
    >>> async def main():
    ...     async with await ConfluxClient.create(ClientConfig.for_network("testnet")) as client:
    ...         epoch = await client.cfx.epoch_number()
    ...         pending = client.cfx.send_transaction({"from": sender, "to": receiver, "value": 1})
    ...         receipt = await pending.executed()
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from cfx_rpc import format
from cfx_rpc.address import AddressCodec, Base32AddressCodec
from cfx_rpc.config import ClientConfig
from cfx_rpc.errors import ValidationError
from cfx_rpc.rpc.cfx import Cfx
from cfx_rpc.transport import HttpTransport, Transport
from cfx_rpc.types.transaction import TransactionIntent
from cfx_rpc.utils.logging import get_logger
from cfx_rpc.wallet import Wallet

_logger = get_logger(__name__)

# Python field name -> wire key, e.g. "chain_id" -> "chainId"
_INTENT_KEYS: Dict[str, str] = {
    name: (info.alias or name) for name, info in TransactionIntent.model_fields.items()
}
_WIRE_KEYS = set(_INTENT_KEYS.values())

_QUANTITY_KEYS = (
    "value",
    "gas",
    "gasPrice",
    "storageLimit",
    "nonce",
    "epochHeight",
    "chainId",
    "maxFeePerGas",
    "maxPriorityFeePerGas",
    "type",
)

_LOG_FILTER_KEYS = (
    "fromEpoch",
    "toEpoch",
    "fromBlock",
    "toBlock",
    "blockHashes",
    "address",
    "topics",
    "limit",
    "offset",
)


class ConfluxClient:
    """
    Entry point for talking to a Conflux node.

    Note: Use ``ConfluxClient.create()`` to also resolve the network id
    from the node when the config does not carry one.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[Transport] = None,
        codec: Optional[AddressCodec] = None,
        wallet: Optional[Wallet] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Client configuration.
            transport: Transport to use (defaults to ``HttpTransport(config.url)``).
            codec: Address codec (defaults to ``Base32AddressCodec``).
            wallet: Signer registry (defaults to an empty ``Wallet``).
        """
        self._config = config
        self._network_id = config.network_id
        self._owns_transport = transport is None
        self.transport: Transport = transport or HttpTransport(
            config.url,
            timeout=config.timeout,
            retry=config.retry,
        )
        self.codec: AddressCodec = codec or Base32AddressCodec()
        self.wallet = wallet if wallet is not None else Wallet(self.codec)
        self.cfx = Cfx(self)

    @classmethod
    async def create(
        cls,
        config: ClientConfig,
        *,
        transport: Optional[Transport] = None,
        codec: Optional[AddressCodec] = None,
        wallet: Optional[Wallet] = None,
    ) -> ConfluxClient:
        """
        Factory method that also resolves the network id from the node.

        Returns:
            Initialized ConfluxClient
        """
        client = cls(config, transport=transport, codec=codec, wallet=wallet)
        if client.network_id is None:
            await client.update_network_id()
        return client

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def network_id(self) -> Optional[int]:
        return self._network_id

    async def update_network_id(self) -> int:
        """Query ``cfx_getStatus`` and remember the node's network id."""
        status = await self.cfx.get_status()
        self._network_id = status["networkId"]
        _logger.info("Resolved network id", extra={"network_id": self._network_id})
        return self._network_id

    async def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Send an ad-hoc call that is not in the method table."""
        return await self.cfx.dispatcher.invoke_raw(method, params or [])

    async def get_next_usable_nonce(self, address: str) -> int:
        """Next nonce for ``address``, pending pool transactions included."""
        result = await self.request("txpool_nextNonce", [self.format_address(address)])
        return format.big_uint(result)

    # ------------------------------------------------------------------
    # Formatters used by the method table
    # ------------------------------------------------------------------

    def format_address(self, address: str) -> str:
        """Validate ``address`` and bring it to the codec's canonical form."""
        return self.codec.normalize(address, self._network_id)

    def call_options(self, options: Union[TransactionIntent, Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Camel-cased dict of a call/transaction description.

        Snake-case keys (``gas_price``) are accepted; unknown keys are
        rejected.
        """
        if isinstance(options, TransactionIntent):
            return options.to_dict()

        result: Dict[str, Any] = {}
        for key, value in options.items():
            wire_key = _INTENT_KEYS.get(key, key)
            if wire_key not in _WIRE_KEYS:
                raise ValidationError(f"Unknown transaction field: {key}", field=key)
            if value is not None:
                result[wire_key] = value
        return result

    def format_call_tx(self, options: Union[TransactionIntent, Mapping[str, Any]]) -> Dict[str, Any]:
        """Wire form of a transaction for ``cfx_call`` / ``cfx_estimateGasAndCollateral`` / ``cfx_sendTransaction``."""
        tx = self.call_options(options)
        wire: Dict[str, Any] = {}
        if "from" in tx:
            wire["from"] = self.format_address(tx["from"])
        if "to" in tx:
            wire["to"] = self.format_address(tx["to"])
        for key in _QUANTITY_KEYS:
            if key in tx:
                wire[key] = format.big_uint_hex(tx[key])
        if "data" in tx:
            wire["data"] = format.hex_(tx["data"])
        if "accessList" in tx:
            wire["accessList"] = [
                {
                    "address": self.format_address(entry["address"]),
                    "storageKeys": [format.hex64(key) for key in entry.get("storageKeys", [])],
                }
                for entry in tx["accessList"]
            ]
        return wire

    def format_get_logs(self, options: Mapping[str, Any]) -> Dict[str, Any]:
        """Wire form of a log filter."""
        unknown = set(options) - set(_LOG_FILTER_KEYS)
        if unknown:
            raise ValidationError(f"Unknown log filter option: {sorted(unknown)[0]}", field=sorted(unknown)[0])

        wire: Dict[str, Any] = {}
        for key in ("fromEpoch", "toEpoch"):
            if options.get(key) is not None:
                wire[key] = format.epoch_number(options[key])
        for key in ("fromBlock", "toBlock", "limit", "offset"):
            if options.get(key) is not None:
                wire[key] = format.big_uint_hex(options[key])
        if options.get("blockHashes") is not None:
            wire["blockHashes"] = [format.block_hash(h) for h in options["blockHashes"]]
        if options.get("address") is not None:
            addresses = options["address"]
            if isinstance(addresses, str):
                addresses = [addresses]
            wire["address"] = [self.format_address(a) for a in addresses]
        if options.get("topics") is not None:
            wire["topics"] = [self._format_topic(topic) for topic in options["topics"]]
        return wire

    @staticmethod
    def _format_topic(topic: Any) -> Any:
        if topic is None:
            return None
        if isinstance(topic, (list, tuple)):
            return [format.hex64(t) for t in topic]
        return format.hex64(topic)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the transport if the client created it."""
        if self._owns_transport and hasattr(self.transport, "aclose"):
            await self.transport.aclose()

    async def __aenter__(self) -> ConfluxClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
