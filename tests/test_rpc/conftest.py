"""
Shared fixtures for RPC pipeline tests.

``FakeTransport`` stands in for the node: it records every call and answers
from a method -> response table. A response may be a plain value, an
exception instance (raised), a callable (called with the params) or a
``Sequenced`` list of responses consumed one per call.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from cfx_rpc import ClientConfig, ConfluxClient
from cfx_rpc.address import AddressType, DecodedAddress, HexAddressCodec


# =============================================================================
# Test Constants
# =============================================================================

# Hex addresses; the first nibble is the address type
ALICE = "0x1" + "a" * 39
BOB = "0x1" + "b" * 39
CONTRACT = "0x8" + "c" * 39

TX_HASH = "0x" + "ab" * 32
BLOCK_HASH = "0x" + "cd" * 32

RAW_TX = "0x" + "f8" * 16

TEST_URL = "http://localhost:12537"


# =============================================================================
# Fakes
# =============================================================================


class Sequenced:
    """Responses handed out one per call; the last one repeats."""

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)

    def next(self) -> Any:
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]


class FakeTransport:
    """In-memory transport recording ``(method, params)`` pairs."""

    def __init__(self, responses: Optional[Dict[str, Any]] = None) -> None:
        self.responses: Dict[str, Any] = dict(responses or {})
        self.calls: List[Tuple[str, List[Any]]] = []

    async def send(self, method: str, params: List[Any]) -> Any:
        self.calls.append((method, params))
        if method not in self.responses:
            raise LookupError(f"unexpected call to {method}")

        response = self.responses[method]
        if isinstance(response, Sequenced):
            response = response.next()
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(params)
        return response

    @property
    def methods(self) -> List[str]:
        return [method for method, _ in self.calls]

    def params_of(self, method: str) -> List[Any]:
        """Params of the last call to ``method``."""
        for called, params in reversed(self.calls):
            if called == method:
                return params
        raise AssertionError(f"{method} was not called")


class FakeSignedTransaction:
    def __init__(self, raw: str) -> None:
        self._raw = raw

    def serialize(self) -> str:
        return self._raw


class FakeSigner:
    """Signer that records intents and returns a fixed payload."""

    def __init__(self, address: str, raw: str = RAW_TX) -> None:
        self.address = address
        self.raw = raw
        self.signed: List[Any] = []

    async def sign_transaction(self, intent: Any) -> FakeSignedTransaction:
        self.signed.append(intent.model_copy())
        return FakeSignedTransaction(self.raw)


class PrefixedAddressCodec:
    """
    Codec for ``net<id>:<hex>`` addresses.

    Stands in for network-prefixed address encodings.
    """

    def __init__(self) -> None:
        self._hex = HexAddressCodec()

    def _split(self, address: str) -> Tuple[Optional[int], str]:
        if ":" not in address:
            return None, address
        prefix, hex_address = address.split(":", 1)
        return int(prefix[len("net"):]), hex_address

    def is_valid(self, address: str) -> bool:
        try:
            _, hex_address = self._split(address)
        except ValueError:
            return False
        return self._hex.is_valid(hex_address)

    def decode(self, address: str) -> DecodedAddress:
        network_id, hex_address = self._split(address)
        decoded = self._hex.decode(hex_address)
        return DecodedAddress(decoded.hex_address, decoded.address_type, network_id)

    def has_network_prefix(self, address: str) -> bool:
        return ":" in address

    def normalize(self, address: str, network_id: Optional[int] = None) -> str:
        hex_address = self.decode(address).hex_address
        if network_id is None:
            return hex_address
        return f"net{network_id}:{hex_address}"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(url=TEST_URL, network_id=1)


@pytest.fixture
def client(config: ClientConfig, transport: FakeTransport) -> ConfluxClient:
    """Client that keeps hex addresses on the wire."""
    return ConfluxClient(config, transport=transport, codec=HexAddressCodec())


@pytest.fixture
def base32_client(config: ClientConfig, transport: FakeTransport) -> ConfluxClient:
    """Client with the default base32 codec."""
    return ConfluxClient(config, transport=transport)


@pytest.fixture
def prefixed_client(config: ClientConfig, transport: FakeTransport) -> ConfluxClient:
    return ConfluxClient(config, transport=transport, codec=PrefixedAddressCodec())


def receipt_response(outcome_status: str = "0x0", **extra: Any) -> Dict[str, Any]:
    """Raw receipt object as a node would return it."""
    receipt = {
        "transactionHash": TX_HASH,
        "blockHash": BLOCK_HASH,
        "epochNumber": "0x64",
        "index": "0x0",
        "outcomeStatus": outcome_status,
        "gasUsed": "0x5208",
        "gasFee": "0x5208",
        "storageCollateralized": "0x0",
        "logs": [],
    }
    receipt.update(extra)
    return receipt
