"""
Address codec interface.

The client never parses addresses itself; it asks an ``AddressCodec`` to
validate, normalize and classify them. ``HexAddressCodec`` handles hex-form
addresses, where the leading nibble carries the address type and no network
id is embedded. ``Base32AddressCodec`` is the client default: it reads and
writes CIP-37 base32 addresses (``cfx:...``, ``cfxtest:...``,
``net<id>:...``) through ``cfx-address`` and still accepts hex input.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, runtime_checkable

from cfx_address import Base32Address
from eth_utils import is_hex_address, to_normalized_address

from cfx_rpc.errors import InvalidAddressError

__all__ = [
    "AddressType",
    "DecodedAddress",
    "AddressCodec",
    "HexAddressCodec",
    "Base32AddressCodec",
]


class AddressType(str, Enum):
    USER = "user"
    CONTRACT = "contract"
    BUILTIN = "builtin"
    NULL = "null"


@dataclass(frozen=True)
class DecodedAddress:
    hex_address: str
    address_type: AddressType
    network_id: Optional[int] = None


@runtime_checkable
class AddressCodec(Protocol):
    """What the client needs from an address implementation."""

    def is_valid(self, address: str) -> bool:
        ...

    def decode(self, address: str) -> DecodedAddress:
        ...

    def has_network_prefix(self, address: str) -> bool:
        ...

    def normalize(self, address: str, network_id: Optional[int] = None) -> str:
        ...


_TYPE_BY_NIBBLE = {
    "0": AddressType.BUILTIN,
    "1": AddressType.USER,
    "8": AddressType.CONTRACT,
}


class HexAddressCodec:
    """
    Codec for 20-byte hex addresses.

    The first hex digit encodes the type: ``1`` user, ``8`` contract,
    ``0`` builtin (the all-zero address is the null address).
    """

    def is_valid(self, address: str) -> bool:
        if not isinstance(address, str) or not address.startswith(("0x", "0X")):
            return False
        if not is_hex_address(address):
            return False
        return address[2].lower() in _TYPE_BY_NIBBLE

    def decode(self, address: str) -> DecodedAddress:
        if not self.is_valid(address):
            raise InvalidAddressError(
                address,
                reason="expected 0x followed by 40 hex characters with a type nibble of 0, 1 or 8",
            )
        hex_address = to_normalized_address(address)
        if int(hex_address, 16) == 0:
            address_type = AddressType.NULL
        else:
            address_type = _TYPE_BY_NIBBLE[hex_address[2]]
        return DecodedAddress(hex_address=hex_address, address_type=address_type)

    def has_network_prefix(self, address: str) -> bool:
        return False

    def normalize(self, address: str, network_id: Optional[int] = None) -> str:
        return self.decode(address).hex_address


class Base32AddressCodec:
    """
    Codec for CIP-37 base32 addresses.

    Base32 input keeps its own network id and is brought to the lower-case,
    non-verbose form. Hex input is encoded for the requested network when
    one is given and stays hex otherwise, so a client that has not resolved
    its network id yet still works with hex addresses.

    Example:
        ```python
        codec = Base32AddressCodec()
        codec.normalize("0x1b716c51381e76900ebaa7999a488511a4e1fd0a", 1)  # cfxtest:...
        codec.decode("cfx:...").network_id  # 1029
        ```
    """

    def __init__(self) -> None:
        self._hex = HexAddressCodec()

    def has_network_prefix(self, address: str) -> bool:
        return isinstance(address, str) and Base32Address.is_valid_base32(address)

    def is_valid(self, address: str) -> bool:
        try:
            self.decode(address)
        except InvalidAddressError:
            return False
        return True

    def decode(self, address: str) -> DecodedAddress:
        if not self.has_network_prefix(address):
            return self._hex.decode(address)
        parts = Base32Address.decode(address)
        # the hex codec re-checks the type nibble
        decoded = self._hex.decode(to_normalized_address(parts["hex_address"]))
        return DecodedAddress(
            hex_address=decoded.hex_address,
            address_type=decoded.address_type,
            network_id=parts["network_id"],
        )

    def normalize(self, address: str, network_id: Optional[int] = None) -> str:
        decoded = self.decode(address)
        if decoded.network_id is not None:
            network_id = decoded.network_id
        if network_id is None:
            return decoded.hex_address
        return str(Base32Address.encode_base32(decoded.hex_address, network_id))
