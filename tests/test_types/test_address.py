"""
Tests for the address codecs and the signer wallet.
"""

import pytest
from cfx_address import Base32Address

from cfx_rpc.address import AddressCodec, AddressType, Base32AddressCodec, HexAddressCodec
from cfx_rpc.errors import InvalidAddressError, WalletError
from cfx_rpc.wallet import Signer, Wallet

USER = "0x1" + "a" * 39
CONTRACT = "0x8" + "c" * 39
BUILTIN = "0x0888000000000000000000000000000000000002"
NULL = "0x" + "0" * 40


class StubSigner:
    def __init__(self, address: str) -> None:
        self.address = address

    async def sign_transaction(self, intent):
        raise NotImplementedError


class TestHexAddressCodec:
    """Tests for HexAddressCodec."""

    def test_implements_protocol(self) -> None:
        assert isinstance(HexAddressCodec(), AddressCodec)

    @pytest.mark.parametrize(
        "address, address_type",
        [
            (USER, AddressType.USER),
            (CONTRACT, AddressType.CONTRACT),
            (BUILTIN, AddressType.BUILTIN),
            (NULL, AddressType.NULL),
        ],
    )
    def test_decode_type(self, address: str, address_type: AddressType) -> None:
        decoded = HexAddressCodec().decode(address)

        assert decoded.address_type == address_type
        assert decoded.network_id is None

    @pytest.mark.parametrize(
        "address",
        [
            "1" + "a" * 39,
            "0x2" + "a" * 39,
            "0x1" + "a" * 38,
            "0x1" + "g" * 39,
            None,
        ],
    )
    def test_invalid(self, address) -> None:
        codec = HexAddressCodec()

        assert not codec.is_valid(address)
        with pytest.raises(InvalidAddressError):
            codec.decode(address)

    def test_normalize_lowercases(self) -> None:
        codec = HexAddressCodec()

        assert codec.normalize("0x1" + "A" * 39, network_id=1029) == USER
        assert codec.has_network_prefix(USER) is False


class TestBase32AddressCodec:
    """Tests for the CIP-37 codec."""

    def test_implements_protocol(self) -> None:
        assert isinstance(Base32AddressCodec(), AddressCodec)

    @pytest.mark.parametrize(
        "network_id, prefix",
        [(1029, "cfx:"), (1, "cfxtest:"), (8888, "net8888:")],
    )
    def test_hex_is_encoded_for_network(self, network_id: int, prefix: str) -> None:
        encoded = Base32AddressCodec().normalize(USER, network_id)

        assert encoded.startswith(prefix)
        assert encoded == Base32Address.encode_base32(USER, network_id)

    def test_hex_without_network_stays_hex(self) -> None:
        codec = Base32AddressCodec()

        assert codec.normalize("0x1" + "A" * 39) == USER
        assert codec.has_network_prefix(USER) is False

    @pytest.mark.parametrize(
        "address, address_type",
        [(USER, AddressType.USER), (CONTRACT, AddressType.CONTRACT), (NULL, AddressType.NULL)],
    )
    def test_decode_reads_network_and_type(self, address: str, address_type: AddressType) -> None:
        encoded = str(Base32Address.encode_base32(address, 1029))
        decoded = Base32AddressCodec().decode(encoded)

        assert decoded.hex_address == address
        assert decoded.address_type == address_type
        assert decoded.network_id == 1029

    def test_base32_keeps_its_own_network(self) -> None:
        codec = Base32AddressCodec()
        mainnet = str(Base32Address.encode_base32(USER, 1029))

        assert codec.has_network_prefix(mainnet)
        assert codec.normalize(mainnet, network_id=1) == mainnet

    @pytest.mark.parametrize("address", ["cfx:not-an-address", "0x2" + "a" * 39, None])
    def test_invalid(self, address) -> None:
        codec = Base32AddressCodec()

        assert not codec.is_valid(address)
        with pytest.raises(InvalidAddressError):
            codec.decode(address)

    def test_wallet_matches_base32_and_hex(self) -> None:
        codec = Base32AddressCodec()
        wallet = Wallet(codec)
        signer = wallet.add(StubSigner(USER))

        assert wallet.get(str(Base32Address.encode_base32(USER, 1))) is signer
        assert wallet.has(codec.normalize(USER, 1029))

class TestWallet:
    """Tests for the signer registry."""

    def test_add_and_get(self) -> None:
        wallet = Wallet()
        signer = wallet.add(StubSigner(USER))

        assert isinstance(signer, Signer)
        assert wallet.has("0x1" + "A" * 39)
        assert wallet.get(USER) is signer
        assert USER in wallet
        assert list(wallet) == [USER]

    def test_missing_signer(self) -> None:
        wallet = Wallet()

        with pytest.raises(WalletError) as exc_info:
            wallet.get(USER)

        assert exc_info.value.address == USER
        assert not wallet.has("not an address")

    def test_remove_and_clear(self) -> None:
        wallet = Wallet()
        wallet.add(StubSigner(USER))
        wallet.add(StubSigner(CONTRACT))

        assert wallet.remove(USER) is not None
        assert wallet.remove(USER) is None
        assert len(wallet) == 1

        wallet.clear()
        assert len(wallet) == 0
