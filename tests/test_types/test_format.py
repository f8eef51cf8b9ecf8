"""
Tests for scalar formatters and response formatters.
"""

from decimal import Decimal

import pytest

from cfx_rpc import format
from cfx_rpc.errors import FormatError
from cfx_rpc.types import formatters as cfx_format

TX_HASH = "0x" + "ab" * 32
BLOCK_HASH = "0x" + "cd" * 32


class TestQuantities:
    """Tests for big_uint / big_uint_hex."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("0x10", 16),
            ("0x0", 0),
            (255, 255),
            ("1000", 1000),
            (Decimal("7"), 7),
        ],
    )
    def test_big_uint(self, value, expected) -> None:
        assert format.big_uint(value) == expected

    @pytest.mark.parametrize("value", [-1, True, 1.5, "0xzz", None, Decimal("1.5")])
    def test_big_uint_rejects(self, value) -> None:
        with pytest.raises(FormatError):
            format.big_uint(value)

    def test_big_uint_hex(self) -> None:
        assert format.big_uint_hex(255) == "0xff"
        assert format.big_uint_hex("0x00ff") == "0xff"
        assert format.big_uint_hex(0) == "0x0"


class TestHex:
    """Tests for hex formatters."""

    def test_hex_inputs(self) -> None:
        assert format.hex_(b"\x01\x02") == "0x0102"
        assert format.hex_("0xABCD") == "0xabcd"
        assert format.hex_("abcd") == "0xabcd"
        assert format.hex_("") == "0x"

    def test_hex_rejects_non_hex(self) -> None:
        with pytest.raises(FormatError) as exc_info:
            format.hex_("hello")

        assert exc_info.value.formatter == "hex_"

    def test_fixed_length(self) -> None:
        assert format.hex64(TX_HASH) == TX_HASH
        assert format.hex32("0x" + "1" * 32) == "0x" + "1" * 32

        with pytest.raises(FormatError):
            format.hex64("0x" + "ab" * 31)

    def test_fixed64(self) -> None:
        assert format.fixed64("0x" + "00" * 32) == 0
        assert format.fixed64("0x" + "ff" * 32) == 1


class TestEpochs:
    """Tests for epoch references."""

    def test_epoch_number(self) -> None:
        assert format.epoch_number("latest_state") == "latest_state"
        assert format.epoch_number(16) == "0x10"
        assert format.epoch_number("0x10") == "0x10"

        with pytest.raises(FormatError):
            format.epoch_number("latest")

    def test_epoch_number_or_undefined(self) -> None:
        assert format.epoch_number_or_undefined(None) is None
        assert format.epoch_number_or_undefined("earliest") == "earliest"

    def test_epoch_number_or_block_hash(self) -> None:
        assert format.epoch_number_or_block_hash(None) is None
        assert format.epoch_number_or_block_hash(5) == "0x5"
        assert format.epoch_number_or_block_hash(BLOCK_HASH) == {"blockHash": BLOCK_HASH}
        assert format.epoch_number_or_block_hash({"blockHash": BLOCK_HASH, "requirePivot": False}) == {
            "blockHash": BLOCK_HASH,
            "requirePivot": False,
        }


class TestCombinators:
    """Tests for Formatter combinators."""

    def test_or_null(self) -> None:
        nullable = format.big_uint.or_null()

        assert nullable(None) is None
        assert nullable("0x2") == 2

    def test_array_of(self) -> None:
        to_ints = format.array_of(format.big_uint)

        assert to_ints(["0x1", "0x2"]) == [1, 2]
        with pytest.raises(FormatError):
            to_ints("0x1")

    def test_boolean(self) -> None:
        assert format.boolean(False) is False
        with pytest.raises(FormatError):
            format.boolean(0)


class TestResponseFormatters:
    """Tests for structured result formatters."""

    def test_block_with_hashes(self) -> None:
        block = cfx_format.block(
            {
                "hash": BLOCK_HASH,
                "epochNumber": "0x64",
                "baseFeePerGas": None,
                "transactions": [TX_HASH],
                "miner": "0x1" + "0" * 39,
            }
        )

        assert block["epochNumber"] == 100
        assert block["baseFeePerGas"] is None
        assert block["transactions"] == [TX_HASH]
        assert block["miner"] == "0x1" + "0" * 39

    def test_block_with_transactions(self) -> None:
        block = cfx_format.block({"transactions": [{"hash": TX_HASH, "nonce": "0x2", "value": "0x0"}]})

        assert block["transactions"][0]["nonce"] == 2

    def test_receipt_nested_logs(self) -> None:
        receipt = cfx_format.receipt(
            {
                "outcomeStatus": "0x0",
                "gasFee": "0x10",
                "logs": [{"epochNumber": "0x1", "topics": [TX_HASH]}],
                "storageReleased": [{"address": "0x1" + "0" * 39, "collaterals": "0x40"}],
            }
        )

        assert receipt["gasFee"] == 16
        assert receipt["logs"][0]["epochNumber"] == 1
        assert receipt["storageReleased"][0]["collaterals"] == 64

    def test_filter_changes(self) -> None:
        assert cfx_format.filter_changes([TX_HASH]) == [TX_HASH]
        assert cfx_format.filter_changes([]) == []
        assert cfx_format.filter_changes([{"epochNumber": "0x3"}]) == [{"epochNumber": 3}]

    def test_fee_history(self) -> None:
        history = cfx_format.fee_history(
            {
                "oldestEpoch": "0x10",
                "baseFeePerGas": ["0x1", "0x2"],
                "gasUsedRatio": [0.5],
                "reward": [["0x3", "0x4"]],
            }
        )

        assert history == {
            "oldestEpoch": 16,
            "baseFeePerGas": [1, 2],
            "gasUsedRatio": [0.5],
            "reward": [[3, 4]],
        }

    def test_wrong_shape(self) -> None:
        with pytest.raises(FormatError):
            cfx_format.status(["not", "an", "object"])
