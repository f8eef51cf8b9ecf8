"""
Tests for TransactionIntent.
"""

import pydantic
import pytest

from cfx_rpc.errors import FormatError
from cfx_rpc.types import REQUIRED_FIELDS, TransactionIntent, TransactionType

ALICE = "0x1" + "a" * 39
BOB = "0x1" + "b" * 39


class TestTransactionIntent:
    """Tests for the intent model."""

    def test_accepts_wire_and_python_names(self) -> None:
        wire = TransactionIntent.model_validate({"from": ALICE, "chainId": "0x1", "gasPrice": "0x3b9aca00"})
        python = TransactionIntent(from_=ALICE, chain_id=1, gas_price=1_000_000_000)

        assert wire == python
        assert wire.chain_id == 1

    def test_data_is_normalized(self) -> None:
        intent = TransactionIntent(from_=ALICE, data=b"\xde\xad")

        assert intent.data == "0xdead"

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            TransactionIntent.model_validate({"from": ALICE, "gasLimit": 1})

    def test_negative_quantity_rejected(self) -> None:
        with pytest.raises(FormatError):
            TransactionIntent(from_=ALICE, value=-1)

    @pytest.mark.parametrize("raw", ["0x2", 2, "2", TransactionType.DYNAMIC_FEE])
    def test_type_accepts_quantities(self, raw) -> None:
        intent = TransactionIntent.model_validate({"from": ALICE, "type": raw})

        assert intent.type is TransactionType.DYNAMIC_FEE

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            TransactionIntent.model_validate({"from": ALICE, "type": "0x3"})

    def test_assignment_is_validated(self) -> None:
        intent = TransactionIntent(from_=ALICE)
        intent.nonce = "0xa"

        assert intent.nonce == 10

    def test_to_dict_uses_wire_names(self) -> None:
        intent = TransactionIntent(from_=ALICE, to=BOB, storage_limit=0, type=TransactionType.LEGACY)

        assert intent.to_dict() == {
            "from": ALICE,
            "to": BOB,
            "storageLimit": 0,
            "type": TransactionType.LEGACY,
        }

    def test_missing_fields(self) -> None:
        intent = TransactionIntent(from_=ALICE, to=BOB)

        assert intent.missing_fields == sorted(
            ["nonce", "chain_id", "epoch_height", "type", "gas", "storage_limit"]
        )
        assert not intent.is_complete

        intent.type = TransactionType.DYNAMIC_FEE
        assert "max_fee_per_gas" in intent.missing_fields
        assert "gas_price" not in intent.missing_fields

    def test_required_fields_per_type(self) -> None:
        assert "gas_price" in REQUIRED_FIELDS[TransactionType.LEGACY]
        assert "gas_price" in REQUIRED_FIELDS[TransactionType.ACCESS_LIST]
        assert "max_priority_fee_per_gas" in REQUIRED_FIELDS[TransactionType.DYNAMIC_FEE]
