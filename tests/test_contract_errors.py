"""
Tests for revert data decoding.
"""

from eth_abi import encode

from cfx_rpc.contract_errors import decode_error, decode_revert_data
from cfx_rpc.errors import ContractRevertError, RpcError, TransportError

REVERT = "0x08c379a0" + encode(["string"], ["Ownable: caller is not the owner"]).hex()
PANIC = "0x4e487b71" + encode(["uint256"], [0x12]).hex()


class TestDecodeRevertData:
    """Tests for decode_revert_data."""

    def test_error_string(self) -> None:
        assert decode_revert_data(REVERT) == ("Ownable: caller is not the owner", None)

    def test_panic(self) -> None:
        assert decode_revert_data(PANIC) == (None, 0x12)

    def test_truncated(self) -> None:
        assert decode_revert_data(REVERT[:30]) == (None, None)

    def test_odd_length(self) -> None:
        assert decode_revert_data(REVERT + "0") == (None, None)


class TestDecodeError:
    """Tests for decode_error."""

    def test_revert_in_data(self) -> None:
        error = RpcError("Transaction reverted", rpc_code=-32015, data=REVERT, method="cfx_call")

        decoded = decode_error(error)

        assert isinstance(decoded, ContractRevertError)
        assert decoded.reason == "Ownable: caller is not the owner"
        assert decoded.method == "cfx_call"
        assert decoded.code == "CONTRACT_REVERT"
        assert decoded.__cause__ is error
        assert "Ownable" in str(decoded)

    def test_revert_embedded_in_message(self) -> None:
        error = RpcError(f"Estimation isn't accurate: VmError(Reverted), {PANIC}")

        decoded = decode_error(error)

        assert isinstance(decoded, ContractRevertError)
        assert decoded.panic_code == 0x12
        assert decoded.details["panic_code"] == 0x12

    def test_without_revert_data(self) -> None:
        error = RpcError("insufficient balance", data="0x1234")

        assert decode_error(error) is error

    def test_other_errors_untouched(self) -> None:
        error = TransportError("down")

        assert decode_error(error) is error

    def test_already_decoded(self) -> None:
        error = ContractRevertError("execution reverted", reason="x")

        assert decode_error(error) is error
