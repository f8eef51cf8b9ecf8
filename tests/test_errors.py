"""
Tests for the error hierarchy.
"""

from cfx_rpc.errors import CfxError, FormatError, RpcError, TransportError


class TestCfxError:
    """Tests for method binding on the base error."""

    def test_without_method(self) -> None:
        err = CfxError("boom", code="X")

        assert err.method is None
        assert str(err) == "[X] boom"
        assert err.to_dict()["method"] is None

    def test_bind_keeps_first_method(self) -> None:
        err = FormatError("hex64", "0x12")

        err.bind_method("cfx_getBlockByHash")
        err.bind_method("cfx_call")

        assert err.method == "cfx_getBlockByHash"
        assert err.details["method"] == "cfx_getBlockByHash"
        assert str(err).startswith("[FORMAT_ERROR] cfx_getBlockByHash: hex64")

    def test_rpc_and_transport_errors_carry_method(self) -> None:
        rpc = RpcError("bad params", rpc_code=-32602, method="cfx_getBalance")
        transport = TransportError("HTTP 502 from node", status_code=502, method="cfx_epochNumber")

        assert rpc.to_dict()["details"] == {"rpc_code": -32602, "method": "cfx_getBalance"}
        assert transport.method == "cfx_epochNumber"
        assert transport.details["status_code"] == 502
