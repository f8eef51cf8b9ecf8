"""
Generic dispatcher.

Runs the call pipeline for one descriptor: before-hook, positional request
formatters, transport call, response formatter. Holds no state besides the
transport reference and never retries.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

from cfx_rpc.errors import CfxError
from cfx_rpc.rpc.registry import MethodDescriptor
from cfx_rpc.transport import Transport
from cfx_rpc.utils.logging import get_logger

_logger = get_logger(__name__)


class Dispatcher:
    """Apply a ``MethodDescriptor`` to caller arguments and issue the call."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    @staticmethod
    def build_request(descriptor: MethodDescriptor, args: Sequence[Any]) -> Tuple[str, List[Any]]:
        """
        Run the before-hook and request formatters without any I/O.

        Arguments beyond the declared formatters pass through unchanged, and
        trailing ``None`` arguments are dropped so optional parameters fall
        back to the node's defaults.

        Returns:
            ``(wire_method, params)``

        Raises:
            Whatever the before-hook or a formatter raises; client errors
            come back bound to the wire method.
        """
        params = list(args)
        try:
            if descriptor.before_hook is not None:
                descriptor.before_hook(*args)
            for index, fmt in enumerate(descriptor.request_formatters):
                if index >= len(params):
                    break
                params[index] = fmt(params[index])
        except CfxError as e:
            e.bind_method(descriptor.method)
            raise

        while params and params[-1] is None:
            params.pop()
        return descriptor.method, params

    async def invoke(self, descriptor: MethodDescriptor, *args: Any) -> Any:
        """Format, send and decode one call."""
        method, params = self.build_request(descriptor, args)
        _logger.debug(
            "Dispatching",
            extra={"rpc_method": method, "param_count": len(params)},
        )
        result = await self._transport.send(method, params)
        if descriptor.response_formatter is None:
            return result
        try:
            return descriptor.response_formatter(result)
        except CfxError as e:
            e.bind_method(method)
            raise

    async def invoke_raw(self, method: str, params: Sequence[Any] = ()) -> Any:
        """Send an ad-hoc call verbatim."""
        _logger.debug(
            "Dispatching raw",
            extra={"rpc_method": method, "param_count": len(params)},
        )
        return await self._transport.send(method, list(params))
