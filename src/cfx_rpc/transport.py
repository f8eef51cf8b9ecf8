"""
JSON-RPC transport.

``Transport`` is the only I/O boundary of the client: one async ``send`` per
call. ``HttpTransport`` implements it over HTTP with ``httpx``, maps node
error objects to ``RpcError`` and network/HTTP failures to
``TransportError``. Retrying transient network failures is opt-in through a
``RetryConfig``; nothing above the transport retries.
"""

from __future__ import annotations

import itertools
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

import httpx

from cfx_rpc.constants import RPC_TIMEOUT_SECONDS
from cfx_rpc.errors import RpcError, TransportError
from cfx_rpc.utils.logging import get_logger
from cfx_rpc.utils.retry import RetryConfig, retry_async

_logger = get_logger(__name__)


@runtime_checkable
class Transport(Protocol):
    async def send(self, method: str, params: List[Any]) -> Any:
        """Issue one call and return its ``result`` member."""
        ...


class HttpTransport:
    """
    JSON-RPC 2.0 over HTTP POST.

    Example:
        ```python
        async with HttpTransport("https://test.confluxrpc.com") as transport:
            epoch = await transport.send("cfx_epochNumber", ["latest_state"])
        ```
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = RPC_TIMEOUT_SECONDS,
        retry: Optional[RetryConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            url: Node endpoint.
            timeout: Per-request timeout in seconds.
            retry: Retry policy for network failures; ``None`` disables retries.
            client: Pre-built ``httpx.AsyncClient`` (owned by the caller).
        """
        self._url = url
        self._timeout = timeout
        self._retry = retry
        self._client = client
        self._owns_client = client is None
        self._ids = itertools.count(1)

    @property
    def url(self) -> str:
        return self._url

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
        return self._client

    def _envelope(self, method: str, params: Sequence[Any]) -> Dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": list(params),
        }

    async def _post(self, payload: Any, method: str) -> Any:
        async def do_post() -> Any:
            response = await self._http().post(self._url, json=payload)
            if response.status_code != 200:
                raise TransportError(
                    f"HTTP {response.status_code} from node",
                    url=self._url,
                    status_code=response.status_code,
                    method=method,
                )
            return response.json()

        try:
            if self._retry is None:
                return await do_post()
            return await retry_async(do_post, self._retry)
        except httpx.HTTPError as e:
            raise TransportError(
                f"Request failed: {e}",
                url=self._url,
                method=method,
            ) from e
        except ValueError as e:
            # response.json() on a non-JSON body
            raise TransportError(
                f"Malformed response: {e}",
                url=self._url,
                method=method,
            ) from e

    @staticmethod
    def _unwrap(body: Any, method: str) -> Any:
        if not isinstance(body, dict):
            raise RpcError("Malformed JSON-RPC response", data=body, method=method)
        error = body.get("error")
        if error is not None:
            if isinstance(error, dict):
                raise RpcError(
                    error.get("message", "Unknown RPC error"),
                    rpc_code=error.get("code"),
                    data=error.get("data"),
                    method=method,
                )
            raise RpcError(str(error), method=method)
        return body.get("result")

    async def send(self, method: str, params: List[Any]) -> Any:
        _logger.debug("RPC request", extra={"rpc_method": method, "url": self._url})
        body = await self._post(self._envelope(method, params), method)
        return self._unwrap(body, method)

    async def send_batch(self, calls: Sequence[Tuple[str, Sequence[Any]]]) -> List[Any]:
        """
        Issue several calls in one HTTP round trip.

        Results come back in the order of ``calls``; the first failed entry
        raises its ``RpcError``.
        """
        if not calls:
            return []
        envelopes = [self._envelope(method, params) for method, params in calls]
        _logger.debug("RPC batch request", extra={"size": len(envelopes), "url": self._url})
        body = await self._post(envelopes, "batch")
        if not isinstance(body, list):
            raise RpcError("Malformed JSON-RPC batch response", data=body, method="batch")

        by_id = {item.get("id"): item for item in body if isinstance(item, dict)}
        results = []
        for envelope in envelopes:
            item = by_id.get(envelope["id"])
            if item is None:
                raise RpcError("Missing response in batch", method=envelope["method"])
            results.append(self._unwrap(item, envelope["method"]))
        return results

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
