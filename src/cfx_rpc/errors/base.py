"""
Base exception class for the cfx-rpc client.

Every client error derives from ``CfxError``. Besides a machine-readable
code and free-form details, an error remembers the wire method it belongs
to: the dispatcher binds the method to formatting and hook errors raised
while shaping a call, so a ``FormatError`` from deep inside a request
formatter still says which RPC it was building.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CfxError(Exception):
    """
    Base exception for all cfx-rpc errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code (e.g., "UNKNOWN_METHOD").
        method: Wire method the error belongs to, when known.
        details: Additional error context; carries ``method`` as well.

    Example:
        >>> err = CfxError("Call failed", code="CALL_FAILED", method="cfx_call")
        >>> str(err)
        '[CALL_FAILED] cfx_call: Call failed'
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "CFX_ERROR",
        method: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.method: Optional[str] = None
        if method:
            self.bind_method(method)

    def bind_method(self, method: str) -> CfxError:
        """Attach ``method`` unless the error already names one."""
        if self.method is None:
            self.method = method
            self.details.setdefault("method", method)
        return self

    def __str__(self) -> str:
        if self.method:
            return f"[{self.code}] {self.method}: {self.message}"
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"method={self.method!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary form for JSON logging."""
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "method": self.method,
            "message": self.message,
            "details": self.details,
        }
