"""
cfx-rpc utilities.

Logging helpers and the transport retry policy.
"""

from cfx_rpc.utils.logging import (
    LogContext,
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)
from cfx_rpc.utils.retry import RetryConfig, calculate_delay, retry_async

__all__ = [
    # Structured logging
    "get_logger",
    "configure_logging",
    "set_level",
    "disable_logging",
    "enable_debug",
    "LogContext",
    # Retry
    "RetryConfig",
    "calculate_delay",
    "retry_async",
]
