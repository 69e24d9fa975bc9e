"""Core module exports."""

from sanelint.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    ParseError,
    PatchError,
    SaneLintError,
)
from sanelint.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "ParseError",
    "PatchError",
    "SaneLintError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
