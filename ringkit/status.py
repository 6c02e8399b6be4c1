"""Status and error codes shared by the buffer containers.

Zero means success, negative values are errors and positive values are
warnings or status information.
"""

from __future__ import annotations

from enum import IntEnum

__all__ = ["Status", "is_ok", "is_error", "is_warning"]


class Status(IntEnum):
    """Generic status and error codes."""

    STATUS_OK = 0
    STATUS_IDLE = 0  # alias of STATUS_OK
    STATUS_IGNORE = 1
    STATUS_BUSY = 2
    STATUS_INITIALIZING = 3

    ERROR_FAIL = -1
    ERROR_ABORTED = -2
    ERROR_READ_ONLY = -3
    ERROR_OUT_OF_RANGE = -4
    ERROR_INVALID_ARGUMENT = -5
    ERROR_TIMEOUT = -6
    ERROR_NOT_INITIALIZED = -7
    ERROR_NOT_SUPPORTED = -8
    ERROR_NOT_IMPLEMENTED = -9


def is_ok(status: int) -> bool:
    """Return True when *status* means success."""
    return int(status) == 0


def is_error(status: int) -> bool:
    """Return True when *status* is an error code."""
    return int(status) < 0


def is_warning(status: int) -> bool:
    """Return True when *status* is a warning or informational code."""
    return int(status) > 0