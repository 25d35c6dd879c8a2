"""Error codes and the public failure type.

``ErrorCode`` maps CLI failures to stable process exit codes.
``NotifierError`` is the single exception raised by the library surface when a
release lookup cannot complete.
"""

from __future__ import annotations

from enum import IntEnum

__all__ = ["ErrorCode", "NotifierError"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad repo name, invalid config)
    - 4: Network error (API unreachable, non-2xx response)
    - 5: I/O error (config file unreadable)
    """

    OK = 0
    USER_ERROR = 1
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


class NotifierError(Exception):
    """A public notifier operation failed.

    The message always reads ``Failed to <operation>: <cause>`` so callers see
    one shape whether the request failed in transport or with an HTTP status.

    Attributes:
        operation: Name of the failing operation (e.g. "check version")
        cause: Text of the underlying failure, preserved verbatim
    """

    def __init__(self, operation: str, cause: str) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation}: {cause}")
