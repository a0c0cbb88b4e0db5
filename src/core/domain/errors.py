"""Error taxonomy for a finger exchange.

Why one module:
- Every failure class maps to exactly one process exit status; keeping the
  mapping next to the classes means the CLI never has to guess.
- Components raise these instead of exiting, so they stay testable.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit statuses, one per failure class."""

    SUCCESS = 0
    ARGUMENT_COUNT = 1
    INVALID_PORT = 2
    IO_FAILURE = 3
    UNKNOWN_HOST = 4
    PERMISSION_DENIED = 5


class FingerError(Exception):
    """Base class for every classified failure."""

    exit_code: ExitCode = ExitCode.IO_FAILURE


# Argument resolution


class ArgumentCountError(FingerError):
    exit_code = ExitCode.ARGUMENT_COUNT

    def __init__(self, count: int) -> None:
        super().__init__(f"expected 1 to 3 arguments, got {count}")
        self.count = count


class PortRangeError(FingerError):
    exit_code = ExitCode.INVALID_PORT

    def __init__(self, value: str) -> None:
        super().__init__(f"port {value!r} is outside 0..65535")
        self.value = value


class ArgumentConflictError(FingerError):
    """A non-port second argument and a third argument both claim the query."""

    exit_code = ExitCode.INVALID_PORT

    def __init__(self, second: str, third: str) -> None:
        super().__init__(f"{second!r} is not a port and query {third!r} was also given")
        self.second = second
        self.third = third


# Connection setup


class HostResolutionError(FingerError):
    exit_code = ExitCode.UNKNOWN_HOST

    def __init__(self, host: str, reason: str | None = None) -> None:
        message = f"cannot resolve host {host!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.host = host


class ConnectionSetupError(FingerError):
    """I/O failure while establishing the connection."""


class ConnectionDeniedError(FingerError):
    """The execution environment refused to create or connect the socket."""

    exit_code = ExitCode.PERMISSION_DENIED


# Exchange


class WriteError(FingerError):
    pass


class ReadError(FingerError):
    pass


class CloseError(FingerError):
    """First failure met while releasing the session resources."""


class SessionStateError(RuntimeError):
    """An operation was called out of protocol order."""
