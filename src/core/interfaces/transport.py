"""Contracts between the protocol session and its collaborators.

Why Protocol:
- Structural contracts (duck typing) without rigid inheritance.
- The session can run over a real socket, a `socketpair()` end or a test
  double, and forward lines to stdout or to a list.
"""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class StreamSocket(Protocol):
    """The subset of `socket.socket` the session relies on."""

    def makefile(self, mode: str = ..., buffering: int | None = ...) -> BinaryIO: ...

    def settimeout(self, value: float | None) -> None: ...

    def close(self) -> None: ...


class Connector(Protocol):
    """Opens a connected stream socket to `(host, port)`.

    Implementations raise `HostResolutionError`, `ConnectionSetupError` or
    `ConnectionDeniedError`.
    """

    def __call__(self, host: str, port: int, timeout: float | None = None) -> StreamSocket: ...


class LineSink(Protocol):
    """Receives each response line, terminator removed."""

    def __call__(self, line: str) -> None: ...
