"""Finger protocol session over one TCP connection.

Lifecycle: UNOPENED -> OPEN -> REQUEST_SENT -> RESPONSE_COMPLETE -> CLOSED.

- `open()` connects and derives a writer and a reader from the socket.
- `send()` writes the query plus CR-LF, once.
- `receive()` / `iter_lines()` read lines until the peer closes.
- `close()` releases writer, reader and socket, from any state, once.

Use it as a context manager so `close()` runs on every exit path:

    with FingerSession(request) as session:
        session.open()
        session.send()
        session.receive(print)
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterator, cast

from adapters.tcp_connector import connect_tcp
from core.config import AppSettings
from core.domain.errors import (
    CloseError,
    ConnectionSetupError,
    ReadError,
    SessionStateError,
    WriteError,
)
from core.domain.models import ResolvedRequest, SessionState
from core.interfaces.transport import Connector, LineSink, StreamSocket

logger = logging.getLogger(__name__)

# Required by the protocol on every platform.
REQUEST_TERMINATOR = b"\r\n"


def strip_line_terminator(raw: bytes) -> bytes:
    """Drop one trailing LF or CR-LF."""

    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


class FingerSession:
    """One request/response exchange with a finger server."""

    def __init__(
        self,
        request: ResolvedRequest,
        *,
        settings: AppSettings | None = None,
        connector: Connector | None = None,
    ) -> None:
        self._request = request
        self._settings = settings or AppSettings()
        self._connector = connector or connect_tcp
        self._state = SessionState.UNOPENED
        self._closed = False

        self._socket: StreamSocket | None = None
        self._writer: BinaryIO | None = None
        self._reader: BinaryIO | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def request(self) -> ResolvedRequest:
        return self._request

    def __enter__(self) -> "FingerSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            self.close()
        except CloseError as close_exc:
            if exc is None:
                raise
            logger.warning("ignoring close failure after %s: %s", type(exc).__name__, close_exc)
        return False

    def _require(self, expected: SessionState, operation: str) -> None:
        if self._state is not expected:
            raise SessionStateError(
                f"{operation}() needs state {expected.value}, session is {self._state.value}"
            )

    def open(self) -> None:
        self._require(SessionState.UNOPENED, "open")
        host, port = self._request.host, self._request.port

        self._socket = self._connector(host, port, timeout=self._settings.connect_timeout_seconds)
        try:
            self._socket.settimeout(self._settings.read_timeout_seconds)
            self._writer = self._socket.makefile("wb")
            self._reader = self._socket.makefile("rb")
        except OSError as exc:
            raise ConnectionSetupError(f"cannot set up streams for {host}:{port}: {exc}") from exc

        self._state = SessionState.OPEN
        logger.debug("connected to %s:%d", host, port)

    def send(self, query: str | None = None) -> int:
        """Write `query` (default: the request's query) and CR-LF, then flush.

        Returns the number of bytes written.
        """

        self._require(SessionState.OPEN, "send")
        if query is None:
            query = self._request.query
        writer = cast(BinaryIO, self._writer)

        try:
            payload = query.encode(self._settings.encoding) + REQUEST_TERMINATOR
            writer.write(payload)
            writer.flush()
        except UnicodeEncodeError as exc:
            raise WriteError(f"query is not encodable as {self._settings.encoding}: {exc}") from exc
        except OSError as exc:
            raise WriteError(f"cannot send query: {exc}") from exc

        self._state = SessionState.REQUEST_SENT
        logger.debug("sent %d bytes", len(payload))
        return len(payload)

    def iter_lines(self) -> Iterator[str]:
        """Yield response lines until the peer closes the connection."""

        self._require(SessionState.REQUEST_SENT, "receive")
        reader = cast(BinaryIO, self._reader)

        while True:
            try:
                raw = reader.readline()
            except OSError as exc:
                raise ReadError(f"cannot read response: {exc}") from exc
            if not raw:
                break
            yield strip_line_terminator(raw).decode(self._settings.encoding, errors="replace")

        self._state = SessionState.RESPONSE_COMPLETE

    def receive(self, sink: LineSink) -> int:
        """Forward every response line to `sink`; returns the line count."""

        count = 0
        for line in self.iter_lines():
            sink(line)
            count += 1
        logger.debug("received %d lines", count)
        return count

    def close(self) -> None:
        """Release writer, reader and socket, in that order.

        Every resource gets a release attempt; the first failure is raised as
        `CloseError` afterwards. Later calls do nothing.
        """

        if self._closed:
            return
        self._closed = True

        first_error: OSError | None = None
        for name, resource in (
            ("writer", self._writer),
            ("reader", self._reader),
            ("socket", self._socket),
        ):
            if resource is None:
                continue
            try:
                resource.close()
            except OSError as exc:
                logger.debug("closing %s failed: %s", name, exc)
                if first_error is None:
                    first_error = exc

        self._writer = self._reader = self._socket = None
        self._state = SessionState.CLOSED

        if first_error is not None:
            raise CloseError(f"cannot release connection: {first_error}") from first_error
