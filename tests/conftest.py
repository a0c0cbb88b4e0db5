import socket
import socketserver
import threading

import pytest


class FakeStream:
    """File-like double for the writer/reader derived from a socket."""

    def __init__(self, name, events, *, lines=None, fail_read_after=None, close_error=None, write_error=None):
        self.name = name
        self.events = events
        self.written = bytearray()
        self._lines = list(lines or [])
        self._reads = 0
        self._fail_read_after = fail_read_after
        self._close_error = close_error
        self._write_error = write_error
        self.close_calls = 0

    def write(self, data):
        if self._write_error is not None:
            raise self._write_error
        self.written += data
        return len(data)

    def flush(self):
        self.events.append(f"{self.name}.flush")

    def readline(self):
        if self._fail_read_after is not None and self._reads >= self._fail_read_after:
            raise ConnectionResetError("connection reset by peer")
        self._reads += 1
        if not self._lines:
            return b""
        return self._lines.pop(0)

    def close(self):
        self.close_calls += 1
        self.events.append(f"{self.name}.close")
        if self._close_error is not None:
            raise self._close_error


class FakeSocket:
    def __init__(self, *, lines=None, fail_read_after=None, close_errors=None, write_error=None):
        close_errors = close_errors or {}
        self.events = []
        self.timeout = "unset"
        self.close_calls = 0
        self._close_error = close_errors.get("socket")
        self.writer = FakeStream(
            "writer", self.events, close_error=close_errors.get("writer"), write_error=write_error
        )
        self.reader = FakeStream(
            "reader",
            self.events,
            lines=lines,
            fail_read_after=fail_read_after,
            close_error=close_errors.get("reader"),
        )

    def makefile(self, mode="r", buffering=None):
        return self.writer if "w" in mode else self.reader

    def settimeout(self, value):
        self.timeout = value

    def close(self):
        self.close_calls += 1
        self.events.append("socket.close")
        if self._close_error is not None:
            raise self._close_error


class RecordingConnector:
    def __init__(self, sock):
        self.sock = sock
        self.calls = []

    def __call__(self, host, port, timeout=None):
        self.calls.append((host, port, timeout))
        return self.sock


@pytest.fixture
def socket_pair():
    """A connected (client, peer) pair; the peer plays the finger server."""

    client, peer = socket.socketpair()
    yield client, peer
    for sock in (client, peer):
        try:
            sock.close()
        except OSError:
            pass


def drain(sock):
    chunks = []
    while True:
        chunk = sock.recv(4096)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


class _FingerHandler(socketserver.StreamRequestHandler):
    def handle(self):
        self.server.queries.append(self.rfile.readline())
        self.wfile.write(self.server.response)


class FingerServer(socketserver.ThreadingTCPServer):
    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, response):
        super().__init__(("127.0.0.1", 0), _FingerHandler)
        self.response = response
        self.queries = []

    @property
    def port(self):
        return self.server_address[1]


@pytest.fixture
def finger_server():
    """Local finger server answering every query with `server.response`."""

    server = FingerServer(b"Login: alice\r\nName: Alice Liddell\r\n")
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


@pytest.fixture
def closed_port():
    """A localhost port with nothing listening on it."""

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
