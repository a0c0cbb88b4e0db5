"""Tests for TCP connection setup and its error classification."""

import socket

import pytest

from adapters import tcp_connector
from adapters.tcp_connector import connect_tcp, resolve_addresses
from core.domain.errors import (
    ConnectionDeniedError,
    ConnectionSetupError,
    ExitCode,
    HostResolutionError,
)

_LOCAL_INFO = [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("127.0.0.1", 79))]


def _unresolvable(*args, **kwargs):
    raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")


def test_resolution_failure(monkeypatch):
    monkeypatch.setattr(tcp_connector.socket, "getaddrinfo", _unresolvable)

    with pytest.raises(HostResolutionError) as info:
        connect_tcp("no-such-host.invalid", 79)

    assert info.value.host == "no-such-host.invalid"
    assert info.value.exit_code == ExitCode.UNKNOWN_HOST


def test_empty_address_list(monkeypatch):
    monkeypatch.setattr(tcp_connector.socket, "getaddrinfo", lambda *a, **k: [])

    with pytest.raises(HostResolutionError):
        resolve_addresses("example.com", 79)


def test_socket_creation_denied(monkeypatch):
    def denied(*args, **kwargs):
        raise PermissionError(1, "Operation not permitted")

    monkeypatch.setattr(tcp_connector.socket, "getaddrinfo", lambda *a, **k: _LOCAL_INFO)
    monkeypatch.setattr(tcp_connector.socket, "socket", denied)

    with pytest.raises(ConnectionDeniedError) as info:
        connect_tcp("localhost", 79)

    assert info.value.exit_code == ExitCode.PERMISSION_DENIED


def test_connection_refused(closed_port):
    with pytest.raises(ConnectionSetupError) as info:
        connect_tcp("127.0.0.1", closed_port, timeout=5)

    assert info.value.exit_code == ExitCode.IO_FAILURE
    assert isinstance(info.value.__cause__, OSError)


def test_connects_to_listening_server():
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    try:
        sock = connect_tcp("127.0.0.1", listener.getsockname()[1], timeout=5)
        try:
            assert sock.getpeername() == listener.getsockname()
            assert sock.gettimeout() == 5
        finally:
            sock.close()
    finally:
        listener.close()
