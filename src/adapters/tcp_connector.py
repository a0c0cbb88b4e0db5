"""TCP connection setup with classified errors.

Why a separate adapter:
- The session only needs "a connected stream"; resolving names and walking
  the address list is a different concern.
- Tests swap this out for a `socketpair()` end or a fake socket.
"""

from __future__ import annotations

import logging
import socket

from core.domain.errors import (
    ConnectionDeniedError,
    ConnectionSetupError,
    HostResolutionError,
)

logger = logging.getLogger(__name__)


def resolve_addresses(host: str, port: int) -> list[tuple]:
    """Return `getaddrinfo` entries for a TCP stream to `(host, port)`."""

    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except socket.gaierror as exc:
        raise HostResolutionError(host, exc.strerror) from exc
    except UnicodeError as exc:
        # IDNA encoding of a malformed name.
        raise HostResolutionError(host, str(exc)) from exc
    if not infos:
        raise HostResolutionError(host, "no addresses returned")
    return infos


def connect_tcp(host: str, port: int, timeout: float | None = None) -> socket.socket:
    """Connect to the first reachable address of `host`.

    Rules:
    - Resolution failure -> `HostResolutionError`.
    - `PermissionError` on socket creation or connect -> `ConnectionDeniedError`.
    - Any other `OSError`, after every address was tried -> `ConnectionSetupError`.
    """

    last_error: OSError | None = None
    for family, type_, proto, _canonname, sockaddr in resolve_addresses(host, port):
        try:
            sock = socket.socket(family, type_, proto)
        except PermissionError as exc:
            raise ConnectionDeniedError(f"socket creation denied: {exc}") from exc
        except OSError as exc:
            last_error = exc
            continue

        try:
            sock.settimeout(timeout)
            logger.debug("connecting to %s (%s)", sockaddr, host)
            sock.connect(sockaddr)
        except PermissionError as exc:
            sock.close()
            raise ConnectionDeniedError(f"connection to {host}:{port} denied: {exc}") from exc
        except OSError as exc:
            sock.close()
            logger.debug("connect to %s failed: %s", sockaddr, exc)
            last_error = exc
            continue

        return sock

    reason = (last_error.strerror or str(last_error)) if last_error else "no usable address"
    raise ConnectionSetupError(f"cannot connect to {host}:{port}: {reason}") from last_error
