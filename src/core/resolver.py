"""Argument resolution for the finger command line.

Rules, applied by argument count:
- 1: host only.
- 2: host + port, or host + query when the second value is not a port
  candidate.
- 3: host + port + query. A non-port second value is a conflict here.

No I/O happens in this module; DNS is checked when the session connects.
"""

from __future__ import annotations

from typing import Sequence

from core.domain.errors import (
    ArgumentConflictError,
    ArgumentCountError,
    HostResolutionError,
    PortRangeError,
)
from core.domain.models import FINGER_PORT, PORT_MAX, PORT_MIN, ResolvedRequest

_PORT_DIGITS = len(str(PORT_MAX))


def is_port_candidate(value: str) -> bool:
    """True when `value` is non-empty and made only of ASCII decimal digits.

    Range is not checked here.
    """

    return bool(value) and value.isascii() and value.isdigit()


def parse_port(value: str) -> int:
    """Convert a port candidate to an int, rejecting out-of-range values."""

    digits = value.lstrip("0") or "0"
    # Avoid int() on arbitrarily long inputs.
    if len(digits) > _PORT_DIGITS:
        raise PortRangeError(value)
    port = int(digits)
    if port < PORT_MIN or port > PORT_MAX:
        raise PortRangeError(value)
    return port


def resolve_arguments(args: Sequence[str]) -> ResolvedRequest:
    """Turn raw positional arguments into a `ResolvedRequest`.

    Raises:
    - `ArgumentCountError` for anything but 1 to 3 arguments.
    - `PortRangeError` for a numeric second argument outside 0..65535.
    - `ArgumentConflictError` when a non-port second argument and a third
      argument both claim the query.
    - `HostResolutionError` for an empty host.
    """

    count = len(args)
    if count not in (1, 2, 3):
        raise ArgumentCountError(count)

    host = args[0]
    if not host:
        raise HostResolutionError(host, "empty host name")

    port = FINGER_PORT
    query = ""

    if count == 2:
        second = args[1]
        if is_port_candidate(second):
            port = parse_port(second)
        else:
            query = second
    elif count == 3:
        second, third = args[1], args[2]
        if not is_port_candidate(second):
            raise ArgumentConflictError(second, third)
        port = parse_port(second)
        query = third

    return ResolvedRequest(host=host, port=port, query=query)
