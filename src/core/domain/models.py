"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Range and emptiness checks live in `Field` constraints, so a
  `ResolvedRequest` cannot exist with an invalid port.
- Frozen models make "created once, immutable thereafter" a property of the
  type instead of a convention.

Note:
- These models describe *what* an exchange is, not *how* it is carried out.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

FINGER_PORT = 79
PORT_MIN = 0
PORT_MAX = 65535


class ResolvedRequest(BaseModel):
    """Validated inputs of one finger exchange."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(
        ...,
        min_length=1,
        description="Domain name or IP address of the finger server.",
    )
    port: int = Field(
        default=FINGER_PORT,
        ge=PORT_MIN,
        le=PORT_MAX,
        description="TCP port of the server (79 when not given).",
    )
    query: str = Field(
        default="",
        description="Query line sent to the server, without terminator.",
    )


class SessionState(str, Enum):
    """Lifecycle of a protocol session.

    Transitions only move forward; `CLOSED` is reachable from any state.
    """

    UNOPENED = "unopened"
    OPEN = "open"
    REQUEST_SENT = "request_sent"
    RESPONSE_COMPLETE = "response_complete"
    CLOSED = "closed"


class ExchangeResult(BaseModel):
    """Outcome of a completed exchange."""

    request: ResolvedRequest
    bytes_sent: int = Field(
        default=0,
        ge=0,
        description="Bytes written, terminator included.",
    )
    lines_received: int = Field(
        default=0,
        ge=0,
        description="Response lines forwarded to the sink.",
    )
