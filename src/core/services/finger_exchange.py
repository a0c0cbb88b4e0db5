"""Finger exchange orchestration.

The CLI delegates the whole exchange to these helpers, so the same flow is
reusable from tests or other entry points and printing stays out of the core.
"""

from __future__ import annotations

from adapters.finger_session import FingerSession
from core.config import AppSettings
from core.domain.models import ExchangeResult, ResolvedRequest
from core.interfaces.transport import Connector, LineSink


def run_exchange(
    request: ResolvedRequest,
    sink: LineSink,
    *,
    settings: AppSettings | None = None,
    connector: Connector | None = None,
) -> ExchangeResult:
    """Open, send, stream the response into `sink`, close.

    The session is closed exactly once whichever step fails; errors propagate
    as `FingerError` subclasses.
    """

    settings = settings or AppSettings()
    with FingerSession(request, settings=settings, connector=connector) as session:
        session.open()
        bytes_sent = session.send()
        lines_received = session.receive(sink)

    return ExchangeResult(
        request=request,
        bytes_sent=bytes_sent,
        lines_received=lines_received,
    )


def fetch_response(
    request: ResolvedRequest,
    *,
    settings: AppSettings | None = None,
    connector: Connector | None = None,
) -> str:
    """Run an exchange and return the response as one newline-joined string."""

    lines: list[str] = []
    run_exchange(request, lines.append, settings=settings, connector=connector)
    return "\n".join(lines)
