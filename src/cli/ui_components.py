"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from rendering details.
- Everything here targets the stderr console; stdout only carries the
  server's response.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.config import AppSettings
from core.domain.models import ResolvedRequest


def print_error(console: Console, message: str) -> None:
    """Print a (possibly multi-line) error message without markup parsing."""

    console.print(Text(message, style="bold red"), soft_wrap=True)


def build_request_table(request: ResolvedRequest, settings: AppSettings) -> Table:
    """Summary of what is about to be sent (verbose mode)."""

    table = Table(title="Finger request")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Host", request.host)
    table.add_row("Port", str(request.port))
    table.add_row("Query", repr(request.query))
    table.add_row("Encoding", settings.encoding)
    table.add_row(
        "Timeouts",
        f"connect={settings.connect_timeout_seconds} read={settings.read_timeout_seconds}",
    )
    return table
