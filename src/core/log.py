"""Diagnostics on stderr (stdlib logging rendered by Rich).

Stdout carries response lines only, so every record goes to stderr.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "finger-d2"


def configure_logging(level: str = "WARNING") -> None:
    """Install a single Rich handler on the root logger.

    Safe to call more than once (tests invoke the CLI repeatedly).
    """

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(numeric_level)
