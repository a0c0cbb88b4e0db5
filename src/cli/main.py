"""Finger command line.

This is the only layer that turns an error kind into a message and an exit
status; the resolver and the session raise, they never exit.
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from cli.ui_components import build_request_table, print_error
from core.config import AppSettings
from core.domain.errors import (
    ArgumentConflictError,
    ArgumentCountError,
    ExitCode,
    FingerError,
    HostResolutionError,
    PortRangeError,
)
from core.log import configure_logging
from core.resolver import resolve_arguments
from core.services.finger_exchange import run_exchange

USAGE = "Usage: finger <hostname> [<port>] [<query>]"
ABORTING = "Aborting program..."

app = typer.Typer(
    add_completion=False,
    help="Query a finger server: finger <hostname> [<port>] [<query>]",
)

_console = Console(stderr=True)


def describe_error(exc: FingerError) -> str:
    """Human-readable message for a classified failure."""

    if isinstance(exc, ArgumentCountError):
        return f"An invalid number of arguments have been passed.\n{USAGE}\n{ABORTING}"
    if isinstance(exc, PortRangeError):
        return (
            f'The specified port number, "{exc.value}", is invalid.\n'
            f"You must specify a port number between 0 and 65535.\n{ABORTING}"
        )
    if isinstance(exc, ArgumentConflictError):
        return (
            f'The specified port number, "{exc.second}", is invalid and a query, '
            f'"{exc.third}", was also given.\n'
            f"You must specify a port number between 0 and 65535.\n{ABORTING}"
        )
    if isinstance(exc, HostResolutionError):
        return f'The IP address of the specified host, "{exc.host}", could not be determined.'
    return str(exc)


def _stdout_sink(line: str) -> None:
    typer.echo(line)


@app.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    }
)
def finger(
    args: Annotated[
        Optional[list[str]],
        typer.Argument(metavar="HOSTNAME [PORT] [QUERY]", show_default=False),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", "-t", min=0.001, help="Connect and read timeout (seconds)."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Debug diagnostics on stderr."),
    ] = False,
) -> None:
    """Send one query to a finger server and print its response."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        print_error(_console, f"Invalid FINGER_D2_* environment settings:\n{exc}")
        raise typer.Exit(code=2) from exc

    overrides: dict[str, object] = {}
    if timeout is not None:
        overrides["connect_timeout_seconds"] = timeout
        overrides["read_timeout_seconds"] = timeout
    if verbose:
        overrides["log_level"] = "DEBUG"
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level)

    try:
        request = resolve_arguments(args or [])
        if verbose:
            _console.print(build_request_table(request, settings))
        run_exchange(request, _stdout_sink, settings=settings)
    except FingerError as exc:
        print_error(_console, describe_error(exc))
        raise typer.Exit(code=int(exc.exit_code)) from exc
    except OSError as exc:
        # stdout itself failed, e.g. a closed pipe downstream.
        print_error(_console, f"cannot write response to standard output: {exc}")
        raise typer.Exit(code=int(ExitCode.IO_FAILURE)) from exc


def run() -> None:
    app()


if __name__ == "__main__":
    run()
