"""
FILE: taskproc/cli/app.py
PURPOSE: Shared Typer application, consoles and session factory for commands
EXPORTS:
  - app (Typer application)
  - console, error_console (Rich consoles)
  - print_plain(text) - Print text verbatim (no markup, no wrapping)
  - fail(message) - Print an error and exit with status 1
  - get_session() -> SessionCoordinator
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - taskproc.log (logging setup)
  - taskproc.core.session (SessionCoordinator)
NOTES:
  - Command modules import app from here and register with @app.command()
  - No subcommand behaves like 'help'
  - Error messages go to stderr, exit codes: 0=success, 1=error
"""

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from ..core.session import SessionCoordinator
from ..log import configure_logging

app = typer.Typer(
    name="taskproc",
    help="Load a task file, then filter, sort and inspect it across invocations",
    add_completion=False,
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
    log_json: bool = typer.Option(False, "--log-json", help="Emit log lines as JSON"),
):
    """
    Configure logging, then show help when no command is given.
    """
    configure_logging(verbose=verbose, log_json=log_json)

    if ctx.invoked_subcommand is None:
        from .commands.system import show_help
        show_help()


def print_plain(text: str) -> None:
    """Print machine-readable output exactly as given."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def fail(message: str) -> NoReturn:
    error_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise typer.Exit(1)


def get_session() -> SessionCoordinator:
    """Session restored from the ledger in the working directory."""
    return SessionCoordinator()
