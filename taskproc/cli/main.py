"""
FILE: taskproc/cli/main.py
PURPOSE: CLI entry point for one-shot session commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - load() - Load tasks from a CSV or JSON file
  - reload() - Re-read the current source file
  - clear() - Forget the session
  - status() - Show source file and counts
  - list_tasks() - Show the current view
  - filter_view() - Narrow the view with an expression
  - sort_view() - Reorder the view
  - tag() - Narrow the view by tag
  - reset() - Drop all filters and sorts
  - search() - Show view tasks matching text
  - show() - Show one task
  - stats() - Aggregates over the current view
  - help(), version()
DEPENDENCIES:
  - typer (CLI framework)
  - taskproc.cli.app (shared app and consoles)
  - taskproc.cli.commands (command registration)
NOTES:
  - Importing the command modules registers them on app
  - Each invocation restores the previous session from the ledger
"""

import sys

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

from .app import app  # noqa: E402

# Commands are decorated with @app.command() in their modules
from .commands import (  # noqa: E402,F401
    # Session commands
    load,
    reload,
    clear,
    status,
    # View commands
    list_tasks,
    filter_view,
    sort_view,
    tag,
    reset,
    search,
    show,
    stats,
    # System commands
    version,
    help,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
