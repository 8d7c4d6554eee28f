"""
FILE: taskproc/cli/commands/session.py
PURPOSE: Session commands (load, reload, clear, status)
"""

import json

import typer
from rich.markup import escape

from ..app import app, console, get_session, fail, print_plain
from ...core.exceptions import (
    LedgerError,
    NoSourceError,
    SourceError,
    TaskProcError,
)


@app.command()
def load(
    file: str = typer.Argument(..., help="CSV or JSON task file"),
):
    """
    Load tasks from a file and start a new session.

    Example:
        taskproc load tasks.csv
        taskproc load data/tasks.json
    """
    session = get_session()
    console.print(f"Loading tasks from: {escape(file)}", highlight=False)
    try:
        count = session.load_from_file(file)
    except SourceError as e:
        fail(f"{e}\nFailed to load tasks from file: {file}")
    except TaskProcError as e:
        fail(f"Unexpected error: {e}")

    console.print(f"[green]✓ Loaded {count} task(s)[/green]")


@app.command()
def reload():
    """
    Re-read the last loaded file from disk (clears filters and sorts).

    Example:
        taskproc reload
    """
    session = get_session()
    try:
        count = session.reload()
    except (NoSourceError, SourceError, LedgerError) as e:
        fail(f"{e}\nFailed to reload tasks")
    except TaskProcError as e:
        fail(f"Unexpected error: {e}")

    console.print(f"[green]✓ Reloaded {count} task(s) from {escape(session.source_path)}[/green]", highlight=False)


@app.command()
def clear():
    """
    Forget the current session and delete the session ledger.

    Example:
        taskproc clear
    """
    session = get_session()
    session.clear()
    console.print("[green]✓ Session cleared[/green]")


@app.command()
def status(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the loaded file, task counts and recorded view actions.

    Example:
        taskproc status
        taskproc status --json
    """
    session = get_session()
    store = session.store
    history = session.history()

    if json_output:
        print_plain(json.dumps(
            {
                "filepath": session.source_path,
                "total": store.total_task_count(),
                "in_view": store.view_task_count(),
                "history": [action.to_dict() for action in history],
            },
            indent=2,
        ))
        return

    if session.source_path is None:
        console.print("[dim]No file loaded. Run 'taskproc load <file>' to start.[/dim]")
        return

    console.print("[bold]Current dataset status:[/bold]")
    console.print(f"  File:    {escape(session.source_path)}", highlight=False)
    console.print(f"  Tasks:   {store.total_task_count()}")
    console.print(f"  In view: {store.view_task_count()}")

    if history:
        console.print("  Actions:")
        for action in history:
            console.print(f"    [cyan]{action.kind.value}[/cyan] {escape(action.payload)}", highlight=False)
    else:
        console.print("  [dim]No filters or sorts applied[/dim]")
