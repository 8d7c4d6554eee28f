"""
FILE: taskproc/cli/commands/view.py
PURPOSE: View commands (list, filter, sort, tag, reset, search, show, stats)
"""

import json
from datetime import date
from typing import Optional

import typer
from rich.markup import escape

from ..app import app, console, get_session, fail, print_plain
from ...core.exceptions import (
    ExpressionError,
    NoSourceError,
    TaskNotFoundError,
    TaskProcError,
)
from ...formatting import TaskFormatter


def _print_tasks(tasks, title: str, json_output: bool, raw: bool) -> None:
    if json_output:
        print_plain(TaskFormatter.to_json_array(tasks))
    elif raw:
        for line in TaskFormatter.to_raw_lines(tasks):
            print_plain(line)
    elif not tasks:
        console.print("[dim]No tasks found[/dim]")
    else:
        console.print(TaskFormatter.create_table(tasks, title=title))


@app.command("list")
def list_tasks(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List tasks in the current view.

    Example:
        taskproc list
        taskproc list --json
    """
    session = get_session()
    tasks = session.current_view()
    _print_tasks(tasks, "Tasks", json_output, raw)

    if tasks and not json_output and not raw:
        console.print(f"\n[dim]Showing {len(tasks)} of {session.task_count()} task(s)[/dim]")


@app.command("filter")
def filter_view(
    expression: str = typer.Argument(..., help="Filter expression, e.g. 'priority>=3'"),
):
    """
    Narrow the current view. Filters accumulate until 'reset'.

    Fields: id, title, status, priority, created_date, due_date, assignee, description
    Operators: =, !=, >, >=, <, <=

    Example:
        taskproc filter "status=todo"
        taskproc filter "priority>=3"
        taskproc filter "due_date<2025-01-01"
    """
    session = get_session()
    try:
        remaining = session.apply_filter(expression)
    except (ExpressionError, NoSourceError) as e:
        fail(str(e))
    except TaskProcError as e:
        fail(f"Unexpected error: {e}")

    console.print(f"[green]✓ Filter applied:[/green] {remaining} task(s) in view", highlight=False)


@app.command("sort")
def sort_view(
    field: str = typer.Argument(..., help="id, title, status, priority, created_date or due_date"),
    direction: Optional[str] = typer.Argument(None, help="asc (default) or desc"),
):
    """
    Reorder the current view. Ties keep their previous order.

    Example:
        taskproc sort priority desc
        taskproc sort due_date
    """
    expression = f"{field} {direction}" if direction else field
    session = get_session()
    try:
        session.apply_sort(expression)
    except (ExpressionError, NoSourceError) as e:
        fail(str(e))
    except TaskProcError as e:
        fail(f"Unexpected error: {e}")

    console.print(f"[green]✓ Sorted by:[/green] {escape(expression)}", highlight=False)


@app.command()
def tag(
    name: Optional[str] = typer.Argument(None, help="Tag to keep"),
    untagged: bool = typer.Option(False, "--none", help="Keep only tasks without tags"),
):
    """
    Narrow the current view by tag.

    Example:
        taskproc tag backend
        taskproc tag --none
    """
    if untagged == bool(name):
        fail("Give either a tag name or --none")

    session = get_session()
    try:
        remaining = session.find_by_tag("" if untagged else name)
    except NoSourceError as e:
        fail(str(e))
    except TaskProcError as e:
        fail(f"Unexpected error: {e}")

    label = "untagged" if untagged else f"tag '{escape(name)}'"
    console.print(f"[green]✓ Filtered by {label}:[/green] {remaining} task(s) in view", highlight=False)


@app.command()
def reset():
    """
    Drop all filters and sorts.

    Example:
        taskproc reset
    """
    session = get_session()
    session.reset_view()
    console.print(f"[green]✓ View reset:[/green] {session.store.view_task_count()} task(s) in view")


@app.command()
def search(
    text: str = typer.Argument(..., help="Text to find in titles and descriptions"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show tasks in the current view whose title or description contains TEXT.

    Case-insensitive. The view itself is not changed.

    Example:
        taskproc search "login"
    """
    session = get_session()
    tasks = session.search(text)
    _print_tasks(tasks, f"Search: {escape(text)}", json_output, raw)


@app.command()
def show(
    task_id: int = typer.Argument(..., help="Task ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show full details of one task.

    Example:
        taskproc show 3
    """
    session = get_session()
    try:
        task = session.store.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
    except TaskNotFoundError as e:
        fail(str(e))

    if json_output:
        print_plain(task.to_json())
        return

    console.print(f"[bold cyan]#{task.id}[/bold cyan] [bold]{escape(task.title)}[/bold]", highlight=False)
    console.print(f"  Status:      {task.status}", highlight=False, markup=False)
    console.print(f"  Priority:    {task.priority}")
    console.print(f"  Created:     {task.created_date or '-'}", highlight=False, markup=False)
    console.print(f"  Due:         {task.due_date or '-'}", highlight=False, markup=False)
    console.print(f"  Assignee:    {task.assignee or '-'}", highlight=False, markup=False)
    console.print(f"  Tags:        {', '.join(task.tags) or '-'}", highlight=False, markup=False)
    if task.description:
        console.print(f"\n  {task.description}", highlight=False, markup=False)


@app.command()
def stats(
    today: Optional[str] = typer.Option(None, "--today", help="Reference date for overdue (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show status counts, average priority and overdue count for the current view.

    Example:
        taskproc stats
        taskproc stats --today 2025-06-01 --json
    """
    if today is None:
        today = date.today().isoformat()
    else:
        try:
            today = date.fromisoformat(today).isoformat()
        except ValueError:
            fail(f"Invalid date for --today: '{today}' (expected YYYY-MM-DD)")
    session = get_session()
    store = session.store
    status_stats = store.status_stats()
    average = store.average_priority()
    overdue = store.overdue_count(today)

    if json_output:
        data = status_stats.to_dict()
        data["average_priority"] = average
        data["overdue"] = overdue
        print_plain(json.dumps(data, indent=2))
        return

    console.print(TaskFormatter.create_stats_table(status_stats, average, overdue))
