"""
FILE: taskproc/formatting.py
PURPOSE: Shared formatting utilities for CLI output
EXPORTS:
  - TaskFormatter: Class for formatting tasks and view statistics
DEPENDENCIES:
  - rich (for table formatting)
  - json (for JSON serialization)
  - typing (type hints)
  - taskproc.core.models (Task, StatusStats)
NOTES:
  - Centralized formatting logic so commands stay thin
  - Three output modes: rich table, JSON, raw lines
"""

import json
from typing import List

from rich.markup import escape
from rich.table import Table

from .core.models import StatusStats, Task

STATUS_STYLES = {
    "todo": "yellow",
    "in-progress": "blue",
    "done": "green",
}


def _priority_style(priority: int) -> str:
    if priority >= 4:
        return "bold red"
    if priority == 3:
        return "yellow"
    return "dim"


class TaskFormatter:
    """Centralized task display formatting."""

    @staticmethod
    def create_table(tasks: List[Task], title: str = "Tasks", show_tags: bool = True) -> Table:
        """
        Create Rich table for tasks.

        Args:
            tasks: Tasks to display, in view order
            title: Table title
            show_tags: Whether to show the tags column

        Returns:
            Rich Table object ready for display
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="cyan", width=6, no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Status", width=12)
        table.add_column("Pri", justify="right", width=4)
        table.add_column("Due", style="magenta", width=10)
        table.add_column("Assignee", style="yellow")

        if show_tags:
            table.add_column("Tags", style="dim")

        for task in tasks:
            status_style = STATUS_STYLES.get(task.status, "white")
            priority_style = _priority_style(task.priority)
            row_data = [
                str(task.id),
                escape(task.title),
                f"[{status_style}]{escape(task.status)}[/{status_style}]",
                f"[{priority_style}]{task.priority}[/{priority_style}]",
                escape(task.due_date or "-"),
                escape(task.assignee or "-"),
            ]
            if show_tags:
                row_data.append(escape(", ".join(task.tags)))
            table.add_row(*row_data)

        return table

    @staticmethod
    def to_json_array(tasks: List[Task]) -> str:
        """Convert task list to JSON array string."""
        return json.dumps([task.to_dict() for task in tasks], indent=2)

    @staticmethod
    def to_raw_lines(tasks: List[Task]) -> List[str]:
        """
        Convert task list to plain text lines.

        Args:
            tasks: List of tasks to format

        Returns:
            List of formatted strings, one per task
        """
        lines = []
        for task in tasks:
            status_marker = "x" if task.status == "done" else " "
            lines.append(f"{task.id}: [{status_marker}] {task.title} (p{task.priority})")
        return lines

    @staticmethod
    def create_stats_table(stats: StatusStats, average_priority: float, overdue: int) -> Table:
        """Two-column table summarizing the current view."""
        table = Table(title="View statistics", show_header=False)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("todo", str(stats.todo))
        table.add_row("in-progress", str(stats.in_progress))
        table.add_row("done", str(stats.done))
        table.add_row("other", str(stats.other))
        table.add_row("total", str(stats.total))
        table.add_row("average priority", f"{average_priority:.2f}")
        table.add_row("overdue", str(overdue))
        return table
