"""
FILE: taskproc/cli/commands/system.py
PURPOSE: System commands (help, version)
"""

from rich.markup import escape

from ..app import app, console
from ... import __version__


def show_help() -> None:
    """Print the command overview."""
    console.print("\n[bold cyan]taskproc[/bold cyan] - Task list processor\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print("  taskproc \\[command] \\[args]\n")

    console.print("[bold]Commands:[/bold]")

    commands = [
        ("load", "Load tasks from a file", "taskproc load <file.csv|file.json>"),
        ("reload", "Re-read the last loaded file", "taskproc reload"),
        ("clear", "Forget the current session", "taskproc clear"),
        ("status", "Show file, counts and recorded actions", "taskproc status [--json]"),
        ("list", "List tasks in the current view", "taskproc list [--json] [--raw]"),
        ("filter", "Narrow the view", 'taskproc filter "priority>=3"'),
        ("sort", "Reorder the view", "taskproc sort <field> [asc|desc]"),
        ("tag", "Narrow the view by tag", "taskproc tag <name> | --none"),
        ("reset", "Drop all filters and sorts", "taskproc reset"),
        ("search", "Find text in the view", 'taskproc search "login"'),
        ("show", "Show one task", "taskproc show <task_id>"),
        ("stats", "Aggregates over the view", "taskproc stats [--today YYYY-MM-DD]"),
        ("version", "Show version", "taskproc version"),
        ("help", "Show this help message", "taskproc help"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:8}[/green] {desc}")
        console.print(f"           [dim]{escape(example)}[/dim]\n", highlight=False)

    console.print("[bold]Global Options:[/bold]")
    console.print("  [yellow]--verbose[/yellow]   Debug logging on stderr")
    console.print("  [yellow]--log-json[/yellow]  Log lines as JSON")
    console.print("  [yellow]--help[/yellow]      Show detailed help for a command\n")

    console.print("[bold]Examples:[/bold]")
    console.print("  taskproc load tasks.csv")
    console.print('  taskproc filter "status=todo"')
    console.print("  taskproc sort priority desc")
    console.print("  taskproc list")
    console.print("  taskproc reset\n")


@app.command()
def version():
    """Show taskproc version."""
    console.print(f"taskproc v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    show_help()
