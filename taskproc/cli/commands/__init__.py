"""
FILE: taskproc/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .session import (
    load,
    reload,
    clear,
    status,
)
from .view import (
    list_tasks,
    filter_view,
    sort_view,
    tag,
    reset,
    search,
    show,
    stats,
)
from .system import (
    version,
    help,
)

__all__ = [
    "load",
    "reload",
    "clear",
    "status",
    "list_tasks",
    "filter_view",
    "sort_view",
    "tag",
    "reset",
    "search",
    "show",
    "stats",
    "version",
    "help",
]
