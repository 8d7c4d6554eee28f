"""taskproc - session-based task list viewer."""

__version__ = "0.1.0"
