"""
FILE: taskproc/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - TaskProcError (base exception)
  - SourceError, UnsupportedFormatError, SourceParseError
  - ExpressionError
  - LedgerError
  - NoSourceError
  - TaskNotFoundError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from TaskProcError for easy catching
  - Exceptions include context (paths, expressions, IDs) for helpful messages
  - Core layer raises these, the CLI catches and displays
"""


class TaskProcError(Exception):
    """Base exception for all taskproc errors."""
    pass


class SourceError(TaskProcError):
    """A source file could not be turned into task records."""

    def __init__(self, path: str, message: str):
        self.path = str(path)
        super().__init__(message)


class UnsupportedFormatError(SourceError):
    """No reader recognizes the source file."""

    def __init__(self, path: str):
        super().__init__(path, f"No reader found for file: {path}")


class SourceParseError(SourceError):
    """Source file is unreadable or malformed."""

    def __init__(self, path: str, reason: str):
        self.reason = reason
        super().__init__(path, f"Error reading file {path}: {reason}")


class ExpressionError(TaskProcError):
    """Filter or sort expression failed to parse."""

    def __init__(self, expression: str, kind: str = "filter"):
        self.expression = expression
        self.kind = kind
        super().__init__(f"Invalid {kind} expression: '{expression}'")


class LedgerError(TaskProcError):
    """Session ledger could not be read or written."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Session ledger {path}: {reason}")


class NoSourceError(TaskProcError):
    """An operation needs a loaded source file but none is known."""

    def __init__(self, message: str = "No source file loaded. Run 'taskproc load <file>' first."):
        super().__init__(message)


class TaskNotFoundError(TaskProcError):
    """Task with given ID doesn't exist."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")
