"""
FILE: taskproc/core/models.py
PURPOSE: Domain models for task records, filter and sort criteria, recorded actions
EXPORTS:
  - Task (frozen dataclass)
  - FilterField, FilterOp, FilterSpec
  - SortField, SortDirection, SortSpec
  - ActionKind, ViewAction
  - StatusStats (dataclass)
DEPENDENCIES:
  - dataclasses (stdlib)
  - enum (stdlib)
  - json (stdlib)
  - typing (stdlib)
NOTES:
  - Task is immutable after construction
  - Enum values are the exact text used on the command line and in the ledger
  - Optional fields use None as default
  - Dates are ISO-8601 strings (YYYY-MM-DD)
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple
import json


@dataclass(frozen=True)
class Task:
    """A single task record loaded from a source file."""

    id: int
    title: str
    status: str = "todo"
    priority: int = 1
    created_date: str = ""
    description: Optional[str] = None
    assignee: Optional[str] = None
    due_date: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to a JSON-serializable dict."""
        data = asdict(self)
        data["tags"] = list(self.tags)
        return data

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def __str__(self) -> str:
        return f"ID: {self.id} | Title: {self.title} | Status: {self.status} | Priority: {self.priority}"


class FilterField(Enum):
    ID = "id"
    TITLE = "title"
    STATUS = "status"
    PRIORITY = "priority"
    CREATED_DATE = "created_date"
    DUE_DATE = "due_date"
    ASSIGNEE = "assignee"
    DESCRIPTION = "description"


class FilterOp(Enum):
    EQUAL = "="
    NOT_EQUAL = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="


@dataclass(frozen=True)
class FilterSpec:
    """
    A single filter predicate, e.g. ``priority>=3`` or ``status=todo``.

    Attributes:
        field: Which task attribute to compare
        op: Comparison operator
        value: Raw right-hand side text (trimmed)
    """
    field: FilterField
    op: FilterOp
    value: str


class SortField(Enum):
    ID = "id"
    TITLE = "title"
    STATUS = "status"
    PRIORITY = "priority"
    CREATED_DATE = "created_date"
    DUE_DATE = "due_date"


class SortDirection(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class SortSpec:
    """Sort order for the current view, e.g. ``due_date desc``."""
    field: SortField
    direction: SortDirection = SortDirection.ASCENDING


class ActionKind(Enum):
    """Kinds of view action recorded in the session ledger."""
    LOAD = "load"
    FILTER = "filter"
    SORT = "sort"
    RESET_FILTERS = "reset-filters"
    FIND_BY_TAG = "find-by-tag"

    @classmethod
    def from_string(cls, value: str) -> Optional["ActionKind"]:
        """Return the matching kind, or None for unrecognized text."""
        for kind in cls:
            if kind.value == value:
                return kind
        return None


@dataclass(frozen=True)
class ViewAction:
    """
    A recorded view operation.

    The payload is the raw expression exactly as the user typed it,
    never the parsed spec, so replay re-parses it.
    """
    kind: ActionKind
    payload: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.kind.value, "payload": self.payload}


@dataclass
class StatusStats:
    """Counts of view members per status bucket."""

    todo: int = 0
    in_progress: int = 0
    done: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        return self.todo + self.in_progress + self.done + self.other

    def to_dict(self) -> Dict[str, int]:
        return {
            "todo": self.todo,
            "in_progress": self.in_progress,
            "done": self.done,
            "other": self.other,
            "total": self.total,
        }
