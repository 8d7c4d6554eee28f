"""
FILE: taskproc/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - STATUS_TODO, STATUS_IN_PROGRESS, STATUS_DONE: Known status buckets
  - NUMERIC_FILTER_FIELDS: Filter fields compared as integers
  - FILTER_OPERATORS: Operator search order for filter expressions
  - DESCENDING_WORDS, ASCENDING_WORDS: Accepted sort direction words
  - CSV_COLUMNS: Required header of delimited source files
  - DEFAULT_PRIORITY: Priority used when a source omits it
DEPENDENCIES:
  - taskproc.core.models (FilterField, FilterOp)
NOTES:
  - Centralized constants to avoid magic strings
"""

from .models import FilterField, FilterOp

# Task status constants
STATUS_TODO = "todo"
STATUS_IN_PROGRESS = "in-progress"
STATUS_DONE = "done"

# Two-character operators come first so ">=" is never split as ">" + "=value"
FILTER_OPERATORS = (
    FilterOp.GREATER_THAN_OR_EQUAL,
    FilterOp.LESS_THAN_OR_EQUAL,
    FilterOp.NOT_EQUAL,
    FilterOp.EQUAL,
    FilterOp.GREATER_THAN,
    FilterOp.LESS_THAN,
)

NUMERIC_FILTER_FIELDS = (FilterField.ID, FilterField.PRIORITY)

DESCENDING_WORDS = ("desc", "descending")
ASCENDING_WORDS = ("asc", "ascending")

# Source file format
CSV_COLUMNS = (
    "id",
    "title",
    "status",
    "priority",
    "created_date",
    "description",
    "assignee",
    "due_date",
    "tags",
)
TAG_SEPARATOR = ","

# Default values
DEFAULT_PRIORITY = 1
