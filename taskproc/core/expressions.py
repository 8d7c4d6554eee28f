"""
FILE: taskproc/core/expressions.py
PURPOSE: Parse textual filter/sort expressions into typed filter and sort criteria
EXPORTS:
  - parse_filter(expr) -> FilterSpec | None
  - parse_sort(expr) -> SortSpec | None
  - parse_filter_field(text) -> FilterField | None
  - parse_sort_field(text) -> SortField | None
  - find_operator(expr) -> (FilterOp, position) | None
DEPENDENCIES:
  - logging (stdlib)
  - taskproc.core.models (spec types)
  - taskproc.core.constants (operator order, direction words)
NOTES:
  - Pure and stateless: never raises on bad input, returns None and logs why
  - Field names are matched exactly against the lowercase vocabulary
  - Numeric fields (id, priority) reject non-integer values at parse time
"""

import logging
from typing import Optional, Tuple

from .constants import (
    ASCENDING_WORDS,
    DESCENDING_WORDS,
    FILTER_OPERATORS,
    NUMERIC_FILTER_FIELDS,
)
from .models import (
    FilterField,
    FilterOp,
    FilterSpec,
    SortDirection,
    SortField,
    SortSpec,
)

logger = logging.getLogger(__name__)

_WHITESPACE = " \t"


def find_operator(expr: str) -> Optional[Tuple[FilterOp, int]]:
    """
    Locate the comparison operator in a filter expression.

    Operators are tried in a fixed order (>=, <=, !=, =, >, <) and the
    first one present anywhere in the text wins. This keeps "priority>=3"
    from being read as field "priority" with operator ">" and value "=3".

    Returns:
        (operator, index of its first character), or None if no operator
    """
    for op in FILTER_OPERATORS:
        pos = expr.find(op.value)
        if pos != -1:
            return op, pos
    return None


def parse_filter_field(text: str) -> Optional[FilterField]:
    for candidate in FilterField:
        if candidate.value == text:
            return candidate
    return None


def parse_sort_field(text: str) -> Optional[SortField]:
    for candidate in SortField:
        if candidate.value == text:
            return candidate
    return None


def _is_integer(text: str) -> bool:
    try:
        int(text)
    except ValueError:
        return False
    return True


def parse_filter(expr: str) -> Optional[FilterSpec]:
    """
    Parse a single-predicate filter expression.

    Examples:
        >>> parse_filter("priority>=5")
        FilterSpec(field=<FilterField.PRIORITY: 'priority'>, op=<FilterOp.GREATER_THAN_OR_EQUAL: '>='>, value='5')

        >>> parse_filter("status = todo")
        FilterSpec(field=<FilterField.STATUS: 'status'>, op=<FilterOp.EQUAL: '='>, value='todo')

        >>> parse_filter("") is None
        True

    Args:
        expr: Raw expression as typed by the user

    Returns:
        FilterSpec, or None if the expression is empty, has no operator,
        names an unknown field, or gives a numeric field a non-integer value
    """
    if not expr:
        logger.warning("Empty filter expression")
        return None

    found = find_operator(expr)
    if found is None:
        logger.warning("No valid operator found in filter expression: %s", expr)
        return None

    op, pos = found
    field_text = expr[:pos].strip(_WHITESPACE)
    value = expr[pos + len(op.value):].strip(_WHITESPACE)

    filter_field = parse_filter_field(field_text)
    if filter_field is None:
        logger.warning("Unknown filter field: %s", field_text)
        return None

    if filter_field in NUMERIC_FILTER_FIELDS and not _is_integer(value):
        logger.warning("Filter on %s needs an integer value, got: %s", filter_field.value, value)
        return None

    return FilterSpec(field=filter_field, op=op, value=value)


def parse_sort(expr: str) -> Optional[SortSpec]:
    """
    Parse a sort expression of the form ``<field> [asc|desc]``.

    The text is split on the first space. Unknown direction words fall
    back to ascending with a warning rather than failing.

    Examples:
        >>> parse_sort("priority desc")
        SortSpec(field=<SortField.PRIORITY: 'priority'>, direction=<SortDirection.DESCENDING: 'desc'>)

        >>> parse_sort("priority unknown")
        SortSpec(field=<SortField.PRIORITY: 'priority'>, direction=<SortDirection.ASCENDING: 'asc'>)
    """
    if not expr:
        logger.warning("Empty sort expression")
        return None

    field_text, _, direction_text = expr.partition(" ")
    direction_text = direction_text.strip()

    sort_field = parse_sort_field(field_text)
    if sort_field is None:
        logger.warning("Unknown sort field: %s", field_text)
        return None

    direction = SortDirection.ASCENDING
    if direction_text in DESCENDING_WORDS:
        direction = SortDirection.DESCENDING
    elif direction_text and direction_text not in ASCENDING_WORDS:
        logger.warning("Unknown sort direction '%s', using ascending", direction_text)

    return SortSpec(field=sort_field, direction=direction)
