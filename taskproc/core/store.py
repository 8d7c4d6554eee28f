"""
FILE: taskproc/core/store.py
PURPOSE: In-memory task store with a filtered/sorted current view
EXPORTS:
  - ViewStore (class)
DEPENDENCIES:
  - logging, operator, datetime (stdlib)
  - taskproc.core.models (Task, specs, ViewAction, StatusStats)
  - taskproc.core.expressions (payload re-parsing during replay)
  - taskproc.core.constants (status names)
NOTES:
  - Canonical store is a dict keyed by id, kept in ascending id order
  - The view holds ids, never Task copies, and is rebuilt on every load()
  - Filters are cumulative: they only ever narrow the view
  - Sorting is stable; records missing the sort key always go last
  - Secondary indices are a cache, filtering never consults them
"""

import logging
import operator
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional

from . import expressions
from .constants import STATUS_DONE, STATUS_IN_PROGRESS, STATUS_TODO
from .models import (
    ActionKind,
    FilterField,
    FilterOp,
    FilterSpec,
    SortDirection,
    SortField,
    SortSpec,
    StatusStats,
    Task,
    ViewAction,
)

logger = logging.getLogger(__name__)

_COMPARATORS: Dict[FilterOp, Callable] = {
    FilterOp.EQUAL: operator.eq,
    FilterOp.NOT_EQUAL: operator.ne,
    FilterOp.GREATER_THAN: operator.gt,
    FilterOp.GREATER_THAN_OR_EQUAL: operator.ge,
    FilterOp.LESS_THAN: operator.lt,
    FilterOp.LESS_THAN_OR_EQUAL: operator.le,
}


def _text_value(task: Task, field_name: str) -> Optional[str]:
    """Return a text attribute, treating None and "" as missing."""
    value = getattr(task, field_name)
    return value if value else None


def _contains_text(task: Task, needle: str) -> bool:
    if needle in task.title.casefold():
        return True
    return bool(task.description) and needle in task.description.casefold()


class ViewStore:
    """
    Canonical task set plus an ordered "current view" over it.

    The view starts as every record in id order. apply_filter(),
    filter_by_tag(), filter_no_tags() and search_text() narrow it;
    apply_sort() reorders it; reset_view() and load() start over.
    """

    def __init__(self):
        self._tasks: Dict[int, Task] = {}
        self._view: List[int] = []
        self._status_index: Dict[str, List[Task]] = {}
        self._tag_index: Dict[str, List[Task]] = {}

    # -------------------- loading --------------------

    def load(self, records: Iterable[Task]) -> None:
        """
        Replace all data with `records`.

        Duplicate ids keep the last record seen. The view is reset to every
        record in ascending id order and the secondary indices are rebuilt.
        """
        by_id: Dict[int, Task] = {}
        for task in records:
            by_id[task.id] = task
        self._tasks = {task_id: by_id[task_id] for task_id in sorted(by_id)}
        self.reset_view()
        self._rebuild_indices()
        logger.debug("Loaded %d task(s) into store", len(self._tasks))

    def _rebuild_indices(self) -> None:
        self._status_index = {}
        self._tag_index = {}
        for task in self._tasks.values():
            self._status_index.setdefault(task.status, []).append(task)
            for tag in task.tags:
                self._tag_index.setdefault(tag, []).append(task)

    # -------------------- view management --------------------

    def reset_view(self) -> None:
        """Reset the view to all loaded tasks in id order."""
        self._view = list(self._tasks)

    def _narrow(self, keep: Callable[[Task], bool]) -> None:
        self._view = [task_id for task_id in self._view if keep(self._tasks[task_id])]

    def apply_filter(self, spec: FilterSpec) -> None:
        """Drop every view member that does not satisfy `spec`."""
        before = len(self._view)
        self._narrow(self._make_predicate(spec))
        logger.debug(
            "Filter %s%s%s kept %d of %d task(s)",
            spec.field.value, spec.op.value, spec.value, len(self._view), before,
        )

    def apply_sort(self, spec: SortSpec) -> None:
        """
        Stable-sort the view by `spec`.

        Numeric for id and priority, code-point order for text fields.
        Records with no value for the key (no due date, empty created date)
        keep their relative order and go after all others in both directions.
        """
        key = self._sort_key(spec.field)
        present = [task_id for task_id in self._view if key(self._tasks[task_id]) is not None]
        missing = [task_id for task_id in self._view if key(self._tasks[task_id]) is None]
        present.sort(
            key=lambda task_id: key(self._tasks[task_id]),
            reverse=spec.direction is SortDirection.DESCENDING,
        )
        self._view = present + missing

    def filter_by_tag(self, tag: str) -> None:
        self._narrow(lambda task: tag in task.tags)

    def filter_no_tags(self) -> None:
        self._narrow(lambda task: not task.tags)

    def search_text(self, text: str) -> None:
        """Keep tasks whose title or description contains `text`, ignoring case."""
        needle = text.casefold()
        self._narrow(lambda task: _contains_text(task, needle))

    def find_text(self, text: str) -> List[Task]:
        """Like search_text() but returns the matches and leaves the view alone."""
        needle = text.casefold()
        return [task for task in self.current_view() if _contains_text(task, needle)]

    def replay_history(self, actions: Iterable[ViewAction]) -> int:
        """
        Rebuild the view by re-applying recorded actions in order.

        The view is reset first. Load actions are markers and are skipped.
        Entries whose payload no longer parses are logged and skipped; one
        bad entry never stops the replay.

        Returns:
            Number of actions applied
        """
        self.reset_view()
        applied = 0

        for action in actions:
            if action.kind is ActionKind.LOAD:
                continue

            if action.kind is ActionKind.FILTER:
                spec = expressions.parse_filter(action.payload)
                if spec is None:
                    logger.warning("Replay skipped unparseable filter: %s", action.payload)
                    continue
                self.apply_filter(spec)

            elif action.kind is ActionKind.SORT:
                sort_spec = expressions.parse_sort(action.payload)
                if sort_spec is None:
                    logger.warning("Replay skipped unparseable sort: %s", action.payload)
                    continue
                self.apply_sort(sort_spec)

            elif action.kind is ActionKind.FIND_BY_TAG:
                if action.payload:
                    self.filter_by_tag(action.payload)
                else:
                    self.filter_no_tags()

            elif action.kind is ActionKind.RESET_FILTERS:
                self.reset_view()

            applied += 1
            logger.debug("Replayed %s: %s", action.kind.value, action.payload)

        return applied

    # -------------------- data access --------------------

    def current_view(self) -> List[Task]:
        return [self._tasks[task_id] for task_id in self._view]

    def view_ids(self) -> List[int]:
        return list(self._view)

    def get_by_id(self, task_id: int) -> Optional[Task]:
        return self._tasks.get(task_id)

    def total_task_count(self) -> int:
        return len(self._tasks)

    def view_task_count(self) -> int:
        return len(self._view)

    def empty(self) -> bool:
        return not self._tasks

    def tasks_with_status(self, status: str) -> List[Task]:
        """Loaded tasks with `status`, from the status index (ignores the view)."""
        return list(self._status_index.get(status, []))

    def tasks_with_tag(self, tag: str) -> List[Task]:
        """Loaded tasks carrying `tag`, from the tag index (ignores the view)."""
        return list(self._tag_index.get(tag, []))

    # -------------------- aggregates --------------------

    def status_stats(self) -> StatusStats:
        stats = StatusStats()
        for task in self.current_view():
            if task.status == STATUS_TODO:
                stats.todo += 1
            elif task.status == STATUS_IN_PROGRESS:
                stats.in_progress += 1
            elif task.status == STATUS_DONE:
                stats.done += 1
            else:
                stats.other += 1
        return stats

    def average_priority(self) -> float:
        """Mean priority over the view, 0.0 when the view is empty."""
        if not self._view:
            return 0.0
        total = sum(self._tasks[task_id].priority for task_id in self._view)
        return total / len(self._view)

    def overdue_count(self, today: Optional[str] = None) -> int:
        """
        Count view members that are overdue.

        A task is overdue when it has a due date earlier than `today`
        and its status is not "done". ISO-8601 dates order correctly as
        plain strings.

        Args:
            today: ISO date (YYYY-MM-DD), defaults to the local date
        """
        today = today or date.today().isoformat()
        return sum(
            1
            for task in self.current_view()
            if task.due_date and task.due_date < today and task.status != STATUS_DONE
        )

    # -------------------- internal helpers --------------------

    def _make_predicate(self, spec: FilterSpec) -> Callable[[Task], bool]:
        compare = _COMPARATORS[spec.op]

        if spec.field in (FilterField.ID, FilterField.PRIORITY):
            try:
                target = int(spec.value)
            except ValueError:
                logger.warning(
                    "Ignoring filter on %s with non-integer value: %s", spec.field.value, spec.value
                )
                return lambda task: True
            attribute = spec.field.value
            return lambda task: compare(getattr(task, attribute), target)

        attribute = spec.field.value
        target_text = spec.value

        def predicate(task: Task) -> bool:
            value = _text_value(task, attribute)
            if value is None:
                # A missing value only satisfies "!="
                return spec.op is FilterOp.NOT_EQUAL
            return compare(value, target_text)

        return predicate

    @staticmethod
    def _sort_key(sort_field: SortField) -> Callable[[Task], object]:
        if sort_field is SortField.ID:
            return lambda task: task.id
        if sort_field is SortField.PRIORITY:
            return lambda task: task.priority
        attribute = sort_field.value
        return lambda task: _text_value(task, attribute)
