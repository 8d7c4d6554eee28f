"""
FILE: taskproc/core/session.py
PURPOSE: Tie the store and the ledger together across CLI invocations
EXPORTS:
  - SessionCoordinator (class)
DEPENDENCIES:
  - logging (stdlib)
  - taskproc.config (default ledger location)
  - taskproc.core.store (ViewStore)
  - taskproc.core.ledger (SessionLedger)
  - taskproc.core.readers (select_reader, DEFAULT_READERS)
  - taskproc.core.expressions (parse_filter, parse_sort)
  - taskproc.core.exceptions (error types)
NOTES:
  - Construction restores the previous session: reload the recorded file,
    then replay the recorded actions on it
  - A broken ledger or missing source at startup is logged, never fatal
  - Every successful view change is appended to the ledger and persisted
  - Ledger write failures are warnings; the in-memory change stands
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .. import config
from . import expressions
from .exceptions import (
    ExpressionError,
    LedgerError,
    NoSourceError,
    SourceParseError,
    TaskProcError,
    UnsupportedFormatError,
)
from .ledger import SessionLedger
from .models import ActionKind, Task, ViewAction
from .readers import DEFAULT_READERS, select_reader
from .store import ViewStore

logger = logging.getLogger(__name__)


class SessionCoordinator:
    """
    Session-level entry point used by the CLI.

    Args:
        ledger: Ledger to restore from and record into (defaults to
            config.ledger_path() in the working directory)
        store: View store to drive (defaults to a fresh ViewStore)
        readers: Source readers tried in order
        restore: Restore the previous session on construction
    """

    def __init__(
        self,
        ledger: Optional[SessionLedger] = None,
        store: Optional[ViewStore] = None,
        readers: Sequence = DEFAULT_READERS,
        restore: bool = True,
    ):
        self._ledger = ledger if ledger is not None else SessionLedger(config.ledger_path())
        self._store = store if store is not None else ViewStore()
        self._readers = readers
        self._source_path: Optional[str] = None

        if restore:
            self._restore()

    # -------------------- properties --------------------

    @property
    def store(self) -> ViewStore:
        return self._store

    @property
    def ledger(self) -> SessionLedger:
        return self._ledger

    @property
    def source_path(self) -> Optional[str]:
        return self._source_path

    def task_count(self) -> int:
        return self._store.total_task_count()

    def current_view(self) -> List[Task]:
        return self._store.current_view()

    def history(self) -> List[ViewAction]:
        return self._ledger.history

    # -------------------- startup --------------------

    def _restore(self) -> None:
        try:
            if not self._ledger.load():
                return
            source_path = self._ledger.source_path
            tasks = self._read(source_path)
        except TaskProcError as e:
            logger.warning("Unable to restore previous session: %s", e)
            return

        self._store.load(tasks)
        self._source_path = source_path
        applied = self._store.replay_history(self._ledger.history)
        logger.info(
            "Restored %d task(s) from %s, replayed %d action(s)",
            len(tasks), source_path, applied,
        )

    # -------------------- loading --------------------

    def _read(self, path: str) -> List[Task]:
        reader = select_reader(path, self._readers)
        if reader is None:
            raise UnsupportedFormatError(path)
        return reader.read_tasks(path)

    def _persist(self) -> None:
        try:
            self._ledger.persist()
        except LedgerError as e:
            logger.warning("Failed to persist session ledger: %s", e)

    def load_from_file(self, path: Union[str, Path]) -> int:
        """
        Load tasks from `path`, replacing the current session.

        Returns:
            Number of tasks loaded

        Raises:
            UnsupportedFormatError: No reader handles the file
            SourceParseError: The file is unreadable, malformed or holds no tasks

        Notes:
            Prior state is untouched when reading fails. On success the
            ledger records the new path with an empty history.
        """
        path = str(path)
        tasks = self._read(path)
        if not tasks:
            raise SourceParseError(path, "no tasks found")

        self._store.load(tasks)
        self._source_path = path
        self._ledger.set_source(path)
        self._persist()
        logger.info("Loaded %d task(s) from %s", len(tasks), path)
        return len(tasks)

    def reload(self) -> int:
        """
        Re-read the current source file from disk.

        This refreshes raw data and drops the recorded history; it does not
        replay. When no source is known in memory the ledger is consulted.

        Raises:
            NoSourceError: No source path is known
            LedgerError: The ledger exists but cannot be read
        """
        if not self._source_path:
            if self._ledger.load():
                self._source_path = self._ledger.source_path
            if not self._source_path:
                raise NoSourceError("No source file to reload. Run 'taskproc load <file>' first.")
        return self.load_from_file(self._source_path)

    def clear(self) -> None:
        """Forget the session: delete the ledger and empty the store."""
        self._ledger.clear()
        self._store.load([])
        self._source_path = None

    # -------------------- view changes --------------------

    def _require_source(self) -> None:
        if not self._source_path:
            raise NoSourceError()

    def _record(self, kind: ActionKind, payload: str) -> None:
        self._ledger.push_action(ViewAction(kind=kind, payload=payload))
        self._persist()

    def apply_filter(self, text: str) -> int:
        """
        Narrow the view with a filter expression and record it.

        Returns:
            Number of tasks left in the view

        Raises:
            NoSourceError: Nothing loaded
            ExpressionError: Expression does not parse (view unchanged)
        """
        self._require_source()
        spec = expressions.parse_filter(text)
        if spec is None:
            raise ExpressionError(text, "filter")
        self._store.apply_filter(spec)
        self._record(ActionKind.FILTER, text)
        return self._store.view_task_count()

    def apply_sort(self, text: str) -> int:
        """Reorder the view with a sort expression and record it."""
        self._require_source()
        spec = expressions.parse_sort(text)
        if spec is None:
            raise ExpressionError(text, "sort")
        self._store.apply_sort(spec)
        self._record(ActionKind.SORT, text)
        return self._store.view_task_count()

    def find_by_tag(self, tag: str) -> int:
        """Narrow the view to tasks tagged `tag`; an empty tag keeps untagged tasks."""
        self._require_source()
        if tag:
            self._store.filter_by_tag(tag)
        else:
            self._store.filter_no_tags()
        self._record(ActionKind.FIND_BY_TAG, tag)
        return self._store.view_task_count()

    def search(self, text: str) -> List[Task]:
        """Tasks of the current view matching `text`. Does not change the session."""
        return self._store.find_text(text)

    def reset_view(self) -> None:
        """Drop all filters and sorts, both in memory and in the ledger."""
        self._ledger.clear_history()
        if self._ledger.source_path is not None:
            self._persist()
        self._store.reset_view()
