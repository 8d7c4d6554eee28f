"""
FILE: taskproc/core/readers.py
PURPOSE: Turn CSV and JSON source files into Task records
EXPORTS:
  - CsvTaskReader (class)
  - JsonTaskReader (class)
  - DEFAULT_READERS: Reader instances tried in order
  - select_reader(path, readers) -> reader | None
DEPENDENCIES:
  - csv, json, logging, pathlib (stdlib)
  - taskproc.core.models (Task)
  - taskproc.core.constants (CSV_COLUMNS, DEFAULT_PRIORITY)
  - taskproc.core.exceptions (SourceParseError)
NOTES:
  - Readers are picked by file extension via can_handle()
  - Invalid rows (id < 1, empty title or status) are skipped with a warning
  - Missing, invalid or non-finite priority becomes 1
  - A leading UTF-8 byte order mark is ignored
  - I/O problems and malformed documents raise SourceParseError
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from .constants import CSV_COLUMNS, DEFAULT_PRIORITY, TAG_SEPARATOR
from .exceptions import SourceParseError
from .models import Task

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_priority(value: Any) -> int:
    if isinstance(value, bool):
        return DEFAULT_PRIORITY
    try:
        priority = int(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_PRIORITY
    return priority if priority >= 1 else DEFAULT_PRIORITY


def split_tags(field: str) -> List[str]:
    """Split a comma-joined tags cell into tokens, dropping blanks."""
    tags = [tag.strip() for tag in field.split(TAG_SEPARATOR)]
    return [tag for tag in tags if tag]


def _build_task(raw: Mapping[str, Any], tags: Iterable[str], path: PathLike, row: int) -> Optional[Task]:
    """Validate one raw record, returning None (and warning) if it must be skipped."""
    raw_id = raw.get("id")
    try:
        task_id = int(raw_id) if not isinstance(raw_id, bool) else 0
    except (TypeError, ValueError, OverflowError):
        task_id = 0
    if task_id < 1:
        logger.warning("%s record %d skipped: invalid id %r, must be greater than 0", path, row, raw_id)
        return None

    title = _optional_text(raw.get("title"))
    status = _optional_text(raw.get("status"))
    if not title or not status:
        logger.warning("%s record %d skipped: empty title or status", path, row)
        return None

    return Task(
        id=task_id,
        title=title,
        status=status,
        priority=_coerce_priority(raw.get("priority")),
        created_date=_optional_text(raw.get("created_date")) or "",
        description=_optional_text(raw.get("description")),
        assignee=_optional_text(raw.get("assignee")),
        due_date=_optional_text(raw.get("due_date")),
        tags=tuple(tags),
    )


class CsvTaskReader:
    """Reads comma-separated files with the standard task header."""

    extension = ".csv"

    def can_handle(self, path: PathLike) -> bool:
        return str(path).lower().endswith(self.extension)

    def read_tasks(self, path: PathLike) -> List[Task]:
        try:
            with open(path, newline="", encoding="utf-8-sig") as f:
                reader = csv.DictReader(f, skipinitialspace=True)
                header = [name.strip() for name in (reader.fieldnames or [])]
                missing = [name for name in CSV_COLUMNS if name not in header]
                if missing:
                    raise SourceParseError(path, f"missing column(s): {', '.join(missing)}")
                reader.fieldnames = header

                tasks = []
                for row_number, row in enumerate(reader, start=2):
                    task = _build_task(row, split_tags(row.get("tags") or ""), path, row_number)
                    if task is not None:
                        tasks.append(task)
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise SourceParseError(path, str(e)) from e

        logger.debug("Read %d task(s) from %s", len(tasks), path)
        return tasks


class JsonTaskReader:
    """Reads a top-level JSON array of task objects."""

    extension = ".json"

    def can_handle(self, path: PathLike) -> bool:
        return str(path).lower().endswith(self.extension)

    def read_tasks(self, path: PathLike) -> List[Task]:
        try:
            with open(path, encoding="utf-8-sig") as f:
                document = json.load(f)
        except (json.JSONDecodeError, RecursionError) as e:
            raise SourceParseError(path, f"invalid JSON: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise SourceParseError(path, str(e)) from e

        if not isinstance(document, list):
            raise SourceParseError(path, "expected a JSON array of tasks")

        tasks = []
        for index, entry in enumerate(document, start=1):
            if not isinstance(entry, dict):
                logger.warning("%s record %d skipped: not an object", path, index)
                continue
            raw_tags = entry.get("tags")
            tags = [tag for tag in raw_tags if isinstance(tag, str)] if isinstance(raw_tags, list) else []
            task = _build_task(entry, tags, path, index)
            if task is not None:
                tasks.append(task)

        logger.debug("Read %d task(s) from %s", len(tasks), path)
        return tasks


DEFAULT_READERS = (CsvTaskReader(), JsonTaskReader())


def select_reader(path: PathLike, readers: Sequence = DEFAULT_READERS):
    """Return the first reader whose can_handle() accepts `path`, or None."""
    for reader in readers:
        if reader.can_handle(path):
            return reader
    return None
