"""
FILE: taskproc/core/ledger.py
PURPOSE: Durable record of the source file path and view action history
EXPORTS:
  - SessionLedger (class)
DEPENDENCIES:
  - json, os, tempfile, pathlib, logging (stdlib)
  - taskproc.core.models (ActionKind, ViewAction)
  - taskproc.core.exceptions (LedgerError)
NOTES:
  - File format: {"filepath": str, "history": [{"type": str, "payload": str}, ...]}
  - persist() writes a temp file in the same directory and renames it over
    the ledger, so readers never see a half-written file
  - No locking: concurrent processes may overwrite each other's ledger
  - Unknown action types are skipped on load
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import LedgerError
from .models import ActionKind, ViewAction

logger = logging.getLogger(__name__)


class SessionLedger:
    """
    Source path plus ordered view actions, mirrored to a small JSON file.

    Mutating methods only touch memory; call persist() to commit.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._source_path: Optional[str] = None
        self._history: List[ViewAction] = []

    @property
    def path(self) -> Path:
        """Location of the durable ledger file."""
        return self._path

    @property
    def source_path(self) -> Optional[str]:
        return self._source_path

    @property
    def history(self) -> List[ViewAction]:
        return list(self._history)

    def set_source(self, path: Union[str, Path]) -> None:
        """Record a new source file; prior history no longer applies and is dropped."""
        self._source_path = str(path)
        self._history = []

    def push_action(self, action: ViewAction) -> None:
        self._history.append(action)

    def clear_history(self) -> None:
        self._history = []

    def to_dict(self) -> dict:
        return {
            "filepath": self._source_path,
            "history": [action.to_dict() for action in self._history],
        }

    def persist(self) -> None:
        """
        Atomically write the ledger to disk.

        Raises:
            LedgerError: If no source path is set or the write fails. The
                previously committed file is left untouched in both cases.
        """
        if self._source_path is None:
            raise LedgerError(self._path, "no source file set, nothing to persist")

        payload = json.dumps(self.to_dict(), indent=2)
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=self._path.name + ".",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
            raise LedgerError(self._path, f"write failed: {e}") from e

        logger.debug("Persisted ledger with %d action(s) to %s", len(self._history), self._path)

    def load(self) -> bool:
        """
        Restore source path and history from disk.

        Returns:
            True if a ledger file was found and loaded, False if none exists

        Raises:
            LedgerError: If the file is unreadable or malformed
        """
        if not self._path.exists():
            return False

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise LedgerError(self._path, f"read failed: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise LedgerError(self._path, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise LedgerError(self._path, "expected a JSON object")

        source_path = data.get("filepath")
        if not isinstance(source_path, str):
            raise LedgerError(self._path, "missing 'filepath'")

        history: List[ViewAction] = []
        entries = data.get("history")
        if isinstance(entries, list):
            for entry in entries:
                if not isinstance(entry, dict):
                    continue
                kind = ActionKind.from_string(str(entry.get("type", "")))
                if kind is None:
                    logger.debug("Skipping ledger entry of unknown type: %s", entry.get("type"))
                    continue
                payload = entry.get("payload", "")
                history.append(ViewAction(kind=kind, payload=payload if isinstance(payload, str) else str(payload)))

        self._source_path = source_path
        self._history = history
        return True

    def clear(self) -> None:
        """Delete the ledger file (if any) and forget path and history."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove ledger %s: %s", self._path, e)
        self._source_path = None
        self._history = []
