"""
FILE: taskproc/config.py
PURPOSE: Runtime settings (ledger location, environment overrides)
EXPORTS:
  - LEDGER_FILENAME: Name of the session ledger file
  - STATE_DIR_ENV: Environment variable overriding the ledger directory
  - ledger_dir() -> Path
  - ledger_path() -> Path
DEPENDENCIES:
  - os, pathlib (stdlib)
NOTES:
  - Ledger lives in the current working directory unless TASKPROC_STATE_DIR is set
  - Resolved on each call so a changed cwd or environment is honoured
  - Tests monkeypatch LEDGER_FILENAME or set the environment variable
"""

import os
from pathlib import Path

LEDGER_FILENAME = ".taskproc.storage"
STATE_DIR_ENV = "TASKPROC_STATE_DIR"


def ledger_dir() -> Path:
    override = os.environ.get(STATE_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.cwd()


def ledger_path() -> Path:
    """Effective location of the session ledger file."""
    return ledger_dir() / LEDGER_FILENAME
