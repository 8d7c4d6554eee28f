"""Shared pytest configuration and fixtures for tests."""

import sys
import io
import json
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from taskproc import config  # noqa: E402
from taskproc.core.models import Task  # noqa: E402

CSV_HEADER = "id,title,status,priority,created_date,description,assignee,due_date,tags\n"


@pytest.fixture(autouse=True)
def isolated_state_dir(monkeypatch, tmp_path):
    """Keep every ledger write inside the test's temp directory."""
    state_dir = tmp_path / "state"
    monkeypatch.setenv(config.STATE_DIR_ENV, str(state_dir))
    yield state_dir


@pytest.fixture
def ledger_file(isolated_state_dir):
    return isolated_state_dir / config.LEDGER_FILENAME


@pytest.fixture
def sample_tasks():
    """Five tasks covering every status bucket, tags and optional fields."""
    return [
        Task(1, "Fix login bug", "todo", 2, "2025-01-01", "Users cannot log in", "alice", "2025-01-10", ("backend", "urgent")),
        Task(2, "Write docs", "done", 4, "2025-01-02", None, None, "2025-01-05", ("docs",)),
        Task(3, "Review PR", "in-progress", 3, "2025-01-03", "Check the LOGIN flow", "bob", None, ()),
        Task(4, "Deploy release", "todo", 5, "2025-01-04", None, "alice", "2025-02-01", ("backend",)),
        Task(5, "Plan sprint", "blocked", 1, "2025-01-05", None, None, None, ()),
    ]


def write_csv(path: Path, rows: str) -> Path:
    path.write_text(CSV_HEADER + rows, encoding="utf-8")
    return path


def write_json(path: Path, records) -> Path:
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


@pytest.fixture
def tasks_csv(tmp_path):
    """CSV source with ids 1-4 and priorities 1,5,3,5."""
    return write_csv(
        tmp_path / "tasks.csv",
        '1,Alpha,todo,1,2025-01-01,First task,alice,2025-01-10,"backend,urgent"\n'
        "2,Bravo,todo,5,2025-01-02,,bob,,docs\n"
        "3,Charlie,done,3,2025-01-03,Third task,,2025-01-20,\n"
        "4,Delta,in-progress,5,2025-01-04,,alice,2025-01-15,backend\n",
    )
