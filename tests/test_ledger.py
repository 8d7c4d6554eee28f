"""
Tests for the session ledger.

Covers in-memory operations, persist/load round-trip, atomic writes,
malformed files and clear().
"""

import json
import os

import pytest

from taskproc.core.exceptions import LedgerError
from taskproc.core.ledger import SessionLedger
from taskproc.core.models import ActionKind, ViewAction


@pytest.fixture
def ledger(ledger_file):
    return SessionLedger(ledger_file)


def test_in_memory_operations(ledger):
    assert ledger.source_path is None
    assert ledger.history == []

    ledger.set_source("data/tasks.csv")
    ledger.push_action(ViewAction(ActionKind.FILTER, "priority<=3"))
    ledger.push_action(ViewAction(ActionKind.SORT, "due_date desc"))

    assert ledger.source_path == "data/tasks.csv"
    assert ledger.history == [
        ViewAction(ActionKind.FILTER, "priority<=3"),
        ViewAction(ActionKind.SORT, "due_date desc"),
    ]

    ledger.clear_history()
    assert ledger.history == []
    assert ledger.source_path == "data/tasks.csv"


def test_set_source_clears_history(ledger):
    ledger.set_source("a.csv")
    ledger.push_action(ViewAction(ActionKind.FILTER, "status=todo"))
    ledger.set_source("b.csv")
    assert ledger.history == []


def test_history_is_a_copy(ledger):
    ledger.set_source("a.csv")
    ledger.history.append(ViewAction(ActionKind.FILTER, "id=1"))
    assert ledger.history == []


def test_persist_and_load_round_trip(ledger, ledger_file):
    ledger.set_source("/absolute/or/relative/tasks.csv")
    ledger.push_action(ViewAction(ActionKind.FILTER, "status=todo"))
    ledger.push_action(ViewAction(ActionKind.SORT, "priority desc"))
    ledger.persist()
    assert ledger_file.exists()

    reader = SessionLedger(ledger_file)
    assert reader.load() is True
    assert reader.source_path == ledger.source_path
    assert reader.history == ledger.history


def test_persisted_format(ledger, ledger_file):
    ledger.set_source("tasks.json")
    ledger.push_action(ViewAction(ActionKind.FIND_BY_TAG, "backend"))
    ledger.persist()

    data = json.loads(ledger_file.read_text(encoding="utf-8"))
    assert data == {
        "filepath": "tasks.json",
        "history": [{"type": "find-by-tag", "payload": "backend"}],
    }


def test_persist_leaves_no_temp_files(ledger, ledger_file):
    ledger.set_source("tasks.csv")
    ledger.persist()
    ledger.persist()
    assert os.listdir(ledger_file.parent) == [ledger_file.name]


def test_persist_without_source_fails(ledger, ledger_file):
    with pytest.raises(LedgerError):
        ledger.persist()
    assert not ledger_file.exists()


def test_failed_persist_keeps_previous_file(ledger, ledger_file, monkeypatch):
    ledger.set_source("tasks.csv")
    ledger.persist()
    committed = ledger_file.read_text(encoding="utf-8")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    ledger.push_action(ViewAction(ActionKind.FILTER, "status=todo"))

    with pytest.raises(LedgerError):
        ledger.persist()

    assert ledger_file.read_text(encoding="utf-8") == committed
    assert os.listdir(ledger_file.parent) == [ledger_file.name]


def test_load_missing_file(ledger):
    assert ledger.load() is False
    assert ledger.source_path is None


def test_load_invalid_json(ledger, ledger_file):
    ledger_file.parent.mkdir(parents=True, exist_ok=True)
    ledger_file.write_text("{not json", encoding="utf-8")
    with pytest.raises(LedgerError):
        ledger.load()


@pytest.mark.parametrize(
    "content",
    [
        {"history": []},
        {"filepath": 42, "history": []},
        ["tasks.csv"],
    ],
)
def test_load_malformed_ledger(ledger, ledger_file, content):
    ledger_file.parent.mkdir(parents=True, exist_ok=True)
    ledger_file.write_text(json.dumps(content), encoding="utf-8")
    with pytest.raises(LedgerError):
        ledger.load()


def test_load_skips_unknown_types(ledger, ledger_file):
    ledger_file.parent.mkdir(parents=True, exist_ok=True)
    ledger_file.write_text(json.dumps({
        "filepath": "tasks.csv",
        "history": [
            {"type": "filter", "payload": "status=todo"},
            {"type": "group-by", "payload": "assignee"},
            "garbage",
            {"type": "reset-filters"},
        ],
    }), encoding="utf-8")

    assert ledger.load() is True
    assert ledger.history == [
        ViewAction(ActionKind.FILTER, "status=todo"),
        ViewAction(ActionKind.RESET_FILTERS, ""),
    ]


def test_load_without_history(ledger, ledger_file):
    ledger_file.parent.mkdir(parents=True, exist_ok=True)
    ledger_file.write_text(json.dumps({"filepath": "tasks.csv"}), encoding="utf-8")
    assert ledger.load() is True
    assert ledger.history == []


def test_clear_after_persist(ledger, ledger_file):
    ledger.set_source("tasks.csv")
    ledger.push_action(ViewAction(ActionKind.SORT, "id desc"))
    ledger.persist()

    ledger.clear()

    assert not ledger_file.exists()
    assert ledger.source_path is None
    assert ledger.history == []


def test_clear_without_file(ledger):
    ledger.clear()
    assert ledger.source_path is None
