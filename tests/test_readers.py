"""
Tests for CSV and JSON task readers.
"""

import logging

import pytest

from conftest import write_csv, write_json
from taskproc.core.exceptions import SourceParseError
from taskproc.core.models import Task
from taskproc.core.readers import (
    CsvTaskReader,
    JsonTaskReader,
    select_reader,
    split_tags,
)


# --- Reader selection ---

@pytest.mark.parametrize(
    "path,expected",
    [
        ("tasks.csv", CsvTaskReader),
        ("data/TASKS.CSV", CsvTaskReader),
        ("tasks.json", JsonTaskReader),
    ],
)
def test_select_reader(path, expected):
    assert isinstance(select_reader(path), expected)


def test_select_reader_unknown_extension():
    assert select_reader("tasks.xml") is None
    assert select_reader("csv") is None


def test_split_tags():
    assert split_tags("a, b,,c ") == ["a", "b", "c"]
    assert split_tags("") == []


# --- CSV ---

def test_csv_reads_all_fields(tasks_csv):
    tasks = CsvTaskReader().read_tasks(tasks_csv)

    assert [t.id for t in tasks] == [1, 2, 3, 4]
    assert tasks[0] == Task(
        id=1,
        title="Alpha",
        status="todo",
        priority=1,
        created_date="2025-01-01",
        description="First task",
        assignee="alice",
        due_date="2025-01-10",
        tags=("backend", "urgent"),
    )
    # Empty optional cells become None, empty tags become ()
    assert tasks[1].description is None
    assert tasks[1].due_date is None
    assert tasks[2].assignee is None
    assert tasks[2].tags == ()


def test_csv_skips_invalid_rows(tmp_path, caplog):
    path = write_csv(
        tmp_path / "bad.csv",
        "0,Zero id,todo,1,,,,,\n"
        "x,Bad id,todo,1,,,,,\n"
        "2,,todo,1,,,,,\n"
        "3,No status,,1,,,,,\n"
        "4,Good,todo,2,,,,,\n",
    )
    with caplog.at_level(logging.WARNING, logger="taskproc"):
        tasks = CsvTaskReader().read_tasks(path)

    assert [t.id for t in tasks] == [4]
    assert caplog.text.count("skipped") == 4


@pytest.mark.parametrize("priority", ["", "abc", "0", "-3"])
def test_csv_priority_defaults_to_one(tmp_path, priority):
    path = write_csv(tmp_path / "p.csv", f"1,Task,todo,{priority},,,,,\n")
    assert CsvTaskReader().read_tasks(path)[0].priority == 1


def test_csv_tolerates_spaces(tmp_path):
    path = tmp_path / "spaced.csv"
    path.write_text(
        "id, title, status, priority, created_date, description, assignee, due_date, tags\n"
        "1, Spaced title , todo , 3, 2025-01-01, , , , \"x, y\"\n",
        encoding="utf-8",
    )
    task = CsvTaskReader().read_tasks(path)[0]
    assert task.title == "Spaced title"
    assert task.status == "todo"
    assert task.priority == 3
    assert task.tags == ("x", "y")


def test_csv_missing_column(tmp_path):
    path = tmp_path / "short.csv"
    path.write_text("id,title,status\n1,A,todo\n", encoding="utf-8")
    with pytest.raises(SourceParseError, match="missing column"):
        CsvTaskReader().read_tasks(path)


def test_csv_missing_file(tmp_path):
    with pytest.raises(SourceParseError):
        CsvTaskReader().read_tasks(tmp_path / "nope.csv")


# --- JSON ---

def test_json_reads_tasks(tmp_path):
    path = write_json(tmp_path / "tasks.json", [
        {"id": 1, "title": "A", "status": "todo", "priority": 4, "tags": ["x", "y", "x"],
         "due_date": "2025-03-01", "assignee": "alice"},
        {"id": 2, "title": "B", "status": "done"},
    ])
    tasks = JsonTaskReader().read_tasks(path)

    assert tasks[0].priority == 4
    assert tasks[0].tags == ("x", "y", "x")
    assert tasks[0].due_date == "2025-03-01"
    assert tasks[1].priority == 1
    assert tasks[1].tags == ()
    assert tasks[1].created_date == ""
    assert tasks[1].description is None


def test_json_skips_invalid_records(tmp_path):
    path = write_json(tmp_path / "tasks.json", [
        {"title": "No id", "status": "todo"},
        {"id": -1, "title": "Negative", "status": "todo"},
        {"id": 2, "status": "todo"},
        {"id": 3, "title": "No status"},
        "not an object",
        {"id": 5, "title": "Good", "status": "todo", "tags": "not-a-list"},
    ])
    tasks = JsonTaskReader().read_tasks(path)

    assert [t.id for t in tasks] == [5]
    assert tasks[0].tags == ()


def test_json_not_an_array(tmp_path):
    path = write_json(tmp_path / "tasks.json", {"tasks": []})
    with pytest.raises(SourceParseError, match="array"):
        JsonTaskReader().read_tasks(path)


def test_json_invalid(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(SourceParseError):
        JsonTaskReader().read_tasks(path)


def test_json_non_finite_numbers(tmp_path, caplog):
    path = tmp_path / "tasks.json"
    path.write_text(
        '[{"id": 1, "title": "Inf priority", "status": "todo", "priority": Infinity},'
        ' {"id": 2, "title": "Huge priority", "status": "todo", "priority": 1e999},'
        ' {"id": 1e999, "title": "Huge id", "status": "todo"},'
        ' {"id": NaN, "title": "NaN id", "status": "todo"}]',
        encoding="utf-8",
    )
    with caplog.at_level(logging.WARNING, logger="taskproc"):
        tasks = JsonTaskReader().read_tasks(path)

    assert [(t.id, t.priority) for t in tasks] == [(1, 1), (2, 1)]
    assert caplog.text.count("skipped") == 2


def test_csv_with_byte_order_mark(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_text(
        "\ufeffid,title,status,priority,created_date,description,assignee,due_date,tags\n"
        "1,Alpha,todo,2,,,,,\n",
        encoding="utf-8",
    )
    tasks = CsvTaskReader().read_tasks(path)
    assert [t.id for t in tasks] == [1]


def test_json_with_byte_order_mark(tmp_path):
    path = tmp_path / "bom.json"
    path.write_text('\ufeff[{"id": 1, "title": "A", "status": "todo"}]', encoding="utf-8")
    assert [t.id for t in JsonTaskReader().read_tasks(path)] == [1]
