"""Tests for the one-shot typer commands."""

import json

import pytest
from typer.testing import CliRunner

from memo import __version__
from memo.cli.main import app
from memo.core.store import TaskStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def data_dir(monkeypatch, tmp_path):
    """Point settings (and so the database) at a temp directory."""
    monkeypatch.setenv("MEMO_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("MEMO_DB_PATH", raising=False)
    monkeypatch.delenv("MEMO_STORAGE_KEY", raising=False)
    monkeypatch.setenv("MEMO_LOG_LEVEL", "CRITICAL")
    return tmp_path


def _invoke(*args, input=None):
    return runner.invoke(app, list(args), input=input, env={"COLUMNS": "200"})


def _add(title, *extra):
    result = _invoke("add", title, "--json", *extra)
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_version():
    result = _invoke("version")

    assert result.exit_code == 0
    assert f"memo v{__version__}" in result.output


def test_add_and_ls_json(data_dir):
    first = _add("Buy milk", "--category", "Home", "--due", "2024-01-01 09:00")
    second = _add("Write report", "--category", "Work")

    assert first == {
        "id": 1,
        "title": "Buy milk",
        "category": "Home",
        "isCompleted": False,
        "dueDate": "2024-01-01T09:00:00",
    }
    assert second["id"] == 2

    result = _invoke("ls", "--json")
    assert result.exit_code == 0
    assert [t["title"] for t in json.loads(result.stdout)] == ["Buy milk", "Write report"]
    assert (data_dir / "memo.db").exists()


def test_add_rejects_bad_input():
    result = _invoke("add", "Task", "--category", "Garden")
    assert result.exit_code == 1
    assert "Invalid category" in result.output

    result = _invoke("add", "Task", "--due", "tomorrow")
    assert result.exit_code == 1
    assert "Invalid due date" in result.output

    result = _invoke("add", "   ")
    assert result.exit_code == 1
    assert "cannot be empty" in result.output


def test_ls_raw_and_empty():
    result = _invoke("ls")
    assert result.exit_code == 0
    assert "No tasks found" in result.output

    _add("Laundry", "--due", "2024-02-03 04:05")
    result = _invoke("ls", "--raw")
    assert result.stdout.strip() == "1: [ ] Laundry (Other, due 2024-02-03 04:05)"


def test_show():
    _add("Gym", "--category", "Study", "--due", "2024-05-06 07:08")

    result = _invoke("show", "1", "--raw")

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "Task #1",
        "Title: Gym",
        "Category: Study",
        "Status: Incomplete",
        "Due: 2024-05-06 07:08",
    ]

    result = _invoke("show", "1")
    assert result.exit_code == 0
    assert "Category: Study" in result.output


def test_show_missing_task():
    result = _invoke("show", "42")

    assert result.exit_code == 1
    assert "Task 42 not found" in result.output


def test_edit_updates_fields():
    _add("Gym", "--category", "Study", "--due", "2024-05-06 07:08")

    result = _invoke("edit", "1", "--title", "Swim", "--due", "2024-06-01 18:00", "--category", "Home")

    assert result.exit_code == 0, result.output
    task = TaskStore().find_by_id(1)
    assert task.title == "Swim"
    assert task.category.value == "Home"
    assert task.due_date.isoformat() == "2024-06-01T18:00:00"


def test_edit_bad_due_date_discards_everything():
    _add("Gym", "--category", "Study", "--due", "2024-05-06 07:08")

    result = _invoke("edit", "1", "--title", "Swim", "--due", "someday")

    assert result.exit_code == 1
    assert "edit discarded" in result.output
    assert TaskStore().find_by_id(1).title == "Gym"


def test_edit_unknown_category_keeps_the_rest():
    _add("Gym", "--category", "Study", "--due", "2024-05-06 07:08")

    result = _invoke("edit", "1", "--title", "Swim", "--category", "Garden")

    assert result.exit_code == 0
    assert "category unchanged" in result.output
    task = TaskStore().find_by_id(1)
    assert task.title == "Swim"
    assert task.category.value == "Study"


def test_edit_needs_a_field():
    _add("Gym")

    result = _invoke("edit", "1")

    assert result.exit_code == 1
    assert "Nothing to change" in result.output


def test_done_and_undo():
    _add("Gym")

    result = _invoke("done", "1")
    assert result.exit_code == 0
    assert "Completed: Gym" in result.output
    assert TaskStore().find_by_id(1).is_completed is True

    result = _invoke("done", "1", "--undo")
    assert result.exit_code == 0
    assert TaskStore().find_by_id(1).is_completed is False


def test_rm_confirms():
    _add("Gym")
    _add("Swim")

    result = _invoke("rm", "1", input="n\n")
    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert len(TaskStore().load_all()) == 2

    result = _invoke("rm", "1", input="y\n")
    assert result.exit_code == 0
    assert "Deleted task: Gym" in result.output
    assert [t.id for t in TaskStore().load_all()] == [2]


def test_rm_yes_and_missing():
    _add("Gym")

    assert _invoke("rm", "1", "-y").exit_code == 0
    assert TaskStore().load_all() == []

    result = _invoke("rm", "1", "-y")
    assert result.exit_code == 1
    assert "Task 1 not found" in result.output


def test_storage_key_from_environment(monkeypatch):
    monkeypatch.setenv("MEMO_STORAGE_KEY", "otherList")
    _add("Gym")

    assert TaskStore(key="otherList").load_all()[0].title == "Gym"
    assert TaskStore().load_all() == []


def test_bracketed_titles_print_literally():
    """Titles are shown as typed, never read as markup."""
    result = _invoke("add", "fix [/x] bug")
    assert result.exit_code == 0, result.output
    assert "fix [/x] bug" in result.output

    _add("[bold]hello")

    result = _invoke("ls")
    assert result.exit_code == 0, result.output
    assert "fix [/x] bug" in result.output
    assert "[bold]hello" in result.output

    result = _invoke("done", "1")
    assert result.exit_code == 0, result.output
    assert "Completed: fix [/x] bug" in result.output

    result = _invoke("edit", "2", "--category", "[/x]")
    assert result.exit_code == 0, result.output
    assert "Unknown category '[/x]'" in result.output

    result = _invoke("rm", "1", "-y")
    assert result.exit_code == 0, result.output
    assert "Deleted task: fix [/x] bug" in result.output
