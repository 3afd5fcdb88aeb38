"""Tests for due date formatting/parsing and task rendering helpers."""

from datetime import datetime

import pytest

from memo.core.exceptions import DueDateFormatError, InvalidInputError
from memo.formatting import TaskFormatter, format_due_date, parse_due_date
from fakes import make_task


def test_format_due_date():
    assert format_due_date(datetime(2024, 1, 1, 9, 5)) == "2024-01-01 09:05"
    assert format_due_date(datetime(2024, 12, 31, 23, 59, 42)) == "2024-12-31 23:59"


def test_format_due_date_none_is_empty():
    assert format_due_date(None) == ""


def test_parse_due_date():
    assert parse_due_date("2024-02-29 17:30") == datetime(2024, 2, 29, 17, 30)
    assert parse_due_date("  2024-02-29 17:30 ") == datetime(2024, 2, 29, 17, 30)


@pytest.mark.parametrize("value", [
    datetime(2024, 1, 1, 0, 0),
    datetime(1999, 12, 31, 23, 59),
    datetime(2030, 6, 15, 12, 1, 59, 999),
    datetime(987, 3, 4, 5, 6),
])
def test_parse_inverts_format_at_minute_precision(value):
    """Whatever is displayed parses back to the same minute."""
    assert parse_due_date(format_due_date(value)) == value.replace(second=0, microsecond=0)


@pytest.mark.parametrize("text", [
    "", "   ", None, "tomorrow", "2024-01-01", "2024-13-01 10:00",
    "01/02/2024 10:00", "2024-01-01T10:00", "2024-02-30 10:00",
])
def test_parse_due_date_rejects_bad_text(text):
    with pytest.raises(DueDateFormatError):
        parse_due_date(text)


def test_due_date_error_is_invalid_input():
    with pytest.raises(InvalidInputError, match="Expected format: YYYY-MM-DD HH:mm"):
        parse_due_date("next week")


def test_format_raw():
    done = make_task(task_id=4, title="Taxes", is_completed=True)
    open_ = make_task(task_id=5, title="Laundry")

    assert TaskFormatter.format_raw(done) == "4: [x] Taxes (Home, due 2024-01-01 09:00)"
    assert TaskFormatter.format_raw(open_) == "5: [ ] Laundry (Home, due 2024-01-01 09:00)"


def test_create_table_has_row_per_task():
    table = TaskFormatter.create_table([make_task(task_id=1), make_task(task_id=2)])

    assert [c.header for c in table.columns] == ["ID", "Title", "Category", "Done", "Due"]
    assert table.row_count == 2
