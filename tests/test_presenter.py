"""Tests for the detail presenter: render, edit, completion, delete, refresh."""

import json
from datetime import datetime

import pytest

from memo.core.constants import TASK_DELETED, TASK_UPDATED, TODO_LIST_KEY
from memo.core.events import EventBus
from memo.core.exceptions import InvalidInputError
from memo.core.models import Category
from memo.core.store import TaskStore
from memo.detail.form import EditForm
from memo.detail.presenter import DetailPresenter, DetailViewModel
from fakes import MemoryDefaults, RecordingView, make_task, store_with

T0 = datetime(2023, 6, 1, 8, 0)


@pytest.fixture
def events():
    return EventBus()


@pytest.fixture
def view():
    return RecordingView()


def work_task(**overrides):
    fields = dict(task_id=1, title="A", category=Category.WORK, due_date=T0)
    fields.update(overrides)
    return make_task(**fields)


def open_presenter(store, events, view, task_id=1, **kwargs):
    presenter = DetailPresenter(store, events, view=view, **kwargs)
    assert presenter.load(task_id)
    return presenter


# ---- rendering ----


def test_render_projects_task_fields(events, view):
    store = store_with(work_task(is_completed=True))
    presenter = open_presenter(store, events, view)

    model = presenter.render()

    assert model == DetailViewModel(
        title="A",
        category_text="Category: Work",
        completion_index=1,
        due_date_text="2023-06-01 08:00",
    )
    assert view.last == model


def test_render_without_task_is_blank(events, view):
    presenter = DetailPresenter(store_with(), events, view=view)

    model = presenter.render()

    assert model.title == ""
    assert model.category_text == "Category: "
    assert model.completion_index == 0
    assert model.due_date_text == ""


def test_load_unknown_id_keeps_current_task(events, view):
    store = store_with(work_task())
    presenter = open_presenter(store, events, view)

    assert presenter.load(99) is False
    assert presenter.current_task.id == 1


def test_show_keeps_a_copy(events):
    task = work_task()
    presenter = DetailPresenter(store_with(task), events)
    presenter.show(task)
    task.title = "mutated elsewhere"

    assert presenter.current_task.title == "A"


def test_begin_edit_prefills_form(events, view):
    presenter = open_presenter(store_with(work_task()), events, view)

    assert presenter.begin_edit() == EditForm(title="A", due_date_text="2023-06-01 08:00",
                                              category_text="Work")


# ---- editing ----


def test_edit_changes_only_matching_entry(events, view):
    """Other entries keep their exact persisted records."""
    defaults = MemoryDefaults()
    store = TaskStore(defaults)
    store.save_all([
        make_task(task_id=3, title="three"),
        make_task(task_id=5, title="five"),
        make_task(task_id=8, title="eight", is_completed=True),
    ])
    before = json.loads(defaults.data[TODO_LIST_KEY])
    presenter = open_presenter(store, events, view, task_id=5)

    presenter.commit_edit(EditForm(title="FIVE", due_date_text="2024-02-02 10:00",
                                   category_text="Study"))

    after = json.loads(defaults.data[TODO_LIST_KEY])
    assert after[0] == before[0]
    assert after[2] == before[2]
    assert after[1]["title"] == "FIVE"
    assert after[1]["category"] == "Study"
    assert after[1]["dueDate"] == "2024-02-02T10:00:00"


def test_invalid_due_date_discards_whole_edit(events, view):
    store = store_with(work_task())
    presenter = open_presenter(store, events, view)
    posted = []
    events.subscribe(TASK_UPDATED, lambda: posted.append(TASK_UPDATED))

    result = presenter.commit_edit(EditForm(title="B", due_date_text="not-a-date",
                                            category_text="Home"))

    assert result is None
    assert store.find_by_id(1) == work_task()
    assert presenter.current_task == work_task()
    assert view.models == []
    assert posted == []


def test_invalid_category_keeps_old_category(events, view):
    store = store_with(work_task())
    presenter = open_presenter(store, events, view)

    result = presenter.commit_edit(EditForm(title="B", due_date_text="2024-01-01 09:00",
                                            category_text="Bogus"))

    stored = store.find_by_id(1)
    assert stored.title == "B"
    assert stored.category is Category.WORK
    assert stored.due_date == datetime(2024, 1, 1, 9, 0)
    assert result == stored
    assert view.last.title == "B"


def test_absent_title_becomes_empty(events, view):
    store = store_with(work_task())
    presenter = open_presenter(store, events, view)

    presenter.commit_edit(EditForm(title=None, due_date_text="2024-01-01 09:00",
                                   category_text="Work"))

    assert store.find_by_id(1).title == ""


def test_edit_replaces_current_task_and_posts_update(events, view):
    store = store_with(work_task())
    presenter = open_presenter(store, events, view)
    posted = []
    events.subscribe(TASK_UPDATED, lambda: posted.append(TASK_UPDATED))

    presenter.commit_edit(EditForm(title="B", due_date_text="2024-01-01 09:00",
                                   category_text="Home"))

    assert presenter.current_task == store.find_by_id(1)
    assert posted == [TASK_UPDATED]
    # Rendered once by the commit, not again by its own notification
    assert len(view.models) == 1


def test_edit_without_task_is_ignored(events, view):
    store = store_with(work_task())
    presenter = DetailPresenter(store, events, view=view)

    assert presenter.commit_edit(EditForm(title="B", due_date_text="2024-01-01 09:00")) is None
    assert store.find_by_id(1) == work_task()


def test_edit_of_vanished_task_keeps_copy(events, view):
    store = store_with(work_task())
    presenter = open_presenter(store, events, view)
    store.delete_by_id(1)

    result = presenter.commit_edit(EditForm(title="B", due_date_text="2024-01-01 09:00",
                                            category_text="Work"))

    assert result == work_task()
    assert store.load_all() == []


# ---- completion ----


def test_set_completion(events, view):
    store = store_with(work_task())
    presenter = open_presenter(store, events, view)

    presenter.set_completion(1)
    assert store.find_by_id(1).is_completed is True
    assert view.last.completion_index == 1

    presenter.set_completion(0)
    assert store.find_by_id(1).is_completed is False
    assert view.last.completion_index == 0


def test_set_completion_rejects_unknown_position(events, view):
    presenter = open_presenter(store_with(work_task()), events, view)

    with pytest.raises(InvalidInputError):
        presenter.set_completion(2)


# ---- deleting ----


def test_delete_removes_and_persists(events, view):
    store = store_with(make_task(task_id=1), make_task(task_id=2), make_task(task_id=3))
    presenter = open_presenter(store, events, view, task_id=2)

    assert presenter.commit_delete() is True

    assert [t.id for t in store.load_all()] == [1, 3]


def test_delete_posts_deleted_not_updated_and_dismisses(events, view):
    store = store_with(work_task())
    dismissed = []
    presenter = open_presenter(store, events, view, on_dismiss=lambda: dismissed.append(True))
    posted = []
    events.subscribe(TASK_UPDATED, lambda: posted.append(TASK_UPDATED))
    events.subscribe(TASK_DELETED, lambda: posted.append(TASK_DELETED))

    presenter.commit_delete()

    assert posted == [TASK_DELETED]
    assert dismissed == [True]


def test_delete_without_task_is_noop(events, view):
    store = store_with(work_task())
    presenter = DetailPresenter(store, events, view=view)
    posted = []
    events.subscribe(TASK_DELETED, lambda: posted.append(TASK_DELETED))

    assert presenter.commit_delete() is False
    assert store.load_all() == [work_task()]
    assert posted == []


# ---- refresh ----


def test_task_updated_signal_rerenders_in_memory_task(events, view):
    """Re-renders from its own copy, which may have been changed directly."""
    store = store_with(work_task())
    presenter = open_presenter(store, events, view)
    presenter.current_task.title = "changed in memory"

    events.post(TASK_UPDATED)

    assert view.last.title == "changed in memory"
    assert store.find_by_id(1).title == "A"


def test_view_will_appear_renders(events, view):
    presenter = open_presenter(store_with(work_task()), events, view)

    presenter.view_will_appear()

    assert len(view.models) == 1


def test_close_stops_refreshing(events, view):
    presenter = open_presenter(store_with(work_task()), events, view)
    presenter.close()

    events.post(TASK_UPDATED)

    assert view.models == []
    assert events.observer_count(TASK_UPDATED) == 0
