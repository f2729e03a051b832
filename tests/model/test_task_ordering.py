"""Tests for task ordering, archiving and list helpers."""

from datetime import datetime, timezone

from tasklists.model.lists import create_list, find_list, remove_list, swap_lists
from tasklists.model.state import ArchivedEntry, Filter, Task, TaskList
from tasklists.model.tasks import (
    archive_matches_list,
    archive_tasks,
    insert_position,
    insert_task,
    make_archive_entry,
    matches_filter,
    matches_query,
    renormalize,
    sink_to_bottom,
    sort_tasks,
    task_indexes_for_list,
)

T0 = datetime(2026, 2, 19, 9, 0, tzinfo=timezone.utc)
T1 = datetime(2026, 2, 19, 9, 30, 15, 500000, tzinfo=timezone.utc)


def _order(state, list_id):
    return [state.tasks[i].id for i in task_indexes_for_list(state, list_id)]


def test_sort_tasks_breaks_ties_by_id():
    tasks = [Task(id="b", list_id="l", text="", position=1), Task(id="a", list_id="l", text="", position=1)]
    assert [t.id for t in sort_tasks(tasks, single_list=True)] == ["a", "b"]


def test_renormalize_removes_gaps(sample_state):
    sample_state.tasks[0].position = 5
    sample_state.tasks[1].position = 9
    renormalize(sample_state, "home")
    assert _order(sample_state, "home") == ["t3", "t1", "t2"]
    assert sorted(t.position for t in sample_state.tasks if t.list_id == "home") == [1, 2, 3]


def test_insert_position_before_done(sample_state):
    assert insert_position(sample_state, "home") == 3
    assert insert_position(sample_state, "work") == 2
    assert insert_position(sample_state, "empty") == 1


def test_insert_task_shifts_done(sample_state):
    task = Task(id="new", list_id="home", text="Hoover", position=insert_position(sample_state, "home"))
    insert_task(sample_state, task)
    assert _order(sample_state, "home") == ["t1", "t2", "new", "t3"]


def test_sink_to_bottom(sample_state):
    sink_to_bottom(sample_state, 0)
    assert _order(sample_state, "home") == ["t2", "t3", "t1"]
    assert _order(sample_state, "work") == ["t4"]


def test_make_archive_entry_uses_updated_at(sample_state):
    lst = sample_state.lists[0]
    entry = make_archive_entry(sample_state.tasks[2], lst, T1)
    assert entry.done_at == T1
    entry = make_archive_entry(sample_state.tasks[0], lst, T1)
    assert entry.done_at == T0


def test_make_archive_entry_zero_time_uses_now(sample_state):
    task = Task(id="z", list_id="home", text="Old")
    entry = make_archive_entry(task, sample_state.lists[0], T1)
    assert entry.done_at == T1
    assert entry.origin_list_id == "home"
    assert entry.origin_list == "Home"


def test_archive_tasks_done_only(sample_state):
    lst = sample_state.lists[0]
    entries = archive_tasks(sample_state, lst, lambda t: t.done, T1)
    assert [e.task_text for e in entries] == ["Bins"]
    assert [e.task_text for e in sample_state.archived] == ["Taxes", "Bins"]
    assert _order(sample_state, "home") == ["t1", "t2"]


def test_matches_filter():
    assert matches_filter(Filter.ALL, True)
    assert matches_filter(Filter.TODO, False)
    assert not matches_filter(Filter.TODO, True)
    assert matches_filter(Filter.DONE, True)
    assert not matches_filter(Filter.DONE, False)


def test_matches_query():
    assert matches_query("", "anything")
    assert matches_query("  MILK ", "buy milk")
    assert not matches_query("eggs", "buy milk")


def test_archive_matches_list():
    home = TaskList(id="home", name="Home")
    assert archive_matches_list(ArchivedEntry(id="1", task_text="", origin_list="Other", origin_list_id="home"), home)
    assert not archive_matches_list(ArchivedEntry(id="2", task_text="", origin_list="Home", origin_list_id="x"), home)
    assert archive_matches_list(ArchivedEntry(id="3", task_text="", origin_list=" Home"), home)


def test_list_helpers(sample_state):
    lst = create_list(sample_state, "Garden", "green", T1)
    assert find_list(sample_state, lst.id) is lst

    moved = swap_lists(sample_state, 2, 1, T1)
    assert moved is lst
    assert [x.name for x in sample_state.lists] == ["Home", "Garden", "Work"]

    removed = remove_list(sample_state, 0)
    assert removed.id == "home"
    assert all(t.list_id != "home" for t in sample_state.tasks)
