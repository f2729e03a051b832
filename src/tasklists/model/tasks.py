"""Task ordering, archiving and matching operations on an AppState.

Manual order within a list is (position, id): the id only breaks ties
between duplicate positions, which renormalize() removes.
"""

from datetime import datetime
from typing import Callable, Iterable

from tasklists.ids import is_zero, new_id
from tasklists.model.state import AppState, ArchivedEntry, Filter, Task, TaskList


def find_task_index(state: AppState, task_id: str) -> int | None:
    """Index of the task in state.tasks, or None."""
    for i, task in enumerate(state.tasks):
        if task.id == task_id:
            return i
    return None


def manual_order_key(task: Task) -> tuple[int, str]:
    return (task.position, task.id)


def sort_tasks(tasks: Iterable[Task], single_list: bool = False) -> list[Task]:
    """Sort by manual order; across lists, group by list id first."""
    if single_list:
        return sorted(tasks, key=manual_order_key)
    return sorted(tasks, key=lambda t: (t.list_id, t.position, t.id))


def task_indexes_for_list(state: AppState, list_id: str) -> list[int]:
    """Indexes into state.tasks for one list, in manual order."""
    indexes = [i for i, t in enumerate(state.tasks) if t.list_id == list_id]
    return sorted(indexes, key=lambda i: manual_order_key(state.tasks[i]))


def renormalize(state: AppState, list_id: str) -> None:
    """Renumber the list's task positions to 1..N in manual order."""
    for order, index in enumerate(task_indexes_for_list(state, list_id), start=1):
        state.tasks[index].position = order


def insert_position(state: AppState, list_id: str) -> int:
    """Position for a new task: just before the first done task, else at the end.

    Keeps completed tasks clustered at the bottom of the list.
    """
    first_done = 0
    highest = 0
    for task in state.tasks:
        if task.list_id != list_id:
            continue
        highest = max(highest, task.position)
        if task.done and (first_done == 0 or task.position < first_done):
            first_done = task.position
    return first_done if first_done > 0 else highest + 1


def insert_task(state: AppState, task: Task) -> Task:
    """Make room at task.position, append the task and renormalize."""
    for other in state.tasks:
        if other.list_id == task.list_id and other.position >= task.position:
            other.position += 1
    state.tasks.append(task)
    renormalize(state, task.list_id)
    return task


def sink_to_bottom(state: AppState, index: int) -> None:
    """Move the task at index after every other task of its list."""
    task = state.tasks[index]
    highest = 0
    for i, other in enumerate(state.tasks):
        if i != index and other.list_id == task.list_id:
            highest = max(highest, other.position)
    task.position = highest + 1
    renormalize(state, task.list_id)


def swap_positions(state: AppState, a: int, b: int, now: datetime) -> None:
    """Swap the position values of two tasks of the same list and stamp both."""
    first, second = state.tasks[a], state.tasks[b]
    first.position, second.position = second.position, first.position
    first.updated_at = now
    second.updated_at = now
    renormalize(state, first.list_id)


def make_archive_entry(task: Task, lst: TaskList, now: datetime, done_now: bool = False) -> ArchivedEntry:
    """Snapshot task into an archive entry.

    done_at is the task's last update, or now when unknown or done_now.
    """
    done_at = now if done_now or is_zero(task.updated_at) else task.updated_at
    return ArchivedEntry(
        id=new_id(),
        task_text=task.text,
        origin_list_id=lst.id,
        origin_list=lst.name,
        priority=task.priority,
        done_at=done_at,
        archived_at=now,
    )


def archive_tasks(
    state: AppState,
    lst: TaskList,
    should_archive: Callable[[Task], bool],
    now: datetime,
) -> list[ArchivedEntry]:
    """Move the list's tasks matching should_archive into the archive.

    Tasks that are not done get done_at = now. Returns the new entries.
    """
    entries: list[ArchivedEntry] = []
    kept: list[Task] = []
    for task in state.tasks:
        if task.list_id == lst.id and should_archive(task):
            entries.append(make_archive_entry(task, lst, now, done_now=not task.done))
        else:
            kept.append(task)
    state.tasks = kept
    renormalize(state, lst.id)
    state.archived.extend(entries)
    return entries


def count_in_list(state: AppState, list_id: str, predicate: Callable[[Task], bool] | None = None) -> int:
    return sum(1 for t in state.tasks if t.list_id == list_id and (predicate is None or predicate(t)))


def matches_filter(filter_: Filter, done: bool) -> bool:
    if filter_ == Filter.DONE:
        return done
    if filter_ == Filter.TODO:
        return not done
    return True


def matches_query(query: str, text: str) -> bool:
    """Case-insensitive substring match; an empty query matches everything."""
    query = query.strip().lower()
    return not query or query in text.lower()


def archive_matches_list(entry: ArchivedEntry, lst: TaskList) -> bool:
    """Whether an archive entry came from lst.

    Legacy entries without an origin list id fall back to comparing names,
    so two lists sharing a name will both claim them.
    """
    if entry.origin_list_id:
        return entry.origin_list_id == lst.id
    return entry.origin_list.strip() == lst.name.strip()
