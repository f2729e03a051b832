"""List mutation operations on an AppState.

These helpers assume their arguments were validated by the caller.
"""

from datetime import datetime

from tasklists.ids import new_id
from tasklists.model.state import AppState, TaskList


def find_list_index(state: AppState, list_id: str) -> int | None:
    """Index of the list in state.lists, or None."""
    for i, lst in enumerate(state.lists):
        if lst.id == list_id:
            return i
    return None


def find_list(state: AppState, list_id: str) -> TaskList | None:
    """The list with list_id, or None."""
    index = find_list_index(state, list_id)
    return state.lists[index] if index is not None else None


def has_list(state: AppState, list_id: str) -> bool:
    return find_list_index(state, list_id) is not None


def create_list(state: AppState, name: str, color: str, now: datetime) -> TaskList:
    """Append a new list and return it."""
    lst = TaskList(id=new_id(), name=name, color=color, created_at=now, updated_at=now)
    state.lists.append(lst)
    return lst


def remove_list(state: AppState, index: int) -> TaskList:
    """Remove the list at index together with all of its tasks."""
    lst = state.lists.pop(index)
    state.tasks = [t for t in state.tasks if t.list_id != lst.id]
    return lst


def swap_lists(state: AppState, index: int, target: int, now: datetime) -> TaskList:
    """Swap two adjacent lists, stamp both, and return the moved one."""
    lists = state.lists
    lists[index], lists[target] = lists[target], lists[index]
    lists[index].updated_at = now
    lists[target].updated_at = now
    return lists[target]
