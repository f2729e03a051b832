"""TaskService: list, task and archive operations with undo.

Every mutating operation validates first, then snapshots the whole state
for undo, then mutates. A failed validation leaves both the state and the
undo stack untouched. Accessors return deep copies.
"""

import logging
from collections import deque
from copy import deepcopy

from tasklists.errors import (
    InvalidFilter,
    InvalidListRef,
    InvalidName,
    InvalidPriority,
    InvalidSessionFocus,
    InvalidTask,
    ListAlreadyAtBottom,
    ListAlreadyAtTop,
    ListNotFound,
    NoCompletedToClear,
    NothingToUndo,
    NoTasksInList,
    TaskAlreadyAtBottom,
    TaskAlreadyAtTop,
    TaskNotFound,
)
from tasklists.ids import new_id, utc_now
from tasklists.model import lists as list_ops
from tasklists.model import tasks as task_ops
from tasklists.model.normalize import normalize_state
from tasklists.model.state import AppState, ArchivedEntry, Filter, Focus, Priority, Task, TaskList, new_state

logger = logging.getLogger(__name__)

UNDO_STACK_LIMIT = 20

DIRECTIONS = {"up": -1, "down": 1, -1: -1, 1: 1}


def _direction(value: str | int) -> int:
    try:
        return DIRECTIONS[value]
    except KeyError:
        raise ValueError(f"direction must be 'up' or 'down', got {value!r}") from None


class TaskService:
    """Owns one live AppState and its undo history.

    Not thread safe: one caller owns an instance at a time.
    """

    def __init__(self, state: AppState | None = None, undo_limit: int = UNDO_STACK_LIMIT) -> None:
        self._state = normalize_state(state if state is not None else new_state())
        self._undo: deque[AppState] = deque(maxlen=undo_limit)

    # --- accessors ---

    def state(self) -> AppState:
        """Copy of the whole current state."""
        return deepcopy(self._state)

    def lists(self) -> list[TaskList]:
        return deepcopy(self._state.lists)

    def get_list(self, list_id: str) -> TaskList:
        lst = list_ops.find_list(self._state, list_id)
        if lst is None:
            raise ListNotFound()
        return deepcopy(lst)

    def tasks(self, list_id: str = "") -> list[Task]:
        """Tasks of one list in manual order, or every task by (list, position, id)."""
        list_id = list_id.strip()
        if not list_id:
            return deepcopy(task_ops.sort_tasks(self._state.tasks))
        owned = [t for t in self._state.tasks if t.list_id == list_id]
        return deepcopy(task_ops.sort_tasks(owned, single_list=True))

    def get_task(self, task_id: str) -> Task:
        return deepcopy(self._task(task_id))

    def archived(self) -> list[ArchivedEntry]:
        """Archive entries in the order they were archived."""
        return deepcopy(self._state.archived)

    def archived_for_list(self, list_id: str = "") -> list[ArchivedEntry]:
        """Archive entries newest first, optionally only those from one list.

        Entries written before origin list ids were recorded are matched by
        list name.
        """
        entries = list(reversed(self._state.archived))
        if list_id:
            lst = list_ops.find_list(self._state, list_id)
            if lst is None:
                raise ListNotFound()
            entries = [e for e in entries if task_ops.archive_matches_list(e, lst)]
        return deepcopy(entries)

    def filtered_tasks(self) -> list[Task]:
        """All tasks matching the current filter and search query."""
        state = self._state
        return [
            t
            for t in self.tasks()
            if task_ops.matches_filter(state.filter, t.done) and task_ops.matches_query(state.query, t.text)
        ]

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    # --- lists ---

    def create_list(self, name: str, color: str = "") -> TaskList:
        name = name.strip()
        if not name:
            raise InvalidName()
        self._push_undo()
        lst = list_ops.create_list(self._state, name, color.strip(), utc_now())
        return deepcopy(lst)

    def update_list(self, list_id: str, name: str, color: str = "") -> TaskList:
        name = name.strip()
        if not name:
            raise InvalidName()
        lst = list_ops.find_list(self._state, list_id)
        if lst is None:
            raise ListNotFound()
        self._push_undo()
        lst.name = name
        lst.color = color.strip()
        lst.updated_at = utc_now()
        return deepcopy(lst)

    def delete_list(self, list_id: str) -> None:
        index = list_ops.find_list_index(self._state, list_id)
        if index is None:
            raise ListNotFound()
        self._push_undo()
        list_ops.remove_list(self._state, index)

    def move_list(self, list_id: str, direction: str | int) -> TaskList:
        step = _direction(direction)
        index = list_ops.find_list_index(self._state, list_id)
        if index is None:
            raise ListNotFound()
        target = index + step
        if target < 0:
            raise ListAlreadyAtTop()
        if target >= len(self._state.lists):
            raise ListAlreadyAtBottom()
        self._push_undo()
        return deepcopy(list_ops.swap_lists(self._state, index, target, utc_now()))

    def move_list_up(self, list_id: str) -> TaskList:
        return self.move_list(list_id, "up")

    def move_list_down(self, list_id: str) -> TaskList:
        return self.move_list(list_id, "down")

    # --- tasks ---

    def create_task(self, list_id: str, text: str) -> Task:
        list_id = list_id.strip()
        if not list_id:
            raise InvalidListRef()
        text = text.strip()
        if not text:
            raise InvalidTask()
        if not list_ops.has_list(self._state, list_id):
            raise ListNotFound()

        now = utc_now()
        task = Task(
            id=new_id(),
            list_id=list_id,
            text=text,
            position=task_ops.insert_position(self._state, list_id),
            created_at=now,
            updated_at=now,
        )
        self._push_undo()
        task_ops.insert_task(self._state, task)
        return deepcopy(task)

    def update_task(self, task_id: str, text: str) -> Task:
        text = text.strip()
        if not text:
            raise InvalidTask()
        task = self._task(task_id)
        self._push_undo()
        task.text = text
        task.updated_at = utc_now()
        return deepcopy(task)

    def delete_task(self, task_id: str) -> None:
        index = self._task_index(task_id)
        self._push_undo()
        task = self._state.tasks.pop(index)
        task_ops.renormalize(self._state, task.list_id)

    def toggle_done(self, task_id: str) -> Task:
        """Flip completion. Newly completed tasks sink to the bottom of their list."""
        index = self._task_index(task_id)
        self._push_undo()
        task = self._state.tasks[index]
        task.done = not task.done
        task.updated_at = utc_now()
        if task.done:
            task_ops.sink_to_bottom(self._state, index)
        return deepcopy(task)

    def set_task_priority(self, task_id: str, priority: Priority | int) -> Task:
        try:
            priority = Priority(priority)
        except ValueError:
            raise InvalidPriority(f"invalid priority: {priority}") from None
        task = self._task(task_id)
        if task.priority == priority:
            return deepcopy(task)
        self._push_undo()
        task.priority = priority
        task.updated_at = utc_now()
        return deepcopy(task)

    def move_task(self, task_id: str, direction: str | int) -> Task:
        step = _direction(direction)
        index = self._task_index(task_id)
        ordered = task_ops.task_indexes_for_list(self._state, self._state.tasks[index].list_id)
        current = ordered.index(index)
        target = current + step
        if target < 0:
            raise TaskAlreadyAtTop()
        if target >= len(ordered):
            raise TaskAlreadyAtBottom()
        self._push_undo()
        task_ops.swap_positions(self._state, ordered[current], ordered[target], utc_now())
        return deepcopy(self._state.tasks[index])

    def move_task_up(self, task_id: str) -> Task:
        return self.move_task(task_id, "up")

    def move_task_down(self, task_id: str) -> Task:
        return self.move_task(task_id, "down")

    # --- bulk and archive ---

    def clear_completed_to_archive(self, list_id: str) -> list[ArchivedEntry]:
        """Move the list's done tasks to the archive."""
        lst = self._list_ref(list_id)
        if not task_ops.count_in_list(self._state, lst.id, lambda t: t.done):
            raise NoCompletedToClear()
        self._push_undo()
        entries = task_ops.archive_tasks(self._state, lst, lambda t: t.done, utc_now())
        return deepcopy(entries)

    def archive_all_to_archive(self, list_id: str) -> list[ArchivedEntry]:
        """Move every task of the list to the archive, done or not."""
        lst = self._list_ref(list_id)
        if not task_ops.count_in_list(self._state, lst.id):
            raise NoTasksInList()
        self._push_undo()
        entries = task_ops.archive_tasks(self._state, lst, lambda t: True, utc_now())
        return deepcopy(entries)

    def delete_all_tasks(self, list_id: str) -> int:
        """Remove every task of the list. Returns how many were removed."""
        lst = self._list_ref(list_id)
        removed = task_ops.count_in_list(self._state, lst.id)
        if not removed:
            raise NoTasksInList()
        self._push_undo()
        self._state.tasks = [t for t in self._state.tasks if t.list_id != lst.id]
        return removed

    # --- view state ---

    def set_filter(self, filter_: Filter | str) -> Filter:
        try:
            filter_ = Filter(filter_)
        except ValueError:
            raise InvalidFilter(f"invalid filter: {filter_!r}") from None
        self._state.filter = filter_
        return filter_

    def set_query(self, query: str) -> str:
        self._state.query = query.strip()
        return self._state.query

    def set_session_context(self, active_list_id: str, focus: Focus | str = "") -> None:
        """Remember the active list and focused pane.

        An empty focus keeps the current one. An unknown list id is
        cleared rather than rejected.
        """
        focus = focus.strip() if isinstance(focus, str) else focus
        if focus:
            try:
                focus = Focus(focus)
            except ValueError:
                raise InvalidSessionFocus(f"invalid session focus: {focus}") from None
        if active_list_id and not list_ops.has_list(self._state, active_list_id):
            active_list_id = ""
        session = self._state.metadata.session
        if focus:
            session.focus = focus
        session.active_list_id = active_list_id

    def mark_onboarding_seen(self) -> None:
        self._state.metadata.first_run = False

    def needs_onboarding(self) -> bool:
        """True on a first run, or while there is nothing in the state yet."""
        state = self._state
        return state.metadata.first_run or (not state.lists and not state.tasks)

    # --- undo ---

    def undo(self) -> None:
        """Restore the state as it was before the most recent mutation."""
        if not self._undo:
            raise NothingToUndo()
        self._state = self._undo.pop()
        logger.debug("undo applied, %d snapshot(s) left", len(self._undo))

    # --- internals ---

    def _push_undo(self) -> None:
        self._undo.append(deepcopy(self._state))

    def _task_index(self, task_id: str) -> int:
        index = task_ops.find_task_index(self._state, task_id)
        if index is None:
            raise TaskNotFound()
        return index

    def _task(self, task_id: str) -> Task:
        return self._state.tasks[self._task_index(task_id)]

    def _list_ref(self, list_id: str) -> TaskList:
        list_id = list_id.strip()
        if not list_id:
            raise InvalidListRef()
        lst = list_ops.find_list(self._state, list_id)
        if lst is None:
            raise ListNotFound()
        return lst
