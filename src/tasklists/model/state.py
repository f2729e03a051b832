"""Data records for lists, tasks, the archive and the persisted app state."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum

from tasklists.ids import ZERO_TIME

STATE_VERSION = 1


class Priority(IntEnum):
    """Task priority. Higher is more urgent."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.lower()


class Filter(str, Enum):
    """Which tasks are shown by completion state."""

    ALL = "all"
    TODO = "todo"
    DONE = "done"

    def next(self) -> "Filter":
        """Cycle all → todo → done → all."""
        members = list(Filter)
        return members[(members.index(self) + 1) % len(members)]


class Focus(str, Enum):
    """Pane that had focus when the session was saved."""

    LISTS = "lists"
    TASKS = "tasks"


@dataclass
class TaskList:
    """A named container of tasks."""

    id: str
    name: str
    color: str = ""
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME


@dataclass
class Task:
    """A single to-do item.

    position is the manual display order within its list, 1-based and
    dense. A position of 0 means "unknown" and only appears in raw
    loaded data before normalization.
    """

    id: str
    list_id: str
    text: str
    done: bool = False
    priority: Priority = Priority.NONE
    position: int = 0
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME


@dataclass
class ArchivedEntry:
    """A task moved out of its list into the completed archive.

    origin_list is a snapshot of the list name at archive time so the entry
    still reads correctly after the list is renamed or deleted.
    """

    id: str
    task_text: str
    origin_list: str
    origin_list_id: str = ""
    priority: Priority = Priority.NONE
    done_at: datetime = ZERO_TIME
    archived_at: datetime = ZERO_TIME


@dataclass
class SessionContext:
    active_list_id: str = ""
    focus: Focus = Focus.LISTS


@dataclass
class Metadata:
    version: int = STATE_VERSION
    first_run: bool = False
    session: SessionContext = field(default_factory=SessionContext)


@dataclass
class AppState:
    """Everything that is persisted and snapshotted for undo.

    tasks are kept in insertion order; display order comes from position.
    """

    lists: list[TaskList] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    archived: list[ArchivedEntry] = field(default_factory=list)
    filter: Filter = Filter.ALL
    query: str = ""
    metadata: Metadata = field(default_factory=Metadata)


def new_state() -> AppState:
    """Return an initialized empty state for a first run."""
    return AppState(metadata=Metadata(version=STATE_VERSION, first_run=True))
