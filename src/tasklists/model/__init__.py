"""State records, ordering helpers and persistence."""

from tasklists.model.loader import decode_state, load, load_with_recovery
from tasklists.model.normalize import apply_defaults, normalize_state
from tasklists.model.state import (
    AppState,
    ArchivedEntry,
    Filter,
    Focus,
    Metadata,
    Priority,
    SessionContext,
    Task,
    TaskList,
    new_state,
)
from tasklists.model.writer import autosave, encode_state, save

__all__ = [
    "AppState",
    "ArchivedEntry",
    "Filter",
    "Focus",
    "Metadata",
    "Priority",
    "SessionContext",
    "Task",
    "TaskList",
    "apply_defaults",
    "autosave",
    "decode_state",
    "encode_state",
    "load",
    "load_with_recovery",
    "new_state",
    "normalize_state",
    "save",
]
