"""Exception hierarchy for tasklists operations.

Every failure belongs to exactly one kind: not-found, validation,
boundary, empty-operation or corruption. Callers that only care about
the kind can catch the intermediate base classes.
"""


class TaskListsError(Exception):
    """Base class for all tasklists errors."""

    kind = "error"
    default_message = "tasklists error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


# --- not found ---


class NotFoundError(TaskListsError, LookupError):
    kind = "not-found"


class ListNotFound(NotFoundError):
    default_message = "list not found"


class TaskNotFound(NotFoundError):
    default_message = "task not found"


# --- validation ---


class ValidationError(TaskListsError, ValueError):
    kind = "validation"


class InvalidName(ValidationError):
    default_message = "name must not be empty"


class InvalidTask(ValidationError):
    default_message = "task text must not be empty"


class InvalidListRef(ValidationError):
    default_message = "list id must not be empty"


class InvalidPriority(ValidationError):
    default_message = "invalid priority"


class InvalidFilter(ValidationError):
    default_message = "invalid filter"


class InvalidSessionFocus(ValidationError):
    default_message = "invalid session focus"


# --- ordering boundaries ---


class BoundaryError(TaskListsError):
    kind = "boundary"


class ListAlreadyAtTop(BoundaryError):
    default_message = "list is already at top"


class ListAlreadyAtBottom(BoundaryError):
    default_message = "list is already at bottom"


class TaskAlreadyAtTop(BoundaryError):
    default_message = "task is already at top"


class TaskAlreadyAtBottom(BoundaryError):
    default_message = "task is already at bottom"


# --- nothing to do ---


class EmptyOperationError(TaskListsError):
    kind = "empty-operation"


class NothingToUndo(EmptyOperationError):
    default_message = "nothing to undo"


class NoCompletedToClear(EmptyOperationError):
    default_message = "no completed tasks to clear"


class NoTasksInList(EmptyOperationError):
    default_message = "no tasks in list"


# --- persistence ---


class CorruptStateError(TaskListsError):
    """The state file exists but its content cannot be decoded."""

    kind = "corruption"
    default_message = "state file is corrupted"


class RecoveryError(TaskListsError):
    """An I/O failure prevented recovery from a corrupted state file."""

    kind = "io"
    default_message = "could not recover state file"
