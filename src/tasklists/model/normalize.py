"""Normalization passes that repair raw or legacy state.

Both passes are pure: they return a corrected deep copy and never touch
their input. Soft corrections (unknown priority, stale session list,
bad focus) happen here and nowhere else.
"""

from copy import deepcopy

from tasklists.model.state import STATE_VERSION, AppState, Filter, Focus, Metadata, Priority, SessionContext


def coerce_priority(value) -> Priority:
    """Return value as a Priority, or Priority.NONE if out of range."""
    try:
        return Priority(value)
    except ValueError:
        return Priority.NONE


def coerce_filter(value) -> Filter:
    try:
        return Filter(value)
    except ValueError:
        return Filter.ALL


def coerce_focus(value) -> Focus:
    if isinstance(value, str):
        value = value.strip()
    try:
        return Focus(value)
    except ValueError:
        return Focus.LISTS


def apply_defaults(state: AppState) -> AppState:
    """Fill missing containers and zero-valued settings.

    Used on every decoded file: empty containers, filter "all", version 1,
    session focus "lists".
    """
    state = deepcopy(state)
    if state.lists is None:
        state.lists = []
    if state.tasks is None:
        state.tasks = []
    if state.archived is None:
        state.archived = []
    if not state.filter:
        state.filter = Filter.ALL
    if state.query is None:
        state.query = ""
    if state.metadata is None:
        state.metadata = Metadata()
    if not state.metadata.version:
        state.metadata.version = STATE_VERSION
    if state.metadata.session is None:
        state.metadata.session = SessionContext()
    if not state.metadata.session.focus or not str(state.metadata.session.focus).strip():
        state.metadata.session.focus = Focus.LISTS
    return state


def normalize_state(state: AppState) -> AppState:
    """Bring any state into a form the service can rely on.

    On top of apply_defaults: clamps priorities, repairs session focus and
    the active list reference, and renumbers every list's positions to
    1..N. Tasks with a position keep their relative order and come first;
    tasks without one follow in array order.
    """
    state = apply_defaults(state)
    state.filter = coerce_filter(state.filter)
    session = state.metadata.session
    session.focus = coerce_focus(session.focus)

    grouped: dict[str, list[int]] = {}
    for index, task in enumerate(state.tasks):
        grouped.setdefault(task.list_id, []).append(index)
        task.priority = coerce_priority(task.priority)

    for entry in state.archived:
        entry.priority = coerce_priority(entry.priority)

    def sort_key(index: int) -> tuple[int, int, int]:
        position = state.tasks[index].position or 0
        if position > 0:
            return (0, position, index)
        return (1, 0, index)

    for indexes in grouped.values():
        for order, index in enumerate(sorted(indexes, key=sort_key), start=1):
            state.tasks[index].position = order

    list_ids = {lst.id for lst in state.lists}
    if session.active_list_id and session.active_list_id not in list_ids:
        session.active_list_id = ""
    if session.active_list_id is None:
        session.active_list_id = ""

    return state
