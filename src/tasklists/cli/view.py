"""Handlers for view-state commands: filter, search, session, status and undo."""

from tasklists.cli._common import (
    attempt,
    commit,
    console,
    open_session,
    output_json,
    output_result,
    resolve_list,
    task_line,
)
from tasklists.model.writer import task_to_dict

WELCOME_HINT = "Welcome! Create your first list with: tasklists list add NAME"


def filter_set(args) -> int:
    """Set the task filter, or cycle all -> todo -> done when no value is given."""
    session = open_session(args)
    current = session.service.state().filter
    value = args.value if args.value else current.next()
    selected = attempt(args, session.service.set_filter, value)
    commit(session, args.json)
    output_result({"filter": selected.value}, f"Filter: {selected.value}", args.json)
    return 0


def search(args) -> int:
    """Save a search query and print the tasks matching it and the filter."""
    session = open_session(args)
    service = session.service
    query = service.set_query(" ".join(args.query))
    commit(session, args.json)

    matches = service.filtered_tasks()
    names = {lst.id: lst.name for lst in service.lists()}
    if args.json:
        output_json({"query": query, "tasks": [{**task_to_dict(t), "listName": names.get(t.list_id, "")} for t in matches]})
        return 0

    if not matches:
        console.print("no matching tasks", markup=False)
    for task in matches:
        line = task_line(task)
        line.append(f"  [{names.get(task.list_id, '?')}]", style="dim")
        console.print(line)
    return 0


def session_set(args) -> int:
    """Remember the active list and focused pane for the next session."""
    session = open_session(args)
    list_id = resolve_list(session, args.list, args.json) if args.list else ""
    attempt(args, session.service.set_session_context, list_id, args.focus or "")
    commit(session, args.json)
    context = session.service.state().metadata.session
    output_result(
        {"activeListId": context.active_list_id, "focus": context.focus.value},
        f"Session: list {context.active_list_id or '-'}, focus {context.focus.value}",
        args.json,
    )
    return 0


def status(args) -> int:
    """Summarise the state file and the current view settings."""
    session = open_session(args)
    service = session.service
    state = service.state()
    done = sum(1 for t in state.tasks if t.done)
    data = {
        "file": str(session.path),
        "lists": len(state.lists),
        "tasks": len(state.tasks),
        "done": done,
        "archived": len(state.archived),
        "filter": state.filter.value,
        "query": state.query,
        "activeListId": state.metadata.session.active_list_id,
        "focus": state.metadata.session.focus.value,
        "undo": service.undo_depth,
        "onboarding": service.needs_onboarding(),
    }
    if args.json:
        output_json(data)
        return 0

    console.print(f"file:     {data['file']}", markup=False)
    console.print(f"lists:    {data['lists']}", markup=False)
    console.print(f"tasks:    {data['tasks']} ({done} done)", markup=False)
    console.print(f"archived: {data['archived']}", markup=False)
    console.print(f"filter:   {data['filter']}", markup=False)
    if state.query:
        console.print(f"query:    {state.query}", markup=False)
    console.print(f"focus:    {data['focus']}", markup=False)
    console.print(f"undo:     {data['undo']}", markup=False)
    if data["onboarding"]:
        console.print(WELCOME_HINT, markup=False)
    return 0


def undo(args) -> int:
    """Revert the most recent change made in this session."""
    session = open_session(args)
    attempt(args, session.service.undo)
    commit(session, args.json)
    output_result({"undo": session.service.undo_depth}, "Undone", args.json)
    return 0
