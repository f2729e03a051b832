"""Handlers for 'tasklists list' commands."""

from tasklists.cli._common import (
    attempt,
    commit,
    console,
    list_line,
    open_session,
    output_json,
    output_result,
    resolve_list,
)
from tasklists.model.writer import list_to_dict
from tasklists.palette import next_color


def list_ls(args) -> int:
    """List all lists with task counts."""
    session = open_session(args)
    service = session.service

    items = []
    for lst in service.lists():
        tasks = service.tasks(lst.id)
        items.append((lst, sum(1 for t in tasks if not t.done), len(tasks)))

    if args.json:
        output_json([{**list_to_dict(lst), "open": open_count, "tasks": total} for lst, open_count, total in items])
    elif not items:
        console.print("no lists yet, create one with: tasklists list add NAME", markup=False)
    else:
        for lst, open_count, total in items:
            console.print(list_line(lst, open_count, total))

    return 0


def list_add(args) -> int:
    """Create a new list."""
    session = open_session(args)
    lst = attempt(args, session.service.create_list, args.name, args.color or "")
    commit(session, args.json)
    output_result(list_to_dict(lst), f'Created list "{lst.name}" ({lst.id})', args.json)
    return 0


def list_rename(args) -> int:
    """Rename a list, keeping its colour unless one is given."""
    session = open_session(args)
    list_id = resolve_list(session, args.id, args.json)
    current = attempt(args, session.service.get_list, list_id)
    color = current.color if args.color is None else args.color
    lst = attempt(args, session.service.update_list, list_id, args.name, color)
    commit(session, args.json)
    output_result(list_to_dict(lst), f'Renamed list {lst.id} to "{lst.name}"', args.json)
    return 0


def list_color(args) -> int:
    """Set a list's colour, or cycle to the next palette colour."""
    session = open_session(args)
    list_id = resolve_list(session, args.id, args.json)
    current = attempt(args, session.service.get_list, list_id)
    color = args.color if args.color is not None else next_color(current.color)
    lst = attempt(args, session.service.update_list, list_id, current.name, color)
    commit(session, args.json)
    output_result(list_to_dict(lst), f'List "{lst.name}" is now {lst.color or "uncoloured"}', args.json)
    return 0


def list_rm(args) -> int:
    """Delete a list and all of its tasks."""
    session = open_session(args)
    list_id = resolve_list(session, args.id, args.json)
    lst = attempt(args, session.service.get_list, list_id)
    count = len(session.service.tasks(list_id))
    attempt(args, session.service.delete_list, list_id)
    commit(session, args.json)
    noun = "task" if count == 1 else "tasks"
    output_result(
        {"id": lst.id, "name": lst.name, "deletedTasks": count},
        f'Deleted list "{lst.name}" and {count} {noun}',
        args.json,
    )
    return 0


def _move(args, direction: str) -> int:
    session = open_session(args)
    list_id = resolve_list(session, args.id, args.json)
    lst = attempt(args, session.service.move_list, list_id, direction)
    commit(session, args.json)
    position = [item.id for item in session.service.lists()].index(lst.id) + 1
    output_result(
        {**list_to_dict(lst), "index": position},
        f'Moved list "{lst.name}" {direction} to position {position}',
        args.json,
    )
    return 0


def list_up(args) -> int:
    """Move a list up by one."""
    return _move(args, "up")


def list_down(args) -> int:
    """Move a list down by one."""
    return _move(args, "down")
