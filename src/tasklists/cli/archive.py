"""Handlers for 'tasklists archive' commands."""

from tasklists.cli._common import (
    archived_line,
    attempt,
    commit,
    console,
    open_session,
    output_json,
    output_result,
    resolve_list,
)
from tasklists.model.writer import archived_to_dict


def archive_ls(args) -> int:
    """Show archived tasks, newest first."""
    session = open_session(args)
    list_id = resolve_list(session, args.list, args.json) if args.list else ""
    entries = attempt(args, session.service.archived_for_list, list_id)

    if args.json:
        output_json([archived_to_dict(e) for e in entries])
    elif not entries:
        console.print("archive is empty", markup=False)
    else:
        for entry in entries:
            console.print(archived_line(entry))
    return 0


def _archive(args, operation, verb: str) -> int:
    session = open_session(args)
    list_id = resolve_list(session, args.list_id, args.json)
    entries = attempt(args, operation(session.service), list_id)
    commit(session, args.json)
    noun = "task" if len(entries) == 1 else "tasks"
    output_result(
        {"listId": list_id, "archived": [archived_to_dict(e) for e in entries]},
        f"{verb} {len(entries)} {noun}",
        args.json,
    )
    return 0


def archive_clear(args) -> int:
    """Archive a list's completed tasks."""
    return _archive(args, lambda service: service.clear_completed_to_archive, "Archived completed:")


def archive_all(args) -> int:
    """Archive every task in a list."""
    return _archive(args, lambda service: service.archive_all_to_archive, "Archived")
