"""Handlers for 'tasklists task' commands."""

import sys

from tasklists.cli._common import (
    attempt,
    commit,
    console,
    error,
    list_line,
    open_session,
    output_json,
    output_result,
    resolve_list,
    resolve_task,
    task_line,
)
from tasklists.model.state import Priority
from tasklists.model.tasks import matches_filter
from tasklists.model.writer import list_to_dict, task_to_dict

PRIORITY_NAMES = {p.label: p for p in Priority}


def task_ls(args) -> int:
    """List tasks by manual order, grouped by list.

    The saved filter (all, todo, done) applies unless --all is given.
    """
    session = open_session(args)
    service = session.service

    lists = service.lists()
    current_filter = service.state().filter
    if args.list:
        list_id = resolve_list(session, args.list, args.json)
        lists = [attempt(args, service.get_list, list_id)]

    groups = []
    for lst in lists:
        tasks = service.tasks(lst.id)
        if not args.all:
            tasks = [t for t in tasks if matches_filter(current_filter, t.done)]
        groups.append((lst, tasks))

    if args.json:
        output_json([{**task_to_dict(t), "list": list_to_dict(lst)} for lst, tasks in groups for t in tasks])
        return 0

    for lst, tasks in groups:
        total = service.tasks(lst.id)
        console.print(list_line(lst, sum(1 for t in total if not t.done), len(total)))
        for task in tasks:
            console.print(task_line(task))
    return 0


def task_add(args) -> int:
    """Create a task; it lands above the list's completed tasks."""
    session = open_session(args)
    list_id = resolve_list(session, args.list_id, args.json)
    task = attempt(args, session.service.create_task, list_id, args.text)
    commit(session, args.json)
    output_result(task_to_dict(task), f"Created task {task.id} at position {task.position}", args.json)
    return 0


def task_edit(args) -> int:
    """Replace a task's text."""
    session = open_session(args)
    task_id = resolve_task(session, args.id, args.json)
    task = attempt(args, session.service.update_task, task_id, args.text)
    commit(session, args.json)
    output_result(task_to_dict(task), f"Updated task {task.id}", args.json)
    return 0


def task_done(args) -> int:
    """Toggle a task between done and open."""
    session = open_session(args)
    task_id = resolve_task(session, args.id, args.json)
    task = attempt(args, session.service.toggle_done, task_id)
    commit(session, args.json)
    state = "done" if task.done else "open"
    output_result(task_to_dict(task), f'Task "{task.text}" marked {state}', args.json)
    return 0


def task_rm(args) -> int:
    """Delete a task."""
    session = open_session(args)
    task_id = resolve_task(session, args.id, args.json)
    task = attempt(args, session.service.get_task, task_id)
    attempt(args, session.service.delete_task, task_id)
    commit(session, args.json)
    output_result({"id": task.id, "deleted": True}, f'Deleted task "{task.text}"', args.json)
    return 0


def _move(args, direction: str) -> int:
    session = open_session(args)
    task_id = resolve_task(session, args.id, args.json)
    task = attempt(args, session.service.move_task, task_id, direction)
    commit(session, args.json)
    output_result(task_to_dict(task), f"Moved task {task.id} {direction} to position {task.position}", args.json)
    return 0


def task_up(args) -> int:
    """Move a task up in its list."""
    return _move(args, "up")


def task_down(args) -> int:
    """Move a task down in its list."""
    return _move(args, "down")


def task_priority(args) -> int:
    """Set a task's priority."""
    priority = PRIORITY_NAMES.get(args.level.strip().lower())
    if priority is None:
        error(f"invalid priority: {args.level} (choose from {', '.join(PRIORITY_NAMES)})", args.json)
    session = open_session(args)
    task_id = resolve_task(session, args.id, args.json)
    task = attempt(args, session.service.set_task_priority, task_id, priority)
    commit(session, args.json)
    output_result(task_to_dict(task), f"Task {task.id} priority: {task.priority.label}", args.json)
    return 0


def task_rm_all(args) -> int:
    """Delete every task in a list."""
    session = open_session(args)
    list_id = resolve_list(session, args.list_id, args.json)
    removed = attempt(args, session.service.delete_all_tasks, list_id)
    commit(session, args.json)
    noun = "task" if removed == 1 else "tasks"
    output_result({"listId": list_id, "deleted": removed}, f"Deleted {removed} {noun}", args.json)
    return 0


def task_export(args) -> int:
    """Print a list's tasks in manual order as a markdown bullet list."""
    session = open_session(args)
    list_id = resolve_list(session, args.list_id, args.json)
    attempt(args, session.service.get_list, list_id)
    lines = []
    for task in session.service.tasks(list_id):
        text = " ".join(task.text.replace("\n", " ").split())
        if text:
            lines.append(f"- {text}")

    if args.json:
        output_json({"listId": list_id, "items": [line[2:] for line in lines]})
    elif lines:
        sys.stdout.write("\n".join(lines) + "\n")
    return 0
