"""CLI argument parser and dispatch for tasklists."""

import argparse

from tasklists.cli.archive import archive_all, archive_clear, archive_ls
from tasklists.cli.lists import list_add, list_color, list_down, list_ls, list_rename, list_rm, list_up
from tasklists.cli.shell import shell
from tasklists.cli.tasks import (
    task_add,
    task_done,
    task_down,
    task_edit,
    task_export,
    task_ls,
    task_priority,
    task_rm,
    task_rm_all,
    task_up,
)
from tasklists.cli.view import filter_set, search, session_set, status, undo
from tasklists.model.state import Filter, Focus


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    # SUPPRESS so a subparser does not reset options given before the noun.
    common = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    common.add_argument("--file", help="State file (default: $TASKLISTS_FILE or the data dir)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="count", help="More logging (repeat for debug)")

    parser = argparse.ArgumentParser(
        prog="tasklists",
        description="Personal task lists kept in a local JSON file",
        parents=[common],
    )
    parser.set_defaults(file="", json=False, verbose=0)

    nouns = parser.add_subparsers(dest="noun")

    # --- list ---
    list_p = nouns.add_parser("list", help="List operations", parents=[common])
    list_verbs = list_p.add_subparsers(dest="verb")

    list_ls_p = list_verbs.add_parser("ls", help="Show lists with task counts", parents=[common])
    list_ls_p.set_defaults(func=list_ls)

    list_add_p = list_verbs.add_parser("add", help="Create a list", parents=[common])
    list_add_p.add_argument("name", help="List name")
    list_add_p.add_argument("--color", help="List colour")
    list_add_p.set_defaults(func=list_add)

    list_rename_p = list_verbs.add_parser("rename", help="Rename a list", parents=[common])
    list_rename_p.add_argument("id", help="List ID, ID prefix or name")
    list_rename_p.add_argument("name", help="New list name")
    list_rename_p.add_argument("--color", help="Also set the colour")
    list_rename_p.set_defaults(func=list_rename)

    list_color_p = list_verbs.add_parser("color", help="Set or cycle a list's colour", parents=[common])
    list_color_p.add_argument("id", help="List ID, ID prefix or name")
    list_color_p.add_argument("color", nargs="?", help="Colour (default: next in the palette)")
    list_color_p.set_defaults(func=list_color)

    list_rm_p = list_verbs.add_parser("rm", help="Delete a list and its tasks", parents=[common])
    list_rm_p.add_argument("id", help="List ID, ID prefix or name")
    list_rm_p.set_defaults(func=list_rm)

    list_up_p = list_verbs.add_parser("up", help="Move a list up", parents=[common])
    list_up_p.add_argument("id", help="List ID, ID prefix or name")
    list_up_p.set_defaults(func=list_up)

    list_down_p = list_verbs.add_parser("down", help="Move a list down", parents=[common])
    list_down_p.add_argument("id", help="List ID, ID prefix or name")
    list_down_p.set_defaults(func=list_down)

    # list with no verb = ls
    list_p.set_defaults(func=list_ls)

    # --- task ---
    task_p = nouns.add_parser("task", help="Task operations", parents=[common])
    task_verbs = task_p.add_subparsers(dest="verb")

    task_ls_p = task_verbs.add_parser("ls", help="Show tasks grouped by list", parents=[common])
    task_ls_p.add_argument("--list", dest="list", help="Only this list")
    task_ls_p.add_argument("--all", action="store_true", help="Ignore the saved filter")
    task_ls_p.set_defaults(func=task_ls)

    task_add_p = task_verbs.add_parser("add", help="Create a task", parents=[common])
    task_add_p.add_argument("list_id", help="List ID, ID prefix or name")
    task_add_p.add_argument("text", help="Task text")
    task_add_p.set_defaults(func=task_add)

    task_edit_p = task_verbs.add_parser("edit", help="Replace a task's text", parents=[common])
    task_edit_p.add_argument("id", help="Task ID or ID prefix")
    task_edit_p.add_argument("text", help="New task text")
    task_edit_p.set_defaults(func=task_edit)

    task_done_p = task_verbs.add_parser("done", help="Toggle a task done/open", parents=[common])
    task_done_p.add_argument("id", help="Task ID or ID prefix")
    task_done_p.set_defaults(func=task_done)

    task_rm_p = task_verbs.add_parser("rm", help="Delete a task", parents=[common])
    task_rm_p.add_argument("id", help="Task ID or ID prefix")
    task_rm_p.set_defaults(func=task_rm)

    task_up_p = task_verbs.add_parser("up", help="Move a task up", parents=[common])
    task_up_p.add_argument("id", help="Task ID or ID prefix")
    task_up_p.set_defaults(func=task_up)

    task_down_p = task_verbs.add_parser("down", help="Move a task down", parents=[common])
    task_down_p.add_argument("id", help="Task ID or ID prefix")
    task_down_p.set_defaults(func=task_down)

    task_priority_p = task_verbs.add_parser("priority", help="Set a task's priority", parents=[common])
    task_priority_p.add_argument("id", help="Task ID or ID prefix")
    task_priority_p.add_argument("level", help="none, low, medium or high")
    task_priority_p.set_defaults(func=task_priority)

    task_rm_all_p = task_verbs.add_parser("rm-all", help="Delete every task in a list", parents=[common])
    task_rm_all_p.add_argument("list_id", help="List ID, ID prefix or name")
    task_rm_all_p.set_defaults(func=task_rm_all)

    task_export_p = task_verbs.add_parser("export", help="Print a list as markdown bullets", parents=[common])
    task_export_p.add_argument("list_id", help="List ID, ID prefix or name")
    task_export_p.set_defaults(func=task_export)

    # task with no verb = ls
    task_p.set_defaults(func=task_ls, list=None, all=False)

    # --- archive ---
    archive_p = nouns.add_parser("archive", help="Archive operations", parents=[common])
    archive_verbs = archive_p.add_subparsers(dest="verb")

    archive_ls_p = archive_verbs.add_parser("ls", help="Show archived tasks", parents=[common])
    archive_ls_p.add_argument("--list", dest="list", help="Only entries from this list")
    archive_ls_p.set_defaults(func=archive_ls)

    archive_clear_p = archive_verbs.add_parser("clear", help="Archive a list's done tasks", parents=[common])
    archive_clear_p.add_argument("list_id", help="List ID, ID prefix or name")
    archive_clear_p.set_defaults(func=archive_clear)

    archive_all_p = archive_verbs.add_parser("all", help="Archive every task in a list", parents=[common])
    archive_all_p.add_argument("list_id", help="List ID, ID prefix or name")
    archive_all_p.set_defaults(func=archive_all)

    # archive with no verb = ls
    archive_p.set_defaults(func=archive_ls, list=None)

    # --- view state ---
    filter_p = nouns.add_parser("filter", help="Set or cycle the task filter", parents=[common])
    filter_p.add_argument("value", nargs="?", choices=[f.value for f in Filter], help="all, todo or done")
    filter_p.set_defaults(func=filter_set)

    search_p = nouns.add_parser("search", help="Search task text", parents=[common])
    search_p.add_argument("query", nargs="*", help="Words to search for (none clears the query)")
    search_p.set_defaults(func=search)

    session_p = nouns.add_parser("session", help="Save the active list and focus", parents=[common])
    session_p.add_argument("--list", dest="list", help="Active list ID, ID prefix or name")
    session_p.add_argument("--focus", choices=[f.value for f in Focus], help="Focused pane")
    session_p.set_defaults(func=session_set)

    status_p = nouns.add_parser("status", help="Show a summary of the state", parents=[common])
    status_p.set_defaults(func=status)

    undo_p = nouns.add_parser("undo", help="Undo the last change in this shell", parents=[common])
    undo_p.set_defaults(func=undo)

    shell_p = nouns.add_parser("shell", help="Run commands from stdin in one session", parents=[common])
    shell_p.set_defaults(func=shell)

    return parser
