"""Shared helpers for CLI command handlers."""

import json
import logging
import sys
from typing import Any, Callable

from rich.console import Console
from rich.text import Text

from tasklists.config import Config
from tasklists.errors import RecoveryError, TaskListsError
from tasklists.ids import is_zero
from tasklists.model.loader import load_with_recovery
from tasklists.model.state import ArchivedEntry, Task, TaskList
from tasklists.model.writer import autosave
from tasklists.palette import priority_marker, style_for_color
from tasklists.service import TaskService

console = Console(highlight=False, soft_wrap=True)


class Session:
    """A loaded service bound to its state file."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.path = config.state_path
        state, self.status = load_with_recovery(self.path)
        self.service = TaskService(state)

    def commit(self) -> None:
        """Autosave the service's current state.

        Saving means the user has acted, so the first-run flag is cleared.
        """
        self.service.mark_onboarding_seen()
        autosave(self.path, self.service.state())


def configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=level,
    )


def clean_text(value: str) -> str:
    """Replace bytes that are not UTF-8 with U+FFFD.

    Python hands such bytes in argv and stdin over as lone surrogates,
    which cannot be written back out as UTF-8:
    "bad\\udcff" → "bad\\ufffd"
    """
    return value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def open_session(args) -> Session:
    """Session for this command, reusing the shell's if there is one. Exit 1 on I/O failure."""
    session = getattr(args, "session", None)
    if session is not None:
        return session
    config = Config.from_args(args)
    try:
        session = Session(config)
    except (RecoveryError, OSError) as e:
        error(f"cannot load {config.state_path}: {e}", args.json)
    if session.status:
        print(f"note: {session.status}", file=sys.stderr)
    return session


def attempt(args, fn: Callable[..., Any], *fn_args: Any) -> Any:
    """Call a service operation. Exit 1 with its message if it fails."""
    try:
        return fn(*fn_args)
    except TaskListsError as e:
        error(str(e), args.json)


def commit(session: Session, json_mode: bool) -> None:
    """Persist the session. Exit 1 if the write fails."""
    try:
        session.commit()
    except OSError as e:
        error(f"cannot save {session.path}: {e}", json_mode)


def _resolve(ref: str, candidates: list[tuple[str, str]], noun: str, json_mode: bool) -> str:
    """Resolve an id, unique id prefix or exact name to an id.

    candidates is a list of (id, name). Unresolvable references are
    returned unchanged so the service reports them as not found.
    """
    ref = ref.strip()
    if not ref:
        return ref
    if any(cid == ref for cid, _ in candidates):
        return ref
    by_prefix = [cid for cid, _ in candidates if cid.startswith(ref)]
    if len(by_prefix) == 1:
        return by_prefix[0]
    if len(by_prefix) > 1:
        error(f"ambiguous {noun} id '{ref}'", json_mode)
    by_name = [cid for cid, name in candidates if name.strip().lower() == ref.lower()]
    if len(by_name) == 1:
        return by_name[0]
    if len(by_name) > 1:
        error(f"more than one {noun} is named '{ref}'", json_mode)
    return ref


def resolve_list(session: Session, ref: str, json_mode: bool) -> str:
    candidates = [(lst.id, lst.name) for lst in session.service.lists()]
    return _resolve(ref, candidates, "list", json_mode)


def resolve_task(session: Session, ref: str, json_mode: bool) -> str:
    candidates = [(t.id, "") for t in session.service.tasks()]
    return _resolve(ref, candidates, "task", json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        console.print(text, markup=False)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


# --- Rendering ---


def short_id(value: str) -> str:
    return value[:8]


def describe_time(value) -> str:
    """Short local time for display, or "-" when unknown."""
    if is_zero(value):
        return "-"
    return value.astimezone().strftime("%d/%m %H:%M")


def list_line(lst: TaskList, open_count: int, total: int) -> Text:
    line = Text()
    line.append(f"{short_id(lst.id)}  ", style="dim")
    line.append(f"{lst.name:<16}", style=style_for_color(lst.color))
    noun = "task" if total == 1 else "tasks"
    line.append(f" {open_count}/{total} {noun} open")
    return line


def task_line(task: Task, indent: str = "  ") -> Text:
    symbol, style = priority_marker(task.priority)
    line = Text(indent)
    line.append(f"{task.position:>2}. ")
    line.append("[x] " if task.done else "[ ] ")
    line.append(symbol, style=style)
    line.append(" ")
    line.append(task.text, style="strike dim" if task.done else "")
    line.append(f"  {short_id(task.id)}", style="dim")
    return line


def archived_line(entry: ArchivedEntry) -> Text:
    symbol, style = priority_marker(entry.priority)
    line = Text("  ")
    line.append(symbol, style=style)
    line.append(f" {entry.task_text}")
    line.append(f" ({entry.origin_list} • {describe_time(entry.done_at)})", style="dim")
    return line
