"""Save tasklists state to disk.

save() is a plain write for initial or non-interactive use. autosave() is
the crash-safe path: it backs up the current file, writes a temp file in
the same directory and renames it over the target, so readers only ever
see the old or the new file.
"""

import glob
import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

from tasklists.ids import format_time, utc_now
from tasklists.model.state import AppState, ArchivedEntry, Task, TaskList

logger = logging.getLogger(__name__)

MAX_ROTATING_BACKUPS = 10
BACKUP_SUFFIX = ".bak"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S.%f"

PathLike = Path | str


# --- Encoding ---


def list_to_dict(lst: TaskList) -> dict:
    return {
        "id": lst.id,
        "name": lst.name,
        "color": lst.color,
        "createdAt": format_time(lst.created_at),
        "updatedAt": format_time(lst.updated_at),
    }


def task_to_dict(task: Task) -> dict:
    data = {
        "id": task.id,
        "listId": task.list_id,
        "text": task.text,
        "done": task.done,
    }
    if task.priority:
        data["priority"] = int(task.priority)
    if task.position:
        data["position"] = task.position
    data["createdAt"] = format_time(task.created_at)
    data["updatedAt"] = format_time(task.updated_at)
    return data


def archived_to_dict(entry: ArchivedEntry) -> dict:
    data = {"id": entry.id, "taskText": entry.task_text}
    if entry.origin_list_id:
        data["originListId"] = entry.origin_list_id
    data["originList"] = entry.origin_list
    if entry.priority:
        data["priority"] = int(entry.priority)
    data["doneAt"] = format_time(entry.done_at)
    data["archivedAt"] = format_time(entry.archived_at)
    return data


def state_to_dict(state: AppState) -> dict:
    """Convert state to the JSON-ready wire structure."""
    data: dict = {
        "lists": [list_to_dict(lst) for lst in state.lists],
        "tasks": [task_to_dict(t) for t in state.tasks],
    }
    if state.archived:
        data["archivedCompleted"] = [archived_to_dict(e) for e in state.archived]
    if state.filter:
        data["filter"] = str(getattr(state.filter, "value", state.filter))
    if state.query:
        data["query"] = state.query

    meta = state.metadata
    session: dict = {}
    if meta.session.active_list_id:
        session["activeListId"] = meta.session.active_list_id
    if meta.session.focus:
        session["focus"] = str(getattr(meta.session.focus, "value", meta.session.focus))
    metadata: dict = {"version": meta.version}
    if meta.first_run:
        metadata["firstRun"] = True
    metadata["session"] = session
    data["metadata"] = metadata
    return data


def encode_state(state: AppState) -> str:
    """Serialize state as two-space indented JSON with a trailing newline."""
    return json.dumps(state_to_dict(state), indent=2, ensure_ascii=False) + "\n"


# --- Writing ---


def _ensure_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def save(path: PathLike, state: AppState) -> None:
    """Write state to path (not atomic)."""
    path = Path(path)
    _ensure_dir(path)
    path.write_text(encode_state(state), encoding="utf-8")


def latest_backup_path(path: PathLike) -> Path:
    path = Path(path)
    return path.with_name(path.name + BACKUP_SUFFIX)


def rotating_backup_path(path: PathLike, when: datetime | None = None) -> Path:
    """Timestamped backup path; names sort in creation order."""
    path = Path(path)
    stamp = (when or utc_now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    return path.with_name(f"{path.name}{BACKUP_SUFFIX}.{stamp}")


def rotating_backups(path: PathLike) -> list[Path]:
    """Existing rotating backups for path, oldest first."""
    path = Path(path)
    pattern = glob.escape(path.name) + BACKUP_SUFFIX + ".*"
    return sorted(path.parent.glob(pattern), key=lambda p: p.name)


def prune_rotating_backups(path: PathLike, keep: int = MAX_ROTATING_BACKUPS) -> list[Path]:
    """Delete all but the newest keep rotating backups. Returns what was removed."""
    backups = rotating_backups(path)
    if len(backups) <= keep:
        return []
    removed = backups[: len(backups) - keep]
    for old in removed:
        try:
            old.unlink()
        except FileNotFoundError:
            continue
    logger.debug("pruned %d rotating backup(s) of %s", len(removed), path)
    return removed


def backup(path: PathLike) -> Path | None:
    """Copy the current file to the latest and a rotating backup.

    Does nothing if path does not exist. Returns the rotating backup path.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return None
    latest_backup_path(path).write_bytes(data)
    rotating = rotating_backup_path(path)
    rotating.write_bytes(data)
    prune_rotating_backups(path)
    return rotating


def autosave(path: PathLike, state: AppState) -> None:
    """Back up the current file, then atomically replace it with state."""
    path = Path(path)
    _ensure_dir(path)
    backup(path)

    fd, tmp_name = tempfile.mkstemp(prefix=path.name + ".tmp-", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(encode_state(state))
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    logger.debug("autosaved %s", path)
