"""Load tasklists state from disk, recovering from corrupted files."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from tasklists.errors import CorruptStateError, RecoveryError
from tasklists.ids import ZERO_TIME, parse_time, utc_now
from tasklists.model.normalize import apply_defaults, coerce_filter, coerce_focus, coerce_priority
from tasklists.model.state import (
    AppState,
    ArchivedEntry,
    Metadata,
    SessionContext,
    Task,
    TaskList,
    new_state,
)
from tasklists.model.writer import BACKUP_SUFFIX, PathLike, latest_backup_path, rotating_backups, save

logger = logging.getLogger(__name__)

CORRUPT_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


# --- Field decoding ---
#
# Each helper raises TypeError when the JSON value has the wrong type.
# null is treated like a missing field.


def _get(data: dict, key: str, kind: type | tuple[type, ...], default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if kind is int and isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"{key}: expected {getattr(kind, '__name__', kind)}, got {type(value).__name__}")
    return value


def _time(data: dict, key: str) -> datetime:
    value = _get(data, key, str, None)
    if value is None:
        return ZERO_TIME
    return parse_time(value)


def _objects(data: dict, key: str) -> list[dict]:
    items = _get(data, key, list, [])
    for item in items:
        if not isinstance(item, dict):
            raise TypeError(f"{key}: expected objects, got {type(item).__name__}")
    return items


def _list_from_dict(data: dict) -> TaskList:
    return TaskList(
        id=_get(data, "id", str, ""),
        name=_get(data, "name", str, ""),
        color=_get(data, "color", str, ""),
        created_at=_time(data, "createdAt"),
        updated_at=_time(data, "updatedAt"),
    )


def _task_from_dict(data: dict) -> Task:
    return Task(
        id=_get(data, "id", str, ""),
        list_id=_get(data, "listId", str, ""),
        text=_get(data, "text", str, ""),
        done=_get(data, "done", bool, False),
        priority=coerce_priority(_get(data, "priority", int, 0)),
        position=_get(data, "position", int, 0),
        created_at=_time(data, "createdAt"),
        updated_at=_time(data, "updatedAt"),
    )


def _archived_from_dict(data: dict) -> ArchivedEntry:
    return ArchivedEntry(
        id=_get(data, "id", str, ""),
        task_text=_get(data, "taskText", str, ""),
        origin_list_id=_get(data, "originListId", str, ""),
        origin_list=_get(data, "originList", str, ""),
        priority=coerce_priority(_get(data, "priority", int, 0)),
        done_at=_time(data, "doneAt"),
        archived_at=_time(data, "archivedAt"),
    )


def _metadata_from_dict(data: dict) -> Metadata:
    session = _get(data, "session", dict, {})
    focus = _get(session, "focus", str, "")
    return Metadata(
        version=_get(data, "version", int, 0),
        first_run=_get(data, "firstRun", bool, False),
        session=SessionContext(
            active_list_id=_get(session, "activeListId", str, ""),
            focus=coerce_focus(focus),
        ),
    )


def state_from_dict(data: dict) -> AppState:
    """Build an AppState from the wire structure, without defaults applied."""
    filter_value = _get(data, "filter", str, "")
    return AppState(
        lists=[_list_from_dict(d) for d in _objects(data, "lists")],
        tasks=[_task_from_dict(d) for d in _objects(data, "tasks")],
        archived=[_archived_from_dict(d) for d in _objects(data, "archivedCompleted")],
        filter=coerce_filter(filter_value),
        query=_get(data, "query", str, ""),
        metadata=_metadata_from_dict(_get(data, "metadata", dict, {})),
    )


def decode_state(raw: bytes | str) -> AppState:
    """Decode file content into an AppState with defaults applied.

    Raises CorruptStateError for malformed, truncated or mistyped content.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise CorruptStateError(f"invalid state file: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise CorruptStateError(f"invalid state file: expected an object, got {type(data).__name__}")
    try:
        state = state_from_dict(data)
    except (TypeError, ValueError, OverflowError) as e:
        raise CorruptStateError(f"invalid state file: {e}") from e
    return apply_defaults(state)


def load(path: PathLike) -> AppState:
    """Read state from path. A missing file gives a fresh empty state."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return new_state()
    return decode_state(raw)


# --- Recovery ---


def corrupt_path_for(path: PathLike, when: datetime | None = None) -> Path:
    """Quarantine name: state.json → state.corrupt-20260219-123000.json"""
    path = Path(path)
    stamp = (when or utc_now()).strftime(CORRUPT_TIMESTAMP_FORMAT)
    return path.with_name(f"{path.stem}.corrupt-{stamp}{path.suffix}")


def move_corrupt_file(path: PathLike) -> Path | None:
    """Rename a corrupted file aside. Returns None if it is already gone."""
    path = Path(path)
    if not path.exists():
        return None
    target = corrupt_path_for(path)
    path.rename(target)
    logger.warning("moved corrupted state %s to %s", path, target.name)
    return target


def backup_candidates(path: PathLike) -> list[Path]:
    """Latest and rotating backups, newest first by modification time."""
    candidates = []
    latest = latest_backup_path(path)
    if latest.exists():
        candidates.append(latest)
    candidates.extend(rotating_backups(path))

    def sort_key(candidate: Path) -> tuple[int, bool, str]:
        try:
            mtime = candidate.stat().st_mtime_ns
        except OSError:
            mtime = 0
        return (mtime, candidate.name.endswith(BACKUP_SUFFIX), candidate.name)

    return sorted(candidates, key=sort_key, reverse=True)


def load_latest_valid_backup(path: PathLike) -> tuple[AppState, Path] | None:
    """First backup that decodes cleanly, newest first, or None."""
    for candidate in backup_candidates(path):
        try:
            state = decode_state(candidate.read_bytes())
        except (OSError, CorruptStateError) as e:
            logger.info("skipping backup %s: %s", candidate.name, e)
            continue
        return state, candidate
    return None


def load_with_recovery(path: PathLike) -> tuple[AppState, str]:
    """Load state, restoring from backups if the file is corrupted.

    Returns (state, message). The message is empty on a normal load and
    otherwise says where the state came from and where the bad file went.
    Raises RecoveryError if an I/O failure stops the recovery.
    """
    path = Path(path)
    try:
        return load(path), ""
    except CorruptStateError as e:
        logger.warning("state file %s is corrupted: %s", path, e)

    try:
        corrupt = move_corrupt_file(path)
        moved = f" (bad file moved to {corrupt.name})" if corrupt else ""

        recovered = load_latest_valid_backup(path)
        if recovered is not None:
            state, source = recovered
            save(path, state)
            logger.warning("recovered state from %s", source.name)
            return state, f"Recovered corrupted state from {source.name}{moved}"

        state = new_state()
        save(path, state)
        logger.warning("no valid backup for %s, starting empty", path)
        return state, f"Corrupted state had no valid backup; started with an empty state{moved}"
    except OSError as e:
        raise RecoveryError(f"could not recover {path}: {e}") from e
