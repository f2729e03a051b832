"""Configuration defaults and environment lookup for tasklists."""

import os
from dataclasses import dataclass
from pathlib import Path

VERSION = "1.0.0"

APP_NAME = "tasklists"
STATE_FILENAME = "state.json"
ENV_STATE_FILE = "TASKLISTS_FILE"


def default_state_path() -> Path:
    """Where state lives when nothing else is configured.

    $XDG_DATA_HOME/tasklists/state.json, falling back to
    ~/.local/share/tasklists/state.json.
    """
    data_home = os.environ.get("XDG_DATA_HOME", "").strip()
    base = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return base / APP_NAME / STATE_FILENAME


@dataclass
class Config:
    """Runtime options for a CLI invocation."""

    state_file: str = ""
    json: bool = False
    verbose: int = 0

    def __post_init__(self) -> None:
        if not self.state_file:
            self.state_file = os.environ.get(ENV_STATE_FILE, "").strip() or str(default_state_path())

    @property
    def state_path(self) -> Path:
        return Path(self.state_file).expanduser()

    @classmethod
    def from_args(cls, args) -> "Config":
        return cls(
            state_file=getattr(args, "file", None) or "",
            json=bool(getattr(args, "json", False)),
            verbose=int(getattr(args, "verbose", 0) or 0),
        )
