"""List colour palette and terminal styles."""

import hashlib

from tasklists.model.state import Priority

# Cycle order for "list color ID" without an explicit colour.
LIST_COLORS: list[str] = ["blue", "green", "yellow", "magenta", "cyan", "red"]

# Colour names accepted on lists, mapped to rich styles.
COLORS: dict[str, str] = {
    "blue": "bright_blue",
    "green": "bright_green",
    "yellow": "bright_yellow",
    "magenta": "bright_magenta",
    "purple": "bright_magenta",
    "cyan": "bright_cyan",
    "red": "bright_red",
}

# Fallback colours for unrecognised names, picked by hash.
FALLBACK_COLORS: list[str] = [
    "#2e8b57",  # sea green
    "#dd6600",  # orange
    "#7b68ee",  # medium slate blue
    "#cc6699",  # pink
    "#886644",  # brown
    "#4499cc",  # sky blue
    "#aa66cc",  # medium purple
    "#448888",  # dark cyan
]

DEFAULT_STYLE = "white"

PRIORITY_MARKERS: dict[Priority, tuple[str, str]] = {
    Priority.NONE: ("•", "grey50"),
    Priority.LOW: ("●", "green3"),
    Priority.MEDIUM: ("●", "gold1"),
    Priority.HIGH: ("●", "indian_red1"),
}


def normalize_color(name: str) -> str:
    return name.strip().lower()


def next_color(current: str) -> str:
    """The palette colour after current. Unknown colours count as the first one."""
    current = normalize_color(current)
    index = LIST_COLORS.index(current) if current in LIST_COLORS else 0
    return LIST_COLORS[(index + 1) % len(LIST_COLORS)]


def style_for_color(name: str) -> str:
    """Rich style for a list colour name.

    Known names map to terminal colours, empty means the default style, and
    anything else gets a stable colour from the md5 byte sum of the name.
    """
    name = normalize_color(name)
    if not name:
        return DEFAULT_STYLE
    if name in COLORS:
        return COLORS[name]
    h = hashlib.md5(name.encode()).hexdigest()
    index = sum(int(h[i : i + 2], 16) for i in range(0, 32, 2))
    return FALLBACK_COLORS[index % len(FALLBACK_COLORS)]


def priority_marker(priority: Priority) -> tuple[str, str]:
    """(symbol, style) shown in front of a task."""
    return PRIORITY_MARKERS.get(priority, PRIORITY_MARKERS[Priority.NONE])
