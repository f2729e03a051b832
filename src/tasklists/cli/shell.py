"""Interactive shell: run many commands against one loaded state.

All commands share a single session, so 'undo' can revert earlier
commands typed in the same shell.
"""

import logging
import shlex
import sys

from tasklists.cli._common import clean_text, console, open_session

logger = logging.getLogger(__name__)

PROMPT = "tasklists> "
QUIT_WORDS = {"quit", "exit"}


def shell(args) -> int:
    """Read commands from stdin until EOF or 'quit'."""
    from tasklists.cli import build_parser

    session = open_session(args)
    parser = build_parser()
    interactive = sys.stdin.isatty()

    while True:
        if interactive:
            console.print(PROMPT, end="", markup=False)
        line = sys.stdin.readline()
        if not line:
            break
        line = clean_text(line).strip()
        if not line or line.startswith("#"):
            continue

        try:
            words = shlex.split(line)
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            continue
        if words[0] in QUIT_WORDS:
            break
        if words[0] == "shell":
            print("error: already in a shell", file=sys.stderr)
            continue

        try:
            command = parser.parse_args(words)
        except SystemExit:
            continue
        if not hasattr(command, "func"):
            parser.print_help()
            continue

        command.session = session
        command.json = command.json or args.json
        try:
            command.func(command)
        except SystemExit as e:
            logger.debug("command %r exited with %s", line, e.code)
    return 0
