"""Entry point for tasklists CLI."""

import sys

from tasklists.cli import build_parser
from tasklists.cli._common import clean_text, configure_logging


def main():
    parser = build_parser()
    args = parser.parse_args([clean_text(arg) for arg in sys.argv[1:]])

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
