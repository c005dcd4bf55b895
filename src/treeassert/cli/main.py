"""Command-line interface for treeassert.

Exit Codes:
    0: The directory matches (check) or the specification was written (dump)
    1: The directory does not match, or it could not be read
    2: Command-line syntax error or invalid specification
    130: Interrupted by SIGINT (Ctrl+C)

Example:
    $ treeassert check -s expected.yaml /path/to/dir
    $ treeassert dump -p /path/to/dir
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from treeassert.cli.argparser import create_parser
from treeassert.exceptions import TreeSpecError
from treeassert.file_tree.parser import parse_tree
from treeassert.file_tree.serializer import dump_tree
from treeassert.matcher import TreeMatcher
from treeassert.reporting import CollectingReporter
from treeassert.snapshot import snapshot_tree

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s | %(message)s"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level when ``verbose`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def read_spec(source: str) -> str:
    """Read specification text from a file, or from stdin when ``source`` is ``-``."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def run_check(args: argparse.Namespace) -> int:
    try:
        tree = parse_tree(read_spec(args.spec))
    except TreeSpecError as e:
        print(f"Error: invalid specification: {e}", file=sys.stderr)
        return 2

    reporter = CollectingReporter()
    matched = TreeMatcher().match(reporter, tree, str(args.root), exhaustive=not args.contains)

    for message in reporter.messages:
        print(message, file=sys.stderr)

    return 0 if matched else 1


def run_dump(args: argparse.Namespace) -> int:
    text = dump_tree(snapshot_tree(str(args.root), perm=args.perm, mode=args.mode))

    if args.output:
        args.output.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)

    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the treeassert command-line interface.

    Args:
        argv: Arguments to parse. Defaults to ``sys.argv[1:]``.
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    commands = {"check": run_check, "dump": run_dump}

    try:
        code = commands[args.command](args)
    except KeyboardInterrupt:
        code = 130
    except OSError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {str(e)}", file=sys.stderr)
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
