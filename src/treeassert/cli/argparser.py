"""Command-line argument parsing for treeassert.

This module defines the command-line interface for treeassert,
handling argument parsing.
"""

import argparse
from pathlib import Path

from treeassert import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with treeassert's subcommands.
    """
    description = """
    treeassert: declarative assertions about directory layouts.

    An expected layout is written as a YAML list. Plain entries are files, single-key
    mappings are directories, and an optional trailing tag block constrains mode flags
    and permissions:

      - README.md
      - bin 'perm:"0755"':
          - tool 'perm:"0755"'
      - cache:
    """

    epilog = """
    Examples:
      # Verify that a directory matches a specification exactly
      treeassert check -s expected.yaml /path/to/dir

      # Only require the specified entries to be present
      treeassert check -c -s expected.yaml /path/to/dir

      # Read the specification from standard input
      treeassert dump /path/to/dir | treeassert check /path/to/dir

      # Write the layout of a directory, including permissions, to a file
      treeassert dump -p -o expected.yaml /path/to/dir
    """

    parser = argparse.ArgumentParser(
        prog="treeassert",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"treeassert {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debugging information to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    check = subparsers.add_parser(
        "check",
        help="Verify a directory against a specification.",
        description="Verify a directory against a specification. Discrepancies are printed to stderr.",
    )
    check.add_argument(
        "root",
        type=Path,
        help="The directory to verify. Specification paths are relative to this directory.",
    )
    check.add_argument(
        "-s",
        "--spec",
        metavar="FILE",
        default="-",
        help="Specification file, or '-' for standard input (default: -).",
    )
    check.add_argument(
        "-c",
        "--contains",
        action="store_true",
        help="Tolerate entries that the specification does not mention.",
    )

    dump = subparsers.add_parser(
        "dump",
        help="Print the specification describing a directory.",
        description="Print the specification that an existing directory matches exactly.",
    )
    dump.add_argument(
        "root",
        type=Path,
        help="The directory to describe.",
    )
    dump.add_argument(
        "-p",
        "--perm",
        action="store_true",
        help="Include the permission bits of every entry.",
    )
    dump.add_argument(
        "-m",
        "--mode",
        action="store_true",
        help="Include the mode flags of every entry.",
    )
    dump.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )

    return parser
