"""Declarative filesystem assertions.

This package lets tests describe the expected layout of a directory in a compact YAML
notation and verify it against a real filesystem, either exactly or by containment.
"""

from importlib.metadata import PackageNotFoundError, version

from treeassert.assertions import (
    assert_tree_contains,
    assert_tree_equal,
    dir_exists,
    exists,
    file_exists,
    no_dir_exists,
    no_exists,
    no_file_exists,
    perm,
    tree_contains,
    tree_equal,
    yaml_tree_contains,
    yaml_tree_equal,
)
from treeassert.exceptions import FormatError, ModeError, TreeSpecError
from treeassert.file_tree import FileMode, FileModeTags, FileNode, FileTree, dump_tree, load_tree, parse_tree
from treeassert.filesystem import FileInfo, FileSystem, OsFileSystem
from treeassert.matcher import TreeMatcher
from treeassert.reporting import CollectingReporter, Reporter
from treeassert.snapshot import snapshot_tree

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("treeassert")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "CollectingReporter",
    "FileInfo",
    "FileMode",
    "FileModeTags",
    "FileNode",
    "FileSystem",
    "FileTree",
    "FormatError",
    "ModeError",
    "OsFileSystem",
    "Reporter",
    "TreeMatcher",
    "TreeSpecError",
    "assert_tree_contains",
    "assert_tree_equal",
    "dir_exists",
    "dump_tree",
    "exists",
    "file_exists",
    "load_tree",
    "no_dir_exists",
    "no_exists",
    "no_file_exists",
    "parse_tree",
    "perm",
    "snapshot_tree",
    "tree_contains",
    "tree_equal",
    "yaml_tree_contains",
    "yaml_tree_equal",
]
