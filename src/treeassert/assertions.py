"""Filesystem assertions for tests.

Every assertion takes a :class:`~treeassert.reporting.Reporter` first, reports one
message per failure, and returns whether it passed. An optional ``msg`` is appended to
each reported message and an optional ``fs`` replaces the operating system filesystem.

The ``assert_tree_*`` helpers wrap the tree assertions for plain ``assert``-style tests:
they raise ``AssertionError`` carrying every discrepancy.

Example:
    >>> from treeassert.reporting import CollectingReporter
    >>> reporter = CollectingReporter()
    >>> yaml_tree_contains(reporter, "- treeassert:\\n    - assertions.py", "src")  # doctest: +SKIP
    True
"""

from typing import Mapping, Optional, Union

from treeassert.exceptions import TreeSpecError
from treeassert.file_tree.file_node import FileNode
from treeassert.file_tree.parser import parse_tree
from treeassert.file_tree.tags import format_perm
from treeassert.filesystem import FileInfo, FileSystem, OsFileSystem, stat_entry
from treeassert.matcher import TreeMatcher
from treeassert.reporting import CollectingReporter, Reporter, format_failure
from treeassert.types import PathType

Expectation = Union[str, Mapping[str, FileNode]]


def tree_equal(
    reporter: Reporter,
    tree: Mapping[str, FileNode],
    path: PathType,
    msg: Optional[str] = None,
    fs: Optional[FileSystem] = None,
) -> bool:
    """Check that the directory at ``path`` holds exactly the entries of ``tree``."""
    return TreeMatcher(fs).match(reporter, tree, str(path), exhaustive=True, msg=msg)


def tree_contains(
    reporter: Reporter,
    tree: Mapping[str, FileNode],
    path: PathType,
    msg: Optional[str] = None,
    fs: Optional[FileSystem] = None,
) -> bool:
    """Check that the directory at ``path`` holds at least the entries of ``tree``."""
    return TreeMatcher(fs).match(reporter, tree, str(path), exhaustive=False, msg=msg)


def yaml_tree_equal(
    reporter: Reporter,
    expected: str,
    path: PathType,
    msg: Optional[str] = None,
    fs: Optional[FileSystem] = None,
) -> bool:
    """Like :func:`tree_equal`, with the expectation given as specification text."""
    tree = _parse_expectation(reporter, expected, msg)
    if tree is None:
        return False
    return tree_equal(reporter, tree, path, msg, fs)


def yaml_tree_contains(
    reporter: Reporter,
    expected: str,
    path: PathType,
    msg: Optional[str] = None,
    fs: Optional[FileSystem] = None,
) -> bool:
    """Like :func:`tree_contains`, with the expectation given as specification text."""
    tree = _parse_expectation(reporter, expected, msg)
    if tree is None:
        return False
    return tree_contains(reporter, tree, path, msg, fs)


def assert_tree_equal(
    expected: Expectation, path: PathType, msg: Optional[str] = None, fs: Optional[FileSystem] = None
) -> None:
    """Raise AssertionError unless the directory at ``path`` matches ``expected`` exactly.

    Args:
        expected: A FileTree or specification text.
        path: The directory to check.
        msg: Optional text added to the failure.
        fs: Filesystem to read. Defaults to the operating system.
    """
    _assert_tree(expected, path, True, msg, fs)


def assert_tree_contains(
    expected: Expectation, path: PathType, msg: Optional[str] = None, fs: Optional[FileSystem] = None
) -> None:
    """Raise AssertionError unless the directory at ``path`` contains ``expected``."""
    _assert_tree(expected, path, False, msg, fs)


def exists(reporter: Reporter, path: PathType, msg: Optional[str] = None, fs: Optional[FileSystem] = None) -> bool:
    """Check that ``path`` exists. A failing stat call other than "not found" also fails."""
    return _stat_or_fail(reporter, str(path), msg, fs) is not None


def no_exists(reporter: Reporter, path: PathType, msg: Optional[str] = None, fs: Optional[FileSystem] = None) -> bool:
    """Check that ``path`` does not exist. Any stat failure counts as absence."""
    if _try_stat(str(path), fs) is None:
        return True
    return _fail(reporter, f"file {str(path)!r} exists", msg)


def file_exists(reporter: Reporter, path: PathType, msg: Optional[str] = None, fs: Optional[FileSystem] = None) -> bool:
    """Check that ``path`` exists and is not a directory."""
    info = _stat_or_fail(reporter, str(path), msg, fs)
    if info is None:
        return False
    if info.is_dir:
        return _fail(reporter, f"{str(path)!r} is a directory", msg)
    return True


def no_file_exists(
    reporter: Reporter, path: PathType, msg: Optional[str] = None, fs: Optional[FileSystem] = None
) -> bool:
    """Check that ``path`` is not an existing file. Directories and missing paths pass."""
    info = _try_stat(str(path), fs)
    if info is None or info.is_dir:
        return True
    return _fail(reporter, f"file {str(path)!r} exists", msg)


def dir_exists(reporter: Reporter, path: PathType, msg: Optional[str] = None, fs: Optional[FileSystem] = None) -> bool:
    """Check that ``path`` exists and is a directory."""
    info = _stat_or_fail(reporter, str(path), msg, fs)
    if info is None:
        return False
    if not info.is_dir:
        return _fail(reporter, f"{str(path)!r} is a file", msg)
    return True


def no_dir_exists(
    reporter: Reporter, path: PathType, msg: Optional[str] = None, fs: Optional[FileSystem] = None
) -> bool:
    """Check that ``path`` is not an existing directory. Files and missing paths pass."""
    info = _try_stat(str(path), fs)
    if info is None or not info.is_dir:
        return True
    return _fail(reporter, f"directory {str(path)!r} exists", msg)


def perm(
    reporter: Reporter,
    path: PathType,
    expected: int,
    msg: Optional[str] = None,
    fs: Optional[FileSystem] = None,
) -> bool:
    """Check that the permission bits of ``path`` equal ``expected``."""
    name = str(path)
    try:
        info = stat_entry(_fs(fs), name)
    except OSError as e:
        return _fail(reporter, f"error when running stat({name!r}): {e}", msg)

    if info.perm != expected:
        return _fail(
            reporter,
            f"{name!r} permission is {format_perm(info.perm)}, expected {format_perm(expected)}",
            msg,
        )
    return True


def _fs(fs: Optional[FileSystem]) -> FileSystem:
    return fs if fs is not None else OsFileSystem()


def _fail(reporter: Reporter, message: str, msg: Optional[str]) -> bool:
    reporter.error(format_failure(message, msg))
    return False


def _try_stat(path: str, fs: Optional[FileSystem]) -> Optional[FileInfo]:
    try:
        return stat_entry(_fs(fs), path)
    except OSError:
        return None


def _stat_or_fail(
    reporter: Reporter, path: str, msg: Optional[str], fs: Optional[FileSystem]
) -> Optional[FileInfo]:
    try:
        return stat_entry(_fs(fs), path)
    except FileNotFoundError:
        _fail(reporter, f"unable to find file {path!r}", msg)
    except OSError as e:
        _fail(reporter, f"error when running stat({path!r}): {e}", msg)
    return None


def _parse_expectation(reporter: Reporter, expected: str, msg: Optional[str]) -> Optional[Mapping[str, FileNode]]:
    try:
        return parse_tree(expected)
    except TreeSpecError as e:
        _fail(reporter, f"could not parse expectation: {e}", msg)
        return None


def _assert_tree(
    expected: Expectation, path: PathType, exhaustive: bool, msg: Optional[str], fs: Optional[FileSystem]
) -> None:
    reporter = CollectingReporter()
    if isinstance(expected, str):
        tree = _parse_expectation(reporter, expected, msg)
    else:
        tree = expected

    if tree is not None:
        TreeMatcher(fs).match(reporter, tree, str(path), exhaustive=exhaustive, msg=msg)

    if reporter.failed:
        raise AssertionError("\n".join(reporter.messages))
