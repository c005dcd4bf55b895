"""Compare a real directory against an expected file tree."""

import logging
import os
from typing import Dict, Mapping, Optional

from treeassert.file_tree.file_mode import mode_to_string
from treeassert.file_tree.file_node import FileNode
from treeassert.file_tree.tags import format_perm
from treeassert.filesystem import FileInfo, FileSystem, OsFileSystem, walk
from treeassert.reporting import Reporter, format_failure

logger = logging.getLogger(__name__)


class TreeMatcher:
    """Verifies directories against expected trees.

    Two modes are supported. Exhaustive matching requires the directory to contain
    exactly the expected entries. Containment matching tolerates extra entries anywhere
    in the directory. In both modes every expected entry must exist, have the expected
    kind, and satisfy its ``mode`` and ``perm`` tags.

    Every discrepancy is delivered to the reporter as its own message before the verdict
    is returned. The filesystem is only read.

    Attributes:
        fs (FileSystem): The filesystem to inspect.

    Example:
        >>> from treeassert.file_tree.parser import parse_tree
        >>> from treeassert.reporting import CollectingReporter
        >>> matcher = TreeMatcher()
        >>> reporter = CollectingReporter()
        >>> matcher.match(reporter, parse_tree("- missing.txt"), ".")  # doctest: +SKIP
        False
    """

    def __init__(self, fs: Optional[FileSystem] = None) -> None:
        self.fs = fs if fs is not None else OsFileSystem()

    def match(
        self,
        reporter: Reporter,
        tree: Mapping[str, FileNode],
        root: str,
        exhaustive: bool = True,
        msg: Optional[str] = None,
    ) -> bool:
        """Check the directory at ``root`` against ``tree``.

        Args:
            reporter: Receives one message per discrepancy.
            tree: The expected entries directly below ``root``.
            root: The directory to inspect. The root itself is not compared.
            exhaustive: If True, unexpected entries are discrepancies. Defaults to True.
            msg: Optional text appended to every reported message.

        Returns:
            True if the directory matches, False otherwise.
        """
        root = os.path.normpath(root)
        run = _MatchRun(reporter, root, exhaustive, msg)

        # Local to this call; entries are removed as they match.
        expectations: Dict[str, FileNode] = {}
        for node in tree.values():
            expectations.update(node.flatten())

        try:
            for path, info in walk(self.fs, root):
                if path == root:
                    continue
                run.check(path, info, expectations)
        except OSError as e:
            return run.fail(f"could not walk through {root!r}: {e}")

        if run.failed:
            logger.debug("Directory %s does not match: discrepancies found", root)
            return False

        if not expectations:
            logger.debug("Directory %s matches the expected tree", root)
            return True

        logger.debug("Directory %s is missing %d expected entries", root, len(expectations))
        lines = [f"expected these entries in {root!r} but not found:"]
        lines.extend(f"- {path}" for path in sorted(expectations))
        return run.fail("\n".join(lines) + "\n")


class _MatchRun:
    """State of one ``TreeMatcher.match`` invocation."""

    def __init__(self, reporter: Reporter, root: str, exhaustive: bool, msg: Optional[str]) -> None:
        self.reporter = reporter
        self.root = root
        self.exhaustive = exhaustive
        self.msg = msg
        self.failed = False

    def fail(self, message: str) -> bool:
        self.failed = True
        self.reporter.error(format_failure(message, self.msg))
        return False

    def check(self, path: str, info: FileInfo, expectations: Dict[str, FileNode]) -> None:
        """Compare one visited entry and consume its expectation when it matches."""
        relative_path = os.path.relpath(path, self.root).replace(os.sep, "/")
        expected = expectations.get(relative_path)

        if expected is None:
            if self.exhaustive:
                self.fail(f"unexpected entry at {path!r}")
            return

        if expected.is_dir and not info.is_dir:
            self.fail(f"{path!r} is not a directory")
            return
        if not expected.is_dir and info.is_dir:
            self.fail(f"{path!r} is a directory")
            return

        matched = True

        expected_mode = expected.tags.mode
        if expected_mode is not None:
            want = mode_to_string(expected_mode)
            actual = mode_to_string(info.mode)
            if want != actual:
                matched = self.fail(f"{path!r} mode is {actual}, expected {want}")

        expected_perm = expected.tags.perm
        # Bits outside the permission range never match.
        if expected_perm is not None and expected_perm != info.perm:
            matched = self.fail(f"{path!r} perm is {format_perm(info.perm)}, expected 0{expected_perm:o}")

        if matched:
            del expectations[relative_path]
