"""Read-only filesystem access used by the matcher and the assertions.

The matcher never touches ``os`` directly. It goes through a :class:`FileSystem`
collaborator, so tests and callers can substitute any backend that can stat a path and
list a directory. Backends may additionally provide ``lstat``; when they do, entries are
examined without following symbolic links.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from treeassert.file_tree.file_mode import PERM_MASK, FileMode, mode_from_stat
from treeassert.types import PathType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileInfo:
    """What a stat call reports about one entry.

    Attributes:
        name (str): Base name of the entry.
        mode (int): File mode flags and permission bits (see ``FileMode``).
    """

    name: str
    mode: int

    @property
    def is_dir(self) -> bool:
        return bool(self.mode & FileMode.DIR)

    @property
    def is_symlink(self) -> bool:
        return bool(self.mode & FileMode.SYMLINK)

    @property
    def perm(self) -> int:
        return self.mode & PERM_MASK

    @classmethod
    def from_stat_result(cls, path: PathType, result: os.stat_result) -> "FileInfo":
        return cls(os.path.basename(os.fspath(path)), mode_from_stat(result.st_mode))


class FileSystem(ABC):
    """Interface of a read-only filesystem.

    Implementations raise ``FileNotFoundError`` when a path does not exist and another
    ``OSError`` for any other failure. They may also define ``lstat(path) -> FileInfo``,
    which reports on a symbolic link itself rather than on its target.
    """

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        """Return information about ``path``, following symbolic links."""
        pass

    @abstractmethod
    def listdir(self, path: str) -> List[str]:
        """Return the names of the entries in directory ``path``."""
        pass


class OsFileSystem(FileSystem):
    """FileSystem backed by the operating system.

    Example:
        >>> fs = OsFileSystem()
        >>> fs.stat(".").is_dir
        True
    """

    def stat(self, path: str) -> FileInfo:
        return FileInfo.from_stat_result(path, os.stat(path))

    def lstat(self, path: str) -> FileInfo:
        return FileInfo.from_stat_result(path, os.lstat(path))

    def listdir(self, path: str) -> List[str]:
        return os.listdir(path)


def stat_entry(fs: FileSystem, path: str) -> FileInfo:
    """Stat ``path`` without following symlinks when ``fs`` supports it."""
    lstat = getattr(fs, "lstat", None)
    if callable(lstat):
        info: FileInfo = lstat(path)
        return info
    return fs.stat(path)


def walk(fs: FileSystem, root: str) -> Iterator[Tuple[str, FileInfo]]:
    """Walk the tree rooted at ``root`` depth-first.

    Yields ``(path, info)`` for ``root`` itself and then for every descendant, visiting
    the entries of each directory in lexical order. Paths are built with ``os.path.join``
    from ``root``. Symbolic links are reported but never descended into when ``fs``
    provides ``lstat``.

    Raises:
        OSError: If an entry cannot be examined or a directory cannot be listed. The walk
            stops at the first failure.
    """
    pending = [root]
    while pending:
        path = pending.pop()
        info = stat_entry(fs, path)
        yield path, info

        if not info.is_dir:
            continue

        logger.debug("Listing %s", path)
        # Reversed so the lexically smallest entry is popped next.
        for name in sorted(fs.listdir(path), reverse=True):
            pending.append(os.path.join(path, name))
