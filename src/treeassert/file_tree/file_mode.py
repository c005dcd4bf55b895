"""File mode flags and their symbolic names.

Modes use a portable bit layout: the low nine bits hold the POSIX permission
bits and the high bits hold one flag per file kind or special attribute. Raw
``st_mode`` values from ``os.stat`` are converted with :func:`mode_from_stat`.
"""

import stat
from enum import IntFlag
from typing import Dict

PERM_MASK = 0o777

MODE_SEPARATOR = "|"


class FileMode(IntFlag):
    """Single-bit file mode flags.

    Example:
        >>> int(FileMode.DIR | 0o755) == (1 << 31) | 0o755
        True
    """

    DIR = 1 << 31
    APPEND = 1 << 30
    EXCLUSIVE = 1 << 29
    TEMPORARY = 1 << 28
    SYMLINK = 1 << 27
    DEVICE = 1 << 26
    NAMED_PIPE = 1 << 25
    SOCKET = 1 << 24
    SETUID = 1 << 23
    SETGID = 1 << 22
    CHAR_DEVICE = 1 << 21
    STICKY = 1 << 20
    IRREGULAR = 1 << 19


MODE_NAMES: Dict[FileMode, str] = {
    FileMode.DIR: "Dir",
    FileMode.APPEND: "Append",
    FileMode.EXCLUSIVE: "Exclusive",
    FileMode.TEMPORARY: "Temporary",
    FileMode.SYMLINK: "Symlink",
    FileMode.DEVICE: "Device",
    FileMode.NAMED_PIPE: "NamedPipe",
    FileMode.SOCKET: "Socket",
    FileMode.SETUID: "Setuid",
    FileMode.SETGID: "Setgid",
    FileMode.CHAR_DEVICE: "CharDevice",
    FileMode.STICKY: "Sticky",
    FileMode.IRREGULAR: "Irregular",
}

MODES_BY_NAME: Dict[str, FileMode] = {
    "Dir": FileMode.DIR,
    "Append": FileMode.APPEND,
    "Exclusive": FileMode.EXCLUSIVE,
    "Temporary": FileMode.TEMPORARY,
    "Symlink": FileMode.SYMLINK,
    "Device": FileMode.DEVICE,
    "NamedPipe": FileMode.NAMED_PIPE,
    "Socket": FileMode.SOCKET,
    "Setuid": FileMode.SETUID,
    "Setgid": FileMode.SETGID,
    "CharDevice": FileMode.CHAR_DEVICE,
    "Sticky": FileMode.STICKY,
    "Irregular": FileMode.IRREGULAR,
}


def mode_to_string(mode: int) -> str:
    """Render the flags set in ``mode`` as sorted names joined by ``|``.

    Permission bits are ignored. A mode without flags renders as an empty string.

    Example:
        >>> mode_to_string(FileMode.STICKY | FileMode.DIR | 0o644)
        'Dir|Sticky'
    """
    names = sorted(name for flag, name in MODE_NAMES.items() if mode & flag)
    return MODE_SEPARATOR.join(names)


def mode_from_string(text: str) -> int:
    """Parse a ``|``-joined list of flag names.

    Raises:
        ValueError: If any name is not a known flag name.
    """
    result = 0
    for name in text.split(MODE_SEPARATOR):
        try:
            result |= MODES_BY_NAME[name]
        except KeyError:
            raise ValueError(f"unknown file mode {name!r}") from None
    return result


def mode_from_stat(st_mode: int) -> int:
    """Convert a POSIX ``st_mode`` into the flag layout used by this package."""
    mode = st_mode & PERM_MASK

    if stat.S_ISBLK(st_mode):
        mode |= FileMode.DEVICE
    elif stat.S_ISCHR(st_mode):
        mode |= FileMode.DEVICE | FileMode.CHAR_DEVICE
    elif stat.S_ISDIR(st_mode):
        mode |= FileMode.DIR
    elif stat.S_ISFIFO(st_mode):
        mode |= FileMode.NAMED_PIPE
    elif stat.S_ISLNK(st_mode):
        mode |= FileMode.SYMLINK
    elif stat.S_ISSOCK(st_mode):
        mode |= FileMode.SOCKET

    if st_mode & stat.S_ISUID:
        mode |= FileMode.SETUID
    if st_mode & stat.S_ISGID:
        mode |= FileMode.SETGID
    if st_mode & stat.S_ISVTX:
        mode |= FileMode.STICKY

    return int(mode)
