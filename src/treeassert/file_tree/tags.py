"""Per-node attribute tags.

A tag block is a struct-tag style string: ``key:"value"`` pairs separated by
spaces, for example ``mode:"Dir|Sticky" perm:"0755"``. Three keys are recognized:

- ``mode``: file mode flags, compared symbolically against the actual mode.
- ``type``: file mode flags, kept for format compatibility but never compared.
- ``perm``: permission bits, compared numerically.

A value is either a numeric literal (octal when it starts with ``0``, decimal
otherwise) or a ``|``-joined list of flag names such as ``Dir|Sticky``.
"""

import json
import logging
from typing import Iterator, Optional, Tuple

from treeassert.exceptions import FormatError, ModeError
from treeassert.file_tree.file_mode import MODE_NAMES, PERM_MASK, mode_from_string, mode_to_string

logger = logging.getLogger(__name__)

TAG_KEYS = ("mode", "type", "perm")

_MAX_MODE = 1 << 32
_FLAG_MASK = sum(MODE_NAMES)


class FileModeTags(dict):  # type: ignore[type-arg]
    """Mapping from tag key to mode value. A missing key leaves that attribute unconstrained.

    Example:
        >>> tags = FileModeTags.parse('perm:"0644" mode:"Dir"')
        >>> oct(tags.perm)
        '0o644'
        >>> str(tags)
        'mode:"Dir" perm:"0644"'
    """

    @property
    def mode(self) -> Optional[int]:
        return self.get("mode")

    @property
    def type(self) -> Optional[int]:
        return self.get("type")

    @property
    def perm(self) -> Optional[int]:
        return self.get("perm")

    @classmethod
    def parse(cls, text: str, line: Optional[int] = None) -> "FileModeTags":
        """Parse a tag block.

        Args:
            text: The tag block without its surrounding quotes.
            line: Source line used in error messages.

        Returns:
            The parsed tags. Unknown keys are skipped.

        Raises:
            FormatError: If the block is not a sequence of ``key:"value"`` pairs.
            ModeError: If a value is neither a valid literal nor a list of flag names.
        """
        tags = cls()
        for key, value in _split_pairs(text, line):
            if key not in TAG_KEYS:
                logger.debug("Ignoring unknown tag %r at line %s", key, line)
                continue

            mode = parse_mode(value)
            if mode is None:
                raise ModeError(key, line)

            tags[key] = mode

        return tags

    def __str__(self) -> str:
        pairs = []
        for key in TAG_KEYS:
            value = self.get(key)
            if value is None:
                continue
            if key == "perm":
                rendered = format_perm(value)
            else:
                rendered = _format_flags(value)
            pairs.append(f'{key}:"{rendered}"')
        return " ".join(pairs)


def parse_mode(value: str) -> Optional[int]:
    """Parse a tag value into a mode, or return None when it is not valid.

    Example:
        >>> parse_mode("0755") == 0o755
        True
        >>> parse_mode("Dir|Unknown") is None
        True
    """
    if value.isascii() and value.isdigit():
        try:
            mode = int(value, 8 if value.startswith("0") else 10)
        except ValueError:
            mode = _MAX_MODE
        if mode < _MAX_MODE:
            return mode

    try:
        return mode_from_string(value)
    except ValueError:
        return None


def format_perm(perm: int) -> str:
    """Render permission bits as zero-prefixed octal, e.g. ``0644``."""
    return f"0{perm & PERM_MASK:o}"


def _format_flags(mode: int) -> str:
    # Values with bits outside the named flags would lose information symbolically.
    if mode & ~_FLAG_MASK:
        return f"0{mode:o}"
    return mode_to_string(mode) or "0"


def _split_pairs(text: str, line: Optional[int]) -> Iterator[Tuple[str, str]]:
    """Yield ``(key, value)`` pairs from a struct-tag style string."""
    rest = text
    while rest:
        rest = rest.lstrip(" ")
        if not rest:
            break

        end = 0
        while end < len(rest) and rest[end] > " " and rest[end] not in ':"\x7f':
            end += 1
        if end == 0:
            raise FormatError("bad syntax for struct tag key", line)
        if end + 1 >= len(rest) or rest[end] != ":":
            raise FormatError("bad syntax for struct tag pair", line)
        if rest[end + 1] != '"':
            raise FormatError("bad syntax for struct tag value", line)

        key = rest[:end]
        rest = rest[end + 1 :]

        # Find the closing quote, skipping escaped characters.
        end = 1
        while end < len(rest) and rest[end] != '"':
            if rest[end] == "\\":
                end += 1
            end += 1
        if end >= len(rest):
            raise FormatError("bad syntax for struct tag value", line)

        quoted = rest[: end + 1]
        rest = rest[end + 1 :]

        try:
            value = json.loads(quoted)
        except ValueError:
            raise FormatError("bad syntax for struct tag value", line) from None

        # Struct tag values may carry comma-separated options after the name.
        yield key, value.split(",")[0]
