from typing import Optional


class TreeSpecError(ValueError):
    """
    Base exception for specification text that cannot be turned into a file tree.

    Parsing stops at the first error and never returns a partially built tree.

    Attributes:
        reason (str): What is wrong with the specification.
        line (Optional[int]): 1-based line of the offending entry, when known.

    Example:
        >>> error = TreeSpecError("file name is empty", line=3)
        >>> str(error)
        'file name is empty at line 3'
    """

    def __init__(self, reason: str, line: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            reason (str): Description of the problem.
            line (int, optional): 1-based source line. Defaults to None.
        """
        self.reason = reason
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is None:
            return self.reason
        return f"{self.reason} at line {self.line}"


class FormatError(TreeSpecError):
    """
    Exception raised when the specification has the wrong shape.

    Covers empty names, entries that are neither a file nor a single-key directory,
    malformed tag blocks and YAML syntax errors.

    Example:
        >>> str(FormatError("bad syntax for struct tag value", line=1))
        'bad syntax for struct tag value at line 1'
    """

    pass


class ModeError(TreeSpecError):
    """
    Exception raised when a tag value is not a valid file mode.

    Attributes:
        key (str): The tag key holding the bad value (``mode``, ``type`` or ``perm``).

    Example:
        >>> str(ModeError("type", line=3))
        'invalid file mode in "type" tag at line 3'
    """

    def __init__(self, key: str, line: Optional[int] = None) -> None:
        self.key = key
        super().__init__(f'invalid file mode in "{key}" tag', line)
