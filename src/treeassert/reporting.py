"""Destinations for discrepancy messages."""

from abc import ABC, abstractmethod
from typing import List, Optional


class Reporter(ABC):
    """Receives one formatted message per discrepancy found by an assertion."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Record a failure message."""
        pass


class CollectingReporter(Reporter):
    """Reporter that keeps every message in order.

    Example:
        >>> reporter = CollectingReporter()
        >>> reporter.error("'a.txt' is a directory")
        >>> reporter.failed
        True
        >>> reporter.messages
        ["'a.txt' is a directory"]
    """

    def __init__(self) -> None:
        self.messages: List[str] = []

    def error(self, message: str) -> None:
        self.messages.append(message)

    @property
    def failed(self) -> bool:
        return bool(self.messages)


def format_failure(message: str, msg: Optional[str] = None) -> str:
    """Attach the caller's optional message to a failure message."""
    if not msg:
        return message
    return f"{message}\nMessages: {msg}"
