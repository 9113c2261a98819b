"""
Error types raised by envsnap.

Core functions raise these; only the CLI catches them and turns them into
user-facing messages.
"""

from typing import Iterable, Optional


class EnvsnapError(Exception):
    """
    Base exception for envsnap.

    Attributes:
        message: User-facing error message
        hint: Optional actionable suggestion
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class UnknownFormatError(EnvsnapError, ValueError):
    """Raised when a snapshot output format is not recognized."""

    kind = "format"

    def __init__(self, format: str, choices: Iterable[str] = ()):
        self.format = format
        self.choices = list(choices)
        hint = None
        if self.choices:
            hint = f"Valid {self.kind}s: {', '.join(self.choices)}"
        super().__init__(f"Unknown {self.kind}: {format!r}", hint)


class UnknownDiffFormatError(UnknownFormatError):
    """Raised when a diff presentation format is not recognized."""

    kind = "diff format"


class EnvFileError(EnvsnapError):
    """Raised when an env file cannot be read."""
