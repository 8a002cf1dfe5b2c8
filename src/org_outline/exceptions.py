"""Custom exceptions for the outline parser."""

from typing import Optional


class OutlineError(Exception):
    """Base class for outline parsing errors."""


class OutlineStructureError(OutlineError):
    """Raised when an end marker has no open container to close.

    Also raised in strict mode for mismatched or unterminated blocks and
    drawers.

    Attributes:
        line_number: 1-based number of the offending line (None at end of input)
        line: Text of the offending line (None at end of input)
        message: Human-readable error message
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
    ):
        self.message = message
        self.line_number = line_number
        self.line = line
        if line_number is None:
            super().__init__(message)
        else:
            super().__init__(f"{message} (line {line_number}: {line!r})")
