"""Exception classes for spanned.

Provides standardized exceptions for error handling throughout spanned.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from spanned.span import Spanned


class SpannedError(Exception):
    """Base exception for all spanned errors.

    Subclass this for specific error categories.
    """

    pass


class SpanContractError(SpannedError):
    """A caller broke the forward-only slicing contract.

    Raised when a consumed range does not start at the span's current
    position, would rewind the byte offset, or belongs to another input.
    Allowing any of these would silently corrupt the position invariants.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        col: int | None = None,
        byte_offset: int | None = None,
    ) -> None:
        """Initialize contract error with optional position.

        Args:
            message: Error description
            line: Line of the span the error was raised on (1-indexed)
            col: Column of the span the error was raised on (1-indexed)
            byte_offset: Byte offset of the span the error was raised on
        """
        self.message = message
        self.line = line
        self.col = col
        self.byte_offset = byte_offset

        location = ""
        if line is not None:
            location += f"{line}:"
            if col is not None:
                location += f"{col}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class IncompleteInputError(SpannedError):
    """Not enough input to satisfy a request.

    Raised by count-based slicing past the end of the remaining input and by
    predicate splits that never find a match.
    """

    def __init__(self, needed: int = 1) -> None:
        """Initialize incomplete input error.

        Args:
            needed: Number of additional elements required
        """
        self.needed = needed
        super().__init__(f"Incomplete input: {needed} more element(s) needed")


class SplitError(SpannedError):
    """A split requiring at least one element consumed nothing.

    Carries the span the split was attempted on so callers can report its
    position.
    """

    def __init__(self, span: Spanned[Any], kind: str) -> None:
        """Initialize split error.

        Args:
            span: Span at which the split failed
            kind: Label of the rule that failed (e.g., "alpha1")
        """
        self.span = span
        self.kind = kind
        super().__init__(f"{span.line}:{span.col} {kind}: expected at least one element")
