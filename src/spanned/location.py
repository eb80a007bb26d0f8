"""Source positions reported by tracked spans.

Provides SourcePosition, the (line, col, byte_offset) triple describing
where the remaining input of a span begins in the original input.

Thread Safety:
SourcePosition is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourcePosition:
    """Position of the first unconsumed element.

    Line and column are 1-indexed. The byte offset is 0-indexed and always
    counts UTF-8 bytes, whatever unit the column is counted in.

    Attributes:
        line: Line number (1-indexed)
        col: Column number (1-indexed)
        byte_offset: Absolute offset in bytes from the start of input

    Examples:
            >>> pos = SourcePosition(line=3, col=7, byte_offset=42)
            >>> str(pos)
            '3:7'

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    line: int = 1
    col: int = 1
    byte_offset: int = 0

    def __str__(self) -> str:
        """Format position for error messages.

        Returns:
            Formatted string like "10:5"
        """
        return f"{self.line}:{self.col}"

