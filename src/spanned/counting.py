"""Incremental position counting.

Computes the position after a consumed range from the position before it,
looking only at the consumed range. A parser that asks for its column after
every element therefore pays O(n) over the whole input instead of the
O(n²) of re-counting from the start of input on every query.

All scanning is done with C-level str/bytes methods (count, rfind,
translate, encode) over index ranges, so the original buffer is never
copied as a whole.

Thread Safety:
All functions are pure. The only shared state read is the optional
SpanAccumulator, which lives in a ContextVar.

"""

from __future__ import annotations

from spanned.errors import SpanContractError
from spanned.location import SourcePosition
from spanned.profiling import get_span_accumulator
from spanned.utils.logger import get_logger

logger = get_logger(__name__)

# UTF-8 continuation bytes (0b10xxxxxx); every other byte starts a character
_CONTINUATION_BYTES = bytes(range(0x80, 0xC0))


def count_newlines(data: str | bytes, start: int = 0, end: int | None = None) -> tuple[int, int]:
    """Count line terminators in data[start:end].

    Args:
        data: Text or bytes to scan
        start: Start index (inclusive)
        end: End index (exclusive), defaults to len(data)

    Returns:
        (count, line_start) where line_start is the index just past the
        last newline, or start when the range holds none.

    Example:
        >>> count_newlines("a\\nb\\nc")
        (2, 4)
        >>> count_newlines(b"abc")
        (0, 0)
    """
    newline = "\n" if isinstance(data, str) else b"\n"
    count = data.count(newline, start, end)
    if not count:
        return 0, start
    return count, data.rfind(newline, start, end) + 1


def utf8_length(text: str, start: int = 0, end: int | None = None) -> int:
    """Byte length of text[start:end] once encoded as UTF-8.

    Example:
        >>> utf8_length("héllo")
        6
    """
    chunk = text[start:end]
    if chunk.isascii():
        return len(chunk)
    return len(chunk.encode("utf-8"))


def count_utf8_chars(data: bytes, start: int = 0, end: int | None = None) -> int:
    """Number of characters encoded in data[start:end].

    Counts every byte that is not a UTF-8 continuation byte. The bytes are
    assumed to be valid UTF-8 and are not validated.

    Example:
        >>> count_utf8_chars("\U0001f64c!".encode())
        2
    """
    chunk = data[start:end]
    if chunk.isascii():
        return len(chunk)
    return len(chunk.translate(None, _CONTINUATION_BYTES))


def advance_position(
    position: SourcePosition,
    data: str | bytes,
    handle_utf8: bool,
    start: int = 0,
    end: int | None = None,
) -> SourcePosition:
    """Compute the position after consuming data[start:end].

    The consumed range must begin exactly at `position`. Columns restart
    at 1 after the last newline of the range and otherwise keep counting
    from `position.col`. The byte offset is exact in both counting modes.

    Args:
        position: Position of data[start]
        data: Text or bytes holding the consumed range
        handle_utf8: Count columns in characters (True) or UTF-8 bytes (False)
        start: Start of the consumed range (inclusive)
        end: End of the consumed range (exclusive), defaults to len(data)

    Returns:
        Position of data[end]

    Raises:
        SpanContractError: If the range is reversed or outside data

    Complexity: O(end - start)

    Example:
        >>> advance_position(SourcePosition(), "a\\nbc", True)
        SourcePosition(line=2, col=3, byte_offset=4)
    """
    size = len(data)
    if end is None:
        end = size
    if not 0 <= start <= end <= size:
        logger.debug("Rejected consumed range [%d, %d) of %d-element input", start, end, size)
        raise SpanContractError(
            f"consumed range [{start}, {end}) is reversed or outside the input",
            position.line,
            position.col,
            position.byte_offset,
        )
    if start == end:
        return position

    lines, line_start = count_newlines(data, start, end)
    tail = end - line_start
    scanned = (end - start) + (tail + 1 if lines else 0)

    if isinstance(data, str):
        consumed = utf8_length(data, start, end)
        scanned += end - start
        if handle_utf8:
            units = tail
        elif lines:
            units = utf8_length(data, line_start, end)
            scanned += tail
        else:
            units = consumed
    else:
        consumed = end - start
        if handle_utf8:
            units = count_utf8_chars(data, line_start, end)
            scanned += tail
        else:
            units = tail

    acc = get_span_accumulator()
    if acc is not None:
        acc.record_advance(consumed, scanned)

    return SourcePosition(
        line=position.line + lines,
        # A newline resets the column; otherwise keep counting on this line
        col=units + 1 if lines else position.col + units,
        byte_offset=position.byte_offset + consumed,
    )
