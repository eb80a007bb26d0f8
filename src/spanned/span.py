"""Position-tracked input spans.

Spanned wraps a str or bytes input and carries the line, column, and byte
offset of the first unconsumed element. Every slice scans only the elements
it removes, so asking for the position after each consumed element costs
O(n) over the whole input.

Spans never copy the input: each one holds a reference to the original
object plus native [start, end) indices. The fragment is materialized only
when it is read.

Equality, ordering, and hashing look at the remaining content alone. Two
spans reached through different consumption paths compare equal when what
is left to parse is the same, which is what combinator infrastructure
relies on when it compares parse states. Positions are deliberately not
part of that comparison; compare `span.location` to compare positions.

Thread Safety:
Spans are immutable. Any number of threads may hold and slice spans
derived from the same input.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from functools import total_ordering
from typing import Any, NoReturn, Self

from spanned.builder import FragmentBuilder
from spanned.config import get_span_config
from spanned.counting import advance_position, utf8_length
from spanned.errors import IncompleteInputError, SpanContractError, SplitError
from spanned.location import SourcePosition
from spanned.protocols import CompareResult
from spanned.utils.logger import get_logger

logger = get_logger(__name__)


@total_ordering
class Spanned[T: (str, bytes)]:
    """Input wrapper that tracks line, column, and byte offset.

    Usage:
            >>> span = Spanned("a\\nb\\nc")
            >>> rest = span.skip(2)
            >>> rest.line, rest.col, rest.byte_offset
            (2, 1, 2)
            >>> rest.fragment
            'b\\nc'

    Columns count Unicode scalar values when handle_utf8 is true and UTF-8
    bytes otherwise. The mode is fixed at construction and inherited by
    every span sliced from this one.

    Thread Safety:
        Immutable; safe to share across threads.

    """

    __slots__ = ("_source", "_start", "_end", "_line", "_col", "_offset", "_handle_utf8")

    _source: T
    _start: int
    _end: int
    _line: int
    _col: int
    _offset: int
    _handle_utf8: bool

    def __init__(self, data: T, handle_utf8: bool | None = None) -> None:
        """Wrap a complete input.

        Args:
            data: The whole input, as str or bytes
            handle_utf8: Count columns in characters (True) or bytes (False).
                Defaults to the active SpanConfig.

        Raises:
            TypeError: If data is neither str nor bytes
        """
        if not isinstance(data, (str, bytes)):
            raise TypeError(f"Spanned input must be str or bytes, not {type(data).__name__}")
        if handle_utf8 is None:
            handle_utf8 = get_span_config().handle_utf8
        logger.debug(
            "Tracking %s input of %d elements (utf8=%s)",
            type(data).__name__,
            len(data),
            handle_utf8,
        )
        self._init(data, 0, len(data), 1, 1, 0, handle_utf8)

    @classmethod
    def new(cls, data: T, handle_utf8: bool) -> Spanned[T]:
        """Wrap a complete input with an explicit counting mode."""
        return cls(data, handle_utf8)

    def _init(
        self,
        source: T,
        start: int,
        end: int,
        line: int,
        col: int,
        offset: int,
        handle_utf8: bool,
    ) -> None:
        setattr_ = object.__setattr__
        setattr_(self, "_source", source)
        setattr_(self, "_start", start)
        setattr_(self, "_end", end)
        setattr_(self, "_line", line)
        setattr_(self, "_col", col)
        setattr_(self, "_offset", offset)
        setattr_(self, "_handle_utf8", handle_utf8)

    @classmethod
    def _make(
        cls,
        source: T,
        start: int,
        end: int,
        line: int,
        col: int,
        offset: int,
        handle_utf8: bool,
    ) -> Spanned[T]:
        span = object.__new__(cls)
        span._init(source, start, end, line, col, offset, handle_utf8)
        return span

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            type(self)._make,
            (
                self._source,
                self._start,
                self._end,
                self._line,
                self._col,
                self._offset,
                self._handle_utf8,
            ),
        )

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def line(self) -> int:
        """Line of the first unconsumed element (1-indexed)."""
        return self._line

    @property
    def col(self) -> int:
        """Column of the first unconsumed element (1-indexed)."""
        return self._col

    @property
    def byte_offset(self) -> int:
        """UTF-8 byte offset of the first unconsumed element."""
        return self._offset

    @property
    def handle_utf8(self) -> bool:
        """Whether columns count characters rather than bytes."""
        return self._handle_utf8

    @property
    def location(self) -> SourcePosition:
        """Current position as a SourcePosition value."""
        return SourcePosition(line=self._line, col=self._col, byte_offset=self._offset)

    @property
    def source(self) -> T:
        """The original input this span was sliced from."""
        return self._source

    @property
    def fragment(self) -> T:
        """The unconsumed input."""
        return self._source[self._start : self._end]

    data = fragment
    remaining = fragment

    def view(self) -> memoryview:
        """Zero-copy view of the unconsumed bytes.

        Raises:
            TypeError: For str inputs, which have no buffer interface
        """
        if isinstance(self._source, str):
            raise TypeError("view() requires a bytes input; use fragment for str")
        return memoryview(self._source)[self._start : self._end]

    def as_bytes(self) -> bytes:
        """The unconsumed input as UTF-8 bytes."""
        fragment = self.fragment
        if isinstance(fragment, str):
            return fragment.encode("utf-8")
        return fragment

    def byte_length(self) -> int:
        """UTF-8 byte length of the unconsumed input."""
        if isinstance(self._source, str):
            return utf8_length(self._source, self._start, self._end)
        return self._end - self._start

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.fragment
        if len(val) > 20:
            val = val[:17] + ("..." if isinstance(val, str) else b"...")
        return (
            f"Spanned({val!r}, line={self._line}, col={self._col}, "
            f"byte_offset={self._offset})"
        )

    # =========================================================================
    # Length and iteration
    # =========================================================================

    def input_len(self) -> int:
        """Number of unconsumed elements (characters for str, bytes for bytes)."""
        return self._end - self._start

    def __len__(self) -> int:
        return self._end - self._start

    def iter_indices(self) -> Iterator[tuple[int, Any]]:
        """Yield (index, element) pairs, indices relative to this span."""
        source = self._source
        start = self._start
        for i in range(start, self._end):
            yield i - start, source[i]

    def iter_elements(self) -> Iterator[Any]:
        """Yield unconsumed elements (1-char strings, or ints for bytes)."""
        source = self._source
        for i in range(self._start, self._end):
            yield source[i]

    def __iter__(self) -> Iterator[Any]:
        return self.iter_elements()

    def position(self, predicate: Callable[[Any], bool]) -> int | None:
        """Index of the first element matching predicate, or None."""
        for index, element in self.iter_indices():
            if predicate(element):
                return index
        return None

    def slice_index(self, count: int) -> int:
        """Native index after `count` elements.

        Raises:
            IncompleteInputError: If fewer than count elements remain
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        available = self._end - self._start
        if count > available:
            raise IncompleteInputError(count - available)
        return count

    # =========================================================================
    # Slicing
    # =========================================================================

    def _derive(self, start: int, end: int, position: SourcePosition) -> Spanned[T]:
        return self._make(
            self._source,
            start,
            end,
            position.line,
            position.col,
            position.byte_offset,
            self._handle_utf8,
        )

    def _advance_to(self, cut: int, end: int | None = None) -> Spanned[T]:
        """Span of source[cut:end], positioned after consuming source[start:cut]."""
        if end is None:
            end = self._end
        if cut == self._start:
            return self._derive(cut, end, self.location)
        position = advance_position(
            self.location, self._source, self._handle_utf8, self._start, cut
        )
        return self._derive(cut, end, position)

    def split_at(self, count: int) -> tuple[Spanned[T], Spanned[T]]:
        """Split into (before, after) at `count` elements.

        `before` keeps this span's position. `after` carries the position
        reached by consuming `before`.

        Raises:
            IncompleteInputError: If fewer than count elements remain
        """
        cut = self._start + self.slice_index(count)
        before = self._derive(self._start, cut, self.location)
        return before, self._advance_to(cut)

    def take(self, count: int) -> Spanned[T]:
        """The first `count` elements, at this span's position."""
        cut = self._start + self.slice_index(count)
        return self._derive(self._start, cut, self.location)

    def take_split(self, count: int) -> tuple[Spanned[T], Spanned[T]]:
        """Split at `count` elements, returned as (rest, taken)."""
        before, after = self.split_at(count)
        return after, before

    def skip(self, count: int) -> Spanned[T]:
        """Everything after the first `count` elements."""
        return self._advance_to(self._start + self.slice_index(count))

    def skip_past(self, prefix: Spanned[T]) -> Spanned[T]:
        """Remainder of this span once `prefix` has been consumed.

        Args:
            prefix: A span sliced from the same input that starts exactly
                where this span starts

        Raises:
            SpanContractError: If prefix belongs to another input, does not
                start at this span's offset, or runs past this span
        """
        if prefix._source is not self._source:
            self._reject("prefix was sliced from a different input")
        if prefix._start != self._start:
            self._reject(
                f"prefix starts at byte {prefix._offset}, expected byte {self._offset}"
            )
        if prefix._end > self._end:
            self._reject("prefix extends past the end of this span")
        return self._advance_to(prefix._end)

    def slice(self, start: int = 0, stop: int | None = None) -> Spanned[T]:
        """Same as span[start:stop]."""
        return self[start:stop]

    def __getitem__(self, key: int | slice) -> Any:
        """Element at an index, or a sub-span for a slice.

        A sub-span starting past the beginning carries the position reached
        by consuming the skipped elements. Only step 1 is supported.
        """
        length = self._end - self._start
        if isinstance(key, slice):
            if key.step not in (None, 1):
                raise ValueError("Spanned slices must be contiguous (step 1)")
            start, stop, _ = key.indices(length)
            stop = max(start, stop)
            return self._advance_to(self._start + start, self._start + stop)
        if key < 0:
            key += length
        if not 0 <= key < length:
            raise IndexError("Spanned index out of range")
        return self._source[self._start + key]

    def split_at_position(self, predicate: Callable[[Any], bool]) -> tuple[Spanned[T], Spanned[T]]:
        """Split before the first element matching predicate, as (rest, taken).

        Raises:
            IncompleteInputError: If no element matches
        """
        index = self.position(predicate)
        if index is None:
            raise IncompleteInputError(1)
        return self.take_split(index)

    def split_at_position1(
        self, predicate: Callable[[Any], bool], kind: str
    ) -> tuple[Spanned[T], Spanned[T]]:
        """Like split_at_position, but at least one element must be taken.

        Raises:
            SplitError: If the first element already matches
            IncompleteInputError: If no element matches
        """
        index = self.position(predicate)
        if index is None:
            raise IncompleteInputError(1)
        if index == 0:
            raise SplitError(self, kind)
        return self.take_split(index)

    def split_at_position_complete(
        self, predicate: Callable[[Any], bool]
    ) -> tuple[Spanned[T], Spanned[T]]:
        """Like split_at_position, but no match takes the whole input."""
        index = self.position(predicate)
        if index is None:
            index = self.input_len()
        return self.take_split(index)

    def split_at_position1_complete(
        self, predicate: Callable[[Any], bool], kind: str
    ) -> tuple[Spanned[T], Spanned[T]]:
        """Like split_at_position_complete, but at least one element must be taken.

        Raises:
            SplitError: If the first element matches or the input is empty
        """
        index = self.position(predicate)
        if index is None:
            index = self.input_len()
        if index == 0:
            raise SplitError(self, kind)
        return self.take_split(index)

    def offset(self, other: Spanned[T]) -> int:
        """Native distance from this span's start to `other`'s start.

        Raises:
            SpanContractError: If other belongs to another input or lies
                before this span
        """
        if other._source is not self._source:
            self._reject("span was sliced from a different input")
        distance = other._start - self._start
        if distance < 0:
            self._reject(f"span at byte {other._offset} lies before this span")
        return distance

    def _reject(self, message: str) -> NoReturn:
        logger.debug("Contract violation at %d:%d: %s", self._line, self._col, message)
        raise SpanContractError(message, self._line, self._col, self._offset)

    # =========================================================================
    # Searching and comparison against literals
    # =========================================================================

    def _coerce(self, pattern: str | bytes) -> T:
        if isinstance(self._source, str):
            return pattern.decode("utf-8") if isinstance(pattern, bytes) else pattern
        return pattern.encode("utf-8") if isinstance(pattern, str) else pattern

    def compare(self, pattern: str | bytes) -> CompareResult:
        """Compare the start of the unconsumed input with a literal.

        Patterns of the other string type are converted through UTF-8.
        """
        pattern = self._coerce(pattern)
        if self._source.startswith(pattern, self._start, self._end):
            return CompareResult.OK
        if self._end - self._start < len(pattern) and pattern.startswith(self.fragment):
            return CompareResult.INCOMPLETE
        return CompareResult.ERROR

    def compare_no_case(self, pattern: str | bytes) -> CompareResult:
        """Case-insensitive compare (ASCII-only for bytes)."""
        pattern = self._coerce(pattern)
        n = min(len(pattern), self._end - self._start)
        head = self._source[self._start : self._start + n]
        if head.lower() != pattern[:n].lower():
            return CompareResult.ERROR
        return CompareResult.OK if n == len(pattern) else CompareResult.INCOMPLETE

    def find_substring(self, substr: str | bytes) -> int | None:
        """Index of the first occurrence of substr, or None."""
        index = self._source.find(self._coerce(substr), self._start, self._end)
        return None if index == -1 else index - self._start

    def find_token(self, token: str | bytes | int) -> bool:
        """Whether token occurs in the unconsumed input.

        For bytes inputs an int token is a single byte value.
        """
        if isinstance(token, int):
            if isinstance(self._source, str):
                return False
            token = bytes((token,))
        return self._source.find(self._coerce(token), self._start, self._end) != -1

    def parse_to[R](self, kind: Callable[[str], R]) -> R | None:
        """Convert the unconsumed input with `kind`, or None if it fails.

        Example:
            >>> Spanned("42").parse_to(int)
            42
        """
        fragment = self.fragment
        try:
            text = fragment if isinstance(fragment, str) else fragment.decode("utf-8")
            return kind(text)
        except (ValueError, TypeError):
            logger.debug("Could not convert %r with %r", fragment, kind, exc_info=True)
            return None

    def new_builder(self) -> FragmentBuilder[T]:
        """Empty builder for fragments of this input's type."""
        return FragmentBuilder(self._source[:0])

    def extend_into(self, builder: FragmentBuilder[T]) -> None:
        """Append the unconsumed input to builder."""
        builder.append(self.fragment)

    # =========================================================================
    # Content equality
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Spanned):
            return NotImplemented
        if type(self._source) is not type(other._source):
            return False
        if (
            self._source is other._source
            and self._start == other._start
            and self._end == other._end
        ):
            return True
        if self._end - self._start != other._end - other._start:
            return False
        return self.fragment == other.fragment

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Spanned) or type(self._source) is not type(other._source):
            return NotImplemented
        return self.fragment < other.fragment

    def __hash__(self) -> int:
        return hash(self.fragment)
