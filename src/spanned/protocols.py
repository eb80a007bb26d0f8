"""Protocols for spanned.

Defines the capability set a parser-combinator framework needs from an
input type: length, indexed iteration, slicing by count or predicate, and
comparison against literal patterns. Spanned satisfies it structurally;
nothing inherits from ParserInput.

Thread Safety:
    Protocols are purely structural, with no runtime overhead.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from enum import Enum, auto
from typing import Any, Protocol, Self, runtime_checkable


class CompareResult(Enum):
    """Outcome of comparing input against a literal pattern.

    OK: the input starts with the pattern.
    INCOMPLETE: the input is a strict prefix of the pattern; more input
        could still match.
    ERROR: the input and pattern differ.

    """

    OK = auto()
    INCOMPLETE = auto()
    ERROR = auto()


@runtime_checkable
class ParserInput(Protocol):
    """Contract for inputs consumed by combinators.

    Every slicing method returns new values and leaves the receiver
    untouched, so a backtracking parser can keep earlier inputs alive.

    Split methods return (rest, taken), the order combinators return
    (remaining input, output) in.
    """

    def input_len(self) -> int: ...
    def iter_elements(self) -> Iterator[Any]: ...
    def iter_indices(self) -> Iterator[tuple[int, Any]]: ...
    def position(self, predicate: Callable[[Any], bool]) -> int | None: ...
    def slice_index(self, count: int) -> int: ...
    def take(self, count: int) -> Self: ...
    def take_split(self, count: int) -> tuple[Self, Self]: ...
    def split_at_position(self, predicate: Callable[[Any], bool]) -> tuple[Self, Self]: ...
    def split_at_position1(
        self, predicate: Callable[[Any], bool], kind: str
    ) -> tuple[Self, Self]: ...
    def split_at_position_complete(
        self, predicate: Callable[[Any], bool]
    ) -> tuple[Self, Self]: ...
    def split_at_position1_complete(
        self, predicate: Callable[[Any], bool], kind: str
    ) -> tuple[Self, Self]: ...
    def compare(self, pattern: str | bytes) -> CompareResult: ...
    def compare_no_case(self, pattern: str | bytes) -> CompareResult: ...
