"""Spanned driven by small parser combinators.

The combinators here are the minimum needed to exercise Spanned the way a
combinator framework does: they only use the ParserInput capabilities and
thread (rest, output) pairs.
"""

from collections.abc import Callable
from typing import Any

import pytest

from spanned import CompareResult, IncompleteInputError, ParserInput, Spanned, SplitError

type Parser = Callable[[Any], tuple[Any, Any]]


class ParseFailure(Exception):
    pass


def anychar(span: ParserInput) -> tuple[Any, Any]:
    if span.input_len() == 0:
        raise ParseFailure("eof")
    rest, taken = span.take_split(1)
    return rest, next(taken.iter_elements())


def tag(literal: str) -> Parser:
    def parse(span: Spanned[str]) -> tuple[Any, Any]:
        if span.compare(literal) is not CompareResult.OK:
            raise ParseFailure(literal)
        return span.take_split(len(literal))

    return parse


def many1(parser: Parser) -> Parser:
    def parse(span: Any) -> tuple[Any, list[Any]]:
        span, first = parser(span)
        items = [first]
        while True:
            try:
                span, item = parser(span)
            except ParseFailure:
                return span, items
            items.append(item)

    return parse


def not_line_ending(span: Spanned[str]) -> tuple[Spanned[str], Spanned[str]]:
    return span.split_at_position_complete(lambda c: c in "\r\n")


def alpha1(span: Spanned[str]) -> tuple[Spanned[str], Spanned[str]]:
    return span.split_at_position1_complete(lambda c: not c.isalpha(), "alpha1")


class TestOriginalBehaviour:
    def test_utf8_vs_ascii(self) -> None:
        utf8 = Spanned("\U0001f64c", True)
        ascii_ = Spanned("\U0001f64c", False)

        utf8_after, _ = many1(anychar)(utf8)
        ascii_after, _ = many1(anychar)(ascii_)

        assert utf8_after.col == 2
        assert ascii_after.col == 5

    def test_utf8_vs_ascii_on_bytes(self) -> None:
        data = "\U0001f64c".encode()
        utf8_after, chars = many1(anychar)(Spanned(data, True))
        ascii_after, _ = many1(anychar)(Spanned(data, False))

        assert len(chars) == 4
        assert utf8_after.col == 2
        assert ascii_after.col == 5

    def test_can_compare_with_different_type(self) -> None:
        def until_newline(span: Spanned[bytes]) -> tuple[Spanned[bytes], bytes]:
            rest, comment = span.split_at_position_complete(lambda b: b in b"\r\n")
            return rest, comment.fragment

        rest, comment = until_newline(Spanned(b"test\n", True))
        assert comment == b"test"
        assert rest.compare("\n") is CompareResult.OK
        assert rest.fragment == b"\n"

    def test_not_line_ending(self) -> None:
        rest, _ = not_line_ending(Spanned("test\n", True))
        assert rest.fragment == "\n"
        assert rest.col == 5


class TestKeyValueLines:
    """A tiny line-oriented grammar that reports positions."""

    SOURCE = "name: spanned\nlang: pyéthon\nkind: lib\n"

    def parse_entries(self, span: Spanned[str]) -> list[tuple[str, str, int, int]]:
        entries = []
        while span.input_len():
            key_start = span
            span, key = alpha1(span)
            span, _ = tag(": ")(span)
            value_start = span
            span, value = not_line_ending(span)
            span, _ = tag("\n")(span)
            entries.append((key.fragment, value.fragment, key_start.line, value_start.col))
        return entries

    def test_entries_with_positions(self) -> None:
        entries = self.parse_entries(Spanned(self.SOURCE, True))
        assert entries == [
            ("name", "spanned", 1, 7),
            ("lang", "pyéthon", 2, 7),
            ("kind", "lib", 3, 7),
        ]

    def test_error_position(self) -> None:
        span = Spanned("name: ok\n: missing\n", True)
        span, _ = alpha1(span)
        span, _ = tag(": ")(span)
        span, _ = not_line_ending(span)
        span, _ = tag("\n")(span)
        with pytest.raises(SplitError) as exc_info:
            alpha1(span)
        assert exc_info.value.span.line == 2
        assert exc_info.value.span.col == 1
        assert exc_info.value.span.byte_offset == 9

    def test_end_position_counts_bytes(self) -> None:
        span = Spanned(self.SOURCE, True)
        end = span.skip(span.input_len())
        assert end.line == 4
        assert end.col == 1
        assert end.byte_offset == len(self.SOURCE.encode())

    def test_backtracking_keeps_earlier_span(self) -> None:
        start = Spanned("abc\ndef", True)
        advanced, _ = many1(anychar)(start)
        assert advanced.line == 2
        assert start.location.line == 1
        rest, _ = tag("abc")(start)
        assert rest.col == 4


class TestIncomplete:
    def test_split_without_terminator(self) -> None:
        with pytest.raises(IncompleteInputError):
            Spanned("no newline", True).split_at_position(lambda c: c == "\n")
