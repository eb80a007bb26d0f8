"""
spanned: position-tracked input for parser combinators

Wraps a str or bytes input and keeps the line, column, and byte offset of
the unconsumed remainder up to date as a parser slices it. Positions are
updated from the consumed range alone, so querying the column after every
element costs O(n) over the whole input rather than O(n²).

Quick Start:
    >>> from spanned import Spanned
    >>> span = Spanned('{"hello": "world \U0001f64c"}', True)
    >>> span.line, span.col, span.byte_offset
    (1, 1, 0)
    >>> rest = span.skip(span.find_substring("\U0001f64c") + 1)
    >>> rest.col, rest.byte_offset
    (19, 21)

UTF-8 vs bytes:
    >>> Spanned("\U0001f64c", True).skip(1).col
    2
    >>> Spanned("\U0001f64c", False).skip(1).col
    5

Installation:
    pip install spanned              # zero runtime dependencies
"""

from spanned.builder import FragmentBuilder
from spanned.config import (
    SpanConfig,
    get_span_config,
    reset_span_config,
    set_span_config,
    span_config_context,
)
from spanned.counting import advance_position, count_newlines, count_utf8_chars, utf8_length
from spanned.errors import IncompleteInputError, SpanContractError, SpannedError, SplitError
from spanned.location import SourcePosition
from spanned.profiling import SpanAccumulator, get_span_accumulator, profiled_spans
from spanned.protocols import CompareResult, ParserInput
from spanned.span import Spanned

__version__ = "0.2.0"

__all__ = [
    "CompareResult",
    "FragmentBuilder",
    "IncompleteInputError",
    "ParserInput",
    "SourcePosition",
    "SpanAccumulator",
    "SpanConfig",
    "SpanContractError",
    "SpannedError",
    "Spanned",
    "SplitError",
    "__version__",
    "advance_position",
    "count_newlines",
    "count_utf8_chars",
    "get_span_accumulator",
    "get_span_config",
    "profiled_spans",
    "reset_span_config",
    "set_span_config",
    "span_config_context",
    "utf8_length",
]
