"""Benchmark incremental tracking vs re-scanning from the start of input.

A tracker that recounts lines and columns from the beginning of input on
every query is O(n²) when a parser asks for the position after each element.
Spanned counts only what each slice consumes.

Run with:
    pytest benchmarks/benchmark_vs_rescan.py -v --benchmark-only
"""

from __future__ import annotations

import pytest

from spanned import Spanned


class RescanningSpan:
    """Baseline: stores only an index and recomputes position on demand."""

    __slots__ = ("_source", "_pos")

    def __init__(self, source: str, pos: int = 0) -> None:
        self._source = source
        self._pos = pos

    def skip(self, count: int) -> RescanningSpan:
        return RescanningSpan(self._source, self._pos + count)

    def __len__(self) -> int:
        return len(self._source) - self._pos

    @property
    def line(self) -> int:
        return self._source.count("\n", 0, self._pos) + 1

    @property
    def col(self) -> int:
        return self._pos - (self._source.rfind("\n", 0, self._pos) + 1) + 1


def walk(span, step: int) -> int:
    checksum = 0
    while span:
        span = span.skip(min(step, len(span)))
        checksum += span.line + span.col
    return checksum


@pytest.mark.benchmark(group="query-every-element")
def test_benchmark_spanned_every_element(benchmark, large_json):
    benchmark(walk, Spanned(large_json, True), 1)


@pytest.mark.benchmark(group="query-every-element")
def test_benchmark_rescan_every_element(benchmark, large_json):
    # Quarter-size input keeps the quadratic baseline tractable
    benchmark(walk, RescanningSpan(large_json[: len(large_json) // 4]), 1)


@pytest.mark.benchmark(group="query-every-token")
def test_benchmark_spanned_every_token(benchmark, large_json):
    benchmark(walk, Spanned(large_json, True), 16)


@pytest.mark.benchmark(group="query-every-token")
def test_benchmark_rescan_every_token(benchmark, large_json):
    benchmark(walk, RescanningSpan(large_json), 16)


@pytest.mark.benchmark(group="counting-mode")
@pytest.mark.parametrize("handle_utf8", [True, False])
def test_benchmark_counting_mode(benchmark, large_json, handle_utf8):
    benchmark(walk, Spanned(large_json, handle_utf8), 16)


@pytest.mark.benchmark(group="counting-mode")
@pytest.mark.parametrize("handle_utf8", [True, False])
def test_benchmark_counting_mode_bytes(benchmark, large_json, handle_utf8):
    benchmark(walk, Spanned(large_json.encode("utf-8"), handle_utf8), 16)


@pytest.mark.benchmark(group="construction")
def test_benchmark_small_inputs(benchmark, small_inputs):
    def build_all():
        for text in small_inputs:
            Spanned(text, True).skip(len(text))

    benchmark(build_all)
