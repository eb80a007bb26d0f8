"""Tests for ContextVar-based span configuration.

Validates thread isolation, context manager behavior, and that spans keep
the mode they were created with.
"""

from threading import Thread

import pytest

from spanned import (
    SpanConfig,
    Spanned,
    get_span_config,
    reset_span_config,
    set_span_config,
    span_config_context,
)


class TestSpanConfigDataclass:
    def test_default_values(self) -> None:
        assert SpanConfig().handle_utf8 is True

    def test_immutability(self) -> None:
        config = SpanConfig()
        with pytest.raises(AttributeError):
            config.handle_utf8 = False  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = SpanConfig.from_dict({"handle_utf8": False, "unknown_key": "ignored"})
        assert config.handle_utf8 is False

    def test_from_empty_dict(self) -> None:
        assert SpanConfig.from_dict({}) == SpanConfig()


class TestContextVarFunctions:
    def teardown_method(self) -> None:
        """Reset config after each test."""
        reset_span_config()

    def test_default_config(self) -> None:
        assert get_span_config().handle_utf8 is True

    def test_set_and_get(self) -> None:
        set_span_config(SpanConfig(handle_utf8=False))
        assert get_span_config().handle_utf8 is False

    def test_reset(self) -> None:
        set_span_config(SpanConfig(handle_utf8=False))
        reset_span_config()
        assert get_span_config() == SpanConfig()


class TestSpanDefaults:
    def teardown_method(self) -> None:
        reset_span_config()

    def test_span_uses_config_mode(self) -> None:
        with span_config_context(SpanConfig(handle_utf8=False)):
            span = Spanned("\U0001f64c")
        assert span.handle_utf8 is False
        assert span.skip(1).col == 5

    def test_explicit_mode_wins(self) -> None:
        with span_config_context(SpanConfig(handle_utf8=False)):
            span = Spanned("\U0001f64c", True)
        assert span.skip(1).col == 2

    def test_mode_fixed_after_construction(self) -> None:
        span = Spanned("\U0001f64c")
        with span_config_context(SpanConfig(handle_utf8=False)):
            assert span.skip(1).col == 2


class TestContextManager:
    def test_restores_previous(self) -> None:
        with span_config_context(SpanConfig(handle_utf8=False)):
            assert get_span_config().handle_utf8 is False
        assert get_span_config().handle_utf8 is True

    def test_nested(self) -> None:
        with span_config_context(SpanConfig(handle_utf8=False)):
            with span_config_context(SpanConfig(handle_utf8=True)):
                assert get_span_config().handle_utf8 is True
            assert get_span_config().handle_utf8 is False

    def test_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with span_config_context(SpanConfig(handle_utf8=False)):
                raise RuntimeError("boom")
        assert get_span_config().handle_utf8 is True


class TestThreadIsolation:
    def test_threads_do_not_share_config(self) -> None:
        results: dict[str, bool] = {}

        def worker(name: str, handle_utf8: bool) -> None:
            set_span_config(SpanConfig(handle_utf8=handle_utf8))
            results[name] = Spanned("x").handle_utf8

        threads = [
            Thread(target=worker, args=("utf8", True)),
            Thread(target=worker, args=("bytes", False)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {"utf8": True, "bytes": False}
        assert get_span_config().handle_utf8 is True
