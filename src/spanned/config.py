"""ContextVar-based span configuration for spanned.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The config only supplies defaults for spans created without explicit
arguments; once a span exists its counting mode never changes.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from spanned import Spanned
    from spanned.config import SpanConfig, span_config_context

    with span_config_context(SpanConfig(handle_utf8=False)):
        span = Spanned(source)  # counts columns in bytes

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SpanConfig:
    """Immutable span configuration.

    Attributes:
        handle_utf8: Count columns in Unicode scalar values (True) or in
            UTF-8 bytes (False) for spans built without an explicit mode

    """

    handle_utf8: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict) -> "SpanConfig":
        """Create SpanConfig from dictionary.

        Only includes keys that are valid SpanConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                SpanConfig attribute names.

        Returns:
            New SpanConfig instance with values from dict.

        Example:
            >>> config = SpanConfig.from_dict({
            ...     "handle_utf8": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.handle_utf8
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: SpanConfig = SpanConfig()

_span_config: ContextVar[SpanConfig] = ContextVar(
    "span_config",
    default=_DEFAULT_CONFIG,
)


def get_span_config() -> SpanConfig:
    """Get current span configuration (thread-local).

    Returns:
        The active SpanConfig for this thread/context.

    """
    return _span_config.get()


def set_span_config(config: SpanConfig) -> None:
    """Set span configuration for current context.

    Args:
        config: SpanConfig instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _span_config.set(config)


def reset_span_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _span_config.set(_DEFAULT_CONFIG)


@contextmanager
def span_config_context(config: SpanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: SpanConfig to use within the context.

    Yields:
        None

    Example:
        >>> with span_config_context(SpanConfig(handle_utf8=False)):
        ...     span = Spanned("\U0001f64c")
        ...     span.handle_utf8
        False

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _span_config.get()
    _span_config.set(config)
    try:
        yield
    finally:
        _span_config.set(previous)


__all__ = [
    "SpanConfig",
    "get_span_config",
    "set_span_config",
    "reset_span_config",
    "span_config_context",
]
