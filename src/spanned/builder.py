"""FragmentBuilder for O(n) accumulation of span fragments.

Combinators that collect many small pieces of input (escaped string bodies,
repeated tokens) append fragments here and join once at the end: O(n) total
vs O(n²) for repeated concatenation.

Thread Safety:
FragmentBuilder instances are local to the rule that created them.
No shared mutable state.

"""

from __future__ import annotations


class FragmentBuilder[T: (str, bytes)]:
    """Accumulator for fragments of one input type.

    Usage:
            >>> sb = FragmentBuilder("")
            >>> _ = sb.append("ab").append("cd")
            >>> sb.build()
            'abcd'

    Thread Safety:
        Instance is local to each rule invocation.
        No shared mutable state.

    """

    __slots__ = ("_empty", "_parts")

    def __init__(self, empty: T) -> None:
        """Initialize an empty builder.

        Args:
            empty: Empty value of the fragment type ("" or b""), used as
                the join separator and as the result of an empty build
        """
        self._empty: T = empty[:0]
        self._parts: list[T] = []

    def append(self, fragment: T) -> FragmentBuilder[T]:
        """Append a fragment (empty fragments are skipped).

        Returns:
            self for method chaining
        """
        if fragment:
            self._parts.append(fragment)
        return self

    def extend(self, fragments: list[T]) -> FragmentBuilder[T]:
        """Append multiple fragments at once."""
        self._parts.extend(f for f in fragments if f)
        return self

    def build(self) -> T:
        """Join all parts into the final value."""
        return self._empty.join(self._parts)

    def clear(self) -> FragmentBuilder[T]:
        """Clear all accumulated parts."""
        self._parts.clear()
        return self

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
