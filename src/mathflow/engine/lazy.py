"""Lazy-line oracle backed by a fixed set of line numbers."""

from __future__ import annotations

from collections.abc import Iterable


class LazyLines:
    """Read-only set of lazy continuation line numbers.

    Lines are 1-indexed, matching ``Point.line``.

    Example:
        >>> oracle = LazyLines([3])
        >>> oracle.is_lazy(3), oracle.is_lazy(2)
        (True, False)

    """

    __slots__ = ("_lines",)

    def __init__(self, lines: Iterable[int] = ()) -> None:
        self._lines = frozenset(lines)

    def is_lazy(self, line: int) -> bool:
        return line in self._lines

    def __repr__(self) -> str:
        return f"LazyLines({sorted(self._lines)!r})"


NO_LAZY_LINES = LazyLines()
