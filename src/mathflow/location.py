"""Source positions for spans and error messages.

Provides the Point dataclass for tracking positions in source text.

Thread Safety:
Point is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Point:
    """A position between two code units in the source.

    Lines and columns are 1-indexed; offset is the 0-indexed position in the
    source string. A ``"\\r\\n"`` line ending advances the offset by two.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed, one per code unit)
        offset: Absolute offset in the source string

    Examples:
        >>> Point(1, 1, 0)
        Point(line=1, column=1, offset=0)
        >>> str(Point(3, 5, 20))
        '3:5'

    """

    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        """Format point for error messages."""
        return f"{self.line}:{self.column}"

    @classmethod
    def start(cls) -> Point:
        """Point at the very beginning of a source."""
        return cls(line=1, column=1, offset=0)
