"""Code units and character classes for the math flow tokenizer.

Source text is split into code units before tokenizing. A code unit is a
single character, except that ``"\\r\\n"`` is kept together as one line
ending so that every line ending is consumed in a single step.

End of input is represented by ``EOF`` (``None``).

Usage:
    from mathflow.codes import preprocess, is_line_ending

    codes = preprocess("$$\\r\\nx")
    assert codes == ["$", "$", "\\r\\n", "x"]
"""

from __future__ import annotations

from typing import Final

Code = str | None

EOF: Final = None

# Indentation beyond this many columns (minus one) is indented code
TAB_SIZE: Final = 4

# Shortest delimiter run that opens a math flow
MIN_FENCE_SIZE: Final = 2

LINE_ENDINGS: frozenset[str] = frozenset({"\n", "\r", "\r\n"})

SPACES: frozenset[str] = frozenset(" \t")


def preprocess(source: str) -> list[str]:
    """Split source into code units.

    Args:
        source: Raw source text

    Returns:
        List of code units; joining them gives back ``source``.
    """
    codes: list[str] = []
    pos = 0
    source_len = len(source)
    while pos < source_len:
        char = source[pos]
        if char == "\r" and pos + 1 < source_len and source[pos + 1] == "\n":
            codes.append("\r\n")
            pos += 2
            continue
        codes.append(char)
        pos += 1
    return codes


def is_line_ending(code: Code) -> bool:
    """Check if code is a line ending (``\\n``, ``\\r`` or ``\\r\\n``)."""
    return code in LINE_ENDINGS


def is_space(code: Code) -> bool:
    """Check if code is a space or tab."""
    return code in SPACES


def is_line_ending_or_eof(code: Code) -> bool:
    return code is None or code in LINE_ENDINGS


def advance_column(column: int, code: str) -> int:
    """Column after a space or tab at ``column`` (0-indexed).

    A tab moves to the next multiple of ``TAB_SIZE``.
    """
    if code == "\t":
        return column + TAB_SIZE - column % TAB_SIZE
    return column + 1


def indent_width(text: str) -> int:
    """Width in columns of leading whitespace text, expanding tabs."""
    column = 0
    for char in text:
        column = advance_column(column, char)
    return column
