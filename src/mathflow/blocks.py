"""Math block extraction from a span tree.

Collects the text a downstream compiler would hand to a math renderer.
Rendering itself is out of scope.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mathflow.location import Point
from mathflow.tokens import SpanType
from mathflow.tree import SpanNode

# One line ending at either end of the collected value
_OUTER_LINE_ENDING = re.compile(r"\A(?:\r?\n|\r)|(?:\r?\n|\r)\Z")


@dataclass(frozen=True, slots=True)
class MathBlock:
    """A recognized math flow block.

    Attributes:
        value: Math source, content lines joined by their line endings
        start: Start of the opening fence
        end: End of the block
        fence_size: Length of the opening delimiter run
        closed: Whether a closing fence was found

    """

    value: str
    start: Point
    end: Point
    fence_size: int
    closed: bool


def math_block_from_span(node: SpanNode, source: str) -> MathBlock:
    """Build a MathBlock from a MATH_FLOW span.

    Value spans and line endings after the opening fence are concatenated,
    then at most one leading and one trailing line ending are removed.
    Line prefixes (stripped indentation) are not part of the value.
    """
    if node.type is not SpanType.MATH_FLOW:
        raise ValueError(f"expected a MATH_FLOW span, got {node.type.name}")

    fences = [child for child in node.children if child.type is SpanType.MATH_FLOW_FENCE]
    opening = fences[0]
    sequence = opening.find_all(SpanType.MATH_FLOW_FENCE_SEQUENCE)[0]

    parts = [
        child.text(source)
        for child in node.children
        if child.type in (SpanType.MATH_FLOW_VALUE, SpanType.LINE_ENDING)
    ]

    return MathBlock(
        value=_OUTER_LINE_ENDING.sub("", "".join(parts)),
        start=node.start,
        end=node.end,
        fence_size=sequence.end.offset - sequence.start.offset,
        closed=len(fences) > 1,
    )


def extract_math_blocks(tree: SpanNode, source: str) -> list[MathBlock]:
    """All math blocks in a span tree, in source order."""
    return [math_block_from_span(node, source) for node in tree.find_all(SpanType.MATH_FLOW)]
