"""Span tree built from the flat event log.

Example:
    from mathflow import parse

    doc = parse("$$\\nx\\n$$")
    for node in doc.tree.walk():
        print(node.type.name, repr(node.text(doc.source)))

Thread Safety:
SpanNode is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from mathflow.errors import SpanNestingError
from mathflow.location import Point
from mathflow.tokens import Event, SpanType


@dataclass(frozen=True, slots=True)
class SpanNode:
    """A labeled interval of the source with nested child spans.

    Attributes:
        type: Span label
        start: Point where the span starts
        end: Point where the span ends
        children: Nested spans, in source order

    """

    type: SpanType
    start: Point
    end: Point
    children: tuple[SpanNode, ...] = ()

    def text(self, source: str) -> str:
        """Source text covered by this span."""
        return source[self.start.offset : self.end.offset]

    def walk(self) -> Iterator[SpanNode]:
        """Yield this node and all descendants, depth-first, in source order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def leaves(self) -> Iterator[SpanNode]:
        """Yield descendant spans that have no children."""
        for node in self.walk():
            if not node.children and node is not self:
                yield node

    def find_all(self, span_type: SpanType) -> list[SpanNode]:
        return [node for node in self.walk() if node.type is span_type]

    def __repr__(self) -> str:
        return f"SpanNode({self.type.name}, {self.start}-{self.end}, children={len(self.children)})"


def build_tree(
    events: Iterable[Event],
    *,
    root_type: SpanType = SpanType.DOCUMENT,
    start: Point | None = None,
    end: Point | None = None,
) -> SpanNode:
    """Nest enter/exit pairs into a tree under a synthetic root.

    Args:
        events: Balanced event log
        root_type: Label for the root span
        start: Root start (defaults to the start of the source)
        end: Root end (defaults to the last exit point, or start)

    Returns:
        Root SpanNode.

    Raises:
        SpanNestingError: If the events are not balanced.
    """
    root_start = start if start is not None else Point.start()
    stack: list[tuple[SpanType, Point, list[SpanNode]]] = [(root_type, root_start, [])]
    last = root_start

    for event in events:
        if event.kind == "enter":
            stack.append((event.type, event.point, []))
            continue

        if len(stack) == 1 or stack[-1][0] is not event.type:
            raise SpanNestingError(
                f"unbalanced exit of {event.type.name}",
                line=event.point.line,
                column=event.point.column,
            )
        span_type, span_start, children = stack.pop()
        stack[-1][2].append(SpanNode(span_type, span_start, event.point, tuple(children)))
        last = event.point

    if len(stack) != 1:
        open_type, open_start, _ = stack[-1]
        raise SpanNestingError(
            f"unclosed {open_type.name} span",
            line=open_start.line,
            column=open_start.column,
        )

    return SpanNode(root_type, root_start, end if end is not None else last, tuple(stack[0][2]))
