"""Span types and events produced by the tokenizer.

The tokenizer writes a flat log of enter/exit events. Each enter is matched
by an exit of the same type; nesting the pairs gives the span tree
(see ``mathflow.tree``).

Thread Safety:
Event is frozen (immutable) and safe to share across threads.
SpanType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from mathflow.location import Point


class SpanType(Enum):
    """Labels for spans in the token tree.

    Math flow spans:
    - MATH_FLOW: the whole block
    - MATH_FLOW_FENCE: an opening or closing fence
    - MATH_FLOW_FENCE_SEQUENCE: the delimiter run inside a fence
    - MATH_FLOW_VALUE: a run of content characters

    Host spans are shared with everything else on the line.

    """

    # Document structure
    DOCUMENT = "document"
    DATA = "data"

    # Math flow
    MATH_FLOW = "mathFlow"
    MATH_FLOW_FENCE = "mathFlowFence"
    MATH_FLOW_FENCE_SEQUENCE = "mathFlowFenceSequence"
    MATH_FLOW_VALUE = "mathFlowValue"

    # Host-provided
    LINE_ENDING = "lineEnding"
    LINE_PREFIX = "linePrefix"
    WHITESPACE = "whitespace"


EventKind = Literal["enter", "exit"]


@dataclass(frozen=True, slots=True)
class Event:
    """One entry in the event log.

    Attributes:
        kind: "enter" or "exit"
        type: The span being opened or closed
        point: Start point for "enter", end point for "exit"

    """

    kind: EventKind
    type: SpanType
    point: Point

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        return f"Event({self.kind}, {self.type.name}, {self.point})"
