"""Closing-fence matchers.

Two independent partial constructs, both built with the opening fence size
passed in explicitly:

- StrictClosingFence: at a line boundary. Allows bounded indentation,
  then a delimiter run, then only whitespace up to the line ending.
- MidlineClosingFence: at the current column inside a content line. A
  delimiter run long enough closes the block; whatever follows on the line
  is left for the caller.

Both run inside ``attempt``, so a failed match leaves no trace.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mathflow.codes import TAB_SIZE, Code, is_line_ending_or_eof
from mathflow.engine.space import factory_space
from mathflow.tokens import SpanType

if TYPE_CHECKING:
    from mathflow.engine.core import Tokenizer
    from mathflow.protocols import State


class StrictClosingFence:
    """Closing fence that must occupy its own line.

    Attributes:
        size_open: Length of the opening delimiter run
        marker: Delimiter character
        max_indent: Bound passed to the line-prefix helper (``TAB_SIZE``
            allows up to three columns); None when indented code is disabled

    """

    __slots__ = ("size_open", "marker", "max_indent")

    name = "mathFlowClosingFence"

    def __init__(self, size_open: int, *, marker: str = "$", max_indent: int | None = TAB_SIZE) -> None:
        self.size_open = size_open
        self.marker = marker
        self.max_indent = max_indent

    def tokenize(self, engine: Tokenizer, ok: State, nok: State) -> State:
        marker = self.marker
        size_open = self.size_open
        size = 0

        def before_sequence_close(code: Code) -> State | None:
            if code != marker:
                return nok(code)
            engine.enter(SpanType.MATH_FLOW_FENCE)
            engine.enter(SpanType.MATH_FLOW_FENCE_SEQUENCE)
            return sequence_close(code)

        def sequence_close(code: Code) -> State | None:
            nonlocal size
            if code == marker:
                size += 1
                engine.consume()
                return sequence_close

            if size < size_open:
                return nok(code)

            engine.exit(SpanType.MATH_FLOW_FENCE_SEQUENCE)
            return factory_space(engine, after_sequence_close, SpanType.WHITESPACE)(code)

        def after_sequence_close(code: Code) -> State | None:
            if is_line_ending_or_eof(code):
                engine.exit(SpanType.MATH_FLOW_FENCE)
                return ok(code)
            return nok(code)

        return factory_space(engine, before_sequence_close, SpanType.LINE_PREFIX, self.max_indent)


class MidlineClosingFence:
    """Closing fence matched at the cursor, anywhere on a content line.

    No indentation is skipped and nothing is required after the run.

    """

    __slots__ = ("size_open", "marker")

    name = "mathFlowClosingFenceMidline"

    def __init__(self, size_open: int, *, marker: str = "$") -> None:
        self.size_open = size_open
        self.marker = marker

    def tokenize(self, engine: Tokenizer, ok: State, nok: State) -> State:
        marker = self.marker
        size_open = self.size_open
        size = 0

        def sequence_start(code: Code) -> State | None:
            if code != marker:
                return nok(code)
            engine.enter(SpanType.MATH_FLOW_FENCE)
            engine.enter(SpanType.MATH_FLOW_FENCE_SEQUENCE)
            return sequence_close(code)

        def sequence_close(code: Code) -> State | None:
            nonlocal size
            if code == marker:
                size += 1
                engine.consume()
                return sequence_close

            if size < size_open:
                return nok(code)

            engine.exit(SpanType.MATH_FLOW_FENCE_SEQUENCE)
            engine.exit(SpanType.MATH_FLOW_FENCE)
            return ok(code)

        return sequence_start
