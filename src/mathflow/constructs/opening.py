"""Fence-open detector mixin."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mathflow.codes import MIN_FENCE_SIZE, Code, is_line_ending_or_eof
from mathflow.constructs.closing import MidlineClosingFence, StrictClosingFence
from mathflow.engine.space import factory_space
from mathflow.tokens import SpanType

if TYPE_CHECKING:
    from mathflow.constructs.continuation import NonLazyContinuation
    from mathflow.engine.core import Tokenizer
    from mathflow.protocols import State


class OpeningFenceMixin:
    """Mixin providing the opening fence states.

    Recognizes a run of at least two delimiters, records its size, skips
    trailing whitespace and then either starts content on the same line or
    moves on to the first line boundary.

    """

    __slots__ = ()

    # These will be set by the MathFlowTokenizer class
    engine: Tokenizer
    ok: State
    nok: State
    marker: str
    interrupt: bool
    max_fence_indent: int | None
    size_open: int
    strict_fence: StrictClosingFence
    midline_fence: MidlineClosingFence
    continuation: NonLazyContinuation

    def after(self, code: Code) -> State | None:
        raise NotImplementedError

    def before_non_lazy_continuation(self, code: Code) -> State | None:
        raise NotImplementedError

    def content_chunk_start(self, code: Code) -> State | None:
        raise NotImplementedError

    def start(self, code: Code) -> State | None:
        """Start of math, at the first delimiter."""
        if code != self.marker:
            return self.nok(code)
        self.engine.enter(SpanType.MATH_FLOW)
        self.engine.enter(SpanType.MATH_FLOW_FENCE)
        self.engine.enter(SpanType.MATH_FLOW_FENCE_SEQUENCE)
        return self.sequence_open(code)

    def sequence_open(self, code: Code) -> State | None:
        """In the opening delimiter run."""
        if code == self.marker:
            self.engine.consume()
            self.size_open += 1
            return self.sequence_open

        if self.size_open < MIN_FENCE_SIZE:
            return self.nok(code)

        self.strict_fence = StrictClosingFence(
            self.size_open, marker=self.marker, max_indent=self.max_fence_indent
        )
        self.midline_fence = MidlineClosingFence(self.size_open, marker=self.marker)

        self.engine.exit(SpanType.MATH_FLOW_FENCE_SEQUENCE)
        return factory_space(self.engine, self.meta_before, SpanType.WHITESPACE)(code)

    def meta_before(self, code: Code) -> State | None:
        """After the opening run and its whitespace.

        Anything left on the line is content, so ``$$x`` opens a block
        whose first content chunk is ``x``.
        """
        if not is_line_ending_or_eof(code):
            self.engine.exit(SpanType.MATH_FLOW_FENCE)
            return self.content_chunk_start(code)
        return self.meta_after(code)

    def meta_after(self, code: Code) -> State | None:
        """At the end of an opening fence line with nothing after the run."""
        self.engine.exit(SpanType.MATH_FLOW_FENCE)

        # Interrupting: the block is just the fence
        if self.interrupt:
            return self.after(code)

        return self.engine.attempt(
            self.continuation,
            self.before_non_lazy_continuation,
            self.after,
        )(code)
