"""Content scanner mixin.

Scans math content one line at a time. Content spans cover maximal runs of
ordinary characters. A delimiter anywhere on the line starts a midline
closing-fence attempt; a failed attempt gives the delimiter back as
content and scanning resumes right after it. At each line ending the
lazy-continuation guard runs, then the strict closing fence, and only then
is the next line treated as content.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mathflow.codes import Code, is_line_ending, is_line_ending_or_eof
from mathflow.engine.space import factory_space
from mathflow.tokens import SpanType

if TYPE_CHECKING:
    from mathflow.constructs.closing import MidlineClosingFence, StrictClosingFence
    from mathflow.constructs.continuation import NonLazyContinuation
    from mathflow.engine.core import Tokenizer
    from mathflow.protocols import State


class ContentScannerMixin:
    """Mixin providing math content states."""

    __slots__ = ()

    # These will be set by the MathFlowTokenizer class
    engine: Tokenizer
    marker: str
    initial_size: int
    strict_fence: StrictClosingFence
    midline_fence: MidlineClosingFence
    continuation: NonLazyContinuation

    def after(self, code: Code) -> State | None:
        raise NotImplementedError

    def before_non_lazy_continuation(self, code: Code) -> State | None:
        """At the start of a line that belongs to the block."""
        return self.engine.attempt(self.strict_fence, self.after, self.content_start)(code)

    def content_start(self, code: Code) -> State | None:
        """Before content, definitely not before a closing fence."""
        if self.initial_size:
            return factory_space(
                self.engine,
                self.before_content_chunk,
                SpanType.LINE_PREFIX,
                self.initial_size + 1,
            )(code)
        return self.before_content_chunk(code)

    def before_content_chunk(self, code: Code) -> State | None:
        """Before content on a line, after the optional prefix."""
        if code is None:
            return self.after(code)

        if is_line_ending(code):
            return self.engine.attempt(
                self.continuation,
                self.before_non_lazy_continuation,
                self.after,
            )(code)

        return self.content_chunk_start(code)

    def content_chunk_start(self, code: Code) -> State | None:
        """At a content character with no value span open."""
        if code == self.marker:
            return self.attempt_closing_fence_midline(code)
        self.engine.enter(SpanType.MATH_FLOW_VALUE)
        return self.content_chunk(code)

    def content_chunk(self, code: Code) -> State | None:
        """Inside a value span."""
        if code == self.marker:
            self.engine.exit(SpanType.MATH_FLOW_VALUE)
            return self.attempt_closing_fence_midline(code)

        if is_line_ending_or_eof(code):
            self.engine.exit(SpanType.MATH_FLOW_VALUE)
            return self.before_content_chunk(code)

        self.engine.consume()
        return self.content_chunk

    def attempt_closing_fence_midline(self, code: Code) -> State | None:
        return self.engine.attempt(
            self.midline_fence,
            self.after,
            self.failed_midline_attempt,
        )(code)

    def failed_midline_attempt(self, code: Code) -> State | None:
        """Not a fence: the delimiter is content."""
        self.engine.enter(SpanType.MATH_FLOW_VALUE)
        self.engine.consume()
        return self.content_chunk
