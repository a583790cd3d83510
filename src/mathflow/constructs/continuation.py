"""Lazy-continuation guard.

Runs at every line boundary inside a math flow. It consumes the line
ending and then asks the lazy-line oracle about the line that starts
there. A lazy line belongs to a shallower enclosing construct, so the
guard fails and the attempt rolls back to before the line ending.
End of input always passes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mathflow.codes import Code, is_line_ending
from mathflow.tokens import SpanType
from mathflow.utils.logger import get_logger

if TYPE_CHECKING:
    from mathflow.engine.core import Tokenizer
    from mathflow.protocols import LazyLineOracle, State

logger = get_logger(__name__)


class NonLazyContinuation:
    """Partial construct: succeed when the next line may continue the block."""

    __slots__ = ("_lazy",)

    name = "nonLazyContinuation"

    def __init__(self, lazy: LazyLineOracle) -> None:
        self._lazy = lazy

    def tokenize(self, engine: Tokenizer, ok: State, nok: State) -> State:
        lazy = self._lazy

        def start(code: Code) -> State | None:
            if code is None:
                return ok(code)
            if not is_line_ending(code):
                return nok(code)
            engine.enter(SpanType.LINE_ENDING)
            engine.consume()
            engine.exit(SpanType.LINE_ENDING)
            return line_start

        def line_start(code: Code) -> State | None:
            line = engine.now().line
            if lazy.is_lazy(line):
                logger.debug("Line %d is a lazy continuation; ending math flow", line)
                return nok(code)
            return ok(code)

        return start
