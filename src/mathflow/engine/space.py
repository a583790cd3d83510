"""Whitespace-run helper shared by constructs and the document host."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mathflow.codes import Code, advance_column, is_space

if TYPE_CHECKING:
    from mathflow.engine.core import Tokenizer
    from mathflow.protocols import State
    from mathflow.tokens import SpanType


def factory_space(
    engine: Tokenizer,
    ok: State,
    span_type: SpanType,
    max_size: int | None = None,
) -> State:
    """Build a state that consumes a run of spaces and tabs into one span.

    The run may cover at most ``max_size - 1`` columns, so ``max_size=4``
    allows up to three columns of indentation. Columns are counted from
    where the run starts; a tab advances to the next multiple of
    ``TAB_SIZE``. A tab that would cross the bound ends the run unconsumed.
    ``None`` means unbounded. Nothing is emitted when there is no space to
    consume.

    Args:
        engine: Tokenizer host
        ok: State to continue with after the run
        span_type: Label for the whitespace span
        max_size: Bound on the run, exclusive of the last column

    Returns:
        Start state of the helper.
    """
    limit = None if max_size is None else max_size - 1
    column = 0

    def fits(code: Code) -> bool:
        return is_space(code) and (limit is None or advance_column(column, code) <= limit)

    def start(code: Code) -> State | None:
        if fits(code):
            engine.enter(span_type)
            return prefix(code)
        return ok(code)

    def prefix(code: Code) -> State | None:
        nonlocal column
        if fits(code):
            column = advance_column(column, code)
            engine.consume()
            return prefix
        engine.exit(span_type)
        return ok(code)

    return start
