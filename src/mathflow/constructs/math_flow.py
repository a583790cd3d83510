"""Math flow construct: a ``$$`` fenced math block.

Block layout handled here:

    $$            opening fence (two or more delimiters)
    content       any number of content lines
    $$            closing fence (at least as many delimiters)

plus two layouts strict fence scanners reject:

    $$content     content on the opening fence line
    content$$     closing fence glued to the end of content; anything after
                  the closing run on that line is left outside the block

Span tree produced for ``$$\\nx\\n$$``:

    mathFlow
    ├── mathFlowFence
    │   └── mathFlowFenceSequence   "$$"
    ├── lineEnding                  "\\n"
    ├── mathFlowValue               "x"
    ├── lineEnding                  "\\n"
    └── mathFlowFence
        └── mathFlowFenceSequence   "$$"

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mathflow.codes import TAB_SIZE, Code, indent_width
from mathflow.constructs.content import ContentScannerMixin
from mathflow.constructs.continuation import NonLazyContinuation
from mathflow.constructs.opening import OpeningFenceMixin
from mathflow.tokens import SpanType

if TYPE_CHECKING:
    from mathflow.constructs.closing import MidlineClosingFence, StrictClosingFence
    from mathflow.engine.core import Tokenizer
    from mathflow.protocols import LazyLineOracle, State


class MathFlow:
    """Construct descriptor for math flow.

    Holds only construction parameters; each run gets its own
    MathFlowTokenizer.

    Attributes:
        interrupt: The block is being tried while interrupting a looser
            construct (no blank line before it). An opening fence with
            nothing after it then ends the block immediately.

    """

    __slots__ = ("interrupt",)

    name = "mathFlow"
    concrete = True

    def __init__(self, *, interrupt: bool = False) -> None:
        self.interrupt = interrupt

    def tokenize(self, engine: Tokenizer, ok: State, nok: State) -> State:
        config = engine.config
        return MathFlowTokenizer(
            engine,
            ok,
            nok,
            marker=config.marker,
            initial_size=_line_prefix_size(engine),
            interrupt=self.interrupt,
            lazy=engine.lazy,
            max_fence_indent=None if config.code_indented_disabled else TAB_SIZE,
        ).start

    def __repr__(self) -> str:
        return f"MathFlow(interrupt={self.interrupt})"


def _line_prefix_size(engine: Tokenizer) -> int:
    """Columns of indentation recorded by the host right before the opening fence."""
    events = engine.events
    tail = engine.tail()
    if (
        tail is None
        or tail.kind != "exit"
        or tail.type is not SpanType.LINE_PREFIX
        or tail.point != engine.now()
    ):
        return 0
    start = events[-2].point
    return indent_width(engine.slice(start, tail.point))


class MathFlowTokenizer(ContentScannerMixin, OpeningFenceMixin):
    """States for one math flow run.

    Fence size is fixed when the opening run ends; both closing matchers are
    built from it then. Nothing here outlives the run.

    """

    __slots__ = (
        "engine",
        "ok",
        "nok",
        "marker",
        "initial_size",
        "interrupt",
        "max_fence_indent",
        "size_open",
        "strict_fence",
        "midline_fence",
        "continuation",
    )

    strict_fence: StrictClosingFence
    midline_fence: MidlineClosingFence

    def __init__(
        self,
        engine: Tokenizer,
        ok: State,
        nok: State,
        *,
        marker: str,
        initial_size: int,
        interrupt: bool,
        lazy: LazyLineOracle,
        max_fence_indent: int | None,
    ) -> None:
        self.engine = engine
        self.ok = ok
        self.nok = nok
        self.marker = marker
        self.initial_size = initial_size
        self.interrupt = interrupt
        self.max_fence_indent = max_fence_indent
        self.size_open = 0
        self.continuation = NonLazyContinuation(lazy)

    def after(self, code: Code) -> State | None:
        """Close the block and hand control back to the caller."""
        self.engine.exit(SpanType.MATH_FLOW)
        return self.ok(code)
