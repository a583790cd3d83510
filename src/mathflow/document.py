"""Document host: run math flow at every line start.

A deliberately small host. Each line is either the start of a math flow
or a text line recorded as a DATA span, so every character of the input
ends up in exactly one leaf span. A math flow that starts right after a
text line is first probed with ``interrupt=True`` (the way a paragraph
would be interrupted) and then tokenized for real.

Usage:
    >>> from mathflow import parse
    >>> doc = parse("Some text\\n\\n$$\\nE = mc^2\\n$$\\n")
    >>> [block.value for block in doc.math_blocks()]
    ['E = mc^2']

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from mathflow.blocks import MathBlock, extract_math_blocks
from mathflow.codes import TAB_SIZE, Code, is_line_ending_or_eof
from mathflow.config import TokenizeConfig, get_tokenize_config
from mathflow.constructs import MathFlow
from mathflow.engine.core import Tokenizer
from mathflow.engine.lazy import LazyLines
from mathflow.engine.space import factory_space
from mathflow.location import Point
from mathflow.protocols import LazyLineOracle, State
from mathflow.tokens import Event, SpanType
from mathflow.tree import SpanNode, build_tree
from mathflow.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Document:
    """Result of scanning a whole source.

    Attributes:
        source: The scanned text
        events: Balanced event log covering the whole source
        end: Point after the last code unit
        source_file: Optional source file path

    """

    source: str
    events: tuple[Event, ...]
    end: Point
    source_file: str | None = None

    @property
    def tree(self) -> SpanNode:
        """Span tree under a DOCUMENT root covering the whole source."""
        return build_tree(self.events, end=self.end)

    def math_blocks(self) -> list[MathBlock]:
        return extract_math_blocks(self.tree, self.source)


@dataclass(frozen=True, slots=True)
class Recognition:
    """Result of a single math flow attempt at the start of a source.

    Attributes:
        source: The scanned text
        recognized: Whether a math flow was recognized
        events: Events kept by the attempt (empty when not recognized,
            apart from a leading line prefix)
        end: Cursor position after the attempt

    """

    source: str
    recognized: bool
    events: tuple[Event, ...]
    end: Point

    @property
    def tree(self) -> SpanNode:
        return build_tree(self.events, end=self.end)

    @property
    def block(self) -> MathBlock | None:
        blocks = extract_math_blocks(self.tree, self.source)
        return blocks[0] if blocks else None


class DocumentScanner:
    """Line-walking host states.

    Tracks only whether the previous line was a text line, which decides
    whether a math flow starting on the next line interrupts it.

    """

    __slots__ = ("engine", "_in_paragraph", "_prefix_max")

    def __init__(self, engine: Tokenizer) -> None:
        self.engine = engine
        self._in_paragraph = False
        self._prefix_max = None if engine.config.code_indented_disabled else TAB_SIZE

    def line_start(self, code: Code) -> State | None:
        if code is None:
            return None
        return factory_space(self.engine, self.flow_start, SpanType.LINE_PREFIX, self._prefix_max)(code)

    def flow_start(self, code: Code) -> State | None:
        if code != self.engine.config.marker:
            return self.text_start(code)
        if self._in_paragraph:
            return self.engine.check(MathFlow(interrupt=True), self.math_flow_start, self.text_start)(code)
        return self.math_flow_start(code)

    def math_flow_start(self, code: Code) -> State | None:
        return self.engine.attempt(MathFlow(), self.after_math_flow, self.text_start)(code)

    def after_math_flow(self, code: Code) -> State | None:
        self._in_paragraph = False
        logger.debug("Math flow ends at %s", self.engine.now())
        if is_line_ending_or_eof(code):
            return self.line_end(code)
        # Text after a midline closing fence
        return self.text_start(code)

    def text_start(self, code: Code) -> State | None:
        if is_line_ending_or_eof(code):
            self._in_paragraph = False
            return self.line_end(code)
        self._in_paragraph = True
        self.engine.enter(SpanType.DATA)
        return self.text(code)

    def text(self, code: Code) -> State | None:
        if is_line_ending_or_eof(code):
            self.engine.exit(SpanType.DATA)
            return self.line_end(code)
        self.engine.consume()
        return self.text

    def line_end(self, code: Code) -> State | None:
        if code is None:
            return None
        self.engine.enter(SpanType.LINE_ENDING)
        self.engine.consume()
        self.engine.exit(SpanType.LINE_ENDING)
        return self.line_start


def parse(
    source: str,
    *,
    config: TokenizeConfig | None = None,
    lazy_lines: Iterable[int] | LazyLineOracle = (),
    source_file: str | None = None,
) -> Document:
    """Scan a whole source for math flow blocks.

    Args:
        source: Source text
        config: Tokenize configuration (defaults to the ambient config)
        lazy_lines: Line numbers (or an oracle) marking lazy continuations
        source_file: Optional source file path for error messages

    Returns:
        Document with the full event log.
    """
    engine = _make_engine(source, config, lazy_lines, source_file)
    engine.run(DocumentScanner(engine).line_start)
    return Document(
        source=source,
        events=tuple(engine.events),
        end=engine.now(),
        source_file=source_file,
    )


def recognize(
    source: str,
    *,
    config: TokenizeConfig | None = None,
    lazy_lines: Iterable[int] | LazyLineOracle = (),
    interrupt: bool = False,
    source_file: str | None = None,
) -> Recognition:
    """Try math flow once, at the start of source.

    Leading indentation is recorded as a line prefix first (bounded like a
    document line start), so the block knows its opening indent.

    Args:
        source: Source text
        config: Tokenize configuration (defaults to the ambient config)
        lazy_lines: Line numbers (or an oracle) marking lazy continuations
        interrupt: Whether the block interrupts a looser construct
        source_file: Optional source file path for error messages

    Returns:
        Recognition describing the outcome.
    """
    engine = _make_engine(source, config, lazy_lines, source_file)
    recognized = False

    def done(code: Code) -> State | None:
        nonlocal recognized
        recognized = True
        return None

    flow = engine.attempt(MathFlow(interrupt=interrupt), done, engine.finish)
    prefix_max = None if engine.config.code_indented_disabled else TAB_SIZE
    engine.run(factory_space(engine, flow, SpanType.LINE_PREFIX, prefix_max))

    logger.debug("Math flow %s at start of source", "recognized" if recognized else "not recognized")
    return Recognition(
        source=source,
        recognized=recognized,
        events=tuple(engine.events),
        end=engine.now(),
    )


def _make_engine(
    source: str,
    config: TokenizeConfig | None,
    lazy_lines: Iterable[int] | LazyLineOracle,
    source_file: str | None,
) -> Tokenizer:
    lazy = lazy_lines if hasattr(lazy_lines, "is_lazy") else LazyLines(lazy_lines)
    return Tokenizer(
        source,
        config=config if config is not None else get_tokenize_config(),
        lazy=lazy,
        source_file=source_file,
    )

