"""Tokenizer host: cursor, span log and speculative attempts.

The host owns the code units, the cursor and the event log. Constructs
drive it through a handful of primitives:

- ``consume()`` advances the cursor by one code unit
- ``enter(type)`` / ``exit(type)`` open and close nested spans
- ``attempt(construct, ok, nok)`` runs a construct speculatively and rolls
  back the cursor and event log if it fails
- ``check(construct, ok, nok)`` runs a construct and always rolls back
- ``now()`` reports the current point

Constructs are written as states: callables that take the current code
and return the next state. The host feeds one code at a time, so a run can
be suspended between any two code units (see ``step``).

Thread Safety:
Tokenizer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mathflow.codes import LINE_ENDINGS, Code, preprocess
from mathflow.config import TokenizeConfig
from mathflow.engine.lazy import NO_LAZY_LINES
from mathflow.errors import SpanNestingError, TokenizeError
from mathflow.location import Point
from mathflow.tokens import Event, SpanType

if TYPE_CHECKING:
    from mathflow.protocols import Construct, LazyLineOracle, State

# Consecutive transitions without consuming before the host gives up
_MAX_IDLE_STEPS = 64


@dataclass(frozen=True, slots=True)
class Checkpoint:
    """Snapshot taken before a speculative run.

    Attributes:
        index: Cursor position in the code list
        point: Cursor point at the snapshot
        event_count: Length of the event log
        stack: Open spans as (type, start point) pairs, innermost last

    """

    index: int
    point: Point
    event_count: int
    stack: tuple[tuple[SpanType, Point], ...]


class Tokenizer:
    """Host engine for running constructs over a source string.

    Usage:
        >>> from mathflow.constructs import MathFlow
        >>> engine = Tokenizer("$$\\nx\\n$$")
        >>> engine.run(engine.attempt(MathFlow(), engine.finish, engine.finish))
        >>> engine.now().offset
        7

    """

    __slots__ = (
        "_source",
        "_codes",
        "_codes_len",
        "_index",
        "_line",
        "_column",
        "_offset",
        "_events",
        "_stack",
        "_state",
        "_idle_steps",
        "_source_file",
        "config",
        "lazy",
    )

    def __init__(
        self,
        source: str,
        *,
        config: TokenizeConfig | None = None,
        lazy: LazyLineOracle | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize the host with source text.

        Args:
            source: Source text
            config: Tokenize configuration (marker, disabled constructs)
            lazy: Oracle for lazy continuation lines
            source_file: Optional source file path for error messages
        """
        self._source = source
        self._codes = preprocess(source)
        self._codes_len = len(self._codes)
        self._index = 0
        self._line = 1
        self._column = 1
        self._offset = 0
        self._events: list[Event] = []
        self._stack: list[tuple[SpanType, Point]] = []
        self._state: State | None = None
        self._idle_steps = 0
        self._source_file = source_file
        self.config = config if config is not None else TokenizeConfig()
        self.lazy = lazy if lazy is not None else NO_LAZY_LINES

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def source(self) -> str:
        return self._source

    @property
    def events(self) -> list[Event]:
        """The event log. Treat as read-only."""
        return self._events

    @property
    def current(self) -> Code:
        """Code at the cursor, or None at end of input."""
        if self._index >= self._codes_len:
            return None
        return self._codes[self._index]

    @property
    def depth(self) -> int:
        """Number of currently open spans."""
        return len(self._stack)

    @property
    def done(self) -> bool:
        return self._state is None

    def now(self) -> Point:
        """Current point of the cursor."""
        return Point(self._line, self._column, self._offset)

    def tail(self) -> Event | None:
        """Last event in the log, if any."""
        return self._events[-1] if self._events else None

    def slice(self, start: Point, end: Point) -> str:
        """Source text between two points."""
        return self._source[start.offset : end.offset]

    # =========================================================================
    # Primitives
    # =========================================================================

    def consume(self) -> str:
        """Advance the cursor by one code unit, attaching it to the open span.

        Returns:
            The consumed code unit.

        Raises:
            TokenizeError: If no span is open or the input is exhausted.
        """
        if not self._stack:
            raise self._error("cannot consume outside of a span")
        if self._index >= self._codes_len:
            raise self._error("cannot consume past end of input")

        code = self._codes[self._index]
        self._index += 1
        self._offset += len(code)
        self._idle_steps = 0

        if code in LINE_ENDINGS:
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return code

    def enter(self, span_type: SpanType) -> None:
        """Open a span at the current point."""
        point = self.now()
        self._stack.append((span_type, point))
        self._events.append(Event("enter", span_type, point))

    def exit(self, span_type: SpanType) -> None:
        """Close the innermost span, which must be of span_type.

        Raises:
            SpanNestingError: If span_type is not the innermost open span.
            TokenizeError: If the span would be empty.
        """
        if not self._stack:
            raise self._error(f"cannot exit {span_type.name}: no open span", SpanNestingError)

        open_type, start = self._stack[-1]
        if open_type is not span_type:
            raise self._error(
                f"cannot exit {span_type.name}: innermost open span is {open_type.name}",
                SpanNestingError,
            )

        end = self.now()
        if end.offset == start.offset:
            raise self._error(f"empty {span_type.name} span")

        self._stack.pop()
        self._events.append(Event("exit", span_type, end))

    def checkpoint(self) -> Checkpoint:
        """Snapshot cursor, event log length and open spans."""
        return Checkpoint(
            index=self._index,
            point=self.now(),
            event_count=len(self._events),
            stack=tuple(self._stack),
        )

    def restore(self, checkpoint: Checkpoint) -> None:
        """Roll back to a checkpoint, discarding everything recorded since."""
        self._index = checkpoint.index
        self._line = checkpoint.point.line
        self._column = checkpoint.point.column
        self._offset = checkpoint.point.offset
        del self._events[checkpoint.event_count :]
        self._stack[:] = checkpoint.stack

    def attempt(self, construct: Construct, ok: State, nok: State) -> State:
        """Run construct speculatively.

        On success the construct's spans and consumed codes are kept and
        ``ok`` continues at the new cursor. On failure the cursor and event
        log are restored and ``nok`` continues where the attempt started.

        Returns:
            A state that starts the attempt at the current code.
        """
        return self._speculate(construct, ok, nok, keep=True)

    def check(self, construct: Construct, ok: State, nok: State) -> State:
        """Run construct and always roll back; only the outcome is used."""
        return self._speculate(construct, ok, nok, keep=False)

    def _speculate(self, construct: Construct, ok: State, nok: State, *, keep: bool) -> State:
        def start(code: Code) -> State | None:
            checkpoint = self.checkpoint()

            def on_ok(code: Code) -> State | None:
                if not keep:
                    self.restore(checkpoint)
                return ok

            def on_nok(code: Code) -> State | None:
                self.restore(checkpoint)
                return nok

            return construct.tokenize(self, on_ok, on_nok)(code)

        return start

    # =========================================================================
    # Driving
    # =========================================================================

    def step(self) -> bool:
        """Feed the current code to the current state once.

        Returns:
            True if there is more work to do.

        Raises:
            TokenizeError: If states keep passing the same code around
                without consuming it.
        """
        if self._state is None:
            return False

        index = self._index
        self._state = self._state(self.current)

        if self._index == index:
            self._idle_steps += 1
            if self._idle_steps > _MAX_IDLE_STEPS:
                raise self._error("state machine made no progress")

        return self._state is not None

    def begin(self, state: State) -> None:
        """Set the state to feed the current code to; drive with ``step``."""
        self._state = state
        self._idle_steps = 0

    def run(self, state: State) -> None:
        """Run from state until a state returns None."""
        self.begin(state)
        while self.step():
            pass

    def finish(self, code: Code) -> None:
        """Terminal state: stop the run without consuming."""
        return None

    def _error(self, message: str, error_class: type[TokenizeError] = TokenizeError) -> TokenizeError:
        return error_class(
            message,
            line=self._line,
            column=self._column,
            source_file=self._source_file,
        )
