"""Protocols for mathflow.

Defines the contracts between the tokenizer host and the constructs it runs.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, TypeAlias

if TYPE_CHECKING:
    from mathflow.codes import Code
    from mathflow.engine.core import Tokenizer

# A state takes the current code and returns the next state, or None to stop.
# A state that does not consume is fed the same code again.
State: TypeAlias = "Callable[[Code], State | None]"


class Construct(Protocol):
    """A recognizer the host can run with ``attempt`` or ``check``.

    Thread Safety:
        Implementations hold only read-only construction parameters.
        Per-run state lives in the objects created by ``tokenize``.

    """

    @property
    def name(self) -> str:
        """Name used for logging and the disabled-construct registry."""
        ...

    def tokenize(self, engine: Tokenizer, ok: State, nok: State) -> State:
        """Return the start state of this construct.

        Args:
            engine: Host providing consume/enter/exit/attempt/now
            ok: State to continue with on success
            nok: State to continue with on failure

        Returns:
            The first state to feed the current code to.
        """
        ...


class LazyLineOracle(Protocol):
    """Answers whether a line belongs to a shallower enclosing construct."""

    def is_lazy(self, line: int) -> bool:
        """Check if line (1-indexed) is a lazy continuation."""
        ...
