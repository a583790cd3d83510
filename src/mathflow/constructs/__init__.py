"""The math flow recognizer and its partial constructs.

Architecture:
constructs/
├── __init__.py          # Re-exports
├── math_flow.py         # MathFlow construct, MathFlowTokenizer
├── opening.py           # Fence-open detector (mixin)
├── content.py           # Content scanner (mixin)
├── closing.py           # Strict and midline closing fences
└── continuation.py      # Lazy-continuation guard

"""

from mathflow.constructs.closing import MidlineClosingFence, StrictClosingFence
from mathflow.constructs.continuation import NonLazyContinuation
from mathflow.constructs.math_flow import MathFlow, MathFlowTokenizer

__all__ = [
    "MathFlow",
    "MathFlowTokenizer",
    "MidlineClosingFence",
    "NonLazyContinuation",
    "StrictClosingFence",
]
