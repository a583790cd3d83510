"""Tokenizer host for mathflow.

Architecture:
engine/
├── __init__.py          # Re-exports
├── core.py              # Tokenizer (cursor, span log, attempt/check)
├── space.py             # factory_space whitespace-run helper
└── lazy.py              # LazyLines oracle

"""

from mathflow.engine.core import Checkpoint, Tokenizer
from mathflow.engine.lazy import NO_LAZY_LINES, LazyLines
from mathflow.engine.space import factory_space

__all__ = ["Checkpoint", "LazyLines", "NO_LAZY_LINES", "Tokenizer", "factory_space"]
