"""
mathflow — tolerant ``$$`` math block tokenizer

Recognizes fenced math blocks in line-structured text and decomposes them
into a labeled span tree. Besides the classic layout it accepts content on
the opening fence line (``$$x``) and a closing fence glued to the end of a
content line (``x$$``).

Quick Start:
    >>> from mathflow import parse
    >>> doc = parse("$$\\nE = mc^2\\n$$")
    >>> doc.math_blocks()[0].value
    'E = mc^2'

    >>> from mathflow import recognize
    >>> recognize("$$some math\\n$$").block.value
    'some math'
    >>> recognize("$a$").recognized
    False

Lower level:
    >>> from mathflow import MathFlow, Tokenizer
    >>> engine = Tokenizer("$$\\nx\\n$$")
    >>> engine.run(engine.attempt(MathFlow(), engine.finish, engine.finish))

Installation:
    pip install mathflow              # zero runtime dependencies
"""

from mathflow.blocks import MathBlock, extract_math_blocks, math_block_from_span
from mathflow.config import (
    TokenizeConfig,
    get_tokenize_config,
    reset_tokenize_config,
    set_tokenize_config,
    tokenize_config_context,
)
from mathflow.constructs import (
    MathFlow,
    MidlineClosingFence,
    NonLazyContinuation,
    StrictClosingFence,
)
from mathflow.document import Document, Recognition, parse, recognize
from mathflow.engine import LazyLines, Tokenizer, factory_space
from mathflow.errors import ConfigError, MathflowError, SpanNestingError, TokenizeError
from mathflow.location import Point
from mathflow.tokens import Event, SpanType
from mathflow.tree import SpanNode, build_tree

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Document",
    "Event",
    "LazyLines",
    "MathBlock",
    "MathFlow",
    "MathflowError",
    "MidlineClosingFence",
    "NonLazyContinuation",
    "Point",
    "Recognition",
    "SpanNestingError",
    "SpanNode",
    "SpanType",
    "StrictClosingFence",
    "TokenizeConfig",
    "TokenizeError",
    "Tokenizer",
    "build_tree",
    "extract_math_blocks",
    "factory_space",
    "get_tokenize_config",
    "math_block_from_span",
    "parse",
    "recognize",
    "reset_tokenize_config",
    "set_tokenize_config",
    "tokenize_config_context",
]
