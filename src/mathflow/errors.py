"""Exception classes for mathflow.

Recognition failures are never exceptions: a construct that does not match
simply hands control back to its caller. These exceptions report misuse of
the tokenizer host (unbalanced spans, consuming outside a span) and invalid
configuration.
"""

from __future__ import annotations


class MathflowError(Exception):
    """Base exception for all mathflow errors.
    
    Subclass this for specific error categories.
    """

    pass


class TokenizeError(MathflowError):
    """A tokenizer host invariant was violated.
    
    Raised when a state function misuses the engine primitives.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize tokenize error with optional location.
        
        Args:
            message: Error description
            line: Line number where error occurred (1-indexed)
            column: Column where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.line = line
        self.column = column
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if line is not None:
            location += f"{line}:"
            if column is not None:
                location += f"{column}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class SpanNestingError(TokenizeError):
    """An exit did not match the innermost open span."""

    pass


class ConfigError(MathflowError):
    """Invalid tokenizer configuration.

    Raised when a TokenizeConfig field has an unusable value.
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize config error.

        Args:
            field: Name of the offending field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"Config '{field}': {message}")
