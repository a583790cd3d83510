"""ContextVar-based tokenize configuration for mathflow.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The public API reads the ambient config once and then passes it explicitly
to the tokenizer and every construct it runs; nothing below the API
boundary looks at the ContextVar.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from mathflow import parse
    from mathflow.config import TokenizeConfig, tokenize_config_context

    with tokenize_config_context(TokenizeConfig(disabled_constructs={"codeIndented"})):
        doc = parse("        $$\\nx\\n$$")

"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field

from mathflow.codes import LINE_ENDINGS, SPACES
from mathflow.errors import ConfigError

# Name of the indented code construct in the disabled registry
CODE_INDENTED = "codeIndented"


@dataclass(frozen=True, slots=True)
class TokenizeConfig:
    """Immutable tokenize configuration.

    Note: source_file is intentionally excluded. It is per-call state,
    not configuration.

    Attributes:
        marker: Delimiter character that makes up fences
        disabled_constructs: Names of sibling constructs that are turned off.
            Only "codeIndented" changes math flow behavior: when disabled,
            closing fences and line prefixes may be indented without bound.

    """

    marker: str = "$"
    disabled_constructs: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if len(self.marker) != 1:
            raise ConfigError("marker", f"expected a single character, got {self.marker!r}")
        if self.marker in SPACES or self.marker in LINE_ENDINGS:
            raise ConfigError("marker", "must not be whitespace or a line ending")
        if not isinstance(self.disabled_constructs, frozenset):
            object.__setattr__(self, "disabled_constructs", frozenset(self.disabled_constructs))

    @property
    def code_indented_disabled(self) -> bool:
        """Whether indentation before fences is unbounded."""
        return CODE_INDENTED in self.disabled_constructs

    @classmethod
    def from_dict(cls, config_dict: dict) -> "TokenizeConfig":
        """Create TokenizeConfig from dictionary.

        Only includes keys that are valid TokenizeConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                TokenizeConfig attribute names.

        Returns:
            New TokenizeConfig instance with values from dict.

        Example:
            >>> config = TokenizeConfig.from_dict({
            ...     "disabled_constructs": ["codeIndented"],
            ...     "unknown_key": "ignored",
            ... })
            >>> config.code_indented_disabled
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        disabled = filtered.get("disabled_constructs")
        if isinstance(disabled, str):
            filtered["disabled_constructs"] = frozenset({disabled})
        elif isinstance(disabled, Iterable):
            filtered["disabled_constructs"] = frozenset(disabled)
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: TokenizeConfig = TokenizeConfig()

_tokenize_config: ContextVar[TokenizeConfig] = ContextVar(
    "tokenize_config",
    default=_DEFAULT_CONFIG,
)


def get_tokenize_config() -> TokenizeConfig:
    """Get current tokenize configuration (thread-local).

    Returns:
        The active TokenizeConfig for this thread/context.

    """
    return _tokenize_config.get()


def set_tokenize_config(config: TokenizeConfig) -> None:
    """Set tokenize configuration for current context.

    Args:
        config: TokenizeConfig instance to use for this context.

    """
    _tokenize_config.set(config)


def reset_tokenize_config() -> None:
    """Reset to default configuration."""
    _tokenize_config.set(_DEFAULT_CONFIG)


@contextmanager
def tokenize_config_context(config: TokenizeConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: TokenizeConfig to use within the context.

    Yields:
        None

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _tokenize_config.get()
    _tokenize_config.set(config)
    try:
        yield
    finally:
        _tokenize_config.set(previous)


__all__ = [
    "CODE_INDENTED",
    "TokenizeConfig",
    "get_tokenize_config",
    "set_tokenize_config",
    "reset_tokenize_config",
    "tokenize_config_context",
]
