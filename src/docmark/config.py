"""ContextVar-based parse configuration for docmark.

The active ParseConfig lives in a ContextVar, so each thread and each
asyncio task sees its own. It is installed once per parse (or per
DocMark call) and read by every parser in that context, including the
recursive sub-parsers used for bold spans and link text.

Usage:
    # Via the public API
    doc = parse(source, config=ParseConfig(strict_substitution=True))

    # Direct parser usage (advanced)
    from docmark.config import set_parse_config, reset_parse_config, ParseConfig

    set_parse_config(ParseConfig(max_substitution_passes=8))
    try:
        document = Parser(source).parse()
    finally:
        reset_parse_config()

    # Or use the context manager
    with parse_config_context(ParseConfig(max_substitution_passes=8)):
        document = Parser(source).parse()

"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

DEFAULT_MAX_SUBSTITUTION_PASSES = 64
DEFAULT_MAX_SUBSTITUTION_LENGTH = 1 << 16


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        max_substitution_passes: Upper bound on ``{name}`` expansion passes
            per text run. Guards against cyclic variable definitions.
        max_substitution_length: Upper bound on the characters expansion
            may add to one text run. Guards against definitions that
            multiply themselves, such as ``:a: {a}{a}``.
        strict_substitution: Raise SubstitutionLimitError when a bound is
            hit instead of logging a warning and keeping the partial result.
        text_transformer: Optional callback applied to every logical line
            before it is classified.

    """

    max_substitution_passes: int = DEFAULT_MAX_SUBSTITUTION_PASSES
    max_substitution_length: int = DEFAULT_MAX_SUBSTITUTION_LENGTH
    strict_substitution: bool = False
    text_transformer: Callable[[str], str] | None = None

    def __post_init__(self) -> None:
        if self.max_substitution_passes < 1:
            raise ValueError(
                f"max_substitution_passes must be >= 1, got {self.max_substitution_passes}"
            )
        if self.max_substitution_length < 1:
            raise ValueError(
                f"max_substitution_length must be >= 1, got {self.max_substitution_length}"
            )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Build a config from a mapping such as a loaded settings file.

        Keys that do not name a field are dropped.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "strict_substitution": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.strict_substitution
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "docmark_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Config seen by parsers running in this context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Install ``config`` for the calling context only."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Go back to the shared default ``ParseConfig()``."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Install ``config`` for the duration of a ``with`` block.

    The previous config comes back on exit, also when the body raises.

    Example:
        >>> with parse_config_context(ParseConfig(strict_substitution=True)):
        ...     document = Parser(":a: {a}\\n\\n{a}").parse()
        Traceback (most recent call last):
        ...
        docmark.errors.SubstitutionLimitError: ...

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_MAX_SUBSTITUTION_LENGTH",
    "DEFAULT_MAX_SUBSTITUTION_PASSES",
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
