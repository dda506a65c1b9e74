"""ContextVar-based configuration for mdmath.

Rules capture their configuration once, at construction. The active
context config is only consulted when an extension is created without an
explicit config.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    # Explicit config
    extension = create_extension(engine, MathConfig(non_standard=True))

    # Or via the context
    with math_config_context(MathConfig(non_standard=True)):
        extension = create_extension(engine)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any

from mdmath.patterns import TERMINATORS

# Camel-case keys accepted from host-side option objects
_ALIASES: dict[str, str] = {
    "nonStandard": "non_standard",
    "maxWidth": "max_width",
}


@dataclass(frozen=True, slots=True)
class MathConfig:
    """Immutable math configuration.

    Attributes:
        non_standard: Let inline math open at any position, not only at
            start of text or after whitespace. Also drops the terminator
            check after a closing ``$``.
        terminators: Punctuation allowed right after a closing inline ``$``
            (whitespace and end of input are always allowed)
        max_width: Cap applied to rendered elements as ``max-width``

    """

    non_standard: bool = False
    terminators: frozenset[str] = TERMINATORS
    max_width: str = "300vw"

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "MathConfig":
        """Create MathConfig from dictionary.

        Unknown keys are ignored. ``nonStandard`` and ``maxWidth`` are
        accepted as aliases, and ``terminators`` may be given as a string.

        Example:
            >>> MathConfig.from_dict({"nonStandard": True}).non_standard
            True

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            key = _ALIASES.get(key, key)
            if key in valid_fields:
                filtered[key] = value
        if "terminators" in filtered:
            filtered["terminators"] = frozenset(filtered["terminators"])
        return cls(**filtered)


_DEFAULT_CONFIG: MathConfig = MathConfig()

_math_config: ContextVar[MathConfig] = ContextVar(
    "math_config",
    default=_DEFAULT_CONFIG,
)


def get_math_config() -> MathConfig:
    """Get current math configuration (thread-local)."""
    return _math_config.get()


def set_math_config(config: MathConfig) -> None:
    """Set math configuration for current context."""
    _math_config.set(config)


def reset_math_config() -> None:
    """Reset to default configuration."""
    _math_config.set(_DEFAULT_CONFIG)


@contextmanager
def math_config_context(config: MathConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.
    """
    previous = _math_config.get()
    _math_config.set(config)
    try:
        yield
    finally:
        _math_config.set(previous)


__all__ = [
    "MathConfig",
    "get_math_config",
    "set_math_config",
    "reset_math_config",
    "math_config_context",
]
