"""The math extension bundle.

Bundles the three math rules in registration order. When two rules of the
same level report the same start offset, the host tries them in this
order and the first token wins.

Usage:
    >>> extension = create_extension(engine)
    >>> [rule.name for rule in extension.rules]
    ['inlineKatex', 'blockKatex', 'inlineBlockKatex']

"""

from __future__ import annotations

from dataclasses import dataclass

from mdmath.bridge import MathRenderer, TypesetEngine
from mdmath.config import MathConfig, get_math_config
from mdmath.errors import PluginError
from mdmath.rules import BlockMathRule, InlineBlockMathRule, InlineMathRule, MathRule
from mdmath.tokens import MathToken
from mdmath.utils.logger import get_logger

logger = get_logger(__name__)

LEVELS: tuple[str, ...] = ("block", "inline")


@dataclass(frozen=True, slots=True)
class MathExtension:
    """Ordered math rules sharing one renderer.

    Attributes:
        rules: Rules in registration order
        renderer: Shared renderer bridge
        config: Configuration the rules were built with

    """

    rules: tuple[MathRule, ...]
    renderer: MathRenderer
    config: MathConfig

    def rules_for(self, level: str) -> tuple[MathRule, ...]:
        """Rules registered at ``level``, in registration order.

        Raises:
            PluginError: If ``level`` is not "block" or "inline"

        """
        if level not in LEVELS:
            raise PluginError(level, f"unknown level, expected one of {', '.join(LEVELS)}")
        return tuple(rule for rule in self.rules if rule.level == level)

    def get_rule(self, name: str) -> MathRule:
        """Look up a rule by name.

        Raises:
            PluginError: If no rule has that name

        """
        for rule in self.rules:
            if rule.name == name:
                return rule
        available = ", ".join(rule.name for rule in self.rules)
        raise PluginError(name, f"unknown rule. Available: {available}")

    def render(self, token: MathToken) -> str:
        return self.renderer(token)


def create_extension(
    engine: TypesetEngine | None = None,
    config: MathConfig | None = None,
) -> MathExtension:
    """Build the math extension for one configuration.

    Args:
        engine: Typesetting engine used by the renderer bridge. May be None
            when tokens are only split, never rendered
        config: Rule configuration (the active context config if None)

    Returns:
        MathExtension with inline, block and inline-block rules

    """
    if config is None:
        config = get_math_config()

    renderer = MathRenderer(engine, max_width=config.max_width)
    rules: tuple[MathRule, ...] = (
        InlineMathRule(config, renderer),
        BlockMathRule(config, renderer),
        InlineBlockMathRule(config, renderer),
    )
    logger.debug("Created math extension (non_standard=%s)", config.non_standard)
    return MathExtension(rules=rules, renderer=renderer, config=config)


__all__ = [
    "LEVELS",
    "MathExtension",
    "create_extension",
]
