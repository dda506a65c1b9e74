"""Math rules for a pluggable host lexer.

Each rule exposes the host plugin contract:

    name       rule identifier
    level      "inline" or "block"
    start      earliest offset where the rule might match, or None
    tokenizer  token for a match at offset 0, or None to decline
    renderer   markup for a token

Three rules make up the extension:

- InlineMathRule (``inlineKatex``): ``$..$``, ``$$..$$``, ``\\(..\\)``
- BlockMathRule (``blockKatex``): ``$``/``$$`` fences and ``\\[..\\]``
  on their own lines
- InlineBlockMathRule (``inlineBlockKatex``): ``\\[..\\]`` met while
  scanning inline text, emitted as a display block

Thread Safety:
Rules hold only their fixed configuration and a renderer. All scanning
state is local to each call.

"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Literal, Protocol, runtime_checkable

from mdmath.config import MathConfig
from mdmath.patterns import BLOCK_RE, BRACKET_BLOCK_RE, inline_pattern
from mdmath.scanner import BracketReach, LineReach, find_line_start, find_start
from mdmath.tokens import MathToken, TokenType

Level = Literal["block", "inline"]

Renderer = Callable[[MathToken], str]

INLINE_MARKERS: tuple[str, ...] = ("$", "\\(")
BRACKET_MARKERS: tuple[str, ...] = ("\\[",)


@runtime_checkable
class MathRule(Protocol):
    """Protocol for rules registered with the host lexer."""

    @property
    def name(self) -> str: ...

    @property
    def level(self) -> Level: ...

    def start(self, src: str) -> int | None:
        """Earliest offset in ``src`` where this rule may match."""
        ...

    def tokenizer(self, src: str) -> MathToken | None:
        """Token for a match at the start of ``src``, or None."""
        ...

    def renderer(self, token: MathToken) -> str:
        """Markup for a token produced by this rule."""
        ...


class InlineMathRule:
    """Inline ``$..$``, ``$$..$$`` and ``\\(..\\)`` math.

    In standard mode a span opens only at the start of the text or after
    whitespace, and a closing ``$`` must be followed by whitespace, a
    terminator or end of input. ``non_standard`` drops both checks.

    """

    __slots__ = ("_non_standard", "_terminators", "_pattern", "_render")

    name = "inlineKatex"
    level: Level = "inline"

    def __init__(self, config: MathConfig, renderer: Renderer) -> None:
        self._non_standard = config.non_standard
        self._terminators = config.terminators
        self._pattern = inline_pattern(config.non_standard, config.terminators)
        self._render = renderer

    @property
    def non_standard(self) -> bool:
        return self._non_standard

    def start(self, src: str) -> int | None:
        return find_start(
            src,
            INLINE_MARKERS,
            self._pattern.match,
            require_boundary=not self._non_standard,
            reach=LineReach(src, self._terminators, lookahead=not self._non_standard),
        )

    def tokenizer(self, src: str) -> MathToken | None:
        match = self._pattern.match(src)
        if match is None:
            return None

        paren_body = match.group("paren_body")
        if paren_body is not None:
            return MathToken(TokenType.INLINE_KATEX, match.group(0), paren_body.strip(), False)

        return MathToken(
            TokenType.INLINE_KATEX,
            match.group(0),
            match.group("dollar_body").strip(),
            match.group("dollars") == "$$",
        )

    def renderer(self, token: MathToken) -> str:
        return self._render(token)


class BlockMathRule:
    """Display math on its own lines.

    Either a ``$`` or ``$$`` fence line, content, and a fence line with the
    same number of dollars, or a ``\\[..\\]`` bracket pair. Blanks around
    the delimiters and one trailing newline are consumed.

    """

    __slots__ = ("_render",)

    name = "blockKatex"
    level: Level = "block"

    def __init__(self, config: MathConfig, renderer: Renderer) -> None:
        self._render = renderer

    def start(self, src: str) -> int | None:
        return find_line_start(src, BLOCK_RE.match)

    def tokenizer(self, src: str) -> MathToken | None:
        match = BLOCK_RE.match(src)
        if match is None:
            return None
        body = match.group("fence_body")
        if body is None:
            body = match.group("bracket_body")
        return MathToken(TokenType.BLOCK_KATEX, match.group(0), body.strip(), True)

    def renderer(self, token: MathToken) -> str:
        return self._render(token)


class InlineBlockMathRule:
    """``\\[..\\]`` display math found while scanning inline text.

    Registered at inline level because bracket math may appear inside a
    paragraph rather than as a block of its own. The closing bracket must
    still end its line.

    """

    __slots__ = ("_render",)

    name = "inlineBlockKatex"
    level: Level = "inline"

    def __init__(self, config: MathConfig, renderer: Renderer) -> None:
        self._render = renderer

    def start(self, src: str) -> int | None:
        return find_start(src, BRACKET_MARKERS, BRACKET_BLOCK_RE.match, reach=BracketReach(src))

    def tokenizer(self, src: str) -> MathToken | None:
        match: re.Match[str] | None = BRACKET_BLOCK_RE.match(src)
        if match is None:
            return None
        return MathToken(
            TokenType.BLOCK_KATEX,
            match.group(0),
            match.group("bracket_body").strip(),
            True,
        )

    def renderer(self, token: MathToken) -> str:
        return self._render(token)


__all__ = [
    "Level",
    "MathRule",
    "InlineMathRule",
    "BlockMathRule",
    "InlineBlockMathRule",
]
