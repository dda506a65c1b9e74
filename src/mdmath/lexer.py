"""Reference host lexer for the math extension.

Drives the rule contract the way a pluggable Markdown lexer does:

1. Ask every rule at the current level where it might start.
2. Flush plain text up to the smallest offset.
3. Try the tokenizers at that offset in registration order.
4. If all decline, flush one character as text and continue.

The block level runs over the whole document first; the inline level
then runs over each plain-text gap. Adjacent text is merged, so the
output alternates between TextToken and MathToken runs.

Joining ``raw`` over the output always reproduces the source exactly.

Thread Safety:
Lexer instances hold only the extension. All scan state is local to
each tokenize() call.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from html import escape as html_escape

from mdmath.extension import MathExtension
from mdmath.rules import MathRule
from mdmath.tokens import MathToken, TextToken, Token
from mdmath.utils.logger import get_logger

logger = get_logger(__name__)


class Lexer:
    """Two-level tokenizer over a MathExtension.

    Usage:
        >>> lexer = Lexer(extension)
        >>> list(lexer.tokenize("a $x$ b"))
        [TextToken('a '), MathToken(inlineKatex, 'x', display=False), TextToken(' b')]

    """

    __slots__ = ("_extension",)

    def __init__(self, extension: MathExtension) -> None:
        self._extension = extension

    def tokenize(self, source: str) -> Iterator[Token]:
        """Yield text and math tokens in source order."""
        for token in self.tokenize_level(source, "block"):
            if isinstance(token, TextToken):
                yield from self.tokenize_level(token.raw, "inline")
            else:
                yield token

    def tokenize_level(self, source: str, level: str) -> Iterator[Token]:
        """Run the rules of one level over ``source``."""
        rules = self._extension.rules_for(level)
        pending: list[str] = []
        pos = 0
        source_len = len(source)

        while pos < source_len:
            remaining = source[pos:]
            offset = _earliest_start(rules, remaining)

            if offset is None:
                pending.append(remaining)
                break

            if offset > 0:
                pending.append(remaining[:offset])
                pos += offset
                remaining = remaining[offset:]

            token = _first_token(rules, remaining)
            if token is None:
                logger.debug("All %s rules declined at %d, flushing one character", level, pos)
                pending.append(remaining[0])
                pos += 1
                continue

            if pending:
                yield TextToken("".join(pending))
                pending = []
            logger.debug("%s token at %d (%d chars)", token.type.value, pos, len(token.raw))
            yield token
            pos += len(token.raw)

        if pending:
            yield TextToken("".join(pending))

    def render(self, source: str) -> str:
        """Render ``source`` with escaped text and typeset math."""
        parts: list[str] = []
        for token in self.tokenize(source):
            if isinstance(token, MathToken):
                parts.append(self._extension.render(token))
            else:
                parts.append(html_escape(token.raw, quote=False))
        return "".join(parts)


def _earliest_start(rules: Sequence[MathRule], src: str) -> int | None:
    best: int | None = None
    for rule in rules:
        offset = rule.start(src)
        if offset is not None and (best is None or offset < best):
            best = offset
    return best


def _first_token(rules: Sequence[MathRule], src: str) -> MathToken | None:
    for rule in rules:
        token = rule.tokenizer(src)
        if token is not None:
            return token
    return None


__all__ = ["Lexer"]
