"""Token definitions for mdmath.

Rules emit MathToken objects; the reference host fills the gaps between
them with TextToken objects. Every token carries the exact ``raw`` slice of
source it consumed, so joining the raws of a token stream reproduces the
input byte for byte.

Thread Safety:
Tokens are frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Token types produced by the math rules.

    Values match the names used by the host lexer's renderer lookup.
    """

    INLINE_KATEX = "inlineKatex"  # $..$, $$..$$, \(..\)
    BLOCK_KATEX = "blockKatex"  # $$ fences, \[..\]


@dataclass(frozen=True, slots=True)
class MathToken:
    """A recognized math span.

    Attributes:
        type: INLINE_KATEX or BLOCK_KATEX
        raw: Exact substring consumed, delimiters and trailing newline included
        text: Math source with delimiters stripped and whitespace trimmed
        display_mode: True for centered block typesetting

    """

    type: TokenType
    raw: str
    text: str
    display_mode: bool

    def __repr__(self) -> str:
        return f"MathToken({self.type.value}, {self.text!r}, display={self.display_mode})"


@dataclass(frozen=True, slots=True)
class TextToken:
    """Plain text flushed by the host between math tokens."""

    raw: str

    def __repr__(self) -> str:
        return f"TextToken({self.raw!r})"


Token = MathToken | TextToken
