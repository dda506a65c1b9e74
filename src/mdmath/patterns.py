"""Delimiter grammars for math spans.

Each form is a single compiled regular expression anchored with
``pattern.match(src, pos)`` so candidates can be confirmed in place
without slicing the source.

Inline forms:
    $...$       inline, content may not end on a raw ``$``
    $$...$$     display, same content rule, closing count must match
    \\(...\\)     inline

Block forms (alone on their lines, surrounding blanks allowed):
    $ or $$ fence line, content, same fence line
    \\[...\\]     may span lines

Escaping: a backslash and the character after it form one opaque unit,
so ``\\$`` never closes a dollar span and ``\\\\]`` never closes a bracket.

Inline dollar spans in standard mode must be followed by end of input,
whitespace or a terminator character. This keeps ``$100 and $200`` from
being read as math.

"""

from __future__ import annotations

import re
from functools import lru_cache

# Punctuation allowed right after a closing inline ``$`` (ASCII and CJK).
# Whitespace is always allowed in addition to these.
TERMINATORS: frozenset[str] = frozenset("?!.,:？！。，：")

# Backslash pair or any char except backslash/newline
_INLINE_UNIT = r"(?:\\.|[^\\\n])"

_DOLLAR_BODY = rf"{_INLINE_UNIT}*?(?:\\.|[^\\\n$])"
_PAREN_BODY = rf"{_INLINE_UNIT}*?{_INLINE_UNIT}"

# Backslash pair (newline included) or any non-backslash char
_BLOCK_UNIT = r"(?:\\[\s\S]|[^\\])"

_PAREN = rf"\\\((?P<paren_body>{_PAREN_BODY})\\\)"
_BRACKET = rf"\\\[(?P<bracket_body>{_BLOCK_UNIT}+?)\\\]"
_FENCE = rf"(?P<fence>\${{1,2}})\n(?P<fence_body>{_BLOCK_UNIT}+?)\n(?P=fence)"

# Horizontal whitespace before/after a block, then end of line or input
_LINE_PAD = r"[^\S\r\n]*"
_LINE_END = r"(?:\n|\Z)"


def _terminator_class(terminators: frozenset[str]) -> str:
    chars = "".join(re.escape(c) for c in sorted(terminators))
    return rf"[\s{chars}]"


@lru_cache(maxsize=16)
def inline_pattern(
    non_standard: bool = False,
    terminators: frozenset[str] = TERMINATORS,
) -> re.Pattern[str]:
    """Build the inline pattern for a boundary mode.

    Args:
        non_standard: Drop the terminator look-ahead after closing ``$``
        terminators: Punctuation allowed after a closing ``$``

    Returns:
        Compiled pattern with ``dollars``, ``dollar_body`` and
        ``paren_body`` groups

    """
    lookahead = "" if non_standard else rf"(?={_terminator_class(terminators)}|\Z)"
    dollar = rf"(?P<dollars>\${{1,2}})(?!\$)(?P<dollar_body>{_DOLLAR_BODY})(?P=dollars){lookahead}"
    return re.compile(rf"(?:{dollar}|{_PAREN})")


BLOCK_RE: re.Pattern[str] = re.compile(rf"{_LINE_PAD}(?:{_FENCE}|{_BRACKET}){_LINE_PAD}{_LINE_END}")

BRACKET_BLOCK_RE: re.Pattern[str] = re.compile(rf"{_LINE_PAD}{_BRACKET}{_LINE_PAD}{_LINE_END}")


def match_inline(
    src: str,
    pos: int = 0,
    *,
    non_standard: bool = False,
    terminators: frozenset[str] = TERMINATORS,
) -> re.Match[str] | None:
    """Match an inline math span starting exactly at ``pos``."""
    return inline_pattern(non_standard, terminators).match(src, pos)


def match_block(src: str, pos: int = 0) -> re.Match[str] | None:
    """Match a dollar-fenced or bracket block starting exactly at ``pos``."""
    return BLOCK_RE.match(src, pos)


__all__ = [
    "TERMINATORS",
    "BLOCK_RE",
    "BRACKET_BLOCK_RE",
    "inline_pattern",
    "match_inline",
    "match_block",
]
