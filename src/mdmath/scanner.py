"""Start-position search for math rules.

The host asks every rule where it might match before it flushes plain
text, so each rule needs a cheap way to find its leftmost viable offset.
Scanning is two-phase:

1. Find the next opening marker (cached per marker, never re-searched
   behind the cursor).
2. Check the boundary, then confirm with the full delimiter pattern.

Confirming with the regex costs up to the rest of the line (or document,
for brackets). To keep the whole scan linear, a reach table records where
a span could actually close. The table is built in one pass per line, or
one pass over the text for brackets. Candidates with no reachable closer
are rejected without touching the regex. Once nothing later on a line can
close, the scan jumps to the next line.

A rejected candidate otherwise resumes one character past the marker,
then past any run of ``$`` so ``$$$`` runs are not retried one dollar at
a time. The cursor only moves forward, so the search always terminates.

Thread Safety:
Reach tables and marker cursors are created per call. No shared state.

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

from mdmath.patterns import TERMINATORS
from mdmath.utils.logger import get_logger

logger = get_logger(__name__)

Matcher = Callable[[str, int], object]


class Reach(Protocol):
    """Where spans opened at a candidate offset could close."""

    def viable(self, index: int) -> bool:
        """False if no closer is reachable from a candidate at ``index``."""
        ...

    def resume(self, index: int) -> int:
        """Offset to continue from after rejecting ``index``."""
        ...


def at_boundary(src: str, index: int) -> bool:
    """True if ``index`` is at start of text or preceded by whitespace.

    Any Unicode whitespace counts (U+3000, NBSP), matching ``\\s`` in the
    closing look-ahead.
    """
    return index == 0 or src[index - 1].isspace()


class MarkerCursor:
    """Forward-only search for the nearest of several markers.

    Each marker's next position is cached and only re-searched once the
    cursor passes it, so every marker scans the text at most once.
    """

    __slots__ = ("_src", "_next")

    def __init__(self, src: str, markers: Sequence[str]) -> None:
        self._src = src
        self._next: dict[str, int] = {marker: -2 for marker in markers}

    def find(self, pos: int) -> int:
        """Smallest index >= pos of any marker, or -1."""
        best = -1
        for marker, index in self._next.items():
            if index != -1 and index < pos:
                index = self._src.find(marker, pos)
                self._next[marker] = index
            if index != -1 and (best == -1 or index < best):
                best = index
        return best


class LineReach:
    """Last offsets on each line where an inline span can close.

    Inline spans never cross a newline, so a candidate can only succeed if
    its own line has a closer after it:

    - ``single``: a ``$`` not escaped, not preceded by a raw ``$``, and
      followed by whitespace, a terminator or end of input
    - ``double``: the same for a ``$$`` run
    - ``paren``: an unescaped ``\\)``

    Escape pairs are parsed from the line start. A body always begins right
    after ``$`` or ``(``, so the pairing agrees with what the pattern sees.
    Lines are measured once, on the first candidate landing on them.
    Candidates arrive in increasing order, so the total work is linear.

    With ``lookahead`` off (non-standard mode) any unescaped closer counts.
    """

    __slots__ = (
        "_src",
        "_terminators",
        "_lookahead",
        "_end",
        "_single",
        "_double",
        "_paren",
    )

    def __init__(
        self,
        src: str,
        terminators: frozenset[str] = TERMINATORS,
        *,
        lookahead: bool = True,
    ) -> None:
        self._src = src
        self._terminators = terminators
        self._lookahead = lookahead
        self._end = -1  # end of the measured line; -1 before the first
        self._single = -1
        self._double = -1
        self._paren = -1

    @property
    def limit(self) -> int:
        """Last closer offset on the measured line, -1 if none."""
        return max(self._single, self._double, self._paren)

    def _closes(self, after: int) -> bool:
        if not self._lookahead or after >= len(self._src):
            return True
        char = self._src[after]
        return char.isspace() or char in self._terminators

    def _measure(self, index: int) -> None:
        if index <= self._end:
            return

        src = self._src
        newline = src.rfind("\n", self._end + 1, index)
        start = newline + 1 if newline != -1 else self._end + 1
        end = src.find("\n", index)
        if end == -1:
            end = len(src)

        single = double = paren = -1
        raw_dollar = False
        i = start
        while i < end:
            char = src[i]
            if char == "\\":
                if i + 1 < end and src[i + 1] == ")":
                    paren = i
                raw_dollar = False
                i += 2
                continue
            if char == "$" and not raw_dollar:
                if self._closes(i + 1):
                    single = i
                if i + 1 < end and src[i + 1] == "$" and self._closes(i + 2):
                    double = i
            raw_dollar = char == "$"
            i += 1

        self._end = end
        self._single = single
        self._double = double
        self._paren = paren

    def viable(self, index: int) -> bool:
        self._measure(index)
        src = self._src
        if src.startswith("\\(", index):
            return self._paren >= index + 3
        if src.startswith("$$", index):
            return not src.startswith("$", index + 2) and self._double >= index + 3
        return self._single >= index + 2

    def resume(self, index: int) -> int:
        self._measure(index)
        if self.limit <= index:
            return self._end + 1
        return index + 1


class BracketReach:
    """Last offset where a ``\\[`` span can close.

    Bracket bodies may span lines, so one pass over the whole text finds
    the last unescaped ``\\]`` that is followed only by blanks up to the end
    of its line. The pass runs on first use.
    """

    __slots__ = ("_src", "_last")

    def __init__(self, src: str) -> None:
        self._src = src
        self._last: int | None = None

    @property
    def last(self) -> int:
        if self._last is None:
            self._last = self._scan()
        return self._last

    def _scan(self) -> int:
        src = self._src
        src_len = len(src)
        last = -1
        i = 0
        while i < src_len:
            if src[i] != "\\":
                i += 1
                continue
            if src.startswith("\\]", i) and _blank_to_line_end(src, i + 2):
                last = i
            i += 2
        return last

    def viable(self, index: int) -> bool:
        return self.last >= index + 3

    def resume(self, index: int) -> int:
        if self.last <= index:
            return len(self._src)
        return index + 1


def _blank_to_line_end(src: str, pos: int) -> bool:
    src_len = len(src)
    while pos < src_len:
        char = src[pos]
        if char == "\n":
            return True
        if char == "\r" or not char.isspace():
            return False
        pos += 1
    return True


def find_start(
    src: str,
    markers: Sequence[str],
    matcher: Matcher,
    *,
    require_boundary: bool = True,
    reach: Reach | None = None,
) -> int | None:
    """Find the leftmost offset where ``matcher`` confirms a span.

    Args:
        src: Remaining, untokenized source
        markers: Opening markers to search for (e.g. ``("$", "\\\\(")``)
        matcher: ``matcher(src, index)`` returns a truthy match or None
        require_boundary: Require start of text or preceding whitespace
        reach: Closer table used to skip hopeless candidates

    Returns:
        Absolute offset into ``src``, or None if no candidate survives

    """
    src_len = len(src)
    cursor = MarkerCursor(src, markers)
    pos = 0

    while pos < src_len:
        index = cursor.find(pos)
        if index == -1:
            return None

        if not require_boundary or at_boundary(src, index):
            if (reach is None or reach.viable(index)) and matcher(src, index):
                return index
            logger.debug("No closing delimiter for candidate at %d", index)

        pos = index + 1 if reach is None else reach.resume(index)
        if pos == index + 1:
            while pos < src_len and src[pos] == "$":
                pos += 1

    return None


def find_line_start(src: str, matcher: Matcher) -> int | None:
    """Find the first line start where ``matcher`` confirms a block.

    Block forms may only open at the beginning of a line (after optional
    horizontal whitespace, which the pattern itself absorbs).
    """
    pos = 0
    src_len = len(src)

    while pos < src_len:
        if matcher(src, pos):
            return pos
        newline = src.find("\n", pos)
        if newline == -1:
            return None
        pos = newline + 1

    return None


__all__ = [
    "Reach",
    "MarkerCursor",
    "LineReach",
    "BracketReach",
    "at_boundary",
    "find_start",
    "find_line_start",
]
