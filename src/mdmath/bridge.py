"""Renderer bridge between math tokens and a typesetting engine.

The engine is injected, never looked up globally, so tests can pass a
double and applications can run one engine per document.

Engine contract:
    reset_state() must run before every render; engines such as MathJax
    keep equation counters and label tables across calls.
    render(source, display=...) returns markup whose root is an ``<svg>``
    element carrying its intrinsic width as a ``width`` attribute or a
    ``min-width`` style.

The bridge moves that width into an inline style capped by ``max-width``
and wraps the element in a centered ``<section>`` (display) or a
vertically centered ``<span>`` (inline).

Thread Safety:
MathRenderer holds no mutable state, but the engine does. Callers that
render concurrently must serialize access to one engine or use one engine
per document.

"""

from __future__ import annotations

import re
from html import escape as html_escape
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from mdmath.errors import RenderError
from mdmath.utils.logger import get_logger

if TYPE_CHECKING:
    from mdmath.tokens import MathToken

logger = get_logger(__name__)

DISPLAY_WRAPPER = '<section style="text-align:center; overflow:auto;">{}</section>'
INLINE_WRAPPER = '<span style="vertical-align:middle; line-height:1;">{}</span>'

_SVG_TAG_RE = re.compile(
    r"""<svg(?P<attrs>(?:\s+[^\s=/>]+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'=<>`]+))?)*)\s*(?P<close>/?)>""",
    re.IGNORECASE,
)

_ATTR_RE = re.compile(r"""([^\s=/>]+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s"'=<>`]+))?""")


@runtime_checkable
class TypesetEngine(Protocol):
    """Protocol for math typesetting engines."""

    def reset_state(self) -> None:
        """Clear counters and labels carried over from earlier renders."""
        ...

    def render(self, source: str, *, display: bool) -> str:
        """Typeset math source into markup rooted at an ``<svg>`` element."""
        ...


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def parse_style(style: str) -> dict[str, str]:
    """Parse a CSS declaration list into a name -> value dict."""
    declarations: dict[str, str] = {}
    for part in style.split(";"):
        name, sep, value = part.partition(":")
        if sep and name.strip():
            declarations[name.strip().lower()] = value.strip()
    return declarations


def restyle_svg(markup: str, max_width: str = "300vw") -> str:
    """Re-home the root ``<svg>`` width into a capped inline style.

    The ``width`` attribute is removed and the existing ``style`` replaced by
    ``max-width: <cap> !important; width: <intrinsic>; display: initial;``.
    Everything outside the opening tag is kept verbatim.

    Raises:
        RenderError: If the markup has no ``<svg>`` element

    """
    match = _SVG_TAG_RE.search(markup)
    if match is None:
        raise RenderError("Engine output has no <svg> element")

    kept: list[str] = []
    width_attr = ""
    min_width = ""
    for attr in _ATTR_RE.finditer(match.group("attrs")):
        name, raw_value = attr.group(1), attr.group(2)
        lowered = name.lower()
        if lowered == "width":
            width_attr = _unquote(raw_value or "")
        elif lowered == "style":
            min_width = parse_style(_unquote(raw_value or "")).get("min-width", "")
        else:
            kept.append(f"{name}={raw_value}" if raw_value is not None else name)

    width = min_width or width_attr
    style = f"max-width: {max_width} !important;"
    if width:
        style += f" width: {width};"
    style += " display: initial;"
    kept.append(f'style="{html_escape(style)}"')

    tag = f"<svg {' '.join(kept)}{match.group('close')}>"
    return markup[: match.start()] + tag + markup[match.end() :]


class MathRenderer:
    """Render math tokens through an injected typesetting engine.

    One instance is shared by all math rules; the token's ``display_mode``
    picks the wrapper. Built without an engine (tokenize-only use) it
    raises RenderError when asked to render.

    Usage:
        >>> renderer = MathRenderer(engine)
        >>> renderer(token)
        '<span style="vertical-align:middle; line-height:1;"><svg ...></span>'

    """

    __slots__ = ("_engine", "_max_width")

    def __init__(self, engine: TypesetEngine | None, max_width: str = "300vw") -> None:
        self._engine = engine
        self._max_width = max_width

    @property
    def engine(self) -> TypesetEngine | None:
        return self._engine

    def __call__(self, token: MathToken) -> str:
        return self.render(token.text, token.display_mode)

    def render(self, text: str, display: bool) -> str:
        """Typeset ``text`` and wrap it for inline or display placement.

        Engine exceptions are not caught.

        Raises:
            RenderError: If the renderer was built without an engine, or the
                engine returned no ``<svg>`` element

        """
        engine = self._engine
        if engine is None:
            raise RenderError("No typesetting engine configured", source=text)

        engine.reset_state()
        markup = engine.render(text, display=display)
        logger.debug("Rendered %d chars of math (display=%s)", len(text), display)

        try:
            element = restyle_svg(markup, self._max_width)
        except RenderError as e:
            raise RenderError(e.message, source=text) from e

        if display:
            return DISPLAY_WRAPPER.format(element)
        return INLINE_WRAPPER.format(element)


__all__ = [
    "TypesetEngine",
    "MathRenderer",
    "restyle_svg",
    "parse_style",
    "DISPLAY_WRAPPER",
    "INLINE_WRAPPER",
]
