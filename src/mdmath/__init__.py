"""
mdmath — LaTeX-style math rules for pluggable Markdown lexers

Recognizes ``$..$``, ``$$..$$``, ``\\(..\\)``, ``\\[..\\]`` and ``$$``-fenced
blocks inside text handed over by a host lexer, and renders each span
through an injected typesetting engine. Math source is extracted
verbatim (trimmed); its meaning is left to the engine.

Quick Start:
    >>> from mdmath import create_extension, Lexer
    >>> extension = create_extension(engine)
    >>> lexer = Lexer(extension)
    >>> [t for t in lexer.tokenize("Energy: $E=mc^2$ and more")]
    [TextToken('Energy: '), MathToken(inlineKatex, 'E=mc^2', display=False), TextToken(' and more')]

    >>> # Or render straight to HTML
    >>> from mdmath import render
    >>> html = render("$$\\nE=mc^2\\n$$", engine)

Relaxed boundaries:
    >>> from mdmath import MathConfig
    >>> extension = create_extension(engine, MathConfig(non_standard=True))

Installation:
    pip install mdmath              # Zero runtime dependencies
"""

from mdmath.bridge import MathRenderer, TypesetEngine, restyle_svg
from mdmath.config import (
    MathConfig,
    get_math_config,
    math_config_context,
    reset_math_config,
    set_math_config,
)
from mdmath.errors import MdMathError, PluginError, RenderError
from mdmath.extension import MathExtension, create_extension
from mdmath.lexer import Lexer
from mdmath.patterns import TERMINATORS, match_block, match_inline
from mdmath.rules import BlockMathRule, InlineBlockMathRule, InlineMathRule, MathRule
from mdmath.tokens import MathToken, TextToken, Token, TokenType

__version__ = "0.1.0"


def tokenize(
    source: str,
    engine: TypesetEngine | None = None,
    config: MathConfig | None = None,
) -> list[Token]:
    """Split ``source`` into text and math tokens.

    Args:
        source: Document text
        engine: Optional typesetting engine, kept on the rules for later
            rendering; splitting text never calls it
        config: Rule configuration (the active context config if None)

    Returns:
        Tokens in source order; their raws join back into ``source``

    """
    return list(Lexer(create_extension(engine, config)).tokenize(source))


def render(source: str, engine: TypesetEngine, config: MathConfig | None = None) -> str:
    """Render ``source`` to HTML, typesetting every math span.

    Plain text is HTML-escaped. Engine errors propagate.

    Example:
        >>> render("Inline $x$ here", engine)
        'Inline <span style="vertical-align:middle; line-height:1;"><svg ...></svg></span> here'

    """
    return Lexer(create_extension(engine, config)).render(source)


__all__ = [
    # Main API
    "render",
    "tokenize",
    "create_extension",
    "MathExtension",
    "Lexer",
    # Rules
    "MathRule",
    "InlineMathRule",
    "BlockMathRule",
    "InlineBlockMathRule",
    # Tokens
    "Token",
    "MathToken",
    "TextToken",
    "TokenType",
    # Patterns
    "TERMINATORS",
    "match_inline",
    "match_block",
    # Rendering
    "MathRenderer",
    "TypesetEngine",
    "restyle_svg",
    # Configuration
    "MathConfig",
    "get_math_config",
    "set_math_config",
    "reset_math_config",
    "math_config_context",
    # Errors
    "MdMathError",
    "RenderError",
    "PluginError",
    "__version__",
]
