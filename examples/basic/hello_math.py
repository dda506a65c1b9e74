"""Find math spans in a document and render them with a toy engine."""

from mdmath import MathToken, render, tokenize


class BoxEngine:
    """Stand-in engine: draws each formula as a labelled box."""

    def reset_state(self) -> None:
        pass

    def render(self, source: str, *, display: bool) -> str:
        return f'<svg width="{len(source)}ex" height="2ex"><text>{source}</text></svg>'


engine = BoxEngine()
source = "Energy $E=mc^2$, prices $5 and $10.\n$$\n\\int_0^1 x\\,dx\n$$\n"

for token in tokenize(source, engine):
    kind = "math" if isinstance(token, MathToken) else "text"
    print(kind, repr(token.raw))

print(render(source, engine))
