"""Drive the math rules from your own lexer loop."""

from mdmath import MathConfig, create_extension


class BoxEngine:
    def reset_state(self) -> None:
        pass

    def render(self, source: str, *, display: bool) -> str:
        return f'<svg width="{len(source)}ex"></svg>'


extension = create_extension(BoxEngine(), MathConfig(non_standard=True))

src = "inline$x$math and \\(y\\) here"
for rule in extension.rules_for("inline"):
    offset = rule.start(src)
    print(rule.name, "starts at", offset)
    if offset is not None:
        token = rule.tokenizer(src[offset:])
        print("  ", token)
        print("  ", rule.renderer(token))
