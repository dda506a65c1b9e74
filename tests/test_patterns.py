"""Tests for the delimiter grammars."""

import pytest

from mdmath.patterns import BLOCK_RE, BRACKET_BLOCK_RE, inline_pattern, match_block, match_inline


class TestInlineDollar:
    """Single and double dollar spans."""

    def test_single_dollar(self) -> None:
        m = match_inline("$x$")
        assert m is not None
        assert m.group("dollars") == "$"
        assert m.group("dollar_body") == "x"

    def test_double_dollar(self) -> None:
        m = match_inline("$$x^2$$")
        assert m is not None
        assert m.group("dollars") == "$$"
        assert m.group("dollar_body") == "x^2"

    def test_closing_count_must_match(self) -> None:
        assert match_inline("$$x$ ") is None

    def test_escaped_dollar_does_not_close(self) -> None:
        m = match_inline(r"$a\$b$")
        assert m is not None
        assert m.group("dollar_body") == r"a\$b"

    def test_newline_not_allowed(self) -> None:
        assert match_inline("$a\nb$") is None

    def test_content_may_not_end_on_dollar(self) -> None:
        # "$a$$" cannot be single-dollar math closing on the second "$"
        assert match_inline("$a$$") is None

    def test_empty_content_rejected(self) -> None:
        assert match_inline("$$") is None
        assert match_inline("$ $") is not None  # whitespace is content

    def test_triple_dollar_rejected(self) -> None:
        assert match_inline("$$$x$$$") is None

    @pytest.mark.parametrize("after", [" ", "\t", "\n", "?", "!", ".", ",", ":", "？", "！", "。", "，", "："])
    def test_terminators(self, after: str) -> None:
        m = match_inline(f"$x${after}")
        assert m is not None
        assert m.group(0) == "$x$"

    def test_end_of_input_terminates(self) -> None:
        assert match_inline("$x$") is not None

    def test_non_terminator_rejected(self) -> None:
        assert match_inline("$x$y") is None
        assert match_inline("$x$;") is None

    def test_currency(self) -> None:
        assert match_inline("$100 and $200") is None

    def test_lazy_closing_extends_past_non_terminated_dollar(self) -> None:
        m = match_inline("$a$b$ c")
        assert m is not None
        assert m.group("dollar_body") == "a$b"

    def test_non_standard_ignores_terminator(self) -> None:
        m = match_inline("$x$y", non_standard=True)
        assert m is not None
        assert m.group(0) == "$x$"

    def test_custom_terminators(self) -> None:
        assert match_inline("$x$;") is None
        assert match_inline("$x$;", terminators=frozenset(";")) is not None

    def test_match_at_offset(self) -> None:
        m = match_inline("ab $x$ c", 3)
        assert m is not None
        assert m.span() == (3, 6)


class TestInlineParen:
    """Backslash-paren spans."""

    def test_paren(self) -> None:
        m = match_inline(r"\(x^2\)")
        assert m is not None
        assert m.group("paren_body") == "x^2"
        assert m.group("dollars") is None

    def test_paren_needs_no_terminator(self) -> None:
        m = match_inline(r"\(x\)y")
        assert m is not None
        assert m.group(0) == r"\(x\)"

    def test_paren_no_newline(self) -> None:
        assert match_inline("\\(a\nb\\)") is None

    def test_paren_may_end_on_dollar(self) -> None:
        m = match_inline(r"\(a$\)")
        assert m is not None
        assert m.group("paren_body") == "a$"

    def test_empty_paren_rejected(self) -> None:
        assert match_inline(r"\(\)") is None


class TestBlock:
    """Fenced and bracket blocks."""

    def test_double_fence(self) -> None:
        m = match_block("$$\nE=mc^2\n$$")
        assert m is not None
        assert m.group("fence") == "$$"
        assert m.group("fence_body") == "E=mc^2"

    def test_single_fence(self) -> None:
        m = match_block("$\na\n$\n")
        assert m is not None
        assert m.group(0) == "$\na\n$\n"

    def test_multiline_content(self) -> None:
        m = match_block("$$\na\nb\n$$\nafter")
        assert m is not None
        assert m.group("fence_body") == "a\nb"
        assert m.group(0) == "$$\na\nb\n$$\n"

    def test_mismatched_fence_does_not_close(self) -> None:
        assert match_block("$$\nx\n$\n") is None
        assert match_block("$\nx\n$$\n") is None

    def test_fence_must_end_line(self) -> None:
        assert match_block("$$\nx\n$$ tail") is None

    def test_leading_and_trailing_blanks(self) -> None:
        m = match_block("  $$\nx\n$$  \n")
        assert m is not None
        assert m.group(0) == "  $$\nx\n$$  \n"

    def test_bracket(self) -> None:
        m = match_block(r"\[a+b\]")
        assert m is not None
        assert m.group("bracket_body") == "a+b"

    def test_bracket_multiline(self) -> None:
        m = BLOCK_RE.match("\\[\na\nb\n\\]\n")
        assert m is not None
        assert m.group("bracket_body") == "\na\nb\n"

    def test_bracket_escape_is_opaque(self) -> None:
        m = match_block("\\[a\\]b\\]")
        assert m is not None
        assert m.group("bracket_body") == "a\\]b"

    def test_bracket_only_pattern_rejects_fence(self) -> None:
        assert BRACKET_BLOCK_RE.match("$$\nx\n$$") is None
        assert BRACKET_BLOCK_RE.match(r"\[x\]") is not None


class TestPatternCache:
    def test_same_pattern_for_same_config(self) -> None:
        assert inline_pattern(False) is inline_pattern(False)

    def test_modes_differ(self) -> None:
        assert inline_pattern(False) is not inline_pattern(True)
