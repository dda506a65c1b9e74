"""Property-based tests for the math rules using Hypothesis.

These tests verify invariants that should hold for any input:
1. Tokenization is lossless: joined raws reproduce the source
2. start() and tokenizer() are pure functions of their input
3. A confirmed start always tokenizes
4. Scanning terminates on pathological dollar runs
5. Closer tables never change where a scan lands
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from mdmath import Lexer, MathConfig, MathToken, create_extension
from mdmath.patterns import BRACKET_BLOCK_RE, inline_pattern
from mdmath.scanner import BracketReach, LineReach, find_start

from conftest import FakeEngine

# Text dense in delimiter characters
math_text = st.text(alphabet="$\\()[]xy \n.,?", max_size=200)

STANDARD = create_extension(FakeEngine(), MathConfig())
NON_STANDARD = create_extension(FakeEngine(), MathConfig(non_standard=True))


class TestLosslessConsumption:
    @given(math_text)
    @settings(max_examples=300)
    def test_raws_reconstruct_source(self, source: str) -> None:
        tokens = list(Lexer(STANDARD).tokenize(source))
        assert "".join(t.raw for t in tokens) == source

    @given(math_text)
    @settings(max_examples=200)
    def test_raws_reconstruct_source_non_standard(self, source: str) -> None:
        tokens = list(Lexer(NON_STANDARD).tokenize(source))
        assert "".join(t.raw for t in tokens) == source

    @given(st.text(max_size=300))
    @settings(max_examples=200)
    def test_arbitrary_unicode(self, source: str) -> None:
        tokens = list(Lexer(STANDARD).tokenize(source))
        assert "".join(t.raw for t in tokens) == source

    @given(math_text)
    @settings(max_examples=200)
    def test_math_text_is_trimmed(self, source: str) -> None:
        for token in Lexer(STANDARD).tokenize(source):
            if isinstance(token, MathToken):
                assert token.text == token.text.strip()
                assert token.text in token.raw


class TestPurity:
    @given(math_text)
    @settings(max_examples=200)
    def test_start_is_idempotent(self, source: str) -> None:
        for rule in STANDARD.rules:
            assert rule.start(source) == rule.start(source)

    @given(math_text)
    @settings(max_examples=200)
    def test_tokenizer_is_idempotent(self, source: str) -> None:
        for rule in STANDARD.rules:
            assert rule.tokenizer(source) == rule.tokenizer(source)

    @given(math_text)
    @settings(max_examples=300)
    def test_confirmed_start_tokenizes(self, source: str) -> None:
        for rule in (*STANDARD.rules, *NON_STANDARD.rules):
            offset = rule.start(source)
            if offset is not None:
                token = rule.tokenizer(source[offset:])
                assert token is not None
                assert source.startswith(token.raw, offset)

    @given(math_text)
    @settings(max_examples=200)
    def test_non_standard_finds_no_later(self, source: str) -> None:
        standard = STANDARD.get_rule("inlineKatex").start(source)
        relaxed = NON_STANDARD.get_rule("inlineKatex").start(source)
        if standard is not None:
            assert relaxed is not None
            assert relaxed <= standard


class TestTermination:
    def test_long_dollar_run(self) -> None:
        source = "$" * 20_000
        assert STANDARD.get_rule("inlineKatex").start(source) is None

    def test_many_unterminated_openers(self) -> None:
        source = " $a" * 20_000
        assert STANDARD.get_rule("inlineKatex").start(source) is None

    def test_unterminated_block(self) -> None:
        source = "$$\n" + "x\n" * 5_000
        tokens = list(Lexer(STANDARD).tokenize(source))
        assert "".join(t.raw for t in tokens) == source

    def test_long_price_line(self) -> None:
        source = " ".join(f"${i}" for i in range(10_000))
        assert STANDARD.get_rule("inlineKatex").start(source) is None
        assert NON_STANDARD.get_rule("inlineKatex").start(source + "$") == 0

    def test_many_unterminated_brackets(self) -> None:
        source = " \\[a" * 20_000
        assert STANDARD.get_rule("inlineBlockKatex").start(source) is None


class TestReachAgreement:
    """Skipping hopeless candidates gives the same offset as trying them."""

    @given(math_text)
    @settings(max_examples=300)
    def test_standard(self, source: str) -> None:
        matcher = inline_pattern(False).match
        expected = find_start(source, ("$", "\\("), matcher)
        assert find_start(source, ("$", "\\("), matcher, reach=LineReach(source)) == expected

    @given(math_text)
    @settings(max_examples=300)
    def test_non_standard(self, source: str) -> None:
        matcher = inline_pattern(True).match
        expected = find_start(source, ("$", "\\("), matcher, require_boundary=False)
        reach = LineReach(source, lookahead=False)
        assert (
            find_start(source, ("$", "\\("), matcher, require_boundary=False, reach=reach)
            == expected
        )

    @given(math_text)
    @settings(max_examples=300)
    def test_bracket(self, source: str) -> None:
        matcher = BRACKET_BLOCK_RE.match
        expected = find_start(source, ("\\[",), matcher)
        assert find_start(source, ("\\[",), matcher, reach=BracketReach(source)) == expected
