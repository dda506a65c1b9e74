"""Shared fixtures for mdmath tests."""

from __future__ import annotations

import pytest

from mdmath import Lexer, MathConfig, MathExtension, create_extension


class FakeEngine:
    """Typesetting engine double.

    Records calls and returns an ``<svg>`` whose width depends on the
    source length. Rendering without a preceding reset_state() fails, the
    way a real engine's leftover counters corrupt output.
    """

    def __init__(self, markup: str | None = None) -> None:
        self.calls: list[tuple[str, bool]] = []
        self.resets = 0
        self._fresh = False
        self._markup = markup

    def reset_state(self) -> None:
        self.resets += 1
        self._fresh = True

    def render(self, source: str, *, display: bool) -> str:
        if not self._fresh:
            raise AssertionError("render() called without reset_state()")
        self._fresh = False
        self.calls.append((source, display))
        if self._markup is not None:
            return self._markup
        return f'<svg xmlns="http://www.w3.org/2000/svg" width="{len(source)}ex" height="2ex"><text>{source}</text></svg>'


class FailingEngine:
    """Engine double whose render always raises."""

    def reset_state(self) -> None:
        pass

    def render(self, source: str, *, display: bool) -> str:
        raise ValueError(f"Undefined control sequence in {source!r}")


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def extension(engine: FakeEngine) -> MathExtension:
    return create_extension(engine, MathConfig())


@pytest.fixture
def lexer(extension: MathExtension) -> Lexer:
    return Lexer(extension)


@pytest.fixture
def non_standard_lexer(engine: FakeEngine) -> Lexer:
    return Lexer(create_extension(engine, MathConfig(non_standard=True)))


@pytest.fixture
def failing_engine() -> FailingEngine:
    return FailingEngine()
