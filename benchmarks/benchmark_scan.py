"""Benchmark math scanning on synthetic documents.

Times the reference lexer over inputs that stress the start search:
plain prose, dense inline math, currency-heavy text (also as one long
line), unterminated brackets and long dollar runs.
Scan time should grow roughly linearly with document size.

Run with:
    uv run python benchmarks/benchmark_scan.py
"""

import statistics
import time
from dataclasses import dataclass

from mdmath import Lexer, MathConfig, create_extension


class NullEngine:
    def reset_state(self) -> None:
        pass

    def render(self, source: str, *, display: bool) -> str:
        return "<svg></svg>"


@dataclass
class ScanTiming:
    """Timing data for one corpus."""

    name: str
    size: int
    median_ms: float
    tokens: int


CORPORA: dict[str, str] = {
    "prose": "The quick brown fox jumps over the lazy dog.\n" * 200,
    "inline_math": "Let $x_i$ and \\(y_i\\) satisfy $$x_i + y_i = 1$$ here.\n" * 200,
    "currency": "Costs rose from $100 to $200, then $300.\n" * 200,
    "price_line": " ".join(f"${i}" for i in range(10_000)),
    "open_brackets": " \\[a" * 5_000,
    "dollar_runs": "$$$ " * 2000,
    "blocks": "Intro\n$$\na^2 + b^2 = c^2\n$$\n\\[\\sum_i i\\]\n" * 100,
}


def benchmark_corpus(name: str, source: str, iterations: int = 20) -> ScanTiming:
    """Benchmark tokenization of a single corpus.

    Args:
        name: Corpus label.
        source: Document text.
        iterations: Number of timed runs.

    Returns:
        ScanTiming with the median run time.
    """
    lexer = Lexer(create_extension(NullEngine(), MathConfig()))
    times: list[float] = []
    tokens = 0
    for _ in range(iterations):
        start = time.perf_counter()
        tokens = len(list(lexer.tokenize(source)))
        times.append((time.perf_counter() - start) * 1000)
    return ScanTiming(name, len(source), statistics.median(times), tokens)


def main() -> None:
    print(f"{'corpus':<14} {'chars':>8} {'median ms':>10} {'tokens':>7}")
    for name, source in CORPORA.items():
        timing = benchmark_corpus(name, source)
        print(f"{timing.name:<14} {timing.size:>8} {timing.median_ms:>10.2f} {timing.tokens:>7}")


if __name__ == "__main__":
    main()
