"""Render documents in parallel with one engine per worker thread.

Engines keep counters between calls, so they must not be shared across
threads. Rules and extensions hold no mutable state.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from mdmath import render


class BoxEngine:
    def reset_state(self) -> None:
        pass

    def render(self, source: str, *, display: bool) -> str:
        return f'<svg width="{len(source)}ex"></svg>'


_local = threading.local()


def render_doc(source: str) -> str:
    engine = getattr(_local, "engine", None)
    if engine is None:
        engine = _local.engine = BoxEngine()
    return render(source, engine)


docs = [f"Doc {i}: $x_{{{i}}}$ and $$y^{i}$$." for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(render_doc, docs))

print(f"Rendered {len(results)} documents in parallel")
print(results[0])
