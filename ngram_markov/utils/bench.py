# bench.py - rough timing harness for NGramChain.generate

import statistics
import time
from typing import Dict, List

from ..core.chain import NGramChain


def profile_generate(chain: NGramChain, runs: int = 200, warmup: int = 20, max_words: int = 50) -> List[float]:
    """Time `runs` generate() calls after `warmup` untimed ones. Returns ms per call."""
    for _ in range(warmup):
        chain.generate(max_words)

    times = []
    for _ in range(runs):
        t0 = time.perf_counter()
        chain.generate(max_words)
        times.append((time.perf_counter() - t0) * 1000.0)
    return times


def summarize(times: List[float]) -> Dict[str, float]:
    if not times:
        return {"calls": 0, "mean": 0.0, "median": 0.0, "p99": 0.0}
    ordered = sorted(times)
    idx = max(0, int(len(ordered) * 0.99) - 1)
    return {
        "calls": len(times),
        "mean": statistics.mean(times),
        "median": statistics.median(times),
        "p99": ordered[idx],
    }
