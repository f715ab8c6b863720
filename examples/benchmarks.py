#!/usr/bin/env python3
"""
quickfuzzy Benchmark Suite
==========================

Measures index build time, lookup throughput, memory and accuracy on
generated Ukrainian-looking words with random typos, and compares lookup
against brute-force Jaro-Winkler with rapidfuzz and jellyfish.

REQUIRES benchmark dependencies:
    pip install quickfuzzy[benchmarks]

Run benchmarks:
    python examples/benchmarks.py
"""

import gc
import random
import sys
import time
import tracemalloc
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import quickfuzzy as qf


def check_dependencies():
    """Verify all benchmark dependencies are installed."""
    missing = []

    try:
        import rapidfuzz  # noqa: F401
    except ImportError:
        missing.append("rapidfuzz")

    try:
        import jellyfish  # noqa: F401
    except ImportError:
        missing.append("jellyfish")

    if missing:
        print("ERROR: Missing benchmark dependencies:", ", ".join(missing))
        print()
        print("Install with:")
        print("    pip install quickfuzzy[benchmarks]")
        sys.exit(1)


check_dependencies()

import jellyfish
from rapidfuzz import distance as rf_distance
from rapidfuzz import process as rf_process

# =============================================================================
# Benchmark Infrastructure
# =============================================================================


@dataclass
class BenchmarkResult:
    """Result from a lookup benchmark."""

    name: str
    time_seconds: float
    queries: int
    true_positives: int

    @property
    def ops_per_second(self) -> float:
        return self.queries / self.time_seconds

    @property
    def accuracy(self) -> float:
        return self.true_positives / self.queries if self.queries else 0.0


def format_time(seconds: float) -> str:
    """Format time with appropriate units."""
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.1f}us"
    elif seconds < 1:
        return f"{seconds * 1_000:.2f}ms"
    else:
        return f"{seconds:.3f}s"


def format_throughput(ops: float) -> str:
    """Format operations per second."""
    if ops >= 1_000_000:
        return f"{ops / 1_000_000:.2f}M/s"
    elif ops >= 1_000:
        return f"{ops / 1_000:.1f}K/s"
    else:
        return f"{ops:.0f}/s"


def format_bytes(size: int) -> str:
    return f"{size / 1024 / 1024:.2f}MB"


def print_results(results: List[BenchmarkResult], baseline_name: str = "quickfuzzy"):
    """Print lookup results with speedup ratios."""
    baseline = next((r for r in results if r.name == baseline_name), results[0])

    for result in sorted(results, key=lambda r: r.time_seconds):
        speedup = baseline.time_seconds / result.time_seconds if result.time_seconds > 0 else float("inf")
        print(
            f"  {result.name:20s} {format_time(result.time_seconds):>10s}"
            f"  ({format_throughput(result.ops_per_second):>10s})"
            f"  {result.accuracy:6.1%} correct  {speedup:.2f}x"
        )


# =============================================================================
# Test Data Generation
# =============================================================================

VOWELS = "аеєиіїоуюяAEЄИІЇOУЮЯ"
CONSONANTS = "бвгґджзйклмнпрстфхцчшщьБВГҐДЖЗЙКЛМНПРСТФХЦЧШЩЬ"
TYPO_LETTERS = "йцукенгшщзхъфывапролджэячсмитьбю"


def generate_strings(count: int, min_len: int = 4, max_len: int = 8, seed: int = 42) -> List[str]:
    """Generate unique words alternating vowels and consonants."""
    rng = random.Random(seed)
    seen = set()
    result = []
    while len(result) < count:
        length = rng.randint(min_len, max_len)
        use_vowel = rng.random() < 0.5
        chars = []
        for _ in range(length):
            chars.append(rng.choice(VOWELS if use_vowel else CONSONANTS))
            use_vowel = not use_vowel
        word = "".join(chars)
        if word not in seen:
            seen.add(word)
            result.append(word)
    return result


def _remove(text: str, rng: random.Random) -> str:
    i = rng.randrange(len(text))
    return text[:i] + text[i + 1 :]


def _replace(text: str, rng: random.Random) -> str:
    i = rng.randrange(len(text))
    return text[:i] + rng.choice(TYPO_LETTERS) + text[i + 1 :]


def _swap(text: str, rng: random.Random) -> str:
    i, j = rng.randrange(len(text)), rng.randrange(len(text))
    chars = list(text)
    chars[i], chars[j] = chars[j], chars[i]
    return "".join(chars)


TYPOS: List[Callable[[str, random.Random], str]] = [_remove, _replace, _swap]


def spoil(text: str, distance: int, rng: random.Random) -> str:
    """Apply ``distance`` random typos (remove, replace or swap)."""
    for _ in range(distance):
        if not text:
            break
        text = rng.choice(TYPOS)(text, rng)
    return text


def generate_lookups(corpus: List[str], count: int, seed: int = 7) -> List[Dict[str, str]]:
    """Pick ``count`` corpus words and damage each with 1-3 typos."""
    rng = random.Random(seed)
    lookups = []
    for _ in range(count):
        source = rng.choice(corpus)
        lookups.append({"source": source, "target": spoil(source, rng.randint(1, 3), rng)})
    return lookups


# =============================================================================
# Benchmarks
# =============================================================================


def run_lookups(name: str, lookups: List[Dict[str, str]], find: Callable[[str], Optional[str]]) -> BenchmarkResult:
    true_positives = 0
    start = time.perf_counter()
    for lookup in lookups:
        if find(lookup["target"]) == lookup["source"]:
            true_positives += 1
    elapsed = time.perf_counter() - start
    return BenchmarkResult(name, elapsed, len(lookups), true_positives)


def benchmark_build(corpus: List[str]) -> qf.FuzzyMatcher:
    """Time and measure building a static matcher."""
    print("\n" + "=" * 70)
    print(f"INDEX BUILD ({len(corpus):,} strings)")
    print("=" * 70)

    gc.collect()
    tracemalloc.start()
    start = time.perf_counter()
    matcher = qf.FuzzyMatcher(corpus, mode="static")
    elapsed = time.perf_counter() - start
    current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    print(f"  Time:       {format_time(elapsed)}")
    print(f"  Throughput: {format_throughput(len(corpus) / elapsed)}")
    print(f"  Retained:   {format_bytes(current)}")
    print(f"  Peak:       {format_bytes(peak)}")
    return matcher


def benchmark_lookup(matcher: qf.FuzzyMatcher, corpus: List[str], lookups: List[Dict[str, str]]):
    """Compare indexed lookup with brute-force Jaro-Winkler scans."""
    print("\n" + "=" * 70)
    print(f"LOOKUP ({len(lookups):,} queries with 1-3 typos)")
    print("=" * 70)

    def quickfuzzy_find(query: str) -> Optional[str]:
        result = matcher.search(query)
        return result[0] if result else None

    def rapidfuzz_find(query: str) -> Optional[str]:
        best = rf_process.extractOne(query, corpus, scorer=rf_distance.JaroWinkler.similarity)
        return best[0] if best else None

    # Brute force over the whole corpus is slow; sample for jellyfish.
    sample = lookups[: max(1, len(lookups) // 10)]

    def jellyfish_find(query: str) -> Optional[str]:
        return max(corpus, key=lambda c: jellyfish.jaro_winkler_similarity(c, query))

    results = [
        run_lookups("quickfuzzy", lookups, quickfuzzy_find),
        run_lookups("rapidfuzz", lookups, rapidfuzz_find),
    ]
    print_results(results)

    print(f"\n  jellyfish brute force on {len(sample):,} queries:")
    print_results([run_lookups("jellyfish", sample, jellyfish_find)], baseline_name="jellyfish")

    info = matcher.cache_info()
    print(f"\n  Query cache: {info['hits']} hits, {info['misses']} misses, {info['size']} entries")


def benchmark_dynamic(corpus: List[str], lookups: List[Dict[str, str]]):
    """Dynamic mode: candidates passed per query and indexed lazily."""
    print("\n" + "=" * 70)
    print("DYNAMIC MODE (explicit candidates, lazy indexing)")
    print("=" * 70)

    matcher = qf.FuzzyMatcher()
    pool = corpus[:1000]
    subset = [lookup for lookup in lookups if lookup["source"] in set(pool)]
    if not subset:
        print("  No lookups fall inside the candidate pool")
        return

    def find(query: str) -> Optional[str]:
        result = matcher.search(query, pool)
        return result[0] if result else None

    cold = run_lookups("cold", subset, find)
    warm = run_lookups("warm", subset, find)
    print_results([cold, warm], baseline_name="cold")
    print(f"  Indexed lazily: {len(matcher):,} strings")


# =============================================================================
# Main
# =============================================================================


def main():
    print("=" * 70)
    print("quickfuzzy Benchmark Suite")
    print("=" * 70)

    corpus = generate_strings(10_000, 8, 20)
    lookups = generate_lookups(corpus, 1_000)

    matcher = benchmark_build(corpus)
    benchmark_lookup(matcher, corpus, lookups)
    benchmark_dynamic(corpus, lookups)


if __name__ == "__main__":
    main()
