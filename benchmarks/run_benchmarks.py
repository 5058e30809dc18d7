"""Benchmark training and completion on corpora of growing size."""

import gc
import json
import random
import string
import time
from pathlib import Path

import matplotlib.pyplot as plt
import psutil

from src.completion.completion_index import CompletionIndex

CORPUS_SIZES = [1_000, 10_000, 100_000, 500_000]
QUERIES_PER_BENCHMARK = 1_000
VOCABULARY_SIZE = 20_000
RESULTS_DIR = Path(__file__).parent.parent / "static" / "benchmarks"
SEED = 1234


def build_vocabulary(rng: random.Random) -> list[str]:
    """Build a vocabulary of random lowercase words.

    Args:
        rng (random.Random): The random generator.

    Returns:
        list[str]: The vocabulary.

    """
    return [
        "".join(rng.choices(string.ascii_lowercase, k=rng.randint(2, 12)))
        for _ in range(VOCABULARY_SIZE)
    ]


def run_benchmark(
    corpus_size: int,
    vocabulary: list[str],
    rng: random.Random,
) -> dict[str, float]:
    """Train one index and time queries against it.

    Args:
        corpus_size (int): How many tokens are trained.
        vocabulary (list[str]): The words tokens are drawn from.
        rng (random.Random): The random generator.

    Returns:
        dict[str, float]: Training throughput, average completion
        latency and the resident memory growth of the process.

    """
    process = psutil.Process()
    gc.collect()
    rss_before = process.memory_info().rss

    # Zipf-like skew so rankings have something to order
    weights = [1 / (rank + 1) for rank in range(len(vocabulary))]
    tokens = rng.choices(vocabulary, weights=weights, k=corpus_size)

    index = CompletionIndex()
    start = time.perf_counter()
    for token in tokens:
        index.train(token)
    train_seconds = time.perf_counter() - start

    fragments = [
        word[: rng.randint(1, len(word))]
        for word in rng.choices(vocabulary, k=QUERIES_PER_BENCHMARK)
    ]
    start = time.perf_counter()
    for fragment in fragments:
        index.complete(fragment)
    query_seconds = time.perf_counter() - start

    rss_after = process.memory_info().rss

    return {
        "distinct_words": len(index),
        "train_words_per_second": corpus_size / train_seconds,
        "average_completion_ms": query_seconds * 1000 / len(fragments),
        "memory_growth_mb": (rss_after - rss_before) / 1024 / 1024,
    }


def plot_results(results: dict[int, dict[str, float]]) -> Path:
    """Save a bar chart of the average completion latency.

    Args:
        results (dict[int, dict[str, float]]): Results per corpus size.

    Returns:
        Path: The path of the saved chart.

    """
    sizes = list(results)
    y_values = [results[size]["average_completion_ms"] for size in sizes]

    plt.figure(figsize=(8, 5))
    x = range(len(sizes))
    plt.bar(x, y_values, color="steelblue")
    plt.xticks(x, [str(size) for size in sizes])
    plt.xlabel("Trained tokens")
    plt.ylabel("Average completion time (ms)")
    plt.title("Completion latency per corpus size")

    for i, v in enumerate(y_values):
        plt.text(i, v + 0.01, f"{v:.2f}", ha="center", va="bottom")

    plt.tight_layout()
    chart_path = RESULTS_DIR / "completion_latency.png"
    plt.savefig(chart_path)
    plt.close("all")
    return chart_path


def main() -> None:
    """Run every benchmark and store the results."""
    rng = random.Random(SEED)
    vocabulary = build_vocabulary(rng)
    RESULTS_DIR.mkdir(parents=True, exist_ok=True)

    results: dict[int, dict[str, float]] = {}
    for corpus_size in CORPUS_SIZES:
        print(f"\n--- Benchmarking {corpus_size} tokens ---")
        results[corpus_size] = run_benchmark(corpus_size, vocabulary, rng)
        for metric, value in results[corpus_size].items():
            print(f"{metric}: {value:.2f}")
        gc.collect()

    with open(RESULTS_DIR / "results.json", "w", encoding="utf-8") as f:
        json.dump(results, f, indent=4)

    print(f"\nChart saved to {plot_results(results)}")


if __name__ == "__main__":
    main()
