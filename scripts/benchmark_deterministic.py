"""Deterministic A* micro-benchmarks.

Runs the built-in large world in both unbounded and bounded mode, plus a few
small hand-written worlds, and reports timing and path quality. Useful for
quick regressions and CI smoke tests.

Usage:
    python scripts/benchmark_deterministic.py [--iterations N] [--output FILE.json]
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from typing import Any, Dict

from astar_engine.benchmark.harness import LARGE_WORLD, run_benchmark


SMALL_WORLDS = {
    "straight": "F.......T",
    "detour": ".F...\n.XXX.\n...T.",
    "river": "F~~T\n.MM.\n....",
}


def run(iterations: int = 20) -> Dict[str, Any]:
    """Run every benchmark case and collect their summaries."""
    cases = [("large", LARGE_WORLD, False), ("large_bounded", LARGE_WORLD, True)]
    cases.extend((name, text, False) for name, text in SMALL_WORLDS.items())

    results = []
    start = time.perf_counter()
    for name, text, bounded in cases:
        summary = run_benchmark(text, iterations=iterations, bounded=bounded).to_dict()
        summary["case"] = name
        results.append(summary)

    return {
        "iterations": iterations,
        "results": results,
        "all_found": all(r["found"] for r in results),
        "total_time": time.perf_counter() - start,
    }


def print_summary(results: Dict[str, Any]) -> None:
    print("Deterministic A* Benchmarks")
    print("=" * 50)

    for result in results["results"]:
        status = "OK" if result["found"] else "FAIL"
        print(f"{result['case']:14s} {status:4s} median={result['median_time']*1000:.3f}ms "
              f"expanded={result['nodes_expanded']} length={result['path_length']}")

    print("-" * 50)
    print(f"Total time: {results['total_time']:.3f}s")


def main():
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(description="Run deterministic A* benchmarks")
    parser.add_argument("--iterations", "-n", type=int, default=20,
                        help="Timed searches per case (default: 20)")
    parser.add_argument("--output", "-o", type=str,
                        help="Output JSON file path (if not specified, prints to stdout only)")

    args = parser.parse_args()

    try:
        results = run(iterations=args.iterations)
        print_summary(results)

        if args.output:
            with open(args.output, 'w') as f:
                json.dump(results, f, indent=2, default=str)
            print(f"\nResults written to {args.output}")

        sys.exit(0 if results["all_found"] else 1)

    except Exception as e:
        print(f"Benchmark failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
