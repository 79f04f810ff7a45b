"""Benchmark harness for the A* engine."""

from .harness import LARGE_WORLD, BenchmarkReport, run_benchmark

__all__ = [
    'LARGE_WORLD',
    'BenchmarkReport',
    'run_benchmark'
]
