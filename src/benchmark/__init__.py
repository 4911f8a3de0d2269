"""
Benchmarking module for directory lookups.

This module provides a Triton-inspired benchmarking framework for comparing
the chaining name directory, the cuckoo phone directory and a linear scan
baseline across dataset sizes.
"""

from .benchmark import (
    BenchmarkConfig,
    BenchmarkResult,
    BenchmarkRunner,
    ComplexityBenchmarkHelper,
    create_search_benchmark,
    perf_report,
)

__all__ = [
    "BenchmarkConfig",
    "BenchmarkResult",
    "BenchmarkRunner",
    "ComplexityBenchmarkHelper",
    "create_search_benchmark",
    "perf_report",
]
