import os
import random
import statistics
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import matplotlib.pyplot as plt
import psutil

MISSING_PHONE = "(000)000-0000"
MISSING_NAME = "@not@exists@"


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run, similar to triton.testing.Benchmark"""

    x_names: List[str]
    x_vals: List[Union[int, float]]
    line_arg: str
    line_vals: List[str]
    line_names: List[str]
    styles: List[Tuple[str, str]]
    ylabel: str
    plot_name: str
    args: Dict[str, Any] = field(default_factory=dict)
    warmup_runs: int = 3
    measure_runs: int = 10
    min_runtime_ms: float = 10.0
    measure_memory: bool = True
    measure_setup_time: bool = True


@dataclass
class BenchmarkResult:
    """Result of a single benchmark measurement"""

    value: float
    std_dev: float
    measurements: List[float]
    config_name: str
    x_value: Union[int, float]
    setup_time: Optional[float] = None
    memory_usage: Optional[float] = None
    rehash_count: Optional[int] = None


def current_memory_mb() -> float:
    """Resident set size of this process in MB."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class BenchmarkRunner:
    """Core benchmarking runner that handles timing and statistics"""

    def __init__(self, config: BenchmarkConfig):
        self.config = config
        self.results: Dict[str, List[BenchmarkResult]] = {}
        self.total_steps: int = 0
        self.current_step: int = 0

    def do_bench(self, fn: Callable[[], Any]) -> Tuple[float, float, List[float]]:
        """Time a function call multiple times and return statistics"""
        for _ in range(self.config.warmup_runs):
            fn()

        times: List[float] = []
        total_runtime = 0.0

        while (
            len(times) < self.config.measure_runs
            or total_runtime < self.config.min_runtime_ms
        ):
            start = time.perf_counter()
            fn()
            end = time.perf_counter()

            runtime_ms = (end - start) * 1000
            times.append(runtime_ms)
            total_runtime += runtime_ms

        mean_time = statistics.mean(times)
        std_dev = statistics.stdev(times) if len(times) > 1 else 0.0

        return mean_time, std_dev, times

    def run_benchmark(
        self,
        benchmark_fn: Callable[..., float],
        setup_fns: Dict[str, Callable[..., Dict[str, Any]]],
    ) -> None:
        """Run the complete benchmark suite with progress indication"""
        self.total_steps = len(self.config.line_vals) * len(self.config.x_vals)
        self.current_step = 0

        print(f"\nStarting benchmark: {self.config.plot_name}")
        print(
            f"Testing {len(self.config.line_vals)} providers on {len(self.config.x_vals)} sizes"
        )
        print(f"Started at {datetime.now().strftime('%H:%M:%S')}")
        print("=" * 80)

        for i, line_val in enumerate(self.config.line_vals):
            line_results = []
            provider_name = (
                self.config.line_names[i]
                if i < len(self.config.line_names)
                else line_val.replace("_", " ").title()
            )

            print(f"\n[{i + 1}/{len(self.config.line_vals)}] Testing {provider_name}")
            print("-" * 60)

            for x_val in self.config.x_vals:
                self.current_step += 1
                progress = (self.current_step / self.total_steps) * 100
                print(
                    f"[{self.current_step:2d}/{self.total_steps}] "
                    f"N={x_val:>12,} ({progress:5.1f}%) ",
                    end="",
                    flush=True,
                )

                start_time = time.time()
                try:
                    args = self.config.args.copy()
                    args[self.config.x_names[0]] = x_val
                    args[self.config.line_arg] = line_val

                    setup_data: Dict[str, Any] = {}
                    if line_val in setup_fns:
                        setup_data = setup_fns[line_val](**args)
                        args.update(setup_data)

                    mean_time, std_dev, measurements = self.do_bench(
                        lambda: benchmark_fn(**args)
                    )

                    result = BenchmarkResult(
                        value=mean_time,
                        std_dev=std_dev,
                        measurements=measurements,
                        config_name=line_val,
                        x_value=x_val,
                        setup_time=setup_data.get("setup_time")
                        if self.config.measure_setup_time
                        else None,
                        memory_usage=setup_data.get("memory_usage")
                        if self.config.measure_memory
                        else None,
                        rehash_count=setup_data.get("rehash_count"),
                    )
                    line_results.append(result)

                    elapsed = time.time() - start_time
                    print(f"→ {mean_time:8.3f}ms (±{std_dev:6.3f}) [{elapsed:4.1f}s]")

                except (ValueError, KeyError, IndexError) as e:
                    elapsed = time.time() - start_time
                    print(f"→ FAILED: {str(e)[:50]}... [{elapsed:4.1f}s]")
                    line_results.append(
                        BenchmarkResult(
                            value=float("inf"),
                            std_dev=0.0,
                            measurements=[],
                            config_name=line_val,
                            x_value=x_val,
                        )
                    )

            self.results[line_val] = line_results

        print("\n" + "=" * 80)
        print(f"Benchmark completed at {datetime.now().strftime('%H:%M:%S')}")

    def generate_plot(self, show_plots: bool = True, save_plot: bool = True) -> None:
        """Generate performance plots with error bars"""
        self._generate_single_plot(
            "Search Time",
            self.config.ylabel,
            lambda r: r.value,
            lambda r: r.std_dev,
            show_plots,
            save_plot,
        )

        if self.config.measure_setup_time:
            self._generate_single_plot(
                "Setup Time",
                "Setup Time (ms)",
                lambda r: r.setup_time,
                lambda r: 0,
                show_plots,
                save_plot,
                suffix="-setup",
            )

        if self.config.measure_memory:
            self._generate_single_plot(
                "Memory Usage",
                "Memory (MB)",
                lambda r: r.memory_usage,
                lambda r: 0,
                show_plots,
                save_plot,
                suffix="-memory",
            )

    def _generate_single_plot(
        self,
        title_suffix: str,
        ylabel: str,
        value_fn: Callable,
        error_fn: Callable,
        show_plots: bool,
        save_plot: bool,
        suffix: str = "",
    ) -> None:
        """Generate a single plot"""
        plt.figure(figsize=(12, 8))

        for i, line_val in enumerate(self.config.line_vals):
            if line_val not in self.results:
                continue

            valid = [r for r in self.results[line_val] if value_fn(r) is not None]
            if not valid:
                continue

            color, style = (
                self.config.styles[i] if i < len(self.config.styles) else ("blue", "-")
            )
            label = (
                self.config.line_names[i]
                if i < len(self.config.line_names)
                else line_val
            )

            plt.errorbar(
                [r.x_value for r in valid],
                [value_fn(r) for r in valid],
                yerr=[error_fn(r) for r in valid],
                color=color,
                linestyle=style,
                marker="o",
                label=label,
                capsize=5,
                capthick=2,
            )

        plt.xlabel(self.config.x_names[0])
        plt.ylabel(ylabel)
        plt.title(f"{self.config.plot_name} - {title_suffix}")
        plt.legend()
        plt.grid(True, alpha=0.3)
        plt.tight_layout()

        if save_plot:
            filename = f"{self.config.plot_name}{suffix}.png"
            plt.savefig(filename, dpi=300, bbox_inches="tight")

        if show_plots:
            plt.show()
        else:
            plt.close()

    def print_data(self) -> None:
        """Print detailed benchmark results"""
        print(f"\n{self.config.plot_name} Benchmark Results")
        print("=" * 80)

        for line_val in self.config.line_vals:
            if line_val not in self.results:
                continue

            line_name = self.config.line_names[self.config.line_vals.index(line_val)]
            print(f"\n{line_name} ({line_val}):")

            header = f"{'N':<10} {'Search (ms)':<12} {'Std Dev':<10}"
            if self.config.measure_setup_time:
                header += f" {'Setup (ms)':<12}"
            if self.config.measure_memory:
                header += f" {'Memory (MB)':<12}"
            header += f" {'Rehashes':<8}"
            print(header)
            print("-" * len(header))

            for result in self.results[line_val]:
                row = f"{result.x_value:<10} {result.value:<12.4f} {result.std_dev:<10.4f}"
                if self.config.measure_setup_time:
                    setup = result.setup_time
                    row += f" {setup:<12.4f}" if setup is not None else f" {'N/A':<12}"
                if self.config.measure_memory:
                    memory = result.memory_usage
                    row += f" {memory:<12.2f}" if memory is not None else f" {'N/A':<12}"
                rehashes = result.rehash_count
                row += f" {rehashes:<8}" if rehashes is not None else f" {'N/A':<8}"
                print(row)


def perf_report(config: BenchmarkConfig):
    """Decorator for performance reporting, similar to triton.testing.perf_report"""

    def decorator(func):
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        def run(
            show_plots: bool = True,
            print_data: bool = True,
            setup_fns: Optional[Dict[str, Callable]] = None,
        ):
            runner = BenchmarkRunner(config)
            runner.run_benchmark(func, setup_fns or {})

            if print_data:
                runner.print_data()
            if show_plots or config.plot_name:
                runner.generate_plot(show_plots=show_plots)

            return runner

        wrapper.run = run
        wrapper.config = config
        return wrapper

    return decorator


class ComplexityBenchmarkHelper:
    """Helper class for measuring build time and memory of each lookup provider"""

    @staticmethod
    def setup_linear_search(reader, N: int, **kwargs) -> Dict[str, Any]:
        """Setup for linear search - just needs a reader with limit"""
        from ..algorithms.linear_search import LinearSearch

        setup_start = time.perf_counter()
        reader.set_limit(N)
        algorithm = LinearSearch(reader, field="phone")
        setup_time = (time.perf_counter() - setup_start) * 1000

        return {
            "algorithm": algorithm,
            "reader": reader,
            "setup_time": setup_time,
            "memory_usage": current_memory_mb(),
        }

    @staticmethod
    def setup_phone_directory(reader, N: int, **kwargs) -> Dict[str, Any]:
        """Setup for the cuckoo phone directory - built fresh for each N"""
        from ..algorithms.directory_search import PhoneLookup

        reader.set_limit(N)
        algorithm = PhoneLookup(reader).build()

        return {
            "algorithm": algorithm,
            "reader": reader,
            "setup_time": algorithm.build_time * 1000,
            "memory_usage": current_memory_mb(),
            "rehash_count": algorithm.directory.rehash_count,
        }

    @staticmethod
    def setup_name_directory(reader, N: int, **kwargs) -> Dict[str, Any]:
        """Setup for the chaining name directory - built fresh for each N"""
        from ..algorithms.directory_search import NameLookup

        reader.set_limit(N)
        algorithm = NameLookup(
            reader, max_load_factor=kwargs.get("max_load_factor", 1.0)
        ).build()

        return {
            "algorithm": algorithm,
            "reader": reader,
            "setup_time": algorithm.build_time * 1000,
            "memory_usage": current_memory_mb(),
            "rehash_count": algorithm.directory.rehash_count,
        }

    @staticmethod
    def get_existing_entry(reader, **kwargs) -> Tuple[str, str]:
        """Get a random existing (name, phone) pair from the reader"""
        n = len(reader)
        if n == 0:
            return "", ""
        return reader[random.randint(0, n - 1)]

    @staticmethod
    def get_non_existing_entry(**kwargs) -> Tuple[str, str]:
        """Get a (name, phone) pair that never appears in generated data"""
        return MISSING_NAME, MISSING_PHONE


def create_search_benchmark(
    reader, config: BenchmarkConfig, test_existing: bool = True
) -> Callable:
    """Create a lookup benchmark function for the configured providers"""

    setup_functions = {
        "linear_search": ComplexityBenchmarkHelper.setup_linear_search,
        "phone_directory": ComplexityBenchmarkHelper.setup_phone_directory,
        "name_directory": ComplexityBenchmarkHelper.setup_name_directory,
    }

    @perf_report(config)
    def benchmark(N: int, provider: str, **kwargs):
        """Benchmark function that measures lookup time"""
        if test_existing:
            name, phone = ComplexityBenchmarkHelper.get_existing_entry(reader)
        else:
            name, phone = ComplexityBenchmarkHelper.get_non_existing_entry()

        if provider not in setup_functions:
            raise ValueError(f"Unknown provider: {provider}")

        target = name if provider == "name_directory" else phone
        result = kwargs["algorithm"].search(target)
        return result.time_taken * 1000  # Convert to milliseconds

    benchmark_setup_fns = {
        provider: (
            lambda setup=setup_functions[provider], **kw: setup(reader, **kw)
        )
        for provider in config.line_vals
        if provider in setup_functions
    }

    original_run = benchmark.run

    def enhanced_run(show_plots: bool = True, print_data: bool = True):
        return original_run(
            show_plots=show_plots,
            print_data=print_data,
            setup_fns=benchmark_setup_fns,
        )

    benchmark.run = enhanced_run
    return benchmark
