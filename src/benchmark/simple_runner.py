"""
Simple benchmark runner for directory lookups.

Usage examples:
    python -m src.benchmark.simple_runner
    python simple_runner.py --providers phone_directory,name_directory --sizes 100,500,1000
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.append(str(project_root))

# Import after path setup
from data.reader import EntryReader  # noqa: E402
from src.benchmark import BenchmarkConfig, create_search_benchmark  # noqa: E402

PROVIDER_NAMES = {
    "linear_search": "Linear Search",
    "phone_directory": "Phone Directory (cuckoo)",
    "name_directory": "Name Directory (chaining)",
}

COLORS = ["blue", "green", "red", "orange", "purple", "brown"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Benchmark directory lookups")
    parser.add_argument(
        "--data-file", default="data/entries.dat", help="Path to entry data file"
    )
    parser.add_argument(
        "--providers",
        default="linear_search,phone_directory,name_directory",
        help="Comma-separated list of providers to test",
    )
    parser.add_argument(
        "--sizes",
        default="100,500,1000,5000,10000",
        help="Comma-separated list of dataset sizes",
    )
    parser.add_argument(
        "--max-load-factor",
        type=float,
        default=1.0,
        help="Load factor that triggers a name directory rehash while building",
    )
    parser.add_argument(
        "--test-non-existing",
        action="store_true",
        help="Also benchmark lookups of keys that are not stored",
    )
    parser.add_argument(
        "--output-prefix", default="benchmark", help="Prefix for output plot files"
    )
    parser.add_argument("--no-plots", action="store_true", help="Skip generating plots")
    return parser


def make_config(providers, sizes, args, suffix: str, linestyle: str) -> BenchmarkConfig:
    return BenchmarkConfig(
        x_names=["N"],
        x_vals=sizes,
        line_arg="provider",
        line_vals=providers,
        line_names=[PROVIDER_NAMES.get(p, p) for p in providers],
        styles=[(COLORS[i % len(COLORS)], linestyle) for i in range(len(providers))],
        ylabel="Time (ms)",
        plot_name=f"{args.output_prefix}-{suffix}",
        args={"max_load_factor": args.max_load_factor},
        warmup_runs=5,
        measure_runs=10,
        min_runtime_ms=5.0,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)

    providers = [p.strip() for p in args.providers.split(",")]
    sizes = [int(size.strip()) for size in args.sizes.split(",")]

    unknown = [p for p in providers if p not in PROVIDER_NAMES]
    if unknown:
        print(f"Error: unknown providers {', '.join(unknown)}")
        sys.exit(1)

    reader = None
    try:
        reader = EntryReader(args.data_file)
        print(f"Loaded {len(reader):,} entries from {args.data_file}")

        print("\nRunning benchmark for EXISTING entries...")
        config = make_config(providers, sizes, args, "existing", "-")
        benchmark = create_search_benchmark(reader, config, test_existing=True)
        benchmark.run(show_plots=not args.no_plots, print_data=True)
        print("[OK] Existing entry benchmark completed")

        if args.test_non_existing:
            print("\nRunning benchmark for NON-EXISTING entries...")
            config = make_config(providers, sizes, args, "non-existing", "--")
            benchmark = create_search_benchmark(reader, config, test_existing=False)
            benchmark.run(show_plots=not args.no_plots, print_data=True)
            print("[OK] Non-existing entry benchmark completed")

        print(f"\nBenchmark completed! Plots saved as {args.output_prefix}-*.png")

    except FileNotFoundError as e:
        print(f"Error: {e}")
        print("Make sure the data file exists. Generate it with: python -m data.generate")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        if reader is not None:
            reader.close()


if __name__ == "__main__":
    main()
