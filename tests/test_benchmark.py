"""
Tests for the benchmark harness.

Plotting is mocked; timing assertions only check structure, never speed.
"""

from unittest.mock import MagicMock, patch

import pytest

from data.reader import EntryReader
from src.benchmark import (
    BenchmarkConfig,
    BenchmarkRunner,
    ComplexityBenchmarkHelper,
    create_search_benchmark,
)
from src.benchmark.benchmark import MISSING_NAME, MISSING_PHONE
from src.benchmark.simple_runner import build_parser, main


def make_config(**overrides) -> BenchmarkConfig:
    values = dict(
        x_names=["N"],
        x_vals=[3, 7],
        line_arg="provider",
        line_vals=["linear_search", "phone_directory", "name_directory"],
        line_names=["Linear", "Phone", "Name"],
        styles=[("blue", "-"), ("green", "-"), ("red", "-")],
        ylabel="Time (ms)",
        plot_name="test-benchmark",
        warmup_runs=1,
        measure_runs=3,
        min_runtime_ms=0.0,
    )
    values.update(overrides)
    return BenchmarkConfig(**values)


class TestBenchmarkRunner:
    """Test suite for BenchmarkRunner."""

    def test_do_bench_counts_runs(self):
        runner = BenchmarkRunner(make_config())
        fn = MagicMock()

        mean_time, std_dev, times = runner.do_bench(fn)

        assert fn.call_count == 1 + 3
        assert len(times) == 3
        assert mean_time >= 0
        assert std_dev >= 0

    def test_run_benchmark_records_results(self):
        config = make_config(line_vals=["fake"], line_names=["Fake"])
        runner = BenchmarkRunner(config)
        setup = MagicMock(return_value={"setup_time": 1.5, "rehash_count": 2})

        with patch("builtins.print"):
            runner.run_benchmark(lambda **kwargs: 0.0, {"fake": setup})

        results = runner.results["fake"]
        assert [r.x_value for r in results] == [3, 7]
        assert all(r.setup_time == 1.5 for r in results)
        assert all(r.rehash_count == 2 for r in results)
        assert setup.call_count == 2

    def test_failed_measurement_recorded_as_inf(self):
        config = make_config(line_vals=["broken"], line_names=["Broken"], x_vals=[1])
        runner = BenchmarkRunner(config)

        def broken(**kwargs):
            raise ValueError("boom")

        with patch("builtins.print"):
            runner.run_benchmark(broken, {})

        assert runner.results["broken"][0].value == float("inf")

    def test_generate_plot_saves_files(self):
        config = make_config(line_vals=["fake"], line_names=["Fake"])
        runner = BenchmarkRunner(config)
        with patch("builtins.print"):
            runner.run_benchmark(lambda **kwargs: 0.0, {})

        with patch("src.benchmark.benchmark.plt") as mock_plt:
            runner.generate_plot(show_plots=False, save_plot=True)

        saved = [call.args[0] for call in mock_plt.savefig.call_args_list]
        assert saved == [
            "test-benchmark.png",
            "test-benchmark-setup.png",
            "test-benchmark-memory.png",
        ]
        mock_plt.show.assert_not_called()


class TestComplexityBenchmarkHelper:
    """Test suite for the per-provider setup helpers."""

    def test_setup_linear_search(self, small_entry_dataset):
        with EntryReader(small_entry_dataset) as reader:
            setup = ComplexityBenchmarkHelper.setup_linear_search(reader, N=4)
            assert len(reader) == 4
            assert setup["algorithm"].get_algorithm_name() == "LinearSearch"
            assert setup["setup_time"] >= 0
            assert setup["memory_usage"] > 0

    def test_setup_phone_directory(self, small_entry_dataset):
        with EntryReader(small_entry_dataset) as reader:
            setup = ComplexityBenchmarkHelper.setup_phone_directory(reader, N=5)
            directory = setup["algorithm"].directory
            assert len(directory) == 5
            assert setup["rehash_count"] == directory.rehash_count
            assert setup["setup_time"] >= 0

    def test_setup_name_directory(self, small_entry_dataset):
        with EntryReader(small_entry_dataset) as reader:
            setup = ComplexityBenchmarkHelper.setup_name_directory(
                reader, N=7, max_load_factor=0.5
            )
            assert len(setup["algorithm"].directory) == 7
            assert setup["rehash_count"] == 1

    def test_targets(self, small_entry_dataset, sample_entries):
        with EntryReader(small_entry_dataset) as reader:
            assert ComplexityBenchmarkHelper.get_existing_entry(reader) in sample_entries
        assert ComplexityBenchmarkHelper.get_non_existing_entry() == (
            MISSING_NAME,
            MISSING_PHONE,
        )


class TestCreateSearchBenchmark:
    """Test suite for the end-to-end benchmark wiring."""

    @pytest.mark.parametrize("test_existing", [True, False])
    def test_run_all_providers(self, small_entry_dataset, test_existing):
        config = make_config()
        with EntryReader(small_entry_dataset) as reader:
            benchmark = create_search_benchmark(reader, config, test_existing)
            with patch("builtins.print"), patch("src.benchmark.benchmark.plt"):
                runner = benchmark.run(show_plots=False, print_data=True)

        for provider in config.line_vals:
            results = runner.results[provider]
            assert len(results) == 2
            assert all(r.value != float("inf") for r in results)

    def test_unknown_provider(self, small_entry_dataset):
        config = make_config(line_vals=["mystery"], line_names=["Mystery"], x_vals=[2])
        with EntryReader(small_entry_dataset) as reader:
            benchmark = create_search_benchmark(reader, config)
            with patch("builtins.print"), patch("src.benchmark.benchmark.plt"):
                runner = benchmark.run(show_plots=False, print_data=False)

        assert runner.results["mystery"][0].value == float("inf")


class TestSimpleRunner:
    """Test suite for the command-line runner."""

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.data_file == "data/entries.dat"
        assert args.providers == "linear_search,phone_directory,name_directory"
        assert args.max_load_factor == 1.0
        assert not args.no_plots

    def test_missing_data_file_exits(self, temp_dir):
        with patch("builtins.print"), pytest.raises(SystemExit) as exc:
            main(["--data-file", str(temp_dir / "missing.dat")])
        assert exc.value.code == 1

    def test_unknown_provider_exits(self):
        with patch("builtins.print"), pytest.raises(SystemExit) as exc:
            main(["--providers", "bloom_filter"])
        assert exc.value.code == 1
