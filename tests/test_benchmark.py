"""Tests for the benchmark runner and charts."""

import json
import os

import pytest
from knight_tour.benchmark import Benchmark, Visualizer
from knight_tour.solvers import WarnsdorffSolver, RandomizedWarnsdorffSolver


@pytest.fixture
def benchmark():
    bench = Benchmark(
        board_sizes=[5],
        states_per_size=2,
        moves_per_state=3,
        solvers={
            "Warnsdorff": WarnsdorffSolver(),
            "Randomized": RandomizedWarnsdorffSolver(seed=1),
        },
        timeout_seconds=60,
        seed=42
    )
    bench.run(show_progress=False)
    return bench


class TestBenchmark:
    """Tests for Benchmark."""

    def test_run(self, benchmark):
        assert len(benchmark.results) == 4
        warnsdorff = [r for r in benchmark.results if r.algorithm == "Warnsdorff"]
        # Generated states are cut from real tours, so the exhaustive solver succeeds
        assert all(r.solved for r in warnsdorff)
        assert all(r.board_size == 5 for r in benchmark.results)

    def test_summary(self, benchmark):
        summary = benchmark.get_summary()
        assert summary["total_states"] == 2
        assert summary["results_by_algorithm"]["Warnsdorff"]["accuracy"] == 100.0
        assert "5x5" in summary["results_by_size"]

    def test_save_results(self, benchmark, tmp_path):
        benchmark.save_results(str(tmp_path))

        with open(tmp_path / "benchmark_results.json") as f:
            rows = json.load(f)
        assert len(rows) == 4
        assert os.path.exists(tmp_path / "benchmark_summary.json")
        assert os.path.exists(tmp_path / "states.json")

    def test_charts(self, benchmark, tmp_path):
        visualizer = Visualizer(benchmark.results, str(tmp_path))
        charts = visualizer.generate_all()
        table = visualizer.generate_summary_table()

        assert len(charts) == 4
        for chart in charts:
            assert os.path.exists(chart)
        with open(table) as f:
            assert "Warnsdorff" in f.read()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
