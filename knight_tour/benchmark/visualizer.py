"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Visualization generator for Knight's Tour solver benchmark results.

    Creates charts comparing algorithm performance across board sizes.
    """

    # Color palette for algorithms
    COLORS = {
        "Backtracking": "#2ecc71",  # Green
        "Warnsdorff": "#3498db",    # Blue
        "Randomized": "#e74c3c",    # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        # Set style
        sns.set_style("whitegrid")
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_time_by_size(),
            self.plot_accuracy_by_size(),
            self.plot_nodes_by_size(),
        ]

    def _algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))

    def _sizes(self) -> List[int]:
        return sorted(set(r.board_size for r in self.results))

    def _save(self, filename: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, filename)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self._algorithms()
        avg_times = []
        colors = []

        for algo in algorithms:
            times = [r.time_seconds for r in self.results if r.algorithm == algo]
            avg_times.append(np.mean(times))
            colors.append(self.COLORS.get(algo, "#95a5a6"))

        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        # Add value labels on bars
        for bar, t in zip(bars, avg_times):
            ax.annotate(f'{t:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Algorithm', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Search Time by Algorithm', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_comparison.png")

    def _grouped_bars(self, ax, metric) -> None:
        """Draw one bar group per board size, one bar per algorithm."""
        algorithms = self._algorithms()
        sizes = self._sizes()

        x = np.arange(len(sizes))
        width = 0.8 / len(algorithms)

        for i, algo in enumerate(algorithms):
            values = []
            for size in sizes:
                subset = [r for r in self.results if r.algorithm == algo and r.board_size == size]
                values.append(metric(subset) if subset else 0)

            offset = (i - len(algorithms) / 2 + 0.5) * width
            ax.bar(x + offset, values, width,
                   label=algo,
                   color=self.COLORS.get(algo, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Board Size', fontsize=12)
        ax.set_xticks(x)
        ax.set_xticklabels([f"{s}x{s}" for s in sizes])
        ax.legend(title='Algorithm', bbox_to_anchor=(1.05, 1), loc='upper left')

    def plot_time_by_size(self) -> str:
        """Create grouped bar chart of times by board size and algorithm."""
        fig, ax = plt.subplots(figsize=(12, 6))
        self._grouped_bars(ax, lambda rs: np.mean([r.time_seconds for r in rs]))
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Search Time by Board Size and Algorithm', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)
        return self._save("time_by_size.png")

    def plot_accuracy_by_size(self) -> str:
        """Create grouped bar chart of the share of states solved."""
        fig, ax = plt.subplots(figsize=(12, 6))
        self._grouped_bars(ax, lambda rs: sum(1 for r in rs if r.solved) / len(rs) * 100)
        ax.set_ylabel('Solved (%)', fontsize=12)
        ax.set_title('Solved States by Board Size and Algorithm', fontsize=14, fontweight='bold')
        ax.set_ylim(0, 115)
        ax.axhline(y=100, color='gray', linestyle='--', alpha=0.3)
        return self._save("accuracy_by_size.png")

    def plot_nodes_by_size(self) -> str:
        """Create grouped bar chart of nodes explored."""
        fig, ax = plt.subplots(figsize=(12, 6))
        # +1 keeps zero-node runs (parity rejections) on the log axis
        self._grouped_bars(ax, lambda rs: np.mean([r.nodes_explored for r in rs]) + 1)
        ax.set_ylabel('Average Nodes Explored (Log Scale)', fontsize=12)
        ax.set_title('Nodes Explored by Board Size and Algorithm', fontsize=14, fontweight='bold')
        ax.set_yscale('log')
        return self._save("nodes_by_size.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Algorithm | Solved | Inconclusive | Avg Time | Avg Memory | Avg Nodes |",
            "|-----------|--------|--------------|----------|------------|-----------|"
        ]

        for algo in self._algorithms():
            algo_results = [r for r in self.results if r.algorithm == algo]

            solved = sum(1 for r in algo_results if r.solved)
            accuracy = (solved / len(algo_results)) * 100 if algo_results else 0
            inconclusive = sum(1 for r in algo_results if r.outcome == "inconclusive")

            avg_time = np.mean([r.time_seconds for r in algo_results])
            avg_memory = np.mean([r.memory_bytes / (1024 * 1024) for r in algo_results])
            avg_nodes = np.mean([r.nodes_explored for r in algo_results])

            lines.append(
                f"| {algo} | {accuracy:.1f}% | {inconclusive} | {avg_time:.4f}s | "
                f"{avg_memory:.2f} MB | {int(avg_nodes):,} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
