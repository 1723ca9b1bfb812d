"""Benchmark module for comparing Knight's Tour solvers."""

from .benchmark import Benchmark, BenchmarkResult
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "Visualizer"]
