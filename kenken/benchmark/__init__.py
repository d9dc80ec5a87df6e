"""Benchmark module for the KenKen solver."""

from .benchmark import Benchmark, BenchmarkResult, SEARCH_MODES
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "SEARCH_MODES", "Visualizer"]
