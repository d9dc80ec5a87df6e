"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Visualization generator for KenKen solver benchmark results.

    Creates charts comparing search modes across difficulties.
    """

    # Color palette for search modes
    COLORS = {
        "first": "#2ecc71",   # Green
        "unique": "#3498db",  # Blue
        "all": "#e74c3c",     # Red
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
        sns.set_theme(style="whitegrid")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_time_by_difficulty(),
            self.plot_nodes_distribution(),
            self.plot_depth_histogram(),
        ]

    def _modes(self) -> List[str]:
        return [m for m in self.COLORS if any(r.mode == m for r in self.results)]

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times per search mode."""
        fig, ax = plt.subplots(figsize=(10, 6))

        modes = self._modes()
        avg_times = [np.mean([r.time_seconds for r in self.results if r.mode == m]) for m in modes]
        colors = [self.COLORS[m] for m in modes]

        bars = ax.bar(modes, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        # Add value labels on bars
        for bar, time in zip(bars, avg_times):
            ax.annotate(f'{time:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Search mode', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Search Mode', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_comparison.png")

    def plot_time_by_difficulty(self) -> str:
        """Create grouped bar chart of times by difficulty and search mode."""
        fig, ax = plt.subplots(figsize=(12, 6))

        modes = self._modes()
        difficulties = sorted(set(r.difficulty for r in self.results))

        x = np.arange(len(difficulties))
        width = 0.8 / max(len(modes), 1)

        for i, mode in enumerate(modes):
            times = []
            for diff in difficulties:
                mode_diff_times = [
                    r.time_seconds for r in self.results
                    if r.mode == mode and r.difficulty == diff
                ]
                times.append(np.mean(mode_diff_times) if mode_diff_times else 0)

            offset = (i - len(modes) / 2 + 0.5) * width
            ax.bar(x + offset, times, width,
                   label=mode,
                   color=self.COLORS[mode],
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Solve Time by Difficulty and Search Mode', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.legend(title='Search mode')
        ax.set_ylim(bottom=0)

        return self._save("time_by_difficulty.png")

    def plot_nodes_distribution(self) -> str:
        """Create box plot of search nodes explored per difficulty and mode."""
        fig, ax = plt.subplots(figsize=(12, 6))

        data = {
            "difficulty": [r.difficulty for r in self.results],
            "mode": [r.mode for r in self.results],
            "nodes": [r.nodes_explored for r in self.results],
        }
        sns.boxplot(data=data, x="difficulty", y="nodes", hue="mode",
                    palette=self.COLORS, ax=ax)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Search nodes (Log Scale)', fontsize=12)
        ax.set_title('Search Nodes Explored', fontsize=14, fontweight='bold')
        # Node counts vary by orders of magnitude between modes
        ax.set_yscale('log')

        return self._save("nodes_distribution.png")

    def plot_depth_histogram(self) -> str:
        """Create histogram of the depth at which the first solution was found."""
        fig, ax = plt.subplots(figsize=(10, 6))

        depths = [r.depth for r in self.results if r.mode == "first" and r.depth is not None]
        if not depths:
            depths = [r.depth for r in self.results if r.depth is not None]
        bins = np.arange(0, max(depths, default=0) + 2) - 0.5
        sns.histplot(depths, bins=bins, color=self.COLORS["first"], ax=ax)

        ax.set_xlabel('Solution depth', fontsize=12)
        ax.set_ylabel('Puzzles', fontsize=12)
        ax.set_title('First Solution Depth', fontsize=14, fontweight='bold')

        return self._save("depth_histogram.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Mode | Accuracy | Avg Time | Avg Memory | Avg Nodes | Avg Sweeps |",
            "|------|----------|----------|------------|-----------|------------|"
        ]

        for mode in self._modes():
            mode_results = [r for r in self.results if r.mode == mode]

            solved = sum(1 for r in mode_results if r.solved)
            accuracy = (solved / len(mode_results)) * 100

            avg_time = np.mean([r.time_seconds for r in mode_results])
            avg_memory = np.mean([r.memory_bytes / (1024 * 1024) for r in mode_results])
            avg_nodes = np.mean([r.nodes_explored for r in mode_results])
            avg_sweeps = np.mean([r.iterations for r in mode_results])

            lines.append(
                f"| {mode} | {accuracy:.1f}% | {avg_time:.4f}s | {avg_memory:.2f} MB "
                f"| {avg_nodes:,.1f} | {int(avg_sweeps):,} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
