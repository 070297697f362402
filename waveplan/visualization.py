"""
Plan Visualization

Plots the convergence of both genetic searches and the size of the final
waves against the wave capacity.
"""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ga_engine.data_models import GenerationRecord

from .planner import PlanResult


def plot_fitness_history(history: List[GenerationRecord], title: str, ax: plt.Axes = None):
    """Best, average and best-ever fitness per generation"""
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))

    generations = [record.generation for record in history]
    ax.plot(generations, [r.best_fitness for r in history], label='Best', color='tab:blue')
    ax.plot(generations, [r.average_fitness for r in history], label='Average',
            color='tab:orange', alpha=0.8)
    ax.step(generations, [r.best_ever_fitness for r in history], where='post',
            label='Best ever', color='tab:green', linestyle='--')

    ax.set_xlabel('Generation')
    ax.set_ylabel('Fitness')
    ax.set_ylim(0, 105)
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)
    return ax


class PlanVisualizer:
    """Visualization of search progress and planning results"""

    def __init__(self, plan: PlanResult):
        self.plan = plan

    def plot_fitness_history(self, history: List[GenerationRecord], title: str,
                             ax: plt.Axes = None):
        return plot_fitness_history(history, title, ax)

    def plot_wave_sizes(self, ax: plt.Axes = None):
        """Units per wave with the capacity limit"""
        if ax is None:
            fig, ax = plt.subplots(figsize=(10, 6))

        waves = self.plan.waved_batches.to_waves()
        sizes = [wave.num_articles for wave in waves]
        capacity = self.plan.config.planning.max_articles_per_wave

        positions = np.arange(len(sizes))
        colors = ['tab:red' if size > capacity else 'tab:blue' for size in sizes]
        ax.bar(positions, sizes, color=colors, alpha=0.8)
        ax.axhline(capacity, color='black', linestyle='--', label=f'Capacity ({capacity})')

        ax.set_xticks(positions)
        ax.set_xlabel('Wave')
        ax.set_ylabel('Units')
        ax.set_title('Wave Sizes')
        ax.legend()
        ax.grid(True, axis='y', alpha=0.3)

    def plot_summary(self, figsize: Tuple[int, int] = (16, 10),
                     save_path: Optional[Union[str, Path]] = None):
        """
        Create a multi-panel summary of a planning run

        Args:
            figsize: Figure size (width, height)
            save_path: Optional path to save the figure
        """
        fig = plt.figure(figsize=figsize)
        gs = fig.add_gridspec(2, 2)

        ax_batch = fig.add_subplot(gs[0, 0])
        ax_wave = fig.add_subplot(gs[0, 1])
        ax_sizes = fig.add_subplot(gs[1, :])

        if self.plan.batch_search is not None:
            self.plot_fitness_history(self.plan.batch_search.history, 'Batch Search', ax_batch)
        else:
            ax_batch.set_title('Batch Search (skipped)')

        if self.plan.wave_search is not None:
            self.plot_fitness_history(self.plan.wave_search.history, 'Wave Search', ax_wave)
        else:
            ax_wave.set_title('Wave Search (skipped)')

        self.plot_wave_sizes(ax_sizes)

        fig.suptitle(f'Overall cost {self.plan.overall_cost} '
                     f'({self.plan.num_batches} batches, {self.plan.num_waves} waves)')
        plt.tight_layout()

        if save_path:
            Path(save_path).parent.mkdir(parents=True, exist_ok=True)
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)


def save_history_plot(history: List[GenerationRecord], title: str,
                      save_path: Union[str, Path]) -> str:
    """Plot a single fitness history to a PNG file"""
    fig, ax = plt.subplots(figsize=(10, 6))
    plot_fitness_history(history, title, ax)
    Path(save_path).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return str(save_path)
