"""
Visualization utilities for population statistics.
"""

import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


class Visualizer:
    """
    Chart tools for simulation history. Figures are written to disk only.
    """

    def __init__(self, output_dir='results'):
        """
        Initialize visualizer.

        Args:
            output_dir (str): Directory to save plots
        """
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

    def plot_population_dynamics(self, history, save_path=None):
        """
        Plot population size and average health over time.

        Args:
            history (dict): Simulation history with 'tick', 'population'
                and 'average_health' keys
            save_path (str): Path to save figure

        Returns:
            str: Path of the saved figure
        """
        fig, ax_population = plt.subplots(figsize=(10, 6))
        ax_population.plot(history['tick'], history['population'], linewidth=2, label='Population')
        ax_population.set_xlabel('Tick', fontsize=12)
        ax_population.set_ylabel('Population Size', fontsize=12)
        ax_population.grid(True, alpha=0.3)

        ax_health = ax_population.twinx()
        ax_health.plot(history['tick'], history['average_health'], linewidth=1.5,
                       color='red', alpha=0.7, label='Average Health')
        ax_health.set_ylabel('Average Health', fontsize=12)
        ax_health.set_ylim(0, 100)

        ax_population.set_title('Bacterial Population Dynamics', fontsize=14, fontweight='bold')

        if save_path is None:
            save_path = os.path.join(self.output_dir, 'population_dynamics.png')
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return save_path

    def plot_generations(self, history, save_path=None):
        """
        Plot average and highest generation over time.

        Args:
            history (dict): Simulation history with 'tick', 'average_generation'
                and 'highest_generation' keys
            save_path (str): Path to save figure

        Returns:
            str: Path of the saved figure
        """
        plt.figure(figsize=(10, 6))
        plt.plot(history['tick'], history['average_generation'], linewidth=2, label='Average')
        plt.plot(history['tick'], history['highest_generation'], linewidth=2,
                 color='purple', linestyle='--', label='Highest')
        plt.xlabel('Tick', fontsize=12)
        plt.ylabel('Generation', fontsize=12)
        plt.title('Generational Progress', fontsize=14, fontweight='bold')
        plt.legend()
        plt.grid(True, alpha=0.3)

        if save_path is None:
            save_path = os.path.join(self.output_dir, 'generations.png')
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close()
        return save_path
