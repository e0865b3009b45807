"""
Metrics tracking for simulation runs.
"""

import numpy as np


class MetricsTracker:
    """
    Track and summarize per-tick statistics of a population run.
    """

    def __init__(self):
        """Initialize metrics tracker."""
        self.reset()

    def reset(self):
        """Reset all metrics."""
        self.ticks = []
        self.population_sizes = []
        self.average_health = []
        self.average_generation = []
        self.highest_generation = 0
        self.births = 0
        self.deaths = 0
        self.lost_births = 0

    def record_tick(self, stats):
        """
        Record the statistics of one tick.

        Args:
            stats (dict): Output of ``PopulationLoop.compute_statistics``
        """
        self.ticks.append(stats['tick'])
        self.population_sizes.append(stats['population'])
        self.average_health.append(stats['average_health'])
        self.average_generation.append(stats['average_generation'])
        self.highest_generation = max(self.highest_generation, stats['highest_generation'])
        # Counters are cumulative in the loop
        self.births = stats['births']
        self.deaths = stats['deaths']
        self.lost_births = stats['lost_births']

    def get_statistics(self, window=100):
        """
        Get statistical summary of recent ticks.

        Args:
            window (int): Window size for recent statistics

        Returns:
            dict: Statistics dictionary
        """
        recent_population = self.population_sizes[-window:]
        recent_health = self.average_health[-window:]
        recent_generation = self.average_generation[-window:]

        return {
            'mean_population': float(np.mean(recent_population)) if recent_population else 0.0,
            'std_population': float(np.std(recent_population)) if recent_population else 0.0,
            'mean_health': float(np.mean(recent_health)) if recent_health else 0.0,
            'mean_generation': float(np.mean(recent_generation)) if recent_generation else 0.0,
            'highest_generation': self.highest_generation,
            'births': self.births,
            'deaths': self.deaths,
            'lost_births': self.lost_births,
            'total_ticks': len(self.ticks)
        }

    def print_statistics(self, window=100):
        """
        Print formatted statistics.

        Args:
            window (int): Window size for recent statistics
        """
        stats = self.get_statistics(window)
        print(f"\n{'='*60}")
        print(f"Statistics (last {window} ticks):")
        print(f"{'='*60}")
        print(f"Total Ticks:         {stats['total_ticks']}")
        print(f"Mean Population:     {stats['mean_population']:.2f} ± {stats['std_population']:.2f}")
        print(f"Mean Health:         {stats['mean_health']:.2f}")
        print(f"Mean Generation:     {stats['mean_generation']:.2f}")
        print(f"Highest Generation:  {stats['highest_generation']}")
        print(f"Births / Deaths:     {stats['births']} / {stats['deaths']}")
        print(f"Lost Births:         {stats['lost_births']}")
        print(f"{'='*60}\n")

    def get_peak_population(self):
        """
        Get the tick with the largest population.

        Returns:
            dict: Peak tick information, or None before any tick is recorded
        """
        if not self.population_sizes:
            return None

        peak_idx = int(np.argmax(self.population_sizes))
        return {
            'tick': self.ticks[peak_idx],
            'population': self.population_sizes[peak_idx],
            'average_health': self.average_health[peak_idx]
        }
