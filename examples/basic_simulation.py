"""
Basic example of a bacteria population run.

This demonstrates births, deaths and generational turnover under a
population limit, then charts the run.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from simulation.population_loop import PopulationLoop
from utils.metrics import MetricsTracker
from utils.visualizer import Visualizer


def main():
    """Run basic population simulation."""
    print("Starting bacteria simulation...")

    # Small world, short feeding interval and fast frames
    model = PopulationLoop(
        config={
            'initial_population': 30,
            'population_limit': 60,
            'feeding_interval': 30,
            'initial_food': 120,
            'food_spawn_amount': 12,
            'speed': 4,
        },
        width=400.0,
        height=300.0,
        seed=42
    )
    metrics = MetricsTracker()
    visualizer = Visualizer(output_dir='results/basic_simulation')

    num_steps = 500

    print(f"\nRunning {num_steps} frames ({model.config['ticks_per_step']} ticks each)...")
    for step in range(num_steps):
        model.step()
        stats = model.stats
        metrics.record_tick(stats)

        # Print progress every 50 frames
        if step % 50 == 0:
            print(f"Tick {stats['tick']:5d}: Population={stats['population']:3d}, "
                  f"Pregnant={stats['pregnant']:2d}, Health={stats['average_health']:.1f}, "
                  f"Highest Gen={stats['highest_generation']}")

        if not model.running:
            print(f"\nPopulation went extinct at tick {stats['tick']}")
            break

    metrics.print_statistics(window=num_steps)
    print(f"Deaths by cause: {model.stats['deaths_by_cause']}")

    print("\nGenerating charts...")
    visualizer.plot_population_dynamics(model.history)
    visualizer.plot_generations(model.history)
    print("Plots saved to results/basic_simulation/")

    print("\nSimulation complete!")


if __name__ == "__main__":
    main()
