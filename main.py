"""
Main entry point for the bacteria population simulation.

Run: python main.py
Dependencies: mesa, numpy, matplotlib
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from simulation.population_loop import PopulationLoop
from utils.logger import Logger
from utils.metrics import MetricsTracker


def main(steps=600, log_every=60):
    """Run the simulation headless and log its statistics"""
    logger = Logger(log_dir='logs')
    model = PopulationLoop()
    metrics = MetricsTracker()
    logger.log_config(model.config)

    for step in range(steps):
        if not model.running:
            logger.warning(f"Population went extinct at tick {model.tick_count}")
            break
        model.step()
        metrics.record_tick(model.stats)
        if step % log_every == 0:
            logger.log_metrics(step, model.stats)

    logger.save_metrics()
    metrics.print_statistics()


if __name__ == "__main__":
    main()
