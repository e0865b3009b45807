"""
Unit tests for the logging, metrics and chart utilities.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

import json

import pytest
from utils.logger import Logger
from utils.metrics import MetricsTracker
from utils.visualizer import Visualizer


def make_stats(tick, population, health=80.0, generation=1.0):
    return {
        'tick': tick,
        'population': population,
        'average_health': health,
        'average_generation': generation,
        'highest_generation': int(generation) + 1,
        'births': tick,
        'deaths': tick // 2,
        'lost_births': 0,
    }


def test_metrics_tracker_statistics():
    """Test windowed statistics over recorded ticks."""
    tracker = MetricsTracker()
    for tick, population in enumerate([10, 20, 30, 40], start=1):
        tracker.record_tick(make_stats(tick, population))

    stats = tracker.get_statistics(window=2)
    assert stats['mean_population'] == pytest.approx(35.0)
    assert stats['total_ticks'] == 4
    assert stats['births'] == 4
    assert stats['deaths'] == 2
    assert stats['highest_generation'] == 2


def test_metrics_tracker_empty():
    tracker = MetricsTracker()

    assert tracker.get_statistics()['mean_population'] == 0.0
    assert tracker.get_peak_population() is None


def test_peak_population():
    tracker = MetricsTracker()
    for tick, population in enumerate([5, 50, 20], start=1):
        tracker.record_tick(make_stats(tick, population))

    peak = tracker.get_peak_population()
    assert peak['tick'] == 2
    assert peak['population'] == 50


def test_logger_writes_metrics_and_config(tmp_path):
    """Test metrics and configuration are exported as JSON."""
    logger = Logger(log_dir=str(tmp_path), experiment_name='unit')
    logger.log_metrics(1, {'population': 10, 'average_health': 75.5,
                           'deaths_by_cause': {'old_age': 1}})
    metrics_file = logger.save_metrics()
    config_file = logger.log_config({'population_limit': 100})
    logger.close()

    with open(metrics_file) as f:
        metrics = json.load(f)
    assert metrics == [{'step': 1, 'population': 10, 'average_health': 75.5,
                        'deaths_by_cause': {'old_age': 1}}]
    with open(config_file) as f:
        assert json.load(f) == {'population_limit': 100}
    assert os.path.exists(os.path.join(str(tmp_path), 'unit.log'))


def test_visualizer_saves_charts(tmp_path):
    history = {
        'tick': [1, 2, 3],
        'population': [10, 12, 11],
        'average_health': [90.0, 85.0, 80.0],
        'average_generation': [1.0, 1.1, 1.2],
        'highest_generation': [1, 2, 2],
    }
    visualizer = Visualizer(output_dir=str(tmp_path))

    assert os.path.exists(visualizer.plot_population_dynamics(history))
    assert os.path.exists(visualizer.plot_generations(history))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
