"""
Utility modules for logging, metrics and statistic charts.
"""

from .logger import Logger
from .visualizer import Visualizer
from .metrics import MetricsTracker

__all__ = ["Logger", "Visualizer", "MetricsTracker"]
