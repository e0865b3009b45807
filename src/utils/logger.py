"""
Logger utility for tracking simulation runs.
"""

import json
import logging
import os
from datetime import datetime

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Logger:
    """
    Run logger writing to a log file and the console, plus JSON exports of
    per-step metrics and the run configuration.
    """

    def __init__(self, log_dir='logs', experiment_name=None, level=logging.INFO):
        """
        Initialize logger.

        Args:
            log_dir (str): Directory for log files
            experiment_name (str): Name of the run
            level (int): Logging level
        """
        self.log_dir = log_dir
        os.makedirs(log_dir, exist_ok=True)

        if experiment_name is None:
            experiment_name = f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.experiment_name = experiment_name
        self.log_file = os.path.join(log_dir, f"{experiment_name}.log")

        self.logger = logging.getLogger(f"bacteria_sim.{experiment_name}")
        self.logger.setLevel(level)
        self.logger.propagate = False
        if not self.logger.handlers:
            formatter = logging.Formatter(LOG_FORMAT)
            for handler in (logging.FileHandler(self.log_file), logging.StreamHandler()):
                handler.setFormatter(formatter)
                self.logger.addHandler(handler)

        self.metrics = []

    def info(self, message):
        """Log info message."""
        self.logger.info(message)

    def warning(self, message):
        """Log warning message."""
        self.logger.warning(message)

    def error(self, message):
        """Log error message."""
        self.logger.error(message)

    def log_metrics(self, step, metrics_dict):
        """
        Log the scalar metrics of a step.

        Args:
            step (int): Step number
            metrics_dict (dict): Metrics; nested values are kept in the
                JSON export but left out of the console line
        """
        self.metrics.append({'step': step, **metrics_dict})

        metrics_str = ', '.join(
            f"{k}: {v:.4f}" if isinstance(v, float) else f"{k}: {v}"
            for k, v in metrics_dict.items() if not isinstance(v, (dict, list))
        )
        self.info(f"Step {step} - {metrics_str}")

    def save_metrics(self):
        """
        Save metrics to JSON file.

        Returns:
            str: Path of the metrics file
        """
        metrics_file = os.path.join(self.log_dir, f"{self.experiment_name}_metrics.json")
        with open(metrics_file, 'w') as f:
            json.dump(self.metrics, f, indent=2)
        self.info(f"Metrics saved to {metrics_file}")
        return metrics_file

    def log_config(self, config_dict):
        """
        Save the run configuration.

        Args:
            config_dict (dict): Configuration parameters

        Returns:
            str: Path of the configuration file
        """
        config_file = os.path.join(self.log_dir, f"{self.experiment_name}_config.json")
        with open(config_file, 'w') as f:
            json.dump(config_dict, f, indent=2)
        self.info(f"Configuration saved to {config_file}")
        return config_file

    def close(self):
        """Detach and close the handlers of this run."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
