"""
Unit tests for configuration resolution.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

import pytest
from config import resolve_config, SIMULATION_PARAMS


def test_defaults():
    config = resolve_config()

    for key, value in SIMULATION_PARAMS.items():
        assert config[key] == value
    assert config['starvation_time'] == 1800
    assert config['ticks_per_step'] == 1


def test_values_are_clamped():
    """Test out-of-bounds settings are brought into range."""
    config = resolve_config({'population_limit': 5000, 'initial_energy': 10,
                             'speed': 50, 'female_ratio': -1})

    assert config['population_limit'] == 1000
    assert config['initial_energy'] == 100.0
    assert config['speed'] == 20.0
    assert config['female_ratio'] == 0.0


def test_types_follow_defaults():
    config = resolve_config({'population_limit': 12.7, 'food_value': 30})

    assert config['population_limit'] == 12
    assert isinstance(config['population_limit'], int)
    assert isinstance(config['food_value'], float)


def test_unknown_key_raises():
    with pytest.raises(KeyError):
        resolve_config({'mutation_pressure': 0.5})


def test_starvation_time_has_floor():
    """Test starvation time is the feeding interval in ticks, at least 1800."""
    assert resolve_config({'feeding_interval': 10})['starvation_time'] == 1800
    assert resolve_config({'feeding_interval': 60})['starvation_time'] == 3600


def test_ticks_per_step_rounds_up():
    assert resolve_config({'speed': 2.5})['ticks_per_step'] == 3
    assert resolve_config({'speed': 0.1})['ticks_per_step'] == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
