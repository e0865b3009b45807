"""
Simulation module driving the bacteria population.

This module provides the spatial index, the world entities, the movement
collaborator and the tick orchestrator that ties them together.
"""

from .spatial_grid import SpatialIndex
from .entities import Food, Obstacle, Predator
from .movement import MovementModel, RandomWalkMovement
from .tracking import IndividualTracker
from .population_loop import PopulationLoop

__all__ = [
    "SpatialIndex", "Food", "Obstacle", "Predator", "MovementModel",
    "RandomWalkMovement", "IndividualTracker", "PopulationLoop"
]
