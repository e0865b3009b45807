"""
Bacteria module for the population simulation.

This module contains the heritable genome, the behavior selector, the
reproduction state machine and the organism agent that owns them.
"""

from .genome import Genome, GenomeFactory
from .behavior import BehaviorSelector
from .reproduction import ReproductionState
from .organism import Organism, Vector

__all__ = ["Genome", "GenomeFactory", "BehaviorSelector", "ReproductionState", "Organism", "Vector"]
