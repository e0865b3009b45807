"""
Movement collaborators turning a chosen behavior into a new position.
"""

import math
import random
from abc import ABC, abstractmethod

from config import WIDTH, HEIGHT
from bacteria.behavior import EAT, MATE, REST
from bacteria.organism import Vector


class MovementModel(ABC):
    """
    Interface between the population loop and movement.

    The loop calls ``move`` once per organism per tick with the chosen
    behavior and the neighbors found by the spatial index.
    """

    @abstractmethod
    def move(self, organism, behavior, nearby):
        """
        Compute the organism's next position.

        Args:
            organism (Organism): Organism being moved
            behavior (str): Behavior chosen this tick
            nearby (dict): ``food``, ``predators`` and ``organisms`` lists

        Returns:
            Vector: New position
        """
        pass


class RandomWalkMovement(MovementModel):
    """
    Minimal movement: head for the nearest food or partner, stay put while
    resting, otherwise take a random step. Positions stay inside the world.
    """

    def __init__(self, width=WIDTH, height=HEIGHT, step_size=2.0, rng=None):
        """
        Initialize random walk movement.

        Args:
            width (float): World width
            height (float): World height
            step_size (float): Distance per tick at speed 1.0
            rng: Random source with ``uniform``
        """
        self.width = width
        self.height = height
        self.step_size = step_size
        self.rng = rng or random

    def move(self, organism, behavior, nearby):
        if behavior == REST:
            return organism.pos

        distance = self.step_size * organism.genome["speed"]
        target = None
        if behavior == EAT and nearby["food"]:
            target = min(nearby["food"], key=lambda f: organism.pos.distance_to(f.pos))
        elif behavior == MATE and nearby["organisms"]:
            target = min(nearby["organisms"], key=lambda o: organism.pos.distance_to(o.pos))

        if target is not None:
            dx = target.pos.x - organism.pos.x
            dy = target.pos.y - organism.pos.y
            gap = math.hypot(dx, dy)
            if gap <= distance:
                return target.pos.clamped(self.width, self.height)
            heading = math.atan2(dy, dx)
        else:
            heading = self.rng.uniform(-math.pi, math.pi)

        new_pos = Vector(organism.pos.x + math.cos(heading) * distance,
                         organism.pos.y + math.sin(heading) * distance)
        return new_pos.clamped(self.width, self.height)
