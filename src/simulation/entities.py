"""
Inert world entities: food, obstacles and predators.
"""

from config import FOOD_MAX_NUTRITION, FOOD_REGEN_RATE, FOOD_SIZE_RANGE
from bacteria.organism import Vector


class Food:
    """
    Food item that loses nutrition when bitten and slowly regrows.

    Attributes:
        pos (Vector): Position
        nutrition (float): Remaining nutritional value
    """

    def __init__(self, pos, nutrition=FOOD_MAX_NUTRITION):
        self.pos = pos if isinstance(pos, Vector) else Vector(*pos)
        self.nutrition = float(nutrition)

    @property
    def size(self):
        """Diameter scaled from nutrition 10-50 to 5-15."""
        low, high = FOOD_SIZE_RANGE
        fraction = (self.nutrition - 10.0) / (FOOD_MAX_NUTRITION - 10.0)
        return max(low, min(high, low + fraction * (high - low)))

    def bite(self, amount):
        """
        Remove nutrition.

        Returns:
            bool: True if the food is used up
        """
        self.nutrition -= amount
        return self.nutrition <= 0

    def regenerate(self):
        if self.nutrition < FOOD_MAX_NUTRITION:
            self.nutrition = min(FOOD_MAX_NUTRITION, self.nutrition + FOOD_REGEN_RATE)

    def __repr__(self):
        return f"Food(pos={self.pos}, nutrition={self.nutrition:.1f})"


class Obstacle:
    """Axis-aligned rectangle anchored at its top-left corner."""

    def __init__(self, pos, width, height):
        self.pos = pos if isinstance(pos, Vector) else Vector(*pos)
        self.width = width
        self.height = height

    def contains(self, point):
        return (self.pos.x <= point.x <= self.pos.x + self.width
                and self.pos.y <= point.y <= self.pos.y + self.height)

    def __repr__(self):
        return f"Obstacle(pos={self.pos}, size=({self.width:.0f}, {self.height:.0f}))"


class Predator:
    """Predator placed in the world; its hunting behavior lives elsewhere."""

    def __init__(self, pos, perception_radius=200.0):
        self.pos = pos if isinstance(pos, Vector) else Vector(*pos)
        self.perception_radius = perception_radius

    def __repr__(self):
        return f"Predator(pos={self.pos})"
