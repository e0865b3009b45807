"""
Organism agent tying a genome to its behavior and reproduction state.
"""

import math

from mesa import Agent

from config import ORGANISM_SIZE, PERCEPTION_RADIUS, MAX_HEALTH, MAX_ENERGY
from .reproduction import FEMALE


class Vector:
    """
    Immutable 2-D position or velocity built only from finite numbers.
    """

    __slots__ = ("x", "y")

    def __init__(self, x, y):
        x = float(x)
        y = float(y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Vector components must be finite, got ({x}, {y})")
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __setattr__(self, name, value):
        raise AttributeError("Vector is immutable")

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def distance_to(self, other):
        return math.hypot(self.x - other.x, self.y - other.y)

    def clamped(self, width, height):
        """Copy constrained to [0, width] x [0, height]."""
        return Vector(min(max(self.x, 0.0), width), min(max(self.y, 0.0), height))

    def __repr__(self):
        return f"Vector({self.x:.2f}, {self.y:.2f})"


class Organism(Agent):
    """
    Individual bacterium in the population.

    Attributes:
        pos (Vector): Position in the world
        genome (Genome): Heritable traits, owned exclusively
        behavior (BehaviorSelector): Decision state
        reproduction (ReproductionState): Mating state machine
        health (float): 0-100, death at 0
        energy (float): Stored energy
        age (int): Ticks lived
        lifespan (int): Ticks until death by old age
        last_meal_tick (int): Tick of the last meal
    """

    def __init__(self, model, pos, genome, behavior, reproduction,
                 health=MAX_HEALTH, energy=MAX_ENERGY, lifespan=None, birth_tick=0):
        """
        Initialize an organism.

        Args:
            model (mesa.Model): Owning model
            pos (Vector): Initial position
            genome (Genome): Genome (required)
            behavior (BehaviorSelector): Behavior selector for this genome
            reproduction (ReproductionState): Reproduction state for this genome
            health (float): Initial health
            energy (float): Initial energy
            lifespan (int): Ticks until death by old age
            birth_tick (int): Tick the organism was born on
        """
        if genome is None:
            raise ValueError("An organism needs a genome")
        super().__init__(model)
        self.pos = pos if isinstance(pos, Vector) else Vector(*pos)
        self.genome = genome
        self.behavior = behavior
        self.reproduction = reproduction

        self.health = min(float(health), MAX_HEALTH)
        self.max_energy = max(float(energy), MAX_ENERGY)
        self.energy = float(energy)
        self.age = 0
        self.alive = True
        self.lifespan = lifespan
        self.birth_tick = birth_tick
        self.last_meal_tick = birth_tick

        self.size = ORGANISM_SIZE * genome["size"]
        self.perception_radius = PERCEPTION_RADIUS

    @property
    def sex(self):
        return self.reproduction.sex

    @property
    def is_female(self):
        return self.reproduction.sex == FEMALE

    def time_since_last_meal(self, tick):
        return tick - self.last_meal_tick

    def death_cause(self, starving=False):
        """
        Why this organism is dead, or None while alive.

        Args:
            starving (bool): Whether it went too long without food

        Returns:
            str or None: ``starvation``, ``exhaustion``, ``old_age`` or None
        """
        if self.health <= 0:
            return "starvation" if starving else "exhaustion"
        if self.lifespan is not None and self.age >= self.lifespan:
            return "old_age"
        return None

    def is_dead(self):
        return self.death_cause() is not None

    def eat(self, food, tick):
        """
        Take a bite of a food item.

        Args:
            food (Food): Food in reach
            tick (int): Current tick

        Returns:
            bool: True if the meal had an effect
        """
        gain = self.behavior.eat(food.nutrition)
        if gain is None:
            return False
        self.health = min(MAX_HEALTH, self.health + gain)
        self.energy = min(self.max_energy, self.energy + gain)
        self.last_meal_tick = tick
        return True

    def to_record(self):
        """
        Plain-data record for a persistence collaborator.

        Returns:
            dict: position, health, traits, generation and sex
        """
        return {
            "position": [self.pos.x, self.pos.y],
            "health": self.health,
            "traits": self.genome.traits,
            "generation": self.genome.generation,
            "sex": self.sex,
        }

    def describe(self):
        """Read-only view of the internal state for UI and messaging collaborators."""
        return {
            "id": self.unique_id,
            "health": self.health,
            "energy": self.energy,
            "age": self.age,
            "traits": self.genome.traits,
            "generation": self.genome.generation,
            "behavior": self.behavior.current_behavior,
            "reproduction": self.reproduction.describe(),
        }

    def __repr__(self):
        return (f"Organism(id={self.unique_id}, sex={self.sex}, health={self.health:.1f}, "
                f"generation={self.genome.generation})")
