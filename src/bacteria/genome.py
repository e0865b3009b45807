"""
Genome class representing the heritable traits of a single bacterium.
"""

import copy
import random

from config import (
    TRAIT_ORDER, TRAIT_RANGES, DEFAULT_TRAIT_RANGE, COLOR_CHANNELS, COLOR_RANGE,
    MUTATION_PARAMS, CROSSOVER_POINTS, NICHE_SPECIALIZATION_CHANCE,
    NICHE_ADJUSTMENTS, NICHES
)


def clamp(value, low, high):
    """Constrain value to [low, high]."""
    return max(low, min(high, value))


def trait_range(name):
    """
    Get the valid range of a trait.

    Args:
        name (str): Trait name

    Returns:
        tuple: (min, max), ``DEFAULT_TRAIT_RANGE`` for unknown traits
    """
    return TRAIT_RANGES.get(name, DEFAULT_TRAIT_RANGE)


def _ordered_names(traits):
    """Scalar trait names: the declared order first, unknown names sorted after."""
    known = [name for name in TRAIT_ORDER if name in traits]
    extra = sorted(name for name in traits if name not in TRAIT_RANGES and name != "color")
    return known + extra


def clamp_traits(traits):
    """
    Copy a trait map, clamping every value into its declared range.

    Args:
        traits (dict): Trait name -> value, ``color`` -> {r, g, b}

    Returns:
        dict: Clamped copy
    """
    clamped = {}
    for name in _ordered_names(traits):
        clamped[name] = clamp(float(traits[name]), *trait_range(name))
    if "color" in traits:
        clamped["color"] = {
            channel: clamp(float(traits["color"][channel]), *COLOR_RANGE)
            for channel in COLOR_CHANNELS
        }
    return clamped


def adapted_mutation_rate(base_rate, fitness):
    """
    Scale the base mutation rate by fitness: fit genomes mutate less.

    Args:
        base_rate (float): Parent mutation rate
        fitness (float): Parent fitness

    Returns:
        float: Rate in [min_rate, max_rate]
    """
    rate = base_rate / max(MUTATION_PARAMS["min_fitness"], fitness)
    return clamp(rate, MUTATION_PARAMS["min_rate"], MUTATION_PARAMS["max_rate"])


def mutation_strength(fitness):
    """
    Maximum size of a single mutation step for a given fitness.

    Args:
        fitness (float): Parent fitness (values <= 0 give the maximum strength)

    Returns:
        float: Strength in [min_strength, max_strength]
    """
    strength = MUTATION_PARAMS["strength_scale"] / max(fitness, 1e-9)
    return clamp(strength, MUTATION_PARAMS["min_strength"], MUTATION_PARAMS["max_strength"])


def _mutate_value(value, bounds, rate, strength, rng):
    if rng.random() < rate:
        value += rng.uniform(-strength, strength)
    return clamp(value, *bounds)


def mutate(traits, fitness, rng=None):
    """
    Apply one adaptive mutation pass to a trait map.

    Each trait (and each color channel) mutates independently with the
    adapted rate. The child's ``mutation_rate`` is the adapted rate itself.

    Args:
        traits (dict): Parent traits (not modified)
        fitness (float): Parent fitness
        rng: Random source with ``random()`` and ``uniform()``

    Returns:
        dict: Mutated, clamped trait map
    """
    rng = rng or random
    base_rate = traits.get("mutation_rate", MUTATION_PARAMS["min_rate"])
    rate = adapted_mutation_rate(base_rate, fitness)
    strength = mutation_strength(fitness)

    mutated = {}
    for name in _ordered_names(traits):
        mutated[name] = _mutate_value(traits[name], trait_range(name), rate, strength, rng)
    if "color" in traits:
        mutated["color"] = {
            channel: _mutate_value(traits["color"][channel], COLOR_RANGE, rate, strength, rng)
            for channel in COLOR_CHANNELS
        }

    mutated["mutation_rate"] = rate
    return mutated


def apply_niche(traits, niche):
    """
    Apply a niche specialization table to a trait map.

    Args:
        traits (dict): Trait map (not modified)
        niche (str): Niche identifier from ``NICHES``

    Returns:
        dict: Adjusted, clamped copy
    """
    adjusted = copy.deepcopy(traits)
    for key, (operation, amount) in NICHE_ADJUSTMENTS[niche].items():
        if key.startswith("color."):
            channel = key.split(".", 1)[1]
            current = adjusted["color"][channel]
            bounds = COLOR_RANGE
        else:
            current = adjusted[key]
            bounds = trait_range(key)

        new_value = current * amount if operation == "mul" else current + amount
        new_value = clamp(new_value, *bounds)

        if key.startswith("color."):
            adjusted["color"][channel] = new_value
        else:
            adjusted[key] = new_value
    return adjusted


class Genome:
    """
    Heritable trait record of one organism.

    Every trait value lies within its declared range at all times: values
    are clamped whenever the genome is built, never rejected.

    Attributes:
        generation (int): 1 for founders, parent generation + 1 otherwise
        fitness (float): Fitness used to scale mutation
        adapted_niches (set): Niches this lineage has specialized into
    """

    def __init__(self, traits, generation=1, fitness=1.0, adapted_niches=None):
        """
        Initialize a genome.

        Args:
            traits (dict): Every trait in ``TRAIT_ORDER`` plus ``color``
            generation (int): Generation counter (>= 1)
            fitness (float): Fitness value
            adapted_niches (iterable): Adapted niche identifiers
        """
        missing = [name for name in TRAIT_ORDER if name not in traits]
        if missing or "color" not in traits:
            raise ValueError(f"Genome is missing traits: {missing or ['color']}")

        self.generation = max(1, int(generation))
        self.fitness = float(fitness)
        self.adapted_niches = set(adapted_niches or ())
        self._traits = clamp_traits(traits)

    @classmethod
    def create_default(cls, rng=None):
        """
        Create a founder genome with traits sampled uniformly from their ranges.

        Args:
            rng: Random source

        Returns:
            Genome: New generation-1 genome
        """
        rng = rng or random
        traits = {name: rng.uniform(*trait_range(name)) for name in TRAIT_ORDER}
        traits["mutation_rate"] = rng.uniform(*MUTATION_PARAMS["initial_rate_range"])
        traits["color"] = {channel: rng.uniform(*COLOR_RANGE) for channel in COLOR_CHANNELS}
        return cls(traits)

    @classmethod
    def derive_from_one(cls, parent, rng=None):
        """
        Create an asexual offspring genome.

        Args:
            parent (Genome): Parent genome (not modified)
            rng: Random source

        Returns:
            Genome: Mutated copy one generation later
        """
        return cls(
            mutate(parent._traits, parent.fitness, rng),
            generation=parent.generation + 1,
            fitness=parent.fitness,
            adapted_niches=parent.adapted_niches
        )

    def crossover(self, other, rng=None, apply_mutation=True,
                  niche_chance=NICHE_SPECIALIZATION_CHANCE):
        """
        Combine this genome with a partner's genome.

        Scalar traits are copied from one parent at a time, switching parent
        at 1-3 crossover points along ``TRAIT_ORDER``. Color channels are
        picked independently. Rarely the child specializes into a new niche.
        A final mutation pass is applied unless disabled.

        Args:
            other (Genome): Partner genome (not modified)
            rng: Random source with ``random``, ``randint``, ``sample``, ``choice``
            apply_mutation (bool): Run the final mutation pass
            niche_chance (float): Probability of niche specialization

        Returns:
            Genome: Child genome
        """
        rng = rng or random
        parents = (self._traits, other._traits)
        niches = self.adapted_niches | other.adapted_niches

        point_count = min(rng.randint(*CROSSOVER_POINTS), len(TRAIT_ORDER) - 1)
        points = set(rng.sample(range(1, len(TRAIT_ORDER)), point_count))

        source = 0 if rng.random() < 0.5 else 1
        child = {}
        for index, name in enumerate(TRAIT_ORDER):
            if index in points:
                source = 1 - source
            child[name] = parents[source][name]

        child["color"] = {
            channel: parents[0 if rng.random() < 0.5 else 1]["color"][channel]
            for channel in COLOR_CHANNELS
        }

        if rng.random() < niche_chance:
            available = [niche for niche in NICHES if niche not in niches]
            if available:
                niche = rng.choice(available)
                niches.add(niche)
                child = apply_niche(child, niche)

        fitness = (self.fitness + other.fitness) / 2.0
        if apply_mutation:
            child = mutate(child, fitness, rng)

        return Genome(
            child,
            generation=max(self.generation, other.generation) + 1,
            fitness=fitness,
            adapted_niches=niches
        )

    @property
    def traits(self):
        """Deep copy of the trait map."""
        return copy.deepcopy(self._traits)

    @property
    def color(self):
        """Color as an (r, g, b) tuple."""
        return tuple(self._traits["color"][channel] for channel in COLOR_CHANNELS)

    def __getitem__(self, name):
        value = self._traits[name]
        return dict(value) if name == "color" else value

    def copy(self):
        """Independent snapshot of this genome."""
        return Genome(self._traits, self.generation, self.fitness, self.adapted_niches)

    def to_dict(self):
        """
        Serialize the genome to plain data.

        Returns:
            dict: generation, fitness, traits and adapted niches
        """
        return {
            "generation": self.generation,
            "fitness": self.fitness,
            "traits": self.traits,
            "adapted_niches": sorted(self.adapted_niches)
        }

    @classmethod
    def from_dict(cls, data):
        """
        Rebuild a genome from ``to_dict`` output or a persistence record.

        Args:
            data (dict): Must contain ``traits``; other keys are optional

        Returns:
            Genome: Equivalent genome
        """
        return cls(
            data["traits"],
            generation=data.get("generation", 1),
            fitness=data.get("fitness", 1.0),
            adapted_niches=data.get("adapted_niches", ())
        )

    def describe(self):
        """Display-friendly summary of the genome."""
        description = {"generation": self.generation}
        for name in TRAIT_ORDER:
            digits = 3 if name == "mutation_rate" else 2
            description[name] = round(self._traits[name], digits)
        description["niches"] = sorted(self.adapted_niches)
        return description

    def __eq__(self, other):
        if not isinstance(other, Genome):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"Genome(generation={self.generation}, fitness={self.fitness:.2f}, "
                f"niches={sorted(self.adapted_niches)})")


class GenomeFactory:
    """
    Produces genomes from one shared random source.

    The population loop receives a factory at construction, so every genome
    in a run comes from the same configurable source.
    """

    def __init__(self, rng=None, niche_chance=NICHE_SPECIALIZATION_CHANCE, apply_mutation=True):
        self.rng = rng or random.Random()
        self.niche_chance = niche_chance
        self.apply_mutation = apply_mutation

    def create_default(self):
        return Genome.create_default(self.rng)

    def derive_from_one(self, parent):
        return Genome.derive_from_one(parent, self.rng)

    def crossover(self, mother, father):
        return mother.crossover(
            father,
            rng=self.rng,
            apply_mutation=self.apply_mutation,
            niche_chance=self.niche_chance
        )

    def from_dict(self, data):
        return Genome.from_dict(data)
