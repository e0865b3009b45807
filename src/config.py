"""
Configuration parameters for the bacteria population simulation.
Contains world constants, gene tables, lifecycle timings and the
externally supplied simulation surface with its sane bounds.
"""

import math

# -----------------------
# Spatial Configuration
# -----------------------
WIDTH = 800.0                       # continuous world width
HEIGHT = 600.0
GRID_CELL_SIZE = 50.0               # spatial index bucket size
SPAWN_MARGIN = 0.1                  # seeded organisms avoid this fraction of each border

# -----------------------
# Timing
# -----------------------
TICKS_PER_SECOND = 60
MIN_STARVATION_TIME = 1800          # ticks

# -----------------------
# Organism Parameters
# -----------------------
ORGANISM_SIZE = 20.0
PERCEPTION_RADIUS = 150.0
MAX_HEALTH = 100.0
MAX_ENERGY = 100.0
HUNGRY_ENERGY = 30.0                # energy below this counts as hungry in statistics
STARVATION_DAMAGE = 0.5             # extra health loss per tick while starving
REST_REGEN_RATE = 0.02              # health regained per tick per unit of regeneration
NIGHT_HEALTH_LOSS_FACTOR = 0.8
BITE_SIZE = 10.0                    # nutrition removed from a food item per meal

# -----------------------
# Food Parameters
# -----------------------
FOOD_MAX_NUTRITION = 50.0
FOOD_REGEN_RATE = 0.01
FOOD_SIZE_RANGE = (5.0, 15.0)
FOOD_SPAWN_TICKS_PER_UNIT = 30      # food_spawn_interval is expressed in these units

# -----------------------
# Behavior Parameters
# -----------------------
BEHAVIOR_PARAMS = {
    "min_behavior_time": 60,        # 1 second
    "max_behavior_time": 300,       # 5 seconds
    "min_rest_time": 60,
    "max_rest_time": 180,
    "mate_health_threshold": 70.0,
    "mate_health_bonus": 0.3,
    "fertility_weight": 0.7,
    "hunger_weight": 0.7,
    "health_weight": 0.3,
    "rest_weight": 0.8,
    "curiosity_weight": 0.3,
}

# -----------------------
# Reproduction Parameters
# -----------------------
REPRODUCTION_PARAMS = {
    "courting_duration": 60,        # 1 second
    "pregnancy_duration": 180,      # 3 seconds
    "mating_cooldown_duration": 300,  # 5 seconds
}

# -----------------------
# Genetic Parameters
# -----------------------
# Ordered trait list used by crossover. The order is part of the inheritance
# contract and must not change between runs.
TRAIT_ORDER = (
    "metabolism",
    "immunity",
    "regeneration",
    "speed",
    "size",
    "aggressiveness",
    "sociability",
    "curiosity",
    "fertility",
    "mutation_rate",
    "adaptability",
    "night_vision",
    "resource_efficiency",
    "disease_resistance",
    "communication_level",
)

TRAIT_RANGES = {
    "metabolism": (0.5, 1.5),
    "immunity": (0.5, 1.5),
    "regeneration": (0.5, 1.5),
    "speed": (0.5, 1.5),
    "size": (0.8, 1.2),
    "aggressiveness": (0.0, 1.0),
    "sociability": (0.0, 1.0),
    "curiosity": (0.0, 1.0),
    "fertility": (0.5, 1.5),
    "mutation_rate": (0.01, 0.2),
    "adaptability": (0.5, 1.5),
    "night_vision": (0.0, 1.0),
    "resource_efficiency": (0.5, 1.5),
    "disease_resistance": (0.0, 1.0),
    "communication_level": (0.0, 1.0),
}
DEFAULT_TRAIT_RANGE = (0.0, 1.0)

COLOR_CHANNELS = ("r", "g", "b")
COLOR_RANGE = (-50.0, 50.0)

MUTATION_PARAMS = {
    "initial_rate_range": (0.01, 0.1),  # sampling range for fresh genomes
    "min_rate": 0.01,
    "max_rate": 0.2,
    "min_fitness": 0.5,             # floor applied before dividing by fitness
    "strength_scale": 0.1,
    "min_strength": 0.05,
    "max_strength": 0.3,
}

CROSSOVER_POINTS = (1, 3)           # inclusive bounds on crossover points
NICHE_SPECIALIZATION_CHANCE = 0.1

# Niche adjustments: ("mul", factor) or ("add", delta). Color channels are
# addressed as "color.r", "color.g" and "color.b".
NICHE_ADJUSTMENTS = {
    "aquatic": {
        "speed": ("mul", 1.2),
        "size": ("mul", 0.9),
        "color.b": ("add", 30.0),
    },
    "dark": {
        "night_vision": ("add", 0.3),
        "curiosity": ("mul", 1.1),
        "color.r": ("add", -20.0),
        "color.g": ("add", -20.0),
        "color.b": ("add", -20.0),
    },
    "arid": {
        "metabolism": ("mul", 0.8),
        "resource_efficiency": ("mul", 1.2),
        "color.r": ("add", 20.0),
    },
    "cold": {
        "size": ("mul", 1.1),
        "metabolism": ("mul", 1.1),
        "immunity": ("mul", 1.1),
    },
    "toxic": {
        "disease_resistance": ("add", 0.2),
        "immunity": ("mul", 1.2),
        "color.g": ("add", 25.0),
    },
}
NICHES = tuple(NICHE_ADJUSTMENTS.keys())

# -----------------------
# Simulation Surface
# -----------------------
SIMULATION_PARAMS = {
    "initial_population": 20,
    "female_ratio": 0.5,
    "population_limit": 100,
    "initial_health": 100.0,
    "initial_energy": 150.0,
    "lifespan": 12 * 3600 * TICKS_PER_SECOND,   # 12 hours of ticks
    "health_loss_rate": 0.05,
    "feeding_interval": 30,         # seconds
    "food_value": 50.0,
    "food_rate": 0.8,
    "food_spawn_interval": 3,
    "food_spawn_amount": 8,
    "food_limit": 200,
    "initial_food": 40,
    "speed": 1.0,                   # ticks per rendered frame
    "obstacle_count": 0,
    "predator_count": 0,
    "day_length": 3600,             # ticks per day or night
}

CONFIG_BOUNDS = {
    "initial_population": (0, 1000),
    "female_ratio": (0.0, 1.0),
    "population_limit": (1, 1000),
    "initial_health": (1.0, MAX_HEALTH),
    "initial_energy": (MAX_ENERGY, 500.0),
    "lifespan": (1, 24 * 3600 * TICKS_PER_SECOND),
    "health_loss_rate": (0.0, 0.1),
    "feeding_interval": (1, 600),
    "food_value": (1.0, 200.0),
    "food_rate": (0.0, 1.0),
    "food_spawn_interval": (1, 60),
    "food_spawn_amount": (0, 100),
    "food_limit": (0, 2000),
    "initial_food": (0, 2000),
    "speed": (0.1, 20.0),
    "obstacle_count": (0, 50),
    "predator_count": (0, 50),
    "day_length": (1, 100000),
}


def resolve_config(overrides=None):
    """
    Merge overrides over the defaults and clamp every value into its bounds.

    Args:
        overrides (dict): Partial configuration

    Returns:
        dict: Complete, clamped configuration with ``starvation_time`` added
    """
    config = dict(SIMULATION_PARAMS)
    for key, value in (overrides or {}).items():
        if key not in SIMULATION_PARAMS:
            raise KeyError(f"Unknown simulation parameter: {key}")
        config[key] = value

    for key, (low, high) in CONFIG_BOUNDS.items():
        value = max(low, min(high, config[key]))
        if isinstance(SIMULATION_PARAMS[key], int):
            value = int(value)
        else:
            value = float(value)
        config[key] = value

    config["starvation_time"] = max(config["feeding_interval"] * TICKS_PER_SECOND, MIN_STARVATION_TIME)
    config["ticks_per_step"] = int(math.ceil(config["speed"]))
    return config
