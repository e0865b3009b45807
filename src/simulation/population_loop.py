"""
PopulationLoop: tick-by-tick orchestration of the bacteria population.
"""

import logging
import random

import numpy as np
from mesa import Model

from config import (
    resolve_config, WIDTH, HEIGHT, GRID_CELL_SIZE, SPAWN_MARGIN, MAX_HEALTH,
    HUNGRY_ENERGY, STARVATION_DAMAGE, REST_REGEN_RATE, NIGHT_HEALTH_LOSS_FACTOR,
    BITE_SIZE, FOOD_SPAWN_TICKS_PER_UNIT
)
from bacteria.behavior import BehaviorSelector, MATE, REST
from bacteria.genome import GenomeFactory
from bacteria.organism import Organism, Vector
from bacteria.reproduction import ReproductionState, FEMALE, MALE
from .entities import Food, Obstacle, Predator
from .movement import RandomWalkMovement
from .spatial_grid import SpatialIndex
from .tracking import IndividualTracker

logger = logging.getLogger(__name__)

DEATH_CAUSES = ("starvation", "exhaustion", "old_age", "overpopulation")


class PopulationLoop(Model):
    """
    Main simulation model for the bacteria population.

    Each tick rebuilds the spatial index, lets every live organism decide,
    move, eat, mate and gestate, applies births and deaths, enforces the
    population limit and recomputes statistics. Population membership is
    only ever changed here.

    Attributes:
        organisms (list): Live organisms
        food (list): Food items
        obstacles (list): Obstacles
        predators (list): Predators
        tick_count (int): Ticks processed so far
        stats (dict): Statistics of the last tick
        history (dict): Statistics recorded once per ``step``
    """

    def __init__(self, config=None, width=WIDTH, height=HEIGHT, genome_factory=None,
                 behavior_factory=None, spatial_index=None, movement=None, seed=None):
        """
        Initialize the simulation and seed the world.

        Args:
            config (dict): Overrides for ``SIMULATION_PARAMS`` (clamped to bounds)
            width (float): World width
            height (float): World height
            genome_factory (GenomeFactory): Source of genomes
            behavior_factory (callable): genome -> BehaviorSelector
            spatial_index (SpatialIndex): Neighbor index, rebuilt every tick
            movement (MovementModel): Movement collaborator
            seed (int): Random seed
        """
        super().__init__(seed=seed)
        self.random = random.Random(seed)
        self.width = width
        self.height = height
        self._config_overrides = dict(config or {})
        self.config = resolve_config(self._config_overrides)

        self.genome_factory = genome_factory or GenomeFactory(rng=self.random)
        self.behavior_factory = behavior_factory or self._default_behavior
        self.spatial_index = spatial_index or SpatialIndex(width, height, GRID_CELL_SIZE)
        self.movement = movement or RandomWalkMovement(width, height, rng=self.random)

        # Entities
        self.organisms = []
        self.food = []
        self.obstacles = []
        self.predators = []

        self.tick_count = 0
        self.is_daytime = True
        self.highest_generation = 1
        self.individual_tracker = IndividualTracker()
        self.counters = {
            'births': 0,
            'lost_births': 0,
            'deaths': 0,
            'mating_attempts': 0,
            'successful_matings': 0,
            'food_consumed': 0,
        }
        self.deaths_by_cause = {cause: 0 for cause in DEATH_CAUSES}

        # History for plotting
        self.history = {
            'tick': [],
            'population': [],
            'average_health': [],
            'average_generation': [],
            'highest_generation': [],
            'births': [],
            'deaths': [],
        }

        self.generate_obstacles(self.config['obstacle_count'])
        self.generate_predators(self.config['predator_count'])
        self.generate_food(self.config['initial_food'])
        self.add_organisms(self.config['initial_population'], self.config['female_ratio'])
        self.stats = self.compute_statistics()

    def _default_behavior(self, genome):
        return BehaviorSelector(genome, rng=self.random)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def update_config(self, overrides):
        """
        Apply new externally supplied settings.

        Args:
            overrides (dict): Partial configuration, clamped to bounds
        """
        merged = dict(self._config_overrides)
        merged.update(overrides)
        self.config = resolve_config(merged)
        self._config_overrides = merged
        if 'obstacle_count' in overrides:
            self._sync_obstacles()

    def _sync_obstacles(self):
        target = self.config['obstacle_count']
        if len(self.obstacles) < target:
            self.generate_obstacles(target - len(self.obstacles))
        else:
            del self.obstacles[target:]

    # ------------------------------------------------------------------
    # Population membership
    # ------------------------------------------------------------------
    def spawn_organism(self, pos, genome, sex=None, health=None):
        """
        Create an organism and add it to the population.

        Args:
            pos (Vector): Position
            genome (Genome): Genome, owned by the new organism
            sex (str): ``FEMALE`` or ``MALE``; random when omitted
            health (float): Initial health; configured value when omitted

        Returns:
            Organism: The new organism
        """
        if sex is None:
            sex = FEMALE if self.random.random() < 0.5 else MALE
        reproduction = ReproductionState(sex, genome, rng=self.random,
                                         genome_factory=self.genome_factory)
        organism = Organism(
            self,
            pos,
            genome,
            self.behavior_factory(genome),
            reproduction,
            health=self.config['initial_health'] if health is None else health,
            energy=self.config['initial_energy'],
            lifespan=self.config['lifespan'],
            birth_tick=self.tick_count
        )
        self.organisms.append(organism)
        self.individual_tracker.register_individual(organism, self.tick_count)
        self.highest_generation = max(self.highest_generation, genome.generation)
        return organism

    def spawn_or_discard(self, genome, pos):
        """
        Spawn a newborn unless the population is full.

        Args:
            genome (Genome): Child genome
            pos (Vector): Birth position

        Returns:
            Organism or None: The newborn, or None when the birth was lost
        """
        if len(self.organisms) >= self.config['population_limit']:
            self.counters['lost_births'] += 1
            logger.debug("Birth discarded at tick %d: population limit %d reached",
                         self.tick_count, self.config['population_limit'])
            return None

        child = self.spawn_organism(pos, genome)
        self.counters['births'] += 1
        logger.debug("Organism %s born at tick %d (generation %d)",
                     child.unique_id, self.tick_count, genome.generation)
        return child

    def add_organisms(self, count, female_ratio=0.5):
        """
        Seed default-genome organisms away from the world borders.

        Args:
            count (int): Number of organisms
            female_ratio (float): Fraction of females (0.0 to 1.0)

        Returns:
            list: The new organisms
        """
        female_ratio = max(0.0, min(1.0, female_ratio))
        female_count = round(count * female_ratio)
        sexes = [FEMALE] * female_count + [MALE] * (count - female_count)
        self.random.shuffle(sexes)
        added = []
        for sex in sexes:
            x = self.random.uniform(self.width * SPAWN_MARGIN, self.width * (1 - SPAWN_MARGIN))
            y = self.random.uniform(self.height * SPAWN_MARGIN, self.height * (1 - SPAWN_MARGIN))
            added.append(self.spawn_organism(Vector(x, y), self.genome_factory.create_default(), sex=sex))
        if count:
            logger.info("Seeded %d organisms (%d female), population now %d",
                        count, female_count, len(self.organisms))
        return added

    def _remove_organism(self, organism, cause):
        organism.alive = False
        self.organisms.remove(organism)
        organism.remove()
        self.counters['deaths'] += 1
        self.deaths_by_cause[cause] += 1
        self.individual_tracker.mark_death(organism.unique_id, cause, self.tick_count)
        logger.debug("Organism %s died at tick %d: %s", organism.unique_id, self.tick_count, cause)

    def enforce_population_limit(self):
        """Cull the weakest organisms until the population fits the limit."""
        excess = len(self.organisms) - self.config['population_limit']
        if excess <= 0:
            return
        # Random last key so equal organisms are not culled in list order
        victims = sorted(self.organisms,
                         key=lambda o: (o.health, -o.age, self.random.random()))[:excess]
        for organism in victims:
            self._remove_organism(organism, 'overpopulation')
        logger.debug("Culled %d organisms at tick %d", excess, self.tick_count)

    # ------------------------------------------------------------------
    # World entities
    # ------------------------------------------------------------------
    def generate_food(self, amount):
        for _ in range(amount):
            pos = Vector(self.random.uniform(0, self.width), self.random.uniform(0, self.height))
            self.food.append(Food(pos, self.config['food_value']))

    def generate_obstacles(self, amount):
        for _ in range(amount):
            pos = Vector(self.random.uniform(0, max(0.0, self.width - 100)),
                         self.random.uniform(0, max(0.0, self.height - 100)))
            self.obstacles.append(Obstacle(pos, self.random.uniform(20, 100), self.random.uniform(20, 100)))

    def generate_predators(self, amount):
        for _ in range(amount):
            pos = Vector(self.random.uniform(0, self.width), self.random.uniform(0, self.height))
            self.predators.append(Predator(pos))

    def _update_food(self):
        for food in self.food:
            food.regenerate()

        interval = self.config['food_spawn_interval'] * FOOD_SPAWN_TICKS_PER_UNIT
        if self.tick_count % interval == 0 and self.random.random() < self.config['food_rate']:
            self.generate_food(self.config['food_spawn_amount'])

        # Oldest food goes first
        excess = len(self.food) - self.config['food_limit']
        if excess > 0:
            del self.food[:excess]

    def _update_day_night(self):
        if self.tick_count % self.config['day_length'] == 0:
            self.is_daytime = not self.is_daytime

    # ------------------------------------------------------------------
    # Tick processing
    # ------------------------------------------------------------------
    def _validate(self, organism):
        if organism.genome is None:
            raise ValueError(f"Organism {organism.unique_id} has no genome")
        if organism.behavior is None or organism.reproduction is None:
            raise ValueError(f"Organism {organism.unique_id} is missing its behavior or reproduction state")

    def _partition(self, organism, candidates):
        """Split index results within perception range by entity type."""
        nearby = {'food': [], 'predators': [], 'organisms': [], 'obstacles': []}
        for entity in candidates:
            if organism.pos.distance_to(entity.pos) > organism.perception_radius:
                continue
            if isinstance(entity, Organism):
                if entity is not organism and entity.alive:
                    nearby['organisms'].append(entity)
            elif isinstance(entity, Food):
                if entity.nutrition > 0:
                    nearby['food'].append(entity)
            elif isinstance(entity, Predator):
                nearby['predators'].append(entity)
            elif isinstance(entity, Obstacle):
                nearby['obstacles'].append(entity)
        return nearby

    def _apply_metabolism(self, organism, starving):
        loss = self.config['health_loss_rate'] * organism.genome['metabolism']
        if not self.is_daytime:
            loss *= NIGHT_HEALTH_LOSS_FACTOR
        if starving:
            loss += STARVATION_DAMAGE
        organism.health -= loss
        organism.energy = max(0.0, organism.energy - loss)

        if organism.health > 0 and organism.behavior.is_resting():
            organism.health = min(MAX_HEALTH, organism.health + organism.genome['regeneration'] * REST_REGEN_RATE)

    def _feed(self, organism, nearby_food):
        for food in nearby_food:
            if food.nutrition <= 0:
                continue
            if organism.pos.distance_to(food.pos) >= organism.size / 2 + food.size / 2:
                continue
            if not organism.eat(food, self.tick_count):
                return
            self.counters['food_consumed'] += 1
            if food.bite(BITE_SIZE):
                self.food.remove(food)
            return

    def _try_mating(self, organism, nearby_organisms):
        if not organism.reproduction.can_mate_now():
            return
        for other in nearby_organisms:
            if organism.pos.distance_to(other.pos) >= organism.size + other.size:
                continue
            self.counters['mating_attempts'] += 1
            if organism.reproduction.mate(other.reproduction):
                self.counters['successful_matings'] += 1
                logger.debug("Organisms %s and %s started courting at tick %d",
                             organism.unique_id, other.unique_id, self.tick_count)
                return

    def _process_organism(self, organism):
        self._validate(organism)
        organism.age += 1

        starvation_time = self.config['starvation_time']
        hungry_for = organism.time_since_last_meal(self.tick_count)
        starving = hungry_for >= starvation_time

        candidates = self.spatial_index.query_radius(organism.pos, organism.perception_radius)
        nearby = self._partition(organism, candidates)

        reproduction = organism.reproduction
        behavior = organism.behavior.update(
            organism.health,
            hungry_for,
            starvation_time,
            reproduction.can_mate_now(),
            reproduction.in_mating_recovery()
        )

        new_pos = self.movement.move(organism, behavior, nearby)
        if not isinstance(new_pos, Vector):
            raise TypeError(f"Movement must return a Vector, got {type(new_pos).__name__}")
        organism.pos = new_pos

        self._apply_metabolism(organism, starving)
        self._feed(organism, nearby['food'])
        if behavior == MATE:
            self._try_mating(organism, nearby['organisms'])

        child_genome = reproduction.tick()
        if child_genome is not None:
            self.spawn_or_discard(child_genome, organism.pos)

        cause = organism.death_cause(starving)
        if cause is not None:
            self._remove_organism(organism, cause)

    def tick(self):
        """
        Process one simulation tick.

        Returns:
            dict: Statistics after the tick
        """
        self.tick_count += 1
        self._update_day_night()

        self.spatial_index.rebuild(self.organisms, self.food, self.obstacles, self.predators)

        # Newborns join next tick; the snapshot also keeps removals from skipping entries
        for organism in list(self.organisms):
            if organism.alive:
                self._process_organism(organism)

        self.enforce_population_limit()
        self._update_food()
        self.individual_tracker.update_tracked_individuals(self.organisms, self.tick_count)

        self.stats = self.compute_statistics()
        if not self.organisms:
            self.running = False
        return self.stats

    def step(self):
        """Execute one rendered frame: ``ceil(speed)`` ticks, then record history."""
        for _ in range(self.config['ticks_per_step']):
            self.tick()
        self._record_history()

    def run(self, steps):
        """
        Run several frames, stopping early on extinction.

        Args:
            steps (int): Number of frames

        Returns:
            dict: Final statistics
        """
        for _ in range(steps):
            if not self.running:
                break
            self.step()
        return self.stats

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------
    def compute_statistics(self):
        """
        Recompute aggregate statistics from the live population.

        Returns:
            dict: Counts, averages and cumulative counters
        """
        organisms = self.organisms
        healths = [o.health for o in organisms]
        generations = [o.genome.generation for o in organisms]
        if generations:
            self.highest_generation = max(self.highest_generation, max(generations))

        stats = {
            'tick': self.tick_count,
            'population': len(organisms),
            'females': sum(1 for o in organisms if o.is_female),
            'males': sum(1 for o in organisms if not o.is_female),
            'pregnant': sum(1 for o in organisms if o.reproduction.pregnant),
            'resting': sum(1 for o in organisms if o.behavior.current_behavior == REST),
            'hungry': sum(1 for o in organisms if o.energy < HUNGRY_ENERGY),
            'average_health': float(np.mean(healths)) if healths else 0.0,
            'average_generation': float(np.mean(generations)) if generations else 0.0,
            'highest_generation': self.highest_generation,
            'food_count': len(self.food),
            'is_daytime': self.is_daytime,
            'deaths_by_cause': dict(self.deaths_by_cause),
        }
        stats.update(self.counters)
        return stats

    def _record_history(self):
        for key in self.history:
            self.history[key].append(self.stats[key])

    # ------------------------------------------------------------------
    # Persistence collaborator
    # ------------------------------------------------------------------
    def export_records(self):
        """Plain-data records of every live organism."""
        return [organism.to_record() for organism in self.organisms]

    def load_records(self, records):
        """
        Rebuild organisms from ``export_records`` output.

        Args:
            records (list): Organism records

        Returns:
            list: The restored organisms
        """
        restored = []
        for record in records:
            genome = self.genome_factory.from_dict({
                'traits': record['traits'],
                'generation': record['generation'],
            })
            restored.append(self.spawn_organism(
                Vector(*record['position']), genome, sex=record['sex'], health=record['health']))
        return restored

    def __repr__(self):
        return (f"PopulationLoop(tick={self.tick_count}, population={len(self.organisms)}, "
                f"food={len(self.food)})")
