"""
Integration tests for the PopulationLoop model.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

import pytest
from bacteria.behavior import EAT, MATE
from bacteria.organism import Vector
from bacteria.reproduction import FEMALE, MALE, COURTING
from simulation.entities import Food
from simulation.movement import MovementModel
from simulation.population_loop import PopulationLoop
from simulation.spatial_grid import SpatialIndex

EMPTY_WORLD = {'initial_population': 0, 'initial_food': 0}


class StationaryMovement(MovementModel):
    """Keeps every organism where it is."""

    def move(self, organism, behavior, nearby):
        return organism.pos


class TupleMovement(MovementModel):
    def move(self, organism, behavior, nearby):
        return (organism.pos.x, organism.pos.y)


def make_loop(config=None, **kwargs):
    kwargs.setdefault('movement', StationaryMovement())
    return PopulationLoop(config=config, seed=42, **kwargs)


def force_behavior(organism, behavior):
    organism.behavior.current_behavior = behavior
    organism.behavior.behavior_timer = 1000


def test_loop_initialization():
    """Test the world is seeded from the configuration."""
    loop = make_loop({'initial_population': 20, 'female_ratio': 0.5, 'initial_food': 10})

    assert len(loop.organisms) == 20
    assert loop.stats['females'] == 10
    assert loop.stats['males'] == 10
    assert len(loop.food) == 10
    assert loop.tick_count == 0
    assert loop.running


def test_seeded_organisms_avoid_borders():
    loop = make_loop({'initial_population': 50})

    for organism in loop.organisms:
        assert 80 <= organism.pos.x <= 720
        assert 60 <= organism.pos.y <= 540


def test_statistics_keys():
    loop = make_loop({'initial_population': 5})
    stats = loop.tick()

    for key in ('tick', 'population', 'females', 'males', 'pregnant', 'resting', 'hungry',
                'average_health', 'average_generation', 'highest_generation', 'food_count',
                'is_daytime', 'births', 'lost_births', 'deaths', 'mating_attempts',
                'successful_matings', 'food_consumed', 'deaths_by_cause'):
        assert key in stats
    assert stats['tick'] == 1
    assert stats['females'] + stats['males'] == stats['population']
    assert stats['average_generation'] == 1.0


def test_population_limit_enforced_when_seeded_above_it():
    """Test the weakest organisms are culled down to the limit."""
    loop = make_loop({'initial_population': 50, 'population_limit': 20})
    assert len(loop.organisms) == 50

    for organism in loop.organisms[:30]:
        organism.health = 50.0
    strongest = set(o.unique_id for o in loop.organisms[30:])

    stats = loop.tick()

    assert stats['population'] == 20
    assert stats['deaths_by_cause']['overpopulation'] == 30
    assert set(o.unique_id for o in loop.organisms) == strongest

    for _ in range(20):
        assert loop.tick()['population'] <= 20


def test_seeded_cull_keeps_both_sexes():
    """Test culling equally healthy seeded organisms leaves females and males."""
    loop = make_loop({'initial_population': 150, 'population_limit': 40,
                      'health_loss_rate': 0.0, 'female_ratio': 0.5})
    assert loop.stats['females'] == 75

    stats = loop.tick()

    assert stats['population'] == 40
    assert stats['deaths_by_cause']['overpopulation'] == 110
    assert stats['females'] > 0
    assert stats['males'] > 0


def test_seeded_sexes_are_mixed_in_order():
    loop = make_loop({'initial_population': 40, 'female_ratio': 0.5})
    first_half = loop.organisms[:20]

    assert any(o.is_female for o in first_half)
    assert any(not o.is_female for o in first_half)


def test_empty_population_stops_running():
    loop = make_loop(EMPTY_WORLD)
    stats = loop.tick()

    assert stats['population'] == 0
    assert stats['average_health'] == 0.0
    assert not loop.running


def test_exhausted_organism_is_removed():
    loop = make_loop(EMPTY_WORLD)
    organism = loop.spawn_organism(Vector(400, 300), loop.genome_factory.create_default(), sex=MALE)
    organism.health = 0.01

    stats = loop.tick()

    assert stats['population'] == 0
    assert stats['deaths'] == 1
    assert stats['deaths_by_cause']['exhaustion'] == 1
    assert not organism.alive
    assert loop.individual_tracker.get_statistics()['causes_of_death'] == {'exhaustion': 1}


def test_starving_organism_dies_of_starvation():
    loop = make_loop(EMPTY_WORLD)
    organism = loop.spawn_organism(Vector(400, 300), loop.genome_factory.create_default())
    organism.last_meal_tick = -5000
    organism.health = 0.1

    stats = loop.tick()

    assert stats['deaths_by_cause']['starvation'] == 1


def test_old_age():
    loop = make_loop({'initial_population': 8, 'lifespan': 1})
    stats = loop.tick()

    assert stats['population'] == 0
    assert stats['deaths_by_cause']['old_age'] == 8


def test_removals_do_not_skip_organisms():
    """Test every live organism is processed even when others die mid-tick."""
    loop = make_loop({'initial_population': 10})
    doomed = loop.organisms[::2]
    survivors = loop.organisms[1::2]
    for organism in doomed:
        organism.health = 0.01

    loop.tick()

    assert loop.organisms == survivors
    for organism in survivors:
        assert organism.age == 1


def test_feeding_takes_one_bite():
    """Test an eating organism on top of food takes one bite per tick."""
    loop = make_loop(EMPTY_WORLD)
    organism = loop.spawn_organism(Vector(400, 300), loop.genome_factory.create_default())
    organism.health = 50.0
    force_behavior(organism, EAT)
    food = Food(Vector(400, 300), 50.0)
    loop.food.append(food)

    stats = loop.tick()

    assert stats['food_consumed'] == 1
    assert organism.health > 50.0
    assert organism.last_meal_tick == 1
    assert food.nutrition == pytest.approx(40.01)


def test_mating_encounter():
    """Test two touching partners seeking mates start courting."""
    loop = make_loop(EMPTY_WORLD)
    female = loop.spawn_organism(Vector(400, 300), loop.genome_factory.create_default(), sex=FEMALE)
    male = loop.spawn_organism(Vector(400, 300), loop.genome_factory.create_default(), sex=MALE)
    force_behavior(female, MATE)
    force_behavior(male, MATE)

    stats = loop.tick()

    assert stats['successful_matings'] == 1
    assert stats['mating_attempts'] == 1
    assert female.reproduction.state == COURTING
    assert male.reproduction.state == COURTING
    assert stats['pregnant'] == 1


def mated_pair(loop):
    female = loop.spawn_organism(Vector(400, 300), loop.genome_factory.create_default(), sex=FEMALE)
    male = loop.spawn_organism(Vector(410, 300), loop.genome_factory.create_default(), sex=MALE)
    assert female.reproduction.mate(male.reproduction)
    return female, male


def test_birth_after_courtship_and_gestation():
    """Test a child is born after 60 ticks of courtship and 180 of gestation."""
    loop = make_loop(EMPTY_WORLD)
    female, male = mated_pair(loop)

    for _ in range(239):
        loop.tick()
    assert loop.stats['births'] == 0

    stats = loop.tick()

    assert stats['births'] == 1
    assert stats['population'] == 3
    assert stats['highest_generation'] == 2
    child = loop.organisms[-1]
    assert child.genome.generation == 2
    assert child.pos == female.pos
    assert not female.reproduction.pregnant
    assert female.reproduction.cooldown_remaining == 300
    assert male.reproduction.cooldown_remaining == 300


def test_birth_lost_at_population_limit():
    loop = make_loop(dict(EMPTY_WORLD, population_limit=2))
    mated_pair(loop)

    for _ in range(240):
        loop.tick()

    assert loop.stats['births'] == 0
    assert loop.stats['lost_births'] == 1
    assert loop.stats['population'] == 2


def test_malformed_organism_raises():
    loop = make_loop({'initial_population': 3})
    loop.organisms[1].genome = None

    with pytest.raises(ValueError):
        loop.tick()


def test_movement_must_return_vector():
    loop = make_loop({'initial_population': 1}, movement=TupleMovement())

    with pytest.raises(TypeError):
        loop.tick()


def test_injected_spatial_index_is_rebuilt():
    index = SpatialIndex(800, 600, 25)
    loop = make_loop({'initial_population': 5, 'initial_food': 3}, spatial_index=index)

    loop.tick()

    assert loop.spatial_index is index
    assert len(index) == 8


def test_step_runs_speed_ticks_and_records_history():
    loop = make_loop({'initial_population': 4, 'speed': 2.5})
    loop.step()
    loop.step()

    assert loop.tick_count == 6
    assert loop.history['tick'] == [3, 6]
    assert len(loop.history['population']) == 2


def test_run_stops_on_extinction():
    loop = make_loop({'initial_population': 3, 'lifespan': 1})
    stats = loop.run(10)

    assert stats['population'] == 0
    assert loop.tick_count == 1


def test_day_night_cycle():
    loop = make_loop({'initial_population': 1, 'day_length': 2})

    loop.tick()
    assert loop.is_daytime
    loop.tick()
    assert not loop.is_daytime
    loop.tick()
    loop.tick()
    assert loop.is_daytime


def test_update_config():
    """Test runtime settings are clamped and obstacles follow their count."""
    loop = make_loop(EMPTY_WORLD)

    loop.update_config({'population_limit': 5000, 'obstacle_count': 3})
    assert loop.config['population_limit'] == 1000
    assert len(loop.obstacles) == 3

    loop.update_config({'obstacle_count': 1})
    assert len(loop.obstacles) == 1
    assert loop.config['population_limit'] == 1000

    with pytest.raises(KeyError):
        loop.update_config({'unknown_setting': 1})


def test_records_round_trip():
    """Test exported organisms can be restored into a new world."""
    source = make_loop({'initial_population': 6})
    source.organisms[0].health = 42.0
    records = source.export_records()

    target = make_loop(EMPTY_WORLD)
    restored = target.load_records(records)

    assert len(target.organisms) == 6
    assert restored[0].health == 42.0
    for original, copy in zip(source.organisms, restored):
        assert copy.genome.traits == original.genome.traits
        assert copy.sex == original.sex
        assert copy.pos == original.pos


def test_random_walk_stays_in_world():
    loop = PopulationLoop(config={'initial_population': 15, 'initial_food': 20}, seed=7)

    for _ in range(100):
        loop.tick()

    for organism in loop.organisms:
        assert 0 <= organism.pos.x <= loop.width
        assert 0 <= organism.pos.y <= loop.height


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
