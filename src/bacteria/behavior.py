"""
BehaviorSelector class choosing what a bacterium does next.
"""

import random

from config import BEHAVIOR_PARAMS, MAX_HEALTH

EAT = "eat"
MATE = "mate"
REST = "rest"
EXPLORE = "explore"

# Ties are resolved in this order.
BEHAVIOR_PRIORITY = (EAT, MATE, REST, EXPLORE)

BEHAVIOR_LABELS = {
    EAT: "Searching for food",
    MATE: "Searching for a partner",
    REST: "Resting",
    EXPLORE: "Exploring",
}


class BehaviorSelector:
    """
    Picks one of eat, mate, rest or explore for a single organism.

    Decisions are throttled: once a behavior is chosen it is kept until a
    randomly drawn timer runs out, then all four candidates are re-scored.

    Attributes:
        genome (Genome): Owner's genome, read for trait weights
        current_behavior (str): Active behavior
        behavior_timer (int): Ticks left before the next decision
        rest_timer (int): Ticks left in the current rest period
    """

    def __init__(self, genome, rng=None, params=None):
        """
        Initialize a behavior selector.

        Args:
            genome (Genome): Owner's genome
            rng: Random source with ``randint``
            params (dict): Overrides for ``BEHAVIOR_PARAMS``
        """
        self.genome = genome
        self.rng = rng or random
        self.params = dict(BEHAVIOR_PARAMS)
        self.params.update(params or {})
        self.current_behavior = EXPLORE
        self.behavior_timer = 0
        self.rest_timer = 0

    def score_behaviors(self, health, time_since_last_meal, starvation_time,
                        can_mate, in_mating_recovery):
        """
        Score every candidate behavior.

        Args:
            health (float): Current health (0-100)
            time_since_last_meal (float): Ticks since the last meal
            starvation_time (float): Ticks until starvation
            can_mate (bool): Whether the organism can mate now
            in_mating_recovery (bool): Whether the mating cooldown is running

        Returns:
            dict: Behavior -> score
        """
        p = self.params
        metabolism = self.genome["metabolism"]
        health = max(0.0, min(MAX_HEALTH, health))
        hunger_fraction = time_since_last_meal / max(starvation_time, 1e-9)
        health_deficit = 1.0 - health / MAX_HEALTH

        eat_score = (p["hunger_weight"] * hunger_fraction
                     + p["health_weight"] * health_deficit) * metabolism

        threshold = p["mate_health_threshold"]
        if not can_mate or in_mating_recovery or health < threshold:
            mate_score = 0.0
        else:
            health_bonus = p["mate_health_bonus"] * (health - threshold) / (MAX_HEALTH - threshold)
            mate_score = self.genome["fertility"] * p["fertility_weight"] + health_bonus

        rest_score = health_deficit * p["rest_weight"] * (1.0 - metabolism)
        explore_score = self.genome["curiosity"] * p["curiosity_weight"]

        return {
            EAT: eat_score,
            MATE: mate_score,
            REST: rest_score,
            EXPLORE: explore_score,
        }

    def update(self, health, time_since_last_meal, starvation_time, can_mate, in_mating_recovery):
        """
        Advance the decision timer and re-score when it runs out.

        Returns:
            str: The current behavior
        """
        self.behavior_timer -= 1
        if self.rest_timer > 0:
            self.rest_timer -= 1

        if self.behavior_timer > 0:
            return self.current_behavior

        self.behavior_timer = self.rng.randint(self.params["min_behavior_time"],
                                               self.params["max_behavior_time"])

        scores = self.score_behaviors(health, time_since_last_meal, starvation_time,
                                      can_mate, in_mating_recovery)
        best = BEHAVIOR_PRIORITY[0]
        for behavior in BEHAVIOR_PRIORITY[1:]:
            if scores[behavior] > scores[best]:
                best = behavior
        self.current_behavior = best

        if best == REST:
            self.rest_timer = self.rng.randint(self.params["min_rest_time"],
                                               self.params["max_rest_time"])
        else:
            self.rest_timer = 0

        return self.current_behavior

    def eat(self, nutrition):
        """
        Health gained from a meal.

        Args:
            nutrition (float): Nutritional value of the food

        Returns:
            float or None: Gain when eating is the current behavior, else None
        """
        if self.current_behavior == EAT:
            return nutrition * self.genome["metabolism"]
        return None

    def is_resting(self):
        return self.current_behavior == REST and self.rest_timer > 0

    def describe(self):
        return {
            "current": BEHAVIOR_LABELS.get(self.current_behavior, "Unknown"),
            "behavior": self.current_behavior,
            "timer": max(0, self.behavior_timer),
            "rest_timer": self.rest_timer,
        }

    def __repr__(self):
        return f"BehaviorSelector(current={self.current_behavior}, timer={self.behavior_timer})"
