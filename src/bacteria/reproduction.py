"""
ReproductionState class implementing courtship, gestation and cooldown.
"""

import random

from config import REPRODUCTION_PARAMS

FEMALE = "female"
MALE = "male"

IDLE = "idle"
COURTING = "courting"
PREGNANT = "pregnant"
COOLDOWN = "cooldown"


class ReproductionState:
    """
    Per-organism reproduction state machine.

    Idle -> Courting -> Pregnant (females only) -> Cooldown -> Idle.
    The mating cooldown is armed for both partners when ``mate`` succeeds and
    only counts down once courtship and gestation are over, for the father too.

    Attributes:
        sex (str): ``FEMALE`` or ``MALE``
        genome (Genome): Owner's genome
        cooldown_remaining (int): Ticks left before mating is allowed again
        courting_remaining (int): Ticks left in courtship
        pregnancy_elapsed (int): Ticks of gestation so far
        pregnancy_duration (int): Ticks of gestation needed for a birth
        hold_remaining (int): Ticks the father waits out the mother's courtship
            and gestation before his cooldown runs
        partner_genome (Genome): Snapshot of the father's genome, or None
    """

    def __init__(self, sex, genome=None, rng=None, genome_factory=None, params=None):
        """
        Initialize reproduction state in Idle.

        Args:
            sex (str): ``FEMALE`` or ``MALE``
            genome (Genome): Owner's genome
            rng: Random source handed to crossover
            genome_factory (GenomeFactory): Produces child genomes when given
            params (dict): Overrides for ``REPRODUCTION_PARAMS``
        """
        if sex not in (FEMALE, MALE):
            raise ValueError(f"Unknown sex: {sex}")
        settings = dict(REPRODUCTION_PARAMS)
        settings.update(params or {})

        self.sex = sex
        self.genome = genome
        self.rng = rng or random
        self.genome_factory = genome_factory
        self.courting_duration = settings["courting_duration"]
        self.pregnancy_duration = settings["pregnancy_duration"]
        self.mating_cooldown_duration = settings["mating_cooldown_duration"]

        self.cooldown_remaining = 0
        self.courting_remaining = 0
        self.pregnant = False
        self.hold_remaining = 0
        self.pregnancy_elapsed = 0
        self.partner_genome = None

    @property
    def is_female(self):
        return self.sex == FEMALE

    @property
    def is_courting(self):
        return self.courting_remaining > 0

    @property
    def state(self):
        """Current state name."""
        if self.is_courting:
            return COURTING
        if self.pregnant:
            return PREGNANT
        if self.cooldown_remaining > 0:
            return COOLDOWN
        return IDLE

    def in_mating_recovery(self):
        return self.cooldown_remaining > 0

    def can_mate_now(self):
        """Whether this organism may start a new courtship."""
        return not self.pregnant and self.cooldown_remaining <= 0 and not self.is_courting

    def can_mate_with(self, other):
        return self.sex != other.sex and self.can_mate_now() and other.can_mate_now()

    def mate(self, other):
        """
        Try to mate with another organism's reproduction state.

        Args:
            other (ReproductionState): Partner

        Returns:
            bool: True if courtship started, False if either side is ineligible
        """
        if not self.can_mate_with(other):
            return False

        female, male = (self, other) if self.is_female else (other, self)
        if female.genome is None or male.genome is None:
            raise ValueError("Both partners need a genome to mate")

        for partner in (self, other):
            partner.courting_remaining = partner.courting_duration
            partner.cooldown_remaining = partner.mating_cooldown_duration

        female.partner_genome = male.genome.copy()
        female.pregnant = True
        female.pregnancy_elapsed = 0
        male.hold_remaining = female.courting_duration + female.pregnancy_duration
        return True

    def tick(self):
        """
        Advance one simulation tick.

        Returns:
            Genome or None: The child genome on the tick of birth
        """
        held = self.hold_remaining > 0
        if held:
            self.hold_remaining -= 1

        if self.courting_remaining > 0:
            self.courting_remaining -= 1
            return None

        if not self.pregnant:
            if self.cooldown_remaining > 0 and not held:
                self.cooldown_remaining -= 1
            return None

        self.pregnancy_elapsed += 1
        if self.pregnancy_elapsed < self.pregnancy_duration:
            return None

        child = self._create_child_genome()
        self.pregnant = False
        self.pregnancy_elapsed = 0
        self.partner_genome = None
        return child

    def _create_child_genome(self):
        if self.genome_factory is not None:
            return self.genome_factory.crossover(self.genome, self.partner_genome)
        return self.genome.crossover(self.partner_genome, rng=self.rng)

    def describe(self):
        return {
            "sex": self.sex,
            "state": self.state,
            "cooldown": self.cooldown_remaining,
            "pregnancy_progress": (self.pregnancy_elapsed / self.pregnancy_duration
                                   if self.pregnant else 0.0),
        }

    def __repr__(self):
        return f"ReproductionState(sex={self.sex}, state={self.state})"
