"""
Individual organism lifecycle tracking.
"""

from collections import Counter, deque


class IndividualTracker:
    """
    Tracks individual organisms from birth to death.

    Only the most recent ``max_deceased`` dead organisms keep their data;
    totals and causes of death cover the whole run.
    """

    def __init__(self, max_history=1000, max_deceased=200):
        self.max_history = max_history
        self.max_deceased = max_deceased
        self.tracked_individuals = {}  # {organism_id: data_history}
        self.alive_individuals = set()
        self.deceased_individuals = deque()  # oldest death first
        self.total_tracked = 0
        self.total_deceased = 0
        self.causes_of_death = Counter()

    def register_individual(self, organism, tick):
        """Start tracking a newly spawned organism"""
        if organism.unique_id in self.tracked_individuals:
            return
        self.tracked_individuals[organism.unique_id] = {
            'steps': deque(maxlen=self.max_history),
            'health': deque(maxlen=self.max_history),
            'energy': deque(maxlen=self.max_history),
            'behavior': deque(maxlen=self.max_history),
            'pos_x': deque(maxlen=self.max_history),
            'pos_y': deque(maxlen=self.max_history),
            'sex': organism.sex,
            'generation': organism.genome.generation,
            'birth_step': tick,
            'death_step': None,
            'cause_of_death': None  # 'starvation', 'exhaustion', 'old_age', 'overpopulation'
        }
        self.alive_individuals.add(organism.unique_id)
        self.total_tracked += 1

    def update_tracked_individuals(self, organisms, tick):
        """Append the current state of every live organism"""
        for organism in organisms:
            data = self.tracked_individuals.get(organism.unique_id)
            if data is None:
                continue
            data['steps'].append(tick)
            data['health'].append(organism.health)
            data['energy'].append(organism.energy)
            data['behavior'].append(organism.behavior.current_behavior)
            data['pos_x'].append(organism.pos.x)
            data['pos_y'].append(organism.pos.y)

    def mark_death(self, organism_id, cause, tick):
        """Mark an organism as deceased with cause"""
        data = self.tracked_individuals.get(organism_id)
        if data is None:
            return
        data['cause_of_death'] = cause
        data['death_step'] = tick
        self.alive_individuals.discard(organism_id)
        self.deceased_individuals.append(organism_id)
        self.total_deceased += 1
        self.causes_of_death[cause] += 1

        while len(self.deceased_individuals) > self.max_deceased:
            del self.tracked_individuals[self.deceased_individuals.popleft()]

    def get_tracked_data(self, organism_id):
        """Get historical data for a specific organism"""
        return self.tracked_individuals.get(organism_id, None)

    def get_alive_individuals(self):
        return list(self.alive_individuals)

    def get_deceased_individuals(self):
        return list(self.deceased_individuals)

    def get_statistics(self):
        """Get overall tracking statistics"""
        return {
            'total_tracked': self.total_tracked,
            'alive': len(self.alive_individuals),
            'deceased': self.total_deceased,
            'causes_of_death': dict(self.causes_of_death)
        }
