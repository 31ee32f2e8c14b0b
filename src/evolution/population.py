"""Population management: species, generations, births and culling.

Orchestrates one generation per tick, in a fixed order:
- Advance the epoch
- Pair up each species and produce offspring; the parent generation retires
- Mutate every newborn
- Prune great-grandparents out of the family tree
- Score every newborn by summary strength
- Cull each species down to capacity, strongest first
- Sweep detached ancestors out of the family tree
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from src.config import SimulationConfig
from src.errors import ConfigurationError
from src.evolution.cache import GenerationCache
from src.evolution.creature import Creature
from src.evolution.lineage import FamilyTree

logger = logging.getLogger(__name__)


@dataclass
class SpeciesStats:
    """Snapshot of one species after culling."""

    species_id: int
    population: int
    mean_strength: float
    mean_selfish: float
    mean_altruistic: float
    mean_creature_level: float


@dataclass
class GenerationStats:
    """Record of a single generation."""

    epoch: int
    births: int = 0
    species: list[SpeciesStats] = field(default_factory=list)
    extinct: list[int] = field(default_factory=list)
    family_size: int = 0
    collected: int = 0

    @property
    def population(self) -> int:
        return sum(s.population for s in self.species)


class World:
    """Holds every living creature by species and advances generations.

    Serves as the PopulationView creatures consult for their species,
    the current epoch, randomness and the shared generation cache.
    """

    def __init__(self, config: SimulationConfig | None = None, rng: random.Random | None = None):
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.integer_division = self.config.integer_division
        self.cache = GenerationCache()
        self.family = FamilyTree()
        self.age = 0
        self._species: dict[int, list[Creature]] = {}
        self._history: list[GenerationStats] = []

    def species_population(self, species_id: int) -> list[Creature]:
        """Living members of a species in insertion order. Do not mutate."""
        return self._species.get(species_id, [])

    def current_epoch(self) -> int:
        return self.age

    @property
    def species_ids(self) -> list[int]:
        return list(self._species)

    def living(self) -> list[Creature]:
        """All living creatures, species by species."""
        return [c for members in self._species.values() for c in members]

    def add(self, creature: Creature) -> None:
        """Place a creature in its species' living list."""
        self._species.setdefault(creature.species_id, []).append(creature)

    def populate(self) -> None:
        """Create the founder generation for every species."""
        if self.config.founders_per_species < 2:
            raise ConfigurationError("Each species needs at least two founders to breed")
        if self.config.species_count < 1:
            raise ConfigurationError("At least one species is required")
        if self.config.species_capacity < 2:
            raise ConfigurationError("Species capacity must keep at least a breeding pair")
        if self.config.offspring_per_pair < 1:
            raise ConfigurationError("Each pair needs at least one offspring")

        for species_id in range(self.config.species_count):
            self._species[species_id] = [
                Creature.founder(species_id, self) for _ in range(self.config.founders_per_species)
            ]
        logger.info(
            f"Populated {self.config.species_count} species with "
            f"{self.config.founders_per_species} founders each"
        )

    def tick(self) -> GenerationStats:
        """Advance the world by one generation.

        The epoch moves forward before any newborn exists, so strengths of the
        new generation are never served from the parents' cached sums.

        Returns:
            Statistics of the generation that was just produced
        """
        self.age += 1
        stats = GenerationStats(epoch=self.age)

        newborns: dict[int, list[Creature]] = {}
        for species_id, members in self._species.items():
            newborns[species_id] = self._reproduce(members)
            stats.births += len(newborns[species_id])

        for species_id, born in list(newborns.items()):
            if len(born) < 2:
                logger.warning(f"Species {species_id} went extinct at epoch {self.age}")
                stats.extinct.append(species_id)
                del newborns[species_id]
        self._species = newborns

        for creature in self.living():
            creature.mutate()
        for creature in self.living():
            creature.break_redundant_connections()

        for species_id, members in self._species.items():
            strengths = {c.creature_id: c.summary_strength() for c in members}
            survivors = sorted(members, key=lambda c: strengths[c.creature_id], reverse=True)
            survivors = survivors[: self.config.species_capacity]
            self._species[species_id] = survivors
            stats.species.append(self._species_stats(species_id, survivors, strengths))

        # Culling shrank the species; sums cached while scoring no longer hold.
        self.cache.clear()

        stats.collected = self.family.collect(c.creature_id for c in self.living())
        stats.family_size = len(self.family)
        self._history.append(stats)

        logger.info(
            f"Epoch {self.age}: {stats.births} births, population {stats.population}, "
            f"family tree {stats.family_size}"
        )
        return stats

    def run(self, generations: int | None = None) -> list[GenerationStats]:
        """Run several generations, populating first if the world is empty.

        Args:
            generations: Number of ticks (default: config.generations)

        Returns:
            Statistics for each generation of this run
        """
        if not self._species and self.age == 0:
            self.populate()
        count = self.config.generations if generations is None else generations

        run_stats = []
        for _ in range(count):
            if not self._species:
                logger.warning(f"No species left at epoch {self.age}, stopping")
                break
            run_stats.append(self.tick())
        return run_stats

    @property
    def statistics(self) -> GenerationStats | None:
        """Statistics of the most recent generation."""
        return self._history[-1] if self._history else None

    def get_population_history(self) -> list[GenerationStats]:
        return self._history.copy()

    def _reproduce(self, members: list[Creature]) -> list[Creature]:
        parents = list(members)
        self.rng.shuffle(parents)
        born = []
        for mother, father in zip(parents[0::2], parents[1::2]):
            for _ in range(self.config.offspring_per_pair):
                born.append(Creature.from_parents(mother, father))
        return born

    @staticmethod
    def _species_stats(
        species_id: int, survivors: list[Creature], strengths: dict[int, int]
    ) -> SpeciesStats:
        n = len(survivors)
        return SpeciesStats(
            species_id=species_id,
            population=n,
            mean_strength=sum(strengths[c.creature_id] for c in survivors) / n,
            mean_selfish=sum(c.selfish_genes for c in survivors) / n,
            mean_altruistic=sum(c.altruistic_genes for c in survivors) / n,
            mean_creature_level=sum(c.creature_level_genes for c in survivors) / n,
        )
