"""Shared test doubles for kinsim test suites.

Plain subclasses of the real collaborators, not unittest.mock.
"""

from __future__ import annotations

import random
from collections import Counter

from src.evolution.cache import GenerationCache
from src.evolution.creature import Creature
from src.evolution.genes import GENE_COUNT, Gene
from src.evolution.population import World


class ScriptedRandom(random.Random):
    """Random source with scripted offsets and fixed coin flips.

    - randrange() pops from a script of offsets (falls back to real draws)
    - random() always returns `coin` (0.0 picks the mother's gene)
    - choice() always returns the last element (Gene.CREATURE_LEVEL)
    """

    def __init__(self, offsets=(), coin: float = 0.0, seed: int = 0):
        super().__init__(seed)
        self.offsets = list(offsets)
        self.coin = coin
        self.random_calls = 0

    def randrange(self, *args, **kwargs):
        if self.offsets:
            return self.offsets.pop(0)
        return super().randrange(*args, **kwargs)

    def random(self):
        self.random_calls += 1
        return self.coin

    def choice(self, seq):
        return seq[-1]


class CountingCache(GenerationCache):
    """Generation cache that counts how often each (key, epoch) is computed."""

    def __init__(self):
        super().__init__()
        self.computations: Counter[tuple[str, int]] = Counter()

    def get_or_compute(self, key, epoch, compute):
        def counted():
            self.computations[(key, epoch)] += 1
            return compute()

        return super().get_or_compute(key, epoch, counted)


def uniform_genes(gene: Gene) -> list[Gene]:
    """A full gene sequence of one variant."""
    return [gene] * GENE_COUNT


def founder(world: World, gene: Gene = Gene.SELFISH, species_id: int = 0) -> Creature:
    """A founder with a homogeneous genome (not added to the living population)."""
    return Creature.founder(species_id, world, uniform_genes(gene))


def three_generation_family(world: World, gene: Gene = Gene.SELFISH) -> dict[str, Creature]:
    """Grandparents, parents with a sibling each, and three grandchildren.

    Layout:
        gm_m x gf_m -> mother, aunt
        gm_f x gf_f -> father, uncle
        mother x father -> child, sibling
        aunt x uncle -> cousin
    """
    gm_m, gf_m, gm_f, gf_f = (founder(world, gene) for _ in range(4))
    return _extend(world, gm_m, gf_m, gm_f, gf_f)


def four_generation_family(world: World, gene: Gene = Gene.SELFISH) -> dict[str, Creature]:
    """Like three_generation_family, with eight great-grandparents on top."""
    ggps = [founder(world, gene) for _ in range(8)]
    gm_m = Creature.from_parents(ggps[0], ggps[1])
    gf_m = Creature.from_parents(ggps[2], ggps[3])
    gm_f = Creature.from_parents(ggps[4], ggps[5])
    gf_f = Creature.from_parents(ggps[6], ggps[7])
    family = _extend(world, gm_m, gf_m, gm_f, gf_f)
    family.update({f"ggp{i}": c for i, c in enumerate(ggps)})
    return family


def _extend(world, gm_m, gf_m, gm_f, gf_f) -> dict[str, Creature]:
    mother = Creature.from_parents(gm_m, gf_m)
    aunt = Creature.from_parents(gm_m, gf_m)
    father = Creature.from_parents(gm_f, gf_f)
    uncle = Creature.from_parents(gm_f, gf_f)
    child = Creature.from_parents(mother, father)
    sibling = Creature.from_parents(mother, father)
    cousin = Creature.from_parents(aunt, uncle)
    for creature in (child, sibling, cousin):
        world.add(creature)
    return {
        "gm_m": gm_m,
        "gf_m": gf_m,
        "gm_f": gm_f,
        "gf_f": gf_f,
        "mother": mother,
        "aunt": aunt,
        "father": father,
        "uncle": uncle,
        "child": child,
        "sibling": sibling,
        "cousin": cousin,
    }
