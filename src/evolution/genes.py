"""Gene model: heritable traits, relation tags, and random draws.

Each creature carries GENE_COUNT genes. A gene is one of three categories:
- CREATURE_LEVEL: full strength for its carrier
- SELFISH: half strength for its carrier, shared with close kin
- ALTRUISTIC: half strength for its carrier, shared with the whole species
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from enum import Enum

GENE_COUNT = 128
GENE_STRENGTH = 128
HALF_GENE_STRENGTH = GENE_STRENGTH >> 1
MUTATION_SPAN = 6


class Gene(Enum):
    """A heritable trait held at one gene position."""

    SELFISH = "selfish"
    ALTRUISTIC = "altruistic"
    CREATURE_LEVEL = "creature_level"


class Relation(Enum):
    """Kinship of a recipient to the donor, as seen from the donor."""

    CHILD = "child"
    BROTHER_OR_SISTER = "brother_or_sister"
    GRAND_CHILD = "grand_child"
    NEPHEW_OR_NIECE = "nephew_or_niece"
    COUSIN = "cousin"


# Relatedness times model normalisation. Calibration values, keep literal.
RELATION_WEIGHTS: dict[Relation, float] = {
    Relation.CHILD: 30.78,
    Relation.BROTHER_OR_SISTER: 30.78,
    Relation.GRAND_CHILD: 15.38,
    Relation.NEPHEW_OR_NIECE: 15.38,
    Relation.COUSIN: 7.68,
}

_GENES = tuple(Gene)


def create_random_gene(rng: random.Random) -> Gene:
    """Draw a gene uniformly from the three variants."""
    return rng.choice(_GENES)


def choose_random_gene(a: Gene, b: Gene, rng: random.Random) -> Gene:
    """Pick one of two parental genes with equal probability."""
    return a if rng.random() < 0.5 else b


def count_genes(genes: Iterable[Gene]) -> dict[Gene, int]:
    """Tally genes per variant (every variant present, possibly zero)."""
    counts = dict.fromkeys(_GENES, 0)
    for gene in genes:
        counts[gene] += 1
    return counts
