"""Creature entity: genes, reproduction, mutation, and kin-weighted strength.

Strength blends three terms:
- own strength from the creature's genes
- altruistic strength donated by every other member of the species
- selfish strength donated by relatives, weighted by relatedness

Kinship links live in the world's FamilyTree; a creature only knows its id.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from src.errors import (
    ConfigurationError,
    DegeneratePopulationError,
    InvariantViolationError,
    UnknownRelationError,
)
from src.evolution.genes import (
    GENE_COUNT,
    GENE_STRENGTH,
    HALF_GENE_STRENGTH,
    MUTATION_SPAN,
    RELATION_WEIGHTS,
    Gene,
    Relation,
    choose_random_gene,
    create_random_gene,
)

if TYPE_CHECKING:
    from src.evolution.cache import GenerationCache
    from src.evolution.lineage import FamilyTree

logger = logging.getLogger(__name__)


class PopulationView(Protocol):
    """What a creature needs from the population that holds it."""

    cache: GenerationCache
    family: FamilyTree
    rng: random.Random
    integer_division: bool

    def species_population(self, species_id: int) -> list[Creature]:
        """Living members of a species, in insertion order."""
        ...

    def current_epoch(self) -> int:
        """Current generation number."""
        ...


class Creature:
    """An organism with a fixed-length gene sequence and a place in a family tree.

    Constructing a creature registers it in the world's family tree, as a
    founder when no parents are given and as offspring when both are.
    """

    def __init__(
        self,
        species_id: int,
        world: PopulationView,
        genes: Sequence[Gene],
        mother: Creature | None = None,
        father: Creature | None = None,
    ):
        if len(genes) != GENE_COUNT:
            raise InvariantViolationError(f"Expected {GENE_COUNT} genes, got {len(genes)}")
        self._species_id = species_id
        self._world = world
        self._genes: list[Gene] = list(genes)
        self.creature_id = world.family.new_id()
        world.family.register(self, mother, father, birth_epoch=world.current_epoch())

    @classmethod
    def founder(
        cls,
        species_id: int,
        world: PopulationView | None,
        genes: Sequence[Gene] | None = None,
    ) -> Creature:
        """Create a parentless creature with random (or given) genes."""
        if world is None:
            raise ConfigurationError("A founder creature needs a population to live in")
        if genes is None:
            genes = [create_random_gene(world.rng) for _ in range(GENE_COUNT)]
        return cls(species_id, world, genes)

    @classmethod
    def from_parents(cls, mother: Creature, father: Creature) -> Creature:
        """Create offspring of two same-species parents.

        Each gene position is taken from the mother or the father with equal
        probability. The child is registered with both parents.

        Raises:
            InvariantViolationError: if the parents belong to different species
        """
        if mother.species_id != father.species_id:
            raise InvariantViolationError(
                f"Interspecies mating: {mother.species_id} x {father.species_id}"
            )
        world = mother._world
        rng = world.rng
        genes = [
            choose_random_gene(m, f, rng) for m, f in zip(mother._genes, father._genes, strict=True)
        ]
        return cls(mother.species_id, world, genes, mother, father)

    @property
    def species_id(self) -> int:
        return self._species_id

    @property
    def genes(self) -> tuple[Gene, ...]:
        return tuple(self._genes)

    @property
    def mother(self) -> Creature | None:
        return self._world.family.mother_of(self.creature_id)

    @property
    def father(self) -> Creature | None:
        return self._world.family.father_of(self.creature_id)

    @property
    def children(self) -> list[Creature]:
        return self._world.family.children_of(self.creature_id)

    @property
    def selfish_genes(self) -> int:
        return self._genes.count(Gene.SELFISH)

    @property
    def altruistic_genes(self) -> int:
        return self._genes.count(Gene.ALTRUISTIC)

    @property
    def creature_level_genes(self) -> int:
        return self._genes.count(Gene.CREATURE_LEVEL)

    @property
    def own_strength(self) -> int:
        """Strength given to this creature by its own genes."""
        return sum(
            GENE_STRENGTH if gene is Gene.CREATURE_LEVEL else HALF_GENE_STRENGTH
            for gene in self._genes
        )

    def mutate(self) -> None:
        """Replace up to MUTATION_SPAN consecutive genes with random ones.

        The start offset is drawn from twice the gene count, so half of all
        calls change nothing.
        """
        rng = self._world.rng
        offset = rng.randrange(GENE_COUNT << 1)
        limit = min(GENE_COUNT, offset + MUTATION_SPAN)
        for position in range(offset, limit):
            self._genes[position] = create_random_gene(rng)

    def break_redundant_connections(self) -> None:
        """Cut the great-grandparent generation out of the family tree.

        Strength never looks past grandparents, aunts, uncles and cousins, so
        each grandparent forgets its parents and those parents forget their
        children. Missing slots are skipped.
        """
        family = self._world.family
        detached = []
        for parent in (self.mother, self.father):
            if parent is None:
                continue
            for grandparent in (parent.mother, parent.father):
                if grandparent is None:
                    continue
                node = family.node(grandparent.creature_id)
                if node.mother_id is None and node.father_id is None:
                    continue
                family.clear_children(node.mother_id)
                family.clear_children(node.father_id)
                family.unlink_parents(grandparent.creature_id)
                detached.append(grandparent.creature_id)
        if detached:
            logger.debug(
                f"Creature {self.creature_id} detached great-grandparents of {detached}"
            )

    def summary_strength(self) -> int:
        """Own strength plus species altruism plus help from relatives."""
        return (
            self.own_strength
            + int(self.population_altruism())
            + int(self.help_from_relations())
        )

    def altruistic_out_strength(self) -> float:
        """Share of this creature's altruism received by each other species member."""
        altruism = self.altruistic_genes * HALF_GENE_STRENGTH
        recipients = len(self._world.species_population(self._species_id)) - 1
        if recipients <= 0:
            raise DegeneratePopulationError("altruistic out strength", self.creature_id)
        return altruism / recipients

    def population_altruism(self) -> float:
        """Altruism donated to this creature by the rest of its species.

        Computed once per species per epoch; later queries in the same epoch
        reuse the first result.
        """
        world = self._world
        key = f"altruistic-out-strength:{self._species_id}"
        return world.cache.get_or_compute(key, world.current_epoch(), self._sum_altruism)

    def _sum_altruism(self) -> float:
        total = 0.0
        for other in self._world.species_population(self._species_id):
            if other is not self:
                total += other.altruistic_out_strength()
        return total

    def selfish_out_strength(self, relation: Relation) -> float:
        """Strength this creature's selfish genes give to one relative of a kind.

        Args:
            relation: How the recipient is related to this creature

        Returns:
            Selfish strength split over all relatives of that kind, scaled by
            the relation's weight

        Raises:
            InvariantViolationError: if the relatives the relation implies are missing
            DegeneratePopulationError: if there are no recipients
        """
        family = self._world.family

        if relation is Relation.CHILD:
            recipients = family.child_count(self.creature_id)
        elif relation is Relation.BROTHER_OR_SISTER:
            mother = self._mother_with_siblings(relation)
            recipients = family.child_count(mother.creature_id) - 1
        elif relation is Relation.GRAND_CHILD:
            recipients = sum(family.child_count(child.creature_id) for child in self.children)
        elif relation is Relation.NEPHEW_OR_NIECE:
            mother = self._mother_with_siblings(relation)
            recipients = sum(
                family.child_count(sibling.creature_id)
                for sibling in mother.children
                if sibling is not self
            )
        elif relation is Relation.COUSIN:
            recipients = self._cousin_count()
        else:
            raise UnknownRelationError(relation)

        selfish = self.selfish_genes * HALF_GENE_STRENGTH
        return self._share(selfish, recipients, relation) * RELATION_WEIGHTS[relation]

    def _share(self, total: int, recipients: int, relation: Relation) -> float:
        if recipients <= 0:
            raise DegeneratePopulationError(f"{relation.value} out strength", self.creature_id)
        if self._world.integer_division:
            return float(total // recipients)
        return total / recipients

    def _mother_with_siblings(self, relation: Relation) -> Creature:
        mother = self.mother
        if mother is None or self._world.family.child_count(mother.creature_id) < 2:
            raise InvariantViolationError(
                f"Creature {self.creature_id} has no brothers or sisters ({relation.value})"
            )
        return mother

    def _cousin_count(self) -> int:
        family = self._world.family
        count = 0
        for parent in (self.mother, self.father):
            grandmother = parent.mother if parent is not None else None
            if grandmother is None:
                raise InvariantViolationError(
                    f"Creature {self.creature_id} has no recorded grandmother for cousins"
                )
            count += sum(
                family.child_count(aunt.creature_id)
                for aunt in grandmother.children
                if aunt is not parent
            )
        return count

    def help_from_relations(self) -> float:
        """Selfish strength received from parents, siblings and, when known,
        grandparents, aunts, uncles and cousins."""
        mother = self.mother
        father = self.father
        if mother is None:
            return 0.0
        if father is None:
            raise InvariantViolationError(f"Creature {self.creature_id} has a mother but no father")

        help_sum = mother.selfish_out_strength(Relation.CHILD)
        help_sum += father.selfish_out_strength(Relation.CHILD)
        help_sum += sum(
            sibling.selfish_out_strength(Relation.BROTHER_OR_SISTER)
            for sibling in mother.children
            if sibling is not self
        )

        if mother.mother is None:
            return help_sum

        grandparents = (mother.mother, mother.father, father.mother, father.father)
        if any(grandparent is None for grandparent in grandparents):
            raise InvariantViolationError(
                f"Creature {self.creature_id} has an incomplete set of grandparents"
            )
        maternal_grandmother, _, paternal_grandmother, _ = grandparents

        for grandparent in grandparents:
            help_sum += grandparent.selfish_out_strength(Relation.GRAND_CHILD)

        aunts = [a for a in maternal_grandmother.children if a is not mother]
        uncles = [u for u in paternal_grandmother.children if u is not father]
        help_sum += sum(aunt.selfish_out_strength(Relation.NEPHEW_OR_NIECE) for aunt in aunts)
        help_sum += sum(uncle.selfish_out_strength(Relation.NEPHEW_OR_NIECE) for uncle in uncles)
        help_sum += sum(
            cousin.selfish_out_strength(Relation.COUSIN) for aunt in aunts for cousin in aunt.children
        )
        help_sum += sum(
            cousin.selfish_out_strength(Relation.COUSIN)
            for uncle in uncles
            for cousin in uncle.children
        )
        return help_sum

    def __repr__(self) -> str:
        return f"Creature(id={self.creature_id}, species={self._species_id})"
