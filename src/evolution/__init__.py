"""Kin-selection evolution model.

This package implements the strength-accounting core:
- Gene / Relation: heritable traits and kinship tags
- GenerationCache: per-epoch memoization of species-wide sums
- FamilyTree: id-addressed arena of parent and child links
- Creature: reproduction, mutation, pruning and summary strength
- World: species container that drives generations
"""

from __future__ import annotations

from src.evolution.cache import GenerationCache
from src.evolution.creature import Creature, PopulationView
from src.evolution.genes import (
    GENE_COUNT,
    GENE_STRENGTH,
    Gene,
    Relation,
    choose_random_gene,
    create_random_gene,
)
from src.evolution.lineage import FamilyTree, LineageNode
from src.evolution.population import GenerationStats, SpeciesStats, World

__all__ = [
    "GENE_COUNT",
    "GENE_STRENGTH",
    "Gene",
    "Relation",
    "choose_random_gene",
    "create_random_gene",
    "GenerationCache",
    "FamilyTree",
    "LineageNode",
    "Creature",
    "PopulationView",
    "World",
    "GenerationStats",
    "SpeciesStats",
]
