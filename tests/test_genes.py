"""Tests for the gene model and random gene draws."""

from __future__ import annotations

import random

from src.evolution.genes import (
    GENE_STRENGTH,
    HALF_GENE_STRENGTH,
    RELATION_WEIGHTS,
    Gene,
    Relation,
    choose_random_gene,
    count_genes,
    create_random_gene,
)


class TestRandomGenes:
    """Test random gene creation and parental choice."""

    def test_create_random_gene_is_reproducible(self):
        """Same seed, same genes."""
        rng_a = random.Random(99)
        rng_b = random.Random(99)

        genes = [create_random_gene(rng_a) for _ in range(50)]

        assert genes == [create_random_gene(rng_b) for _ in range(50)]
        assert all(gene in Gene for gene in genes)

    def test_create_random_gene_covers_all_variants(self):
        """Uniform draws hit every variant in roughly equal shares."""
        rng = random.Random(3)
        counts = count_genes(create_random_gene(rng) for _ in range(3000))

        for gene in Gene:
            assert 850 < counts[gene] < 1150

    def test_choose_random_gene_returns_a_parent(self):
        """Choice is always one of the two given genes."""
        rng = random.Random(5)
        for _ in range(100):
            assert choose_random_gene(Gene.SELFISH, Gene.ALTRUISTIC, rng) in (
                Gene.SELFISH,
                Gene.ALTRUISTIC,
            )

    def test_choose_random_gene_is_fair(self):
        """Mother and father genes are picked about equally often."""
        rng = random.Random(11)
        picks = [choose_random_gene(Gene.SELFISH, Gene.ALTRUISTIC, rng) for _ in range(4000)]
        share = picks.count(Gene.SELFISH) / len(picks)

        assert 0.46 < share < 0.54


class TestGeneConstants:
    """Test model constants."""

    def test_strengths(self):
        assert GENE_STRENGTH == 128
        assert HALF_GENE_STRENGTH == 64

    def test_relation_weights_are_literal(self):
        """Calibration constants are kept verbatim."""
        assert RELATION_WEIGHTS == {
            Relation.CHILD: 30.78,
            Relation.BROTHER_OR_SISTER: 30.78,
            Relation.GRAND_CHILD: 15.38,
            Relation.NEPHEW_OR_NIECE: 15.38,
            Relation.COUSIN: 7.68,
        }

    def test_count_genes_includes_missing_variants(self):
        counts = count_genes([Gene.SELFISH, Gene.SELFISH])

        assert counts == {Gene.SELFISH: 2, Gene.ALTRUISTIC: 0, Gene.CREATURE_LEVEL: 0}
