"""kinsim Quickstart — Your First Simulation

This script runs a small kin-selection world programmatically. Each species
starts with founders carrying random genes; every generation the creatures
pair up, mutate, and are ranked by summary strength, which blends their own
genes with help from the species and from close relatives.

Run with:
    python examples/quickstart.py
"""

from src.config import SimulationConfig
from src.evolution.genes import Relation
from src.evolution.population import World


def main():
    # 2 species, 20 generations, seed=42 for reproducibility
    config = SimulationConfig(
        species_count=2,
        founders_per_species=8,
        species_capacity=24,
        generations=20,
        seed=42,
    )

    world = World(config)
    history = world.run()

    print("kinsim Simulation Finished")
    print(f"  Generations: {world.age}")
    print(f"  Family tree nodes: {len(world.family)}")
    print()

    last = history[-1]
    for species in last.species:
        print(
            f"  Species {species.species_id}: {species.population} creatures, "
            f"strength {species.mean_strength:.0f}, "
            f"selfish {species.mean_selfish:.1f} / altruistic {species.mean_altruistic:.1f} / "
            f"creature-level {species.mean_creature_level:.1f}"
        )
    print()

    # Peek at where one creature's strength comes from
    creature = world.living()[0]
    print(f"Strength breakdown for {creature}:")
    print(f"  Own genes:          {creature.own_strength}")
    print(f"  Species altruism:   {creature.population_altruism():.1f}")
    print(f"  Help from kin:      {creature.help_from_relations():.1f}")
    print(f"  Summary:            {creature.summary_strength()}")
    print(f"  Mother per child:   {creature.mother.selfish_out_strength(Relation.CHILD):.1f}")


if __name__ == "__main__":
    main()
