"""Entry point for the kinsim simulation."""

from __future__ import annotations

import logging
import sys

from src.config import SimulationConfig
from src.evolution.population import World
from src.simulation.renderer import Renderer

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None):
    """Run the simulation."""
    config = SimulationConfig()

    # Parse CLI args
    for arg in sys.argv[1:] if argv is None else argv:
        if arg.startswith("--generations="):
            config.generations = int(arg.split("=")[1])
        elif arg.startswith("--runs="):
            config.runs = int(arg.split("=")[1])
        elif arg.startswith("--seed="):
            config.seed = int(arg.split("=")[1])
        elif arg.startswith("--species="):
            config.species_count = int(arg.split("=")[1])
        elif arg.startswith("--founders="):
            config.founders_per_species = int(arg.split("=")[1])
        elif arg.startswith("--capacity="):
            config.species_capacity = int(arg.split("=")[1])
        elif arg.startswith("--offspring="):
            config.offspring_per_pair = int(arg.split("=")[1])
        elif arg == "--float-division":
            config.integer_division = False
        elif arg == "--verbose":
            config.log_level = "INFO"
        elif arg == "--help" or arg == "-h":
            print("kinsim v0.1.0")
            print()
            print("Usage: python -m src.main [OPTIONS]")
            print()
            print("Options:")
            print("  --generations=N       Generations per run (default: 128)")
            print("  --runs=N              Consecutive runs on one world (default: 8)")
            print("  --seed=N              Random seed (default: 42)")
            print("  --species=N           Number of species (default: 4)")
            print("  --founders=N          Founders per species (default: 16)")
            print("  --capacity=N          Max creatures per species (default: 64)")
            print("  --offspring=N         Offspring per mating pair (default: 4)")
            print("  --float-division      Full-precision selfish strength shares")
            print("  --verbose             Log every generation")
            print()
            print("Environment variables (override any setting):")
            print("  KINSIM_SEED, KINSIM_GENERATIONS, KINSIM_LOG_LEVEL, etc.")
            sys.exit(0)
        else:
            print(f"Unknown option: {arg} (see --help)")
            sys.exit(2)

    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    world = World(config)
    renderer = Renderer()

    for run_index in range(1, config.runs + 1):
        world.run(config.generations)
        renderer.print_run_summary(run_index, world.statistics)

    renderer.print_complete(world.age, len(world.living()))
    logger.info(f"Finished {config.runs} runs, final family tree size {len(world.family)}")


if __name__ == "__main__":
    main()
