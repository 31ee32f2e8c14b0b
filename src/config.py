"""Configuration settings for the kinsim simulation.

Uses Pydantic Settings for validation and environment variable support.
All settings can be overridden via KINSIM_* environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class SimulationConfig(BaseSettings):
    """Global configuration for the kin-selection simulation."""

    # Randomness
    seed: int = 42

    # Population layout
    species_count: int = Field(default=4, ge=1)
    founders_per_species: int = Field(default=16, ge=2)  # a species needs a breeding pair
    species_capacity: int = Field(default=64, ge=2)  # culling keeps the strongest N per species
    offspring_per_pair: int = Field(default=4, ge=1)

    # Driver
    generations: int = Field(default=128, ge=0)  # generations per run
    runs: int = Field(default=8, ge=1)

    # Strength accounting
    integer_division: bool = True  # floor selfish share before scaling (legacy output)

    # Logging
    log_level: str = "WARNING"

    model_config = {"env_prefix": "KINSIM_"}
