"""Rich terminal renderer for generation statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from src.evolution.population import GenerationStats


class Renderer:
    """Prints per-run summaries of a kinsim world."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render_generation(self, stats: GenerationStats, title: str | None = None) -> Table:
        """Build a table with one row per surviving species."""
        table = Table(title=title or f"Epoch {stats.epoch}")
        table.add_column("Species", justify="right")
        table.add_column("Population", justify="right")
        table.add_column("Strength", justify="right")
        table.add_column("Selfish", justify="right")
        table.add_column("Altruistic", justify="right")
        table.add_column("Creature-level", justify="right")

        for species in stats.species:
            table.add_row(
                str(species.species_id),
                str(species.population),
                f"{species.mean_strength:.1f}",
                f"{species.mean_selfish:.1f}",
                f"{species.mean_altruistic:.1f}",
                f"{species.mean_creature_level:.1f}",
            )
        return table

    def print_run_summary(self, run_index: int, stats: GenerationStats | None) -> None:
        """Print the last generation of a run."""
        if stats is None:
            self.console.print(f"\n  [bold red]Run {run_index}: no generations[/bold red]")
            return
        self.console.print(self.render_generation(stats, title=f"Run {run_index}"))
        if stats.extinct:
            extinct = ", ".join(str(s) for s in stats.extinct)
            self.console.print(f"  [red]Extinct this epoch:[/red] {extinct}")
        self.console.print(
            f"  Family tree: {stats.family_size} nodes ({stats.collected} collected)"
        )

    def print_complete(self, epoch: int, alive: int) -> None:
        """Print completion summary."""
        self.console.print("\n  [bold cyan]═══ kinsim — SIMULATION COMPLETE ═══[/bold cyan]")
        self.console.print(f"  Generations: {epoch}")
        self.console.print(f"  Creatures alive: {alive}")
