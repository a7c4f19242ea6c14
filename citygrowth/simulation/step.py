"""Step executor — turns one Grid generation into the next.

Every parcel's successor depends only on the input snapshot, never on
parcels already written for the next generation, so the loop order is
irrelevant and rows can be evaluated concurrently.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from citygrowth.evolution.context import build_context
from citygrowth.evolution.randomness import RandomSource, cell_stream
from citygrowth.evolution.rules import apply_rule
from citygrowth.world.cell import Cell
from citygrowth.world.grid import Grid


def evolve_cell(grid: Grid, x: int, y: int, rng: RandomSource) -> Cell:
    """Compute the next state of the parcel at ``(x, y)``."""
    return apply_rule(grid.cell_at(x, y), build_context(grid, x, y), rng)


def step(grid: Grid, rng: RandomSource) -> Grid:
    """Advance the whole grid by one generation.

    Parcels are visited in raster order and all draw from ``rng``, so a
    given input grid and random sequence always yield the same output.

    Args:
        grid: Current generation (left untouched).
        rng: Shared random source.

    Returns:
        A freshly allocated Grid of the same size.
    """
    return grid.generate(lambda x, y: evolve_cell(grid, x, y, rng))


def step_parallel(
    grid: Grid,
    *,
    seed: int,
    generation: int,
    workers: int | None = None,
) -> Grid:
    """Advance the grid using one independent random stream per parcel.

    Rows are farmed out to a thread pool.  Each parcel draws from
    ``cell_stream(seed, generation, x, y)``, so the output is identical
    for any ``workers`` value and any scheduling.

    Args:
        grid: Current generation (left untouched).
        seed: Run-level seed.
        generation: Index of the generation being computed from.
        workers: Thread count (``None`` lets the executor decide).

    Returns:
        A freshly allocated Grid of the same size.
    """

    def evolve_row(y: int) -> tuple[Cell, ...]:
        return tuple(
            evolve_cell(grid, x, y, cell_stream(seed, generation, x, y))
            for x in range(grid.size)
        )

    with ThreadPoolExecutor(max_workers=workers) as pool:
        rows = list(pool.map(evolve_row, range(grid.size)))
    return Grid.from_rows(rows)
