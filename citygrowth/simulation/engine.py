"""SimulationEngine — owns the current generation and drives it forward.

The evolution functions themselves are stateless; the engine adds the
pieces a running city needs around them: the seeded master generator,
the generation counter, resets, user placement and random setups.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from citygrowth.simulation.config import CityConfig
from citygrowth.simulation.stats import CityStats
from citygrowth.simulation.step import step, step_parallel
from citygrowth.world.cell import BuildingType, place_cell
from citygrowth.world.grid import Grid
from citygrowth.world.layouts import generate_layout, random_layout

LOGGER = logging.getLogger(__name__)


@dataclass
class SimulationEngine:
    """Drives the city forward generation by generation.

    Attributes:
        config: Loaded run configuration.
        grid: The current generation.
        rng: Master seeded random generator.
        generation: Generations computed since the last reset.
    """

    config: CityConfig
    grid: Grid = field(init=False)
    rng: Generator = field(init=False)
    generation: int = 0

    def __post_init__(self) -> None:
        """Seed the RNG and build the starting grid from config."""
        self.rng = np.random.default_rng(self.config.seed)
        if self.config.layout == "empty":
            self.reset()
        elif self.config.layout == "random":
            self.randomize()
        else:
            self.randomize(self.config.layout)

    def step(self) -> Grid:
        """Advance the city by one generation and return the new grid."""
        if self.config.workers:
            self.grid = step_parallel(
                self.grid,
                seed=self.config.seed,
                generation=self.generation,
                workers=self.config.workers,
            )
        else:
            self.grid = step(self.grid, self.rng)
        self.generation += 1
        LOGGER.debug("Generation %d computed", self.generation)
        return self.grid

    def run(self, generations: int) -> None:
        """Advance a fixed number of generations.

        Args:
            generations: Number of generations to compute.
        """
        for _ in range(generations):
            self.step()

    def reset(self) -> None:
        """Clear the map to vacant land and restart the counter."""
        self.grid = Grid.empty(self.config.grid_size)
        self.generation = 0
        LOGGER.info("City reset to %dx%d empty grid", self.grid.size, self.grid.size)

    def randomize(self, layout: str | None = None) -> str:
        """Replace the map with a random setup and restart the counter.

        Args:
            layout: Layout name, or None to pick one at random.

        Returns:
            The name of the layout used.

        Raises:
            KeyError: If ``layout`` is not a known layout.
        """
        size = self.config.grid_size
        if layout is None:
            layout, self.grid = random_layout(size, self.rng)
        else:
            self.grid = generate_layout(layout, size, self.rng)
        self.generation = 0
        return layout

    def place(self, x: int, y: int, building_type: BuildingType) -> None:
        """Drop a building (or clear a parcel) at ``(x, y)``.

        Raises:
            OutOfBoundsError: If the coordinate is outside the grid.
        """
        self.grid = self.grid.replace(x, y, place_cell(building_type, self.rng))

    def stats(self) -> CityStats:
        return CityStats.from_grid(self.grid)
