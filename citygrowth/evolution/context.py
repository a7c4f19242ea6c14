"""EvolutionContext — everything a transition rule may look at.

Built once per parcel per generation from the *previous* snapshot, so
every rule in a generation sees the same world.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from citygrowth.evolution.neighborhood import nearby_counts, neighbours_of
from citygrowth.evolution.resources import Resources, compute_resources
from citygrowth.world.cell import BuildingType, Cell
from citygrowth.world.grid import Grid


@dataclass(frozen=True)
class EvolutionContext:
    """Transient neighbourhood view for one parcel.

    Attributes:
        neighbours: Adjacent parcels (Moore radius 1, clipped).
        counts: Building-type counts within radius 3, centre included.
        resources: Scores derived from ``counts``.
    """

    neighbours: tuple[Cell, ...]
    counts: Mapping[BuildingType, int]
    resources: Resources

    def count(self, building_type: BuildingType) -> int:
        """Return how many parcels of this type are nearby (0 if none)."""
        return self.counts.get(building_type, 0)

    @property
    def has_road(self) -> bool:
        return self.count(BuildingType.ROAD) > 0

    @property
    def total_nearby(self) -> int:
        """Number of parcels in the radius-3 window, of any type."""
        return sum(self.counts.values())

    @classmethod
    def from_counts(
        cls,
        counts: Mapping[BuildingType, int],
        neighbours: tuple[Cell, ...] = (),
    ) -> EvolutionContext:
        """Build a context straight from counts (resources derived)."""
        return cls(
            neighbours=neighbours,
            counts=dict(counts),
            resources=compute_resources(counts),
        )


def build_context(grid: Grid, x: int, y: int) -> EvolutionContext:
    """Gather neighbours, counts and resources for the parcel at ``(x, y)``."""
    return EvolutionContext.from_counts(
        nearby_counts(grid, x, y),
        neighbours=tuple(neighbours_of(grid, x, y)),
    )
