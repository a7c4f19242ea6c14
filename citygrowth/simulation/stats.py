"""City-wide statistics for display and logging."""

from __future__ import annotations

from dataclasses import dataclass, field

from citygrowth.world.cell import BuildingType
from citygrowth.world.grid import Grid


@dataclass(frozen=True)
class CityStats:
    """Aggregate figures for one generation.

    Population and energy totals cover developed parcels only.

    Attributes:
        total_population: Sum of population over non-empty parcels.
        total_energy: Sum of energy over non-empty parcels.
        total_buildings: Number of non-empty parcels.
        occupancy_rate: Developed share of the grid in percent.
        avg_population: Mean population per building (0 if none).
        avg_energy: Mean energy per building (0 if none).
        building_counts: Parcels per building type, every type present.
    """

    total_population: int
    total_energy: int
    total_buildings: int
    occupancy_rate: float
    avg_population: float
    avg_energy: float
    building_counts: dict[BuildingType, int] = field(default_factory=dict)

    @classmethod
    def from_grid(cls, grid: Grid) -> CityStats:
        counts = {btype: 0 for btype in BuildingType}
        population = 0
        energy = 0
        buildings = 0
        for _, _, cell in grid.iter_cells():
            counts[cell.type] += 1
            if not cell.is_empty:
                buildings += 1
                population += cell.population
                energy += cell.energy

        return cls(
            total_population=population,
            total_energy=energy,
            total_buildings=buildings,
            occupancy_rate=100.0 * buildings / (grid.size * grid.size),
            avg_population=population / buildings if buildings else 0.0,
            avg_energy=energy / buildings if buildings else 0.0,
            building_counts=counts,
        )

    def top_building_types(self, n: int = 5) -> list[tuple[BuildingType, int]]:
        """Return the ``n`` most common developed types, most common first.

        Ties keep enumeration order.
        """
        ranked = sorted(
            (
                (btype, count)
                for btype, count in self.building_counts.items()
                if btype is not BuildingType.EMPTY
            ),
            key=lambda item: item[1],
            reverse=True,
        )
        return ranked[:n]
