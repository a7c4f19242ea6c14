"""Cell — a single land parcel in the city grid.

A parcel carries its building type plus three bounded integers (age,
population, energy).  Cells are immutable values: every generation
builds new ones rather than editing old ones in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from citygrowth.evolution.randomness import RandomSource, rand_int


class BuildingType(Enum):
    """What occupies a parcel."""

    EMPTY = "empty"
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    PARK = "park"
    ROAD = "road"
    POWER = "power"
    WATER = "water"
    HOSPITAL = "hospital"
    SCHOOL = "school"
    POLICE = "police"
    FIRE = "fire"


SERVICE_BUILDINGS: frozenset[BuildingType] = frozenset(
    {
        BuildingType.POWER,
        BuildingType.WATER,
        BuildingType.HOSPITAL,
        BuildingType.SCHOOL,
        BuildingType.POLICE,
        BuildingType.FIRE,
    },
)

MAX_ENERGY = 100

_POPULATION_CAPS: dict[BuildingType, int] = {
    BuildingType.EMPTY: 0,
    BuildingType.PARK: 0,
    BuildingType.ROAD: 0,
    BuildingType.RESIDENTIAL: 200,
    BuildingType.COMMERCIAL: 150,
    BuildingType.INDUSTRIAL: 180,
    **{btype: 100 for btype in SERVICE_BUILDINGS},
}


def population_cap(building_type: BuildingType) -> int:
    """Return the largest population a parcel of this type may hold."""
    return _POPULATION_CAPS[building_type]


@dataclass(frozen=True)
class Cell:
    """A single parcel in the city grid.

    Attributes:
        type: Building occupying the parcel.
        age: Generations since the parcel last changed type.
        population: Residents, workers or visitors (0..cap(type)).
        energy: Condition/upkeep level (0-100).
    """

    type: BuildingType = BuildingType.EMPTY
    age: int = 0
    population: int = 0
    energy: int = 0

    @classmethod
    def empty(cls) -> Cell:
        """Return a vacant parcel."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.type is BuildingType.EMPTY


def place_cell(building_type: BuildingType, rng: RandomSource) -> Cell:
    """Build the parcel a user drops onto the map.

    Placement bypasses the transition rules: the new parcel starts at
    age 0 with a random population in ``[0, 50)`` and energy in
    ``[0, 100)``.  Vacant land gets neither, and types that cannot hold
    people (park, road) keep a population of 0.

    Args:
        building_type: The tool selected by the user.
        rng: Random source supplying uniform draws in ``[0, 1)``.

    Returns:
        The freshly placed Cell.
    """
    if building_type is BuildingType.EMPTY:
        return Cell.empty()
    population = rand_int(rng, 0, 50)
    energy = rand_int(rng, 0, MAX_ENERGY)
    if population_cap(building_type) == 0:
        population = 0
    return Cell(type=building_type, population=population, energy=energy)
