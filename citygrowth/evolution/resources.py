"""Resource scores derived from neighbourhood building counts.

Every score is a pure function of the counts mapping produced by
``nearby_counts``; the centre parcel's own age, population and energy
never enter.  All scores lie in ``[0, 100]``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from citygrowth.world.cell import BuildingType

_B = BuildingType


def clamp(value: float, lo: float, hi: float) -> float:
    """Return ``value`` limited to the closed range ``[lo, hi]``."""
    return max(lo, min(hi, value))


def _n(counts: Mapping[BuildingType, int], btype: BuildingType) -> int:
    return counts.get(btype, 0)


@dataclass(frozen=True)
class Resources:
    """Local infrastructure and livability around one parcel.

    Attributes:
        power: Electricity supply as a percentage of demand (0-100).
        water: Water supply as a percentage of demand (0-100).
        happiness: Livability score (0-100, baseline 50).
        pollution: Environmental load (0-100).
    """

    power: float
    water: float
    happiness: float
    pollution: float


def power_supply(counts: Mapping[BuildingType, int]) -> float:
    """Power plants supply 100 units each against zone demand.

    Demand is 10 per residential, 15 per commercial and 25 per
    industrial parcel.  The result is supply over demand in percent.
    """
    demand = (
        10 * _n(counts, _B.RESIDENTIAL)
        + 15 * _n(counts, _B.COMMERCIAL)
        + 25 * _n(counts, _B.INDUSTRIAL)
    )
    supply = 100 * _n(counts, _B.POWER)
    return clamp(supply / max(1, demand) * 100, 0, 100)


def water_supply(counts: Mapping[BuildingType, int]) -> float:
    """Water towers supply 80 units each; demand is 8/12/20 per R/C/I parcel."""
    demand = (
        8 * _n(counts, _B.RESIDENTIAL)
        + 12 * _n(counts, _B.COMMERCIAL)
        + 20 * _n(counts, _B.INDUSTRIAL)
    )
    supply = 80 * _n(counts, _B.WATER)
    return clamp(supply / max(1, demand) * 100, 0, 100)


def happiness(counts: Mapping[BuildingType, int]) -> float:
    """Amenities raise happiness; industry and overcrowding lower it."""
    score = (
        50
        + 15 * _n(counts, _B.PARK)
        + 10 * _n(counts, _B.SCHOOL)
        + 8 * _n(counts, _B.HOSPITAL)
        + 5 * _n(counts, _B.POLICE)
        + 5 * _n(counts, _B.FIRE)
        + 3 * _n(counts, _B.COMMERCIAL)
        - 8 * _n(counts, _B.INDUSTRIAL)
        # more than five homes in the window counts as overcrowding
        - 2 * max(0, _n(counts, _B.RESIDENTIAL) - 5)
    )
    return clamp(score, 0, 100)


def pollution(counts: Mapping[BuildingType, int]) -> float:
    """Industry, power plants, shops and roads pollute; parks absorb."""
    score = (
        20 * _n(counts, _B.INDUSTRIAL)
        + 15 * _n(counts, _B.POWER)
        + 5 * _n(counts, _B.COMMERCIAL)
        + 3 * _n(counts, _B.ROAD)
        - 10 * _n(counts, _B.PARK)
    )
    return clamp(score, 0, 100)


def compute_resources(counts: Mapping[BuildingType, int]) -> Resources:
    """Evaluate all four scores for one neighbourhood."""
    return Resources(
        power=power_supply(counts),
        water=water_supply(counts),
        happiness=happiness(counts),
        pollution=pollution(counts),
    )
