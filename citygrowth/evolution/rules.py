"""Transition rules — one update function per building type.

Each rule receives a parcel whose age has already been advanced, the
parcel's EvolutionContext, and a random source.  It returns either the
same parcel with updated population/energy or a brand-new parcel of a
different type (age 0).  The six service buildings share one rule.

Rule order inside ``evolve_empty`` matters: residential is tried first,
then commercial, then industrial.  A branch whose conditions hold but
whose draw fails falls through to the next branch, so at most one
construction happens per parcel per generation.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from citygrowth.evolution.context import EvolutionContext
from citygrowth.evolution.randomness import RandomSource, chance, rand_int
from citygrowth.evolution.resources import clamp
from citygrowth.world.cell import (
    MAX_ENERGY,
    SERVICE_BUILDINGS,
    BuildingType,
    Cell,
    population_cap,
)

_B = BuildingType

Rule = Callable[[Cell, EvolutionContext, RandomSource], Cell]

# Construction probabilities for vacant land
RESIDENTIAL_GROWTH_CHANCE = 0.15
COMMERCIAL_GROWTH_CHANCE = 0.10
INDUSTRIAL_GROWTH_CHANCE = 0.08

# Abandonment probabilities when needs are unmet
RESIDENTIAL_ABANDON_CHANCE = 0.20
COMMERCIAL_ABANDON_CHANCE = 0.15
INDUSTRIAL_ABANDON_CHANCE = 0.12

ROAD_MIN_ENERGY = 20
ROAD_HEAVY_TRAFFIC = 8


def _bounded(value: float, building_type: BuildingType) -> int:
    return int(clamp(value, 0, population_cap(building_type)))


def _energy(value: float, lo: int = 0) -> int:
    return int(clamp(value, lo, MAX_ENERGY))


def _abandoned() -> Cell:
    return Cell.empty()


def evolve_empty(cell: Cell, ctx: EvolutionContext, rng: RandomSource) -> Cell:
    """Vacant land develops only when a road is within reach."""
    if not ctx.has_road:
        return cell

    res = ctx.resources
    residential = ctx.count(_B.RESIDENTIAL)
    commercial = ctx.count(_B.COMMERCIAL)

    if (
        residential > 0
        and res.power > 50
        and res.water > 50
        and res.happiness > 30
        and chance(rng, RESIDENTIAL_GROWTH_CHANCE)
    ):
        return Cell(
            type=_B.RESIDENTIAL,
            population=rand_int(rng, 10, 40),
            energy=80,
        )

    if (
        residential >= 2
        and commercial < 3
        and res.power > 40
        and chance(rng, COMMERCIAL_GROWTH_CHANCE)
    ):
        return Cell(
            type=_B.COMMERCIAL,
            population=rand_int(rng, 5, 25),
            energy=70,
        )

    if (
        residential < 2
        and res.power > 60
        and res.water > 40
        and chance(rng, INDUSTRIAL_GROWTH_CHANCE)
    ):
        return Cell(
            type=_B.INDUSTRIAL,
            population=rand_int(rng, 20, 60),
            energy=90,
        )

    return cell


def evolve_residential(
    cell: Cell,
    ctx: EvolutionContext,
    rng: RandomSource,
) -> Cell:
    """Homes need roads, power and water, and flee heavy pollution."""
    res = ctx.resources
    unmet = (
        not ctx.has_road or res.power <= 30 or res.water <= 30 or res.pollution > 80
    )
    if unmet and chance(rng, RESIDENTIAL_ABANDON_CHANCE):
        return _abandoned()

    if res.happiness > 60 and res.pollution < 40:
        delta = rand_int(rng, 2, 12)
    elif res.happiness < 30 or res.pollution > 70:
        delta = -rand_int(rng, 1, 9)
    else:
        delta = rand_int(rng, -2, 4)

    return replace(
        cell,
        population=_bounded(cell.population + delta, _B.RESIDENTIAL),
        energy=_energy(cell.energy + (5 if res.happiness > 50 else -3)),
    )


def evolve_commercial(
    cell: Cell,
    ctx: EvolutionContext,
    rng: RandomSource,
) -> Cell:
    """Shops live off nearby homes."""
    res = ctx.resources
    residential = ctx.count(_B.RESIDENTIAL)
    unmet = not ctx.has_road or res.power <= 40 or residential == 0
    if unmet and chance(rng, COMMERCIAL_ABANDON_CHANCE):
        return _abandoned()

    customer_base = 20 * residential
    success = clamp(customer_base + res.happiness - res.pollution, 0, 100)

    if success > 60:
        delta = rand_int(rng, 1, 9)
    else:
        delta = -rand_int(rng, 0, 5)

    return replace(
        cell,
        population=_bounded(cell.population + delta, _B.COMMERCIAL),
        energy=_energy(cell.energy + (3 if success > 50 else -2)),
    )


def evolve_industrial(
    cell: Cell,
    ctx: EvolutionContext,
    rng: RandomSource,
) -> Cell:
    """Factories need strong power and water supply."""
    res = ctx.resources
    unmet = not ctx.has_road or res.power <= 50 or res.water <= 40
    if unmet and chance(rng, INDUSTRIAL_ABANDON_CHANCE):
        return _abandoned()

    efficiency = clamp(res.power + res.water - 20, 0, 100)

    if efficiency > 60:
        delta = rand_int(rng, 2, 8)
    else:
        delta = rand_int(rng, -1, 3)

    return replace(
        cell,
        population=_bounded(cell.population + delta, _B.INDUSTRIAL),
        energy=_energy(cell.energy + (4 if efficiency > 50 else -1)),
    )


def evolve_park(cell: Cell, ctx: EvolutionContext, rng: RandomSource) -> Cell:
    """Parks mature steadily."""
    return replace(cell, population=0, energy=_energy(cell.energy + 2))


def evolve_road(cell: Cell, ctx: EvolutionContext, rng: RandomSource) -> Cell:
    """Roads wear faster in busy neighbourhoods but never drop below 20."""
    wear = 2 if ctx.total_nearby > ROAD_HEAVY_TRAFFIC else 1
    return replace(
        cell,
        population=0,
        energy=_energy(cell.energy - wear, lo=ROAD_MIN_ENERGY),
    )


def evolve_service(cell: Cell, ctx: EvolutionContext, rng: RandomSource) -> Cell:
    """Service buildings decay quickly without power."""
    if ctx.resources.power <= 30:
        return replace(cell, energy=_energy(cell.energy - 10))
    return replace(cell, energy=_energy(cell.energy + 1))


RULES: dict[BuildingType, Rule] = {
    _B.EMPTY: evolve_empty,
    _B.RESIDENTIAL: evolve_residential,
    _B.COMMERCIAL: evolve_commercial,
    _B.INDUSTRIAL: evolve_industrial,
    _B.PARK: evolve_park,
    _B.ROAD: evolve_road,
    **{btype: evolve_service for btype in SERVICE_BUILDINGS},
}

_missing = set(BuildingType) - set(RULES)
if _missing:
    msg = f"no transition rule for {sorted(b.value for b in _missing)}"
    raise RuntimeError(msg)


def apply_rule(cell: Cell, ctx: EvolutionContext, rng: RandomSource) -> Cell:
    """Age the parcel by one generation and run its type's rule.

    A rule that changes the building type returns a new parcel with age
    0; otherwise the incremented age is kept.
    """
    aged = replace(cell, age=cell.age + 1)
    return RULES[cell.type](aged, ctx, rng)
