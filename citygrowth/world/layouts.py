"""Random setups — named generators for a starting city.

Each layout takes a grid size and a seeded NumPy generator and returns a
fresh Grid.  Coordinates are scaled to the grid size; writes that would
land outside the grid are dropped.  Parcels are created within their
type's bounds (park and road hold no population, roads keep at least
20 energy), so every layout is a valid starting generation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from numpy.random import Generator

from citygrowth.evolution.rules import ROAD_MIN_ENERGY
from citygrowth.world.cell import BuildingType, Cell, population_cap
from citygrowth.world.grid import DEFAULT_SIZE, Grid

LOGGER = logging.getLogger(__name__)

_B = BuildingType

Layout = Callable[[int, Generator], Grid]
_Rows = list[list[Cell]]

_ALL_BUILDINGS: list[BuildingType] = [b for b in BuildingType if b is not _B.EMPTY]


def _blank(size: int) -> _Rows:
    return [[Cell.empty() for _ in range(size)] for _ in range(size)]


def _put(rows: _Rows, x: int, y: int, cell: Cell) -> None:
    if 0 <= y < len(rows) and 0 <= x < len(rows[y]):
        rows[y][x] = cell


def _is_empty(rows: _Rows, x: int, y: int) -> bool:
    return 0 <= y < len(rows) and 0 <= x < len(rows[y]) and rows[y][x].is_empty


def _building(btype: BuildingType, age: int, population: int, energy: int) -> Cell:
    population = min(population, population_cap(btype))
    if btype is _B.ROAD:
        energy = max(energy, ROAD_MIN_ENERGY)
    return Cell(type=btype, age=age, population=population, energy=energy)


def _int(rng: Generator, low: int, high: int) -> int:
    """Integer in ``[low, high)``; collapses to ``low`` on tiny grids."""
    return int(rng.integers(low, max(low + 1, high)))


def _scaled(count: int, size: int) -> int:
    """Scale a placement count tuned for a 20x20 grid to ``size``."""
    return max(1, round(count * size * size / (DEFAULT_SIZE * DEFAULT_SIZE)))


def clusters(size: int, rng: Generator) -> Grid:
    """Four blobs, each of a single random building type."""
    rows = _blank(size)
    for _ in range(4):
        cx = _int(rng, 3, size - 3)
        cy = _int(rng, 3, size - 3)
        btype = _ALL_BUILDINGS[_int(rng, 0, len(_ALL_BUILDINGS))]
        for dx in range(-2, 3):
            for dy in range(-2, 3):
                if rng.random() < 0.6:
                    _put(
                        rows,
                        cx + dx,
                        cy + dy,
                        _building(
                            btype,
                            _int(rng, 0, 10),
                            _int(rng, 0, 100),
                            _int(rng, 0, 100),
                        ),
                    )
    return Grid.from_rows(rows)


def downtown(size: int, rng: Generator) -> Grid:
    """Dense core: utilities, a road lattice, then mixed buildings."""
    rows = _blank(size)
    core = min(10, size)
    sx = sy = (size - core) // 2

    _put(rows, sx, sy, _building(_B.POWER, 5, 20, 90))
    _put(rows, sx + 1, sy, _building(_B.WATER, 3, 15, 85))

    road = _building(_B.ROAD, 2, 0, 80)
    for i in range(core):
        _put(rows, sx + i, sy + 2, road)
        _put(rows, sx + i, sy + 5, road)
        _put(rows, sx + 3, sy + i, road)
        _put(rows, sx + 6, sy + i, road)

    types = [_B.COMMERCIAL, _B.RESIDENTIAL, _B.HOSPITAL, _B.SCHOOL, _B.POLICE, _B.PARK]
    weights = [0.3, 0.25, 0.1, 0.1, 0.05, 0.2]
    for x in range(sx, sx + core):
        for y in range(sy, sy + core):
            if _is_empty(rows, x, y) and rng.random() < 0.7:
                btype = types[int(rng.choice(len(types), p=weights))]
                rows[y][x] = _building(
                    btype,
                    _int(rng, 0, 10),
                    _int(rng, 20, 120),
                    _int(rng, 60, 100),
                )
    return Grid.from_rows(rows)


def suburban(size: int, rng: Generator) -> Grid:
    """Two arterial roads, scattered housing estates and services."""
    rows = _blank(size)
    _put(rows, 2, 2, _building(_B.POWER, 8, 25, 85))
    _put(rows, size - 3, size - 3, _building(_B.WATER, 6, 20, 80))

    mid = size // 2
    road = _building(_B.ROAD, 3, 0, 75)
    for i in range(0, size, 4):
        _put(rows, i, mid, road)
        _put(rows, mid, i, road)

    for _ in range(6):
        cx = _int(rng, 2, size - 2)
        cy = _int(rng, 2, size - 2)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                x, y = cx + dx, cy + dy
                if _is_empty(rows, x, y) and rng.random() < 0.8:
                    rows[y][x] = _building(
                        _B.RESIDENTIAL,
                        _int(rng, 0, 5),
                        _int(rng, 20, 80),
                        _int(rng, 70, 100),
                    )

    services = [_B.SCHOOL, _B.HOSPITAL, _B.PARK, _B.COMMERCIAL, _B.FIRE, _B.POLICE]
    for _ in range(_scaled(12, size)):
        x = _int(rng, 0, size)
        y = _int(rng, 0, size)
        if _is_empty(rows, x, y):
            btype = services[_int(rng, 0, len(services))]
            rows[y][x] = _building(
                btype,
                _int(rng, 0, 6),
                _int(rng, 10, 50),
                _int(rng, 70, 100),
            )
    return Grid.from_rows(rows)


def industrial_zone(size: int, rng: Generator) -> Grid:
    """Factories with the power, water and roads they depend on."""
    rows = _blank(size)
    for _ in range(_scaled(40, size)):
        x = _int(rng, 0, size)
        y = _int(rng, 0, size)
        if not _is_empty(rows, x, y):
            continue
        roll = rng.random()
        if roll < 0.5:
            btype = _B.INDUSTRIAL
        elif roll < 0.7:
            btype = _B.POWER
        elif roll < 0.85:
            btype = _B.WATER
        elif roll < 0.95:
            btype = _B.ROAD
        else:
            btype = _B.FIRE
        rows[y][x] = _building(
            btype,
            _int(rng, 0, 12),
            _int(rng, 0, 60),
            _int(rng, 0, 100),
        )
    return Grid.from_rows(rows)


def mixed_development(size: int, rng: Generator) -> Grid:
    """Uniformly random buildings over a fifth of the map."""
    rows = _blank(size)
    for _ in range(_scaled(80, size)):
        x = _int(rng, 0, size)
        y = _int(rng, 0, size)
        if _is_empty(rows, x, y):
            btype = _ALL_BUILDINGS[_int(rng, 0, len(_ALL_BUILDINGS))]
            rows[y][x] = _building(
                btype,
                _int(rng, 0, 10),
                _int(rng, 0, 100),
                _int(rng, 0, 100),
            )
    return Grid.from_rows(rows)


LAYOUTS: dict[str, Layout] = {
    "clusters": clusters,
    "downtown": downtown,
    "suburban": suburban,
    "industrial_zone": industrial_zone,
    "mixed_development": mixed_development,
}


def generate_layout(name: str, size: int, rng: Generator) -> Grid:
    """Build the named layout.

    Raises:
        KeyError: If ``name`` is not in ``LAYOUTS``.
    """
    try:
        layout = LAYOUTS[name]
    except KeyError:
        msg = f"unknown layout {name!r}; choose from {sorted(LAYOUTS)}"
        raise KeyError(msg) from None
    LOGGER.info("Generating %s layout on a %dx%d grid", name, size, size)
    return layout(size, rng)


def random_layout(size: int, rng: Generator) -> tuple[str, Grid]:
    """Pick a layout at random and build it; returns ``(name, grid)``."""
    names = list(LAYOUTS)
    name = names[_int(rng, 0, len(names))]
    return name, generate_layout(name, size, rng)
