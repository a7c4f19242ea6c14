"""Neighbourhood queries over a Grid snapshot.

Both queries use the Moore neighbourhood (a square window) clipped at
the grid edges; there is no wrap-around.
"""

from __future__ import annotations

from citygrowth.world.cell import BuildingType, Cell
from citygrowth.world.grid import Grid

DEVELOPMENT_RADIUS = 3


def neighbours_of(grid: Grid, x: int, y: int) -> list[Cell]:
    """Return the up-to-8 parcels adjacent to ``(x, y)``.

    Edge and corner parcels have fewer neighbours.  The parcel itself is
    never included.

    Raises:
        OutOfBoundsError: If ``(x, y)`` is outside the grid.
    """
    grid.cell_at(x, y)
    result: list[Cell] = []
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if grid.in_bounds(nx, ny):
                result.append(grid.cells[ny][nx])
    return result


def nearby_counts(
    grid: Grid,
    x: int,
    y: int,
    radius: int = DEVELOPMENT_RADIUS,
) -> dict[BuildingType, int]:
    """Count building types in the square window around ``(x, y)``.

    Scans ``[x - radius, x + radius] x [y - radius, y + radius]`` clipped
    to the grid.  The centre parcel counts towards its own type, so a
    residential parcel always sees at least one residential neighbour.
    Types that do not occur are absent from the mapping.

    Args:
        grid: Snapshot to read.
        x: Column of the centre parcel.
        y: Row of the centre parcel.
        radius: Half-width of the window (0 counts only the centre).

    Returns:
        Mapping from BuildingType to occurrences.

    Raises:
        ValueError: If ``radius`` is negative.
        OutOfBoundsError: If ``(x, y)`` is outside the grid.
    """
    if radius < 0:
        msg = f"radius must be >= 0, got {radius}"
        raise ValueError(msg)
    grid.cell_at(x, y)

    counts: dict[BuildingType, int] = {}
    for ny in range(max(0, y - radius), min(grid.size, y + radius + 1)):
        row = grid.cells[ny]
        for nx in range(max(0, x - radius), min(grid.size, x + radius + 1)):
            btype = row[nx].type
            counts[btype] = counts.get(btype, 0) + 1
    return counts
