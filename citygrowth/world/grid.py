"""Grid — an immutable square snapshot of the city.

A Grid is one generation.  It is never edited in place: the step
executor and the placement tool both build a fresh Grid, so the previous
generation can be read safely (even from several threads) while the next
one is being assembled.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from citygrowth.world.cell import Cell

DEFAULT_SIZE = 20


class OutOfBoundsError(IndexError):
    """Raised when a coordinate lies outside ``[0, size)``."""


@dataclass(frozen=True)
class Grid:
    """An N x N arrangement of parcels.

    Attributes:
        size: Side length of the square grid.
        cells: Row tuples indexed as ``cells[y][x]``.
    """

    size: int
    cells: tuple[tuple[Cell, ...], ...] = field(repr=False)

    def __post_init__(self) -> None:
        """Reject grids that are not ``size`` x ``size``."""
        if self.size < 1:
            msg = f"grid size must be positive, got {self.size}"
            raise ValueError(msg)
        if len(self.cells) != self.size or any(
            len(row) != self.size for row in self.cells
        ):
            msg = f"grid rows do not form a {self.size}x{self.size} square"
            raise ValueError(msg)

    @classmethod
    def empty(cls, size: int = DEFAULT_SIZE) -> Grid:
        """Return a grid of vacant parcels."""
        row = tuple(Cell.empty() for _ in range(size))
        return cls(size=size, cells=tuple(row for _ in range(size)))

    @classmethod
    def from_rows(cls, rows: Sequence[Iterable[Cell]]) -> Grid:
        """Freeze a row-major nested sequence (``rows[y][x]``) into a Grid.

        Raises:
            ValueError: If the rows do not form a square.
        """
        frozen = tuple(tuple(row) for row in rows)
        return cls(size=len(frozen), cells=frozen)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def cell_at(self, x: int, y: int) -> Cell:
        """Return the parcel at ``(x, y)``.

        Raises:
            OutOfBoundsError: If the coordinate is outside the grid.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.size}x{self.size}"
            raise OutOfBoundsError(msg)
        return self.cells[y][x]

    def iter_cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Yield ``(x, y, cell)`` in raster order."""
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                yield x, y, cell

    def generate(self, fn: Callable[[int, int], Cell]) -> Grid:
        """Build a successor grid by calling ``fn(x, y)`` for every parcel.

        ``fn`` may read ``self`` freely; the result is a separate
        object sharing no row containers with this grid.
        """
        return Grid(
            size=self.size,
            cells=tuple(
                tuple(fn(x, y) for x in range(self.size)) for y in range(self.size)
            ),
        )

    def replace(self, x: int, y: int, cell: Cell) -> Grid:
        """Return a copy of this grid with the parcel at ``(x, y)`` swapped.

        Raises:
            OutOfBoundsError: If the coordinate is outside the grid.
        """
        self.cell_at(x, y)
        rows = [list(row) for row in self.cells]
        rows[y][x] = cell
        return Grid.from_rows(rows)
