"""Tests for citygrowth.world.cell and citygrowth.world.grid."""

import dataclasses

import pytest

from citygrowth.world.cell import (
    SERVICE_BUILDINGS,
    BuildingType,
    Cell,
    place_cell,
    population_cap,
)
from citygrowth.world.grid import Grid, OutOfBoundsError


class TestCell:
    """Tests for the Cell value type."""

    def test_default_values(self) -> None:
        cell = Cell()
        assert cell.type is BuildingType.EMPTY
        assert cell.age == 0
        assert cell.population == 0
        assert cell.energy == 0
        assert cell.is_empty

    def test_cells_are_immutable(self) -> None:
        cell = Cell(type=BuildingType.PARK)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cell.energy = 10  # type: ignore[misc]

    def test_population_caps(self) -> None:
        assert population_cap(BuildingType.EMPTY) == 0
        assert population_cap(BuildingType.PARK) == 0
        assert population_cap(BuildingType.ROAD) == 0
        assert population_cap(BuildingType.RESIDENTIAL) == 200
        assert population_cap(BuildingType.COMMERCIAL) == 150
        assert population_cap(BuildingType.INDUSTRIAL) == 180
        for btype in SERVICE_BUILDINGS:
            assert population_cap(btype) == 100

    def test_service_buildings(self) -> None:
        assert len(SERVICE_BUILDINGS) == 6
        assert BuildingType.ROAD not in SERVICE_BUILDINGS


class TestPlacement:
    """Tests for the user placement tool."""

    def test_place_empty_clears_parcel(self, scripted) -> None:
        src = scripted(0.9)
        assert place_cell(BuildingType.EMPTY, src) == Cell.empty()
        assert src.calls == 0

    def test_place_building_draws_population_and_energy(self, scripted) -> None:
        cell = place_cell(BuildingType.SCHOOL, scripted(0.5, 0.25))
        assert cell == Cell(
            type=BuildingType.SCHOOL,
            age=0,
            population=25,
            energy=25,
        )

    def test_place_road_has_no_population(self, scripted) -> None:
        cell = place_cell(BuildingType.ROAD, scripted(0.99, 0.5))
        assert cell.population == 0
        assert cell.energy == 50

    def test_place_ranges(self, rng) -> None:
        for _ in range(200):
            cell = place_cell(BuildingType.RESIDENTIAL, rng)
            assert 0 <= cell.population < 50
            assert 0 <= cell.energy < 100


class TestGrid:
    """Tests for the immutable Grid snapshot."""

    def test_dimensions(self, small_grid: Grid) -> None:
        assert small_grid.size == 8
        assert len(small_grid.cells) == 8
        assert all(len(row) == 8 for row in small_grid.cells)

    def test_default_size(self) -> None:
        assert Grid.empty().size == 20

    def test_cell_at_out_of_bounds(self, small_grid: Grid) -> None:
        with pytest.raises(OutOfBoundsError):
            small_grid.cell_at(8, 0)
        with pytest.raises(IndexError):
            small_grid.cell_at(0, -1)

    def test_rejects_non_square_rows(self) -> None:
        with pytest.raises(ValueError, match="square"):
            Grid.from_rows([[Cell()] * 3, [Cell()] * 2, [Cell()] * 3])

    def test_rejects_empty(self) -> None:
        with pytest.raises(ValueError):
            Grid.from_rows([])

    def test_replace_is_copy_on_write(self, small_grid: Grid) -> None:
        park = Cell(type=BuildingType.PARK, energy=40)
        updated = small_grid.replace(2, 5, park)
        assert updated.cell_at(2, 5) == park
        assert small_grid.cell_at(2, 5) == Cell.empty()
        assert updated is not small_grid

    def test_replace_out_of_bounds(self, small_grid: Grid) -> None:
        with pytest.raises(OutOfBoundsError):
            small_grid.replace(-1, 0, Cell())

    def test_generate_visits_every_coordinate(self, small_grid: Grid) -> None:
        seen: list[tuple[int, int]] = []

        def fn(x: int, y: int) -> Cell:
            seen.append((x, y))
            return Cell(type=BuildingType.ROAD, age=x, energy=y + 20)

        result = small_grid.generate(fn)
        assert len(seen) == 64
        assert seen[:3] == [(0, 0), (1, 0), (2, 0)]
        assert result.cell_at(3, 6).age == 3
        assert result.cell_at(3, 6).energy == 26

    def test_iter_cells_raster_order(self, make_grid) -> None:
        grid = make_grid(3, {(2, 0): Cell(type=BuildingType.PARK)})
        coords = [(x, y) for x, y, _ in grid.iter_cells()]
        assert coords[0] == (0, 0)
        assert coords[2] == (2, 0)
        assert coords[3] == (0, 1)
        assert len(coords) == 9
