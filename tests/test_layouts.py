"""Tests for citygrowth.world.layouts — random starting cities."""

import numpy as np
import pytest

from citygrowth.world.cell import BuildingType, population_cap
from citygrowth.world.layouts import LAYOUTS, generate_layout, random_layout

B = BuildingType


class TestLayouts:
    @pytest.mark.parametrize("name", sorted(LAYOUTS))
    def test_valid_parcels(self, name: str, rng) -> None:
        grid = generate_layout(name, 20, rng)
        assert grid.size == 20
        for _, _, cell in grid.iter_cells():
            assert 0 <= cell.population <= population_cap(cell.type)
            assert 0 <= cell.energy <= 100
            if cell.type is B.ROAD:
                assert cell.energy >= 20

    @pytest.mark.parametrize("name", sorted(LAYOUTS))
    def test_small_grids(self, name: str, rng) -> None:
        assert generate_layout(name, 4, rng).size == 4

    @pytest.mark.parametrize("name", sorted(LAYOUTS))
    def test_seeded_layouts_repeat(self, name: str) -> None:
        a = generate_layout(name, 20, np.random.default_rng(7))
        b = generate_layout(name, 20, np.random.default_rng(7))
        assert a == b

    def test_downtown_infrastructure(self, rng) -> None:
        grid = generate_layout("downtown", 20, rng)
        assert grid.cell_at(5, 5).type is B.POWER
        assert grid.cell_at(6, 5).type is B.WATER
        assert grid.cell_at(5, 7).type is B.ROAD
        assert grid.cell_at(8, 14).type is B.ROAD

    def test_suburban_arterials(self, rng) -> None:
        grid = generate_layout("suburban", 20, rng)
        assert grid.cell_at(2, 2).type is B.POWER
        assert grid.cell_at(17, 17).type is B.WATER
        assert grid.cell_at(0, 10).type is B.ROAD
        assert grid.cell_at(10, 16).type is B.ROAD

    def test_industrial_zone_types(self, rng) -> None:
        grid = generate_layout("industrial_zone", 20, rng)
        allowed = {B.EMPTY, B.INDUSTRIAL, B.POWER, B.WATER, B.ROAD, B.FIRE}
        assert {cell.type for _, _, cell in grid.iter_cells()} <= allowed

    def test_unknown_layout(self, rng) -> None:
        with pytest.raises(KeyError, match="metropolis"):
            generate_layout("metropolis", 20, rng)

    def test_random_layout(self, rng) -> None:
        name, grid = random_layout(20, rng)
        assert name in LAYOUTS
        assert grid.size == 20
