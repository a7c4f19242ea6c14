"""Tests for citygrowth.evolution.resources."""

from citygrowth.evolution.context import build_context
from citygrowth.evolution.resources import (
    Resources,
    clamp,
    compute_resources,
    happiness,
    pollution,
    power_supply,
    water_supply,
)
from citygrowth.world.cell import BuildingType, Cell

B = BuildingType


class TestClamp:
    def test_clamp(self) -> None:
        assert clamp(-5, 0, 100) == 0
        assert clamp(150, 0, 100) == 100
        assert clamp(42, 0, 100) == 42


class TestPower:
    """Power supply relative to zone demand."""

    def test_one_plant_two_homes_saturates(self) -> None:
        # demand 20, supply 100: 500% of demand, clamped
        assert power_supply({B.POWER: 1, B.RESIDENTIAL: 2}) == 100

    def test_no_plant_means_no_power(self) -> None:
        assert power_supply({B.RESIDENTIAL: 3}) == 0

    def test_partial_supply(self) -> None:
        # demand 8 * 25 = 200, supply 100 -> 50%
        assert power_supply({B.POWER: 1, B.INDUSTRIAL: 8}) == 50

    def test_zero_demand_is_guarded(self) -> None:
        assert power_supply({B.POWER: 1}) == 100
        assert power_supply({}) == 0


class TestWater:
    def test_partial_supply(self) -> None:
        # demand 10 * 20 = 200, supply 80 -> 40%
        assert water_supply({B.WATER: 1, B.INDUSTRIAL: 10}) == 40

    def test_no_tower(self) -> None:
        assert water_supply({B.RESIDENTIAL: 1}) == 0


class TestHappiness:
    def test_baseline(self) -> None:
        assert happiness({}) == 50

    def test_overcrowding(self) -> None:
        assert happiness({B.RESIDENTIAL: 6}) == 48

    def test_amenities(self) -> None:
        counts = {
            B.PARK: 1,
            B.SCHOOL: 1,
            B.HOSPITAL: 1,
            B.POLICE: 1,
            B.FIRE: 1,
            B.COMMERCIAL: 1,
        }
        assert happiness(counts) == 96

    def test_clamped(self) -> None:
        assert happiness({B.PARK: 10}) == 100
        assert happiness({B.INDUSTRIAL: 10}) == 0


class TestPollution:
    def test_industry_and_power(self) -> None:
        assert pollution({B.INDUSTRIAL: 2, B.POWER: 1}) == 55

    def test_parks_absorb(self) -> None:
        assert pollution({B.ROAD: 2, B.PARK: 1}) == 0

    def test_clamped(self) -> None:
        assert pollution({B.INDUSTRIAL: 6}) == 100


class TestPurity:
    """Scores depend only on type counts, never on the centre's state."""

    def test_compute_resources(self) -> None:
        res = compute_resources({B.POWER: 1, B.RESIDENTIAL: 2})
        assert res == Resources(power=100, water=0, happiness=50, pollution=15)

    def test_centre_state_ignored(self, make_grid) -> None:
        layout = {
            (0, 0): Cell(type=B.POWER, energy=90),
            (4, 4): Cell(type=B.ROAD, energy=50),
        }
        young = make_grid(5, {**layout, (2, 2): Cell(type=B.RESIDENTIAL)})
        old = make_grid(
            5,
            {
                **layout,
                (2, 2): Cell(type=B.RESIDENTIAL, age=40, population=180, energy=99),
            },
        )
        assert build_context(young, 2, 2).resources == build_context(
            old,
            2,
            2,
        ).resources
