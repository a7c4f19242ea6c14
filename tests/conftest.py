"""Shared fixtures for the citygrowth test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

import numpy as np
import pytest
from numpy.random import Generator

from citygrowth.simulation.config import CityConfig
from citygrowth.world.cell import Cell
from citygrowth.world.grid import Grid


class ScriptedRandom:
    """Random source replaying fixed draws, repeating the last one."""

    def __init__(self, draws: Iterable[float]) -> None:
        self._draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        index = min(self.calls, len(self._draws) - 1)
        self.calls += 1
        return self._draws[index]


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def scripted() -> Callable[..., ScriptedRandom]:
    """Factory for random sources that replay the given draws."""

    def make(*draws: float) -> ScriptedRandom:
        return ScriptedRandom(draws)

    return make


@pytest.fixture
def make_grid() -> Callable[..., Grid]:
    """Factory building a grid from ``{(x, y): Cell}`` over empty land."""

    def make(size: int, parcels: Mapping[tuple[int, int], Cell]) -> Grid:
        grid = Grid.empty(size)
        for (x, y), cell in parcels.items():
            grid = grid.replace(x, y, cell)
        return grid

    return make


@pytest.fixture
def small_grid() -> Grid:
    """An empty 8x8 grid for fast tests."""
    return Grid.empty(8)


@pytest.fixture
def default_config() -> CityConfig:
    """Default run config (no YAML file needed)."""
    return CityConfig()
