"""Config — load run parameters from YAML files.

Rule constants (probabilities, demand weights) are part of the model
and live in ``citygrowth.evolution``; the YAML file only controls how a
run is set up and driven.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from citygrowth.world.grid import DEFAULT_SIZE
from citygrowth.world.layouts import LAYOUTS


@dataclass
class CityConfig:
    """Top-level run configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        grid_size: Side length of the square city grid.
        layout: Starting layout name, ``"empty"`` for vacant land or
            ``"random"`` to pick one of the named layouts.
        workers: Threads used per generation.  0 steps sequentially
            with the master generator; any positive value uses one
            keyed random stream per parcel.
        ticks_per_second: Generations per second in the viewer.
    """

    seed: int = 42
    grid_size: int = DEFAULT_SIZE
    layout: str = "empty"
    workers: int = 0
    ticks_per_second: float = 1.0

    def __post_init__(self) -> None:
        """Validate ranges and the layout name."""
        if self.grid_size < 1:
            msg = f"grid_size must be >= 1, got {self.grid_size}"
            raise ValueError(msg)
        if self.workers < 0:
            msg = f"workers must be >= 0, got {self.workers}"
            raise ValueError(msg)
        if self.ticks_per_second <= 0:
            msg = f"ticks_per_second must be > 0, got {self.ticks_per_second}"
            raise ValueError(msg)
        if self.layout not in {"empty", "random", *LAYOUTS}:
            msg = f"unknown layout {self.layout!r}"
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> CityConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated CityConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a value is out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            grid_size=data.get("grid_size", cls.grid_size),
            layout=data.get("layout", cls.layout),
            workers=data.get("workers", cls.workers),
            ticks_per_second=data.get("ticks_per_second", cls.ticks_per_second),
        )
