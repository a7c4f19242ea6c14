"""Entry point for ``python -m citygrowth``.

Loads the default YAML config, builds a simulation engine and either
opens a Pygame window to watch the city grow or, with ``--headless``,
runs a fixed number of generations and logs city statistics.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib

from citygrowth.simulation.config import CityConfig
from citygrowth.simulation.engine import SimulationEngine

LOGGER = logging.getLogger("citygrowth")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="citygrowth",
        description="City growth - urban cellular automaton",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--layout",
        default=None,
        help="Override the starting layout (empty, random or a layout name)",
    )
    parser.add_argument(
        "--headless",
        type=int,
        metavar="N",
        default=None,
        help="Run N generations without a window and log statistics",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=28,
        help="Pixel size per grid cell (default: 28)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=None,
        help="Generations per second (default: from config)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser


def run_headless(engine: SimulationEngine, generations: int) -> None:
    """Step the engine and log a one-line summary per generation."""
    for _ in range(generations):
        engine.step()
        stats = engine.stats()
        LOGGER.info(
            "gen=%d buildings=%d population=%d energy=%d occupancy=%.1f%%",
            engine.generation,
            stats.total_buildings,
            stats.total_population,
            stats.total_energy,
            stats.occupancy_rate,
        )


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, create engine, launch renderer or headless run."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = CityConfig.from_yaml(args.config)
    if args.layout is not None:
        config = dataclasses.replace(config, layout=args.layout)
    engine = SimulationEngine(config=config)

    if args.headless is not None:
        run_headless(engine, args.headless)
        return

    from citygrowth.ui.pygame_client import PygameRenderer

    renderer = PygameRenderer(
        engine=engine,
        cell_size=args.cell_size,
        ticks_per_second=args.speed or config.ticks_per_second,
    )
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
