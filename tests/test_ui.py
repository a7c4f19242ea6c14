"""Smoke tests for the UI and CLI modules (no display required)."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from citygrowth.ui.pygame_client import PygameRenderer, shade
from citygrowth.world.cell import BuildingType


def test_pygame_renderer_importable() -> None:
    """PygameRenderer class is importable without initialising pygame."""
    assert PygameRenderer is not None


def test_shade_dims_low_energy() -> None:
    bright = shade(BuildingType.RESIDENTIAL, 100)
    dim = shade(BuildingType.RESIDENTIAL, 0)
    assert bright == (34, 197, 94)
    assert all(d < b for d, b in zip(dim, bright, strict=True))


def test_shade_empty_ignores_energy() -> None:
    assert shade(BuildingType.EMPTY, 0) == shade(BuildingType.EMPTY, 100)


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    from citygrowth.__main__ import main

    assert callable(main)


def test_headless_run(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    from citygrowth.__main__ import main

    config = tmp_path / "city.yaml"
    config.write_text("seed: 3\ngrid_size: 10\nlayout: suburban\n")
    with caplog.at_level(logging.INFO, logger="citygrowth"):
        main(["--config", str(config), "--headless", "3"])
    assert any("gen=3" in record.getMessage() for record in caplog.records)


def test_layout_override(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    from citygrowth.__main__ import main

    config = tmp_path / "city.yaml"
    config.write_text("grid_size: 10\n")
    with caplog.at_level(logging.INFO, logger="citygrowth"):
        main(["--config", str(config), "--layout", "downtown", "--headless", "1"])
    assert any("downtown" in record.getMessage() for record in caplog.records)
