"""Pygame 2D visualization for the city simulation.

Draws every parcel as a square coloured by building type and shaded by
its energy, with a statistics and controls panel on the right.  The
simulation steps at a configurable generation rate while the display
refreshes at the Pygame frame rate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from citygrowth.simulation.engine import SimulationEngine

from citygrowth.world.cell import MAX_ENERGY, BuildingType

# Colour palette
_BG = (25, 28, 35)
_GRID_LINE = (45, 50, 60)
_TEXT = (200, 200, 200)
_HIGHLIGHT = (255, 220, 90)

_TYPE_COLOURS: dict[BuildingType, tuple[int, int, int]] = {
    BuildingType.EMPTY: (40, 44, 52),
    BuildingType.RESIDENTIAL: (34, 197, 94),
    BuildingType.COMMERCIAL: (59, 130, 246),
    BuildingType.INDUSTRIAL: (234, 179, 8),
    BuildingType.PARK: (74, 222, 128),
    BuildingType.ROAD: (156, 163, 175),
    BuildingType.POWER: (239, 68, 68),
    BuildingType.WATER: (6, 182, 212),
    BuildingType.HOSPITAL: (236, 72, 153),
    BuildingType.SCHOOL: (168, 85, 247),
    BuildingType.POLICE: (29, 78, 216),
    BuildingType.FIRE: (220, 38, 38),
}

# Parcels at zero energy are drawn at this fraction of full brightness
_MIN_SHADE = 0.35

_TOOLS: list[BuildingType] = list(BuildingType)


def shade(building_type: BuildingType, energy: int) -> tuple[int, int, int]:
    """Return the display colour for a parcel, dimmed by low energy."""
    base = np.array(_TYPE_COLOURS[building_type], dtype=np.float64)
    if building_type is BuildingType.EMPTY:
        return tuple(base.astype(int).tolist())
    t = 1.0 - (1.0 - _MIN_SHADE) * (1.0 - min(energy / MAX_ENERGY, 1.0))
    return tuple((base * t).astype(int).tolist())


class PygameRenderer:
    """Renders a SimulationEngine's city into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    # Speed presets: generations per second
    _SPEED_STEPS: ClassVar[list[float]] = [
        0.5,
        1.0,
        2.0,
        3.0,
        5.0,
        10.0,
        20.0,
    ]

    def __init__(
        self,
        engine: SimulationEngine,
        cell_size: int = 28,
        ticks_per_second: float = 1.0,
    ) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            cell_size: Pixel width/height per grid cell.
            ticks_per_second: Generations per real-time second.
        """
        self.engine = engine
        self.cell_size = cell_size
        self.ticks_per_second = ticks_per_second
        self._speed_index = self._nearest_speed(ticks_per_second)
        self._tick_accumulator = 0.0
        self._tool_index = _TOOLS.index(BuildingType.RESIDENTIAL)
        self._last_layout = ""

        side = engine.grid.size * cell_size
        self._panel_width = 240
        self._win_w = side + self._panel_width
        self._win_h = max(side, 600)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("City Growth")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.paused = True

    @property
    def tool(self) -> BuildingType:
        return _TOOLS[self._tool_index]

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        best = 0
        best_diff = abs(self._SPEED_STEPS[0] - tps)
        for i, s in enumerate(self._SPEED_STEPS):
            diff = abs(s - tps)
            if diff < best_diff:
                best, best_diff = i, diff
        return best

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, step sim, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0
            self._handle_events()
            if not self.paused:
                self._tick_accumulator += self.ticks_per_second * dt
                steps = int(self._tick_accumulator)
                self._tick_accumulator -= steps
                for _ in range(steps):
                    self.engine.step()
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._place_at(event.pos)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_SPACE:
            self.paused = not self.paused
        elif key == pygame.K_n:
            self.engine.step()
        elif key == pygame.K_c:
            self.paused = True
            self.engine.reset()
        elif key == pygame.K_r:
            self.paused = True
            self._last_layout = self.engine.randomize()
        elif key == pygame.K_LEFTBRACKET:
            self._tool_index = (self._tool_index - 1) % len(_TOOLS)
        elif key == pygame.K_RIGHTBRACKET:
            self._tool_index = (self._tool_index + 1) % len(_TOOLS)
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._speed_index = min(len(self._SPEED_STEPS) - 1, self._speed_index + 1)
            self.ticks_per_second = self._SPEED_STEPS[self._speed_index]
        elif key == pygame.K_MINUS:
            self._speed_index = max(0, self._speed_index - 1)
            self.ticks_per_second = self._SPEED_STEPS[self._speed_index]

    def _place_at(self, pos: tuple[int, int]) -> None:
        """Place the selected tool on the parcel under the cursor."""
        x, y = pos[0] // self.cell_size, pos[1] // self.cell_size
        if self.engine.grid.in_bounds(x, y):
            self.engine.place(x, y, self.tool)

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_parcels()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_parcels(self) -> None:
        """Draw each parcel as a filled square with a thin outline."""
        cs = self.cell_size
        for x, y, cell in self.engine.grid.iter_cells():
            rect = (x * cs, y * cs, cs, cs)
            pygame.draw.rect(self.screen, shade(cell.type, cell.energy), rect)
            pygame.draw.rect(self.screen, _GRID_LINE, rect, 1)

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        panel_x = self.engine.grid.size * self.cell_size + 10
        y = 10
        stats = self.engine.stats()

        lines = [
            f"Generation: {self.engine.generation}",
            f"Speed: {self.ticks_per_second:.1f} gen/s",
            f"{'PAUSED' if self.paused else 'RUNNING'}",
            f"Layout: {self._last_layout or '-'}",
            "",
            "--- City ---",
            f"Population: {stats.total_population}",
            f"Energy: {stats.total_energy}",
            f"Buildings: {stats.total_buildings}",
            f"Occupancy: {stats.occupancy_rate:.1f}%",
            f"Avg pop: {stats.avg_population:.1f}",
            f"Avg energy: {stats.avg_energy:.1f}",
            "",
        ]
        lines += [
            f"  {btype.value}: {count}" for btype, count in stats.top_building_types()
        ]
        lines += [
            "",
            "--- Controls ---",
            "SPACE: play/pause",
            "N: step  +/-: speed",
            "C: clear  R: random",
            "[ / ]: tool  click: place",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

        tool_surf = self.font.render(f"Tool: {self.tool.value}", True, _HIGHLIGHT)
        self.screen.blit(tool_surf, (panel_x, y + 6))
        pygame.draw.rect(
            self.screen,
            _TYPE_COLOURS[self.tool],
            (panel_x + 170, y + 6, 14, 14),
        )
