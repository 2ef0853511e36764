"""Pygame viewer for the mob simulation.

Draws one colored cell per occupant, with a status line (step, time of day,
weather, season) above the grid and the population line below it. Closing
the window is the only way the viewer influences a run: ``is_viable``
returns False from then on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional, Tuple

import pygame

from mobsim.entities.plant import Grass
from mobsim.entities.species import Species
from mobsim.simulation.stats import FieldStats, format_population_line

if TYPE_CHECKING:
    from mobsim.simulation.step_context import StepReport
    from mobsim.spatial.field import Field

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


def _default_species_colors() -> Dict[Species, Color]:
    return {
        Species.ZOMBIE: (40, 120, 60),
        Species.CREEPER: (120, 200, 80),
        Species.COW: (120, 80, 50),
        Species.PIG: (240, 150, 170),
        Species.VILLAGER: (70, 110, 220),
    }


@dataclass
class GuiStyle:
    margin: int = 10
    header_height: int = 28
    footer_height: int = 28
    background_color: Color = (245, 245, 245)
    empty_color: Color = (255, 255, 255)
    grass_color: Color = (150, 210, 120)
    seed_color: Color = (215, 200, 150)
    text_color: Color = (20, 20, 20)
    diseased_shade: float = 0.5
    species_colors: Dict[Species, Color] = field(default_factory=_default_species_colors)
    unknown_color: Color = (128, 128, 128)


class FieldView:
    """Window showing the field after every step.

    Attributes:
        depth: Grid rows
        width: Grid columns
        cell_size: Pixel size of one cell
        fps: Upper bound on redraws per second
    """

    def __init__(self, depth: int, width: int, cell_size: int = 6, fps: int = 30) -> None:
        self.depth = depth
        self.width = width
        self.cell_size = cell_size
        self.fps = fps
        self.style = GuiStyle()
        self.stats = FieldStats()
        self._open = True

        window_width = self.style.margin * 2 + width * cell_size
        window_height = (
            self.style.margin * 2
            + self.style.header_height
            + depth * cell_size
            + self.style.footer_height
        )
        pygame.init()
        self.screen = pygame.display.set_mode((window_width, window_height))
        pygame.display.set_caption("Mob Ecosystem Simulation")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(None, 22)

    def close(self) -> None:
        if self._open:
            self._open = False
            pygame.quit()

    def is_viable(self, field: "Field") -> bool:
        self._pump_events()
        return self._open and field.is_viable()

    def show_status(self, step: int, field: "Field", report: Optional["StepReport"]) -> None:
        self._pump_events()
        if not self._open:
            return

        self.stats.reset()
        self.screen.fill(self.style.background_color)
        self._draw_header(step, field)
        self._draw_cells(field)
        self._draw_footer(field)

        pygame.display.flip()
        self.clock.tick(self.fps)

    def _pump_events(self) -> None:
        if not self._open:
            return
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.info("Viewer closed")
                self.close()
                return

    def _grid_origin(self) -> Tuple[int, int]:
        return self.style.margin, self.style.margin + self.style.header_height

    def _draw_header(self, step: int, field: "Field") -> None:
        env = field.environment
        text = (
            f"Step: {step}    Time: {env.time_of_day}    "
            f"Weather: {env.weather}    Season: {env.season}"
        )
        self._blit_text(text, (self.style.margin, self.style.margin))

    def _draw_footer(self, field: "Field") -> None:
        line = "Population: " + format_population_line(self.stats.counts(field))
        _, grid_y = self._grid_origin()
        y = grid_y + self.depth * self.cell_size + 6
        self._blit_text(line, (self.style.margin, y))

    def _draw_cells(self, field: "Field") -> None:
        grid_x, grid_y = self._grid_origin()
        size = self.cell_size
        grid_rect = pygame.Rect(grid_x, grid_y, self.width * size, self.depth * size)
        pygame.draw.rect(self.screen, self.style.empty_color, grid_rect)
        for location in field.iter_locations():
            color = self._color_for(field, location)
            if color is None:
                continue
            rect = pygame.Rect(grid_x + location.col * size, grid_y + location.row * size, size, size)
            pygame.draw.rect(self.screen, color, rect)

    def _color_for(self, field: "Field", location) -> Optional[Color]:
        occupant = field.get_object_at(location)
        if occupant is None:
            return None
        if isinstance(occupant, Grass):
            return self.style.seed_color if occupant.is_seed else self.style.grass_color
        color = self.style.species_colors.get(occupant.species, self.style.unknown_color)
        if occupant.diseased:
            shade = self.style.diseased_shade
            color = (int(color[0] * shade), int(color[1] * shade), int(color[2] * shade))
        return color

    def _blit_text(self, text: str, pos: Tuple[int, int]) -> None:
        surface = self.font.render(text, True, self.style.text_color)
        self.screen.blit(surface, pos)
