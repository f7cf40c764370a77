"""Minimal pygame board view for headless testing.

Rendering is deterministic so it can be exercised in automated tests using
the SDL ``dummy`` video driver.
"""

from __future__ import annotations

import os
from typing import Iterable, Optional, Tuple

from ..board import TileKind
from ..grid import GridPosition
from ..solver import Hint
from .layout import (
    BEAM_WIDTH,
    BOARD_BACKGROUND_COLOR,
    GRID_LINE_COLOR,
    HINT_COLOR,
    LABEL_COLOR,
    TILE_FILL_COLORS,
    TILE_LABELS,
    dimmed,
    light_rgb,
)

# Imported lazily in ``ensure_pygame`` so tests can pick the SDL drivers first.
_PYGAME = None


def ensure_pygame():
    global _PYGAME
    if _PYGAME is None:
        # ``setdefault`` so real applications can pick a different driver.
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
        _PYGAME = __import__("pygame")
        _PYGAME.display.init()
        _PYGAME.font.init()
    return _PYGAME


class PrismGameUI:
    """Draws a :class:`~prism_grid.game.PrismGame` board and turns clicks into rotations."""

    def __init__(
        self,
        game,
        *,
        cell_size: int = 32,
        surface=None,
        use_display: bool = False,
    ) -> None:
        pygame = ensure_pygame()
        self.game = game
        self.cell_size = cell_size
        width = self.game.board.width * cell_size
        height = self.game.board.height * cell_size
        self.surface = surface or pygame.Surface((width, height))
        self.screen = None
        if use_display:
            self.screen = pygame.display.set_mode((width, height))
        self.hint: Optional[Hint] = None
        self.last_rotated: Optional[GridPosition] = None
        self.font = pygame.font.Font(pygame.font.get_default_font(), 14)

    # ------------------------------------------------------------------
    # Input handling
    def process_events(self, events: Iterable[object]) -> None:
        pygame = ensure_pygame()
        for event in events:
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_h:
                self.show_hint()

    def show_hint(self) -> Optional[Hint]:
        self.hint = self.game.hint()
        return self.hint

    def _grid_from_pixel(self, pos: Tuple[int, int]) -> Optional[GridPosition]:
        x, y = pos
        position = GridPosition(x // self.cell_size, y // self.cell_size)
        if not self.game.board.in_bounds(position):
            return None
        return position

    def _handle_click(self, pos: Tuple[int, int]) -> None:
        position = self._grid_from_pixel(pos)
        if position is None:
            return
        if self.game.rotate(position):
            self.last_rotated = position
            self.hint = None

    # ------------------------------------------------------------------
    # Rendering helpers
    def render(self):
        pygame = ensure_pygame()
        self.surface.fill(BOARD_BACKGROUND_COLOR)
        self._draw_tiles()
        self._draw_grid()
        self._draw_beams()
        self._draw_hint()
        if self.screen:
            self.screen.blit(self.surface, (0, 0))
            pygame.display.flip()
        return self.surface

    def _cell_rect(self, position: GridPosition):
        pygame = ensure_pygame()
        return pygame.Rect(
            position.col * self.cell_size,
            position.row * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    def _cell_center(self, position: GridPosition) -> Tuple[int, int]:
        return (
            position.col * self.cell_size + self.cell_size // 2,
            position.row * self.cell_size + self.cell_size // 2,
        )

    def _draw_grid(self) -> None:
        pygame = ensure_pygame()
        for position in self.game.board.positions():
            pygame.draw.rect(self.surface, GRID_LINE_COLOR, self._cell_rect(position), 1)

    def _draw_tiles(self) -> None:
        board = self.game.board
        hits = self.game.result.target_hits
        for position in board.positions():
            cell = board.cell(position)
            if cell.kind is TileKind.EMPTY:
                continue
            if cell.kind is TileKind.SOURCE:
                fill = light_rgb(cell.source_color)
            elif cell.kind is TileKind.TARGET:
                fill = light_rgb(cell.required_color)
                received = hits.get(position)
                if received is None or not received.contains(cell.required_color):
                    fill = dimmed(fill)
            else:
                fill = TILE_FILL_COLORS[cell.kind]
            self.surface.fill(fill, self._cell_rect(position))
            self._draw_label(position, f"{TILE_LABELS[cell.kind]}{cell.rotation}")

    def _draw_label(self, position: GridPosition, text: str) -> None:
        label = self.font.render(text, True, LABEL_COLOR)
        rect = label.get_rect()
        rect.center = self._cell_center(position)
        self.surface.blit(label, rect)

    def _draw_beams(self) -> None:
        pygame = ensure_pygame()
        for segment in self.game.result.segments:
            pygame.draw.line(
                self.surface,
                light_rgb(segment.color),
                self._cell_center(segment.start),
                self._cell_center(segment.end),
                BEAM_WIDTH,
            )

    def _draw_hint(self) -> None:
        if self.hint is None:
            return
        pygame = ensure_pygame()
        pygame.draw.rect(self.surface, HINT_COLOR, self._cell_rect(self.hint.position), 2)


__all__ = ["PrismGameUI", "ensure_pygame"]
