"""Headless interaction tests for the pygame board view.

The fixtures in ``conftest.py`` force the SDL dummy drivers. A fixed
``cell_size`` of 32 keeps pixel coordinates predictable.
"""

from __future__ import annotations

from prism_grid.colors import LightColor
from prism_grid.game import PrismGame
from prism_grid.grid import GridPosition
from prism_grid.levels import LevelLoader
from prism_grid.solver import Hint
from prism_grid.ui import PrismGameUI
from prism_grid.ui.layout import HINT_COLOR, dimmed, light_rgb

CELL = 32


def make_ui(pygame, level_name: str) -> PrismGameUI:
    game = PrismGame(LevelLoader().load(level_name))
    return PrismGameUI(
        game,
        cell_size=CELL,
        surface=pygame.Surface((game.board.width * CELL, game.board.height * CELL)),
    )


def click(pygame, pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)


def rgb_at(surface, pos):
    color = surface.get_at(pos)
    return (color.r, color.g, color.b)


def test_click_rotates_tile_and_solves(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame, "level_01_first_light")

    ui.process_events([click(pygame, (48, 16))])

    assert ui.last_rotated == GridPosition(1, 0)
    assert ui.game.board.cell(GridPosition(1, 0)).rotation == 1
    assert ui.game.move_count == 1
    assert ui.game.solved


def test_clicks_outside_board_and_on_locked_tiles_are_ignored(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame, "level_01_first_light")

    ui.process_events([click(pygame, (500, 500)), click(pygame, (8, 8))])
    right_click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(48, 16))
    ui.process_events([right_click])

    assert ui.game.move_count == 0
    assert ui.last_rotated is None


def test_beams_are_drawn_in_light_color(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame, "level_01_first_light")
    ui.process_events([click(pygame, (48, 16))])

    surface = ui.render()

    assert rgb_at(surface, (24, 16)) == light_rgb(LightColor.RED)
    assert rgb_at(surface, (56, 16)) == light_rgb(LightColor.RED)


def test_targets_light_up_when_satisfied(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame, "level_01_first_light")
    target_corner = (2 * CELL + 3, 3)

    assert rgb_at(ui.render(), target_corner) == dimmed(light_rgb(LightColor.RED))

    ui.process_events([click(pygame, (48, 16))])
    assert rgb_at(ui.render(), target_corner) == light_rgb(LightColor.RED)


def test_hint_key_highlights_next_tile(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame, "level_09_corner_turn")

    ui.process_events([pygame.event.Event(pygame.KEYDOWN, key=pygame.K_h)])

    assert ui.hint == Hint(GridPosition(1, 0), 2)
    assert rgb_at(ui.render(), (CELL, 6)) == HINT_COLOR

    ui.process_events([click(pygame, (48, 16))])
    assert ui.hint is None
