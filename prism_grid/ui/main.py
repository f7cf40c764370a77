"""Interactive window for playing prism grid levels with pygame."""

from __future__ import annotations

import argparse
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import pygame

from ..game import PrismGame
from ..levels import LEVEL_ENV_VAR, LevelDefinition, LevelLoader
from .layout import (
    BACKGROUND_COLOR,
    MUTED_TEXT_COLOR,
    PANEL_BACKGROUND_COLOR,
    TEXT_COLOR,
    TILE_SIZE,
    UI_LINE_SPACING,
    UI_PANEL_PADDING,
    BoardGeometry,
    compute_geometry,
)
from .toolkit import PrismGameUI


@dataclass(frozen=True)
class UIDirectories:
    """Bundle with resolved directories required by the UI."""

    level_root: Path


def _default_level_root() -> Path:
    return Path(__file__).resolve().parents[1] / "levels"


def _read_directory(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value).expanduser()
    return fallback


def resolve_directories(check_exists: bool = True) -> UIDirectories:
    """Resolve UI directories using environment variables.

    Parameters
    ----------
    check_exists:
        When *True*, raise :class:`FileNotFoundError` if the level directory
        does not exist on disk.
    """

    level_root = _read_directory(LEVEL_ENV_VAR, _default_level_root())
    if check_exists and not level_root.exists():
        raise FileNotFoundError(f"Level directory does not exist: {level_root}")
    return UIDirectories(level_root=level_root)


def bootstrap_directories() -> UIDirectories:
    """Return resolved directories and print a short bootstrap message."""

    directories = resolve_directories()
    print(
        "Prism Grid UI bootstrap\n"
        f"  levels: {directories.level_root}\n"
        f"Set {LEVEL_ENV_VAR} to load levels from another directory."
    )
    return directories


class PrismGameApp:
    """Pygame window wrapping the board view with a level panel."""

    def __init__(
        self,
        *,
        directories: Optional[UIDirectories] = None,
        level_name: Optional[str] = None,
        tile_size: int = TILE_SIZE,
    ) -> None:
        pygame.init()
        self.tile_size = tile_size
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(pygame.font.get_default_font(), 18)
        self.small_font = pygame.font.Font(pygame.font.get_default_font(), 14)

        self.directories = directories or resolve_directories()
        self.level_loader = LevelLoader(self.directories.level_root)
        self.level_names: List[str] = self.level_loader.available()
        if not self.level_names:
            raise RuntimeError("No levels available to load.")

        self.level_index = 0
        if level_name is not None:
            self.level_index = self.level_names.index(level_name)
        self.level: Optional[LevelDefinition] = None
        self.game: Optional[PrismGame] = None
        self.view: Optional[PrismGameUI] = None
        self.geometry: Optional[BoardGeometry] = None
        self.screen = None
        self.level_start_time = time.perf_counter()
        self.solved_after: Optional[float] = None
        self.load_level(self.level_names[self.level_index])

    # ------------------------------------------------------------------
    # Level handling
    # ------------------------------------------------------------------
    def load_level(self, name: str) -> None:
        self.level = self.level_loader.load(name)
        self.game = PrismGame(self.level)
        self.geometry = compute_geometry(self.level.width, self.level.height, self.tile_size)
        self.screen = pygame.display.set_mode(self.geometry.window)
        pygame.display.set_caption(f"Prism Grid - {self.level.name}")
        _, _, board_w, board_h = self.geometry.board
        self.view = PrismGameUI(
            self.game,
            cell_size=self.tile_size,
            surface=pygame.Surface((board_w, board_h)),
        )
        self.level_start_time = time.perf_counter()
        self.solved_after = None

    def cycle_level(self, direction: int) -> None:
        self.level_index = (self.level_index + direction) % len(self.level_names)
        self.load_level(self.level_names[self.level_index])

    def restart_level(self) -> None:
        assert self.game
        self.game.reset()
        self.level_start_time = time.perf_counter()
        self.solved_after = None

    def elapsed(self) -> float:
        if self.solved_after is not None:
            return self.solved_after
        return time.perf_counter() - self.level_start_time

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def handle_event(self, event: pygame.event.Event) -> None:
        assert self.game and self.view and self.geometry
        if event.type == pygame.QUIT:
            raise SystemExit
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                raise SystemExit
            if event.key in (pygame.K_RIGHT, pygame.K_n):
                self.cycle_level(1)
            elif event.key in (pygame.K_LEFT, pygame.K_p):
                self.cycle_level(-1)
            elif event.key == pygame.K_r:
                self.restart_level()
            else:
                self.view.process_events([event])
        elif event.type == pygame.MOUSEBUTTONDOWN:
            board_x, board_y = self.geometry.board[0], self.geometry.board[1]
            local = pygame.event.Event(
                pygame.MOUSEBUTTONDOWN,
                button=event.button,
                pos=(event.pos[0] - board_x, event.pos[1] - board_y),
            )
            self.view.process_events([local])
        if self.game.solved and self.solved_after is None:
            self.solved_after = time.perf_counter() - self.level_start_time

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def draw(self) -> None:
        assert self.level and self.game and self.view and self.geometry and self.screen
        self.screen.fill(BACKGROUND_COLOR)
        board_x, board_y = self.geometry.board[0], self.geometry.board[1]
        self.screen.blit(self.view.render(), (board_x, board_y))
        self._draw_panel()
        self._draw_status()
        pygame.display.flip()

    def _panel_lines(self) -> List[Tuple[str, Tuple[int, int, int]]]:
        assert self.level and self.game
        lines = [
            (f"Level {self.level.id}: {self.level.name}", TEXT_COLOR),
            (f"Moves: {self.game.move_count}  (par {self.level.par_moves})", TEXT_COLOR),
            (f"Time: {self.elapsed():.1f}s  (par {self.level.par_time_seconds:.0f}s)", TEXT_COLOR),
        ]
        if self.game.solved:
            stars = self.game.star_rating(self.elapsed())
            lines.append((f"Solved! {'*' * stars}", TEXT_COLOR))
        hint = self.view.hint if self.view else None
        if hint is not None:
            lines.append((f"Hint: rotate {hint.position} x{hint.rotations}", MUTED_TEXT_COLOR))
        return lines

    def _draw_panel(self) -> None:
        assert self.geometry and self.screen
        x, y, width, height = self.geometry.panel
        self.screen.fill(PANEL_BACKGROUND_COLOR, pygame.Rect(x, y, width, height))
        cursor = y + UI_PANEL_PADDING
        for text, color in self._panel_lines():
            surface = self.font.render(text, True, color)
            self.screen.blit(surface, (x + UI_PANEL_PADDING, cursor))
            cursor += surface.get_height() + UI_LINE_SPACING

    def _draw_status(self) -> None:
        assert self.geometry and self.screen
        x, y, width, height = self.geometry.status
        controls = "Click: rotate   H: hint   R: restart   N/P: next/previous level   Esc: quit"
        surface = self.small_font.render(controls, True, MUTED_TEXT_COLOR)
        self.screen.blit(surface, (x, y + (height - surface.get_height()) // 2))

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        while True:
            for event in pygame.event.get():
                try:
                    self.handle_event(event)
                except SystemExit:
                    pygame.quit()
                    return
            self.draw()
            self.clock.tick(60)


def run(level_name: Optional[str] = None) -> None:
    """Entry point helper that instantiates and runs the UI."""

    app = PrismGameApp(level_name=level_name)
    app.run()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Prism Grid UI launcher")
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print resolved resource directories and exit without launching the UI.",
    )
    parser.add_argument(
        "--list-levels",
        action="store_true",
        help="List the levels found in the level directory and exit.",
    )
    parser.add_argument("--level", help="Level file stem to open first.")
    args = parser.parse_args(argv)

    if args.list_levels:
        directories = resolve_directories()
        print("Available levels:")
        for name in LevelLoader(directories.level_root).available():
            print(f"  {name}")
        return 0

    bootstrap_directories()
    if not args.info:
        run(args.level)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation entry point
    raise SystemExit(main())
