"""Layout constants and palette for the prism grid UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..board import TileKind
from ..colors import LightColor

RGB = Tuple[int, int, int]

# Tile metrics
TILE_SIZE: int = 96
GRID_PADDING: int = 24
BOARD_OUTER_PADDING: int = 32
BEAM_WIDTH: int = 3

# Side panel and status bar metrics
UI_PANEL_WIDTH: int = 280
UI_PANEL_PADDING: int = 20
UI_LINE_SPACING: int = 8
STATUS_BAR_HEIGHT: int = 56

# Colors expressed as RGB tuples
BACKGROUND_COLOR: RGB = (12, 14, 26)
BOARD_BACKGROUND_COLOR: RGB = (24, 24, 30)
PANEL_BACKGROUND_COLOR: RGB = (32, 36, 60)
GRID_LINE_COLOR: RGB = (40, 40, 55)
TEXT_COLOR: RGB = (232, 236, 244)
MUTED_TEXT_COLOR: RGB = (168, 176, 196)
LABEL_COLOR: RGB = (0, 0, 0)
HINT_COLOR: RGB = (255, 94, 0)
UNLIT_COLOR: RGB = (128, 128, 128)

# Neon beam palette, one entry per mixable color.
LIGHT_COLOR_RGB: Dict[LightColor, RGB] = {
    LightColor.RED: (255, 38, 38),
    LightColor.GREEN: (26, 255, 77),
    LightColor.BLUE: (51, 102, 255),
    LightColor.YELLOW: (255, 242, 51),
    LightColor.CYAN: (26, 255, 242),
    LightColor.PURPLE: (204, 38, 255),
    LightColor.WHITE: (255, 255, 255),
}

TILE_FILL_COLORS: Dict[TileKind, RGB] = {
    TileKind.STRAIGHT: (70, 80, 110),
    TileKind.BEND: (80, 90, 130),
    TileKind.MIRROR: (150, 160, 190),
    TileKind.SPLITTER: (110, 90, 150),
    TileKind.CROSS: (90, 110, 120),
    TileKind.MERGER: (120, 100, 80),
    TileKind.DARK_ABSORBER: (30, 20, 40),
}

TILE_LABELS: Dict[TileKind, str] = {
    TileKind.STRAIGHT: "|",
    TileKind.BEND: "L",
    TileKind.MIRROR: "/",
    TileKind.SPLITTER: "T",
    TileKind.CROSS: "+",
    TileKind.MERGER: "Y",
    TileKind.DARK_ABSORBER: "D",
    TileKind.SOURCE: "S",
    TileKind.TARGET: "O",
}


def light_rgb(color: LightColor) -> RGB:
    return LIGHT_COLOR_RGB.get(color, UNLIT_COLOR)


def dimmed(color: RGB, factor: float = 0.35) -> RGB:
    return (int(color[0] * factor), int(color[1] * factor), int(color[2] * factor))


@dataclass(frozen=True)
class BoardGeometry:
    """Pixel rectangles for the major UI regions."""

    board: Tuple[int, int, int, int]
    panel: Tuple[int, int, int, int]
    status: Tuple[int, int, int, int]
    window: Tuple[int, int]


def compute_geometry(
    board_width: int, board_height: int, tile_size: int = TILE_SIZE
) -> BoardGeometry:
    """Place the board, the side panel and the status bar for a board size."""

    board_px_width = board_width * tile_size
    board_px_height = board_height * tile_size

    board_x = BOARD_OUTER_PADDING
    board_y = BOARD_OUTER_PADDING

    panel_x = board_x + board_px_width + GRID_PADDING
    panel_height = max(board_px_height, 240)

    status_width = board_px_width + GRID_PADDING + UI_PANEL_WIDTH
    status_y = board_y + max(board_px_height, panel_height) + GRID_PADDING

    window_width = board_x + status_width + BOARD_OUTER_PADDING
    window_height = status_y + STATUS_BAR_HEIGHT + BOARD_OUTER_PADDING

    return BoardGeometry(
        board=(board_x, board_y, board_px_width, board_px_height),
        panel=(panel_x, board_y, UI_PANEL_WIDTH, panel_height),
        status=(board_x, status_y, status_width, STATUS_BAR_HEIGHT),
        window=(window_width, window_height),
    )
