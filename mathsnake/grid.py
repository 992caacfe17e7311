"""Grid geometry: cell coordinates to canvas pixels."""

from dataclasses import dataclass
from typing import Optional

from .constants import (
    GRID_COLS, GRID_ROWS, CELL_SIZE, MOBILE_BREAKPOINT, MIN_COLS, MIN_ROWS,
    MAX_CELL_SIZE, HUD_HEIGHT_ESTIMATE, SAFE_AREA_BUFFER, HORIZONTAL_PADDING,
    SNAKE_LENGTH,
)
from .models import Cell


@dataclass(frozen=True)
class Grid:
    cols: int = GRID_COLS
    rows: int = GRID_ROWS
    cell_size: int = CELL_SIZE

    @property
    def width(self) -> int:
        return self.cols * self.cell_size

    @property
    def height(self) -> int:
        return self.rows * self.cell_size

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.cols and 0 <= y < self.rows

    def to_pixel(self, cell: Cell) -> tuple[int, int]:
        """Top-left pixel corner of a cell."""
        return cell[0] * self.cell_size, cell[1] * self.cell_size

    def cell_center(self, cell: Cell) -> tuple[float, float]:
        px, py = self.to_pixel(cell)
        return px + self.cell_size / 2, py + self.cell_size / 2

    def center(self) -> tuple[float, float]:
        """Pixel center of the whole canvas."""
        return self.width / 2, self.height / 2

    def spawn_snake(self, length: int = SNAKE_LENGTH) -> list[Cell]:
        """Horizontal snake with its head in the middle cell, facing right."""
        cx, cy = self.cols // 2, self.rows // 2
        return [(cx - i, cy) for i in range(length)]


def calculate_grid(viewport_width: int, viewport_height: int,
                   hud_height: Optional[int] = None) -> Grid:
    """Fit the board to a browser viewport.

    Wide viewports get the fixed desktop board. Narrow (mobile) ones pick
    cols/rows at the desktop cell size, then shrink the cell so the board
    fits the space left under the HUD.
    """
    if viewport_width >= MOBILE_BREAKPOINT:
        return Grid()

    if not hud_height or hud_height <= 0:
        hud_height = HUD_HEIGHT_ESTIMATE
    available_w = viewport_width - HORIZONTAL_PADDING
    available_h = viewport_height - hud_height - SAFE_AREA_BUFFER

    cols = max(MIN_COLS, available_w // CELL_SIZE)
    rows = max(MIN_ROWS, available_h // CELL_SIZE)

    cell_size = min(available_w // cols, available_h // rows, MAX_CELL_SIZE)
    # Tiny viewports still need a drawable cell
    cell_size = max(1, cell_size)
    return Grid(cols=cols, rows=rows, cell_size=cell_size)
