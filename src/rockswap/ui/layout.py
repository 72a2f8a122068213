from typing import Optional, Tuple

from rockswap.constants import BOTTOM_MARGIN, HUD_HEIGHT, BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT


def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int):
    """Return (tile_size, start_x, start_y) for a board centred above the bottom margin.

    Shared by rendering and input so clicks land on the tiles that were drawn.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / cols
    tile_by_h = max_board_h / rows
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < 20:
        tile_size = 20
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_at_point(x: float, y: float, window_width: int, window_height: int, rows: int, cols: int) -> Optional[Tuple[int, int]]:
    """Map a window coordinate to (row, col); row 0 is the top row on screen."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, rows, cols)
    if x < start_x or x >= start_x + cols * tile_size:
        return None
    if y < start_y or y >= start_y + rows * tile_size:
        return None
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    row = rows - 1 - row_from_bottom
    if 0 <= row < rows and 0 <= col < cols:
        return row, col
    return None


def cell_origin(row: int, col: int, window_width: int, window_height: int, rows: int, cols: int) -> Tuple[float, float, int]:
    """Bottom-left corner and size of a cell in window coordinates."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, rows, cols)
    left = start_x + col * tile_size
    bottom = start_y + (rows - 1 - row) * tile_size
    return left, bottom, tile_size
