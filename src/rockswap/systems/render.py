from typing import List, Optional, Tuple

from esper import World

from rockswap.events.bus import (EventBus, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED, EVENT_TILE_SWAP_REQUEST,
                                 EVENT_MATCH_FOUND, EVENT_CASCADE_COMPLETE, EVENT_SPECIAL_ACTIVATED,
                                 EVENT_BOARD_RESET)
from rockswap.components.tile import Special, SpecialKind, is_empty
from rockswap.constants import BOTTOM_MARGIN, HUD_HEIGHT
from rockswap.systems.scoring import scoring_summary
from rockswap.systems.session_utils import get_board, get_or_create_session, get_palette
from rockswap.ui.layout import cell_origin, compute_board_geometry

PADDING = 4
HIGHLIGHT_COLOR = (255, 255, 255)
SELECT_COLOR = (255, 230, 120)
PULSE_COLOR = (255, 120, 40)


class RenderSystem:
    """Draws a read-only snapshot of the board plus the score line."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.selected: Optional[Tuple[int, int]] = None
        self.highlight: List[Tuple[int, int]] = []
        self.pulse: List[Tuple[int, int]] = []
        self.event_bus.subscribe(EVENT_TILE_SELECTED, self.on_tile_selected)
        self.event_bus.subscribe(EVENT_TILE_DESELECTED, self.on_tile_deselected)
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_MATCH_FOUND, self.on_match_found)
        self.event_bus.subscribe(EVENT_SPECIAL_ACTIVATED, self.on_special_activated)
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, self.on_cascade_complete)
        self.event_bus.subscribe(EVENT_BOARD_RESET, self.on_cascade_complete)

    def on_tile_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))

    def on_tile_deselected(self, sender, **kwargs):
        self.selected = None

    def on_swap_request(self, sender, **kwargs):
        self.selected = None

    def on_match_found(self, sender, **kwargs):
        self.highlight = list(kwargs.get('positions') or [])

    def on_special_activated(self, sender, **kwargs):
        self.pulse = list(kwargs.get('positions') or [])

    def on_cascade_complete(self, sender, **kwargs):
        self.highlight = []
        self.pulse = []

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        board = get_board(self.world)
        if board is None:
            return
        palette = get_palette(self.world)
        session = get_or_create_session(self.world)
        width, height = self.window.width, self.window.height
        snapshot = board.snapshot()
        highlight = set(self.highlight)
        pulse = set(self.pulse)
        for row in range(board.rows):
            for col in range(board.cols):
                left, bottom, size = cell_origin(row, col, width, height, board.rows, board.cols)
                right = left + size - PADDING
                top = bottom + size - PADDING
                left += PADDING
                bottom += PADDING
                arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, (60, 60, 70), 1)
                tile = snapshot[row][col]
                if is_empty(tile):
                    continue
                arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, palette.color_for(tile.color))
                if isinstance(tile, Special):
                    self._draw_special_glyph(arcade, tile, left, right, bottom, top)
                if (row, col) in pulse:
                    arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, PULSE_COLOR, 4)
                elif (row, col) in highlight:
                    arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, HIGHLIGHT_COLOR, 3)
                if self.selected == (row, col):
                    arcade.draw_lrbt_rectangle_outline(left, right, bottom, top, SELECT_COLOR, 3)
        self._draw_hud(arcade, session, board)

    def _draw_special_glyph(self, arcade, tile: Special, left, right, bottom, top):
        center_x = (left + right) / 2
        center_y = (bottom + top) / 2
        glyph = "★" if tile.kind is SpecialKind.AREA_CLEAR else "◆"
        font_size = max(10, int((top - bottom) * 0.45))
        arcade.draw_text(glyph, center_x, center_y, arcade.color.WHITE, font_size,
                         anchor_x="center", anchor_y="center")

    def _draw_hud(self, arcade, session, board):
        tile_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height,
                                                             board.rows, board.cols)
        text_y = BOTTOM_MARGIN + board.rows * tile_size + HUD_HEIGHT / 3
        line = f"Score: {session.score} | High: {session.best_score} | Moves: {session.moves}"
        if session.game_over:
            line += " | Game Over"
        arcade.draw_text(line, start_x, text_y, arcade.color.WHITE, 16)
        arcade.draw_text(scoring_summary(), start_x, text_y - 18, arcade.color.LIGHT_GRAY, 10)
