from typing import Optional, Tuple
from esper import World
from rockswap.events.bus import (EventBus, EVENT_TILE_CLICK, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED,
                                 EVENT_TILE_SWAP_REQUEST, EVENT_MOUSE_PRESS, EVENT_GAME_RESET,
                                 EVENT_BOARD_RESET, EVENT_SCORE_CHANGED)
from rockswap.components.board import Board
from rockswap.constants import GRID_COLS, GRID_ROWS, MOUSE_BUTTON_RIGHT
from rockswap.systems.board_ops import create_initial_board, is_adjacent, respawn_full_board
from rockswap.systems.session_utils import get_or_create_session, get_palette, get_rng


class BoardSystem:
    def __init__(self, world: World, event_bus: EventBus, rows: int = GRID_ROWS, cols: int = GRID_COLS):
        self.world = world
        self.event_bus = event_bus
        colors = len(get_palette(world))
        # Create a single board entity with Board component
        board = create_initial_board(rows, cols, colors, rng=get_rng(world))
        self.board_entity = self.world.create_entity(board)
        self.selected: Optional[Tuple[int, int]] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if not self.board.in_bounds((row, col)):
            return
        session = get_or_create_session(self.world)
        if session.resolving or session.game_over:
            return
        if self.selected is None:
            self.selected = (row, col)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
        elif self.selected == (row, col):
            self._deselect('same_tile')
        elif is_adjacent(self.selected, (row, col)):
            src = self.selected
            dst = (row, col)
            self.selected = None
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst)
        else:
            # Change selection to new tile
            self.selected = (row, col)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)

    def on_mouse_press(self, sender, **kwargs):
        # Right-click always clears current selection
        if kwargs.get('button') != MOUSE_BUTTON_RIGHT:
            return
        self._deselect('right_click')

    def on_game_reset(self, sender, **kwargs):
        session = get_or_create_session(self.world)
        if session.resolving:
            return
        self.selected = None
        positions = respawn_full_board(self.board, rng=get_rng(self.world))
        session.reset()
        self.event_bus.emit(EVENT_BOARD_RESET, positions=positions, reason=kwargs.get('reason'))
        self.event_bus.emit(
            EVENT_SCORE_CHANGED,
            score=session.score,
            best=session.best_score,
            moves=session.moves,
            gained=0,
        )

    def _deselect(self, reason: str):
        prev = self.selected
        if prev is None:
            return
        self.selected = None
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])
