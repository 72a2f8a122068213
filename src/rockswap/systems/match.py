from typing import Tuple
from esper import World
from rockswap.events.bus import (EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID,
                                 EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_FINALIZE)
from rockswap.systems.board_ops import detect_wildcard_activation, try_swap
from rockswap.systems.session_utils import get_board, get_or_create_session


class MatchSystem:
    """Validates swap requests and commits the legal ones.

    A committed swap counts as a move and hands off to resolution through
    ``EVENT_TILE_SWAP_FINALIZE``. Requests arriving while a move is being
    resolved, or after the game is over, are rejected without touching state.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        src, dst = tuple(src), tuple(dst)
        reason = self.commit_swap(src, dst)
        if reason is not None:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason=reason)
            return
        self.event_bus.emit(EVENT_TILE_SWAP_FINALIZE, src=src, dst=dst)

    def commit_swap(self, src: Tuple[int, int], dst: Tuple[int, int]) -> str | None:
        """Apply the swap if legal; return a rejection reason otherwise."""
        session = get_or_create_session(self.world)
        board = get_board(self.world)
        if board is None:
            return 'no_board'
        if session.resolving:
            return 'resolving'
        if session.game_over:
            return 'game_over'
        session.resolving = True
        try:
            if not try_swap(board, src, dst):
                return 'illegal'
            session.moves += 1
            activation = detect_wildcard_activation(board, src, dst)
            session.pending_activation = activation
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst, activation=activation)
        finally:
            session.resolving = False
        return None
