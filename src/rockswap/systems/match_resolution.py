import logging
import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from esper import World

from rockswap.events.bus import (EventBus, EVENT_TILE_SWAP_FINALIZE, EVENT_BOARD_CHANGED, EVENT_MATCH_FOUND,
                                 EVENT_SPECIAL_CREATED, EVENT_SPECIAL_ACTIVATED, EVENT_MATCH_CLEARED,
                                 EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED, EVENT_CASCADE_STEP,
                                 EVENT_CASCADE_COMPLETE, EVENT_CASCADE_LIMIT_REACHED, EVENT_SCORE_CHANGED,
                                 EVENT_GAME_OVER)
from rockswap.components.board import Board
from rockswap.components.game_session import WildcardActivation
from rockswap.constants import MAX_CASCADE_PASSES, POINTS_PER_CELL
from rockswap.systems.board_ops import GravityMove, activation_cells, collapse, has_valid_move, refill, scan_matches
from rockswap.systems.scoring import ClearResult, resolve_clear
from rockswap.systems.session_utils import get_board, get_or_create_session, get_rng

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(slots=True)
class CascadePass:
    """Everything that happened during one scan -> clear -> collapse -> refill pass."""
    depth: int
    positions: List[Position]
    result: ClearResult
    gained: int
    moves: List[GravityMove] = field(default_factory=list)
    new_tiles: List[Position] = field(default_factory=list)
    activation: Optional[WildcardActivation] = None


def iter_cascade(
    board: Board,
    *,
    preferred: Optional[Position] = None,
    activation: Optional[WildcardActivation] = None,
    rng: random.Random | None = None,
    max_passes: int = MAX_CASCADE_PASSES,
    points_per_cell: int = POINTS_PER_CELL,
) -> Iterator[CascadePass]:
    """Resolve the board one pass at a time.

    Yields after each pass so callers can pace rendering between steps. The
    pass depth doubles as the score multiplier. A pending wildcard activation
    replaces the scan on the first pass only; ``preferred`` only steers special
    placement on the first pass.
    """
    depth = 0
    while depth < max_passes:
        fired = activation
        activation = None
        if fired is not None:
            matched = activation_cells(board, fired)
        else:
            matched = scan_matches(board)
            if not matched:
                return
        depth += 1
        result = resolve_clear(
            board,
            matched,
            preferred if depth == 1 else None,
            triggered=fired is not None,
            points_per_cell=points_per_cell,
        )
        moves = collapse(board)
        new_tiles = refill(board, rng)
        yield CascadePass(
            depth=depth,
            positions=sorted(matched),
            result=result,
            gained=result.points * depth,
            moves=moves,
            new_tiles=new_tiles,
            activation=fired,
        )


class MatchResolutionSystem:
    def __init__(self, world: World, event_bus: EventBus, *, max_passes: int = MAX_CASCADE_PASSES):
        self.world = world
        self.event_bus = event_bus
        self.max_passes = max_passes
        self.event_bus.subscribe(EVENT_TILE_SWAP_FINALIZE, self.on_swap_finalize)
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)

    def on_swap_finalize(self, sender, **kwargs):
        # After a logical swap, resolve with the destination as the preferred special cell
        dst = kwargs.get('dst')
        self.resolve(preferred=tuple(dst) if dst else None)

    def on_board_changed(self, sender, **kwargs):
        # Board edited from outside a swap; run the same pipeline if idle.
        self.resolve()

    def resolve(self, preferred: Optional[Position] = None) -> int:
        """Run the cascade to quiescence; return the points gained by this move."""
        session = get_or_create_session(self.world)
        board = get_board(self.world)
        if board is None or session.resolving:
            return 0
        session.resolving = True
        activation = session.pending_activation
        session.pending_activation = None
        total = 0
        depth = 0
        try:
            for step in iter_cascade(
                board,
                preferred=preferred,
                activation=activation,
                rng=get_rng(self.world),
                max_passes=self.max_passes,
            ):
                depth = step.depth
                total += step.gained
                session.cascade_depth = depth
                session.add_points(step.gained)
                self._publish_pass(step, session.score)
                self.event_bus.emit(
                    EVENT_SCORE_CHANGED,
                    score=session.score,
                    best=session.best_score,
                    moves=session.moves,
                    gained=step.gained,
                )
            if depth >= self.max_passes and scan_matches(board):
                session.cascade_limit_hits += 1
                logger.warning("Cascade stopped after %d passes with matches remaining", self.max_passes)
                self.event_bus.emit(
                    EVENT_CASCADE_LIMIT_REACHED,
                    max_passes=self.max_passes,
                    hits=session.cascade_limit_hits,
                )
        finally:
            session.resolving = False
            session.cascade_depth = 0
        if depth:
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth, gained=total, score=session.score)
        if not has_valid_move(board):
            session.game_over = True
            self.event_bus.emit(
                EVENT_GAME_OVER,
                score=session.score,
                best=session.best_score,
                moves=session.moves,
            )
        return total

    def _publish_pass(self, step: CascadePass, score: int) -> None:
        result = step.result
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=step.positions, size=len(step.positions), depth=step.depth)
        if result.created is not None and result.created_tile is not None:
            self.event_bus.emit(
                EVENT_SPECIAL_CREATED,
                position=result.created,
                kind=result.created_tile.kind,
                color=result.created_tile.color,
            )
        if result.activated:
            self.event_bus.emit(EVENT_SPECIAL_ACTIVATED, positions=list(result.activated), depth=step.depth)
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=result.cleared, points=result.points, depth=step.depth)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=step.moves)
        if step.new_tiles:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=step.new_tiles)
        self.event_bus.emit(
            EVENT_CASCADE_STEP,
            depth=step.depth,
            positions=step.positions,
            points=result.points,
            gained=step.gained,
            score=score,
        )
