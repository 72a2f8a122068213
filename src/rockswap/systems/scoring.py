"""Clearing matched cells, creating special tiles and scoring a pass.

Each pass creates at most one special tile: a wildcard from a run of five or
more, otherwise an area-clear tile from a run of exactly four. The new special
is never cleared by the pass that created it. Specials already on the board
fire when they are cleared: area-clear tiles take their 3x3 neighbourhood with
them, wildcards take every tile sharing their match partner's color. Fired
specials can pull further specials into the clear, which fire in turn.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from rockswap.components.board import Board
from rockswap.components.tile import (
    EMPTY,
    Normal,
    Special,
    SpecialKind,
    is_empty,
    is_wildcard,
    match_color,
    promote,
)
from rockswap.constants import AREA_CLEAR_RUN_LENGTH, POINTS_PER_CELL, WILDCARD_RUN_LENGTH
from rockswap.systems.board_ops import Run, find_runs

Position = Tuple[int, int]


@dataclass(slots=True)
class ClearResult:
    points: int = 0
    cleared: List[Position] = field(default_factory=list)
    created: Optional[Position] = None
    created_tile: Optional[Special] = None
    activated: List[Position] = field(default_factory=list)


def scoring_summary(points_per_cell: int = POINTS_PER_CELL) -> str:
    """Tooltip text describing the scoring rules."""
    return (
        f"Scoring: {points_per_cell} pts/cell; chain multiplier x1, x2, x3... per cascade; "
        f"{AREA_CLEAR_RUN_LENGTH}-run makes an area-clear tile, "
        f"{WILDCARD_RUN_LENGTH}+ run makes a wildcard."
    )


def _build_mask(board: Board, matched: Iterable[Position]) -> Set[Position]:
    mask: Set[Position] = set()
    for pos in matched:
        if board.in_bounds(pos):
            mask.add(tuple(pos))
    return mask


def _placement_for(board: Board, run: Run, mask: Set[Position], preferred: Optional[Position]) -> Optional[Position]:
    candidates: List[Position] = []
    if preferred is not None and board.in_bounds(preferred) and run.contains(tuple(preferred)):
        candidates.append(tuple(preferred))
    candidates.append(run.midpoint())
    for pos in candidates:
        if pos in mask and isinstance(board.get(pos), Normal):
            return pos
    return None


def pick_special(
    board: Board,
    mask: Set[Position],
    runs: Sequence[Run],
    preferred: Optional[Position] = None,
) -> Optional[Tuple[Position, SpecialKind]]:
    """Choose the single special tile this pass creates, if any.

    Only the first qualifying run is considered; if it has no eligible cell,
    nothing is created.
    """
    tiers = (
        (SpecialKind.WILDCARD, lambda length: length >= WILDCARD_RUN_LENGTH),
        (SpecialKind.AREA_CLEAR, lambda length: length == AREA_CLEAR_RUN_LENGTH),
    )
    for kind, qualifies in tiers:
        for run in runs:
            if not qualifies(run.length):
                continue
            pos = _placement_for(board, run, mask, preferred)
            if pos is None:
                return None
            return pos, kind
    return None


def neighborhood(board: Board, pos: Position) -> List[Position]:
    """The 3x3 block centred on pos, clipped to the board."""
    row, col = pos
    cells: List[Position] = []
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            cell = (row + dr, col + dc)
            if board.in_bounds(cell):
                cells.append(cell)
    return cells


def _partner_colors(board: Board, base_mask: Set[Position], runs: Sequence[Run], pos: Position) -> Set[int]:
    colors = {run.color for run in runs if run.contains(pos)}
    if colors or pos not in base_mask:
        return colors
    # No run through the wildcard (a swap trigger): use its matched neighbours.
    row, col = pos
    for cell in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
        if cell not in base_mask:
            continue
        color = match_color(board.get(cell))
        if color is not None:
            colors.add(color)
    return colors


def _expand_for_specials(
    board: Board,
    mask: Set[Position],
    runs: Sequence[Run],
    protected: Optional[Position],
) -> List[Position]:
    base_mask = set(mask)
    processed: Set[Position] = set()
    activated: List[Position] = []
    while True:
        pending = sorted(
            pos for pos in mask
            if pos not in processed and pos != protected and isinstance(board.get(pos), Special)
        )
        if not pending:
            return activated
        for pos in pending:
            processed.add(pos)
            activated.append(pos)
            tile = board.get(pos)
            if is_wildcard(tile):
                colors = _partner_colors(board, base_mask, runs, pos)
                if colors:
                    mask.update(cell for cell in board.positions() if match_color(board.get(cell)) in colors)
            else:
                mask.update(neighborhood(board, pos))


def resolve_clear(
    board: Board,
    matched: Iterable[Position],
    preferred: Optional[Position] = None,
    *,
    triggered: bool = False,
    points_per_cell: int = POINTS_PER_CELL,
) -> ClearResult:
    """Clear matched cells (plus special expansions) and report what happened.

    ``triggered`` marks a match set built from a wildcard swap rather than a
    scan: no special is created and wildcards take their swap partner's color.
    """
    mask = _build_mask(board, matched)
    if not mask:
        return ClearResult()
    runs: List[Run] = [] if triggered else find_runs(board)

    created: Optional[Position] = None
    created_tile: Optional[Special] = None
    if not triggered:
        choice = pick_special(board, mask, runs, preferred)
        if choice is not None:
            created, kind = choice
            created_tile = promote(board.get(created), kind)
            board.set(created, created_tile)
            mask.discard(created)

    activated = _expand_for_specials(board, mask, runs, created)
    if created is not None:
        mask.discard(created)

    cleared: List[Position] = []
    for pos in sorted(mask):
        if is_empty(board.get(pos)):
            continue
        board.set(pos, EMPTY)
        cleared.append(pos)
    return ClearResult(
        points=len(cleared) * points_per_cell,
        cleared=cleared,
        created=created,
        created_tile=created_tile,
        activated=activated,
    )


def clear_and_score(board: Board, matched: Iterable[Position], preferred: Optional[Position] = None) -> int:
    """Clear matched cells and return the base points for this pass."""
    return resolve_clear(board, matched, preferred).points
