from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from rockswap.components.board import Board
from rockswap.components.game_session import WildcardActivation
from rockswap.components.tile import (
    EMPTY,
    Normal,
    Tile,
    is_empty,
    is_wildcard,
    match_color,
)
from rockswap.constants import MAX_BOARD_ATTEMPTS, MIN_RUN_LENGTH

Position = Tuple[int, int]
LineRun = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class Run:
    """Maximal line of compatible tiles with an adopted color."""
    horizontal: bool
    line: int
    start: int
    length: int
    color: int

    def positions(self) -> List[Position]:
        if self.horizontal:
            return [(self.line, self.start + i) for i in range(self.length)]
        return [(self.start + i, self.line) for i in range(self.length)]

    def contains(self, pos: Position) -> bool:
        row, col = pos
        if self.horizontal:
            return row == self.line and self.start <= col < self.start + self.length
        return col == self.line and self.start <= row < self.start + self.length

    def midpoint(self) -> Position:
        index = self.start + (self.length - 1) // 2
        return (self.line, index) if self.horizontal else (index, self.line)


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    tile: Tile


def _rng(rng: random.Random | None):
    return rng if rng is not None else random


# ----------------------------------------------------------------------------
# Run scanning
# ----------------------------------------------------------------------------

def scan_line(tiles: Sequence[Tile]) -> List[LineRun]:
    """Return (start, length, color) for every qualifying run in one line.

    Empty cells break runs. Wildcards extend any run; the first non-wildcard
    tile fixes the run's color. A stretch made only of wildcards never counts.
    Wildcards belong to the run they extend; the next run starts at the tile
    that broke it.
    """
    runs: List[LineRun] = []
    n = len(tiles)
    i = 0
    while i < n:
        if is_empty(tiles[i]):
            i += 1
            continue
        start = i
        color: Optional[int] = None
        while i < n:
            tile = tiles[i]
            if is_empty(tile):
                break
            tile_color = match_color(tile)
            if tile_color is not None:
                if color is None:
                    color = tile_color
                elif tile_color != color:
                    break
            i += 1
        if color is not None and i - start >= MIN_RUN_LENGTH:
            runs.append((start, i - start, color))
    return runs


def find_runs(board: Board) -> List[Run]:
    """All runs on the board: rows top-to-bottom, then columns left-to-right."""
    runs: List[Run] = []
    for row in range(board.rows):
        for start, length, color in scan_line(board.row(row)):
            runs.append(Run(horizontal=True, line=row, start=start, length=length, color=color))
    for col in range(board.cols):
        for start, length, color in scan_line(board.column(col)):
            runs.append(Run(horizontal=False, line=col, start=start, length=length, color=color))
    return runs


def scan_matches(board: Board) -> Set[Position]:
    """Every cell that belongs to at least one run."""
    matched: Set[Position] = set()
    for run in find_runs(board):
        matched.update(run.positions())
    return matched


def find_all_matches(board: Board) -> List[List[Position]]:
    """Matched cells merged into connected groups (overlapping runs join)."""
    matches = [run.positions() for run in find_runs(board)]
    if not matches:
        return []
    groups = [set(m) for m in matches]
    merged: List[Set[Position]] = []
    while groups:
        first = groups.pop()
        changed = True
        while changed:
            changed = False
            for g in groups[:]:
                if first & g:
                    first |= g
                    groups.remove(g)
                    changed = True
        merged.append(first)
    return sorted(sorted(group) for group in merged)


def _has_run_through(board: Board, pos: Position) -> bool:
    row, col = pos
    for start, length, _ in scan_line(board.row(row)):
        if start <= col < start + length:
            return True
    for start, length, _ in scan_line(board.column(col)):
        if start <= row < start + length:
            return True
    return False


# ----------------------------------------------------------------------------
# Swapping
# ----------------------------------------------------------------------------

def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return abs(ar - br) + abs(ac - bc) == 1


def _exchange(board: Board, a: Position, b: Position) -> None:
    tile_a = board.get(a)
    board.set(a, board.get(b))
    board.set(b, tile_a)


def try_swap(board: Board, a: Position, b: Position) -> bool:
    """Swap two adjacent tiles if the move is legal.

    A swap involving a wildcard is always legal. Any other swap must leave a run
    passing through one of the two cells. Rejected swaps leave the board untouched.
    """
    if not (board.in_bounds(a) and board.in_bounds(b)):
        return False
    a, b = tuple(a), tuple(b)
    if not is_adjacent(a, b):
        return False
    if is_empty(board.get(a)) or is_empty(board.get(b)):
        return False
    _exchange(board, a, b)
    if is_wildcard(board.get(a)) or is_wildcard(board.get(b)):
        return True
    if _has_run_through(board, a) or _has_run_through(board, b):
        return True
    _exchange(board, a, b)
    return False


def detect_wildcard_activation(board: Board, a: Position, b: Position) -> WildcardActivation | None:
    """Inspect two just-swapped cells and describe the wildcard trigger, if any."""
    tile_a = board.get(a)
    tile_b = board.get(b)
    if is_wildcard(tile_a) and is_wildcard(tile_b):
        return WildcardActivation(origin=tuple(b), partner=tuple(a), target_color=None)
    if is_wildcard(tile_b) and not is_empty(tile_a):
        return WildcardActivation(origin=tuple(b), partner=tuple(a), target_color=tile_a.color)
    if is_wildcard(tile_a) and not is_empty(tile_b):
        return WildcardActivation(origin=tuple(a), partner=tuple(b), target_color=tile_b.color)
    return None


def activation_cells(board: Board, activation: WildcardActivation) -> Set[Position]:
    """Match set for a wildcard trigger: the wildcard plus every target-colored tile."""
    if activation.full_board:
        return {pos for pos in board.positions() if not is_empty(board.get(pos))}
    cells = {activation.origin}
    for pos in board.positions():
        if match_color(board.get(pos)) == activation.target_color:
            cells.add(pos)
    return cells


def iter_valid_swaps(board: Board) -> Iterator[Tuple[Position, Position]]:
    scratch = board.copy()
    for row in range(board.rows):
        for col in range(board.cols):
            pos = (row, col)
            for other in ((row, col + 1), (row + 1, col)):
                if not scratch.in_bounds(other):
                    continue
                if try_swap(scratch, pos, other):
                    _exchange(scratch, pos, other)
                    yield (pos, other)


def find_valid_swaps(board: Board) -> List[Tuple[Position, Position]]:
    """Enumerate adjacent swaps that would be accepted."""
    return list(iter_valid_swaps(board))


def has_valid_move(board: Board) -> bool:
    return next(iter_valid_swaps(board), None) is not None


# ----------------------------------------------------------------------------
# Gravity & refill
# ----------------------------------------------------------------------------

def collapse(board: Board) -> List[GravityMove]:
    """Drop tiles down each column over empty cells, keeping their order."""
    moves: List[GravityMove] = []
    for col in range(board.cols):
        write_row = board.rows - 1
        for row in range(board.rows - 1, -1, -1):
            tile = board.cells[row][col]
            if is_empty(tile):
                continue
            if row != write_row:
                board.cells[write_row][col] = tile
                moves.append(GravityMove(source=(row, col), target=(write_row, col), tile=tile))
            write_row -= 1
        for row in range(write_row, -1, -1):
            board.cells[row][col] = EMPTY
    return moves


def refill(board: Board, rng: random.Random | None = None) -> List[Position]:
    """Fill every empty cell with a random normal tile. Matches are allowed."""
    chooser = _rng(rng)
    spawned: List[Position] = []
    for pos in board.positions():
        if not is_empty(board.get(pos)):
            continue
        board.set(pos, Normal(chooser.randrange(board.colors)))
        spawned.append(pos)
    return spawned


# ----------------------------------------------------------------------------
# Board generation
# ----------------------------------------------------------------------------

def respawn_full_board(
    board: Board,
    *,
    rng: random.Random | None = None,
    max_attempts: int = MAX_BOARD_ATTEMPTS,
) -> List[Position]:
    """Fill the entire board with fresh tiles that contain no matches and at least one valid move."""
    chooser = _rng(rng)
    choices = list(range(board.colors))
    if not choices or board.rows == 0 or board.cols == 0:
        return []
    for _ in range(max_attempts):
        layout: List[List[int]] = []
        valid_layout = True
        for row in range(board.rows):
            row_values: List[int] = []
            for col in range(board.cols):
                available = list(choices)
                if col >= 2:
                    left1 = row_values[col - 1]
                    left2 = row_values[col - 2]
                    if left1 == left2 and left1 in available:
                        available = [c for c in available if c != left1]
                if row >= 2:
                    up1 = layout[row - 1][col]
                    up2 = layout[row - 2][col]
                    if up1 == up2 and up1 in available:
                        available = [c for c in available if c != up1]
                if not available:
                    valid_layout = False
                    break
                row_values.append(chooser.choice(available))
            if not valid_layout:
                break
            layout.append(row_values)
        if not valid_layout or len(layout) != board.rows:
            continue

        for row in range(board.rows):
            for col in range(board.cols):
                board.cells[row][col] = Normal(layout[row][col])

        if scan_matches(board):
            continue
        if not has_valid_move(board):
            continue
        return list(board.positions())

    raise RuntimeError("Unable to respawn board without matches and valid swaps")


def create_initial_board(
    rows: int,
    cols: int,
    colors: int,
    *,
    rng: random.Random | None = None,
    max_attempts: int = MAX_BOARD_ATTEMPTS,
) -> Board:
    board = Board(rows=rows, cols=cols, colors=colors)
    respawn_full_board(board, rng=rng, max_attempts=max_attempts)
    return board
