from __future__ import annotations

from typing import Sequence

from rockswap.components.board import Board
from rockswap.components.tile import EMPTY, Normal, Special, SpecialKind, Tile

LETTERS = "ABCDEF"


def parse_tile(token: str) -> Tile:
    """'.' empty, '*' wildcard, 'A'-'F' normal colors, 'a'-'f' area-clear tiles."""
    if token == ".":
        return EMPTY
    if token == "*":
        return Special(0, SpecialKind.WILDCARD)
    if token.isupper():
        return Normal(LETTERS.index(token))
    return Special(LETTERS.index(token.upper()), SpecialKind.AREA_CLEAR)


def board_from_rows(rows: Sequence[str], colors: int = 6) -> Board:
    cells = [[parse_tile(ch) for ch in line] for line in rows]
    return Board(rows=len(cells), cols=len(cells[0]), colors=colors, cells=cells)


def load_rows(board: Board, rows: Sequence[str]) -> None:
    """Overwrite a board in place from row strings of matching size."""
    assert len(rows) == board.rows
    for r, line in enumerate(rows):
        assert len(line) == board.cols
        for c, ch in enumerate(line):
            board.set((r, c), parse_tile(ch))


def filler_rows(rows: int = 8, cols: int = 8) -> list[str]:
    """Run-free layout using only colors A-D, so E and F can be planted freely.

    Cells one and two steps apart in any line always differ, so a planted
    wildcard never completes a run with the filler around it.
    """
    return ["".join(LETTERS[(r + c) % 4] for c in range(cols)) for r in range(rows)]


def stalemate_rows(rows: int = 5, cols: int = 5) -> list[str]:
    """Three-color diagonal stripes: no matches and no legal move."""
    return ["".join(LETTERS[(r + c) % 3] for c in range(cols)) for r in range(rows)]


def plant(rows: list[str], row: int, col: int, text: str) -> list[str]:
    """Return a copy of rows with text written horizontally at (row, col)."""
    out = list(rows)
    line = out[row]
    out[row] = line[:col] + text + line[col + len(text):]
    return out


def count_color(board: Board, color: int) -> int:
    total = 0
    for pos in board.positions():
        tile = board.get(pos)
        if isinstance(tile, Normal) and tile.color == color:
            total += 1
    return total
