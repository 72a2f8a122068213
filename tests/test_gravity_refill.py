import random

from rockswap.components.tile import EMPTY, Normal
from rockswap.systems.board_ops import GravityMove, collapse, refill
from tests.helpers import board_from_rows


def test_collapse_keeps_order_and_moves_empties_up():
    board = board_from_rows([
        "AB",
        ".C",
        "B.",
        ".D",
    ])
    moves = collapse(board)
    assert board.column(0) == [EMPTY, EMPTY, Normal(0), Normal(1)]
    assert board.column(1) == [EMPTY, Normal(1), Normal(2), Normal(3)]
    assert GravityMove(source=(2, 0), target=(3, 0), tile=Normal(1)) in moves
    assert GravityMove(source=(0, 0), target=(2, 0), tile=Normal(0)) in moves
    assert len(moves) == 4


def test_collapse_on_full_board_is_noop():
    board = board_from_rows(["AB", "CD"])
    before = board.snapshot()
    assert collapse(board) == []
    assert board.snapshot() == before


def test_refill_fills_only_empty_cells_with_normal_tiles():
    board = board_from_rows([
        "..",
        ".C",
        "AB",
    ], colors=4)
    spawned = refill(board, random.Random(7))
    assert spawned == [(0, 0), (0, 1), (1, 0)]
    for pos in spawned:
        tile = board.get(pos)
        assert isinstance(tile, Normal)
        assert 0 <= tile.color < 4
    assert board.get((2, 0)) == Normal(0)


def test_refill_is_reproducible_under_seed():
    rows = ["....", "....", "...."]
    first = board_from_rows(rows)
    second = board_from_rows(rows)
    refill(first, random.Random(42))
    refill(second, random.Random(42))
    assert first.snapshot() == second.snapshot()
