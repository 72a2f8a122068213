import random

import pytest

from rockswap.components.tile import Normal
from rockswap.events.bus import EventBus
from rockswap.systems.board import BoardSystem
from rockswap.systems.board_ops import create_initial_board, find_runs, has_valid_move
from rockswap.world import create_world


def has_straight_triple(board):
    for line in [board.row(r) for r in range(board.rows)] + [board.column(c) for c in range(board.cols)]:
        for i in range(len(line) - 2):
            if line[i] == line[i + 1] == line[i + 2]:
                return True
    return False


@pytest.mark.parametrize("seed", range(20))
def test_generated_boards_have_no_runs(seed):
    board = create_initial_board(8, 8, 6, rng=random.Random(seed))
    assert all(isinstance(board.get(pos), Normal) for pos in board.positions())
    assert not has_straight_triple(board)
    assert find_runs(board) == []
    assert has_valid_move(board)


def test_initial_board_has_no_matches():
    bus = EventBus(); world = create_world(bus); board = BoardSystem(world, bus, 8, 8)
    assert not has_straight_triple(board.board), 'Initial board should not contain any matches'


def test_generator_gives_up_when_impossible():
    with pytest.raises(RuntimeError):
        create_initial_board(3, 3, 1, rng=random.Random(0), max_attempts=5)
