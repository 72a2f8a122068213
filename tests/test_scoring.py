from rockswap.components.game_session import WildcardActivation
from rockswap.components.tile import EMPTY, Normal, Special, SpecialKind
from rockswap.constants import POINTS_PER_CELL
from rockswap.systems.board_ops import activation_cells, scan_matches
from rockswap.systems.scoring import clear_and_score, resolve_clear, scoring_summary
from tests.helpers import board_from_rows, filler_rows, plant


def specials_on(board):
    return [pos for pos in board.positions() if isinstance(board.get(pos), Special)]


def test_four_run_creates_area_clear_at_swap_destination():
    board = board_from_rows(plant(filler_rows(), 3, 2, "FFFF"))
    points = clear_and_score(board, scan_matches(board), (3, 4))
    assert points == 3 * POINTS_PER_CELL
    assert board.get((3, 4)) == Special(5, SpecialKind.AREA_CLEAR)
    for col in (2, 3, 5):
        assert board.get((3, col)) == EMPTY


def test_four_run_without_preferred_uses_second_cell():
    board = board_from_rows(plant(filler_rows(), 3, 2, "FFFF"))
    result = resolve_clear(board, scan_matches(board))
    assert result.created == (3, 3)
    assert board.get((3, 3)) == Special(5, SpecialKind.AREA_CLEAR)


def test_preferred_outside_run_is_ignored():
    board = board_from_rows(plant(filler_rows(), 3, 2, "FFFF"))
    result = resolve_clear(board, scan_matches(board), (6, 6))
    assert result.created == (3, 3)


def test_five_run_creates_wildcard():
    board = board_from_rows(plant(filler_rows(), 2, 1, "FFFFF"))
    result = resolve_clear(board, scan_matches(board))
    assert result.created == (2, 3)
    assert board.get((2, 3)) == Special(5, SpecialKind.WILDCARD)
    assert result.points == 4 * POINTS_PER_CELL


def test_five_run_honours_preferred_cell():
    board = board_from_rows(plant(filler_rows(), 2, 1, "FFFFF"))
    result = resolve_clear(board, scan_matches(board), (2, 5))
    assert result.created == (2, 5)
    assert board.get((2, 5)).kind is SpecialKind.WILDCARD


def test_only_one_special_per_call():
    rows = plant(filler_rows(), 1, 0, "EEEE")
    rows = plant(rows, 5, 2, "FFFF")
    board = board_from_rows(rows)
    result = resolve_clear(board, scan_matches(board))
    assert specials_on(board) == [(1, 1)]
    assert result.created == (1, 1)
    assert len(result.cleared) == 7


def test_ineligible_first_run_skips_special_creation():
    rows = plant(filler_rows(), 1, 0, "EEEE")
    rows = plant(rows, 5, 2, "FFFF")
    board = board_from_rows(rows)
    matched = scan_matches(board) - {(1, 1)}
    result = resolve_clear(board, matched)
    assert result.created is None
    assert specials_on(board) == []
    assert board.get((1, 1)) == Normal(4)
    assert len(result.cleared) == 7


def test_wildcards_between_two_colors_only_join_the_first_run():
    board = board_from_rows(plant(filler_rows(), 0, 0, "EE**FF"))
    result = resolve_clear(board, scan_matches(board))
    assert result.created == (0, 1)
    assert set(result.cleared) == {(0, 0), (0, 2), (0, 3)}
    assert board.get((0, 4)) == Normal(5) and board.get((0, 5)) == Normal(5)
    assert result.points == 3 * POINTS_PER_CELL


def test_new_special_survives_neighbouring_blast():
    board = board_from_rows(plant(filler_rows(), 3, 2, "fFFF"))
    result = resolve_clear(board, scan_matches(board))
    assert result.created == (3, 3)
    assert (3, 3) not in result.cleared
    assert board.get((3, 3)) == Special(5, SpecialKind.AREA_CLEAR)
    assert result.activated == [(3, 2)]
    assert result.points == 10 * POINTS_PER_CELL


def test_consumed_area_clear_takes_its_neighbourhood():
    board = board_from_rows(plant(filler_rows(), 3, 3, "eEE"))
    result = resolve_clear(board, scan_matches(board))
    assert result.created is None
    assert result.activated == [(3, 3)]
    expected = {(r, c) for r in (2, 3, 4) for c in (2, 3, 4)} | {(3, 5)}
    assert set(result.cleared) == expected
    assert result.points == 10 * POINTS_PER_CELL


def test_area_clear_is_clipped_at_corner():
    board = board_from_rows(plant(filler_rows(), 0, 0, "eEE"))
    result = resolve_clear(board, scan_matches(board))
    expected = {(0, 0), (0, 1), (0, 2), (1, 0), (1, 1)}
    assert set(result.cleared) == expected


def test_matched_wildcard_wipes_partner_color():
    rows = plant(filler_rows(), 0, 0, "*EE")
    rows = plant(rows, 7, 7, "E")
    board = board_from_rows(rows)
    result = resolve_clear(board, scan_matches(board))
    assert set(result.cleared) == {(0, 0), (0, 1), (0, 2), (7, 7)}
    assert result.points == 4 * POINTS_PER_CELL


def test_triggered_wipe_chains_into_area_clear():
    rows = plant(filler_rows(), 0, 0, "*E")
    rows = plant(rows, 5, 5, "e")
    board = board_from_rows(rows)
    activation = WildcardActivation(origin=(0, 0), partner=(0, 1), target_color=4)
    result = resolve_clear(board, activation_cells(board, activation), triggered=True)
    assert result.created is None
    assert result.activated == [(0, 0), (5, 5)]
    assert result.points == 11 * POINTS_PER_CELL
    assert board.get((4, 4)) == EMPTY and board.get((6, 6)) == EMPTY


def test_double_wildcard_clears_whole_board():
    board = board_from_rows(plant(filler_rows(), 0, 0, "**"))
    activation = WildcardActivation(origin=(0, 1), partner=(0, 0), target_color=None)
    cells = activation_cells(board, activation)
    points = resolve_clear(board, cells, triggered=True).points
    assert points == 64 * POINTS_PER_CELL
    assert all(board.get(pos) == EMPTY for pos in board.positions())


def test_empty_match_set_is_noop():
    board = board_from_rows(filler_rows())
    before = board.snapshot()
    assert clear_and_score(board, []) == 0
    assert clear_and_score(board, [(9, 9), (-1, 0)]) == 0
    assert board.snapshot() == before


def test_clears_only_non_empty_cells():
    board = board_from_rows(plant(filler_rows(), 0, 0, "..A"))
    assert clear_and_score(board, [(0, 0), (0, 1), (0, 2)]) == POINTS_PER_CELL
    assert board.get((0, 2)) == EMPTY


def test_scoring_summary_mentions_points_per_cell():
    assert f"{POINTS_PER_CELL} pts/cell" in scoring_summary()
    assert Normal(0) != Special(0, SpecialKind.AREA_CLEAR)
