from rockswap.systems.board_ops import find_all_matches, find_runs, scan_line, scan_matches
from tests.helpers import board_from_rows, filler_rows, parse_tile, plant


def line(text):
    return [parse_tile(ch) for ch in text]


def test_plain_triple_qualifies():
    assert scan_line(line("AAAB")) == [(0, 3, 0)]


def test_empty_breaks_runs():
    assert scan_line(line("AA.A")) == []
    assert scan_line(line("AA.AAA")) == [(3, 3, 0)]


def test_wildcard_adopts_following_color():
    assert scan_line(line("*AA")) == [(0, 3, 0)]


def test_all_wildcards_never_qualify():
    assert scan_line(line("***")) == []
    assert scan_line(line("********")) == []


def test_single_color_between_wildcards_qualifies():
    assert scan_line(line("*A*")) == [(0, 3, 0)]


def test_wildcard_does_not_bridge_two_colors():
    assert scan_line(line("A*B")) == []


def test_wildcards_stay_with_the_run_they_extend():
    assert scan_line(line("AA*BB")) == [(0, 3, 0)]
    assert scan_line(line("A**B")) == []
    assert scan_line(line("A***B")) == [(0, 4, 0)]
    assert scan_line(line("A**BBB")) == [(0, 3, 0), (3, 3, 1)]


def test_area_clear_matches_by_its_color():
    assert scan_line(line("aAA")) == [(0, 3, 0)]


def test_scan_unions_rows_and_columns():
    board = board_from_rows([
        "EEEA",
        "EBCD",
        "ECDB",
    ])
    assert scan_matches(board) == {(0, 0), (0, 1), (0, 2), (1, 0), (2, 0)}
    assert find_all_matches(board) == [[(0, 0), (0, 1), (0, 2), (1, 0), (2, 0)]]


def test_scan_is_deterministic():
    rows = plant(filler_rows(), 4, 0, "*EE")
    board = board_from_rows(rows)
    assert scan_matches(board) == scan_matches(board)
    assert scan_matches(board) == {(4, 0), (4, 1), (4, 2)}


def test_filler_board_has_no_runs():
    assert find_runs(board_from_rows(filler_rows())) == []


def test_runs_report_orientation_and_midpoint():
    rows = plant(filler_rows(), 2, 1, "FFFFF")
    runs = find_runs(board_from_rows(rows))
    assert len(runs) == 1
    run = runs[0]
    assert run.horizontal and run.line == 2 and run.start == 1 and run.length == 5
    assert run.midpoint() == (2, 3)
    assert run.contains((2, 5)) and not run.contains((3, 3))
