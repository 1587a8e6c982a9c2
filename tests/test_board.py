"""Unit tests for the ImpossibleXO board."""

import pytest

from impossiblexo.board import Board, Mark


def test_new_board_is_blank():
    board = Board()
    assert board.size == 3
    assert board.spaces == [Mark.BLANK] * 9
    assert board.spaces_with_mark(Board.BLANK) == list(range(9))


def test_make_mark_and_query_by_mark():
    board = Board()
    board.make_mark(4, Mark.X)
    board.make_mark(0, Mark.O)
    assert board.spaces_with_mark(Mark.X) == [4]
    assert board.spaces_with_mark(Mark.O) == [0]
    assert not board.is_available_space(4)
    assert board.is_available_space(8)


def test_make_mark_can_reset_to_blank():
    board = Board()
    board.make_mark(2, Mark.X)
    board.make_mark(2, Board.BLANK)
    assert board.is_available_space(2)


def test_out_of_range_spaces():
    board = Board()
    assert not board.is_available_space(9)
    assert not board.is_available_space(-1)
    with pytest.raises(IndexError):
        board.make_mark(9, Mark.X)


@pytest.mark.parametrize(
    "line",
    [(0, 1, 2), (3, 4, 5), (6, 7, 8), (0, 3, 6), (1, 4, 7), (2, 5, 8), (0, 4, 8), (2, 4, 6)],
)
def test_winning_solution_detects_every_line(line):
    board = Board()
    for index in line:
        board.make_mark(index, Mark.O)
    assert board.winning_solution(Mark.O)
    assert not board.winning_solution(Mark.X)


def test_blank_never_wins():
    assert not Board().winning_solution(Board.BLANK)


def test_full_board_without_winner():
    board = Board()
    for index in (1, 4, 6, 8):
        board.make_mark(index, Mark.X)
    for index in (0, 2, 3, 5, 7):
        board.make_mark(index, Mark.O)
    assert board.is_full()
    assert not board.winning_solution(Mark.X)
    assert not board.winning_solution(Mark.O)


def test_larger_board_lines():
    board = Board(4)
    assert len(board.spaces) == 16
    assert len(board.winning_lines) == 10
    for index in (3, 6, 9, 12):
        board.make_mark(index, Mark.X)
    assert board.winning_solution(Mark.X)


def test_rejects_tiny_boards():
    with pytest.raises(ValueError):
        Board(2)


def test_mark_opposite():
    assert Mark.X.opposite is Mark.O
    assert Mark.O.opposite is Mark.X
    assert Mark.BLANK.opposite is Mark.BLANK
