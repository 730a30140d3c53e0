"""Unit tests for board state management."""

from tictactoe.game import Board
from tictactoe.rules import AI, AI_WON, EMPTY, ONGOING, PLAYER


def test_initial_state():
    board = Board()
    assert board.cells == [EMPTY] * 9
    assert board.current_player == PLAYER
    assert board.status == ONGOING
    assert not board.is_game_over()
    assert board.available_moves() == list(range(9))


def test_place_by_index_and_coords():
    board = Board()
    assert board.place(4, PLAYER)
    assert board.place_at(0, 2, AI)
    assert board.get_cell(1, 1) == PLAYER
    assert board.get_cell_by_index(2) == AI
    assert board.is_occupied(0, 2)
    assert board.is_empty(2, 2)


def test_rejected_placements_leave_board_untouched():
    board = Board()
    board.place(0, PLAYER)
    before = board.snapshot()

    assert not board.place(0, AI)  # occupied
    assert not board.place(9, AI)  # out of range
    assert not board.place(-1, AI)
    assert not board.place(5, "Z")  # invalid marker
    assert not board.place(5, EMPTY)
    assert not board.place_at(3, 0, AI)
    assert not board.place_at(0, -1, AI)

    assert board.snapshot() == before
    assert board.current_player == PLAYER


def test_place_ignores_turn_and_status():
    board = Board()
    board.status = AI_WON
    assert board.place(3, AI)
    assert board.current_player == PLAYER


def test_switch_side_toggles():
    board = Board()
    board.switch_side()
    assert board.current_player == AI
    board.switch_side()
    assert board.current_player == PLAYER


def test_snapshot_is_independent_copy():
    board = Board()
    board.place(0, PLAYER)
    copy = board.snapshot()
    copy[0] = AI
    copy[1] = AI
    assert board.get_cell_by_index(0) == PLAYER
    assert board.get_cell_by_index(1) == EMPTY


def test_out_of_range_reads():
    board = Board()
    assert board.get_cell(3, 0) is None
    assert board.get_cell_by_index(9) is None
    assert not board.is_empty(-1, 0)
    assert not board.is_occupied(0, 3)


def test_is_full():
    board = Board()
    for i in range(9):
        board.place(i, PLAYER if i % 2 == 0 else AI)
    assert board.is_full()
    assert board.available_moves() == []


def test_reset_restores_initial_state():
    board = Board()
    board.place(0, PLAYER)
    board.switch_side()
    board.status = AI_WON
    board.reset()
    assert board.cells == [EMPTY] * 9
    assert board.current_player == PLAYER
    assert board.status == ONGOING


def test_coordinate_helpers():
    assert Board.to_index(2, 1) == 7
    assert Board.to_coords(5) == (1, 2)


def test_get_cell_by_index_rejects_non_int():
    board = Board()
    board.place(1, PLAYER)
    assert board.get_cell_by_index(True) is None
    assert board.get_cell_by_index("1") is None
    assert board.get_cell_by_index(1.0) is None
    assert board.get_cell_by_index(1) == PLAYER
