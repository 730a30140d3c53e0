"""Tests for the random and minimax AI players."""

import random
import time

from tictactoe.ai import EASY, HARD, MinimaxAI, RandomAI, choose_move
from tictactoe.rules import AI, AI_WON, DRAW, EMPTY, ONGOING, PLAYER, PLAYER_WON, classify


def board_from(text):
    return [EMPTY if ch == "." else ch for ch in text]


def test_ai_takes_immediate_win():
    cells = board_from("XX.OO.X..")
    assert MinimaxAI(player=AI).choose(cells) == 5


def test_ai_prefers_win_over_block():
    # X threatens 2, but O can finish the middle row at 5
    cells = board_from("XX.OO...X")
    assert MinimaxAI(player=AI).choose(cells) == 5


def test_ai_wins_with_the_completion_that_also_blocks():
    # O can finish the diagonal at 2 or the middle row at 5; 2 also stops X's only threat
    cells = board_from("XX.OO.OXX")
    move = MinimaxAI(player=AI).choose(cells)
    assert move == 2
    cells[move] = AI
    assert classify(cells) == AI_WON


def test_ai_blocks_threat():
    cells = board_from("XX.O.....")
    assert MinimaxAI(player=AI).choose(cells) == 2


def test_ai_answers_corner_with_center():
    cells = board_from("X........")
    assert MinimaxAI(player=AI).choose(cells) == 4


def test_ai_does_not_mutate_input():
    cells = board_from("X...O....")
    before = list(cells)
    MinimaxAI(player=PLAYER).choose(cells)
    RandomAI(player=PLAYER, rng=random.Random(1)).choose(cells)
    assert cells == before


def test_ai_returns_none_on_full_board():
    cells = board_from("XOXXOOOXX")
    assert MinimaxAI(player=AI).choose(cells) is None
    assert RandomAI(player=AI).choose(cells) is None


def test_minimax_scores_terminal_positions():
    ai = MinimaxAI(player=AI)
    assert ai._minimax(board_from("XX.OOOX.."), 0, False, float("-inf"), float("inf")) == 10
    assert ai._minimax(board_from("XXXOO...."), 2, True, float("-inf"), float("inf")) == -8
    assert ai._minimax(board_from("XOXXOOOXX"), 0, True, float("-inf"), float("inf")) == 0


def test_optimal_self_play_is_a_draw():
    cells = [EMPTY] * 9
    players = {PLAYER: MinimaxAI(player=PLAYER), AI: MinimaxAI(player=AI)}
    side = PLAYER
    while classify(cells) == ONGOING:
        move = players[side].choose(cells)
        cells[move] = side
        side = AI if side == PLAYER else PLAYER
    assert classify(cells) == DRAW


def test_optimal_never_loses_to_random():
    rng = random.Random(42)
    for _ in range(20):
        cells = [EMPTY] * 9
        side = PLAYER
        while classify(cells) == ONGOING:
            if side == PLAYER:
                move = RandomAI(player=PLAYER, rng=rng).choose(cells)
            else:
                move = MinimaxAI(player=AI).choose(cells)
            cells[move] = side
            side = AI if side == PLAYER else PLAYER
        assert classify(cells) != PLAYER_WON


def test_random_returns_only_empty_slot():
    cells = board_from("XOXX.OOXO")
    for seed in range(10):
        assert RandomAI(rng=random.Random(seed)).choose(cells) == 4


def test_random_picks_varied_legal_moves():
    cells = board_from("X..O.....")
    rng = random.Random(7)
    picks = {RandomAI(rng=rng).choose(cells) for _ in range(50)}
    assert picks <= {1, 2, 4, 5, 6, 7, 8}
    assert len(picks) > 2


def test_random_is_fast():
    start = time.perf_counter()
    RandomAI().choose([EMPTY] * 9)
    assert time.perf_counter() - start < 0.01


def test_minimax_is_fast_after_opening():
    start = time.perf_counter()
    MinimaxAI(player=AI).choose(board_from("X........"))
    assert time.perf_counter() - start < 0.5


def test_minimax_is_fast_on_empty_board():
    for player in (PLAYER, AI):
        start = time.perf_counter()
        MinimaxAI(player=player).choose([EMPTY] * 9)
        assert time.perf_counter() - start < 0.5


def test_dispatch_routes_by_difficulty():
    cells = board_from("XX.O.....")
    assert choose_move(cells, HARD) == 2
    assert choose_move(board_from("XOXX.OOXO"), EASY) == 4


def test_dispatch_defaults_to_optimal():
    cells = board_from("XX.O.....")
    assert choose_move(cells, "hard") == 2
    assert choose_move(cells, "NIGHTMARE") == 2
    assert choose_move(cells, None) == 2
