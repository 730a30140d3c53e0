"""Move selection for the computer side: uniform random and exhaustive minimax."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import math
import random

from .rules import (
    AI,
    EMPTY,
    Player,
    available_moves,
    is_full,
    opponent,
    winning_line,
)

EASY = "EASY"
HARD = "HARD"
DIFFICULTIES = (EASY, HARD)

WIN_SCORE = 10


@dataclass
class RandomAI:
    """Picks any empty cell with equal probability."""

    player: Player = AI
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def choose(self, cells: Sequence[str]) -> Optional[int]:
        moves = available_moves(cells)
        if not moves:
            return None
        return self.rng.choice(moves)


@dataclass
class MinimaxAI:
    """Full-depth minimax with alpha-beta pruning; never loses.

    Scores are from ``player``'s point of view: ``10 - depth`` for a win,
    ``depth - 10`` for a loss, 0 for a draw, so quick wins and slow losses
    are preferred.
    """

    player: Player = AI

    # ---- public API ----

    def choose(self, cells: Sequence[str]) -> Optional[int]:
        work: List[str] = list(cells)
        best_move: Optional[int] = None
        best_score = -math.inf

        for move in available_moves(work):
            work[move] = self.player
            score = self._minimax(work, 0, False, -math.inf, math.inf)
            work[move] = EMPTY

            # Strictly greater: ties keep the lowest index
            if score > best_score:
                best_score, best_move = score, move
        return best_move

    # ---- core search ----

    def _minimax(
        self,
        cells: List[str],
        depth: int,
        maximizing: bool,
        alpha: float,
        beta: float,
    ) -> float:
        me = self.player
        opp = opponent(me)

        # Terminal
        if winning_line(cells, me):
            return WIN_SCORE - depth
        if winning_line(cells, opp):
            return depth - WIN_SCORE
        if is_full(cells):
            return 0

        if maximizing:
            value = -math.inf
            for move in available_moves(cells):
                cells[move] = me
                score = self._minimax(cells, depth + 1, False, alpha, beta)
                cells[move] = EMPTY
                value = max(value, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
        else:
            value = math.inf
            for move in available_moves(cells):
                cells[move] = opp
                score = self._minimax(cells, depth + 1, True, alpha, beta)
                cells[move] = EMPTY
                value = min(value, score)
                beta = min(beta, score)
                if beta <= alpha:
                    break
        return value


def choose_move(
    cells: Sequence[str],
    difficulty: Optional[str],
    player: Player = AI,
    rng: Optional[random.Random] = None,
) -> Optional[int]:
    """Route to the strategy for ``difficulty``; unknown tokens play optimally."""
    if difficulty == EASY:
        return RandomAI(player=player, rng=rng or random.Random()).choose(cells)
    return MinimaxAI(player=player).choose(cells)
