"""Mutable board state: cells, side to move, and game status."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .rules import (
    AI,
    CELL_COUNT,
    EMPTY,
    ONGOING,
    PLAYER,
    Player,
    available_moves,
    is_full,
    is_legal_placement,
    opponent,
    to_coords,
    to_index,
    valid_coords,
    valid_index,
)


@dataclass
class Board:
    # Row-major: 'X', 'O', or ' ' (space) for empty
    cells: List[str] = field(default_factory=lambda: [EMPTY] * CELL_COUNT)
    current_player: Player = PLAYER
    status: str = ONGOING

    player_symbol = PLAYER
    ai_symbol = AI

    # ---- lifecycle ----

    def reset(self) -> None:
        self.cells = [EMPTY] * CELL_COUNT
        self.current_player = PLAYER
        self.status = ONGOING

    initialize = reset

    # ---- mutation ----

    def place(self, index: int, player: Player) -> bool:
        """Put ``player`` on ``index``; ``False`` and no change if not allowed.

        Turn order and game-over checks are left to the caller.
        """
        if player not in (PLAYER, AI):
            return False
        if not is_legal_placement(self.cells, index):
            return False
        self.cells[index] = player
        return True

    def place_at(self, row: int, col: int, player: Player) -> bool:
        if not valid_coords(row, col):
            return False
        return self.place(to_index(row, col), player)

    def switch_side(self) -> None:
        self.current_player = opponent(self.current_player)

    # ---- queries ----

    def snapshot(self) -> List[str]:
        return self.cells.copy()

    def is_game_over(self) -> bool:
        return self.status != ONGOING

    def get_cell(self, row: int, col: int) -> Optional[str]:
        if not valid_coords(row, col):
            return None
        return self.cells[to_index(row, col)]

    def get_cell_by_index(self, index: int) -> Optional[str]:
        if not valid_index(index):
            return None
        return self.cells[index]

    def is_empty(self, row: int, col: int) -> bool:
        return self.get_cell(row, col) == EMPTY

    def is_occupied(self, row: int, col: int) -> bool:
        return self.get_cell(row, col) in (PLAYER, AI)

    def is_full(self) -> bool:
        return is_full(self.cells)

    def available_moves(self) -> List[int]:
        return available_moves(self.cells)

    @staticmethod
    def to_index(row: int, col: int) -> int:
        return to_index(row, col)

    @staticmethod
    def to_coords(index: int) -> Tuple[int, int]:
        return to_coords(index)

