"""Pure rules for 3x3 tic-tac-toe: lines, legality, and result classification."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

Player = str  # "X" or "O"
Line = Tuple[int, int, int]

PLAYER: Player = "X"  # human, always moves first
AI: Player = "O"
EMPTY = " "

ONGOING = "ONGOING"
PLAYER_WON = "PLAYER_WON"
AI_WON = "AI_WON"
DRAW = "DRAW"

SIZE = 3
CELL_COUNT = SIZE * SIZE

WINNING_LINES: Tuple[Line, ...] = (
    # rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # diagonals
    (0, 4, 8),
    (2, 4, 6),
)


# ---------- Coordinates ----------


def to_index(row: int, col: int) -> int:
    return row * SIZE + col


def to_coords(index: int) -> Tuple[int, int]:
    return divmod(index, SIZE)


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < SIZE and 0 <= col < SIZE


def valid_coords(row: int, col: int) -> bool:
    """Both coordinates are plain ints inside the grid."""
    for v in (row, col):
        if not isinstance(v, int) or isinstance(v, bool):
            return False
    return in_bounds(row, col)


# ---------- Queries ----------


def opponent(player: Player) -> Player:
    return AI if player == PLAYER else PLAYER


def winner_status(player: Player) -> str:
    return PLAYER_WON if player == PLAYER else AI_WON


def available_moves(cells: Sequence[str]) -> List[int]:
    """Empty cell indices in ascending order."""
    return [i for i, c in enumerate(cells) if c == EMPTY]


def is_full(cells: Sequence[str]) -> bool:
    return all(c != EMPTY for c in cells)


def winning_line(cells: Sequence[str], player: Player) -> Optional[Line]:
    """Return the first line fully owned by ``player``, or ``None``."""
    for line in WINNING_LINES:
        a, b, c = line
        if cells[a] == player and cells[b] == player and cells[c] == player:
            return line
    return None


def is_draw(cells: Sequence[str]) -> bool:
    if winning_line(cells, PLAYER) or winning_line(cells, AI):
        return False
    return is_full(cells)


def valid_index(index: int) -> bool:
    """``index`` is a plain int addressing one of the nine cells."""
    if not isinstance(index, int) or isinstance(index, bool):
        return False
    return 0 <= index < CELL_COUNT


def is_legal_placement(cells: Sequence[str], index: int) -> bool:
    if not valid_index(index):
        return False
    return cells[index] == EMPTY


def is_legal_placement_at(cells: Sequence[str], row: int, col: int) -> bool:
    if not valid_coords(row, col):
        return False
    return cells[to_index(row, col)] == EMPTY


def find_winning_move(cells: Sequence[str], player: Player) -> Optional[int]:
    """Cell that would complete a line for ``player``, scanning lines in order.

    Only the first qualifying line is reported; a malformed board with two
    open completions returns whichever comes first in ``WINNING_LINES``.
    """
    for line in WINNING_LINES:
        trio = [cells[i] for i in line]
        if trio.count(player) == 2 and trio.count(EMPTY) == 1:
            return line[trio.index(EMPTY)]
    return None


def classify(cells: Sequence[str]) -> str:
    """Game result with fixed priority: X win, O win, draw, ongoing."""
    if winning_line(cells, PLAYER):
        return PLAYER_WON
    if winning_line(cells, AI):
        return AI_WON
    if is_draw(cells):
        return DRAW
    return ONGOING
