"""Game orchestration: human moves, the delayed computer reply, and resets."""

from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, Tuple

from .ai import HARD, choose_move
from .game import Board
from .rules import (
    AI,
    ONGOING,
    PLAYER,
    Line,
    Player,
    classify,
    to_index,
    valid_coords,
    winning_line,
)

logger = logging.getLogger(__name__)

AI_THINK_DELAY: Tuple[float, float] = (0.1, 0.3)

Task = Callable[[], None]
Scheduler = Callable[[Task], None]


def run_in_thread(task: Task) -> None:
    """Default scheduler: run the computer turn on a daemon thread."""
    threading.Thread(target=task, name="tictactoe-ai", daemon=True).start()


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of everything the presentation layer renders."""

    board: Tuple[str, ...]
    current_player: Player
    status: str
    thinking: bool
    winning_line: Optional[Line]
    difficulty: Optional[str]
    started: bool

    @property
    def game_over(self) -> bool:
        return self.status != ONGOING


Listener = Callable[[GameSnapshot], None]


class GameEngine:
    """One human-vs-computer game. The human plays X, the computer O.

    Rejected operations return ``False`` and leave state untouched. The
    computer's reply runs as a scheduled task after a short random delay;
    while it is pending the engine refuses human moves, and a reset makes
    any pending task stale via the generation counter.
    """

    def __init__(
        self,
        think_delay: Tuple[float, float] = AI_THINK_DELAY,
        scheduler: Scheduler = run_in_thread,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.board = Board()
        self.think_delay = think_delay
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

        self.difficulty: Optional[str] = None
        self.previous_difficulty: Optional[str] = None
        self.started = False
        self.thinking = False
        self.winning_line: Optional[Line] = None
        self._generation = 0

    # ---- subscription ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a fresh snapshot after every mutation."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def state(self) -> GameSnapshot:
        with self._lock:
            return GameSnapshot(
                board=tuple(self.board.snapshot()),
                current_player=self.board.current_player,
                status=self.board.status,
                thinking=self.thinking,
                winning_line=self.winning_line,
                difficulty=self.difficulty,
                started=self.started,
            )

    def _publish(self) -> None:
        snapshot = self.state()
        for listener in list(self._listeners):
            listener(snapshot)

    # ---- lifecycle ----

    def start_game(self, difficulty: Optional[str] = HARD) -> None:
        with self._lock:
            self.board.reset()
            self.difficulty = difficulty
            self.previous_difficulty = difficulty
            self.started = True
            self.thinking = False
            self.winning_line = None
            self._generation += 1
            logger.info("Starting game with difficulty %s", difficulty)
            self._publish()

    def start_new_game(self) -> None:
        """Play again with the last selected difficulty."""
        self.start_game(self.previous_difficulty or HARD)

    def reset_game(self) -> None:
        with self._lock:
            self.board.reset()
            self.difficulty = None
            self.started = False
            self.thinking = False
            self.winning_line = None
            self._generation += 1
            logger.info("Game reset")
            self._publish()

    def set_difficulty(self, difficulty: str) -> bool:
        """Pick the difficulty up front; refused once a game is running."""
        with self._lock:
            if self.started:
                return False
            self.difficulty = difficulty
            self.previous_difficulty = difficulty
            self._publish()
            return True

    # ---- moves ----

    def apply_human_move(self, index: int, scheduler: Optional[Scheduler] = None) -> bool:
        """Place X at ``index`` and queue the computer's reply.

        ``scheduler`` overrides the engine's scheduler for this move only.
        """
        with self._lock:
            if self.board.is_game_over():
                logger.debug("Rejected move %s: game over", index)
                return False
            if self.board.current_player != PLAYER:
                logger.debug("Rejected move %s: not the player's turn", index)
                return False
            if self.thinking:
                logger.debug("Rejected move %s: computer move pending", index)
                return False
            if not self.board.place(index, PLAYER):
                logger.debug("Rejected move %s: illegal placement", index)
                return False

            self.board.switch_side()
            self._publish()
            if self._check_game_end():
                return True
            task = self._begin_ai_turn()

        self._dispatch(task, scheduler)
        return True

    def apply_human_move_at(
        self, row: int, col: int, scheduler: Optional[Scheduler] = None
    ) -> bool:
        if not valid_coords(row, col):
            logger.debug("Rejected move (%s, %s): off the board", row, col)
            return False
        return self.apply_human_move(to_index(row, col), scheduler)

    def request_ai_move(self, scheduler: Optional[Scheduler] = None) -> bool:
        """Start the computer's turn; a no-op if one is already pending."""
        with self._lock:
            if self.thinking or self.board.is_game_over():
                return False
            if self.board.current_player != AI:
                return False
            task = self._begin_ai_turn()

        self._dispatch(task, scheduler)
        return True

    # ---- helpers ----

    def _begin_ai_turn(self) -> Task:
        self.thinking = True
        self._publish()
        return partial(self._run_ai_turn, self._generation)

    def _dispatch(self, task: Task, scheduler: Optional[Scheduler]) -> None:
        try:
            (scheduler or self._scheduler)(task)
        except Exception:
            # Task was never queued
            with self._lock:
                self.thinking = False
                self._publish()
            raise

    def _run_ai_turn(self, generation: int) -> None:
        time.sleep(max(0.0, self._rng.uniform(*self.think_delay)))

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale computer move (generation %d)", generation)
                return
            try:
                if self.board.is_game_over() or self.board.current_player != AI:
                    return
                move = choose_move(
                    self.board.snapshot(), self.difficulty, player=AI, rng=self._rng
                )
                if move is not None and self.board.place(move, AI):
                    self.board.switch_side()
                    self._publish()
                    self._check_game_end()
            finally:
                self.thinking = False
                self._publish()

    def _check_game_end(self) -> bool:
        cells = self.board.snapshot()
        result = classify(cells)
        if result == ONGOING:
            return False

        self.board.status = result
        for player in (PLAYER, AI):
            line = winning_line(cells, player)
            if line:
                self.winning_line = line
                break
        logger.info("Game over: %s", result)
        self._publish()
        return True
