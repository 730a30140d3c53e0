"""Tic-tac-toe package exposing the rules engine, AI players, and the web application."""

from .ai import MinimaxAI, RandomAI, choose_move
from .engine import GameEngine, GameSnapshot
from .game import Board
from .ui import app

__all__ = [
    "Board",
    "GameEngine",
    "GameSnapshot",
    "MinimaxAI",
    "RandomAI",
    "app",
    "choose_move",
]
