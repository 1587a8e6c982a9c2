"""ImpossibleXO package exposing the minimax engine, players, and the web application."""

from .board import Board, Mark
from .cache import MinimaxCache
from .game import Game
from .minimax import Minimax
from .players import DumbComputer, Human, ImpossibleComputer
from .ui import app

__all__ = [
    "Board",
    "DumbComputer",
    "Game",
    "Human",
    "ImpossibleComputer",
    "Mark",
    "Minimax",
    "MinimaxCache",
    "app",
]
