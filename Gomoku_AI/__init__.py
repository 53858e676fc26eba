"""Gomoku_AI package exports."""

from .Board import Board, BLACK, WHITE, EMPTY
from .Omokgame import Omokgame
from .Player import Player, HumanPlayer
from .AiPlayer import AiPlayer
from .ai.orchestrator import MoveOrchestrator, choose_move

# Subpackages for rule engine, AI search, and helpers
from . import ai, engine, utils

__all__ = [
    "Board",
    "BLACK",
    "WHITE",
    "EMPTY",
    "Omokgame",
    "Player",
    "HumanPlayer",
    "AiPlayer",
    "MoveOrchestrator",
    "choose_move",
    "ai",
    "engine",
    "utils",
]
