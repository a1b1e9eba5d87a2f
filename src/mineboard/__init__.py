"""
Minesweeper rules engine.

Provides board state, mine generation, reveal logic and the game state
machine that a presentation layer drives.
"""
from .errors import (
    MinesweeperError,
    InvalidDimensions,
    InvalidMineCount,
    OutOfBounds,
    InsufficientSpace,
    UngenerableBoard,
)
from .config import GameConfig, BEGINNER, INTERMEDIATE, EXPERT
from .tile import Tile, TileState
from .board import Board
from .generator import MineGenerator, always_winnable
from .solver import NoGuessSolver, is_solvable_without_guessing
from .reveal import RevealEngine
from .game import EndState, Game, InputMode, TileView, new_game
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "MinesweeperError",
    "InvalidDimensions",
    "InvalidMineCount",
    "OutOfBounds",
    "InsufficientSpace",
    "UngenerableBoard",
    "GameConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "Tile",
    "TileState",
    "Board",
    "MineGenerator",
    "always_winnable",
    "NoGuessSolver",
    "is_solvable_without_guessing",
    "RevealEngine",
    "EndState",
    "Game",
    "InputMode",
    "TileView",
    "new_game",
    "MinesweeperEnv",
    "make_vec_env",
]
