"""
Exceptions raised by the rules engine.

Every error is raised before any board or game state is mutated, so a
rejected call leaves the game exactly as it was.
"""


class MinesweeperError(Exception):
    """Base class for all rules engine errors."""


class InvalidDimensions(MinesweeperError, ValueError):
    """Board height or width is not positive."""


class InvalidMineCount(MinesweeperError, ValueError):
    """Mine count is negative or leaves no safe tile."""


class OutOfBounds(MinesweeperError, IndexError):
    """Coordinate lies outside the board."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside a {height}x{width} board"
        )
        self.row = row
        self.col = col


class InsufficientSpace(MinesweeperError, ValueError):
    """More mines requested than tiles outside the safe starting area."""


class UngenerableBoard(MinesweeperError, RuntimeError):
    """Winnable-retry generation ran out of attempts."""
