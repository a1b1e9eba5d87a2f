"""
Game configuration.

Holds the construction parameters of a game and validates them up front.
"""
from dataclasses import dataclass

from .errors import InvalidDimensions, InvalidMineCount


# ============================================================================
# Constants
# ============================================================================

DEFAULT_MAX_ATTEMPTS = 1000


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class GameConfig:
    """
    Configuration for a single game.

    Attributes:
        height: Number of rows.
        width: Number of columns.
        num_mines: Total mines to place.
        winnable_required: Regenerate until the winnability check passes.
        max_attempts: Cap on generation attempts when winnable_required.
    """

    height: int = 9
    width: int = 9
    num_mines: int = 10
    winnable_required: bool = False
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.height < 1 or self.width < 1:
            raise InvalidDimensions(
                f"Board dimensions must be positive, got "
                f"{self.height}x{self.width}"
            )
        if self.num_mines < 0:
            raise InvalidMineCount("Number of mines cannot be negative")
        if self.num_mines >= self.total_tiles:
            raise InvalidMineCount(
                f"Too many mines (max {self.total_tiles - 1})"
            )
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @property
    def total_tiles(self) -> int:
        """Number of tiles on the board."""
        return self.height * self.width


# Conventional board sizes
BEGINNER = GameConfig(9, 9, 10)
INTERMEDIATE = GameConfig(16, 16, 40)
EXPERT = GameConfig(16, 30, 99)
