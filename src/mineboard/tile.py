"""
Tile module for the rules engine.

A tile is the smallest unit of board state: whether it holds a mine,
how many of its neighbors do, and whether the player has revealed or
flagged it.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class TileState(Enum):
    """Player-visible states of a tile."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass
class Tile:
    """
    A single tile in the grid.

    Attributes:
        is_mine: Whether this tile holds a mine.
        adjacent_mines: Count of mines among the neighbors (0-8). Only
            meaningful once mine placement has finished.
        state: Hidden, revealed or flagged.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: TileState = TileState.HIDDEN

    def plant_mine(self) -> None:
        """Put a mine on this tile."""
        self.is_mine = True

    def remove_mine(self) -> None:
        """Take the mine off this tile."""
        self.is_mine = False

    def reveal(self) -> bool:
        """
        Reveal this tile.

        Returns:
            True if the tile went from hidden to revealed, False if it was
            already revealed or is flagged.
        """
        if self.state != TileState.HIDDEN:
            return False
        self.state = TileState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle the flag on this tile.

        Returns:
            True if the flag was toggled, False if the tile is revealed.
        """
        if self.state == TileState.REVEALED:
            return False
        if self.state == TileState.HIDDEN:
            self.state = TileState.FLAGGED
        else:
            self.state = TileState.HIDDEN
        return True

    def reset(self) -> None:
        """Return to the state of a freshly built tile."""
        self.is_mine = False
        self.adjacent_mines = 0
        self.state = TileState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if tile is hidden and unflagged."""
        return self.state == TileState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if tile is revealed."""
        return self.state == TileState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if tile is flagged."""
        return self.state == TileState.FLAGGED

    @property
    def is_empty(self) -> bool:
        """Revealed, not a mine, and no mined neighbors."""
        return self.is_revealed and not self.is_mine and self.adjacent_mines == 0

    def to_observation(self) -> int:
        """
        Convert tile to a numeric observation value.

        Returns:
            -1: Hidden tile
            -2: Flagged tile
            0-8: Revealed tile with adjacent mine count
            9: Revealed mine
        """
        if self.state == TileState.HIDDEN:
            return -1
        if self.state == TileState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines
