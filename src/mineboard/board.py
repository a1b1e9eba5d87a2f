"""
Board module for the rules engine.

A fixed-size grid of tiles plus the neighbor geometry over it. The board
stores state and answers geometric questions; it never decides whether a
game is won or lost.
"""
from typing import Iterator, List, Tuple

import numpy as np

from .errors import InvalidDimensions, OutOfBounds
from .tile import Tile


Position = Tuple[int, int]

_NEIGHBOR_OFFSETS = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Grid of tiles addressed by (row, col).

    Dimensions are fixed at construction and every in-bounds coordinate
    maps to exactly one tile for the lifetime of the board.
    """

    def __init__(self, height: int, width: int) -> None:
        """
        Create an empty board.

        Args:
            height: Number of rows.
            width: Number of columns.
        """
        if height < 1 or width < 1:
            raise InvalidDimensions(
                f"Board dimensions must be positive, got {height}x{width}"
            )
        self._height = height
        self._width = width
        self._grid: List[List[Tile]] = [
            [Tile() for _ in range(width)] for _ in range(height)
        ]

    def __repr__(self) -> str:
        return f"Board(height={self._height}, width={self._width})"

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    # ========================================================================
    # Addressing
    # ========================================================================

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self._height and 0 <= col < self._width

    def check_bounds(self, row: int, col: int) -> None:
        """Raise OutOfBounds if position is not on the board."""
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self._height, self._width)

    def tile_at(self, row: int, col: int) -> Tile:
        """Get the tile at a position."""
        self.check_bounds(row, col)
        return self._grid[row][col]

    def positions(self) -> Iterator[Position]:
        """Yield every position in row-major order."""
        for row in range(self._height):
            for col in range(self._width):
                yield row, col

    def all_tiles(self) -> List[Tile]:
        """Every tile, row-major, for bulk scans."""
        return [tile for grid_row in self._grid for tile in grid_row]

    # ========================================================================
    # Neighbor Utilities
    # ========================================================================

    def neighbor_positions(self, row: int, col: int) -> List[Position]:
        """
        Get in-bounds neighbor positions.

        Recomputed on every call; corners have 3 neighbors, edges 5 and
        interior tiles 8.

        Args:
            row: Row index of center tile.
            col: Column index of center tile.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        self.check_bounds(row, col)
        neighbors = []
        for delta_row, delta_col in _NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self.in_bounds(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    def neighbors_of(self, row: int, col: int) -> List[Tile]:
        """Get the tiles adjacent to a position."""
        return [
            self._grid[neighbor_row][neighbor_col]
            for neighbor_row, neighbor_col in self.neighbor_positions(row, col)
        ]

    # ========================================================================
    # Bulk Scans
    # ========================================================================

    def count_mines(self) -> int:
        """Number of mined tiles."""
        return sum(1 for tile in self.all_tiles() if tile.is_mine)

    def count_hidden(self) -> int:
        """Number of unrevealed tiles, flagged ones included."""
        return sum(1 for tile in self.all_tiles() if not tile.is_revealed)

    def count_flagged_neighbors(self, row: int, col: int) -> int:
        """Count flagged tiles adjacent to position."""
        return sum(1 for tile in self.neighbors_of(row, col) if tile.is_flagged)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self._height, self._width), dtype=np.int8)
        for row, col in self.positions():
            obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def reset(self) -> None:
        """Return every tile to its freshly built state."""
        for tile in self.all_tiles():
            tile.reset()
