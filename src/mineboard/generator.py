"""
Mine layout generation.

Places mines on a board while keeping the first clicked tile and its
neighbors clear, optionally retrying until a winnability check passes.
"""
import logging
import random
from typing import Callable, List, Optional

from .board import Board, Position
from .config import DEFAULT_MAX_ATTEMPTS
from .errors import InsufficientSpace, UngenerableBoard


logger = logging.getLogger(__name__)

WinnabilityCheck = Callable[[Board, Position], bool]


def always_winnable(board: Board, start: Position) -> bool:
    """Winnability check that accepts every layout."""
    return True


# ============================================================================
# Generator
# ============================================================================

class MineGenerator:
    """
    Generates mine layouts with a safe starting area.

    Attributes:
        rng: Random source used for mine selection.
        max_attempts: Upper bound on placements tried by the retry loop.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        """
        Initialize the generator.

        Args:
            rng: Random source (default: a fresh random.Random()).
            max_attempts: Attempt cap for winnable-retry generation.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def generate(
        self,
        board: Board,
        start: Position,
        num_mines: int,
        is_winnable: Optional[WinnabilityCheck] = None,
    ) -> int:
        """
        Place exactly num_mines mines outside the starting area.

        Args:
            board: Board to fill. Any existing mines are cleared first.
            start: (row, col) that must stay safe along with its neighbors.
            num_mines: Number of mines to place.
            is_winnable: Optional check; the layout is regenerated until it
                returns True.

        Returns:
            Number of placements it took to satisfy the check.

        Raises:
            InsufficientSpace: Not enough tiles outside the starting area.
            UngenerableBoard: The check never passed within max_attempts.
        """
        candidates = self._get_valid_mine_positions(board, start)
        if num_mines > len(candidates):
            raise InsufficientSpace(
                f"Cannot place {num_mines} mines: only {len(candidates)} "
                f"tiles lie outside the starting area around {start}"
            )

        check = is_winnable or always_winnable
        for attempt in range(1, self.max_attempts + 1):
            self.clear_mines(board)
            self._place_mines(board, candidates, num_mines)
            self.update_counts(board)
            if check(board, start):
                logger.debug(
                    "Placed %d mines on %r after %d attempt(s)",
                    num_mines, board, attempt,
                )
                return attempt
            logger.warning(
                "Layout %d/%d rejected by winnability check",
                attempt, self.max_attempts,
            )

        self.clear_mines(board)
        self.update_counts(board)
        raise UngenerableBoard(
            f"No winnable layout with {num_mines} mines on {board!r} "
            f"after {self.max_attempts} attempts"
        )

    def _get_valid_mine_positions(
        self, board: Board, start: Position
    ) -> List[Position]:
        """All positions except the starting tile and its neighbors."""
        excluded = set(board.neighbor_positions(*start))
        excluded.add(start)
        return [pos for pos in board.positions() if pos not in excluded]

    def _place_mines(
        self, board: Board, candidates: List[Position], num_mines: int
    ) -> None:
        """Plant mines on a uniform sample of candidate positions."""
        for row, col in self.rng.sample(candidates, num_mines):
            board.tile_at(row, col).plant_mine()

    @staticmethod
    def clear_mines(board: Board) -> None:
        """Remove every mine from the board."""
        for tile in board.all_tiles():
            if tile.is_mine:
                tile.remove_mine()

    @staticmethod
    def update_counts(board: Board) -> None:
        """Recompute adjacent mine counts for every tile."""
        for row, col in board.positions():
            board.tile_at(row, col).adjacent_mines = sum(
                1 for neighbor in board.neighbors_of(row, col)
                if neighbor.is_mine
            )
