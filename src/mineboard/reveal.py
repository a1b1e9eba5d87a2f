"""
Reveal logic: single reveals, flood fill and chord reveals.

The engine mutates tiles on the board it is given and reports detonated
mines through a callback; deciding what a detonation means for the game
is left to the caller.
"""
import logging
from collections import deque
from typing import Callable, Deque, Iterable, List, Set

from .board import Board, Position


logger = logging.getLogger(__name__)

MineCallback = Callable[[int, int], None]


# ============================================================================
# Reveal Engine
# ============================================================================

class RevealEngine:
    """
    Reveals tiles on a board.

    Flood fill is breadth-first: starting from an empty tile it reveals
    the connected region of empty tiles plus the numbered tiles bordering
    it. Flagged tiles are never revealed.
    """

    def __init__(self, board: Board, on_mine: MineCallback) -> None:
        """
        Initialize the engine.

        Args:
            board: Board to reveal tiles on.
            on_mine: Called with (row, col) whenever a mine is revealed.
        """
        self.board = board
        self.on_mine = on_mine

    def _revealable(self, position: Position) -> bool:
        tile = self.board.tile_at(*position)
        return not tile.is_revealed and not tile.is_flagged

    def reveal_from(self, row: int, col: int) -> List[Position]:
        """
        Reveal a tile, flooding outward if it turns out empty.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            Positions revealed by this call, in reveal order. Empty if the
            tile was already revealed or is flagged.
        """
        tile = self.board.tile_at(row, col)
        if not tile.reveal():
            return []

        revealed = [(row, col)]
        if tile.is_mine:
            self.on_mine(row, col)
        elif tile.is_empty:
            revealed.extend(self._flood(
                self.board.neighbor_positions(row, col), {(row, col)}
            ))
        return revealed

    def is_chord_safe(self, row: int, col: int) -> bool:
        """Check if a revealed tile has at least as many flags as mines around it."""
        tile = self.board.tile_at(row, col)
        if not tile.is_revealed:
            return False
        return self.board.count_flagged_neighbors(row, col) >= tile.adjacent_mines

    def reveal_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Chord reveal: reveal every unflagged neighbor of a revealed tile.

        Does nothing unless the tile is chord-safe. Each neighbor is handled
        like a flood-fill step, so empty neighbors keep flooding and mined
        ones are reported through on_mine.

        Returns:
            Positions revealed by this call, in reveal order.
        """
        if not self.is_chord_safe(row, col):
            return []
        return self._flood(self.board.neighbor_positions(row, col), {(row, col)})

    def _flood(
        self, seeds: Iterable[Position], visited: Set[Position]
    ) -> List[Position]:
        """Breadth-first reveal starting from seeds."""
        queue: Deque[Position] = deque()
        self._enqueue(seeds, queue, visited)

        revealed = []
        while queue:
            position = queue.popleft()
            tile = self.board.tile_at(*position)
            if not tile.reveal():
                continue
            revealed.append(position)
            if tile.is_mine:
                self.on_mine(*position)
            elif tile.is_empty:
                self._enqueue(self.board.neighbor_positions(*position), queue, visited)

        logger.debug("Flood fill revealed %d tile(s)", len(revealed))
        return revealed

    def _enqueue(
        self,
        positions: Iterable[Position],
        queue: Deque[Position],
        visited: Set[Position],
    ) -> None:
        for position in positions:
            if position not in visited and self._revealable(position):
                visited.add(position)
                queue.append(position)
