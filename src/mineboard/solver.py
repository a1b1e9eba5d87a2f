"""
No-guess solvability check.

Simulates a player who only makes moves that follow logically from the
numbers on screen, starting from a given first click. A layout passes
when that player can uncover every safe tile without guessing.

Deductions use constraint propagation:
    1. Each revealed number gives a constraint "exactly N of these
       unknown tiles are mines".
    2. Constraints with zero remaining mines mark their tiles safe;
       constraints whose remaining mines equal their size mark them mines.
    3. Subset reduction derives new constraints from pairs.
    4. Once every mine is accounted for, the remaining tiles are safe.
"""
from collections import deque
from dataclasses import dataclass
from typing import FrozenSet, List, Set, Tuple

from .board import Board, Position
from .tile import Tile


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    A constraint representing: sum of mines in 'tiles' == mine_count.

    For example, a revealed "2" with 3 unknown neighbors and 0 known mines
    gives tiles={A, B, C}, mine_count=2.
    """

    tiles: FrozenSet[Position]
    mine_count: int


# ============================================================================
# Solver
# ============================================================================

class NoGuessSolver:
    """
    Deterministic solver over a fully generated board.

    Reads the mine layout only to answer "what number appears when this
    tile is revealed"; deductions never look at hidden mines.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.revealed: Set[Position] = set()
        self.known_mines: Set[Position] = set()
        self._total_mines = board.count_mines()

    def solve(self, start: Position) -> bool:
        """
        Play from start using only certain moves.

        Returns:
            True if every safe tile gets revealed.
        """
        if self._tile(start).is_mine:
            return False
        self._reveal(start)

        safe_total = self.board.height * self.board.width - self._total_mines
        while len(self.revealed) < safe_total:
            safe, mines = self._deduce()
            self.known_mines.update(mines)
            safe -= self.revealed
            if not safe:
                return False
            for pos in safe:
                self._reveal(pos)
        return True

    def _tile(self, pos: Position) -> Tile:
        return self.board.tile_at(*pos)

    def _unknown(self, pos: Position) -> bool:
        return pos not in self.revealed and pos not in self.known_mines

    def _reveal(self, pos: Position) -> None:
        """Reveal a safe tile and flood through zero tiles."""
        queue = deque([pos])
        self.revealed.add(pos)
        while queue:
            current = queue.popleft()
            if self._tile(current).adjacent_mines != 0:
                continue
            for neighbor in self.board.neighbor_positions(*current):
                if neighbor not in self.revealed:
                    self.revealed.add(neighbor)
                    queue.append(neighbor)

    def _build_constraints(self) -> List[Constraint]:
        """Build constraints from revealed numbered tiles."""
        constraints = []
        for pos in self.revealed:
            count = self._tile(pos).adjacent_mines
            if count == 0:
                continue
            neighbors = self.board.neighbor_positions(*pos)
            unknown = frozenset(n for n in neighbors if self._unknown(n))
            if not unknown:
                continue
            remaining = count - sum(1 for n in neighbors if n in self.known_mines)
            constraints.append(Constraint(unknown, remaining))

        return constraints

    def _deduce(self) -> Tuple[Set[Position], Set[Position]]:
        """
        Propagate constraints until fixpoint.

        Returns:
            Tuple of (safe_tiles, mine_tiles) sets.
        """
        safe: Set[Position] = set()
        mines: Set[Position] = set()
        constraints = self._build_constraints()

        changed = True
        while changed:
            changed = False
            reduced = []
            for constraint in constraints:
                remaining_tiles = constraint.tiles - safe - mines
                remaining_mines = constraint.mine_count - len(constraint.tiles & mines)
                if not remaining_tiles:
                    continue
                if remaining_mines == 0:
                    safe.update(remaining_tiles)
                    changed = True
                    continue
                if remaining_mines == len(remaining_tiles):
                    mines.update(remaining_tiles)
                    changed = True
                    continue
                reduced.append(Constraint(frozenset(remaining_tiles), remaining_mines))

            constraints, derived = self._subset_reduction(reduced)
            changed = changed or derived

        if not safe and self._total_mines == len(self.known_mines | mines):
            safe = {
                pos for pos in self.board.positions()
                if self._unknown(pos) and pos not in mines
            }
        return safe, mines

    @staticmethod
    def _subset_reduction(
        constraints: List[Constraint],
    ) -> Tuple[List[Constraint], bool]:
        """
        Derive difference constraints from subset pairs.

        If A's tiles are a proper subset of B's tiles, then B - A holds
        exactly (B.mine_count - A.mine_count) mines.

        Returns:
            The deduplicated constraint list and whether anything new was
            added.
        """
        seen = set(constraints)
        result = list(seen)
        added = False
        for first in constraints:
            for second in constraints:
                if not first.tiles < second.tiles:
                    continue
                derived = Constraint(
                    second.tiles - first.tiles,
                    second.mine_count - first.mine_count,
                )
                if derived not in seen:
                    seen.add(derived)
                    result.append(derived)
                    added = True
        return result, added


def is_solvable_without_guessing(board: Board, start: Position) -> bool:
    """Winnability check: the board can be cleared from start by logic alone."""
    return NoGuessSolver(board).solve(start)
