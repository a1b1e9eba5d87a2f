"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from pathlib import Path
from typing import Callable, List, Set, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mineboard import Board, Game, GameConfig, MineGenerator, Tile


# ============================================================================
# Fixed Layouts
# ============================================================================

# 1 = mine. Mines at (1, 4), (2, 3) and (3, 0).
MINE_MAP = """
00000000
00001000
00010000
10000000
00000000
00000000
00000000
00000000
"""

# Tiles still hidden after the first move at (6, 6) on MINE_MAP.
# '#' = hidden, '.' = revealed.
AFTER_FIRST_MOVE = """
#####...
#####...
####....
#.......
........
........
........
........
"""


def parse_map(text: str) -> List[str]:
    """Split an ASCII map into its rows."""
    return text.strip().splitlines()


def mine_positions(text: str) -> Set[Tuple[int, int]]:
    """Positions marked '1' in a mine map."""
    return {
        (row, col)
        for row, line in enumerate(parse_map(text))
        for col, char in enumerate(line)
        if char == "1"
    }


class LayoutGenerator(MineGenerator):
    """Generator that plants a fixed layout instead of a random one."""

    def __init__(self, mines: Set[Tuple[int, int]]) -> None:
        super().__init__(rng=random.Random(0))
        self.mines = mines

    def _place_mines(self, board, candidates, num_mines) -> None:
        assert len(self.mines) == num_mines
        assert self.mines <= set(candidates), "layout touches the start area"
        for row, col in self.mines:
            board.tile_at(row, col).plant_mine()


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def make_map_game() -> Callable[..., Game]:
    """Factory building an unstarted game from an ASCII mine map."""
    def factory(text: str = MINE_MAP, **kwargs) -> Game:
        rows = parse_map(text)
        mines = mine_positions(text)
        config = GameConfig(len(rows), len(rows[0]), len(mines))
        return Game(config, generator=LayoutGenerator(mines), **kwargs)
    return factory


@pytest.fixture
def map_game(make_map_game: Callable[..., Game]) -> Game:
    """Unstarted 8x8 game over MINE_MAP."""
    return make_map_game()


@pytest.fixture
def started_game(map_game: Game) -> Game:
    """MINE_MAP game after the first move at (6, 6)."""
    map_game.primary_action(6, 6)
    return map_game


@pytest.fixture
def map_board() -> Board:
    """8x8 board with MINE_MAP planted and counts computed."""
    board = Board(8, 8)
    for row, col in mine_positions(MINE_MAP):
        board.tile_at(row, col).plant_mine()
    MineGenerator.update_counts(board)
    return board


@pytest.fixture
def default_game() -> Game:
    """Create a default 9x9 game with 10 mines and a seeded generator."""
    return Game(rng=random.Random(1234))


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def hidden_tile() -> Tile:
    """Create a hidden tile."""
    return Tile()


@pytest.fixture
def mine_tile() -> Tile:
    """Create a tile containing a mine."""
    return Tile(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> GameConfig:
    """Create a valid game configuration."""
    return GameConfig(9, 9, 10)
