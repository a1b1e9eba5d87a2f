"""
Game controller.

Turns player actions into state transitions. A game starts UNDECIDED and
moves to WON or LOST exactly once; loss is final even if the board later
happens to satisfy a win condition.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional

import numpy as np

from .board import Board
from .config import DEFAULT_MAX_ATTEMPTS, GameConfig
from .generator import MineGenerator, WinnabilityCheck, always_winnable
from .reveal import RevealEngine


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class EndState(Enum):
    """Possible outcomes of a game."""

    UNDECIDED = auto()
    WON = auto()
    LOST = auto()


class InputMode(Enum):
    """What a primary action does to an unrevealed tile."""

    REVEALING = auto()
    FLAGGING = auto()

    def toggled(self) -> "InputMode":
        """The other mode."""
        if self is InputMode.REVEALING:
            return InputMode.FLAGGING
        return InputMode.REVEALING


EndListener = Callable[[EndState], None]


@dataclass(frozen=True)
class TileView:
    """
    What a player may know about a tile.

    Attributes:
        row: Row index.
        col: Column index.
        is_revealed: Whether the tile has been revealed.
        is_flagged: Whether the tile carries a flag.
        adjacent_mines: Mined neighbor count, None until revealed.
        is_mine: None while hidden during play, known once revealed or
            once the game has ended.
    """

    row: int
    col: int
    is_revealed: bool
    is_flagged: bool
    adjacent_mines: Optional[int]
    is_mine: Optional[bool]


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    Rules engine for one game.

    Mines are placed on the first action, around the clicked tile, so
    the first reveal is always safe. Every later action either reveals,
    flags or chord-reveals depending on the tile and the input mode, and
    is followed by a win check.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        is_winnable: Optional[WinnabilityCheck] = None,
        input_mode: InputMode = InputMode.REVEALING,
        rng: Optional[random.Random] = None,
        generator: Optional[MineGenerator] = None,
        on_end: Optional[EndListener] = None,
    ) -> None:
        """
        Initialize a game.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            is_winnable: Winnability check used when the config requires a
                winnable board (default: accept every layout).
            input_mode: Initial input mode.
            rng: Random source for mine placement.
            generator: Mine generator to use instead of a default one.
            on_end: Listener registered for the end-state transition.
        """
        self.config = config or GameConfig()
        self.board = Board(self.config.height, self.config.width)
        self.generator = generator or MineGenerator(
            rng=rng, max_attempts=self.config.max_attempts
        )
        self._engine = RevealEngine(self.board, self._on_mine)
        self._is_winnable = None
        if self.config.winnable_required:
            self._is_winnable = is_winnable or always_winnable

        self._initial_mode = input_mode
        self._listeners: List[EndListener] = []
        if on_end is not None:
            self._listeners.append(on_end)
        self._start_fresh()

    def _start_fresh(self) -> None:
        self._end_state = EndState.UNDECIDED
        self._input_mode = self._initial_mode
        self._first_move = True
        self._mines_remaining = self.config.num_mines

    # ========================================================================
    # Player Actions
    # ========================================================================

    def primary_action(self, row: int, col: int) -> bool:
        """
        Act on a tile according to the current input mode.

        The first action of a game places mines and reveals the tile
        whatever the mode. After that, an unrevealed tile is revealed or
        flag-toggled depending on the mode, and a revealed tile with
        enough flags around it is chord-revealed.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if the action changed the board.

        Raises:
            OutOfBounds: Position is not on the board.
        """
        self.board.check_bounds(row, col)
        return self._act(row, col, self._input_mode)

    def secondary_action(self, row: int, col: int) -> bool:
        """Like primary_action, with the input mode flipped for this call only."""
        self.board.check_bounds(row, col)
        return self._act(row, col, self._input_mode.toggled())

    def toggle_input_mode(self) -> InputMode:
        """Switch between revealing and flagging; returns the new mode."""
        self._input_mode = self._input_mode.toggled()
        return self._input_mode

    def _act(self, row: int, col: int, mode: InputMode) -> bool:
        """Dispatch one action on an in-bounds tile."""
        if not self.is_playing:
            return False

        tile = self.board.tile_at(row, col)
        if self._first_move:
            self._start(row, col)
            changed = True
        elif not tile.is_revealed:
            if mode is InputMode.REVEALING:
                changed = bool(self._engine.reveal_from(row, col))
            else:
                changed = self._toggle_flag(row, col)
        elif self._engine.is_chord_safe(row, col):
            changed = bool(self._engine.reveal_neighbors(row, col))
        else:
            changed = False

        if changed:
            self.evaluate_win()
        return changed

    def _start(self, row: int, col: int) -> None:
        """Generate the mine layout around the first click and reveal it."""
        self.generator.generate(
            self.board, (row, col), self.config.num_mines, self._is_winnable
        )
        self._first_move = False
        self._engine.reveal_from(row, col)

    def _toggle_flag(self, row: int, col: int) -> bool:
        """Toggle a flag and keep the mines-remaining estimate in step."""
        tile = self.board.tile_at(row, col)
        if not tile.toggle_flag():
            return False
        if tile.is_flagged:
            self._mines_remaining -= 1
        else:
            self._mines_remaining += 1
        return True

    # ========================================================================
    # End State
    # ========================================================================

    def evaluate_win(self) -> bool:
        """
        Check the win condition and record a win.

        The game is won when the unrevealed tiles number exactly the mines,
        or when every mine is flagged. A lost game stays lost.

        Returns:
            True if the game is won.
        """
        if self._end_state is EndState.LOST or self._first_move:
            return False
        if self._end_state is EndState.WON:
            return True

        tiles = self.board.all_tiles()
        all_mines_flagged = all(tile.is_flagged for tile in tiles if tile.is_mine)
        if self.board.count_hidden() == self.config.num_mines or all_mines_flagged:
            self._set_end_state(EndState.WON)
            return True
        return False

    def _on_mine(self, row: int, col: int) -> None:
        logger.info("Mine revealed at (%d, %d)", row, col)
        self._set_end_state(EndState.LOST)

    def _set_end_state(self, new_state: EndState) -> None:
        """Leave UNDECIDED and notify listeners; later calls are ignored."""
        if self._end_state is not EndState.UNDECIDED:
            return
        self._end_state = new_state
        logger.info("Game over: %s", new_state.name)
        for listener in list(self._listeners):
            listener(new_state)

    def add_end_listener(self, listener: EndListener) -> None:
        """Register a callback fired once when the game is won or lost."""
        self._listeners.append(listener)

    def remove_end_listener(self, listener: EndListener) -> None:
        """Unregister a callback added with add_end_listener."""
        self._listeners.remove(listener)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def end_state(self) -> EndState:
        """Get current end state."""
        return self._end_state

    @property
    def input_mode(self) -> InputMode:
        """Get current input mode."""
        return self._input_mode

    @property
    def mines_remaining(self) -> int:
        """Mines minus flags placed; may go negative."""
        return self._mines_remaining

    @property
    def is_first_move(self) -> bool:
        """Check if no action has been taken yet."""
        return self._first_move

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._end_state is EndState.UNDECIDED

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._end_state is EndState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._end_state is EndState.LOST

    def view(self, row: int, col: int) -> TileView:
        """
        Get the player-visible state of a tile.

        Mine status and neighbor counts of hidden tiles stay unknown
        until the game ends.

        Raises:
            OutOfBounds: Position is not on the board.
        """
        tile = self.board.tile_at(row, col)
        mine_known = tile.is_revealed or not self.is_playing
        return TileView(
            row=row,
            col=col,
            is_revealed=tile.is_revealed,
            is_flagged=tile.is_flagged,
            adjacent_mines=tile.adjacent_mines if tile.is_revealed else None,
            is_mine=tile.is_mine if mine_known else None,
        )

    def get_observation(self) -> np.ndarray:
        """Board state as an int8 array; see Board.get_observation."""
        return self.board.get_observation()

    def reset(self) -> None:
        """Start a new game with the same configuration and listeners."""
        self.board.reset()
        self._start_fresh()


def new_game(
    height: int,
    width: int,
    num_mines: int,
    winnable_required: bool = False,
    *,
    is_winnable: Optional[WinnabilityCheck] = None,
    input_mode: InputMode = InputMode.REVEALING,
    rng: Optional[random.Random] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    on_end: Optional[EndListener] = None,
) -> Game:
    """
    Create a game.

    Raises:
        InvalidDimensions: height or width is not positive.
        InvalidMineCount: num_mines is negative or fills the board.
    """
    config = GameConfig(
        height=height,
        width=width,
        num_mines=num_mines,
        winnable_required=winnable_required,
        max_attempts=max_attempts,
    )
    return Game(
        config,
        is_winnable=is_winnable,
        input_mode=input_mode,
        rng=rng,
        on_end=on_end,
    )
