"""
Gymnasium environment wrapper for the rules engine.

Drives a Game purely through its public actions so reinforcement learning
code can play it.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import GameConfig
from .game import Game
from .solver import is_solvable_without_guessing


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment over a Game.

    Observation:
        2D int8 array where:
        - -1 = hidden tile
        - -2 = flagged tile
        - 0-8 = revealed tile with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * height * width.
        Action i < height * width reveals tile (i // width, i % width)
        (chord-revealing it if already revealed); the second half toggles
        the flag on the same tiles.

    Rewards:
        - +1 for a reveal that uncovers safe tiles
        - 0 for a flag toggle
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        winnable_required: bool = False,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            winnable_required: Only deal boards solvable without guessing.
        """
        super().__init__()

        self.config = config or GameConfig()
        if winnable_required and not self.config.winnable_required:
            self.config = GameConfig(
                height=self.config.height,
                width=self.config.width,
                num_mines=self.config.num_mines,
                winnable_required=True,
                max_attempts=self.config.max_attempts,
            )
        self._num_tiles = self.config.total_tiles
        self.game = self._new_game(random.Random())

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._num_tiles)

        self._steps = 0
        self._total_safe_tiles = self._num_tiles - self.config.num_mines

    def _new_game(self, rng: random.Random) -> Game:
        return Game(
            self.config,
            is_winnable=is_solvable_without_guessing,
            rng=rng,
        )

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(2 ** 31)))
        self.game = self._new_game(rng)
        self._steps = 0
        return self.game.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Index into the action space.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        is_flag, row, col = self._decode_action(action)
        self._steps += 1

        reward = self._calculate_reward(is_flag, row, col)
        observation = self.game.get_observation()
        terminated = not self.game.is_playing

        return observation, reward, terminated, False, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, row, col)."""
        action = int(action)
        is_flag = action >= self._num_tiles
        index = action % self._num_tiles
        return is_flag, index // self.config.width, index % self.config.width

    def _calculate_reward(self, is_flag: bool, row: int, col: int) -> float:
        """Apply an action to the game and score the result."""
        flagging = is_flag and not self.game.is_first_move
        if flagging:
            changed = self.game.secondary_action(row, col)
        else:
            changed = self.game.primary_action(row, col)

        if not changed:
            return -0.1
        if self.game.is_won:
            return 10.0
        if self.game.is_lost:
            return -10.0
        if flagging:
            return 0.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        tiles = self.game.board.all_tiles()
        return {
            "steps": self._steps,
            "revealed": sum(1 for tile in tiles if tile.is_revealed),
            "total_safe": self._total_safe_tiles,
            "game_state": self.game.end_state.name,
            "mines_remaining": self.game.mines_remaining,
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of reveal and flag actions on unrevealed tiles.

        Flag actions are masked out until the first reveal has placed
        the mines.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.game.is_playing:
            return mask
        for row, col in self.game.board.positions():
            tile = self.game.board.tile_at(row, col)
            index = row * self.config.width + col
            mask[index] = tile.is_hidden
            mask[self._num_tiles + index] = (
                not tile.is_revealed and not self.game.is_first_move
            )
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[GameConfig] = None,
    asynchronous: bool = True,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel training.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.
        asynchronous: Run environments in subprocesses.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    env_fns = [make_env for _ in range(n_envs)]
    if asynchronous:
        return gym.vector.AsyncVectorEnv(env_fns)
    return gym.vector.SyncVectorEnv(env_fns)
