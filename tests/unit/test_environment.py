"""
Unit tests for the Gymnasium environment wrapper.
"""
import numpy as np
import pytest
from mineboard import GameConfig, MinesweeperEnv, make_vec_env


@pytest.fixture
def env() -> MinesweeperEnv:
    """Small environment with a seeded first episode."""
    env = MinesweeperEnv(GameConfig(5, 5, 3))
    env.reset(seed=0)
    return env


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_covers_reveal_and_flag(
        self, env: MinesweeperEnv
    ) -> None:
        """One reveal and one flag action per tile."""
        assert env.action_space.n == 50

    def test_reset_observation(self, env: MinesweeperEnv) -> None:
        """Reset gives an all-hidden int8 observation."""
        obs, info = env.reset(seed=1)
        assert obs.shape == (5, 5)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert info["game_state"] == "UNDECIDED"
        assert info["total_safe"] == 22
        assert env.observation_space.contains(obs)


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test stepping through an episode."""

    def test_first_reveal_is_safe(self, env: MinesweeperEnv) -> None:
        """The first action never loses."""
        obs, reward, terminated, truncated, info = env.step(12)
        assert reward in (1.0, 10.0)
        assert obs[2, 2] != -1
        assert info["game_state"] != "LOST"
        assert truncated is False

    def test_repeated_action_is_penalized(self, env: MinesweeperEnv) -> None:
        """An action that changes nothing costs a little."""
        env.step(12)
        if not env.game.is_playing:
            pytest.skip("first move already won")
        _, reward, _, _, _ = env.step(12)
        assert reward == pytest.approx(-0.1)

    def test_flag_action_toggles_flag(self, env: MinesweeperEnv) -> None:
        """Second-half actions flag tiles after the first move."""
        env.step(12)
        hidden = [
            pos for pos in env.game.board.positions()
            if env.game.board.tile_at(*pos).is_hidden
        ]
        if not hidden or not env.game.is_playing:
            pytest.skip("first move cleared the board")
        row, col = hidden[0]
        _, reward, _, _, info = env.step(25 + row * 5 + col)
        assert env.game.board.tile_at(row, col).is_flagged is True
        assert info["mines_remaining"] == 2
        assert reward in (0.0, 10.0)

    def test_seeded_episodes_repeat(self) -> None:
        """The same seed deals the same board."""
        first = MinesweeperEnv(GameConfig(6, 6, 5))
        second = MinesweeperEnv(GameConfig(6, 6, 5))
        first.reset(seed=3)
        second.reset(seed=3)
        obs_a = first.step(0)[0]
        obs_b = second.step(0)[0]
        assert np.array_equal(obs_a, obs_b)

    def test_episode_terminates(self, env: MinesweeperEnv) -> None:
        """Revealing every tile ends the episode."""
        terminated = False
        for action in range(25):
            if env.get_action_mask()[action]:
                _, _, terminated, _, _ = env.step(action)
            if terminated:
                break
        assert terminated is True


# ============================================================================
# Action Mask Tests
# ============================================================================

class TestActionMask:
    """Test valid action masks."""

    def test_new_episode_masks_flags(self, env: MinesweeperEnv) -> None:
        """Before the first move only reveals are valid."""
        mask = env.get_action_mask()
        assert mask.dtype == bool
        assert mask[:25].all()
        assert not mask[25:].any()

    def test_revealed_tiles_are_masked(self, env: MinesweeperEnv) -> None:
        """Revealed tiles take neither action."""
        env.step(12)
        mask = env.get_action_mask()
        assert mask[12] == False  # noqa: E712
        assert mask[37] == False  # noqa: E712

    def test_winnable_environment(self) -> None:
        """Winnable mode deals boards the solver can clear."""
        env = MinesweeperEnv(GameConfig(9, 9, 10), winnable_required=True)
        env.reset(seed=4)
        env.step(40)
        assert env.game.config.winnable_required is True
        assert env.game.is_lost is False


class TestVecEnv:
    """Test vectorized environment factory."""

    def test_sync_vec_env(self) -> None:
        """Synchronous vector env batches observations."""
        vec = make_vec_env(2, GameConfig(4, 4, 2), asynchronous=False)
        obs, _ = vec.reset(seed=0)
        assert obs.shape == (2, 4, 4)
        vec.close()
