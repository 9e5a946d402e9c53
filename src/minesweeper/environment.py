"""
Gymnasium environment wrapper for Minesweeper.

Lets an automated player drive a game session through the standard
reset/step interface.
"""
import random
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, DEFAULT_CONFIG, RevealResult
from .render import render_session
from .session import GameSession, GameState


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with neighbor mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols reveals cell (i // cols, i % cols);
        the remaining actions toggle the flag on cell i - rows * cols.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for placing or removing a flag
        - -0.1 for an ignored action
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 10x10 with 15 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or DEFAULT_CONFIG
        self.session = GameSession(self.config, autostart=False)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self.config.total_cells)

        self._steps = 0

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
        self.session.rng = random.Random(
            int(self.np_random.integers(0, 2**32))
        )
        self.session.initialize(self.config)
        self._steps = 0

        return self.session.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal, offset by rows * cols to flag.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        reward = self._apply(int(action))

        observation = self.session.get_observation()
        terminated = not self.session.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_mark, row, col)."""
        is_mark = action >= self.config.total_cells
        index = action % self.config.total_cells
        return is_mark, index // self.config.cols, index % self.config.cols

    def _apply(self, action: int) -> float:
        """Perform the action on the session and score it."""
        is_mark, row, col = self._action_to_position(action)

        if is_mark:
            return 0.0 if self.session.on_cell_mark(row, col) else -0.1

        result = self.session.on_cell_activate(row, col)
        if result == RevealResult.IGNORED:
            return -0.1
        if self.session.state == GameState.WON:
            return 10.0
        if self.session.state == GameState.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        snapshot = self.session.snapshot()
        return {
            "steps": self._steps,
            "revealed": snapshot.revealed_count,
            "total_safe": self.config.safe_cells,
            "flags_used": snapshot.flags_used,
            "game_state": snapshot.state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        text = render_session(self.session.snapshot())
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of reveal actions that would not be ignored.

        Returns:
            Boolean array over the full action space; flag actions
            are left False.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.session.is_playing:
            return mask
        for row, col in self.session.get_hidden_positions():
            mask[row * self.config.cols + col] = True
        return mask

    def close(self) -> None:
        self.session.close()
        super().close()
