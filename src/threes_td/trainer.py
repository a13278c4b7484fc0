"""
Episode trainer: backward TD(0) over afterstates.

During play the trainer records every chosen move. When the episode ends the
trajectory is replayed from the last move to the first; each step pulls the
afterstate value toward the reward of the following move plus that move's
freshly updated afterstate value.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .board import Board
from .errors import ConfigError, TrainerStateError
from .network import Network


class TrainerState(Enum):
    IDLE = "idle"
    RECORDING = "recording"
    TERMINAL = "terminal"
    REPLAY = "replay"


@dataclass
class Transition:
    """One recorded move."""
    before: Board
    after: Board  # afterstate: board right after the slide, before placement
    op: int
    reward: float
    value: float  # reward + estimated afterstate value at selection time


class EpisodeTrainer:
    """
    Records transitions for one episode and learns from them at its end.

    The network is only written in ``close_episode``.
    """

    def __init__(self, network: Network, alpha: float):
        if not math.isfinite(alpha) or alpha < 0:
            raise ConfigError(f"learning rate must be a non-negative number, got {alpha}")
        self.network = network
        self.alpha = float(alpha)
        self.state = TrainerState.IDLE
        self._trajectory: List[Transition] = []

    def __len__(self) -> int:
        return len(self._trajectory)

    @property
    def trajectory(self) -> Tuple[Transition, ...]:
        return tuple(self._trajectory)

    def open_episode(self):
        """Start recording a fresh episode."""
        self._trajectory.clear()
        self.state = TrainerState.RECORDING

    def record(self, transition: Transition):
        if self.state is not TrainerState.RECORDING:
            raise TrainerStateError(f"cannot record a transition while {self.state.value}")
        self._trajectory.append(transition)

    def close_episode(self) -> int:
        """
        Replay the episode backward and update the network.

        Returns:
            number of network updates performed
        """
        if self.state is not TrainerState.RECORDING:
            raise TrainerStateError(f"cannot close an episode while {self.state.value}")
        self.state = TrainerState.TERMINAL
        if not self._trajectory:
            self.state = TrainerState.IDLE
            return 0

        self.state = TrainerState.REPLAY
        updates = 0
        target = 0.0  # bootstrapped return from the later move
        while self._trajectory:
            t = self._trajectory.pop()
            error = target - (t.value - t.reward)  # value - reward = V(after)
            target = t.reward + self.network.weight_update(t.after, self.alpha * error)
            updates += 1

        self.state = TrainerState.IDLE
        return updates

    def abort_episode(self):
        """Drop the current trajectory without learning from it."""
        self._trajectory.clear()
        self.state = TrainerState.IDLE
