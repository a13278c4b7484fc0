"""
Agents: anything that picks an action for a board.

Every agent exposes the same capability set (open_episode, close_episode,
take_action). The TD slider is the learning decision policy; its network and
trainer are injected rather than inherited.
"""

import random
from pathlib import Path
from typing import Optional, Sequence, Union

from .action import Action
from .board import ILLEGAL_MOVE, OPCODES, Board
from .config import AgentConfig
from .network import DEFAULT_PATTERNS, Network
from .trainer import EpisodeTrainer, Transition

# close_episode flag for an episode cut short by an error
ABORT = "abort"


class Agent:
    """Base agent: plays nothing."""

    def __init__(self, config: Optional[AgentConfig] = None):
        self.config = config if config is not None else AgentConfig()

    @property
    def name(self) -> str:
        return self.config.name if self.config.name is not None else "unknown"

    @property
    def role(self) -> str:
        return self.config.role if self.config.role is not None else "unknown"

    def open_episode(self, flag: str = ""):
        pass

    def close_episode(self, flag: str = ""):
        pass

    def take_action(self, board: Board) -> Action:
        return Action()


class RandomAgent(Agent):
    """Agent with its own seeded random generator."""

    def __init__(self, config: Optional[AgentConfig] = None):
        super().__init__(config)
        self.rng = random.Random(self.config.seed)

    def seed(self, seed: Optional[int]):
        """Restart the generator from ``seed``."""
        self.rng.seed(seed)


class RandomSlider(RandomAgent):
    """Plays a uniformly random legal slide."""

    def __init__(self, config: Optional[AgentConfig] = None):
        super().__init__((config or AgentConfig()).with_defaults(name="slide", role="slider"))

    def take_action(self, board: Board) -> Action:
        ops = list(OPCODES)
        self.rng.shuffle(ops)
        for op in ops:
            if board.copy().slide(op) != ILLEGAL_MOVE:
                return Action.slide(op)
        return Action()


class GreedySlider(Agent):
    """Plays the slide with the largest immediate reward; first op wins ties."""

    def __init__(self, config: Optional[AgentConfig] = None):
        super().__init__((config or AgentConfig()).with_defaults(name="greedy", role="slider"))

    def take_action(self, board: Board) -> Action:
        best_op, best_reward = None, ILLEGAL_MOVE
        for op in OPCODES:
            reward = board.copy().slide(op)
            if reward > best_reward:
                best_op, best_reward = op, reward
        return Action.slide(best_op) if best_op is not None else Action()


class BottomSlider(Agent):
    """
    Keeps tiles low: best of ops 1..3 by immediate reward, op 0 only as a
    last resort.
    """

    def __init__(self, config: Optional[AgentConfig] = None):
        super().__init__((config or AgentConfig()).with_defaults(name="bottom", role="slider"))

    def take_action(self, board: Board) -> Action:
        best_op, best_reward = None, ILLEGAL_MOVE
        for op in OPCODES[1:]:
            reward = board.copy().slide(op)
            if reward > best_reward:
                best_op, best_reward = op, reward
        if best_op is not None:
            return Action.slide(best_op)
        if board.copy().slide(OPCODES[0]) != ILLEGAL_MOVE:
            return Action.slide(OPCODES[0])
        return Action()


class TDSlider(Agent):
    """
    Greedy player over ``reward + V(afterstate)`` that learns V by TD(0).

    Each chosen move is recorded in the trainer; the network is updated when
    the episode closes.
    """

    def __init__(
        self,
        network: Network,
        trainer: EpisodeTrainer,
        config: Optional[AgentConfig] = None,
    ):
        super().__init__((config or AgentConfig()).with_defaults(name="TD", role="slider"))
        self.network = network
        self.trainer = trainer

    @classmethod
    def from_config(
        cls,
        config: AgentConfig,
        patterns: Sequence[Sequence[int]] = DEFAULT_PATTERNS,
    ) -> "TDSlider":
        """Build network and trainer; load weights when ``load_path`` is set."""
        network = Network(patterns)
        if config.load_path is not None:
            network.load(config.load_path)
        return cls(network, EpisodeTrainer(network, config.alpha), config)

    def open_episode(self, flag: str = ""):
        self.trainer.open_episode()

    def close_episode(self, flag: str = ""):
        if flag == ABORT:
            self.trainer.abort_episode()
        else:
            self.trainer.close_episode()

    def take_action(self, board: Board) -> Action:
        best = None
        for op in OPCODES:
            after = board.copy()
            reward = after.slide(op)
            if reward == ILLEGAL_MOVE:
                continue
            value = reward + self.network.estimate_board(after)
            if best is None or value > best.value:
                best = Transition(before=board.copy(), after=after, op=op, reward=reward, value=value)

        if best is None:
            return Action()
        self.trainer.record(best)
        return Action.slide(best.op)

    def save(self, path: Union[str, Path, None] = None):
        """Write weights to ``path`` or the configured ``save_path``; no-op if neither."""
        path = path if path is not None else self.config.save_path
        if path is not None:
            self.network.save(path)
