"""
Training utilities: episode loop and self-play training.
"""

import random
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np
from tqdm.auto import trange, tqdm

from .agent import ABORT, Agent, RandomAgent
from .board import ILLEGAL_MOVE, Board


@dataclass
class TrainConfig:
    """Training configuration."""

    # Random seed for the global generators and every RandomAgent (None = nondeterministic)
    seed: Optional[int] = 0

    # Episodes to play
    episodes: int = 1000

    # Logging
    print_every: int = 100


@dataclass
class EpisodeResult:
    """Outcome of one episode."""
    score: float
    moves: int
    max_tile: int


def set_seed(seed: int, *agents: Agent):
    """Set random seeds for reproducibility; each RandomAgent gets its own offset."""
    random.seed(seed)
    np.random.seed(seed)
    for offset, agent in enumerate(agents):
        if isinstance(agent, RandomAgent):
            agent.seed(seed + offset)


def play_episode(player: Agent, environment: Agent, board: Board) -> EpisodeResult:
    """
    Play one episode on ``board``.

    The environment moves first, then the two agents alternate until one of
    them returns the null action or plays an illegal move.
    If an agent raises, both are closed with the ABORT flag and the error
    propagates; the TD player then discards the partial trajectory.

    Returns:
        EpisodeResult with the summed slide rewards and the player's move count
    """
    player.open_episode()
    environment.open_episode()

    score = 0.0
    moves = 0
    turn = 0
    try:
        while True:
            who = environment if turn % 2 == 0 else player
            action = who.take_action(board)
            if not action:
                break
            reward = action.apply(board)
            if reward == ILLEGAL_MOVE:
                break
            if who is player:
                score += reward
                moves += 1
            turn += 1
    except BaseException:
        environment.close_episode(ABORT)
        player.close_episode(ABORT)
        raise

    environment.close_episode()
    player.close_episode()
    return EpisodeResult(score=score, moves=moves, max_tile=board.max_tile())


def summarize(results: List[EpisodeResult]) -> dict:
    """Mean/max statistics over a block of episodes."""
    scores = np.array([r.score for r in results], dtype=np.float64)
    return {
        "episodes": len(results),
        "avg_score": float(scores.mean()) if len(scores) else 0.0,
        "max_score": float(scores.max()) if len(scores) else 0.0,
        "avg_moves": float(np.mean([r.moves for r in results])) if results else 0.0,
        "max_tile": max((r.max_tile for r in results), default=0),
    }


def run_training(
    config: TrainConfig,
    player: Agent,
    environment: Agent,
    new_board: Callable[[], Board],
) -> List[EpisodeResult]:
    """
    Self-play ``config.episodes`` episodes, printing a summary every
    ``config.print_every`` episodes. Saves the player's weights at the end
    when it knows how to.
    """
    if config.seed is not None:
        set_seed(config.seed, player, environment)

    results: List[EpisodeResult] = []
    iterator = trange(1, config.episodes + 1, desc="Training")
    for episode in iterator:
        results.append(play_episode(player, environment, new_board()))

        if config.print_every and episode % config.print_every == 0:
            stats = summarize(results[-config.print_every:])
            tqdm.write(
                f"[{episode:6d}] avg {stats['avg_score']:.1f} | "
                f"max {stats['max_score']:.0f} | "
                f"moves {stats['avg_moves']:.1f} | "
                f"tile {stats['max_tile']}"
            )

    save = getattr(player, "save", None)
    if callable(save):
        save()
    return results
