"""
Threes TD - n-tuple network value learning for 4x4 sliding-tile games.

This package implements TD(0) afterstate learning with symmetric n-tuple
lookup tables, trained from self-play.
"""

from .symmetries import ISOMORPHISMS, images, isomorphic_patterns, compose, apply_symmetry_tiles
from .board import Board, OPCODES, ILLEGAL_MOVE, check_cells
from .action import Action
from .weights import WeightTable, MAX_PATTERN_LENGTH
from .network import Network, DEFAULT_PATTERNS
from .trainer import EpisodeTrainer, Transition, TrainerState
from .config import AgentConfig
from .agent import Agent, RandomAgent, RandomSlider, GreedySlider, BottomSlider, TDSlider
from .train import TrainConfig, EpisodeResult, play_episode, run_training, summarize
from .errors import (
    ThreesTDError,
    ConfigError,
    InvalidCellError,
    WeightFileError,
    CorruptWeightFileError,
    TrainerStateError,
)

__version__ = "0.1.0"
__all__ = [
    "ISOMORPHISMS",
    "images",
    "isomorphic_patterns",
    "compose",
    "apply_symmetry_tiles",
    "Board",
    "OPCODES",
    "ILLEGAL_MOVE",
    "check_cells",
    "Action",
    "WeightTable",
    "MAX_PATTERN_LENGTH",
    "Network",
    "DEFAULT_PATTERNS",
    "EpisodeTrainer",
    "Transition",
    "TrainerState",
    "AgentConfig",
    "Agent",
    "RandomAgent",
    "RandomSlider",
    "GreedySlider",
    "BottomSlider",
    "TDSlider",
    "TrainConfig",
    "EpisodeResult",
    "play_episode",
    "run_training",
    "summarize",
    "ThreesTDError",
    "ConfigError",
    "InvalidCellError",
    "WeightFileError",
    "CorruptWeightFileError",
    "TrainerStateError",
]
