"""
Agent configuration.

Agents are configured with a short ``key=value`` string, e.g.

    alpha=0.1 load=weights.bin save=weights.bin seed=7

which is parsed once into an AgentConfig. Unknown keys and malformed values
are rejected up front.
"""

import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from .errors import ConfigError


@dataclass(frozen=True)
class AgentConfig:
    """Validated agent settings."""

    # None until set explicitly or filled by the agent variant
    name: Optional[str] = None
    role: Optional[str] = None

    # Random seed (None = nondeterministic)
    seed: Optional[int] = None

    # TD learning rate
    alpha: float = 0.0

    # Weight files
    load_path: Optional[Path] = None
    save_path: Optional[Path] = None

    def __post_init__(self):
        if not math.isfinite(self.alpha) or self.alpha < 0:
            raise ConfigError(f"alpha must be a non-negative number, got {self.alpha}")

    @classmethod
    def from_args(cls, args: str = "") -> "AgentConfig":
        """Parse a whitespace-separated ``key=value`` string."""
        fields = {}
        for pair in args.split():
            key, sep, value = pair.partition("=")
            if not sep or not key:
                raise ConfigError(f"expected key=value, got {pair!r}")
            if key not in _PARSERS:
                raise ConfigError(f"unknown option {key!r}; known: {', '.join(sorted(_PARSERS))}")
            field_name, parse = _PARSERS[key]
            try:
                fields[field_name] = parse(value)
            except ValueError as e:
                raise ConfigError(f"bad value for {key}: {value!r}") from e
        return cls(**fields)

    def with_defaults(self, **defaults) -> "AgentConfig":
        """Fill fields that were never set (name, role) from ``defaults``."""
        changes = {k: v for k, v in defaults.items() if getattr(self, k) is None}
        return replace(self, **changes)


def _path(value: str) -> Path:
    if not value:
        raise ValueError("empty path")
    return Path(value)


# option key -> (field, parser)
_PARSERS = {
    "name": ("name", str),
    "role": ("role", str),
    "seed": ("seed", int),
    "alpha": ("alpha", float),
    "load": ("load_path", _path),
    "save": ("save_path", _path),
}
