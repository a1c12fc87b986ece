"""
config.py — Engine Defaults & Run Configuration
=================================================
Every tunable the engine reads lives here so the generators, the
PathFinder and the Flask app agree on the same numbers.

    from config import EngineConfig, SPEED_PRESETS, ConfigurationError

EngineConfig is the input record a caller hands to a MazeSession:

    EngineConfig(
        grid_size=21,
        generation_algorithm="kruskal",
        search_algorithm="astar",
        animation_delay=0.2,
        rng_seed=42,
    )
"""

import os
from dataclasses import dataclass, replace
from typing import Optional


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class ConfigurationError(ValueError):
    """Requested run cannot start: bad size, unknown algorithm, walled endpoint."""


class EngineBusyError(RuntimeError):
    """A generation or search is already in flight on this grid."""


# ---------------------------------------------------------------------------
# Grid sizes
# ---------------------------------------------------------------------------
MIN_GRID_SIZE     = 5
DEFAULT_GRID_SIZE = 21
MAX_GRID_SIZE     = 101


# ---------------------------------------------------------------------------
# Animation speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,
    "turbo":  0.05,
}

DEFAULT_DELAY = 0.2
MAX_DELAY     = 1.0


# ---------------------------------------------------------------------------
# Generator tuning
# ---------------------------------------------------------------------------
KRUSKAL_WEIGHT_RANGE   = (1, 1000)
DIVISION_SKIP_CHANCE   = 0.10     # chance to leave a hole in a division wall
BRAID_CHANCE           = 0.50     # chance to knock out a dead end
CELLULAR_WALL_CHANCE   = 0.45
CELLULAR_NEAR_CHANCE   = 0.20     # wall chance within NEAR_RADIUS of start/end
CELLULAR_NEAR_RADIUS   = 2
CELLULAR_PASSES        = 4


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------
STORE_VERSION = 1
SAVE_PATH     = os.environ.get("ALGOMAZE_SAVE_PATH", "saved_mazes.json")


# ---------------------------------------------------------------------------
# Web sessions
# ---------------------------------------------------------------------------
MAX_SESSIONS = 64     # live MazeSessions kept by the Flask app, least recent evicted


def clamp_delay(seconds: float) -> float:
    """Keep an animation delay inside [0, MAX_DELAY]."""
    return max(0.0, min(MAX_DELAY, float(seconds)))


# ---------------------------------------------------------------------------
# EngineConfig
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class EngineConfig:
    grid_size:            int           = DEFAULT_GRID_SIZE
    generation_algorithm: str           = "kruskal"
    search_algorithm:     str           = "dijkstra"
    animation_delay:      float         = DEFAULT_DELAY
    rng_seed:             Optional[int] = None

    def validated(self) -> "EngineConfig":
        """
        Return a normalised copy (enum keys, clamped delay) or raise
        ConfigurationError.
        """
        # local imports: both registries import config for their tunables
        from generators import resolve_generator
        from algorithms import resolve_algorithm

        if not isinstance(self.grid_size, int) or isinstance(self.grid_size, bool):
            raise ConfigurationError(f"grid_size must be an integer, got {self.grid_size!r}")
        if self.grid_size < MIN_GRID_SIZE:
            raise ConfigurationError(
                f"grid_size must be at least {MIN_GRID_SIZE}, got {self.grid_size}"
            )
        if self.grid_size > MAX_GRID_SIZE:
            raise ConfigurationError(
                f"grid_size must be at most {MAX_GRID_SIZE}, got {self.grid_size}"
            )
        if self.rng_seed is not None and (
            not isinstance(self.rng_seed, int) or isinstance(self.rng_seed, bool)
        ):
            raise ConfigurationError(f"rng_seed must be an integer or null, got {self.rng_seed!r}")

        return replace(
            self,
            generation_algorithm=resolve_generator(self.generation_algorithm).value,
            search_algorithm=resolve_algorithm(self.search_algorithm).value,
            animation_delay=clamp_delay(self.animation_delay),
        )
