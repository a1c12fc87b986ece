"""
session.py — Maze Session (single-writer grid handle)
======================================================
A MazeSession is the ONLY object callers (the Flask app, tests) use to
touch a grid.  It owns:

    grid         the current maze
    config       validated EngineConfig (size, algorithms, delay, seed)
    rng          random.Random seeded from config.rng_seed
    pathfinder   PathFinder bound to `grid`
    recorder     analytics history
    last_result  PathResult of the latest completed run
    stats        MazeStats of the current maze

Every mutation goes through a lock and is refused with EngineBusyError
while a search is RUNNING or PAUSED, so a generation can never race a
search over the same cells.  pause() / stop() are the exceptions: they
are how a caller talks to the in-flight run.
"""

import logging
import random
import threading
import time
import uuid
from dataclasses import replace
from typing import Optional

from config import EngineConfig, EngineBusyError
from maze import Grid, MazeStats, Point, describe_stats
from generators import generate
from engine.pathfinder import Observer, PathFinder, PathResult, RunState
from engine.persistence import MazeRecord
from engine.recorder import Recorder, RunMetrics

logger = logging.getLogger(__name__)


class MazeSession:

    def __init__(self, config: Optional[EngineConfig] = None, autogenerate: bool = True):
        self.config:      EngineConfig          = (config or EngineConfig()).validated()
        self.rng:         random.Random         = random.Random(self.config.rng_seed)
        self.grid:        Grid                  = Grid(self.config.grid_size)
        self.pathfinder:  PathFinder            = PathFinder(self.grid, self.config.animation_delay)
        self.recorder:    Recorder              = Recorder()
        self.last_result: Optional[PathResult]  = None
        self.stats:       Optional[MazeStats]   = None
        self.maze_id:     str                   = ""

        self._lock = threading.Lock()
        if autogenerate:
            self.generate()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def generate(
        self,
        size: Optional[int] = None,
        algorithm: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> Grid:
        """Replace the grid with a fresh maze.  A seed re-seeds the session RNG."""
        with self._lock:
            self._ensure_idle()
            config = replace(
                self.config,
                grid_size=self.config.grid_size if size is None else size,
                generation_algorithm=algorithm or self.config.generation_algorithm,
                rng_seed=self.config.rng_seed if seed is None else seed,
            ).validated()
            if seed is not None:
                self.rng = random.Random(seed)

            t0 = time.monotonic()
            grid = generate(config.grid_size, config.generation_algorithm, self.rng)
            elapsed = time.monotonic() - t0

            self.config = config
            self._install(grid)
            self.stats = describe_stats(grid, elapsed)
            return grid

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def solve(self, observer: Optional[Observer] = None) -> Optional[PathResult]:
        """Run the configured search on this thread.  None if it was stopped."""
        with self._lock:
            info = self.pathfinder.prepare(self.config.search_algorithm)
        return self.pathfinder.execute(info, observer, on_complete=self._record)

    def start_solve(self, observer: Optional[Observer] = None) -> threading.Thread:
        """Run the configured search on a background thread."""
        with self._lock:
            info = self.pathfinder.prepare(self.config.search_algorithm)
        return self.pathfinder.launch(info, observer, on_complete=self._record)

    def wait(self, timeout: Optional[float] = None) -> Optional[PathResult]:
        return self.pathfinder.wait(timeout)

    def pause(self, flag: bool = True) -> None:
        self.pathfinder.pause(flag)

    def stop(self) -> bool:
        return self.pathfinder.stop()

    def reset_path(self) -> None:
        with self._lock:
            self._ensure_idle()
            self.grid.reset_path()
            self.last_result = None

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def set_algorithm(self, algorithm: str) -> None:
        """Search algorithm for the NEXT run; the current one is unaffected."""
        with self._lock:
            self.config = replace(self.config, search_algorithm=algorithm).validated()

    def set_maze_algorithm(self, algorithm: str) -> None:
        with self._lock:
            self.config = replace(self.config, generation_algorithm=algorithm).validated()

    def set_delay(self, seconds: float) -> None:
        """Takes effect immediately, even mid-run."""
        with self._lock:
            self.config = replace(self.config, animation_delay=seconds).validated()
            self.pathfinder.set_delay(self.config.animation_delay)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def snapshot(self) -> MazeRecord:
        """Current grid (annotations included) and last run as a MazeRecord."""
        with self._lock:
            self._ensure_idle()
            result = self.last_result
            return MazeRecord(
                algorithm=result.algorithm if result else self.config.search_algorithm,
                maze_algorithm=self.config.generation_algorithm,
                size=self.grid.size,
                grid=self.grid.to_rows(),
                path=[p.to_list() for p in result.path] if result else [],
                visited=[p.to_list() for p in sorted(result.visited)] if result else [],
                time_to_solve=result.elapsed if result else 0.0,
            )

    def restore(self, record: MazeRecord) -> Grid:
        """Load a saved maze and re-derive its run annotations."""
        with self._lock:
            self._ensure_idle()
            grid = Grid.from_rows(record.grid)
            grid.validate()
            path = tuple(Point.from_list(p) for p in record.path)
            visited = frozenset(Point.from_list(p) for p in record.visited)
            grid.annotate(visited, path)

            self.config = replace(
                self.config,
                grid_size=grid.size,
                generation_algorithm=record.maze_algorithm,
                search_algorithm=record.algorithm,
            ).validated()
            self._install(grid)
            self.stats = describe_stats(grid)
            if path or visited:
                self.last_result = PathResult(
                    algorithm=self.config.search_algorithm,
                    path=path,
                    visited=visited,
                    elapsed=record.time_to_solve,
                    waypoints=path,
                )
            logger.info("restored saved maze %s", record.id)
            return grid

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> RunState:
        return self.pathfinder.state

    @property
    def history(self):
        return self.recorder.history

    def to_dict(self) -> dict:
        return {
            "maze_id":     self.maze_id,
            "size":        self.grid.size,
            "start":       self.grid.start.to_list(),
            "end":         self.grid.end.to_list(),
            "grid":        self.grid.to_rows(),
            "state":       self.state.value,
            "config": {
                "grid_size":            self.config.grid_size,
                "generation_algorithm": self.config.generation_algorithm,
                "search_algorithm":     self.config.search_algorithm,
                "animation_delay":      self.config.animation_delay,
                "rng_seed":             self.config.rng_seed,
            },
            "stats":       self.stats.to_dict() if self.stats else None,
            "result":      self.last_result.to_dict() if self.last_result else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _ensure_idle(self) -> None:
        if self.pathfinder.is_active:
            raise EngineBusyError("a search is in flight; stop it first")

    def _install(self, grid: Grid) -> None:
        self.grid = grid
        self.pathfinder.grid = grid
        self.last_result = None
        self.maze_id = uuid.uuid4().hex

    def _record(self, result: PathResult) -> RunMetrics:
        with self._lock:
            self.last_result = result
            return self.recorder.record(
                result, self.grid,
                maze_id=self.maze_id,
                maze_algorithm=self.config.generation_algorithm,
            )
