"""
pathfinder.py — Search Run Controller
======================================
The PathFinder drives one search algorithm over one grid.  The
algorithm is a generator of Steps; the PathFinder pulls them, marks
each explored cell VISITED, notifies the observer, honours the
animation delay, and on the final step marks the path and builds a
PathResult.

State machine:
    IDLE  →  run() / start()  →  RUNNING
    RUNNING  ⇄  pause(True / False)  ⇄  PAUSED
    RUNNING | PAUSED  →  frontier exhausted / END popped  →  COMPLETED
    RUNNING | PAUSED  →  stop()  →  STOPPED
    COMPLETED | STOPPED  →  run() / start()  →  RUNNING

Threading:
  run() executes on the calling thread; start() runs the same loop on a
  daemon thread.  Each is prepare() followed by execute() / launch();
  callers that guard the grid with their own lock call prepare() under
  it.  on_complete fires before the state flips to COMPLETED.
  pause() / stop() may be called from any thread,
  including from inside the observer.  All waiting (pause, delay) is a
  threading.Condition wait, so a paused run burns no CPU and a stop
  wakes it immediately.

Stopping discards the partial path, records nothing, and wipes the
grid's VISITED / CURRENT annotations so the grid is exactly as it was
before the run started.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, Optional, Tuple, Union

from config import DEFAULT_DELAY, EngineBusyError, clamp_delay
from maze import Grid, Point
from algorithms import REGISTRY, AlgoInfo, SearchAlgorithm, resolve_algorithm
from algorithms.step import Step

logger = logging.getLogger(__name__)

Observer = Callable[[Step], None]


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class RunState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"
    STOPPED   = "stopped"


# ---------------------------------------------------------------------------
# PathResult — what a completed run hands back
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PathResult:
    algorithm:  str
    path:       Tuple[Point, ...]      # START→END, empty if unreachable
    visited:    FrozenSet[Point]       # explored cells, endpoints excluded
    elapsed:    float                  # seconds spent searching (no delay / pause)
    waypoints:  Tuple[Point, ...] = ()
    steps:      int               = 0

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def length(self) -> int:
        """Edge count of the cell path."""
        return max(len(self.path) - 1, 0)

    @property
    def euclidean_length(self) -> float:
        points = self.waypoints or self.path
        return sum(a.euclidean(b) for a, b in zip(points, points[1:]))

    def to_dict(self) -> dict:
        return {
            "algorithm":        self.algorithm,
            "found":            self.found,
            "length":           self.length,
            "euclidean_length": round(self.euclidean_length, 4),
            "elapsed":          self.elapsed,
            "steps":            self.steps,
            "path":             [p.to_list() for p in self.path],
            "waypoints":        [p.to_list() for p in self.waypoints],
            "visited":          [p.to_list() for p in sorted(self.visited)],
        }


# ---------------------------------------------------------------------------
# PathFinder
# ---------------------------------------------------------------------------
class PathFinder:
    """
    Attributes:
        grid   : the Grid being searched (annotated in place).
        delay  : seconds between steps, clamped to [0, MAX_DELAY].
        state  : current RunState.
        result : PathResult of the last COMPLETED run, else None.
    """

    def __init__(self, grid: Grid, delay: float = DEFAULT_DELAY):
        self.grid:   Grid                  = grid
        self.delay:  float                 = clamp_delay(delay)
        self.state:  RunState              = RunState.IDLE
        self.result: Optional[PathResult]  = None

        self._cond:    threading.Condition        = threading.Condition()
        self._paused:  bool                       = False
        self._stopped: bool                       = False
        self._runner:  Optional[int]              = None
        self._thread:  Optional[threading.Thread] = None
        self._error:   Optional[BaseException]    = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def run(
        self,
        algorithm: Union[SearchAlgorithm, str],
        observer: Optional[Observer] = None,
        on_complete: Optional[Callable[[PathResult], None]] = None,
    ) -> Optional[PathResult]:
        """Search on the calling thread.  Returns None if the run was stopped."""
        return self.execute(self.prepare(algorithm), observer, on_complete)

    def start(
        self,
        algorithm: Union[SearchAlgorithm, str],
        observer: Optional[Observer] = None,
        on_complete: Optional[Callable[[PathResult], None]] = None,
    ) -> threading.Thread:
        """Search on a daemon thread.  Busy / config errors raise here, not in the thread."""
        return self.launch(self.prepare(algorithm), observer, on_complete)

    def prepare(self, algorithm: Union[SearchAlgorithm, str]) -> AlgoInfo:
        """
        Claim the grid for a run: validate it, wipe old annotations and
        move to RUNNING.  Raises EngineBusyError if a run is in flight.
        Follow with execute() or launch().
        """
        info = REGISTRY[resolve_algorithm(algorithm)]
        with self._cond:
            if self.is_active:
                raise EngineBusyError(f"a {self.state.value} search already owns this grid")
            self.grid.validate()
            self.grid.reset_path()
            self.state    = RunState.RUNNING
            self.result   = None
            self._paused  = False
            self._stopped = False
            self._runner  = None
            self._thread  = None
            self._error   = None
        return info

    def launch(
        self,
        info: AlgoInfo,
        observer: Optional[Observer] = None,
        on_complete: Optional[Callable[[PathResult], None]] = None,
    ) -> threading.Thread:
        """execute() a prepared run on a daemon thread."""
        def target():
            try:
                self.execute(info, observer, on_complete)
            except Exception as exc:
                logger.exception("%s run failed", info.key)
                self._error = exc

        self._thread = threading.Thread(target=target, name=f"search-{info.key}", daemon=True)
        self._thread.start()
        return self._thread

    def wait(self, timeout: Optional[float] = None) -> Optional[PathResult]:
        """Block until the current run ends; return its result (None if stopped)."""
        deadline = None if timeout is None else time.monotonic() + timeout
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
        with self._cond:
            self._cond.wait_for(lambda: not self.is_active, remaining)
        if self._error is not None:
            error, self._error = self._error, None
            raise error
        return self.result if self.state is RunState.COMPLETED else None

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------
    def pause(self, flag: bool = True) -> None:
        with self._cond:
            self._paused = flag
            if flag and self.state is RunState.RUNNING:
                self.state = RunState.PAUSED
            elif not flag and self.state is RunState.PAUSED:
                self.state = RunState.RUNNING
            self._cond.notify_all()

    def stop(self) -> bool:
        """
        Cancel the active run.  Returns False when there was nothing to
        stop.  Unless called from the running thread itself, waits until
        the run has unwound and the grid has been reset.
        """
        with self._cond:
            if not self.is_active:
                return False
            self._stopped = True
            self._cond.notify_all()
            if self._runner != threading.get_ident():
                self._cond.wait_for(lambda: not self.is_active)
        return True

    def set_delay(self, seconds: float) -> None:
        with self._cond:
            self.delay = clamp_delay(seconds)
            self._cond.notify_all()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_active(self) -> bool:
        return self.state in (RunState.RUNNING, RunState.PAUSED)

    # ------------------------------------------------------------------
    # Run loop
    # ------------------------------------------------------------------
    def execute(
        self,
        info: AlgoInfo,
        observer: Optional[Observer] = None,
        on_complete: Optional[Callable[[PathResult], None]] = None,
    ) -> Optional[PathResult]:
        """
        Drive a prepared run to the end on the calling thread.
        on_complete gets the PathResult while the run still counts as
        active, so nothing can replace the grid before it is recorded.
        """
        with self._cond:
            self._runner = threading.get_ident()

        grid = self.grid
        visited = set()
        searching = 0.0
        final: Optional[Step] = None
        gen = info.fn(grid, grid.start, grid.end)

        try:
            while True:
                t0 = time.monotonic()
                step = next(gen, None)
                searching += time.monotonic() - t0
                if step is None or step.is_final:
                    final = step
                    break
                if not self._checkpoint():
                    break
                if step.current is not None and not grid[step.current].is_endpoint:
                    grid.mark_visited(step.current)
                    visited.add(step.current)
                if observer is not None:
                    observer(step)
                if not self._sleep():
                    break
        except BaseException:
            gen.close()
            self._finish(RunState.STOPPED)
            raise
        gen.close()

        if self._stopped or final is None:
            logger.info("%s stopped after %d steps", info.key, len(visited))
            self._finish(RunState.STOPPED)
            return None

        grid.mark_path(final.path)
        result = PathResult(
            algorithm=info.key,
            path=final.path,
            visited=frozenset(visited),
            elapsed=round(searching, 6),
            waypoints=final.waypoints,
            steps=final.step_number,
        )
        logger.info(
            "%s completed: path=%d visited=%d elapsed=%.4fs",
            info.key, result.length, len(result.visited), result.elapsed,
        )
        try:
            if observer is not None:
                observer(final)
            if on_complete is not None:
                on_complete(result)
        finally:
            self._finish(RunState.COMPLETED, result)
        return result

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _finish(self, state: RunState, result: Optional[PathResult] = None) -> None:
        with self._cond:
            if state is RunState.STOPPED:
                self.grid.reset_path()
            self.result  = result
            self.state   = state
            self._runner = None
            self._cond.notify_all()

    def _checkpoint(self) -> bool:
        """Block while paused.  False once stop() has been called."""
        with self._cond:
            while self._paused and not self._stopped:
                self.state = RunState.PAUSED
                self._cond.wait()
            if self._stopped:
                return False
            self.state = RunState.RUNNING
            return True

    def _sleep(self) -> bool:
        """Animation delay, cut short by stop().  False once stopped."""
        with self._cond:
            deadline = time.monotonic() + self.delay
            while not self._stopped:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self._cond.wait(remaining)
            return not self._stopped
