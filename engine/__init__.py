"""
engine/
-------
Run control, session, analytics & persistence layer.

    from engine import MazeSession, PathFinder, Recorder, MazeStore
"""

from engine.pathfinder  import PathFinder, PathResult, RunState
from engine.recorder    import Recorder, RunMetrics, ComparisonResult, compare
from engine.persistence import MazeRecord, MazeStore, VersionMismatchError, UnknownMazeError
from engine.session     import MazeSession

__all__ = [
    "PathFinder",
    "PathResult",
    "RunState",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "MazeRecord",
    "MazeStore",
    "VersionMismatchError",
    "UnknownMazeError",
    "MazeSession",
]
