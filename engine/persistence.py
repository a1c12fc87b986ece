"""
persistence.py — Saved Maze Store
==================================
A JSON file holding every saved maze plus a format version:

    {
        "version": 1,
        "mazes": [ MazeRecord.to_dict(), … ]
    }

MazeStore keeps the records in memory and rewrites the whole file on
every save / delete.  A file written by a different format version is
refused with VersionMismatchError rather than half-read.  Disk I/O
failures are logged and swallowed: losing a save must never take the
engine down.
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from config import SAVE_PATH, STORE_VERSION

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class VersionMismatchError(ValueError):
    """Saved-maze file was written by an incompatible format version."""


class UnknownMazeError(KeyError):
    """No saved maze with that id."""


# ---------------------------------------------------------------------------
# MazeRecord
# ---------------------------------------------------------------------------
@dataclass
class MazeRecord:
    """
    One saved maze.  Cells are stored by state name; points as [x, y].

    Attributes:
        id             : uuid hex, unique per save.
        timestamp      : seconds since the epoch.
        algorithm      : search algorithm key of the saved run.
        maze_algorithm : generator key.
        size           : side length.
        grid           : state-name rows, annotations included.
        path / visited : the saved run's cells.
        time_to_solve  : seconds, 0.0 when no run was saved.
    """

    algorithm:       str
    maze_algorithm:  str
    size:            int
    grid:            List[List[str]]
    path:            List[List[int]]  = field(default_factory=list)
    visited:         List[List[int]]  = field(default_factory=list)
    time_to_solve:   float            = 0.0
    id:              str              = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp:       float            = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":             self.id,
            "timestamp":      self.timestamp,
            "algorithm":      self.algorithm,
            "maze_algorithm": self.maze_algorithm,
            "size":           self.size,
            "grid":           self.grid,
            "path":           self.path,
            "visited":        self.visited,
            "time_to_solve":  self.time_to_solve,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MazeRecord":
        return cls(
            id=str(data["id"]),
            timestamp=float(data["timestamp"]),
            algorithm=str(data["algorithm"]),
            maze_algorithm=str(data["maze_algorithm"]),
            size=int(data["size"]),
            grid=[list(row) for row in data["grid"]],
            path=[list(p) for p in data.get("path", [])],
            visited=[list(p) for p in data.get("visited", [])],
            time_to_solve=float(data.get("time_to_solve", 0.0)),
        )


# ---------------------------------------------------------------------------
# MazeStore
# ---------------------------------------------------------------------------
class MazeStore:
    """
    Attributes:
        path    : JSON file backing the store.
        records : saved mazes in insertion order.
    """

    def __init__(self, path: PathLike = SAVE_PATH, autoload: bool = True):
        self.path:    Path              = Path(path)
        self.records: List[MazeRecord]  = []
        if autoload:
            self.load()

    # ------------------------------------------------------------------
    # Disk
    # ------------------------------------------------------------------
    def load(self) -> List[MazeRecord]:
        """Read the file.  A missing or unreadable file leaves the store empty."""
        if not self.path.exists():
            self.records = []
            return self.records
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("could not read saved mazes from %s: %s", self.path, exc)
            self.records = []
            return self.records

        version = raw.get("version") if isinstance(raw, dict) else None
        if version != STORE_VERSION:
            raise VersionMismatchError(
                f"{self.path} has store version {version!r}, expected {STORE_VERSION}"
            )
        self.records = [MazeRecord.from_dict(item) for item in raw.get("mazes", [])]
        logger.debug("loaded %d saved mazes from %s", len(self.records), self.path)
        return self.records

    def flush(self) -> bool:
        """Rewrite the file.  Returns False (and logs) on I/O failure."""
        payload = {"version": STORE_VERSION, "mazes": [r.to_dict() for r in self.records]}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("could not write saved mazes to %s: %s", self.path, exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def save(self, record: MazeRecord) -> MazeRecord:
        self.records = [r for r in self.records if r.id != record.id]
        self.records.append(record)
        self.flush()
        logger.info("saved maze %s (%s / %s)", record.id, record.maze_algorithm, record.algorithm)
        return record

    def delete(self, record_id: str) -> bool:
        before = len(self.records)
        self.records = [r for r in self.records if r.id != record_id]
        if len(self.records) == before:
            return False
        self.flush()
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, record_id: str) -> MazeRecord:
        for record in self.records:
            if record.id == record_id:
                return record
        raise UnknownMazeError(record_id)

    def sorted_by_date(self, newest_first: bool = True) -> List[MazeRecord]:
        return sorted(self.records, key=lambda r: r.timestamp, reverse=newest_first)

    def sorted_by_time(self) -> List[MazeRecord]:
        """Fastest solve first."""
        return sorted(self.records, key=lambda r: r.time_to_solve)

    def for_algorithm(self, algorithm: str) -> List[MazeRecord]:
        return [r for r in self.records if r.algorithm == algorithm]

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, record_id: str) -> bool:
        return any(r.id == record_id for r in self.records)
