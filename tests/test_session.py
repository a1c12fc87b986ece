import threading

import pytest

from config import MAX_DELAY, ConfigurationError, EngineBusyError, EngineConfig
from maze import CellState
from engine import MazeSession, RunState


def _session(**overrides) -> MazeSession:
    config = dict(grid_size=15, generation_algorithm="kruskal",
                  search_algorithm="bfs", animation_delay=0, rng_seed=3)
    config.update(overrides)
    return MazeSession(EngineConfig(**config))


def test_config_is_normalised():
    ms = _session(generation_algorithm="HUNT_AND_KILL", search_algorithm="IDA_STAR", animation_delay=9)
    assert ms.config.generation_algorithm == "hunt_and_kill"
    assert ms.config.search_algorithm == "ida_star"
    assert ms.config.animation_delay == MAX_DELAY


@pytest.mark.parametrize("bad", [
    dict(grid_size=4),
    dict(grid_size=500),
    dict(grid_size="21"),
    dict(generation_algorithm="maze-o-matic"),
    dict(search_algorithm="telepathy"),
    dict(rng_seed=[1]),
    dict(rng_seed="7"),
    dict(rng_seed=True),
])
def test_bad_config_is_refused(bad):
    with pytest.raises(ConfigurationError):
        _session(**bad)


def test_same_seed_same_maze():
    assert _session().grid == _session().grid


def test_generate_updates_grid_config_and_stats():
    ms = _session()
    old_id = ms.maze_id
    grid = ms.generate(size=11, algorithm="wilson", seed=8)
    assert ms.grid is grid
    assert grid.size == 11
    assert ms.config.generation_algorithm == "wilson"
    assert ms.stats.open_cells == len(grid.open_cells())
    assert ms.maze_id != old_id
    assert ms.pathfinder.grid is grid


def test_solve_records_history_and_result():
    ms = _session()
    result = ms.solve()
    assert result.found
    assert ms.last_result is result
    assert len(ms.history) == 1
    assert ms.history[0].algorithm == "bfs"
    assert ms.history[0].maze_id == ms.maze_id

    ms.set_algorithm("dfs")
    ms.solve()
    assert [m.algorithm for m in ms.history] == ["bfs", "dfs"]


def test_background_solve_records_on_completion():
    ms = _session()
    ms.start_solve()
    result = ms.wait(5)
    assert result is not None
    assert ms.state is RunState.COMPLETED
    assert ms.recorder.latest.path_length == result.length


def test_reset_path_clears_run():
    ms = _session()
    clean = ms.grid.copy()
    ms.solve()
    assert ms.grid != clean
    ms.reset_path()
    assert ms.grid == clean
    assert ms.last_result is None


def test_mutations_refused_while_running():
    ms = _session()
    paused = threading.Event()

    def observer(step):
        ms.pause(True)
        paused.set()

    ms.start_solve(observer)
    assert paused.wait(2)
    with pytest.raises(EngineBusyError):
        ms.generate()
    with pytest.raises(EngineBusyError):
        ms.reset_path()
    with pytest.raises(EngineBusyError):
        ms.solve()
    ms.stop()
    assert ms.state is RunState.STOPPED
    assert ms.history == []


def test_set_delay_applies_to_pathfinder():
    ms = _session()
    ms.set_delay(0.3)
    assert ms.pathfinder.delay == 0.3
    ms.set_delay(-2)
    assert ms.pathfinder.delay == 0.0


def test_snapshot_and_restore_round_trip():
    ms = _session()
    result = ms.solve()
    record = ms.snapshot()
    assert record.size == 15
    assert record.algorithm == "bfs"
    assert len(record.path) == len(result.path)

    other = _session(rng_seed=99, grid_size=9)
    other.restore(record)
    assert other.grid == ms.grid
    assert other.grid[other.grid.start] is CellState.START
    assert other.config.grid_size == 15
    assert other.last_result.path == result.path
    assert other.last_result.visited == result.visited


def test_to_dict_shape():
    ms = _session()
    ms.solve()
    data = ms.to_dict()
    assert data["state"] == "completed"
    assert data["size"] == 15
    assert len(data["grid"]) == 15
    assert data["result"]["found"] is True
    assert data["config"]["search_algorithm"] == "bfs"


def test_run_is_recorded_before_session_can_change_maze():
    ms = _session()
    searched = ms.grid
    saved = ms.snapshot()
    recording = threading.Event()
    release = threading.Event()
    record = ms._record

    def slow_record(result):
        recording.set()
        assert release.wait(5)
        return record(result)

    ms._record = slow_record
    ms.start_solve()
    assert recording.wait(5)
    assert ms.state is RunState.RUNNING
    with pytest.raises(EngineBusyError):
        ms.generate(size=11)
    with pytest.raises(EngineBusyError):
        ms.restore(saved)

    release.set()
    result = ms.wait(5)
    assert ms.state is RunState.COMPLETED
    assert ms.grid is searched
    assert ms.last_result is result
    assert ms.history[-1].maze_id == ms.maze_id
    assert len(ms.history[-1].grid_rows) == 15

    ms.generate(size=11)
    assert ms.last_result is None
    assert len(ms.history) == 1
