from maze import Point
from generators import generate
from engine import PathFinder, PathResult, Recorder, RunMetrics, compare


def _result(algorithm, path_len, visited, elapsed):
    path = tuple(Point(x, 1) for x in range(1, path_len + 2))
    return PathResult(
        algorithm=algorithm,
        path=path,
        visited=frozenset(Point(x, 3) for x in range(visited)),
        elapsed=elapsed,
    )


def test_record_builds_card_from_result():
    grid = generate(11, "prim", 4)
    result = PathFinder(grid, delay=0).run("astar")
    rec = Recorder()
    card = rec.record(result, grid, maze_id="m1", maze_algorithm="prim")

    assert rec.latest is card
    assert card.algo_label == "A* Search"
    assert card.path_length == result.length
    assert card.cells_visited == len(result.visited)
    assert card.path_points[0] == list(grid.start)
    # analytics keep the clean maze, not the annotated one
    assert card.grid_rows == grid.clean_copy().to_rows()
    assert "visited" not in {cell for row in card.grid_rows for cell in row}


def test_history_queries():
    rec = Recorder()
    grid = generate(7, "kruskal", 1)
    rec.record(_result("bfs", 4, 10, 0.01), grid, maze_id="a")
    rec.record(_result("dfs", 6, 5, 0.02), grid, maze_id="b")
    assert rec.get(0).algorithm == "bfs"
    assert rec.get(-1).algorithm == "dfs"
    assert rec.get(5) is None
    assert [m.algorithm for m in rec.for_maze("b")] == ["dfs"]
    rec.clear()
    assert rec.latest is None


def test_compare_picks_lower_values():
    left = RunMetrics(algo_label="BFS", cells_visited=40, path_length=10,
                      path_found=True, time_to_solve=0.2)
    right = RunMetrics(algo_label="A*", cells_visited=12, path_length=10,
                       path_found=True, time_to_solve=0.3)
    result = compare(left, right)
    assert result.winner_visited == "A*"
    assert result.winner_path == "tie"
    assert result.winner_time == "BFS"
    assert result.to_dict()["left"]["algo_label"] == "BFS"


def test_unsolved_run_never_wins_path():
    solved = RunMetrics(algo_label="BFS", path_length=30, path_found=True)
    unsolved = RunMetrics(algo_label="DFS", path_length=0, path_found=False)
    assert compare(solved, unsolved).winner_path == "BFS"
