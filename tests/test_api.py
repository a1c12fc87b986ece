import pytest

from engine import MazeStore, RunState
import main


@pytest.fixture
def client(tmp_path):
    main.app.config["TESTING"] = True
    main.app.config["MAZE_STORE"] = MazeStore(tmp_path / "mazes.json")
    with main.app.test_client() as client:
        yield client
    main.app.config["MAZE_STORE"] = None


def _generate(client, **body):
    body = {"size": 11, "maze_algorithm": "kruskal", "seed": 1, **body}
    response = client.post("/api/maze/generate", json=body)
    assert response.status_code == 200
    return response.get_json()


def test_algorithms_listing(client):
    data = client.get("/api/algorithms").get_json()
    assert len(data["generators"]) == 8
    assert len(data["algorithms"]) == 9
    assert data["speed_presets"]["turbo"] == 0.05


def test_generate_and_state(client):
    data = _generate(client, size=9, maze_algorithm="prim")
    assert data["size"] == 9
    assert data["config"]["generation_algorithm"] == "prim"
    assert data["grid"][1][1] == "start"
    assert data["stats"]["open_cells"] > 0

    state = client.get("/api/state").get_json()
    assert state["maze_id"] == data["maze_id"]
    assert state["state"] == "idle"


def test_solve_wait_and_analytics(client):
    _generate(client)
    response = client.post("/api/solve", json={"algorithm": "astar", "delay": 0, "wait": True})
    assert response.status_code == 200
    body = response.get_json()
    assert body["state"] == "completed"
    assert body["result"]["found"] is True

    client.post("/api/solve", json={"algorithm": "dfs", "delay": "turbo", "wait": True})
    runs = client.get("/api/analytics").get_json()["runs"]
    assert [r["algorithm"] for r in runs] == ["astar", "dfs"]

    comparison = client.post("/api/analytics/compare", json={"left": 0, "right": 1}).get_json()
    assert comparison["winner_path"] in ("A* Search", "tie")


def test_compare_needs_two_runs(client):
    _generate(client)
    assert client.post("/api/analytics/compare", json={}).status_code == 400


def test_bad_configuration_is_400(client):
    response = client.post("/api/maze/generate", json={"size": 3})
    assert response.status_code == 400
    assert "error" in response.get_json()
    assert client.post("/api/solve", json={"algorithm": "nope"}).status_code == 400
    assert client.post("/api/solve", json={"delay": "warp"}).status_code == 400
    response = client.post("/api/maze/generate", json={"seed": [1]})
    assert response.status_code == 400
    assert "rng_seed" in response.get_json()["error"]


def test_busy_is_409_and_stop_resets(client):
    clean = _generate(client)["grid"]
    response = client.post("/api/solve", json={"algorithm": "bfs", "delay": 1.0})
    assert response.status_code == 202

    assert client.post("/api/maze/generate", json={}).status_code == 409
    assert client.post("/api/path/reset").status_code == 409

    assert client.post("/api/solve/pause", json={"paused": True}).get_json()["state"] == "paused"
    stopped = client.post("/api/solve/stop").get_json()
    assert stopped == {"stopped": True, "state": "stopped"}
    assert client.get("/api/state").get_json()["grid"] == clean


def test_save_list_load_delete(client):
    _generate(client)
    client.post("/api/solve", json={"algorithm": "bfs", "delay": 0, "wait": True})
    solved = client.get("/api/state").get_json()

    response = client.post("/api/maze/save")
    assert response.status_code == 201
    maze_id = response.get_json()["id"]

    listed = client.get("/api/maze/saved?sort=time&algorithm=bfs").get_json()["mazes"]
    assert [m["id"] for m in listed] == [maze_id]

    client.post("/api/path/reset")
    loaded = client.post("/api/maze/load", json={"id": maze_id}).get_json()
    assert loaded["grid"] == solved["grid"]
    assert loaded["result"]["path"] == solved["result"]["path"]

    assert client.post("/api/maze/delete", json={"id": maze_id}).status_code == 200
    assert client.post("/api/maze/delete", json={"id": maze_id}).status_code == 404
    assert client.post("/api/maze/load", json={"id": maze_id}).status_code == 404


def test_session_map_keeps_only_recent_clients(client, monkeypatch):
    monkeypatch.setitem(main.app.config, "MAX_SESSIONS", 2)
    main._sessions.clear()
    first = client.get("/api/state").get_json()["maze_id"]

    for _ in range(2):
        with main.app.test_client() as other:
            other.get("/api/state")

    assert len(main._sessions) == 2
    assert client.get("/api/state").get_json()["maze_id"] != first
    assert len(main._sessions) == 2


def test_evicted_session_run_is_stopped(client, monkeypatch):
    monkeypatch.setitem(main.app.config, "MAX_SESSIONS", 1)
    main._sessions.clear()
    _generate(client)
    assert client.post("/api/solve", json={"algorithm": "bfs", "delay": 1.0}).status_code == 202
    (busy,) = main._sessions.values()

    with main.app.test_client() as other:
        other.get("/api/state")

    assert busy.state is RunState.STOPPED
    assert busy not in main._sessions.values()
