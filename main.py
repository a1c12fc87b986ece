"""
main.py — AlgoMaze Flask API
=============================
JSON-only web server that lets any front end drive the engine.

Routes:
  GET  /api/algorithms          – generator & search registries
  POST /api/maze/generate       – new maze        {size?, maze_algorithm?, seed?}
  POST /api/solve               – start a search  {algorithm?, delay?, wait?}
  POST /api/solve/pause         – pause / resume  {paused}
  POST /api/solve/stop          – cancel the run, wipe its annotations
  POST /api/path/reset          – clear VISITED / CURRENT cells
  GET  /api/state               – grid rows, run state, last result, stats
  GET  /api/analytics           – run history
  POST /api/analytics/compare   – compare two runs {left, right} (history indexes)
  POST /api/maze/save           – save current maze & run
  GET  /api/maze/saved          – list saved mazes {sort?, algorithm?}
  POST /api/maze/load           – restore a saved maze {id}
  POST /api/maze/delete         – delete a saved maze  {id}

State management:
  Each browser gets a MazeSession, kept in a process-local dict keyed by
  an id stored in the Flask session cookie.  The dict is an LRU capped at
  app.config["MAX_SESSIONS"].  The saved-maze store is
  shared and lives at app.config["SAVE_PATH"].

Errors come back as {"error": message} with 400 (bad configuration),
404 (unknown saved maze) or 409 (a search is already running).
"""

import logging
import secrets
import threading
import uuid
from collections import OrderedDict

from flask import Flask, jsonify, request, session

from config import (
    MAX_SESSIONS,
    SAVE_PATH,
    SPEED_PRESETS,
    ConfigurationError,
    EngineBusyError,
    EngineConfig,
)
from algorithms import list_algorithms
from generators import list_generators
from engine import (
    MazeSession,
    MazeStore,
    UnknownMazeError,
    VersionMismatchError,
    compare,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = secrets.token_hex(32)
app.config.setdefault("SAVE_PATH", SAVE_PATH)
app.config.setdefault("MAX_SESSIONS", MAX_SESSIONS)

_sessions: "OrderedDict[str, MazeSession]" = OrderedDict()
_sessions_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_maze_session() -> MazeSession:
    """
    The caller's MazeSession, created with defaults on first use.  Only
    the app.config["MAX_SESSIONS"] most recently used sessions are kept;
    an evicted session's run is stopped.
    """
    evicted = []
    with _sessions_lock:
        sid = session.get("sid")
        if sid is not None and sid in _sessions:
            _sessions.move_to_end(sid)
            return _sessions[sid]
        sid = uuid.uuid4().hex
        session["sid"] = sid
        ms = _sessions[sid] = MazeSession(EngineConfig())
        while len(_sessions) > app.config["MAX_SESSIONS"]:
            evicted.append(_sessions.popitem(last=False)[1])
    for old in evicted:
        old.stop()
    if evicted:
        logger.info("evicted %d least recently used maze session(s)", len(evicted))
    return ms


def get_store() -> MazeStore:
    store = app.config.get("MAZE_STORE")
    if store is None:
        store = MazeStore(app.config["SAVE_PATH"])
        app.config["MAZE_STORE"] = store
    return store


def payload() -> dict:
    return request.get_json(silent=True) or {}


def parse_delay(value) -> float:
    """Accept a preset name ("fast") or a number of seconds."""
    if isinstance(value, str) and value in SPEED_PRESETS:
        return SPEED_PRESETS[value]
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"delay must be seconds or one of {sorted(SPEED_PRESETS)}") from exc


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(ConfigurationError)
def handle_configuration_error(exc):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(VersionMismatchError)
def handle_version_mismatch(exc):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(UnknownMazeError)
def handle_unknown_maze(exc):
    return jsonify({"error": f"no saved maze with id {exc.args[0]!r}"}), 404


@app.errorhandler(EngineBusyError)
def handle_busy(exc):
    return jsonify({"error": str(exc)}), 409


# ---------------------------------------------------------------------------
# API: Registries
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({
        "generators":    [g.to_dict() for g in list_generators()],
        "algorithms":    [a.to_dict() for a in list_algorithms()],
        "speed_presets": SPEED_PRESETS,
    })


# ---------------------------------------------------------------------------
# API: Maze Generation
# ---------------------------------------------------------------------------
@app.route("/api/maze/generate", methods=["POST"])
def api_maze_generate():
    data = payload()
    ms = get_maze_session()
    ms.generate(
        size=data.get("size"),
        algorithm=data.get("maze_algorithm"),
        seed=data.get("seed"),
    )
    return jsonify(ms.to_dict())


# ---------------------------------------------------------------------------
# API: Search Control
# ---------------------------------------------------------------------------
@app.route("/api/solve", methods=["POST"])
def api_solve():
    data = payload()
    ms = get_maze_session()
    if "algorithm" in data:
        ms.set_algorithm(data["algorithm"])
    if "delay" in data:
        ms.set_delay(parse_delay(data["delay"]))

    if data.get("wait", False):
        result = ms.solve()
        return jsonify({"state": ms.state.value, "result": result.to_dict() if result else None})

    ms.start_solve()
    return jsonify({"state": ms.state.value}), 202


@app.route("/api/solve/pause", methods=["POST"])
def api_solve_pause():
    ms = get_maze_session()
    ms.pause(bool(payload().get("paused", True)))
    return jsonify({"state": ms.state.value})


@app.route("/api/solve/stop", methods=["POST"])
def api_solve_stop():
    ms = get_maze_session()
    stopped = ms.stop()
    return jsonify({"stopped": stopped, "state": ms.state.value})


@app.route("/api/path/reset", methods=["POST"])
def api_path_reset():
    ms = get_maze_session()
    ms.reset_path()
    return jsonify(ms.to_dict())


@app.route("/api/state")
def api_state():
    return jsonify(get_maze_session().to_dict())


# ---------------------------------------------------------------------------
# API: Analytics
# ---------------------------------------------------------------------------
@app.route("/api/analytics")
def api_analytics():
    ms = get_maze_session()
    return jsonify({"runs": [m.to_dict() for m in ms.history]})


@app.route("/api/analytics/compare", methods=["POST"])
def api_analytics_compare():
    data = payload()
    ms = get_maze_session()
    try:
        left = ms.recorder.get(int(data.get("left", -2)))
        right = ms.recorder.get(int(data.get("right", -1)))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError("left / right must be run indexes") from exc
    if left is None or right is None:
        raise ConfigurationError("need two recorded runs to compare")
    return jsonify(compare(left, right).to_dict())


# ---------------------------------------------------------------------------
# API: Saved Mazes
# ---------------------------------------------------------------------------
@app.route("/api/maze/save", methods=["POST"])
def api_maze_save():
    record = get_store().save(get_maze_session().snapshot())
    return jsonify({"id": record.id}), 201


@app.route("/api/maze/saved")
def api_maze_saved():
    store = get_store()
    sort = request.args.get("sort", "date")
    algorithm = request.args.get("algorithm")

    records = store.sorted_by_time() if sort == "time" else store.sorted_by_date()
    if algorithm:
        keep = {r.id for r in store.for_algorithm(algorithm)}
        records = [r for r in records if r.id in keep]
    return jsonify({"mazes": [r.to_dict() for r in records]})


@app.route("/api/maze/load", methods=["POST"])
def api_maze_load():
    record = get_store().get(str(payload().get("id", "")))
    ms = get_maze_session()
    ms.restore(record)
    return jsonify(ms.to_dict())


@app.route("/api/maze/delete", methods=["POST"])
def api_maze_delete():
    record_id = str(payload().get("id", ""))
    if not get_store().delete(record_id):
        raise UnknownMazeError(record_id)
    return jsonify({"deleted": record_id})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    print("=" * 60)
    print("  AlgoMaze")
    print("  Starting Flask server...")
    print("  API at http://localhost:5000/api/algorithms")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000, threaded=True)
