"""
main.py — Graph Algorithm Visualizer Flask App
================================================
JSON API over the replay engine.  The browser draws; the server runs the
algorithms and owns the step history.

Routes:
  GET  /api/algorithms         – dropdown options + metadata cards
  GET  /api/graph              – current graph
  POST /api/graph/generate     – generate a new random graph
  POST /api/graph/import       – import from adjacency-list text
  POST /api/config/algo        – select algorithm
  POST /api/config/mode        – "auto" | "manual"
  POST /api/config/speed       – seconds per step or preset ("2x")
  POST /api/run                – run the selected algorithm {start, end?}
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N (clamped)
  POST /api/step/play          – toggle auto-play
  POST /api/step/tick          – one auto-play tick (client polls at `speed`)
  GET  /api/state              – current state

State management:
  All state is stored in the Flask session.  Each request rebuilds a
  VisualizationSession from it and writes the result back:
    • graph           – serialised Graph
    • algo / mode / speed
    • start / end
    • index / playing           – manual-mode position (the steps are
                                  regenerated from graph + algo + start/end)

Auto mode runs the whole animation on a manual clock inside the request
and returns the edge sequences plus the final trace flags; the client
replays them at `speed`.
"""

import logging
import secrets
from typing import Optional

from flask import Flask, current_app, jsonify, request, session

from algorithms import registry
from engine import (
    DEFAULT_SPEED,
    ManualClock,
    Scheduler,
    UnknownAlgorithmError,
    VisualizationMode,
    VisualizationSession,
    VisualizationState,
)
from graph import Graph, GraphFormatError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[dict] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=secrets.token_hex(32),
        DEFAULT_SPEED=DEFAULT_SPEED,
        DEFAULT_GRAPH_NODES=8,
        DEFAULT_GRAPH_SEED=42,
    )
    app.config.from_prefixed_env("GRAPHVIS")
    if config:
        app.config.update(config)

    register_routes(app)
    return app


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_graph() -> Graph:
    """Deserialise graph from session, or create default."""
    if "graph" not in session:
        g = Graph.generate_random(
            num_nodes=current_app.config["DEFAULT_GRAPH_NODES"],
            edge_probability=0.4,
            seed=current_app.config["DEFAULT_GRAPH_SEED"],
        )
        save_graph(g)
        return g
    return Graph.from_dict(session["graph"])


def save_graph(graph: Graph) -> None:
    """Store a new graph; any loaded run refers to the old one and is dropped."""
    session["graph"] = graph.to_dict()
    clear_run()


def clear_run() -> None:
    for key in ("index", "playing", "start", "end"):
        session.pop(key, None)


def load_session() -> VisualizationSession:
    """Rebuild the engine from the Flask session."""
    clock = ManualClock()
    vis = VisualizationSession(
        scheduler=Scheduler(clock),
        mode=VisualizationMode(session.get("mode", VisualizationMode.AUTO.value)),
        speed=session.get("speed", current_app.config["DEFAULT_SPEED"]),
    )
    algo = session.get("algo")
    if algo and registry.has(algo):
        vis.algorithm_id = algo

    # generators are deterministic, so the history is rebuilt rather than
    # stored in the cookie
    if vis.mode is VisualizationMode.MANUAL and "start" in session and vis.adapter is not None:
        snapshot = get_graph().to_snapshot(session["start"], session.get("end"))
        vis.snapshot = snapshot
        vis.state = VisualizationState.RUNNING
        vis.stepper.load(vis.adapter.generator(snapshot), snapshot)
        vis.stepper.jump_to_step(session.get("index", -1))
        if session.get("playing"):
            vis.stepper.play()
    return vis


def save_session(vis: VisualizationSession) -> None:
    session["mode"] = vis.mode.value
    session["speed"] = vis.speed
    if vis.algorithm_id:
        session["algo"] = vis.algorithm_id
    if vis.stepper.is_loaded:
        session["index"] = vis.stepper.index
        session["playing"] = vis.stepper.is_playing


def state_response(vis: VisualizationSession, **extra):
    body = vis.to_dict()
    body.update(extra)
    return jsonify(body)


def error_response(message: str, status: int = 400, **extra):
    body = {"error": message}
    body.update(extra)
    return jsonify(body), status


def json_body() -> dict:
    return request.get_json(silent=True) or {}


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def register_routes(app: Flask) -> None:

    @app.errorhandler(UnknownAlgorithmError)
    def handle_unknown_algorithm(exc):
        return error_response(f"Unknown algorithm: {exc.args[0]}")

    @app.errorhandler(GraphFormatError)
    def handle_graph_format(exc):
        return error_response(str(exc))

    # -- algorithms ---------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        cards = []
        for adapter in registry.get_all():
            meta = adapter.metadata
            cards.append({
                "id":              meta.id,
                "name":            meta.name,
                "type":            meta.type.value,
                "tagline":         meta.tagline,
                "description":     meta.description,
                "inputStepHints":  meta.input_step_hints,
                "failureMessage":  registry.get_failure_message(meta.id),
                "pseudocode":      meta.pseudocode,
                "complexity":      {"time": meta.complexity_time, "space": meta.complexity_space},
                "requirements": {
                    "weighted":       meta.requirements.weighted,
                    "undirectedOnly": meta.requirements.undirected_only,
                    "connectedOnly":  meta.requirements.connected_only,
                },
            })
        return jsonify({"options": registry.get_dropdown_options(), "algorithms": cards})

    # -- graph --------------------------------------------------------------
    @app.route("/api/graph")
    def api_graph():
        return jsonify(get_graph().to_dict())

    @app.route("/api/graph/generate", methods=["POST"])
    def api_graph_generate():
        data = json_body()
        g = Graph.generate_random(
            num_nodes=int(data.get("nodes", 10)),
            edge_probability=float(data.get("prob", 0.3)),
            directed=bool(data.get("directed", False)),
            weighted=bool(data.get("weighted", True)),
            seed=data.get("seed"),
        )
        save_graph(g)
        logger.info("Generated graph: %r", g)
        return jsonify(g.to_dict())

    @app.route("/api/graph/import", methods=["POST"])
    def api_graph_import():
        data = json_body()
        g = Graph.from_adjacency_list(
            data.get("text", ""),
            directed=bool(data.get("directed", False)),
            weighted=bool(data.get("weighted", True)),
        )
        save_graph(g)
        logger.info("Imported graph: %r", g)
        return jsonify(g.to_dict())

    # -- config -------------------------------------------------------------
    @app.route("/api/config/algo", methods=["POST"])
    def api_config_algo():
        vis = load_session()
        vis.select_algorithm(json_body().get("algo", ""))
        clear_run()
        save_session(vis)
        return state_response(vis)

    @app.route("/api/config/mode", methods=["POST"])
    def api_config_mode():
        vis = load_session()
        try:
            vis.set_mode(json_body().get("mode", ""))
        except ValueError:
            return error_response("Mode must be 'auto' or 'manual'")
        clear_run()
        save_session(vis)
        return state_response(vis)

    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        vis = load_session()
        speed = json_body().get("speed", DEFAULT_SPEED)
        try:
            vis.set_speed(speed)
        except (TypeError, ValueError):
            return error_response(f"Invalid speed: {speed!r}")
        save_session(vis)
        return state_response(vis)

    # -- run ----------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = json_body()
        vis = load_session()
        algo = data.get("algo") or vis.algorithm_id
        if not algo:
            return error_response("Select an algorithm first")

        graph = get_graph()
        try:
            start = int(data["start"])
            end = int(data["end"]) if data.get("end") is not None else None
        except (KeyError, TypeError, ValueError):
            return error_response("A numeric 'start' node is required")
        for node_id in (start, end):
            if node_id is not None and graph.get_node(node_id) is None:
                return error_response(f"Unknown node: {node_id}")

        clear_run()
        outcome = vis.run(algo, graph.to_snapshot(start, end))
        if not outcome.ok:
            save_session(vis)
            return error_response(outcome.message, level=outcome.level)

        extra = {}
        if vis.mode is VisualizationMode.MANUAL:
            session["index"] = -1
            session["start"] = start
            session["end"] = end
        else:
            result = outcome.result
            extra = {
                "visitedEdges":   [e.to_dict() for e in result.visited_edges],
                "resultEdges":    [e.to_dict() for e in result.result_edges or []],
                "resultStepType": result.result_step_type.value if result.result_step_type else None,
            }
            vis.scheduler.run_until_idle(sleep=vis.scheduler.clock.advance)

        save_session(vis)
        return state_response(vis, **extra)

    # -- stepping -----------------------------------------------------------
    def navigate(action):
        vis = load_session()
        if not vis.stepper.is_loaded:
            return error_response("No step-through run is loaded")
        action(vis)
        save_session(vis)
        return state_response(vis)

    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        return navigate(lambda vis: vis.step_forward())

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        return navigate(lambda vis: vis.step_backward())

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        try:
            index = int(json_body().get("index", 0))
        except (TypeError, ValueError):
            return error_response("Step index must be an integer")
        return navigate(lambda vis: vis.jump_to_step(index))

    @app.route("/api/step/play", methods=["POST"])
    def api_step_play():
        def toggle(vis):
            if vis.stepper.is_playing:
                vis.pause()
            else:
                vis.play()
        return navigate(toggle)

    @app.route("/api/step/tick", methods=["POST"])
    def api_step_tick():
        return navigate(lambda vis: vis.stepper.tick())

    # -- state --------------------------------------------------------------
    @app.route("/api/state")
    def api_state():
        return state_response(load_session())


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("=" * 60)
    print("  Graph Algorithm Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000/api/algorithms")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000)
