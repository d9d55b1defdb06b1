"""
main.py — Graph Algorithm Animator Flask App
=============================================
JSON API over one in-memory editing Session.  Drawing happens in the
browser; this server only owns the graph, the runs and the replay.

Routes:
  GET    /api/graph                – graph + start node
  POST   /api/graph/nodes          – add node            {label?}
  DELETE /api/graph/nodes/<id>     – delete node (cascades to its edges)
  POST   /api/graph/edges          – add edge            {source, target, weight?, kind?}
  DELETE /api/graph/edges          – delete edge(s)      {source, target}
  POST   /api/graph/edges/weight   – set weight          {source, target, weight}
  POST   /api/config/start         – set start node      {node_id}
  POST   /api/config/algo          – select algorithm    {algo_key}
  POST   /api/config/speed         – set speed in ms     {speed}
  GET    /api/algorithms           – registry cards
  POST   /api/play                 – compute + start replay
  POST   /api/stop                 – freeze replay in place
  POST   /api/reset                – clear replay state
  GET    /api/state                – current replay state (for polling)

State management:
  Graphs are ephemeral: one Session per app instance, held in memory.
  The replay advances on server-side timers; the page polls /api/state.
"""

import logging
from typing import Optional

from flask import Flask, jsonify, request

import config
from graph import (
    VisualizerError,
    UnknownNodeError,
    UnknownAlgorithmError,
    PlaybackActiveError,
    EdgeKind,
)
from algorithms import list_algorithms
from engine import Session

logger = logging.getLogger(__name__)


def create_app(session: Optional[Session] = None) -> Flask:
    app = Flask(__name__)
    app.config["SESSION_OBJ"] = session or Session()

    def current() -> Session:
        return app.config["SESSION_OBJ"]

    def body() -> dict:
        return request.get_json(silent=True) or {}

    # -----------------------------------------------------------------------
    # Error mapping
    # -----------------------------------------------------------------------
    @app.errorhandler(VisualizerError)
    def handle_domain_error(err: VisualizerError):
        if isinstance(err, (UnknownNodeError, UnknownAlgorithmError)):
            status = 404
        elif isinstance(err, PlaybackActiveError):
            status = 409
        else:
            status = 400
        return jsonify({"error": str(err)}), status

    # -----------------------------------------------------------------------
    # API: Graph
    # -----------------------------------------------------------------------
    @app.route("/api/graph", methods=["GET"])
    def api_graph():
        return jsonify(current().graph.to_dict())

    @app.route("/api/graph/nodes", methods=["POST"])
    def api_add_node():
        node_id = current().add_node(body().get("label"))
        return jsonify({"id": node_id, "graph": current().graph.to_dict()}), 201

    @app.route("/api/graph/nodes/<int:node_id>", methods=["DELETE"])
    def api_delete_node(node_id: int):
        current().delete_node(node_id)
        return jsonify(current().graph.to_dict())

    @app.route("/api/graph/edges", methods=["POST"])
    def api_add_edge():
        data = body()
        try:
            source = int(data["source"])
            target = int(data["target"])
            weight = int(data.get("weight", 1))
            kind   = EdgeKind.parse(data.get("kind", EdgeKind.UNDIRECTED))
        except (KeyError, TypeError, ValueError) as e:
            return jsonify({"error": f"Bad edge: {e}"}), 400

        edge_id = current().add_edge(source, target, weight, kind)
        payload = {"added": edge_id is not None, "id": edge_id, "graph": current().graph.to_dict()}
        return jsonify(payload), (201 if edge_id is not None else 200)

    @app.route("/api/graph/edges", methods=["DELETE"])
    def api_delete_edge():
        data = body()
        try:
            removed = current().delete_edge(int(data["source"]), int(data["target"]))
        except (KeyError, TypeError, ValueError) as e:
            return jsonify({"error": f"Bad edge: {e}"}), 400
        return jsonify({"removed": removed, "graph": current().graph.to_dict()})

    @app.route("/api/graph/edges/weight", methods=["POST"])
    def api_set_weight():
        data = body()
        try:
            updated = current().set_edge_weight(
                int(data["source"]), int(data["target"]), int(data["weight"])
            )
        except (KeyError, TypeError, ValueError) as e:
            return jsonify({"error": f"Bad edge: {e}"}), 400
        return jsonify({"updated": updated, "graph": current().graph.to_dict()})

    # -----------------------------------------------------------------------
    # API: Config Changes
    # -----------------------------------------------------------------------
    @app.route("/api/config/start", methods=["POST"])
    def api_config_start():
        raw = body().get("node_id")
        try:
            node_id = int(raw) if raw is not None else None
        except (TypeError, ValueError):
            return jsonify({"error": f"Bad node id: {raw!r}"}), 400
        current().set_start_node(node_id)
        return jsonify({"start": current().graph.start})

    @app.route("/api/config/algo", methods=["POST"])
    def api_config_algo():
        info = current().select_algorithm(body().get("algo_key", config.DEFAULT_ALGORITHM))
        return jsonify(info.to_dict())

    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        raw = body().get("speed", config.DEFAULT_SPEED_MS)
        if isinstance(raw, str):
            raw = config.SPEED_PRESETS.get(raw, raw)
        try:
            speed = int(raw)
        except (TypeError, ValueError):
            return jsonify({"error": f"Bad speed: {raw!r}"}), 400
        current().set_speed(speed)
        return jsonify({"speed": current().speed_ms})

    @app.route("/api/algorithms", methods=["GET"])
    def api_algorithms():
        return jsonify([info.to_dict() for info in list_algorithms()])

    # -----------------------------------------------------------------------
    # API: Playback
    # -----------------------------------------------------------------------
    @app.route("/api/play", methods=["POST"])
    def api_play():
        s = current()
        started = s.play()
        payload = {"started": started, "state": s.state().to_dict()}
        if started and s.sequence is not None:
            payload["sequence"] = s.sequence.to_dict()
        return jsonify(payload)

    @app.route("/api/stop", methods=["POST"])
    def api_stop():
        current().stop()
        return jsonify(current().state().to_dict())

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        current().reset()
        return jsonify(current().state().to_dict())

    @app.route("/api/state", methods=["GET"])
    def api_state():
        return jsonify(current().to_dict())

    return app


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    settings = config.Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Graph Algorithm Animator on http://%s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=settings.debug, use_reloader=False)
