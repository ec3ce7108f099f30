import json
import logging
import os
import time

from flask import Flask, Response, jsonify, request, send_from_directory

from config import Config, config
from log_tracker import LogUnavailableError
from monitor_state import ProfileNotFoundError, ProfileRegistry

log = logging.getLogger(__name__)


def _no_store(response):
    response.headers["Cache-Control"] = "no-store"
    return response


def _error(message, status):
    return _no_store(jsonify({"error": message})), status


def _requested_client():
    """The `poe_client` named in the JSON body, or None if the body is unusable."""
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        return None
    client = body.get("poe_client")
    return client if isinstance(client, str) else None


def create_app(registry: ProfileRegistry, cfg: Config = config) -> Flask:
    app = Flask(__name__, static_folder=cfg.STATIC_DIR, static_url_path="")

    # -------------------------
    # Routes
    # -------------------------

    @app.route("/")
    def root():
        return send_from_directory(cfg.STATIC_DIR, "index.html")

    @app.get("/data")
    def get_data():
        return _no_store(jsonify(registry.snapshot()))

    @app.post("/data")
    def post_data():
        client = _requested_client()
        if client is None:
            log.warning("Bad /data request body: %r", request.get_data(as_text=True))
            return _error("Expected a JSON body with a 'poe_client' string", 400)
        try:
            registry.update(client)
        except ProfileNotFoundError:
            return _error(f"Unknown client: {client}", 404)
        except LogUnavailableError as e:
            log.info("Log not available for %s: %s", client, e)
            return _error(str(e), 503)
        return _no_store(jsonify(registry.snapshot()))

    @app.post("/reset")
    def reset():
        client = _requested_client()
        if client is None:
            log.warning("Bad /reset request body: %r", request.get_data(as_text=True))
            return _error("Expected a JSON body with a 'poe_client' string", 400)
        try:
            registry.reset(client)
        except ProfileNotFoundError:
            return _error(f"Unknown client: {client}", 404)
        return _no_store(jsonify(registry.snapshot()))

    @app.get("/note")
    def note_list():
        try:
            names = sorted(os.listdir(cfg.NOTES_DIR))
        except OSError as e:
            log.error("Could not list notes in %s: %s", cfg.NOTES_DIR, e)
            return _error(f"Notes directory not found: {cfg.NOTES_DIR}", 500)
        return _no_store(jsonify([f"/notes/{name}" for name in names]))

    @app.route("/events")
    def events():
        def stream():
            for i in range(cfg.EVENT_LIMIT):
                if i:
                    time.sleep(cfg.EVENT_INTERVAL)
                yield f"data: {json.dumps(registry.snapshot())}\n\n"

        response = Response(stream(), mimetype="text/event-stream")
        response.headers["Cache-Control"] = "no-cache"
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Expose-Headers"] = "Content-Type"
        return response

    return app
