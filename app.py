#!/usr/bin/env python3
"""Picture Storyteller - Web backend for the illustrated chat."""

from flask import Flask, jsonify, request, send_from_directory
from flask_cors import CORS

from storyteller.config import PUBLIC_DIR, Settings, load_settings
from storyteller.logging.interaction_logger import InteractionLogger
from storyteller.narrator.storyteller import Storyteller

GENERIC_ERROR = "Failed to generate response from AI."

INDEX_FILE = "index.html"


def build_storyteller(settings: Settings) -> Storyteller:
    """Build the storyteller once for the lifetime of the process."""
    logger = None
    if settings.interaction_log_dir:
        logger = InteractionLogger(log_dir=settings.interaction_log_dir)
        print(f"[boot] Interaction log: {logger.get_log_path()}")
    return Storyteller.from_settings(settings, logger=logger)


def create_app(storyteller: Storyteller | None = None, settings: Settings | None = None) -> Flask:
    """Create the Flask app around a storyteller.

    When no storyteller is given one is built from the environment.
    """
    settings = settings or load_settings()
    storyteller = storyteller or build_storyteller(settings)

    app = Flask(__name__, static_folder=None)
    CORS(app, origins=settings.allowed_origins)

    print(f"[boot] Reply mode: {storyteller.mode}")

    @app.route("/api/chat", methods=["POST"])
    def chat():
        """Generate the next storyteller reply."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        try:
            reply = storyteller.respond(data.get("history"), data.get("imageDescription"))
        except Exception as e:
            print(f"Error in /api/chat: {e!r}")
            return jsonify({"error": GENERIC_ERROR}), 500

        return jsonify(reply.to_payload())

    @app.route("/health")
    def health():
        return jsonify({"ok": True, "mode": storyteller.mode})

    @app.route("/")
    @app.route("/<path:path>")
    def index(path: str = ""):
        """Serve files from public/, falling back to the single-page front end."""
        if path and (PUBLIC_DIR / path).is_file():
            return send_from_directory(PUBLIC_DIR, path)
        if (PUBLIC_DIR / INDEX_FILE).exists():
            return send_from_directory(PUBLIC_DIR, INDEX_FILE)
        return "<!doctype html><h1>Picture Storyteller backend is running.</h1>"

    return app


if __name__ == "__main__":
    settings = load_settings()
    app = create_app(settings=settings)
    print(f"Server listening on http://localhost:{settings.port}")
    app.run(port=settings.port)
