import os
import logging
from typing import Optional

from flask import Flask, jsonify, request, render_template, Response
from flask_cors import CORS
from dotenv import load_dotenv

from domain.constants import Direction
from services.game_session import GameSession
from web import TEMPLATE_DIR

load_dotenv()

logger = logging.getLogger(__name__)


def create_app(session: Optional[GameSession] = None) -> Flask:
    """
    Build the Flask app around a game session.

    The session is not started here; the caller decides when ticking begins.
    """
    app = Flask(__name__, template_folder=TEMPLATE_DIR)
    if session is None:
        session = GameSession.from_env()
    app.config["GAME_SESSION"] = session

    # Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if allowed_origins_env:
        allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
    else:
        # sensible defaults for local dev
        allowed_origins = [
            "http://localhost:5000",
            "http://127.0.0.1:5000",
        ]

    CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

    @app.route("/", methods=["GET"])
    def index():
        """Game page: board image, scores, reset and level buttons."""
        state = session.state()
        return render_template(
            "index.html",
            board=state["board"],
            levels=session.levels(),
            speed=state["speed"],
            best_score=state["best_score"]
        )

    @app.route("/api/game/state", methods=["GET"])
    def get_state():
        return jsonify(session.state())

    @app.route("/api/game/frame.png", methods=["GET"])
    def get_frame():
        response = Response(session.frame_png(), mimetype="image/png")
        response.headers["Cache-Control"] = "no-store"
        return response

    @app.route("/api/game/direction", methods=["POST"])
    def post_direction():
        """
        Change heading.

        Body: {"direction": "UP" | "DOWN" | "LEFT" | "RIGHT"}
        Reversals are ignored and reported as accepted=false.
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        try:
            direction = Direction.from_name(data.get("direction", ""))
        except ValueError as error:
            return jsonify({"error": str(error)}), 400

        accepted = session.set_direction(direction)
        return jsonify({"accepted": accepted, "velocity": session.state()["velocity"]})

    @app.route("/api/game/speed", methods=["POST"])
    def post_speed():
        """
        Change tick period without touching the game.

        Body: {"level": "hard"} or {"period": 70}
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        try:
            period = session.set_speed(period=data.get("period"), level=data.get("level"))
        except ValueError as error:
            return jsonify({"error": str(error)}), 400

        return jsonify({"speed": period})

    @app.route("/api/game/reset", methods=["POST"])
    def post_reset():
        session.reset()
        logger.info("Game reset from web client")
        return jsonify(session.state())

    @app.route("/api/levels", methods=["GET"])
    def get_levels():
        return jsonify({"levels": session.levels()})

    return app
