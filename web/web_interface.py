# ------------------------------------------------------------------------------
# web_interface.py
# Flask application factory for the Family Pane server.
# ------------------------------------------------------------------------------
import time

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from config import get_config, is_production
from core.chores_core import ChoreService
from core.config_core import ConfigService
from core.events_core import EventBus
from core.store import Store
from logging_config import get_logger
from web.blueprints.auth import auth_bp
from web.blueprints.chores import chores_bp
from web.blueprints.display_config import display_config_bp
from web.blueprints.events import events_bp
from web.services import health_service

logger = get_logger(__name__)


def create_web_interface(store=None, bus=None, config=None):
    """
    Builds the Flask app with its dependencies injected.

    Args:
        store: an initialized Store; one is created from DATABASE_PATH if omitted
        bus: the EventBus shared by all SSE streams
        config: overrides merged over config.get_config()

    Returns:
        The Flask app. Core objects live in app.extensions["family_pane"].
    """
    cfg = dict(get_config())
    cfg.update(config or {})

    if store is None:
        store = Store(cfg["DATABASE_PATH"])
        store.initialize()
    if bus is None:
        bus = EventBus(queue_size=cfg["EVENT_QUEUE_SIZE"])

    app = Flask(__name__)
    app.secret_key = cfg["SECRET_KEY"]
    app.config["MAX_CONTENT_LENGTH"] = cfg["MAX_CONTENT_LENGTH"]
    app.json.sort_keys = False

    app.extensions["family_pane"] = {
        "config": cfg,
        "store": store,
        "bus": bus,
        "chores": ChoreService(store, allow_recomplete=cfg["ALLOW_CHORE_RECOMPLETION"]),
        "settings": ConfigService(store),
    }

    app.register_blueprint(auth_bp)
    app.register_blueprint(chores_bp)
    app.register_blueprint(display_config_bp)
    app.register_blueprint(events_bp)

    # -----------------------------
    # Health Check
    # -----------------------------
    @app.route("/health", methods=["GET"])
    def health():
        return jsonify(health_service.get_health(cfg["APP_VERSION"]))

    # -----------------------------
    # Request Logging (development only)
    # -----------------------------
    if not is_production(cfg):

        @app.before_request
        def _start_timer():
            g.request_started = time.perf_counter()

        @app.after_request
        def _log_request(response):
            started = g.get("request_started")
            elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
            logger.debug(
                f"{request.method} {request.path} {response.status_code} {elapsed_ms:.1f} ms"
            )
            return response

    # -----------------------------
    # Error Handlers
    # -----------------------------
    @app.errorhandler(404)
    def not_found(_e):
        return jsonify({"error": "Not found", "code": "not_found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return jsonify({"error": "Method not allowed", "code": "method_not_allowed"}), 405

    @app.errorhandler(413)
    def payload_too_large(_e):
        return jsonify({"error": "Payload too large", "code": "payload_too_large"}), 413

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"error": e.description or e.name, "code": "http_error"}), e.code

    @app.errorhandler(Exception)
    def unhandled(e):
        logger.error(f"Unhandled error: {e}", exc_info=True)
        message = (
            "Internal server error"
            if is_production(cfg) and not cfg["DEBUG_MODE"]
            else str(e)
        )
        return jsonify({"error": message, "code": "internal_error"}), 500

    return app
