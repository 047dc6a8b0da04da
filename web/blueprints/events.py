"""
Events Blueprint.

Real-time channel over Server-Sent Events:
- GET /api/events - Stream of view-changed / config-changed / chore-changed
- POST /api/events/<event> - Send switch-view / config-update / chore-update;
  re-broadcast to every connected client, sender included.
"""

from flask import Blueprint, Response, jsonify, stream_with_context

from core.errors import ChoreError
from logging_config import get_logger
from web.responses import error_response, internal_error_response, read_json_value
from web.services import events_service, settings_service

logger = get_logger(__name__)

events_bp = Blueprint("events", __name__, url_prefix="/api/events")


@events_bp.route("", methods=["GET"])
def stream():
    # Subscribe before the response starts so nothing published in between is lost.
    sub = events_service.subscribe()
    keepalive = settings_service.get_app_setting("EVENT_KEEPALIVE_SECONDS", 15)
    frames = events_service.iter_sse(
        sub, keepalive, on_close=events_service.unsubscribe_callback()
    )
    return Response(
        stream_with_context(frames),
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@events_bp.route("/<event_name>", methods=["POST"])
def send(event_name):
    try:
        broadcast, delivered = events_service.relay(event_name, read_json_value())
        return jsonify({"event": broadcast, "delivered": delivered}), 202
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, f"relaying {event_name}")
