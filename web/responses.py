"""
JSON request/response helpers shared by the blueprints.
"""

from flask import current_app, jsonify, request

from config import is_production
from core.errors import ChoreError
from logging_config import get_logger

logger = get_logger(__name__)


class MalformedBodyError(ChoreError):
    """The request body is not valid JSON (or not a JSON object)."""

    code = "bad_request"
    http_status = 400


def read_json_body(required: bool = True) -> dict:
    """
    Parses the request body as a JSON object.

    An empty body yields {} unless required; anything unparsable raises
    MalformedBodyError before the request reaches a service.
    """
    raw = request.get_data(cache=True)
    if not raw or not raw.strip():
        if required:
            raise MalformedBodyError("Request body is required")
        return {}

    data = request.get_json(silent=True, force=True)
    if data is None:
        raise MalformedBodyError("Invalid JSON syntax")
    if not isinstance(data, dict):
        raise MalformedBodyError("Request body must be a JSON object")
    return data


def read_json_value():
    """Parses any JSON value (string, object, ...) from the body."""
    raw = request.get_data(cache=True)
    if not raw or not raw.strip():
        raise MalformedBodyError("Request body is required")
    data = request.get_json(silent=True, force=True)
    if data is None and raw.strip() != b"null":
        raise MalformedBodyError("Invalid JSON syntax")
    return data


def error_response(exc: ChoreError):
    """Renders a structured failure with its mapped status."""
    logger.warning(f"{request.method} {request.path} -> {exc.http_status}: {exc.message}")
    return jsonify(exc.to_dict()), exc.http_status


def internal_error_response(exc: Exception, context: str):
    """Renders an unexpected failure, hiding details outside development."""
    logger.error(f"Error {context}: {exc}", exc_info=True)
    cfg = current_app.extensions["family_pane"]["config"]
    if cfg.get("DEBUG_MODE") or not is_production(cfg):
        message = str(exc) or exc.__class__.__name__
    else:
        message = "Internal server error"
    return jsonify({"error": message, "code": "internal_error"}), 500
