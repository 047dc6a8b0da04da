"""
Display Config Blueprint.

Handles configuration routes used by displays and the admin interface:
- GET /api/config/display - Structured display configuration
- POST /api/config/display - Update display settings
- GET /api/config/system/info - Host and runtime information
"""

from flask import Blueprint, jsonify

from core.errors import ChoreError
from logging_config import get_logger
from web.responses import error_response, internal_error_response, read_json_body
from web.services import events_service, health_service, settings_service

logger = get_logger(__name__)

display_config_bp = Blueprint("display_config", __name__, url_prefix="/api/config")


@display_config_bp.route("/display", methods=["GET"])
def get_display_config():
    try:
        return jsonify({"config": settings_service.get_display_config()})
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "fetching display config")


@display_config_bp.route("/display", methods=["POST"])
def update_display_config():
    try:
        success, errors = settings_service.update_display_config(read_json_body())
        if not success:
            return jsonify(
                {
                    "error": "Invalid display configuration",
                    "code": "validation_error",
                    "errors": errors,
                }
            ), 400

        config = settings_service.get_display_config()
        events_service.publish("config-changed", config)
        return jsonify({"message": "Display configuration updated", "config": config})
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "updating display config")


@display_config_bp.route("/system/info", methods=["GET"])
def system_info():
    return jsonify(
        {"message": "System information", "info": health_service.get_system_info()}
    )
