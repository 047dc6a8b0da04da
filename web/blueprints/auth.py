"""
Authentication Blueprint.

Sign-in happens with an external identity provider; these routes only
report and clear the session's authenticated flag.
"""

import logging

from flask import Blueprint, jsonify

from web.services import auth_service

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/status", methods=["GET"])
def status():
    return jsonify({"authenticated": auth_service.is_authenticated()})


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Logout and clear session."""
    auth_service.clear_authentication()
    logger.info("Session signed out.")
    return jsonify({"message": "Logged out"})
