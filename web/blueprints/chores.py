"""
Chores Blueprint.

Handles all chore and family member routes:
- GET /api/chores - List chores (filters: status, assignedTo)
- POST /api/chores - Create a chore
- GET /api/chores/<id> - Fetch one chore
- PUT /api/chores/<id> - Partial update
- DELETE /api/chores/<id> - Not implemented (501)
- POST /api/chores/<id>/complete - Complete a chore for a member
- GET /api/chores/completions - Completion history
- GET /api/chores/members - List family members
- POST /api/chores/members - Add a family member
- GET /api/chores/members/points - Points per family member
"""

from flask import Blueprint, jsonify, request

from core.errors import ChoreError
from logging_config import get_logger
from web.responses import error_response, internal_error_response, read_json_body
from web.services import chores_service, events_service

logger = get_logger(__name__)

chores_bp = Blueprint("chores", __name__, url_prefix="/api/chores")


@chores_bp.route("", methods=["GET"])
def list_chores():
    try:
        chores = chores_service.list_chores(
            request.args.get("status"), request.args.get("assignedTo")
        )
        return jsonify({"chores": chores})
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "fetching chores")


@chores_bp.route("", methods=["POST"])
def create_chore():
    try:
        chore_id = chores_service.add_chore(read_json_body())
        events_service.broadcast_chore(chores_service.get_chore(chore_id), "created")
        return jsonify({"id": chore_id, "message": "Chore created successfully"}), 201
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "creating chore")


@chores_bp.route("/<int:chore_id>", methods=["GET"])
def get_chore(chore_id):
    try:
        return jsonify({"chore": chores_service.get_chore(chore_id)})
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "fetching chore")


@chores_bp.route("/<int:chore_id>", methods=["PUT"])
def update_chore(chore_id):
    try:
        chores_service.update_chore(chore_id, read_json_body())
        events_service.broadcast_chore(chores_service.get_chore(chore_id), "updated")
        return jsonify({"message": "Chore updated successfully"})
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "updating chore")


@chores_bp.route("/<int:chore_id>", methods=["DELETE"])
def delete_chore(chore_id):
    try:
        chores_service.delete_chore(chore_id)
        return jsonify({"message": "Chore deleted successfully"})
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "deleting chore")


@chores_bp.route("/<int:chore_id>/complete", methods=["POST"])
def complete_chore(chore_id):
    """
    Completes a chore.
    Accepts: { memberId: <id> }
    """
    try:
        data = read_json_body()
        chore = chores_service.complete_chore(chore_id, data.get("memberId"))
        events_service.broadcast_chore(chore, "completed")
        return jsonify({"message": "Chore completed successfully"})
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "completing chore")


@chores_bp.route("/completions", methods=["GET"])
def list_completions():
    try:
        completions = chores_service.list_completions(
            request.args.get("memberId"), request.args.get("choreId")
        )
        return jsonify({"completions": completions})
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "fetching completions")


# =============================================================================
# Family Members
# =============================================================================


@chores_bp.route("/members", methods=["GET"])
def list_members():
    try:
        return jsonify({"members": chores_service.list_members()})
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "fetching family members")


@chores_bp.route("/members", methods=["POST"])
def add_member():
    """
    Adds a family member.
    Accepts: { name, color?, role?, avatar_url? }
    """
    try:
        data = read_json_body()
        member_id = chores_service.add_member(
            data.get("name"), data.get("color"), data.get("role"), data.get("avatar_url")
        )
        return jsonify({"id": member_id, "message": "Family member added successfully"}), 201
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "adding family member")


@chores_bp.route("/members/points", methods=["GET"])
def member_points():
    try:
        return jsonify({"leaderboard": chores_service.leaderboard()})
    except ChoreError as e:
        return error_response(e)
    except Exception as e:
        return internal_error_response(e, "fetching leaderboard")
