# landrecords/controllers/user_controller.py

from flask import Blueprint, jsonify

from landrecords.errors import NotFoundError
from landrecords.models.user import ROLE_ADMIN
from landrecords.services.user_service import UserService
from landrecords.utils.decorators import role_required
from landrecords.utils.serializers import user_to_dict
from landrecords.utils.validation import json_body, user_payload

user_bp = Blueprint("users", __name__)


@user_bp.get("/")
@role_required(ROLE_ADMIN)
def list_users():
    return jsonify({"success": True, "data": [user_to_dict(u) for u in UserService.list_users()]})


@user_bp.get("/<int:user_id>")
@role_required(ROLE_ADMIN)
def get_user(user_id: int):
    user = UserService.get_user(user_id)
    if not user:
        raise NotFoundError("user", f"User {user_id} not found")
    return jsonify({"success": True, "data": user_to_dict(user)})


@user_bp.post("/")
@role_required(ROLE_ADMIN)
def create_user():
    user = UserService.create_user(user_payload(json_body()))
    return jsonify({"success": True, "data": user_to_dict(user)}), 201


@user_bp.put("/<int:user_id>")
@role_required(ROLE_ADMIN)
def update_user(user_id: int):
    user = UserService.update_user(user_id, user_payload(json_body(), partial=True))
    return jsonify({"success": True, "data": user_to_dict(user)})


@user_bp.delete("/<int:user_id>")
@role_required(ROLE_ADMIN)
def delete_user(user_id: int):
    deleted = UserService.delete_user(user_id)
    if not deleted:
        return jsonify({"success": False, "deleted": False, "message": f"User {user_id} not found"}), 404
    return jsonify({"success": True, "deleted": True})
