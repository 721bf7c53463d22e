from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from landrecords.errors import AuthorizationError, NotFoundError
from landrecords.models.user import ROLE_ADMIN, ROLE_SECTION_HEAD
from landrecords.services.borrowing_service import BorrowingService
from landrecords.utils.auth import current_identity
from landrecords.utils.decorators import role_required
from landrecords.utils.serializers import borrowing_to_dict
from landrecords.utils.validation import json_body, optional_str, require_document_type, require_int

borrowing_bp = Blueprint("borrowings", __name__)


def _list_response(rows):
    return jsonify({"success": True, "data": [borrowing_to_dict(b) for b in rows]})


@borrowing_bp.post("/")
@jwt_required()
def create_borrowing():
    identity = current_identity()
    data = json_body()

    document_type = require_document_type(data.get("document_type"))
    document_id = require_int(data, "document_id", min_value=1)
    notes = optional_str(data, "notes")

    # admins may record a loan on behalf of another user
    user_id = identity.user_id
    if data.get("user_id") is not None:
        user_id = require_int(data, "user_id", min_value=1)
        if user_id != identity.user_id and identity.role != ROLE_ADMIN:
            raise AuthorizationError("not_admin", "Only admins can borrow on behalf of another user")

    b = BorrowingService.create_borrowing(user_id, document_type, document_id, notes)
    return jsonify({"success": True, "data": borrowing_to_dict(b)}), 201


@borrowing_bp.post("/<int:borrowing_id>/return")
@jwt_required()
def return_borrowing(borrowing_id: int):
    identity = current_identity()
    notes = optional_str(json_body(), "notes")

    b = BorrowingService.return_borrowing(
        borrowing_id,
        notes,
        actor_id=identity.user_id,
        actor_role=identity.role,
    )
    return jsonify({"success": True, "data": borrowing_to_dict(b)})


@borrowing_bp.get("/")
@role_required(ROLE_ADMIN, ROLE_SECTION_HEAD)
def list_borrowings():
    return _list_response(BorrowingService.list_borrowings())


@borrowing_bp.get("/my")
@jwt_required()
def my_borrowings():
    return _list_response(BorrowingService.list_by_user(current_identity().user_id))


@borrowing_bp.get("/user/<int:user_id>")
@role_required(ROLE_ADMIN, ROLE_SECTION_HEAD)
def user_borrowings(user_id: int):
    return _list_response(BorrowingService.list_by_user(user_id))


@borrowing_bp.get("/open")
@role_required(ROLE_ADMIN, ROLE_SECTION_HEAD)
def open_borrowings():
    return _list_response(BorrowingService.list_open())


@borrowing_bp.get("/overdue")
@role_required(ROLE_ADMIN, ROLE_SECTION_HEAD)
def overdue_borrowings():
    threshold_days = None
    if "threshold_days" in request.args:
        threshold_days = require_int(request.args, "threshold_days", min_value=0)
    return _list_response(BorrowingService.list_overdue(threshold_days=threshold_days))


@borrowing_bp.get("/<int:borrowing_id>")
@jwt_required()
def get_borrowing(borrowing_id: int):
    identity = current_identity()
    b = BorrowingService.get_borrowing_by_id(borrowing_id)
    if not b:
        raise NotFoundError("borrowing", f"Borrowing {borrowing_id} not found")
    if identity.role not in (ROLE_ADMIN, ROLE_SECTION_HEAD) and b.user_id != identity.user_id:
        raise AuthorizationError("not_owner", "This borrowing belongs to another user")
    return jsonify({"success": True, "data": borrowing_to_dict(b)})
