from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from landrecords.models.user import ROLE_ADMIN
from landrecords.services.notification_service import NotificationService
from landrecords.utils.auth import current_identity
from landrecords.utils.decorators import role_required
from landrecords.utils.serializers import notification_to_dict
from landrecords.utils.validation import json_body, require_int, require_str

notif_bp = Blueprint("notifications", __name__)


@notif_bp.get("/my")
@jwt_required()
def my_notifications():
    rows = NotificationService.list_by_user(current_identity().user_id)
    return jsonify({"success": True, "data": [notification_to_dict(n) for n in rows]})


@notif_bp.get("/my/unread")
@jwt_required()
def my_unread_notifications():
    user_id = current_identity().user_id
    rows = NotificationService.list_unread_by_user(user_id)
    return jsonify({
        "success": True,
        "count": NotificationService.count_unread(user_id),
        "data": [notification_to_dict(n) for n in rows],
    })


@notif_bp.post("/<int:notification_id>/read")
@jwt_required()
def mark_read(notification_id: int):
    n = NotificationService.mark_read(notification_id, actor_id=current_identity().user_id)
    return jsonify({"success": True, "data": notification_to_dict(n)})


@notif_bp.post("/read-all")
@jwt_required()
def mark_all_read():
    updated = NotificationService.mark_all_read(current_identity().user_id)
    return jsonify({"success": True, "updated": updated})


@notif_bp.post("/")
@role_required(ROLE_ADMIN)
def create_notification():
    data = json_body()
    n = NotificationService.create_notification(
        user_id=require_int(data, "user_id", min_value=1),
        borrowing_id=require_int(data, "borrowing_id", min_value=1),
        message=require_str(data, "message", 1000),
    )
    return jsonify({"success": True, "data": notification_to_dict(n)}), 201


@notif_bp.post("/sweep")
@role_required(ROLE_ADMIN)
def run_overdue_sweep():
    created = NotificationService.generate_overdue_notifications()
    return jsonify({"success": True, "created": created})
