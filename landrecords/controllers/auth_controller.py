from flask import Blueprint, jsonify
from flask_jwt_extended import get_current_user, jwt_required

from landrecords.services.auth_service import AuthService
from landrecords.utils.serializers import user_to_dict
from landrecords.utils.validation import json_body, require_str

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/login")
def login():
    data = json_body()
    username = require_str(data, "username", 80)
    password = require_str(data, "password", 255)

    token, user = AuthService.login(username, password)
    return jsonify({
        "success": True,
        "access_token": token,
        "user": user_to_dict(user),
    })


@auth_bp.get("/me")
@jwt_required()
def me():
    return jsonify({"success": True, "data": user_to_dict(get_current_user())})
