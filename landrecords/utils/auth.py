from collections import namedtuple

from flask import jsonify
from flask_jwt_extended import get_current_user

from landrecords.repositories.user_repo import UserRepo

Identity = namedtuple("Identity", ["user_id", "role", "section"])


def current_identity() -> Identity:
    """Caller identity read from the directory row behind the verified JWT."""
    user = get_current_user()
    return Identity(user.id, user.role, user.section)


def register_jwt_handlers(jwt):
    def _unauthorized(message):
        return jsonify({"success": False, "error": "unauthorized", "message": message}), 401

    # role, section and is_active come from the users table, not from token claims
    @jwt.user_lookup_loader
    def _load_user(_header, payload):
        user = UserRepo.get_by_id(int(payload["sub"]))
        if user is None or not user.is_active:
            return None
        return user

    @jwt.user_lookup_error_loader
    def _unknown_user(_header, _payload):
        return _unauthorized("User not found or inactive")

    @jwt.unauthorized_loader
    def _missing_token(reason):
        return _unauthorized(reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return _unauthorized(reason)

    @jwt.expired_token_loader
    def _expired_token(_header, _payload):
        return _unauthorized("Token has expired")
