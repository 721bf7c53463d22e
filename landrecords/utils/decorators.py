from functools import wraps
from flask_jwt_extended import verify_jwt_in_request, get_current_user
from flask import jsonify


def role_required(*roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            role = get_current_user().role
            if role not in roles:
                return jsonify({"success": False, "error": "forbidden", "message": "Forbidden"}), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator
