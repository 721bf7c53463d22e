# landrecords/errors.py
from flask import jsonify


class LedgerError(ValueError):
    """Base for errors surfaced to API callers."""

    kind = "error"
    status_code = 400

    def __init__(self, reason: str, message: str | None = None):
        self.reason = reason
        super().__init__(message or reason)


class NotFoundError(LedgerError):
    """Referenced entity is absent (user, document, open_borrowing, ...)."""

    kind = "not_found"
    status_code = 404


class ConflictError(LedgerError):
    """Uniqueness violation, already borrowed, or delete blocked by open borrowings."""

    kind = "conflict"
    status_code = 409


class ValidationError(LedgerError):
    """Malformed request input, rejected at the API boundary."""

    kind = "validation"
    status_code = 400


class AuthenticationError(LedgerError):
    kind = "unauthorized"
    status_code = 401


class AuthorizationError(LedgerError):
    kind = "forbidden"
    status_code = 403


def register_error_handlers(app):
    @app.errorhandler(LedgerError)
    def _ledger_error(e: LedgerError):
        return jsonify({
            "success": False,
            "error": e.kind,
            "reason": e.reason,
            "message": str(e),
        }), e.status_code

    @app.errorhandler(404)
    def _not_found(_e):
        return jsonify({"success": False, "error": "not_found", "message": "Resource not found"}), 404

    @app.errorhandler(405)
    def _method_not_allowed(_e):
        return jsonify({"success": False, "error": "method_not_allowed", "message": "Method not allowed"}), 405
