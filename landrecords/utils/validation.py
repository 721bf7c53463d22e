# landrecords/utils/validation.py
import re
from decimal import Decimal, InvalidOperation

from flask import request

from landrecords.errors import ValidationError
from landrecords.models.documents import DocumentType
from landrecords.models.user import ROLES


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("body", "Request body must be a JSON object")
    return data


def require_str(data: dict, key: str, max_len: int = 255) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(key, f"{key} is required")
    value = value.strip()
    if len(value) > max_len:
        raise ValidationError(key, f"{key} must be at most {max_len} characters")
    return value


def optional_str(data: dict, key: str, max_len: int = 1000):
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(key, f"{key} must be a string")
    value = value.strip()
    if len(value) > max_len:
        raise ValidationError(key, f"{key} must be at most {max_len} characters")
    return value or None


def require_int(data: dict, key: str, min_value: int | None = None, max_value: int | None = None) -> int:
    value = data.get(key)
    # bool is an int subclass; floats and "12.5" are rejected
    if isinstance(value, bool):
        raise ValidationError(key, f"{key} must be an integer")
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip()):
        value = int(value.strip())
    if not isinstance(value, int):
        raise ValidationError(key, f"{key} must be an integer")
    if min_value is not None and value < min_value:
        raise ValidationError(key, f"{key} must be >= {min_value}")
    if max_value is not None and value > max_value:
        raise ValidationError(key, f"{key} must be <= {max_value}")
    return value


def require_positive_decimal(data: dict, key: str) -> Decimal:
    value = data.get(key)
    if isinstance(value, bool) or value is None:
        raise ValidationError(key, f"{key} must be a positive number")
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(key, f"{key} must be a positive number")
    if not number.is_finite() or number <= 0:
        raise ValidationError(key, f"{key} must be a positive number")
    return number.quantize(Decimal("0.01"))


def require_choice(data: dict, key: str, choices) -> str:
    value = data.get(key)
    if value not in choices:
        raise ValidationError(key, f"{key} must be one of: {', '.join(choices)}")
    return value


def require_document_type(value) -> str:
    if value not in DocumentType.values():
        raise ValidationError("document_type", f"document_type must be one of: {', '.join(DocumentType.values())}")
    return value


def optional_bool(data: dict, key: str):
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(key, f"{key} must be a boolean")
    return value


# -----------------------------
# Catalog payloads
# -----------------------------
def _str_field(max_len):
    return lambda data, key: require_str(data, key, max_len)


def _year_field(data, key):
    return require_int(data, key, 1900, 2100)


DOCUMENT_FIELDS = {
    DocumentType.PROPERTY_BOOK.value: {
        "code": _str_field(64),
        "owner_name": _str_field(200),
        "village": _str_field(120),
        "district": _str_field(120),
    },
    DocumentType.SURVEY_DEED.value: {
        "code": _str_field(64),
        "year": _year_field,
        "area": require_positive_decimal,
        "village": _str_field(120),
    },
    DocumentType.ARCHIVAL_DOSSIER.value: {
        "code": _str_field(64),
        "village": _str_field(120),
        "district": _str_field(120),
        "dossier_ref": _str_field(120),
    },
}


def document_payload(document_type: str, data: dict, partial: bool = False) -> dict:
    """
    Validate a catalog create/update body.

    partial=True (update): only the keys present are checked and returned.
    """
    rules = DOCUMENT_FIELDS[document_type]
    clean = {}
    for key, parse in rules.items():
        if partial and key not in data:
            continue
        clean[key] = parse(data, key)
    if partial and not clean:
        raise ValidationError("body", f"Provide at least one of: {', '.join(rules)}")
    return clean


# -----------------------------
# User payloads
# -----------------------------
def user_payload(data: dict, partial: bool = False) -> dict:
    clean = {}

    if not partial or "username" in data:
        username = require_str(data, "username", 80)
        if len(username) < 3:
            raise ValidationError("username", "username must be at least 3 characters")
        clean["username"] = username

    if not partial or "password" in data:
        password = data.get("password")
        if not isinstance(password, str) or len(password) < 6:
            raise ValidationError("password", "password must be at least 6 characters")
        clean["password"] = password

    if not partial or "full_name" in data:
        clean["full_name"] = require_str(data, "full_name", 200)

    if not partial or "role" in data:
        clean["role"] = require_choice(data, "role", ROLES)

    if "email" in data:
        email = optional_str(data, "email", 255)
        if email is not None and "@" not in email:
            raise ValidationError("email", "email must be a valid address")
        clean["email"] = email

    if "section" in data:
        clean["section"] = optional_str(data, "section", 100)

    if partial and "is_active" in data:
        clean["is_active"] = optional_bool(data, "is_active")

    if partial and not clean:
        raise ValidationError("body", "Nothing to update")
    return clean
