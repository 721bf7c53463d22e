from decimal import Decimal

from landrecords.services.borrowing_service import BorrowingService
from landrecords.utils.time import to_iso


def user_to_dict(u) -> dict:
    # password_hash is never serialized
    return {
        "id": u.id,
        "username": u.username,
        "email": u.email,
        "full_name": u.full_name,
        "role": u.role,
        "section": u.section,
        "is_active": bool(u.is_active),
        "created_at": to_iso(u.created_at),
        "updated_at": to_iso(u.updated_at),
    }


def document_to_dict(d, is_available: bool | None = None) -> dict:
    data = {
        "id": d.id,
        "document_type": d.document_type,
        "code": d.code,
    }
    for key in d.editable_fields:
        value = getattr(d, key)
        data[key] = float(value) if isinstance(value, Decimal) else value
    data["is_available"] = is_available
    data["created_at"] = to_iso(d.created_at)
    data["updated_at"] = to_iso(d.updated_at)
    return data


def borrowing_to_dict(b, now=None) -> dict:
    return {
        "id": b.id,
        "user_id": b.user_id,
        "user_name": b.user.full_name if b.user else None,
        "document_type": b.document_type,
        "document_id": b.document_id,
        "opened_at": to_iso(b.opened_at),
        "closed_at": to_iso(b.closed_at),
        "status": b.status,
        "notes": b.notes,
        "is_overdue": BorrowingService.is_overdue(b, now),
        "days_open": BorrowingService.days_open(b, now),
        "created_at": to_iso(b.created_at),
        "updated_at": to_iso(b.updated_at),
    }


def notification_to_dict(n) -> dict:
    return {
        "id": n.id,
        "user_id": n.user_id,
        "borrowing_id": n.borrowing_id,
        "kind": n.kind,
        "message": n.message,
        "is_read": bool(n.is_read),
        "created_at": to_iso(n.created_at),
    }


def report_row_to_dict(row: dict) -> dict:
    return {k: to_iso(v) if hasattr(v, "isoformat") else v for k, v in row.items()}
