from datetime import datetime

from landrecords.models.borrowing import Borrowing, STATUS_OPEN, STATUS_CLOSED
from landrecords.extensions import db


class BorrowingRepo:
    @staticmethod
    def get(borrowing_id: int):
        return db.session.get(Borrowing, borrowing_id)

    @staticmethod
    def get_open(borrowing_id: int):
        return Borrowing.query.filter_by(id=borrowing_id, status=STATUS_OPEN).first()

    @staticmethod
    def find_open_for_document(document_type: str, document_id: int):
        return Borrowing.query.filter_by(
            document_type=document_type,
            document_id=document_id,
            status=STATUS_OPEN,
        ).first()

    @staticmethod
    def open_document_ids(document_type: str):
        rows = Borrowing.query.with_entities(Borrowing.document_id).filter_by(
            document_type=document_type, status=STATUS_OPEN
        ).all()
        return {r.document_id for r in rows}

    @staticmethod
    def has_open_for_user(user_id: int) -> bool:
        return Borrowing.query.filter_by(user_id=user_id, status=STATUS_OPEN).first() is not None

    @staticmethod
    def list_all():
        return Borrowing.query.order_by(Borrowing.created_at.desc(), Borrowing.id.desc()).all()

    @staticmethod
    def list_by_user(user_id: int):
        return (
            Borrowing.query.filter_by(user_id=user_id)
            .order_by(Borrowing.created_at.desc(), Borrowing.id.desc())
            .all()
        )

    @staticmethod
    def list_open():
        return (
            Borrowing.query.filter_by(status=STATUS_OPEN)
            .order_by(Borrowing.created_at.desc(), Borrowing.id.desc())
            .all()
        )

    @staticmethod
    def find_overdue(cutoff: datetime):
        return (
            Borrowing.query.filter(
                Borrowing.status == STATUS_OPEN,
                Borrowing.opened_at < cutoff,
            )
            .order_by(Borrowing.opened_at.asc(), Borrowing.id.asc())
            .all()
        )

    @staticmethod
    def detach_user(user_id: int):
        Borrowing.query.filter_by(user_id=user_id).update(
            {Borrowing.user_id: None}, synchronize_session=False
        )

    @staticmethod
    def close_if_open(borrowing_id: int, closed_at: datetime, notes: str | None = None) -> int:
        """Close the row only if it is still open; returns the number of rows closed (0 or 1)."""
        values = {
            Borrowing.status: STATUS_CLOSED,
            Borrowing.closed_at: closed_at,
            Borrowing.updated_at: closed_at,
        }
        if notes:
            values[Borrowing.notes] = notes
        closed = Borrowing.query.filter_by(id=borrowing_id, status=STATUS_OPEN).update(
            values, synchronize_session=False
        )
        db.session.commit()
        return closed

    @staticmethod
    def create(borrowing: Borrowing):
        db.session.add(borrowing)
        db.session.commit()
        return borrowing

    @staticmethod
    def commit():
        db.session.commit()
