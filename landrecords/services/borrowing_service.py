from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError

from landrecords.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from landrecords.extensions import db
from landrecords.models.borrowing import Borrowing, STATUS_OPEN
from landrecords.models.documents import DocumentType
from landrecords.models.user import ROLE_ADMIN
from landrecords.repositories.borrowing_repo import BorrowingRepo
from landrecords.repositories.document_repo import DocumentRepo
from landrecords.repositories.user_repo import UserRepo
from landrecords.utils.time import elapsed_days, overdue_cutoff, utcnow

DEFAULT_OVERDUE_THRESHOLD_DAYS = 30


class BorrowingService:
    """
    The borrowing ledger.

    A borrowing is opened by create_borrowing and closed exactly once by
    return_borrowing. At most one open borrowing may exist per
    (document_type, document_id); availability and overdue status are derived
    from these rows at read time.
    """

    @staticmethod
    def threshold_days() -> int:
        return int(current_app.config.get("OVERDUE_THRESHOLD_DAYS", DEFAULT_OVERDUE_THRESHOLD_DAYS))

    @staticmethod
    def is_overdue(borrowing: Borrowing, now: datetime | None = None, threshold_days: int | None = None) -> bool:
        if not borrowing.is_open:
            return False
        now = now or utcnow()
        if threshold_days is None:
            threshold_days = BorrowingService.threshold_days()
        return borrowing.opened_at < overdue_cutoff(now, threshold_days)

    @staticmethod
    def days_open(borrowing: Borrowing, now: datetime | None = None) -> int:
        end = borrowing.closed_at or now or utcnow()
        return elapsed_days(borrowing.opened_at, end)

    @staticmethod
    def create_borrowing(user_id: int, document_type: str, document_id: int, notes: str | None = None,
                         now: datetime | None = None):
        if document_type not in DocumentType.values():
            raise ValidationError("document_type", f"Unknown document type: {document_type}")

        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFoundError("user", f"User {user_id} not found")

        document = DocumentRepo.get(document_type, document_id)
        if not document:
            raise NotFoundError("document", f"Document {document_type} {document_id} not found")

        if BorrowingRepo.find_open_for_document(document_type, document_id):
            raise ConflictError("already_borrowed", f"Document {document_type} {document_id} is already borrowed")

        now = now or utcnow()
        borrowing = Borrowing(
            user_id=user.id,
            document_type=document_type,
            document_id=document.id,
            opened_at=now,
            closed_at=None,
            status=STATUS_OPEN,
            notes=notes or None,
            created_at=now,
            updated_at=now,
        )

        try:
            BorrowingRepo.create(borrowing)
        except IntegrityError:
            # a concurrent writer opened the same document first
            db.session.rollback()
            raise ConflictError("already_borrowed", f"Document {document_type} {document_id} is already borrowed")

        current_app.logger.info(
            f"[borrowing] opened id={borrowing.id} user={user.id} document={document_type}:{document_id}"
        )
        return borrowing

    @staticmethod
    def return_borrowing(borrowing_id: int, notes: str | None = None, actor_id: int | None = None,
                         actor_role: str | None = None, now: datetime | None = None):
        """
        Close an open borrowing.

        Absent and already-closed ids both fail with NotFoundError("open_borrowing").
        When actor_id is given, non-admin actors may only close their own borrowings.
        """
        borrowing = BorrowingRepo.get_open(borrowing_id)
        if not borrowing:
            raise NotFoundError("open_borrowing", f"Borrowing {borrowing_id} not found or already returned")

        if actor_id is not None and actor_role != ROLE_ADMIN and borrowing.user_id != actor_id:
            raise AuthorizationError("not_owner", "This borrowing belongs to another user")

        # closes only a row that is still open
        now = now or utcnow()
        if not BorrowingRepo.close_if_open(borrowing.id, now, notes):
            raise NotFoundError("open_borrowing", f"Borrowing {borrowing_id} not found or already returned")
        db.session.refresh(borrowing)

        current_app.logger.info(
            f"[borrowing] closed id={borrowing.id} document={borrowing.document_type}:{borrowing.document_id}"
        )
        return borrowing

    @staticmethod
    def list_borrowings():
        return BorrowingRepo.list_all()

    @staticmethod
    def list_by_user(user_id: int):
        return BorrowingRepo.list_by_user(user_id)

    @staticmethod
    def list_open():
        return BorrowingRepo.list_open()

    @staticmethod
    def list_overdue(threshold_days: int | None = None, now: datetime | None = None):
        """Open borrowings opened strictly before now - threshold_days, oldest first."""
        if threshold_days is None:
            threshold_days = BorrowingService.threshold_days()
        now = now or utcnow()
        return BorrowingRepo.find_overdue(overdue_cutoff(now, threshold_days))

    @staticmethod
    def get_borrowing_by_id(borrowing_id: int):
        return BorrowingRepo.get(borrowing_id)
