from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError

from landrecords.errors import AuthorizationError, NotFoundError
from landrecords.extensions import db
from landrecords.models.notification import Notification, KIND_MANUAL, KIND_OVERDUE
from landrecords.repositories.borrowing_repo import BorrowingRepo
from landrecords.repositories.document_repo import DocumentRepo
from landrecords.repositories.notification_repo import NotificationRepo
from landrecords.repositories.user_repo import UserRepo
from landrecords.services.borrowing_service import BorrowingService
from landrecords.services.mail_service import MailService
from landrecords.utils.time import elapsed_days, utcnow


def _overdue_message(borrowing, days: int) -> str:
    document = DocumentRepo.get(borrowing.document_type, borrowing.document_id)
    label = f"'{document.code}' " if document else ""
    return (
        f"Document {borrowing.document_type} {label}(ID: {borrowing.document_id}) "
        f"has been on loan for {days} days and is overdue. Please return it as soon as possible."
    )


class NotificationService:
    @staticmethod
    def create_notification(user_id: int, borrowing_id: int, message: str):
        if not UserRepo.get_by_id(user_id):
            raise NotFoundError("user", f"User {user_id} not found")
        if not BorrowingRepo.get(borrowing_id):
            raise NotFoundError("borrowing", f"Borrowing {borrowing_id} not found")

        return NotificationRepo.log(Notification(
            user_id=user_id,
            borrowing_id=borrowing_id,
            kind=KIND_MANUAL,
            message=message,
            is_read=False,
        ))

    @staticmethod
    def list_by_user(user_id: int):
        return NotificationRepo.list_by_user(user_id)

    @staticmethod
    def list_unread_by_user(user_id: int):
        return NotificationRepo.list_unread_by_user(user_id)

    @staticmethod
    def count_unread(user_id: int) -> int:
        return NotificationRepo.count_unread(user_id)

    @staticmethod
    def mark_read(notification_id: int, actor_id: int | None = None):
        notification = NotificationRepo.get(notification_id)
        if not notification:
            raise NotFoundError("notification", f"Notification {notification_id} not found")
        if actor_id is not None and notification.user_id != actor_id:
            raise AuthorizationError("not_owner", "This notification belongs to another user")

        notification.is_read = True
        NotificationRepo.commit()
        return notification

    @staticmethod
    def mark_all_read(user_id: int) -> int:
        return NotificationRepo.mark_all_read(user_id)

    @staticmethod
    def generate_overdue_notifications(now: datetime | None = None, threshold_days: int | None = None) -> int:
        """
        Sweep: one overdue notification per open overdue borrowing.

        Borrowings that already have a notification are skipped, so re-running
        against unchanged state creates nothing. Every insert commits on its
        own; a failing row is rolled back and logged and the sweep goes on.
        Returns the number of notifications created.
        """
        now = now or utcnow()
        overdue = BorrowingService.list_overdue(threshold_days=threshold_days, now=now)
        mail_enabled = current_app.config.get("OVERDUE_MAIL_ENABLED", False)

        created = 0
        for borrowing_id in [b.id for b in overdue]:
            try:
                b = BorrowingRepo.get(borrowing_id)
                if b is None or b.user_id is None or NotificationRepo.already_sent(b.id):
                    continue

                notification = NotificationRepo.log(Notification(
                    user_id=b.user_id,
                    borrowing_id=b.id,
                    kind=KIND_OVERDUE,
                    message=_overdue_message(b, elapsed_days(b.opened_at, now)),
                    is_read=False,
                    created_at=now,
                ))
            except IntegrityError:
                # another sweep inserted it between the check and the insert
                db.session.rollback()
                current_app.logger.info(f"[sweep] borrowing {borrowing_id} already notified, skipped")
                continue
            except Exception as e:
                db.session.rollback()
                current_app.logger.exception(f"[sweep] borrowing {borrowing_id} failed: {e}")
                continue

            created += 1
            if mail_enabled:
                MailService.send_overdue_mail(notification)

        current_app.logger.info(f"[sweep] overdue={len(overdue)} created={created}")
        return created
