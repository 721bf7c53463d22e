# landrecords/services/mail_service.py
from __future__ import annotations

from flask import current_app
from flask_mail import Message

from landrecords.extensions import mail


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[mail] could not send to {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def send_overdue_mail(notification) -> bool:
        """Mail the notification text to its recipient; users without email are skipped."""
        user = getattr(notification, "user", None)
        to_email = getattr(user, "email", None) if user else None
        if not to_email:
            current_app.logger.info(f"[mail] user {notification.user_id} has no email, skipped")
            return False

        subject = "Land records: overdue document"
        body = (
            f"Hello {user.full_name},\n\n"
            f"{notification.message}\n"
        )
        ok, _err = MailService.send_email(to_email, subject, body)
        return ok
