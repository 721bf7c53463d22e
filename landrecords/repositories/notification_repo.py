from landrecords.models.notification import Notification
from landrecords.extensions import db


class NotificationRepo:
    @staticmethod
    def get(notification_id: int):
        return db.session.get(Notification, notification_id)

    @staticmethod
    def already_sent(borrowing_id: int) -> bool:
        return Notification.query.filter_by(borrowing_id=borrowing_id).first() is not None

    @staticmethod
    def list_by_user(user_id: int):
        return (
            Notification.query.filter_by(user_id=user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .all()
        )

    @staticmethod
    def list_unread_by_user(user_id: int):
        return (
            Notification.query.filter_by(user_id=user_id, is_read=False)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .all()
        )

    @staticmethod
    def count_unread(user_id: int) -> int:
        return Notification.query.filter_by(user_id=user_id, is_read=False).count()

    @staticmethod
    def mark_all_read(user_id: int) -> int:
        updated = Notification.query.filter_by(user_id=user_id, is_read=False).update(
            {Notification.is_read: True}, synchronize_session=False
        )
        db.session.commit()
        return updated

    @staticmethod
    def delete_for_user(user_id: int):
        Notification.query.filter_by(user_id=user_id).delete(synchronize_session=False)

    @staticmethod
    def log(entry: Notification):
        db.session.add(entry)
        db.session.commit()
        return entry

    @staticmethod
    def commit():
        db.session.commit()
