# landrecords/models/notification.py
from sqlalchemy import text

from landrecords.extensions import db
from landrecords.utils.time import utcnow

KIND_OVERDUE = "overdue"
KIND_MANUAL = "manual"

_OVERDUE_ONLY = text("kind = 'overdue'")


class Notification(db.Model):
    __tablename__ = "notifications"
    __table_args__ = (
        # one overdue alert per borrowing even if two sweeps overlap
        db.Index(
            "uq_notifications_overdue_borrowing",
            "borrowing_id",
            unique=True,
            sqlite_where=_OVERDUE_ONLY,
            postgresql_where=_OVERDUE_ONLY,
            mssql_where=_OVERDUE_ONLY,
        ),
    )

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    borrowing_id = db.Column(db.Integer, db.ForeignKey("borrowings.id"), nullable=False, index=True)

    kind = db.Column(db.String(20), nullable=False, default=KIND_MANUAL)  # overdue/manual
    message = db.Column(db.String(1000), nullable=False)
    is_read = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    user = db.relationship("User", backref=db.backref("notifications", passive_deletes="all"))
    borrowing = db.relationship("Borrowing", backref="notifications")
