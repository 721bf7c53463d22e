from sqlalchemy import text

from landrecords.extensions import db
from landrecords.models.documents import DocumentType
from landrecords.utils.time import utcnow

STATUS_OPEN = "open"
STATUS_CLOSED = "closed"

_OPEN_ONLY = text("status = 'open'")


class Borrowing(db.Model):
    __tablename__ = "borrowings"
    __table_args__ = (
        # at most one open borrowing per document; closes the check-then-insert race
        db.Index(
            "uq_borrowings_open_document",
            "document_type",
            "document_id",
            unique=True,
            sqlite_where=_OPEN_ONLY,
            postgresql_where=_OPEN_ONLY,
            mssql_where=_OPEN_ONLY,
        ),
        db.CheckConstraint(
            "(status = 'open' AND closed_at IS NULL) OR (status = 'closed' AND closed_at IS NOT NULL)",
            name="ck_borrowings_status_closed_at",
        ),
        db.CheckConstraint(
            "document_type IN ({})".format(", ".join(f"'{t}'" for t in DocumentType.values())),
            name="ck_borrowings_document_type",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)

    # nulled when a user with only closed borrowings is removed; the ledger row stays
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # polymorphic: document_id points into the catalog selected by document_type
    document_type = db.Column(db.String(32), nullable=False, index=True)
    document_id = db.Column(db.Integer, nullable=False)

    opened_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    closed_at = db.Column(db.DateTime, nullable=True)

    status = db.Column(db.String(20), nullable=False, default=STATUS_OPEN, index=True)  # open/closed
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = db.relationship("User", backref=db.backref("borrowings", passive_deletes="all"))

    @property
    def is_open(self) -> bool:
        return self.status == STATUS_OPEN

    def __repr__(self):
        return f"<Borrowing {self.id} {self.document_type}:{self.document_id} {self.status}>"
