# landrecords/services/report_service.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import and_, case, func

from landrecords.extensions import db
from landrecords.models.borrowing import Borrowing, STATUS_OPEN, STATUS_CLOSED
from landrecords.models.documents import DocumentType
from landrecords.models.user import User, ROLE_ADMIN, ROLE_SECTION_HEAD
from landrecords.repositories.document_repo import DocumentRepo
from landrecords.repositories.user_repo import UserRepo
from landrecords.services.borrowing_service import BorrowingService
from landrecords.services.user_service import UserService
from landrecords.utils.time import elapsed_days, overdue_cutoff, utcnow


def _count_where(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


class ReportService:
    """Read-only aggregations over the ledger, catalogs and directory."""

    @staticmethod
    def document_report() -> list[dict]:
        rows = db.session.query(
            Borrowing.document_type,
            func.count(Borrowing.id).label("total_borrowed"),
            _count_where(Borrowing.status == STATUS_CLOSED).label("total_returned"),
            _count_where(Borrowing.status == STATUS_OPEN).label("currently_borrowed"),
        ).group_by(Borrowing.document_type).all()
        by_type = {r.document_type: r for r in rows}

        # every type is reported, zeroed when it has no ledger rows
        report = []
        for document_type in DocumentType.values():
            r = by_type.get(document_type)
            report.append({
                "document_type": document_type,
                "total_borrowed": int(r.total_borrowed) if r else 0,
                "total_returned": int(r.total_returned) if r else 0,
                "currently_borrowed": int(r.currently_borrowed) if r else 0,
            })
        return report

    @staticmethod
    def user_borrowing_report(now: datetime | None = None) -> list[dict]:
        now = now or utcnow()
        cutoff = overdue_cutoff(now, BorrowingService.threshold_days())

        total = func.count(Borrowing.id)
        rows = (
            db.session.query(
                User.id.label("user_id"),
                User.full_name.label("user_name"),
                total.label("total_borrowings"),
                _count_where(and_(Borrowing.status == STATUS_OPEN, Borrowing.opened_at < cutoff)).label("overdue_borrowings"),
            )
            .outerjoin(Borrowing, Borrowing.user_id == User.id)
            .group_by(User.id, User.full_name)
            .order_by(total.desc(), User.id.asc())
            .all()
        )
        return [
            {
                "user_id": r.user_id,
                "user_name": r.user_name,
                "total_borrowings": int(r.total_borrowings or 0),
                "overdue_borrowings": int(r.overdue_borrowings or 0),
            }
            for r in rows
        ]

    @staticmethod
    def overdue_report(now: datetime | None = None) -> list[dict]:
        """
        One row per open overdue borrowing, oldest first.

        days_overdue counts days past the threshold, not total days on loan:
        opened 40 days ago with a 30 day threshold gives 10.
        """
        now = now or utcnow()
        threshold = BorrowingService.threshold_days()

        rows = (
            db.session.query(Borrowing, User)
            .join(User, User.id == Borrowing.user_id)
            .filter(
                Borrowing.status == STATUS_OPEN,
                Borrowing.opened_at < overdue_cutoff(now, threshold),
            )
            .order_by(Borrowing.opened_at.asc(), Borrowing.id.asc())
            .all()
        )
        return [
            {
                "borrowing_id": b.id,
                "user_id": u.id,
                "user_name": u.full_name,
                "document_type": b.document_type,
                "document_id": b.document_id,
                "opened_at": b.opened_at,
                "days_overdue": elapsed_days(b.opened_at, now) - threshold,
            }
            for b, u in rows
        ]

    @staticmethod
    def dashboard_stats(user_ids: list[int] | None = None, now: datetime | None = None) -> dict:
        """
        Global stats, or borrowing counts restricted to user_ids.

        total_documents is always global. With user_ids, total_users is the
        size of the id set and an empty set yields zero borrowing counts.
        """
        now = now or utcnow()
        cutoff = overdue_cutoff(now, BorrowingService.threshold_days())

        stats = {
            "total_documents": DocumentRepo.count_all(),
            "total_users": UserRepo.count() if user_ids is None else len(user_ids),
            "total_borrowings": 0,
            "active_borrowings": 0,
            "overdue_borrowings": 0,
        }
        if user_ids is not None and not user_ids:
            return stats

        query = db.session.query(
            func.count(Borrowing.id).label("total_borrowings"),
            _count_where(Borrowing.status == STATUS_OPEN).label("active_borrowings"),
            _count_where(and_(Borrowing.status == STATUS_OPEN, Borrowing.opened_at < cutoff)).label("overdue_borrowings"),
        )
        if user_ids is not None:
            query = query.filter(Borrowing.user_id.in_(user_ids))

        row = query.one()
        stats["total_borrowings"] = int(row.total_borrowings or 0)
        stats["active_borrowings"] = int(row.active_borrowings or 0)
        stats["overdue_borrowings"] = int(row.overdue_borrowings or 0)
        return stats

    @staticmethod
    def dashboard_for(user_id: int, role: str, section: str | None = None, now: datetime | None = None) -> dict:
        """Dashboard scoped by the caller: admin sees all, section heads their section, users themselves."""
        if role == ROLE_ADMIN:
            return ReportService.dashboard_stats(now=now)
        if role == ROLE_SECTION_HEAD:
            return ReportService.dashboard_stats(user_ids=UserService.list_section_user_ids(section), now=now)
        return ReportService.dashboard_stats(user_ids=[user_id], now=now)
