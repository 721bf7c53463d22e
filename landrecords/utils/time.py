from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def overdue_cutoff(now: datetime, threshold_days: int) -> datetime:
    # rows opened strictly before this instant are overdue
    return now - timedelta(days=threshold_days)


def elapsed_days(opened_at: datetime, now: datetime) -> int:
    """Whole days elapsed since opened_at (floor)."""
    if opened_at is None or opened_at > now:
        return 0
    return (now - opened_at).days


def to_iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt else None
