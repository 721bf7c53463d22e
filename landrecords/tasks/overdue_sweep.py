# landrecords/tasks/overdue_sweep.py
from landrecords.extensions import db
from landrecords.services.notification_service import NotificationService


def run_overdue_sweep_job(app) -> int:
    """
    Entry point for an external trigger (cron via `flask sweep-overdue`).

    Runs the overdue notification sweep inside an app context and returns the
    number of notifications created.
    """
    with app.app_context():
        try:
            created = NotificationService.generate_overdue_notifications()
        except Exception as e:
            db.session.rollback()
            app.logger.exception(f"[sweep] job failed: {e}")
            raise
        app.logger.info(f"[sweep] job finished created={created}")
        return created
