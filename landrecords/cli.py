# landrecords/cli.py
# Commands (FLASK_APP=landrecords):
# - flask init-db
#   Create all tables.
# - flask create-admin --username admin --password secret123 --full-name "Records Admin"
#   Create an admin account.
# - flask sweep-overdue
#   Generate overdue notifications; meant to be triggered by cron.
import click
from flask import current_app

from landrecords.errors import LedgerError
from landrecords.extensions import db
from landrecords.models.user import ROLE_ADMIN
from landrecords.services.user_service import UserService
from landrecords.tasks.overdue_sweep import run_overdue_sweep_job


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("create-admin")
    @click.option("--username", required=True)
    @click.option("--password", required=True, prompt=True, hide_input=True)
    @click.option("--full-name", "full_name", required=True)
    @click.option("--email", default=None)
    def create_admin(username, password, full_name, email):
        """Create an admin account."""
        try:
            user = UserService.create_user({
                "username": username,
                "password": password,
                "full_name": full_name,
                "role": ROLE_ADMIN,
                "email": email,
            })
        except LedgerError as e:
            raise click.ClickException(str(e))
        click.echo(f"Admin created: id={user.id} username={user.username}")

    @app.cli.command("sweep-overdue")
    def sweep_overdue():
        """Generate overdue notifications."""
        created = run_overdue_sweep_job(current_app._get_current_object())
        click.echo(f"Overdue notifications created: {created}")
