"""
CLI command tests.
"""

from landrecords.models.notification import Notification
from landrecords.services.user_service import UserService
from tests.conftest import borrow


class TestCommands:
    def test_create_admin(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-admin', '--username', 'root', '--password', 'secret123', '--full-name', 'Root Admin',
        ])
        assert result.exit_code == 0, result.output
        assert 'Admin created' in result.output

        users = UserService.list_users()
        assert [(u.username, u.role) for u in users] == [('root', 'admin')]

    def test_create_admin_duplicate(self, app, member):
        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-admin', '--username', 'budi', '--password', 'secret123', '--full-name', 'Dup',
        ])
        assert result.exit_code != 0
        assert 'already taken' in result.output

    def test_sweep_overdue(self, app, member, book):
        borrow(member, book, days_ago=31)
        runner = app.test_cli_runner()

        result = runner.invoke(args=['sweep-overdue'])
        assert result.exit_code == 0, result.output
        assert 'Overdue notifications created: 1' in result.output
        assert Notification.query.count() == 1

        assert 'created: 0' in runner.invoke(args=['sweep-overdue']).output
