"""
Pytest fixtures for the land-record lending registry.

Every test gets a fresh app bound to an in-memory SQLite database.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from landrecords import create_app
from landrecords.config import TestConfig
from landrecords.extensions import db
from landrecords.models.documents import DocumentType
from landrecords.services.borrowing_service import BorrowingService
from landrecords.services.catalog_service import CatalogService
from landrecords.services.user_service import UserService
from landrecords.utils.time import utcnow

PASSWORD = "Password123!"


@pytest.fixture(scope='function')
def app():
    """Create application for testing."""
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Database session bound to the test app."""
    yield db.session
    db.session.rollback()


def make_user(username, role="user", section=None, email=None, full_name=None):
    return UserService.create_user({
        "username": username,
        "password": PASSWORD,
        "full_name": full_name or username.replace("_", " ").title(),
        "role": role,
        "section": section,
        "email": email,
    })


def make_property_book(code="HM-001"):
    return CatalogService.create_document(DocumentType.PROPERTY_BOOK.value, {
        "code": code,
        "owner_name": "Siti Aminah",
        "village": "Sukamaju",
        "district": "Cibeber",
    })


def make_survey_deed(code="SU-001"):
    return CatalogService.create_document(DocumentType.SURVEY_DEED.value, {
        "code": code,
        "year": 1998,
        "area": Decimal("245.50"),
        "village": "Sukamaju",
    })


def make_archival_dossier(code="HM-001"):
    return CatalogService.create_document(DocumentType.ARCHIVAL_DOSSIER.value, {
        "code": code,
        "village": "Sukamaju",
        "district": "Cibeber",
        "dossier_ref": "DI208-0042",
    })


def borrow(user, document, days_ago=0, notes=None):
    """Open a borrowing as if it had been opened `days_ago` days ago."""
    return BorrowingService.create_borrowing(
        user.id,
        document.document_type,
        document.id,
        notes,
        now=utcnow() - timedelta(days=days_ago),
    )


@pytest.fixture(scope='function')
def admin(app):
    return make_user("admin", role="admin", full_name="Records Admin")


@pytest.fixture(scope='function')
def member(app):
    return make_user("budi", role="user", section="measurement", email="budi@example.com", full_name="Budi Santoso")


@pytest.fixture(scope='function')
def other_member(app):
    return make_user("wati", role="user", section="registration", full_name="Wati Lestari")


@pytest.fixture(scope='function')
def section_head(app):
    return make_user("kasi", role="section_head", section="measurement", full_name="Head Of Measurement")


@pytest.fixture(scope='function')
def book(app):
    return make_property_book()


@pytest.fixture(scope='function')
def deed(app):
    return make_survey_deed()


@pytest.fixture(scope='function')
def dossier(app):
    return make_archival_dossier()


def get_auth_token(client, username: str, password: str = PASSWORD) -> str:
    """Helper to get auth token for a user."""
    response = client.post('/auth/login', json={
        'username': username,
        'password': password
    })
    if response.status_code == 200:
        return response.json.get('access_token')
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture(scope='function')
def admin_headers(client, admin):
    return auth_headers(get_auth_token(client, admin.username))


@pytest.fixture(scope='function')
def member_headers(client, member):
    return auth_headers(get_auth_token(client, member.username))


@pytest.fixture(scope='function')
def section_head_headers(client, section_head):
    return auth_headers(get_auth_token(client, section_head.username))
