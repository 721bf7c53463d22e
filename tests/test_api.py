"""
HTTP tests: auth, role checks, the error envelope and the main flows.
"""

from landrecords.services.user_service import UserService
from tests.conftest import auth_headers, borrow, get_auth_token


class TestAuth:
    def test_login_returns_token_without_credentials(self, client, member):
        response = client.post('/auth/login', json={'username': 'budi', 'password': 'Password123!'})
        assert response.status_code == 200
        assert response.json['access_token']
        assert 'password_hash' not in response.json['user']
        assert response.json['user']['section'] == 'measurement'

    def test_login_wrong_password(self, client, member):
        response = client.post('/auth/login', json={'username': 'budi', 'password': 'nope-nope'})
        assert response.status_code == 401
        assert response.json['success'] is False
        assert response.json['reason'] == 'invalid_credentials'

    def test_login_missing_fields(self, client):
        response = client.post('/auth/login', json={'username': 'budi'})
        assert response.status_code == 400
        assert response.json['error'] == 'validation'

    def test_inactive_user_cannot_login(self, client, member, admin_headers):
        client.put(f'/users/{member.id}', json={'is_active': False}, headers=admin_headers)
        assert get_auth_token(client, 'budi') is None

    def test_me(self, client, member_headers):
        response = client.get('/auth/me', headers=member_headers)
        assert response.status_code == 200
        assert response.json['data']['username'] == 'budi'

    def test_requires_token(self, client, app):
        for path in ('/auth/me', '/borrowings/my', '/property-books/', '/reports/dashboard', '/notifications/my'):
            response = client.get(path)
            assert response.status_code == 401, path
            assert response.json['success'] is False

    def test_garbage_token(self, client, app):
        response = client.get('/borrowings/my', headers=auth_headers('not-a-jwt'))
        assert response.status_code == 401


class TestRoles:
    def test_member_blocked_from_admin_routes(self, client, member_headers):
        assert client.get('/users/', headers=member_headers).status_code == 403
        assert client.post('/property-books/', json={}, headers=member_headers).status_code == 403
        assert client.post('/notifications/sweep', headers=member_headers).status_code == 403
        assert client.get('/reports/overdue', headers=member_headers).status_code == 403
        assert client.get('/borrowings/', headers=member_headers).status_code == 403

    def test_section_head_can_read_reports(self, client, section_head_headers):
        assert client.get('/reports/documents', headers=section_head_headers).status_code == 200
        assert client.get('/borrowings/overdue', headers=section_head_headers).status_code == 200
        assert client.get('/users/', headers=section_head_headers).status_code == 403


class TestDirectoryBackedAccess:
    def test_demoted_admin_loses_admin_routes(self, client, admin, admin_headers):
        assert client.get('/users/', headers=admin_headers).status_code == 200
        UserService.update_user(admin.id, {'role': 'user'})
        assert client.get('/users/', headers=admin_headers).status_code == 403

    def test_promoted_user_gains_report_routes(self, client, member, member_headers):
        assert client.get('/reports/documents', headers=member_headers).status_code == 403
        UserService.update_user(member.id, {'role': 'section_head'})
        assert client.get('/reports/documents', headers=member_headers).status_code == 200

    def test_deactivated_user_token_rejected(self, client, member, member_headers):
        UserService.update_user(member.id, {'is_active': False})
        response = client.get('/borrowings/my', headers=member_headers)
        assert response.status_code == 401
        assert response.json['success'] is False

    def test_deleted_user_token_rejected(self, client, member, member_headers):
        UserService.delete_user(member.id)
        assert client.get('/auth/me', headers=member_headers).status_code == 401

    def test_dashboard_uses_current_section(self, client, member, other_member, section_head,
                                            section_head_headers, book, deed):
        borrow(member, book)
        borrow(other_member, deed)
        UserService.update_user(section_head.id, {'section': 'registration'})

        stats = client.get('/reports/dashboard', headers=section_head_headers).json['data']
        assert stats['total_users'] == 2
        assert stats['total_borrowings'] == 1


class TestUsersApi:
    def test_create_and_list_without_password_hash(self, client, admin_headers):
        response = client.post('/users/', json={
            'username': 'sari',
            'password': 'secret123',
            'full_name': 'Sari Dewi',
            'role': 'user',
            'section': 'registration',
        }, headers=admin_headers)
        assert response.status_code == 201
        assert 'password' not in response.json['data']
        assert 'password_hash' not in response.json['data']

        listed = client.get('/users/', headers=admin_headers).json['data']
        assert {u['username'] for u in listed} == {'admin', 'sari'}
        assert all('password_hash' not in u for u in listed)

    def test_duplicate_username(self, client, admin_headers, member):
        response = client.post('/users/', json={
            'username': 'budi',
            'password': 'secret123',
            'full_name': 'Another Budi',
            'role': 'user',
        }, headers=admin_headers)
        assert response.status_code == 409
        assert response.json['reason'] == 'duplicate_username'

    def test_invalid_role(self, client, admin_headers):
        response = client.post('/users/', json={
            'username': 'sari',
            'password': 'secret123',
            'full_name': 'Sari Dewi',
            'role': 'superuser',
        }, headers=admin_headers)
        assert response.status_code == 400
        assert response.json['reason'] == 'role'

    def test_delete_absent(self, client, admin_headers):
        response = client.delete('/users/999', headers=admin_headers)
        assert response.status_code == 404
        assert response.json['deleted'] is False


class TestCatalogApi:
    def test_crud_and_availability(self, client, admin_headers, member, member_headers):
        response = client.post('/survey-deeds/', json={
            'code': 'SU-010', 'year': 2001, 'area': '120.5', 'village': 'Mekarsari',
        }, headers=admin_headers)
        assert response.status_code == 201
        deed = response.json['data']
        assert deed['area'] == 120.5
        assert deed['is_available'] is True

        client.post('/borrowings/', json={'document_type': 'survey_deed', 'document_id': deed['id']},
                    headers=member_headers)

        fetched = client.get(f"/survey-deeds/{deed['id']}", headers=member_headers).json['data']
        assert fetched['is_available'] is False
        listed = client.get('/survey-deeds/', headers=member_headers).json['data']
        assert [d['is_available'] for d in listed] == [False]

        blocked = client.delete(f"/survey-deeds/{deed['id']}", headers=admin_headers)
        assert blocked.status_code == 409
        assert blocked.json['reason'] == 'active_borrowings'

    def test_validation(self, client, admin_headers):
        response = client.post('/survey-deeds/', json={
            'code': 'SU-011', 'year': 2001, 'area': -3, 'village': 'Mekarsari',
        }, headers=admin_headers)
        assert response.status_code == 400
        assert response.json['reason'] == 'area'

    def test_partial_update(self, client, admin_headers, book):
        response = client.put(f'/property-books/{book.id}', json={'village': 'Cikaret'}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json['data']['village'] == 'Cikaret'
        assert response.json['data']['owner_name'] == 'Siti Aminah'

    def test_missing_document(self, client, member_headers):
        response = client.get('/archival-dossiers/42', headers=member_headers)
        assert response.status_code == 404
        assert response.json['success'] is False


class TestBorrowingApi:
    def test_borrow_and_return(self, client, member, member_headers, book):
        response = client.post('/borrowings/', json={
            'document_type': 'property_book', 'document_id': book.id, 'notes': 'field survey',
        }, headers=member_headers)
        assert response.status_code == 201
        data = response.json['data']
        assert data['status'] == 'open'
        assert data['user_id'] == member.id
        assert data['user_name'] == 'Budi Santoso'
        assert data['is_overdue'] is False

        again = client.post('/borrowings/', json={'document_type': 'property_book', 'document_id': book.id},
                            headers=member_headers)
        assert again.status_code == 409
        assert again.json == {
            'success': False,
            'error': 'conflict',
            'reason': 'already_borrowed',
            'message': again.json['message'],
        }

        returned = client.post(f"/borrowings/{data['id']}/return", json={}, headers=member_headers)
        assert returned.status_code == 200
        assert returned.json['data']['status'] == 'closed'
        assert returned.json['data']['closed_at'] is not None
        assert returned.json['data']['notes'] == 'field survey'

        twice = client.post(f"/borrowings/{data['id']}/return", headers=member_headers)
        assert twice.status_code == 404
        assert twice.json['reason'] == 'open_borrowing'

    def test_unknown_document(self, client, member_headers):
        response = client.post('/borrowings/', json={'document_type': 'survey_deed', 'document_id': 77},
                               headers=member_headers)
        assert response.status_code == 404
        assert response.json['reason'] == 'document'

    def test_bad_document_type(self, client, member_headers):
        response = client.post('/borrowings/', json={'document_type': 'map', 'document_id': 1},
                               headers=member_headers)
        assert response.status_code == 400

    def test_member_cannot_borrow_for_someone_else(self, client, member_headers, other_member, book):
        response = client.post('/borrowings/', json={
            'document_type': 'property_book', 'document_id': book.id, 'user_id': other_member.id,
        }, headers=member_headers)
        assert response.status_code == 403

    def test_admin_borrows_on_behalf(self, client, admin_headers, member, book):
        response = client.post('/borrowings/', json={
            'document_type': 'property_book', 'document_id': book.id, 'user_id': member.id,
        }, headers=admin_headers)
        assert response.status_code == 201
        assert response.json['data']['user_id'] == member.id

    def test_member_cannot_return_or_read_others(self, client, other_member, member_headers, book):
        b = borrow(other_member, book)
        assert client.post(f'/borrowings/{b.id}/return', headers=member_headers).status_code == 403
        assert client.get(f'/borrowings/{b.id}', headers=member_headers).status_code == 403

    def test_my_borrowings(self, client, member, other_member, member_headers, book, deed):
        mine = borrow(member, book)
        borrow(other_member, deed)
        data = client.get('/borrowings/my', headers=member_headers).json['data']
        assert [b['id'] for b in data] == [mine.id]

    def test_overdue_listing(self, client, admin_headers, member, book, deed):
        late = borrow(member, book, days_ago=45)
        recent = borrow(member, deed, days_ago=10)

        data = client.get('/borrowings/overdue', headers=admin_headers).json['data']
        assert [b['id'] for b in data] == [late.id]
        assert data[0]['is_overdue'] is True

        custom = client.get('/borrowings/overdue?threshold_days=7', headers=admin_headers).json['data']
        assert [b['id'] for b in custom] == [late.id, recent.id]

        bad = client.get('/borrowings/overdue?threshold_days=soon', headers=admin_headers)
        assert bad.status_code == 400


class TestNotificationApi:
    def test_sweep_and_inbox(self, client, admin_headers, member, member_headers, book):
        borrow(member, book, days_ago=40)

        response = client.post('/notifications/sweep', headers=admin_headers)
        assert response.status_code == 200
        assert response.json['created'] == 1
        assert client.post('/notifications/sweep', headers=admin_headers).json['created'] == 0

        inbox = client.get('/notifications/my/unread', headers=member_headers).json
        assert inbox['count'] == 1
        unread = inbox['data']
        assert len(unread) == 1
        assert unread[0]['kind'] == 'overdue'

        read = client.post(f"/notifications/{unread[0]['id']}/read", headers=member_headers)
        assert read.json['data']['is_read'] is True
        assert client.get('/notifications/my/unread', headers=member_headers).json['data'] == []
        assert len(client.get('/notifications/my', headers=member_headers).json['data']) == 1

    def test_read_all(self, client, admin_headers, member, member_headers, book):
        b = borrow(member, book)
        for message in ('first', 'second'):
            created = client.post('/notifications/', json={
                'user_id': member.id, 'borrowing_id': b.id, 'message': message,
            }, headers=admin_headers)
            assert created.status_code == 201

        response = client.post('/notifications/read-all', headers=member_headers)
        assert response.json['updated'] == 2

    def test_cannot_read_someone_elses(self, client, admin_headers, other_member, member_headers, book):
        b = borrow(other_member, book)
        created = client.post('/notifications/', json={
            'user_id': other_member.id, 'borrowing_id': b.id, 'message': 'hello',
        }, headers=admin_headers).json['data']
        response = client.post(f"/notifications/{created['id']}/read", headers=member_headers)
        assert response.status_code == 403


class TestReportsApi:
    def test_dashboard_by_role(self, client, admin_headers, member, other_member, member_headers,
                               section_head_headers, book, deed):
        borrow(member, book, days_ago=40)
        borrow(other_member, deed)

        admin_stats = client.get('/reports/dashboard', headers=admin_headers).json['data']
        assert admin_stats['total_borrowings'] == 2
        assert admin_stats['overdue_borrowings'] == 1

        own = client.get('/reports/dashboard', headers=member_headers).json['data']
        assert own['total_users'] == 1
        assert own['total_borrowings'] == 1

        section = client.get('/reports/dashboard', headers=section_head_headers).json['data']
        assert section['total_users'] == 2
        assert section['total_borrowings'] == 1

    def test_overdue_report_serializes_dates(self, client, admin_headers, member, book):
        borrow(member, book, days_ago=40)
        rows = client.get('/reports/overdue', headers=admin_headers).json['data']
        assert rows[0]['days_overdue'] == 10
        assert isinstance(rows[0]['opened_at'], str)


class TestMisc:
    def test_health(self, client):
        assert client.get('/health').json == {'ok': True}

    def test_unknown_route_uses_envelope(self, client):
        response = client.get('/nowhere')
        assert response.status_code == 404
        assert response.json['success'] is False
