from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token

from cyberguard.database import Database
from cyberguard.extensions import db
from cyberguard.records import AdminRecord


def _last_login(app):
    with app.app_context():
        return AdminRecord(Database(db.session)).find_by_username('admin')['last_login']


def test_login_success(client, app):
    response = client.post('/api/admin/login', json={'username': 'admin', 'password': 'admin123'})
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['token']
    assert data['admin'] == {'id': 1, 'username': 'admin', 'email': 'admin@ritrjpm.ac.in', 'role': 'admin'}
    assert 'password_hash' not in data['admin']
    assert _last_login(app) is not None


def test_login_wrong_password(client, app):
    response = client.post('/api/admin/login', json={'username': 'admin', 'password': 'wrong'})
    assert response.status_code == 401
    body = response.get_json()
    assert body == {'success': False, 'message': 'Invalid credentials'}
    assert _last_login(app) is None


def test_login_unknown_user(client):
    response = client.post('/api/admin/login', json={'username': 'ghost', 'password': 'admin123'})
    assert response.status_code == 401


def test_login_validation(client):
    response = client.post('/api/admin/login', json={})
    assert response.status_code == 400
    assert [e['field'] for e in response.get_json()['errors']] == ['username', 'password']


@pytest.mark.parametrize('username', ['admin', 'ghost'])
def test_login_with_overlong_password_is_rejected(client, app, username):
    response = client.post('/api/admin/login', json={'username': username, 'password': 'x' * 100})
    assert response.status_code == 401
    assert response.get_json() == {'success': False, 'message': 'Invalid credentials'}
    assert _last_login(app) is None


@pytest.mark.parametrize('payload, field', [
    ({'username': 'admin', 'password': 12345}, 'password'),
    ({'username': {'a': 1}, 'password': 'admin123'}, 'username'),
    ({'username': ['admin'], 'password': 'admin123'}, 'username'),
])
def test_login_rejects_non_text_credentials(client, payload, field):
    response = client.post('/api/admin/login', json=payload)
    assert response.status_code == 400
    assert [e['field'] for e in response.get_json()['errors']] == [field]


def test_gate_rejects_missing_invalid_and_expired_tokens(client, app):
    response = client.get('/api/admin/dashboard')
    assert response.status_code == 401
    assert response.get_json()['success'] is False

    response = client.get('/api/admin/dashboard', headers={'Authorization': 'Bearer not.a.token'})
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Invalid token'

    with app.app_context():
        expired = create_access_token(
            identity='1',
            additional_claims={'username': 'admin', 'role': 'admin'},
            expires_delta=timedelta(seconds=-60),
        )
    response = client.get('/api/admin/dashboard', headers={'Authorization': f'Bearer {expired}'})
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Token expired'


def test_gate_rejects_other_roles(client, app):
    with app.app_context():
        token = create_access_token(identity='7', additional_claims={'username': 'editor', 'role': 'editor'})
    response = client.get('/api/admin/dashboard', headers={'Authorization': f'Bearer {token}'})
    assert response.status_code == 403
    assert response.get_json()['success'] is False


def test_dashboard(client, auth_headers, make_event):
    make_event(name='Future Talk', schedule='2099-05-01T10:00:00')
    make_event(name='Old Talk', schedule='2001-05-01T10:00:00')
    client.post('/api/members/join', json={
        'fullName': 'Alice Lee', 'email': 'alice@example.edu', 'phone': '+19995550123',
        'department': 'CSE', 'year': 2,
    })
    client.post('/api/contact', json={
        'name': 'Bob Ray', 'email': 'bob@example.edu', 'subject': 'Sponsorship',
        'message': 'We would like to sponsor a CTF.',
    })

    data = client.get('/api/admin/dashboard', headers=auth_headers).get_json()['data']
    assert data['statistics']['members']['total'] == 1
    assert data['statistics']['contacts'] == {'total': 1, 'unread': 1, 'read': 0}
    assert data['statistics']['events'] == {'upcoming': 1, 'total': 2}
    assert [m['email'] for m in data['recentActivity']['members']] == ['alice@example.edu']
    assert [c['subject'] for c in data['recentActivity']['contacts']] == ['Sponsorship']
    assert [e['name'] for e in data['recentActivity']['events']] == ['Future Talk']


def test_create_event_validation(client, auth_headers):
    response = client.post('/api/admin/events', json={'name': 'Talk'}, headers=auth_headers)
    assert response.status_code == 400
    assert [e['field'] for e in response.get_json()['errors']] == ['schedule', 'location']


def test_update_event(client, auth_headers, make_event):
    event = make_event(maxParticipants=10)
    response = client.put(
        f"/api/admin/events/{event['id']}",
        json={'location': 'Seminar Hall A', 'status': 'completed'},
        headers=auth_headers,
    )
    assert response.status_code == 200
    updated = response.get_json()['data']
    assert updated['location'] == 'Seminar Hall A'
    assert updated['status'] == 'completed'
    assert updated['max_participants'] == 10

    response = client.put('/api/admin/events/99', json={'name': 'Ghost'}, headers=auth_headers)
    assert response.status_code == 404


def test_delete_event_removes_registrations(client, auth_headers, make_event):
    event = make_event()
    client.post('/api/events/register', json={'eventId': event['id'], 'name': 'Bob', 'email': 'bob@example.edu'})

    response = client.delete(f"/api/admin/events/{event['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert client.get(f"/api/events/{event['id']}").status_code == 404
    assert client.delete(f"/api/admin/events/{event['id']}", headers=auth_headers).status_code == 404


def test_delete_member_and_message(client, auth_headers):
    client.post('/api/members/join', json={
        'fullName': 'Alice Lee', 'email': 'alice@example.edu', 'phone': '+19995550123',
        'department': 'CSE', 'year': 2,
    })
    client.post('/api/contact', json={
        'name': 'Bob Ray', 'email': 'bob@example.edu', 'subject': 'Sponsorship',
        'message': 'We would like to sponsor a CTF.',
    })

    assert client.delete('/api/admin/members/1', headers=auth_headers).status_code == 200
    assert client.delete('/api/admin/members/1', headers=auth_headers).status_code == 404
    assert client.delete('/api/admin/contact/1', headers=auth_headers).status_code == 200
    assert client.get('/api/contact', headers=auth_headers).get_json()['count'] == 0


def test_export_members_csv(client, auth_headers):
    client.post('/api/members/join', json={
        'fullName': 'Lee, Alice', 'email': 'alice@example.edu', 'phone': '+19995550123',
        'department': 'CSE', 'year': 2,
    })

    response = client.get('/api/admin/export/members', headers=auth_headers)
    assert response.status_code == 200
    assert response.mimetype == 'text/csv'
    assert 'attachment; filename=members.csv' in response.headers['Content-Disposition']

    lines = response.get_data(as_text=True).splitlines()
    assert lines[0] == 'ID,Full Name,Email,Phone,Department,Year,Status,Created At'
    assert lines[1].startswith('1,"Lee, Alice",alice@example.edu,+19995550123,CSE,2,pending,')

    assert client.get('/api/admin/export/members').status_code == 401
