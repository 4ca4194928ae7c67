import pytest

from cyberguard import create_app
from cyberguard.bootstrap import seed_admin
from cyberguard.config import TestConfig
from cyberguard.database import Database
from cyberguard.extensions import db, mail

ADMIN_PASSWORD = 'admin123'


@pytest.fixture
def app():
    """Create a test application backed by an in-memory database with one admin."""
    app = create_app(TestConfig)

    with app.app_context():
        seed_admin(Database(db.session), ADMIN_PASSWORD)

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    """A gateway bound to an app context, for exercising records directly."""
    with app.app_context():
        yield Database(db.session)


@pytest.fixture
def outbox(app):
    with mail.record_messages() as messages:
        yield messages


@pytest.fixture
def admin_token(client):
    response = client.post('/api/admin/login', json={'username': 'admin', 'password': ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.get_json()['data']['token']


@pytest.fixture
def auth_headers(admin_token):
    return {'Authorization': f'Bearer {admin_token}'}


@pytest.fixture
def make_event(client, auth_headers):
    def _make_event(**overrides):
        payload = {
            'name': 'CTF Training Session',
            'description': 'Hands-on CTF practice',
            'schedule': '2031-09-01T15:00:00',
            'location': 'Computer Lab 2',
        }
        payload.update(overrides)
        response = client.post('/api/admin/events', json=payload, headers=auth_headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']

    return _make_event
