import importlib
import smtplib

from cyberguard import config
from cyberguard.extensions import mail
from cyberguard.notifications import send_email

ALICE = {
    'fullName': 'Alice Lee',
    'email': 'alice@example.edu',
    'phone': '+19995550123',
    'department': 'CSE',
    'year': 2,
}


class _FlakyConnection:
    """Stands in for a Flask-Mail connection; fails for one recipient."""

    def __init__(self, fail_for, sent):
        self.fail_for = fail_for
        self.sent = sent
        self.host = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def send(self, message):
        if self.fail_for in message.recipients:
            raise smtplib.SMTPRecipientsRefused({self.fail_for: (550, b'rejected')})
        self.sent.append(message)


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'OK'
    assert body['uptime'] >= 0
    assert body['timestamp']


def test_api_index(client):
    body = client.get('/api').get_json()
    assert 'POST /api/members/join' in body['endpoints']


def test_unknown_api_route_is_json_404(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'message': 'API endpoint not found'}


def test_failed_confirmation_does_not_fail_join(client, monkeypatch):
    sent = []
    monkeypatch.setattr(mail, 'connect', lambda: _FlakyConnection('alice@example.edu', sent))

    response = client.post('/api/members/join', json=ALICE)
    assert response.status_code == 201

    # the admin notice still went out
    assert [m.recipients for m in sent] == [['admin-inbox@example.edu']]

    # and the application was stored
    assert client.post('/api/members/join', json=ALICE).status_code == 409


def test_failed_admin_notice_does_not_block_confirmation(client, monkeypatch):
    sent = []
    monkeypatch.setattr(mail, 'connect', lambda: _FlakyConnection('admin-inbox@example.edu', sent))

    response = client.post('/api/members/join', json=ALICE)
    assert response.status_code == 201
    assert [m.recipients for m in sent] == [['alice@example.edu']]


def test_unreachable_mail_server_is_logged_not_raised(client, monkeypatch, caplog):
    def _refuse():
        raise ConnectionRefusedError('mail server down')

    monkeypatch.setattr(mail, 'connect', _refuse)
    response = client.post('/api/contact', json={
        'name': 'Bob Ray', 'email': 'bob@example.edu', 'subject': 'Sponsorship',
        'message': 'We would like to sponsor a CTF.',
    })
    assert response.status_code == 201
    assert 'Failed to send email' in caplog.text


def test_send_email_delivers_inline(app, outbox):
    with app.app_context():
        assert send_email('carol@example.edu', 'Hello', '<p>Hi</p>') is True
    assert [(m.recipients, m.subject) for m in outbox] == [(['carol@example.edu'], 'Hello')]


def test_send_email_reports_failure(app, monkeypatch):
    monkeypatch.setattr(mail, 'connect', lambda: _FlakyConnection('carol@example.edu', []))
    with app.app_context():
        assert send_email('carol@example.edu', 'Hello', '<p>Hi</p>') is False


def test_config_reads_documented_environment_names(monkeypatch):
    monkeypatch.setenv('JWT_SECRET_KEY', 'jwt-secret-from-environment-0123456789')
    monkeypatch.setenv('MAIL_USERNAME', 'club@example.edu')
    monkeypatch.setenv('MAIL_PASSWORD', 'app-password')
    try:
        reloaded = importlib.reload(config)
        assert reloaded.Config.JWT_SECRET_KEY == 'jwt-secret-from-environment-0123456789'
        assert reloaded.Config.MAIL_USERNAME == 'club@example.edu'
        assert reloaded.Config.MAIL_PASSWORD == 'app-password'
        assert reloaded.Config.MAIL_DEFAULT_SENDER == ('RIT CyberGuard', 'club@example.edu')
    finally:
        monkeypatch.undo()
        importlib.reload(config)
