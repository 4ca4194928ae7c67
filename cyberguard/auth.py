"""Admin authentication and the gate-check decorator for protected routes."""

from __future__ import annotations

from functools import wraps
from typing import Any, Dict, Tuple

from flask import current_app, g, jsonify
from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity, verify_jwt_in_request

from cyberguard.database import Database
from cyberguard.errors import AuthenticationFailure, Unauthorized
from cyberguard.extensions import bcrypt, jwt
from cyberguard.records import AdminRecord

ADMIN_ROLE = 'admin'
# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

_dummy_hash = None


def _too_long(password: str) -> bool:
    return len(password.encode('utf-8')) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    if _too_long(password):
        raise ValueError('Password must be at most %d bytes' % MAX_PASSWORD_BYTES)
    return bcrypt.generate_password_hash(password).decode('utf-8')


def _verify(password_hash: str | None, password: str) -> bool:
    global _dummy_hash
    if password_hash is None or _too_long(password):
        # Still pay for one bcrypt check so timing does not leak usernames
        if _dummy_hash is None:
            _dummy_hash = hash_password('not-a-real-password')
        bcrypt.check_password_hash(_dummy_hash, 'not-the-password')
        return False
    return bcrypt.check_password_hash(password_hash, password)


def login(store: Database, username: str, password: str) -> Tuple[str, Dict[str, Any]]:
    """Check credentials, stamp last_login and return ``(token, admin_row)``."""
    admins = AdminRecord(store)
    admin = admins.find_by_username(username)
    if not _verify(admin['password_hash'] if admin else None, password):
        current_app.logger.warning('Failed admin login for username %r', username)
        raise AuthenticationFailure('Invalid credentials')

    admins.touch_last_login(admin['id'])
    token = create_access_token(
        identity=str(admin['id']),
        additional_claims={'username': admin['username'], 'role': admin['role']},
    )
    current_app.logger.info('Admin %s logged in', admin['username'])
    return token, admin


def admin_required(*roles):
    """Reject the request unless it carries a valid, unexpired token for one of ``roles``.

    On success the decoded identity is available as ``g.admin``.
    """
    allowed = set(roles) or {ADMIN_ROLE}

    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            verify_jwt_in_request()
            claims = get_jwt()
            if claims.get('role') not in allowed:
                raise Unauthorized()
            g.admin = {
                'id': int(get_jwt_identity()),
                'username': claims.get('username'),
                'role': claims.get('role'),
            }
            return view(*args, **kwargs)

        return wrapped

    return decorator


@jwt.unauthorized_loader
def _missing_token(reason):
    return jsonify({'success': False, 'message': 'Access denied. No token provided.'}), 401


@jwt.invalid_token_loader
def _invalid_token(reason):
    return jsonify({'success': False, 'message': 'Invalid token'}), 401


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_payload):
    return jsonify({'success': False, 'message': 'Token expired'}), 401
