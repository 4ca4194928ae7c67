"""API error taxonomy and the boundary that turns errors into JSON envelopes."""

from typing import Any, Dict, List, Optional

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from cyberguard.database import DatabaseError, FOREIGN_KEY, UNIQUE


class ApiError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        body = {'success': False, 'message': self.message}
        if self.errors:
            body['errors'] = self.errors
        return body


class ValidationFailure(ApiError):
    status_code = 400
    default_message = 'Validation failed'


class DuplicateResource(ApiError):
    status_code = 409
    default_message = 'Resource already exists'


class CapacityExceeded(ApiError):
    status_code = 400
    default_message = 'Capacity exceeded'


class NotFound(ApiError):
    status_code = 404
    default_message = 'Resource not found'


class AuthenticationFailure(ApiError):
    status_code = 401
    default_message = 'Authentication required'


class Unauthorized(ApiError):
    status_code = 403
    default_message = 'Insufficient permissions'


class DependencyFailure(ApiError):
    status_code = 502
    default_message = 'Upstream service failed'


class InternalError(ApiError):
    status_code = 500


# Domain-level variants


class DuplicateEmail(DuplicateResource):
    default_message = 'An application with this email already exists'


class AlreadyRegistered(DuplicateResource):
    default_message = 'You are already registered for this event'


class EventFull(CapacityExceeded):
    default_message = 'This event has reached its maximum capacity'


_DATABASE_RESPONSES = {
    UNIQUE: (409, 'Resource already exists'),
    FOREIGN_KEY: (400, 'Invalid reference'),
}


def envelope(data=None, message=None, status=200, **extra):
    body = {'success': True}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    body.update(extra)
    return jsonify(body), status


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status_code >= 500:
            app.logger.error('%s %s failed: %s', request.method, request.path, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(DatabaseError)
    def handle_database_error(error):
        app.logger.error('Database error (%s) on %s %s: %s', error.kind, request.method, request.path, error.message)
        status, message = _DATABASE_RESPONSES.get(error.kind, (500, 'Database error'))
        return jsonify({'success': False, 'message': message}), status

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if error.code == 404 and request.path.startswith('/api'):
            message = 'API endpoint not found'
        else:
            message = error.description
        return jsonify({'success': False, 'message': message}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        app.logger.exception('Unhandled error on %s %s', request.method, request.path)
        return jsonify(InternalError().to_dict()), 500
