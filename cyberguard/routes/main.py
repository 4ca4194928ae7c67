import time
from datetime import datetime, timezone

from flask import Blueprint, jsonify

main_bp = Blueprint('main', __name__)

_started = time.monotonic()


@main_bp.route('/health')
def health():
    return jsonify({
        'status': 'OK',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'uptime': round(time.monotonic() - _started, 3),
    })


@main_bp.route('/api')
def index():
    return jsonify({
        'message': 'RIT CyberGuard API',
        'version': '1.0.0',
        'endpoints': {
            'GET /health': 'Server health check',
            'POST /api/members/join': 'Submit membership application',
            'GET /api/members': 'Get all members (admin only)',
            'POST /api/contact': 'Submit contact form',
            'GET /api/events': 'Get all events',
            'POST /api/events/register': 'Register for an event',
            'POST /api/admin/login': 'Admin login',
        },
    })
