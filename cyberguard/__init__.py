"""Application factory for the RIT CyberGuard club backend."""

from __future__ import annotations

from flask import Flask

from cyberguard.config import Config
from cyberguard.database import Database, close_store
from cyberguard.errors import register_error_handlers
from cyberguard.extensions import bcrypt, cors, jwt, mail


def create_app(config_class=Config) -> Flask:
    """Create the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # 🔧 Init
    cors.init_app(app, supports_credentials=True, origins=[app.config['FRONTEND_URL']])
    bcrypt.init_app(app)
    jwt.init_app(app)
    mail.init_app(app)
    Database.connect(app)

    # Token failure responses are registered on the shared JWTManager
    import cyberguard.auth  # noqa: F401
    from cyberguard.routes import admin_bp, contact_bp, events_bp, main_bp, members_bp

    register_error_handlers(app)

    app.register_blueprint(main_bp)
    app.register_blueprint(members_bp, url_prefix='/api/members')
    app.register_blueprint(contact_bp, url_prefix='/api/contact')
    app.register_blueprint(events_bp, url_prefix='/api/events')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    app.teardown_appcontext(close_store)

    return app
