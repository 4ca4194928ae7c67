import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _flag(name, default='false'):
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')


class Config:
    # Development fallbacks; set real secrets in the environment for production.
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-secret-key-change-me'
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY') or 'dev-jwt-secret-change-me-before-deploying'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)

    DATABASE_URL = os.getenv('DATABASE_URL')
    SQLALCHEMY_DATABASE_URI = DATABASE_URL or 'sqlite:///club.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Seconds to wait on a locked SQLite database before failing
    SQLALCHEMY_ENGINE_OPTIONS = (
        {'connect_args': {'timeout': int(os.getenv('DB_TIMEOUT', 5))}}
        if SQLALCHEMY_DATABASE_URI.startswith('sqlite') else {}
    )

    FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:8080')
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', 'cyberguard@ritrjpm.ac.in')
    DEFAULT_ADMIN_PASSWORD = os.getenv('DEFAULT_ADMIN_PASSWORD', 'admin123')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    MAIL_SERVER = os.getenv('MAIL_SERVER', 'localhost')
    MAIL_PORT = int(os.getenv('MAIL_PORT', 587))
    MAIL_USE_TLS = _flag('MAIL_USE_TLS', 'true')
    MAIL_USERNAME = os.getenv('MAIL_USERNAME')
    MAIL_PASSWORD = os.getenv('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = ('RIT CyberGuard', os.getenv('MAIL_USERNAME') or 'noreply@ritcyberguard.com')
    MAIL_SUPPRESS_SEND = _flag('MAIL_SUPPRESS_SEND')
    # Deliver on a background thread so a slow mail server never delays a response
    MAIL_ASYNC = _flag('MAIL_ASYNC', 'true')
    MAIL_TIMEOUT = int(os.getenv('MAIL_TIMEOUT', 10))


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret-key-with-enough-length'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    ADMIN_EMAIL = 'admin-inbox@example.edu'
    DEFAULT_ADMIN_PASSWORD = 'admin123'
    BCRYPT_LOG_ROUNDS = 4
    MAIL_SUPPRESS_SEND = True
    MAIL_ASYNC = False
    MAIL_DEFAULT_SENDER = 'noreply@example.edu'
