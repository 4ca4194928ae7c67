"""Seed data for a fresh database: the default admin account and sample events."""

from flask import current_app

from cyberguard.auth import hash_password
from cyberguard.database import Database
from cyberguard.records import AdminRecord, EventRecord

DEFAULT_ADMIN = {'username': 'admin', 'email': 'admin@ritrjpm.ac.in', 'role': 'admin'}

SAMPLE_EVENTS = [
    {
        'name': 'Club Introduction & Welcome',
        'description': 'Welcome new members and introduce them to RIT CyberGuard, our mission and activities.',
        'schedule': '2025-08-20 18:00:00',
        'location': 'Computer Science Lab',
        'max_participants': 50,
    },
    {
        'name': "Beginner's Guide to Cybersecurity",
        'description': 'Foundational workshop covering cybersecurity basics, career paths and essential tools.',
        'schedule': '2025-08-25 16:00:00',
        'location': 'Seminar Hall A',
        'max_participants': 30,
    },
    {
        'name': 'CTF Training Session',
        'description': 'Hands-on training for Capture The Flag competitions.',
        'schedule': '2025-09-01 15:00:00',
        'location': 'Computer Lab 2',
        'max_participants': 25,
    },
    {
        'name': 'Industry Expert Talk',
        'description': 'Guest lecture on current threats and industry trends.',
        'schedule': '2025-09-08 17:00:00',
        'location': 'Main Auditorium',
        'max_participants': 100,
    },
]


def seed_admin(store: Database, password: str) -> bool:
    """Create the default admin unless one with that username exists. Returns True if created."""
    admins = AdminRecord(store)
    if admins.find_by_username(DEFAULT_ADMIN['username']) is not None:
        return False
    try:
        password_hash = hash_password(password)
    except ValueError as exc:
        current_app.logger.critical('Cannot create default admin from DEFAULT_ADMIN_PASSWORD: %s', exc)
        raise
    admins.create(password_hash=password_hash, **DEFAULT_ADMIN)
    current_app.logger.warning(
        'Default admin user "%s" created; change its password in production!', DEFAULT_ADMIN['username']
    )
    return True


def seed_events(store: Database) -> int:
    events = EventRecord(store)
    if events.count() > 0:
        return 0
    with store.transaction():
        for event in SAMPLE_EVENTS:
            events.create(event)
    current_app.logger.info('Created %d sample events', len(SAMPLE_EVENTS))
    return len(SAMPLE_EVENTS)


def seed(store: Database) -> None:
    seed_admin(store, current_app.config['DEFAULT_ADMIN_PASSWORD'])
    seed_events(store)
