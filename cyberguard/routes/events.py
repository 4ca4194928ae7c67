from flask import Blueprint, current_app, request

from cyberguard import emails
from cyberguard.auth import admin_required
from cyberguard.database import get_store
from cyberguard.errors import NotFound, envelope
from cyberguard.notifications import notify
from cyberguard.records import EventRecord
from cyberguard.validation import REGISTRATION_SCHEMA

events_bp = Blueprint('events', __name__)


# 📅 Get events
@events_bp.route('', methods=['GET'])
def list_events():
    events = EventRecord(get_store()).find_all(request.args.get('status'))
    return envelope(events, count=len(events))


@events_bp.route('/<int:event_id>', methods=['GET'])
def get_event(event_id):
    event = EventRecord(get_store()).find_by_id(event_id)
    if event is None:
        raise NotFound('Event not found')
    return envelope(event)


# ✅ Register for an event
@events_bp.route('/register', methods=['POST'])
def register():
    data = REGISTRATION_SCHEMA.validate(request.get_json(silent=True))
    event_id = data.pop('event_id')

    records = EventRecord(get_store())
    registration = records.register(event_id, data)
    event = records.find_by_id(event_id)
    current_app.logger.info('Registration %s for event %s (%s)', registration['id'], event_id, registration['email'])

    notify(
        emails.registration_confirmation(registration, event),
        emails.registration_notice(registration, event),
    )

    return envelope(
        {
            'registrationId': registration['id'],
            'eventName': event['name'],
            'eventDate': event['schedule'],
        },
        'Registration successful! Check your email for confirmation.',
        201,
    )


@events_bp.route('/<int:event_id>/registrations', methods=['GET'])
@admin_required()
def registrations(event_id):
    records = EventRecord(get_store())
    if records.find_by_id(event_id) is None:
        raise NotFound('Event not found')
    rows = records.get_registrations(event_id)
    return envelope(rows, count=len(rows))
