import csv
import io

from flask import Blueprint, Response, current_app, g, request

from cyberguard.auth import admin_required, login
from cyberguard.database import get_store
from cyberguard.errors import envelope
from cyberguard.records import ContactRecord, EventRecord, MemberRecord
from cyberguard.validation import EVENT_SCHEMA, EVENT_UPDATE_SCHEMA, LOGIN_SCHEMA

admin_bp = Blueprint('admin', __name__)

EXPORT_HEADERS = ['ID', 'Full Name', 'Email', 'Phone', 'Department', 'Year', 'Status', 'Created At']
EXPORT_COLUMNS = ['id', 'full_name', 'email', 'phone', 'department', 'year', 'status', 'created_at']


# 🔐 Login
@admin_bp.route('/login', methods=['POST'])
def admin_login():
    data = LOGIN_SCHEMA.validate(request.get_json(silent=True))
    token, admin = login(get_store(), data['username'], data['password'])
    return envelope(
        {
            'token': token,
            'admin': {
                'id': admin['id'],
                'username': admin['username'],
                'email': admin['email'],
                'role': admin['role'],
            },
        },
        'Login successful',
    )


# 📊 Dashboard: statistics + recent activity
@admin_bp.route('/dashboard', methods=['GET'])
@admin_required()
def dashboard():
    store = get_store()
    members = MemberRecord(store)
    contacts = ContactRecord(store)
    events = EventRecord(store)

    upcoming = events.upcoming(5)
    return envelope({
        'statistics': {
            'members': members.get_stats(),
            'contacts': contacts.get_stats(),
            'events': {
                'upcoming': len(upcoming),
                'total': events.count(),
            },
        },
        'recentActivity': {
            'members': members.recent(5),
            'contacts': contacts.recent(5),
            'events': upcoming,
        },
    })


# 🆕 Create Event
@admin_bp.route('/events', methods=['POST'])
@admin_required()
def create_event():
    data = EVENT_SCHEMA.validate(request.get_json(silent=True))
    event = EventRecord(get_store()).create(data)
    current_app.logger.info('Event %s created by %s', event['id'], g.admin['username'])
    return envelope(event, 'Event created successfully', 201)


# ✏️ Update Event (only the fields sent are changed)
@admin_bp.route('/events/<int:event_id>', methods=['PUT'])
@admin_required()
def update_event(event_id):
    changes = EVENT_UPDATE_SCHEMA.validate(request.get_json(silent=True))
    event = EventRecord(get_store()).update(event_id, changes)
    current_app.logger.info('Event %s updated by %s', event_id, g.admin['username'])
    return envelope(event, 'Event updated successfully')


# 🗑️ Delete Event (registrations are removed with it)
@admin_bp.route('/events/<int:event_id>', methods=['DELETE'])
@admin_required()
def delete_event(event_id):
    EventRecord(get_store()).delete(event_id)
    current_app.logger.info('Event %s deleted by %s', event_id, g.admin['username'])
    return envelope(message='Event deleted successfully')


@admin_bp.route('/members/<int:member_id>', methods=['DELETE'])
@admin_required()
def delete_member(member_id):
    MemberRecord(get_store()).delete(member_id)
    current_app.logger.info('Member %s deleted by %s', member_id, g.admin['username'])
    return envelope(message='Member deleted successfully')


@admin_bp.route('/contact/<int:message_id>', methods=['DELETE'])
@admin_required()
def delete_message(message_id):
    ContactRecord(get_store()).delete(message_id)
    return envelope(message='Message deleted successfully')


# 📄 Members as CSV
@admin_bp.route('/export/members', methods=['GET'])
@admin_required()
def export_members():
    members = MemberRecord(get_store()).find_all()

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)
    for member in members:
        writer.writerow([member[column] for column in EXPORT_COLUMNS])

    return Response(
        buffer.getvalue(),
        mimetype='text/csv',
        headers={'Content-Disposition': 'attachment; filename=members.csv'},
    )
