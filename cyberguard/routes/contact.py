from flask import Blueprint, current_app, request

from cyberguard import emails
from cyberguard.auth import admin_required
from cyberguard.database import get_store
from cyberguard.errors import envelope
from cyberguard.notifications import notify
from cyberguard.records import ContactRecord
from cyberguard.validation import CONTACT_SCHEMA

contact_bp = Blueprint('contact', __name__)


# ✉️ Submit contact form
@contact_bp.route('', methods=['POST'])
def submit():
    data = CONTACT_SCHEMA.validate(request.get_json(silent=True))
    contact = ContactRecord(get_store()).create(data)
    current_app.logger.info('Contact message %s received from %s', contact['id'], contact['email'])

    notify(emails.contact_acknowledgement(contact), emails.contact_notice(contact))

    return envelope(
        {
            'id': contact['id'],
            'name': contact['name'],
            'email': contact['email'],
            'subject': contact['subject'],
        },
        'Message sent successfully! We will respond within 24 hours.',
        201,
    )


@contact_bp.route('', methods=['GET'])
@admin_required()
def list_messages():
    messages = ContactRecord(get_store()).find_all(request.args.get('status'))
    return envelope(messages, count=len(messages))


@contact_bp.route('/stats', methods=['GET'])
def contact_stats():
    return envelope(ContactRecord(get_store()).get_stats())


@contact_bp.route('/<int:message_id>/read', methods=['PUT'])
@admin_required()
def mark_read(message_id):
    ContactRecord(get_store()).mark_as_read(message_id)
    return envelope({'id': message_id}, 'Message marked as read')
