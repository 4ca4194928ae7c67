from flask import Blueprint, current_app, request

from cyberguard import emails
from cyberguard.auth import admin_required
from cyberguard.database import get_store
from cyberguard.errors import NotFound, envelope
from cyberguard.notifications import notify
from cyberguard.records import MemberRecord
from cyberguard.validation import JOIN_SCHEMA, MEMBER_STATUS_SCHEMA

members_bp = Blueprint('members', __name__)


# ✅ Submit membership application
@members_bp.route('/join', methods=['POST'])
def join():
    data = JOIN_SCHEMA.validate(request.get_json(silent=True))
    member = MemberRecord(get_store()).create(data)
    current_app.logger.info('Membership application %s received from %s', member['id'], member['email'])

    notify(emails.application_received(member), emails.application_notice(member))

    return envelope(
        {
            'id': member['id'],
            'fullName': member['full_name'],
            'email': member['email'],
            'status': member['status'],
        },
        'Application submitted successfully! You will hear back from us within 2-3 business days.',
        201,
    )


# 📄 All members, optionally filtered by ?status=
@members_bp.route('', methods=['GET'])
@admin_required()
def list_members():
    members = MemberRecord(get_store()).find_all(request.args.get('status'))
    return envelope(members, count=len(members))


# 📊 Membership statistics
@members_bp.route('/stats', methods=['GET'])
def member_stats():
    return envelope(MemberRecord(get_store()).get_stats())


# ✏️ Approve / reject / reset an application
@members_bp.route('/<int:member_id>/status', methods=['PUT'])
@admin_required()
def update_status(member_id):
    status = MEMBER_STATUS_SCHEMA.validate(request.get_json(silent=True))['status']

    records = MemberRecord(get_store())
    member = records.find_by_id(member_id)
    if member is None:
        raise NotFound('Member not found')

    records.update_status(member_id, status)
    current_app.logger.info('Member %s set to %s', member_id, status)

    message = emails.status_update(member, status)
    if message is not None:
        notify(message)

    return envelope({'id': member_id, 'status': status}, 'Member status updated to %s' % status)
