import pytest

from cyberguard.errors import ValidationFailure
from cyberguard.validation import (
    CONTACT_SCHEMA,
    EVENT_SCHEMA,
    EVENT_UPDATE_SCHEMA,
    JOIN_SCHEMA,
    LOGIN_SCHEMA,
    MEMBER_STATUS_SCHEMA,
    REGISTRATION_SCHEMA,
)


def _errors(schema, payload):
    with pytest.raises(ValidationFailure) as excinfo:
        schema.validate(payload)
    return excinfo.value.errors


def _fields(errors):
    return [error['field'] for error in errors]


VALID_JOIN = {
    'fullName': 'Alice Lee',
    'email': 'Alice@Example.edu',
    'phone': '+19995550123',
    'department': 'CSE',
    'year': 2,
}


def test_join_schema_cleans_valid_payload():
    data = JOIN_SCHEMA.validate(VALID_JOIN)
    assert data == {
        'full_name': 'Alice Lee',
        'email': 'alice@example.edu',
        'phone': '+19995550123',
        'department': 'CSE',
        'year': 2,
    }


def test_join_schema_reports_every_missing_field():
    errors = _errors(JOIN_SCHEMA, {})
    assert _fields(errors) == ['fullName', 'email', 'phone', 'department', 'year']
    assert all(error['message'] for error in errors)


def test_join_schema_collects_all_format_failures():
    payload = dict(VALID_JOIN, fullName='A', email='not-an-email', phone='12ab', year=7)
    errors = _errors(JOIN_SCHEMA, payload)
    assert _fields(errors) == ['fullName', 'email', 'phone', 'year']
    assert {'field': 'year', 'message': 'Year must be between 1 and 4'} in errors


@pytest.mark.parametrize('phone', ['+19995550123', '9489634752', '1234567'])
def test_phone_format_accepts(phone):
    assert JOIN_SCHEMA.validate(dict(VALID_JOIN, phone=phone))['phone'] == phone


@pytest.mark.parametrize('phone', ['123456', '++1234567', '+1 999 555 0123', '1234567890123456789'])
def test_phone_format_rejects(phone):
    assert _fields(_errors(JOIN_SCHEMA, dict(VALID_JOIN, phone=phone))) == ['phone']


def test_year_accepts_numeric_string_and_rejects_bool():
    assert JOIN_SCHEMA.validate(dict(VALID_JOIN, year='4'))['year'] == 4
    assert _fields(_errors(JOIN_SCHEMA, dict(VALID_JOIN, year=True))) == ['year']


def test_optional_fields_are_kept_when_sent():
    data = JOIN_SCHEMA.validate(dict(VALID_JOIN, experience='  CTFs  ', motivation=None))
    assert data['experience'] == 'CTFs'
    assert data['motivation'] is None


def test_non_object_body_is_rejected():
    errors = _errors(CONTACT_SCHEMA, ['not', 'an', 'object'])
    assert errors == [{'field': 'body', 'message': 'Request body must be a JSON object'}]
    assert _errors(CONTACT_SCHEMA, None)[0]['field'] == 'body'


def test_contact_schema_length_rules():
    errors = _errors(CONTACT_SCHEMA, {'name': 'Bo', 'email': 'bo@example.edu', 'subject': 'Hi', 'message': 'short'})
    assert _fields(errors) == ['subject', 'message']


def test_registration_schema_optional_fields():
    data = REGISTRATION_SCHEMA.validate({'eventId': '3', 'name': 'Bob', 'email': 'bob@example.edu'})
    assert data == {'event_id': 3, 'name': 'Bob', 'email': 'bob@example.edu'}

    errors = _errors(REGISTRATION_SCHEMA, {'eventId': 0, 'name': 'Bob', 'email': 'bob@example.edu', 'year': 9})
    assert _fields(errors) == ['eventId', 'year']


def test_login_schema_keeps_password_whitespace():
    data = LOGIN_SCHEMA.validate({'username': ' admin ', 'password': ' secret '})
    assert data == {'username': 'admin', 'password': ' secret '}


def test_member_status_schema():
    assert MEMBER_STATUS_SCHEMA.validate({'status': 'approved'}) == {'status': 'approved'}
    errors = _errors(MEMBER_STATUS_SCHEMA, {'status': 'archived'})
    assert errors[0]['message'] == 'Invalid status. Must be approved, rejected, or pending'


def test_event_schema_normalizes_schedule():
    data = EVENT_SCHEMA.validate({
        'name': 'Talk',
        'schedule': '2031-09-08T17:00:00+05:30',
        'location': 'Main Auditorium',
        'maxParticipants': 100,
    })
    assert data['schedule'] == '2031-09-08 11:30:00'
    assert data['max_participants'] == 100


def test_event_schema_rejects_bad_schedule():
    errors = _errors(EVENT_SCHEMA, {'name': 'Talk', 'schedule': 'next friday', 'location': 'Lab'})
    assert errors == [{'field': 'schedule', 'message': 'Valid date/time is required'}]


def test_event_update_schema_is_partial():
    assert EVENT_UPDATE_SCHEMA.validate({}) == {}
    assert EVENT_UPDATE_SCHEMA.validate({'maxParticipants': None}) == {'max_participants': None}
    assert _fields(_errors(EVENT_UPDATE_SCHEMA, {'name': ''})) == ['name']
