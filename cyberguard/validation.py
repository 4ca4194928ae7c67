"""Declarative request validation.

Each endpoint owns a ``Schema`` built from ``Field`` objects. A field holds an
ordered list of rules; every rule of every field is evaluated so a client
receives the complete list of problems in one response::

    JOIN_SCHEMA.validate(request.get_json(silent=True))
    # -> {'full_name': 'Alice Lee', 'email': 'alice@example.edu', ...}
    # or raises ValidationFailure(errors=[{'field': 'email', 'message': ...}])

Schemas know nothing about Flask; they take a plain mapping.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from cyberguard.errors import ValidationFailure

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
PHONE_REGEX = re.compile(r'^\+?[1-9]?[0-9]{7,15}$')

SCHEDULE_FORMAT = '%Y-%m-%d %H:%M:%S'

MEMBER_STATUSES = ('pending', 'approved', 'rejected')
EVENT_STATUSES = ('upcoming', 'ongoing', 'completed', 'cancelled')


class RuleError(Exception):
    pass


class Rule:
    message = 'Invalid value'

    def __init__(self, message: Optional[str] = None):
        if message:
            self.message = message

    def __call__(self, value):
        raise NotImplementedError

    def fail(self):
        raise RuleError(self.message)


class Length(Rule):
    def __init__(self, min: Optional[int] = None, max: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message)
        self.min = min
        self.max = max

    def __call__(self, value):
        if not isinstance(value, str):
            self.fail()
        if self.min is not None and len(value) < self.min:
            self.fail()
        if self.max is not None and len(value) > self.max:
            self.fail()
        return value


class Email(Rule):
    message = 'Valid email is required'

    def __call__(self, value):
        if not isinstance(value, str) or not EMAIL_REGEX.match(value):
            self.fail()
        return value.lower()


class Phone(Rule):
    message = 'Valid phone number is required'

    def __call__(self, value):
        if not isinstance(value, str) or not PHONE_REGEX.match(value):
            self.fail()
        return value


class IntRange(Rule):
    def __init__(self, min: Optional[int] = None, max: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message)
        self.min = min
        self.max = max

    def __call__(self, value):
        if isinstance(value, bool):
            self.fail()
        if isinstance(value, str) and re.fullmatch(r'[+-]?\d+', value):
            value = int(value)
        if not isinstance(value, int):
            self.fail()
        if self.min is not None and value < self.min:
            self.fail()
        if self.max is not None and value > self.max:
            self.fail()
        return value


class IsoDateTime(Rule):
    """Accept an ISO-8601 date/time and normalize it to the stored format (UTC)."""

    message = 'Valid date/time is required'

    def __call__(self, value):
        if not isinstance(value, str):
            self.fail()
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            self.fail()
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed.strftime(SCHEDULE_FORMAT)


class OneOf(Rule):
    def __init__(self, choices, message: Optional[str] = None):
        super().__init__(message or 'Must be one of: %s' % ', '.join(choices))
        self.choices = tuple(choices)

    def __call__(self, value):
        if value not in self.choices:
            self.fail()
        return value


class Field:
    """One input field: where to read it, whether it is required, which rules apply."""

    def __init__(self, name: str, *rules: Rule, key: Optional[str] = None, required: bool = True,
                 message: Optional[str] = None, strip: bool = True, nullable: Optional[bool] = None):
        self.name = name
        self.key = key or name
        self.rules = rules
        self.required = required
        self.strip = strip
        self.nullable = (not required) if nullable is None else nullable
        self.message = message or '%s is required' % name.replace('_', ' ').capitalize()

    def check(self, payload: Dict[str, Any], cleaned: Dict[str, Any], errors: List[Dict[str, str]]) -> None:
        if self.key not in payload and not self.required:
            return

        value = payload.get(self.key)
        if isinstance(value, str) and self.strip:
            value = value.strip()

        if value is None or value == '':
            if self.required or not self.nullable:
                errors.append({'field': self.key, 'message': self.message})
            else:
                cleaned[self.name] = None
            return

        failed = False
        for rule in self.rules:
            try:
                value = rule(value)
            except RuleError as exc:
                errors.append({'field': self.key, 'message': str(exc)})
                failed = True
        if not failed:
            cleaned[self.name] = value


class Schema:
    def __init__(self, *fields: Field):
        self.fields = fields

    def validate(self, payload) -> Dict[str, Any]:
        """Return cleaned data keyed by field name, or raise ValidationFailure with every error."""
        if not isinstance(payload, dict):
            raise ValidationFailure(errors=[{'field': 'body', 'message': 'Request body must be a JSON object'}])

        cleaned: Dict[str, Any] = {}
        errors: List[Dict[str, str]] = []
        for field in self.fields:
            field.check(payload, cleaned, errors)
        if errors:
            raise ValidationFailure(errors=errors)
        return cleaned


JOIN_SCHEMA = Schema(
    Field('full_name', Length(2, 100, 'Full name must be between 2 and 100 characters'),
          key='fullName', message='Full name is required'),
    Field('email', Email(), message='Valid email is required'),
    Field('phone', Phone(), message='Phone number is required'),
    Field('department', Length(max=100, message='Department must be at most 100 characters')),
    Field('year', IntRange(1, 4, 'Year must be between 1 and 4'), message='Year must be between 1 and 4'),
    Field('experience', Length(max=2000, message='Experience must be at most 2000 characters'), required=False),
    Field('motivation', Length(max=2000, message='Motivation must be at most 2000 characters'), required=False),
)

CONTACT_SCHEMA = Schema(
    Field('name', Length(2, 100, 'Name must be between 2 and 100 characters')),
    Field('email', Email(), message='Valid email is required'),
    Field('subject', Length(5, 200, 'Subject must be between 5 and 200 characters')),
    Field('message', Length(10, 2000, 'Message must be between 10 and 2000 characters')),
)

REGISTRATION_SCHEMA = Schema(
    Field('event_id', IntRange(1, message='Valid event id is required'),
          key='eventId', message='Event id is required'),
    Field('name', Length(max=100, message='Name must be at most 100 characters')),
    Field('email', Email(), message='Valid email is required'),
    Field('phone', Phone(), required=False),
    Field('department', Length(max=100, message='Department must be at most 100 characters'), required=False),
    Field('year', IntRange(1, 4, 'Year must be between 1 and 4'), required=False),
)

LOGIN_SCHEMA = Schema(
    Field('username', Length(max=80, message='Username must be text of at most 80 characters')),
    Field('password', Length(max=1024, message='Password must be text of at most 1024 characters'), strip=False),
)

MEMBER_STATUS_SCHEMA = Schema(
    Field('status', OneOf(MEMBER_STATUSES, 'Invalid status. Must be approved, rejected, or pending'),
          message='Invalid status. Must be approved, rejected, or pending'),
)

EVENT_SCHEMA = Schema(
    Field('name', Length(max=200, message='Event name must be at most 200 characters'),
          message='Event name is required'),
    Field('description', Length(max=5000, message='Description must be at most 5000 characters'), required=False),
    Field('schedule', IsoDateTime(), message='Valid date/time is required'),
    Field('location', Length(max=200, message='Location must be at most 200 characters')),
    Field('max_participants', IntRange(1, message='Max participants must be a positive integer'),
          key='maxParticipants', required=False),
    Field('status', OneOf(EVENT_STATUSES), required=False),
)

# Partial update: only the keys present in the body are validated and applied
EVENT_UPDATE_SCHEMA = Schema(*[
    Field(field.name, *field.rules, key=field.key, required=False, message=field.message,
          nullable=field.name in ('description', 'max_participants'))
    for field in EVENT_SCHEMA.fields
])
