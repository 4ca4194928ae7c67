"""Domain records: one accessor per entity, each issuing SQL through the injected gateway.

Records keep no state between calls; every method re-reads or writes the
store. Rows come back as plain dicts keyed by column name.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from cyberguard.database import Database, DatabaseError, UNIQUE
from cyberguard.errors import AlreadyRegistered, DuplicateEmail, EventFull, NotFound
from cyberguard.validation import SCHEDULE_FORMAT

Row = Dict[str, Any]


class MemberRecord:
    def __init__(self, store: Database):
        self.store = store

    def create(self, data: Dict[str, Any]) -> Row:
        try:
            result = self.store.execute(
                """
                INSERT INTO members (full_name, email, phone, department, year, experience, motivation)
                VALUES (:full_name, :email, :phone, :department, :year, :experience, :motivation)
                """,
                {
                    'full_name': data['full_name'],
                    'email': data['email'],
                    'phone': data['phone'],
                    'department': data['department'],
                    'year': data['year'],
                    'experience': data.get('experience') or '',
                    'motivation': data.get('motivation') or '',
                },
            )
        except DatabaseError as exc:
            if exc.kind == UNIQUE:
                raise DuplicateEmail() from exc
            raise
        return self.find_by_id(result.inserted_id)

    def find_all(self, status: Optional[str] = None) -> List[Row]:
        sql = 'SELECT * FROM members'
        params = {}
        if status:
            sql += ' WHERE status = :status'
            params['status'] = status
        sql += ' ORDER BY created_at DESC, id DESC'
        return self.store.query(sql, params)

    def find_by_id(self, member_id: int) -> Optional[Row]:
        return self.store.get_one('SELECT * FROM members WHERE id = :id', {'id': member_id})

    def find_by_email(self, email: str) -> Optional[Row]:
        return self.store.get_one('SELECT * FROM members WHERE email = :email', {'email': email})

    def recent(self, limit: int = 5) -> List[Row]:
        return self.store.query(
            'SELECT id, full_name, email, created_at FROM members ORDER BY created_at DESC, id DESC LIMIT :limit',
            {'limit': limit},
        )

    def update_status(self, member_id: int, status: str) -> None:
        result = self.store.execute(
            'UPDATE members SET status = :status, updated_at = CURRENT_TIMESTAMP WHERE id = :id',
            {'status': status, 'id': member_id},
        )
        if result.rows_affected == 0:
            raise NotFound('Member not found')

    def delete(self, member_id: int) -> None:
        result = self.store.execute('DELETE FROM members WHERE id = :id', {'id': member_id})
        if result.rows_affected == 0:
            raise NotFound('Member not found')

    def get_stats(self) -> Row:
        counts = self.store.get_one(
            """
            SELECT COUNT(*) AS total,
                   COALESCE(SUM(CASE WHEN status = 'approved' THEN 1 ELSE 0 END), 0) AS approved,
                   COALESCE(SUM(CASE WHEN status = 'pending' THEN 1 ELSE 0 END), 0) AS pending,
                   COALESCE(SUM(CASE WHEN status = 'rejected' THEN 1 ELSE 0 END), 0) AS rejected
            FROM members
            """
        )
        departments = self.store.query(
            """
            SELECT department, COUNT(*) AS count
            FROM members
            WHERE status = :status
            GROUP BY department
            ORDER BY count DESC, department ASC
            """,
            {'status': 'approved'},
        )
        counts['departments'] = departments
        return counts


class ContactRecord:
    def __init__(self, store: Database):
        self.store = store

    def create(self, data: Dict[str, Any]) -> Row:
        result = self.store.execute(
            'INSERT INTO contact_messages (name, email, subject, message) VALUES (:name, :email, :subject, :message)',
            {key: data[key] for key in ('name', 'email', 'subject', 'message')},
        )
        return self.find_by_id(result.inserted_id)

    def find_all(self, status: Optional[str] = None) -> List[Row]:
        sql = 'SELECT * FROM contact_messages'
        params = {}
        if status:
            sql += ' WHERE status = :status'
            params['status'] = status
        sql += ' ORDER BY created_at DESC, id DESC'
        return self.store.query(sql, params)

    def find_by_id(self, message_id: int) -> Optional[Row]:
        return self.store.get_one('SELECT * FROM contact_messages WHERE id = :id', {'id': message_id})

    def recent(self, limit: int = 5) -> List[Row]:
        return self.store.query(
            'SELECT id, name, subject, created_at FROM contact_messages ORDER BY created_at DESC, id DESC LIMIT :limit',
            {'limit': limit},
        )

    def mark_as_read(self, message_id: int) -> None:
        # unread -> read only; repeating it is a no-op
        result = self.store.execute(
            "UPDATE contact_messages SET status = 'read' WHERE id = :id",
            {'id': message_id},
        )
        if result.rows_affected == 0:
            raise NotFound('Message not found')

    def delete(self, message_id: int) -> None:
        result = self.store.execute('DELETE FROM contact_messages WHERE id = :id', {'id': message_id})
        if result.rows_affected == 0:
            raise NotFound('Message not found')

    def get_stats(self) -> Row:
        counts = self.store.get_one(
            """
            SELECT COUNT(*) AS total,
                   COALESCE(SUM(CASE WHEN status = 'unread' THEN 1 ELSE 0 END), 0) AS unread
            FROM contact_messages
            """
        )
        counts['read'] = counts['total'] - counts['unread']
        return counts


_EVENT_COLUMNS = ('name', 'description', 'schedule', 'location', 'max_participants', 'status')

_EVENT_SELECT = """
    SELECT e.*, COUNT(er.id) AS registered_count
    FROM events e
    LEFT JOIN event_registrations er ON e.id = er.event_id
"""


class EventRecord:
    def __init__(self, store: Database):
        self.store = store

    def create(self, data: Dict[str, Any]) -> Row:
        result = self.store.execute(
            """
            INSERT INTO events (name, description, schedule, location, max_participants, status)
            VALUES (:name, :description, :schedule, :location, :max_participants, :status)
            """,
            {
                'name': data['name'],
                'description': data.get('description'),
                'schedule': data['schedule'],
                'location': data['location'],
                'max_participants': data.get('max_participants'),
                'status': data.get('status') or 'upcoming',
            },
        )
        return self.find_by_id(result.inserted_id)

    def find_all(self, status: Optional[str] = None) -> List[Row]:
        sql = _EVENT_SELECT
        params = {}
        if status:
            sql += ' WHERE e.status = :status'
            params['status'] = status
        sql += ' GROUP BY e.id ORDER BY e.schedule ASC'
        return self.store.query(sql, params)

    def find_by_id(self, event_id: int) -> Optional[Row]:
        return self.store.get_one(_EVENT_SELECT + ' WHERE e.id = :id GROUP BY e.id', {'id': event_id})

    def update(self, event_id: int, changes: Dict[str, Any]) -> Row:
        columns = [column for column in _EVENT_COLUMNS if column in changes]
        if columns:
            assignments = ', '.join('%s = :%s' % (column, column) for column in columns)
            params = {column: changes[column] for column in columns}
            params['id'] = event_id
            result = self.store.execute('UPDATE events SET %s WHERE id = :id' % assignments, params)
            if result.rows_affected == 0:
                raise NotFound('Event not found')
        event = self.find_by_id(event_id)
        if event is None:
            raise NotFound('Event not found')
        return event

    def update_status(self, event_id: int, status: str) -> Row:
        return self.update(event_id, {'status': status})

    def delete(self, event_id: int) -> None:
        # event_registrations rows go with it (ON DELETE CASCADE)
        result = self.store.execute('DELETE FROM events WHERE id = :id', {'id': event_id})
        if result.rows_affected == 0:
            raise NotFound('Event not found')

    def count(self) -> int:
        return self.store.get_one('SELECT COUNT(*) AS count FROM events')['count']

    def upcoming(self, limit: int = 5) -> List[Row]:
        return self.store.query(
            """
            SELECT id, name, schedule, location
            FROM events
            WHERE schedule > :now
            ORDER BY schedule ASC
            LIMIT :limit
            """,
            {'now': datetime.now(timezone.utc).strftime(SCHEDULE_FORMAT), 'limit': limit},
        )

    def get_registrations(self, event_id: int) -> List[Row]:
        return self.store.query(
            'SELECT * FROM event_registrations WHERE event_id = :event_id ORDER BY created_at ASC, id ASC',
            {'event_id': event_id},
        )

    def register(self, event_id: int, data: Dict[str, Any]) -> Row:
        """Insert a registration if the event exists, has room, and the email is new.

        The capacity check and the insert are one statement; the
        (event_id, email) unique constraint rejects duplicates.
        """
        params = {
            'event_id': event_id,
            'name': data['name'],
            'email': data['email'],
            'phone': data.get('phone'),
            'department': data.get('department'),
            'year': data.get('year'),
        }
        with self.store.transaction():
            try:
                result = self.store.execute(
                    """
                    INSERT INTO event_registrations (event_id, name, email, phone, department, year)
                    SELECT e.id, :name, :email, :phone, :department, :year
                    FROM events e
                    WHERE e.id = :event_id
                      AND (e.max_participants IS NULL
                           OR (SELECT COUNT(*) FROM event_registrations r WHERE r.event_id = e.id)
                              < e.max_participants)
                    """,
                    params,
                )
            except DatabaseError as exc:
                if exc.kind == UNIQUE:
                    raise AlreadyRegistered() from exc
                raise

            if result.rows_affected == 0:
                if self.find_by_id(event_id) is None:
                    raise NotFound('Event not found')
                if self.find_registration(event_id, data['email']) is not None:
                    raise AlreadyRegistered()
                raise EventFull()

        return self.store.get_one(
            'SELECT * FROM event_registrations WHERE id = :id', {'id': result.inserted_id}
        )

    def find_registration(self, event_id: int, email: str) -> Optional[Row]:
        return self.store.get_one(
            'SELECT * FROM event_registrations WHERE event_id = :event_id AND email = :email',
            {'event_id': event_id, 'email': email},
        )


class AdminRecord:
    def __init__(self, store: Database):
        self.store = store

    def find_by_username(self, username: str) -> Optional[Row]:
        return self.store.get_one('SELECT * FROM admin_users WHERE username = :username', {'username': username})

    def find_by_id(self, admin_id: int) -> Optional[Row]:
        return self.store.get_one('SELECT * FROM admin_users WHERE id = :id', {'id': admin_id})

    def touch_last_login(self, admin_id: int) -> None:
        self.store.execute('UPDATE admin_users SET last_login = CURRENT_TIMESTAMP WHERE id = :id', {'id': admin_id})

    def create(self, username: str, password_hash: str, email: str, role: str = 'admin') -> Row:
        result = self.store.execute(
            """
            INSERT INTO admin_users (username, password_hash, email, role)
            VALUES (:username, :password_hash, :email, :role)
            """,
            {'username': username, 'password_hash': password_hash, 'email': email, 'role': role},
        )
        return self.find_by_id(result.inserted_id)
