from cyberguard.extensions import db

# Table definitions only. Reads and writes go through cyberguard.records,
# which issue SQL against these tables via the Database gateway.


class Member(db.Model):
    __tablename__ = 'members'

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    phone = db.Column(db.String(20), nullable=False)
    department = db.Column(db.String(100), nullable=False)
    year = db.Column(db.Integer, nullable=False)
    experience = db.Column(db.Text, server_default='')
    motivation = db.Column(db.Text, server_default='')
    status = db.Column(db.String(20), nullable=False, server_default='pending')
    created_at = db.Column(db.String(32), server_default=db.text('CURRENT_TIMESTAMP'))
    updated_at = db.Column(db.String(32), server_default=db.text('CURRENT_TIMESTAMP'))


class ContactMessage(db.Model):
    __tablename__ = 'contact_messages'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    subject = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, server_default='unread')
    created_at = db.Column(db.String(32), server_default=db.text('CURRENT_TIMESTAMP'))


class Event(db.Model):
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    schedule = db.Column(db.String(32), nullable=False)
    location = db.Column(db.String(200), nullable=False)
    max_participants = db.Column(db.Integer)
    status = db.Column(db.String(20), nullable=False, server_default='upcoming')
    created_at = db.Column(db.String(32), server_default=db.text('CURRENT_TIMESTAMP'))


class EventRegistration(db.Model):
    __tablename__ = 'event_registrations'
    __table_args__ = (
        db.UniqueConstraint('event_id', 'email', name='uq_registration_event_email'),
    )

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(20))
    department = db.Column(db.String(100))
    year = db.Column(db.Integer)
    created_at = db.Column(db.String(32), server_default=db.text('CURRENT_TIMESTAMP'))


class AdminUser(db.Model):
    __tablename__ = 'admin_users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    role = db.Column(db.String(20), nullable=False, server_default='admin')
    last_login = db.Column(db.String(32))
    created_at = db.Column(db.String(32), server_default=db.text('CURRENT_TIMESTAMP'))
