"""
Outbound email. Sending is best effort: a failed send is logged and never
undoes the write that triggered it, and each message is delivered on its own.
"""
import smtplib
from threading import Thread

from flask import current_app
from flask_mail import BadHeaderError, Message

from cyberguard.extensions import mail

MAIL_ERRORS = (smtplib.SMTPException, OSError, BadHeaderError)


def build_message(to, subject, html, reply_to=None):
    return Message(subject=subject, recipients=[to], html=html, reply_to=reply_to)


def _send(app, msg):
    """
    Send one message, bounding SMTP reads and writes by MAIL_TIMEOUT.
    Returns True when the message went out.
    """
    try:
        with mail.connect() as conn:
            if conn.host is not None and conn.host.sock is not None:
                conn.host.sock.settimeout(app.config['MAIL_TIMEOUT'])
            conn.send(msg)
    except MAIL_ERRORS:
        app.logger.exception('Failed to send email "%s" to %s', msg.subject, ', '.join(msg.recipients))
        return False
    app.logger.info('Email sent to %s: %s', ', '.join(msg.recipients), msg.subject)
    return True


def _deliver(app, messages):
    with app.app_context():
        results = [_send(app, msg) for msg in messages]
    return all(results)


def send_email(to, subject, html, reply_to=None):
    """
    Send a single email now, in the calling thread.
    """
    app = current_app._get_current_object()
    return _send(app, build_message(to, subject, html, reply_to))


def notify(*messages):
    """
    Deliver messages independently of each other and of the caller.

    With MAIL_ASYNC the messages go out on a background thread and this
    returns immediately with True; otherwise they are sent inline and the
    result says whether every message was delivered.
    """
    app = current_app._get_current_object()
    if app.config.get('MAIL_ASYNC', True):
        thr = Thread(target=_deliver, args=(app, messages), daemon=True)
        thr.start()
        return True
    return _deliver(app, messages)
