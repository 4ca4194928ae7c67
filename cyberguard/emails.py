"""Transactional email bodies. Values are HTML-escaped by Jinja."""

from flask import current_app, render_template_string

from cyberguard.notifications import build_message

SIGNATURE = '<p><strong>Security Through Innovation</strong></p><p>RIT CyberGuard Team</p>'

_APPLICATION_RECEIVED = """
<h2>Welcome to RIT CyberGuard!</h2>
<p>Dear {{ m.full_name }},</p>
<p>Thank you for your interest in joining RIT CyberGuard. We have received your application
and our team will review it shortly.</p>
<h3>Application Details:</h3>
<ul>
  <li><strong>Name:</strong> {{ m.full_name }}</li>
  <li><strong>Email:</strong> {{ m.email }}</li>
  <li><strong>Department:</strong> {{ m.department }}</li>
  <li><strong>Year:</strong> {{ m.year }}</li>
</ul>
<p>We will contact you within 2-3 business days regarding the status of your application.</p>
""" + SIGNATURE

_APPLICATION_NOTICE = """
<h2>New Membership Application</h2>
<p>A new student has applied to join RIT CyberGuard.</p>
<ul>
  <li><strong>Name:</strong> {{ m.full_name }}</li>
  <li><strong>Email:</strong> {{ m.email }}</li>
  <li><strong>Phone:</strong> {{ m.phone }}</li>
  <li><strong>Department:</strong> {{ m.department }}</li>
  <li><strong>Year:</strong> {{ m.year }}</li>
  <li><strong>Experience:</strong> {{ m.experience or 'Not provided' }}</li>
  <li><strong>Motivation:</strong> {{ m.motivation or 'Not provided' }}</li>
</ul>
<p>Please review this application in the admin panel.</p>
"""

_APPROVED = """
<h2>Congratulations! You're now part of RIT CyberGuard!</h2>
<p>Dear {{ m.full_name }},</p>
<p>We are excited to inform you that your application to join RIT CyberGuard has been
<strong>approved</strong>!</p>
<p>Our next meeting is every Wednesday at 4:00 PM in the Computer Science Lab.</p>
""" + SIGNATURE

_REJECTED = """
<h2>Thank you for your interest in RIT CyberGuard</h2>
<p>Dear {{ m.full_name }},</p>
<p>Thank you for applying to join RIT CyberGuard. After careful consideration, we are unable
to accept your application at this time. You are welcome to attend our public workshops and
apply again in the future.</p>
<p>RIT CyberGuard Team</p>
"""

_CONTACT_ACK = """
<h2>Thank you for contacting RIT CyberGuard</h2>
<p>Dear {{ c.name }},</p>
<p>We have received your message and will respond within 24 hours.</p>
<p><strong>Subject:</strong> {{ c.subject }}</p>
<p>{{ c.message }}</p>
""" + SIGNATURE

_CONTACT_NOTICE = """
<h2>New Contact Form Submission</h2>
<ul>
  <li><strong>Name:</strong> {{ c.name }}</li>
  <li><strong>Email:</strong> {{ c.email }}</li>
  <li><strong>Subject:</strong> {{ c.subject }}</li>
</ul>
<p>{{ c.message }}</p>
"""

_REGISTRATION_CONFIRMED = """
<h2>Event Registration Confirmed!</h2>
<p>Dear {{ r.name }},</p>
<p>You have successfully registered for the following event:</p>
<ul>
  <li><strong>Event:</strong> {{ e.name }}</li>
  <li><strong>Date &amp; Time:</strong> {{ e.schedule }}</li>
  <li><strong>Location:</strong> {{ e.location }}</li>
  <li><strong>Description:</strong> {{ e.description or '' }}</li>
</ul>
<p>Please arrive 10 minutes before the event starts.</p>
""" + SIGNATURE

_REGISTRATION_NOTICE = """
<h2>New Event Registration</h2>
<p><strong>{{ e.name }}</strong> - {{ e.schedule }}</p>
<ul>
  <li><strong>Name:</strong> {{ r.name }}</li>
  <li><strong>Email:</strong> {{ r.email }}</li>
  <li><strong>Phone:</strong> {{ r.phone or 'Not provided' }}</li>
  <li><strong>Department:</strong> {{ r.department or 'Not provided' }}</li>
  <li><strong>Year:</strong> {{ r.year or 'Not provided' }}</li>
</ul>
<p>Current registrations: {{ e.registered_count }}/{{ e.max_participants or 'Unlimited' }}</p>
"""


def _admin_email():
    return current_app.config['ADMIN_EMAIL']


def application_received(member):
    return build_message(member['email'], 'Welcome to RIT CyberGuard - Application Received',
                         render_template_string(_APPLICATION_RECEIVED, m=member))


def application_notice(member):
    return build_message(_admin_email(), 'New RIT CyberGuard Membership Application',
                         render_template_string(_APPLICATION_NOTICE, m=member))


def status_update(member, status):
    """Message for an approval or rejection; other statuses send nothing."""
    if status == 'approved':
        return build_message(member['email'], 'Welcome to RIT CyberGuard - Application Approved!',
                             render_template_string(_APPROVED, m=member))
    if status == 'rejected':
        return build_message(member['email'], 'RIT CyberGuard Application Update',
                             render_template_string(_REJECTED, m=member))
    return None


def contact_acknowledgement(contact):
    return build_message(contact['email'], 'Message Received - RIT CyberGuard',
                         render_template_string(_CONTACT_ACK, c=contact))


def contact_notice(contact):
    # Single-line subject; a newline would be rejected as a header injection
    subject = ' '.join(contact['subject'].split())
    return build_message(_admin_email(), 'New Contact Form: %s' % subject,
                         render_template_string(_CONTACT_NOTICE, c=contact),
                         reply_to=contact['email'])


def registration_confirmation(registration, event):
    return build_message(registration['email'], 'Registration Confirmed: %s' % event['name'],
                         render_template_string(_REGISTRATION_CONFIRMED, r=registration, e=event))


def registration_notice(registration, event):
    return build_message(_admin_email(), 'New Registration: %s' % event['name'],
                         render_template_string(_REGISTRATION_NOTICE, r=registration, e=event))
