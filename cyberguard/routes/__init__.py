from .main import main_bp
from .members import members_bp
from .contact import contact_bp
from .events import events_bp
from .admin import admin_bp

__all__ = ['main_bp', 'members_bp', 'contact_bp', 'events_bp', 'admin_bp']
