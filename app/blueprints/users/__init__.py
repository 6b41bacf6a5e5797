# app/blueprints/users/__init__.py
"""
Users Blueprint

Responsible for:
- Sign in / sign out
- Registration
- Per-user history (created projects and donations)
"""

from flask import Blueprint

users_bp = Blueprint('users', __name__, url_prefix='/users')

# Import routes after blueprint creation to avoid circular imports
from . import routes
