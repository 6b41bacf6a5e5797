# app/blueprints/projects/__init__.py
"""
Projects Blueprint

Responsible for:
- Projects listing (landing page after sign in and sign out)
- Project detail
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/projects')

# Import routes after blueprint creation to avoid circular imports
from . import routes
