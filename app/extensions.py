# app/extensions.py
"""
Flask extensions initialized here to avoid circular imports

Extensions are initialized here and then imported in __init__.py
"""

from flask_migrate import Migrate
from flask_session import Session

# Import db and bcrypt from models to avoid duplicate instances
from models import db, bcrypt, init_db_events

# Initialize other extensions (without app)
migrate = Migrate()
sess = Session()


def init_extensions(app):
    """
    Initialize all Flask extensions with the app instance

    Args:
        app: Flask application instance
    """
    db.init_app(app)
    bcrypt.init_app(app)
    migrate.init_app(app, db)
    sess.init_app(app)
    init_db_events(app)
