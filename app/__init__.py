# app/__init__.py - Application Factory Pattern
"""
Flask application factory for the crowdfunding site.
Used to create separate app instances for tests and for serving.
"""

import logging
import os
import sys

from flask import Flask, redirect, url_for

from app.extensions import db


def configure_logging(app):
    """
    Log to stdout by default (good for Docker); enable file logging with LOG_TO_FILE=1
    """
    if app.testing:
        return
    log_to_file = os.environ.get('LOG_TO_FILE') == '1'
    if log_to_file:
        from logging.handlers import RotatingFileHandler
        if not os.path.exists('logs'):
            os.makedirs('logs')
        try:
            file_handler = RotatingFileHandler('logs/app.log', maxBytes=10240, backupCount=3)
            file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
            file_handler.setLevel(logging.INFO)
            app.logger.addHandler(file_handler)
        except Exception:
            # fallback to stderr if file logging cannot be configured
            app.logger.addHandler(logging.StreamHandler(sys.stderr))
            app.logger.warning('Could not configure file logging; logs will be sent to stderr')
    else:
        app.logger.addHandler(logging.StreamHandler(sys.stdout))
    app.logger.setLevel(logging.INFO)
    app.logger.info('Application startup')


def create_app(config_class=None):
    """
    Application Factory Pattern

    Args:
        config_class: Configuration class (default: Config from config.py)

    Returns:
        Flask application instance
    """
    app = Flask(__name__,
                template_folder='../templates',
                static_folder='../static')

    # Load configuration
    if config_class is None:
        from config import Config
        config_class = Config
    app.config.from_object(config_class)

    configure_logging(app)

    # Ensure data directory exists when using a local sqlite file
    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    if db_uri.startswith('sqlite:///'):
        db_dir = os.path.dirname(db_uri.replace('sqlite:///', ''))
        if db_dir and not os.path.exists(db_dir):
            try:
                os.makedirs(db_dir, exist_ok=True)
            except OSError:
                app.logger.warning(f'Could not create directory for sqlite DB: {db_dir}')

    # Server-side session files live under SESSION_DIR unless a cache was configured
    if app.config.get('SESSION_CACHELIB') is None:
        from cachelib import FileSystemCache
        app.config['SESSION_CACHELIB'] = FileSystemCache(cache_dir=app.config['SESSION_DIR'], threshold=500)

    # Initialize extensions
    from app.extensions import init_extensions
    init_extensions(app)

    # Register blueprints
    from app.blueprints.users import users_bp
    app.register_blueprint(users_bp)

    from app.blueprints.projects import projects_bp
    app.register_blueprint(projects_bp)

    @app.route('/')
    def index():
        return redirect(url_for('projects.index'))

    register_cli_commands(app)

    return app


def register_cli_commands(app):
    # CLI commands for database management
    import click
    from models import log_action, generate_password_hash, Project
    from store import StoreError, add_user, get_user_by_email
    from utils import sanitize

    @app.cli.command('init-db')
    def init_db():
        """Create database tables."""
        db.create_all()
        click.echo('Initialized the database.')

    @app.cli.command('create-user')
    @click.argument('email')
    @click.argument('password')
    @click.argument('first_name')
    @click.argument('last_name')
    @click.argument('city')
    @click.argument('state')
    def create_user(email, password, first_name, last_name, city, state):
        """Create a user: flask create-user <email> <password> <first> <last> <city> <state>"""
        if get_user_by_email(email) is not None:
            click.echo('User already exists.')
            return
        try:
            u = add_user(sanitize(first_name), sanitize(last_name), sanitize(email.lower()),
                         generate_password_hash(password), sanitize(city), sanitize(state))
        except StoreError as e:
            raise click.ClickException(str(e))
        # audit (CLI-created)
        try:
            log_action(None, 'user.create', 'user', u.id, 'created by CLI')
        except Exception:
            app.logger.exception('Failed to write audit log for create-user')
        app.logger.info(f'User created by CLI: {u.email}')
        click.echo(f'Created user {u.email}')

    @app.cli.command('create-project')
    @click.argument('email')
    @click.argument('title')
    @click.argument('pledge_goal', type=int)
    @click.option('--description', default=None, help='Project description')
    def create_project(email, title, pledge_goal, description):
        """Create a project owned by an existing user: flask create-project <email> <title> <goal>"""
        creator = get_user_by_email(email)
        if creator is None:
            raise click.ClickException(f'No user with email {email}')
        p = Project(title=sanitize(title), description=sanitize(description) or None,
                    creator_id=creator.id, pledge_goal=pledge_goal, collected=0)
        db.session.add(p)
        db.session.commit()
        app.logger.info(f'Project created by CLI: {p.id} for {creator.email}')
        click.echo(f'Created project {p.id} "{p.title}"')
