from datetime import datetime
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from sqlalchemy import event

# SQLAlchemy instance (init in app)
db = SQLAlchemy()
bcrypt = Bcrypt()


def _set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable WAL mode and foreign key enforcement for SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def init_db_events(app):
    """Initialize database event listeners for SQLite optimizations."""
    if app.config.get('SQLALCHEMY_DATABASE_URI', '').startswith('sqlite'):
        with app.app_context():
            event.listen(db.engine, "connect", _set_sqlite_pragma)


def generate_password_hash(password):
    # bcrypt returns bytes, store as decoded UTF-8 string
    return bcrypt.generate_password_hash(password).decode('utf-8')


def verify_password(password, password_hash):
    if not password or not password_hash:
        return False
    return bcrypt.check_password_hash(password_hash, password)


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False, index=True)  # always lower-case
    password_hash = db.Column(db.String(128), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    state = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    projects = db.relationship('Project', backref='creator', lazy=True)
    donated = db.relationship('Donation', backref='donor', lazy=True, order_by='Donation.id')

    @property
    def display_name(self):
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<User {self.email}>"


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    creator_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    pledge_goal = db.Column(db.Integer, nullable=False, default=0)
    collected = db.Column(db.Integer, nullable=False, default=0)

    donations = db.relationship('Donation', backref='project', lazy=True, order_by='Donation.id')

    def __repr__(self):
        return f"<Project {self.id} {self.title}>"


class Donation(db.Model):
    __tablename__ = 'donations'
    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id'), nullable=False)
    donor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    amount = db.Column(db.Integer, nullable=True)
    date = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Donation {self.id} project={self.project_id}>"


class Audit(db.Model):
    __tablename__ = 'audit_logs'
    id = db.Column(db.Integer, primary_key=True)
    action = db.Column(db.String(200), nullable=False)
    actor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    actor = db.relationship('User', backref='audit_logs', foreign_keys=[actor_id])
    target_type = db.Column(db.String(50), nullable=True)
    target_id = db.Column(db.Integer, nullable=True)
    details = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Audit {self.id} {self.action}>"


def log_action(actor_id, action, target_type=None, target_id=None, details=None):
    """Create an audit log entry and commit it."""
    a = Audit(actor_id=actor_id, action=action, target_type=target_type, target_id=target_id, details=details)
    db.session.add(a)
    db.session.commit()
    return a
