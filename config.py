import os

from cachelib import SimpleCache

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise RuntimeError(
            "SECRET_KEY environment variable is required. "
            "Set it via: export SECRET_KEY='your-secure-random-key'"
        )

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', f"sqlite:///{os.path.join(basedir, 'data', 'app.db')}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session cookie security
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = os.environ.get('FLASK_ENV') == 'production'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour

    # Server-side sessions: the cookie only carries an opaque session id
    SESSION_TYPE = 'cachelib'
    # FileSystemCache on this directory is built in create_app unless SESSION_CACHELIB is set
    SESSION_DIR = os.environ.get('SESSION_DIR', os.path.join(basedir, 'flask_session'))
    SESSION_PERMANENT = False

    BCRYPT_LOG_ROUNDS = 12
    BCRYPT_HANDLE_LONG_PASSWORDS = True


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SESSION_CACHELIB = SimpleCache()
    BCRYPT_LOG_ROUNDS = 4
