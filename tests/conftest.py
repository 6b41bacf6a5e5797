import os

# config.Config refuses to load without a secret key
os.environ.setdefault('SECRET_KEY', 'test-secret-key')

import pytest
from app import create_app, db
from config import TestConfig


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    with app.app_context():
        yield app.test_client()
