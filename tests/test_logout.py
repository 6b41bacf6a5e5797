from app import db
from models import User, Audit, generate_password_hash


def ensure_user(email='jane@example.com', password='password123'):
    if not User.query.filter_by(email=email).first():
        u = User(first_name='Jane', last_name='Doe', email=email,
                 password_hash=generate_password_hash(password), city='Hoboken', state='NJ')
        db.session.add(u)
        db.session.commit()
    return User.query.filter_by(email=email).first()


def test_logout_without_session_redirects(app, client):
    rv = client.get('/users/logout')
    assert rv.status_code == 302
    assert rv.headers['Location'].endswith('/projects')
    assert Audit.query.filter_by(action='user.logout').count() == 0


def test_logout_destroys_session(app, client):
    u = ensure_user()
    client.post('/users/signin', data={'email': 'jane@example.com', 'password': 'password123'})
    rv = client.get('/users/logout')
    assert rv.status_code == 302
    assert rv.headers['Location'].endswith('/projects')
    with client.session_transaction() as sess:
        assert 'user' not in sess
    # the sign in form is shown again instead of redirecting
    assert client.get('/users/signin').status_code == 200
    assert Audit.query.filter_by(action='user.logout', actor_id=u.id).count() == 1


def test_logout_twice(app, client):
    ensure_user()
    client.post('/users/signin', data={'email': 'jane@example.com', 'password': 'password123'})
    client.get('/users/logout')
    rv = client.get('/users/logout')
    assert rv.status_code == 302
    assert rv.headers['Location'].endswith('/projects')
