import html

from app import db
from app.blueprints.users import routes as users_routes
from models import User, Audit, generate_password_hash
from store import StoreError


def ensure_user(email='jane@example.com', password='password123', first_name='Jane', last_name='Doe'):
    if not User.query.filter_by(email=email).first():
        u = User(first_name=first_name, last_name=last_name, email=email,
                 password_hash=generate_password_hash(password), city='Hoboken', state='NJ')
        db.session.add(u)
        db.session.commit()
    return User.query.filter_by(email=email).first()


def page_text(rv):
    return html.unescape(rv.get_data(as_text=True))


def test_signin_form_for_anonymous(app, client):
    rv = client.get('/users/signin')
    assert rv.status_code == 200
    txt = page_text(rv)
    assert 'Sign In' in txt
    assert 'name="password"' in txt


def test_signin_form_redirects_when_signed_in(app, client):
    ensure_user()
    client.post('/users/signin', data={'email': 'jane@example.com', 'password': 'password123'})
    rv = client.get('/users/signin')
    assert rv.status_code == 302
    assert rv.headers['Location'].endswith('/projects')


def test_missing_fields_are_all_reported(app, client):
    rv = client.post('/users/signin', data={'email': '', 'password': ''})
    assert rv.status_code == 200
    txt = page_text(rv)
    assert 'Please enter your email' in txt
    assert 'Please enter your password' in txt


def test_missing_email_only(app, client):
    rv = client.post('/users/signin', data={'email': '', 'password': 'x'})
    txt = page_text(rv)
    assert 'Please enter your email' in txt
    assert 'Please enter your password' not in txt
    assert txt.count('class="error"') == 1


def test_valid_credentials_start_session(app, client):
    u = ensure_user()
    rv = client.post('/users/signin', data={'email': 'jane@example.com', 'password': 'password123'})
    assert rv.status_code == 302
    assert rv.headers['Location'].endswith('/projects')
    with client.session_transaction() as sess:
        assert sess['user'] == {'firstName': 'Jane', 'lastName': 'Doe', 'userId': u.id}


def test_email_lookup_ignores_case(app, client):
    ensure_user()
    rv = client.post('/users/signin', data={'email': 'JANE@Example.com', 'password': 'password123'})
    assert rv.status_code == 302


def test_wrong_password_and_unknown_email_look_the_same(app, client):
    ensure_user()
    rv_wrong = client.post('/users/signin', data={'email': 'jane@example.com', 'password': 'not-the-password'})
    rv_unknown = client.post('/users/signin', data={'email': 'nobody@example.com', 'password': 'password123'})
    assert rv_wrong.status_code == rv_unknown.status_code == 200
    assert 'Invalid email and/or password' in page_text(rv_wrong)
    assert rv_wrong.get_data() == rv_unknown.get_data()
    with client.session_transaction() as sess:
        assert 'user' not in sess


def test_signin_is_audited(app, client):
    u = ensure_user()
    client.post('/users/signin', data={'email': 'jane@example.com', 'password': 'password123'})
    assert Audit.query.filter_by(action='user.signin', actor_id=u.id).count() == 1


def test_navigation_greets_signed_in_user(app, client):
    ensure_user()
    rv = client.post('/users/signin', data={'email': 'jane@example.com', 'password': 'password123'},
                     follow_redirects=True)
    txt = page_text(rv)
    assert 'Hello, Jane Doe' in txt
    assert 'Log out' in txt


def test_signin_rotates_session_id(app, client):
    ensure_user()
    with client.session_transaction() as sess:
        sess['visited'] = True
    before = client.get_cookie('session').value
    client.post('/users/signin', data={'email': 'jane@example.com', 'password': 'password123'})
    after = client.get_cookie('session').value
    assert before != after
    with client.session_transaction() as sess:
        assert sess['user']['firstName'] == 'Jane'
        assert 'visited' not in sess


def test_lookup_failure_returns_json_500(app, client, monkeypatch):
    ensure_user()

    def boom(email):
        raise StoreError('users collection unavailable')

    monkeypatch.setattr(users_routes, 'get_user_by_email', boom)
    rv = client.post('/users/signin', data={'email': 'jane@example.com', 'password': 'password123'})
    assert rv.status_code == 500
    assert rv.get_json() == {'error': 'users collection unavailable'}
    with client.session_transaction() as sess:
        assert 'user' not in sess
