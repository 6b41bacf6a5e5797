"""
Session helpers and route decorators
"""
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import current_app, redirect, session, url_for

SESSION_KEY = 'user'


@dataclass(frozen=True)
class SessionUser:
    """The signed-in user, as kept in the server-side session."""
    first_name: str
    last_name: str
    user_id: int

    @classmethod
    def load(cls) -> Optional['SessionUser']:
        data = session.get(SESSION_KEY)
        if not data:
            return None
        return cls(first_name=data['firstName'], last_name=data['lastName'], user_id=data['userId'])

    @classmethod
    def start(cls, user) -> 'SessionUser':
        """Begin a fresh session for a user that just signed in."""
        session.clear()
        su = cls(first_name=user.first_name, last_name=user.last_name, user_id=user.id)
        session[SESSION_KEY] = su.to_dict()
        # new server-side id for the signed-in session
        current_app.session_interface.regenerate(session)
        return su

    @staticmethod
    def end():
        session.clear()

    def to_dict(self):
        return {'firstName': self.first_name, 'lastName': self.last_name, 'userId': self.user_id}


def with_session_user(f):
    """
    Pass the current SessionUser (or None when anonymous) to the view as `session_user`.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        kwargs['session_user'] = SessionUser.load()
        return f(*args, **kwargs)
    return decorated_function


def anonymous_required(f):
    """
    Redirect signed-in users to the projects listing.

    Example:
        @users_bp.route('/signin')
        @anonymous_required
        def signin_form():
            pass
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if SessionUser.load() is not None:
            return redirect(url_for('projects.index'))
        return f(*args, **kwargs)
    return decorated_function
