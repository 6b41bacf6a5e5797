"""
Data access for users and projects.

Lookups return None when nothing matches; any database failure is raised as
StoreError so callers can tell "not found" apart from a real fault.
"""
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from models import db, User, Project


class StoreError(Exception):
    """Raised when the database cannot complete a read or a write."""


def _as_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def get_user_by_email(email: str) -> Optional[User]:
    try:
        return User.query.filter_by(email=email.lower()).first()
    except SQLAlchemyError as e:
        raise StoreError(f'Could not look up user by email: {e}') from e


def get_user(user_id) -> Optional[User]:
    user_id = _as_int(user_id)
    if user_id is None:
        return None
    try:
        return db.session.get(User, user_id)
    except SQLAlchemyError as e:
        raise StoreError(f'Could not load user {user_id}: {e}') from e


def add_user(first_name: str, last_name: str, email: str, password_hash: str,
             city: str, state: str) -> User:
    """Persist a new user. The email is stored lower-cased."""
    u = User(
        first_name=first_name,
        last_name=last_name,
        email=email.lower(),
        password_hash=password_hash,
        city=city,
        state=state,
    )
    try:
        db.session.add(u)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StoreError(f'Could not add user: {e}') from e
    return u


def get_projects_by_user(user_id) -> List[Project]:
    """Projects created by the given user; an empty list when there are none."""
    user_id = _as_int(user_id)
    if user_id is None:
        return []
    try:
        return Project.query.filter_by(creator_id=user_id).all()
    except SQLAlchemyError as e:
        raise StoreError(f'Could not load projects for user {user_id}: {e}') from e


def get_project(project_id) -> Optional[Project]:
    project_id = _as_int(project_id)
    if project_id is None:
        return None
    try:
        return db.session.get(Project, project_id)
    except SQLAlchemyError as e:
        raise StoreError(f'Could not load project {project_id}: {e}') from e


def get_all_projects() -> List[Project]:
    try:
        return Project.query.all()
    except SQLAlchemyError as e:
        raise StoreError(f'Could not load projects: {e}') from e
