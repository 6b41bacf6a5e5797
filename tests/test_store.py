import pytest

from app import db
from models import Project, generate_password_hash
from store import (StoreError, add_user, get_project, get_projects_by_user, get_user,
                   get_user_by_email)


def new_user(email='jane@example.com'):
    return add_user('Jane', 'Doe', email, generate_password_hash('password123'), 'Hoboken', 'NJ')


def test_add_user_stores_lower_case_email(app):
    u = new_user('Jane@Example.COM')
    assert u.id is not None
    assert u.email == 'jane@example.com'
    assert get_user_by_email('JANE@example.com').id == u.id


def test_lookups_return_none_when_missing(app):
    assert get_user_by_email('nobody@example.com') is None
    assert get_user(12345) is None
    assert get_user('abc') is None
    assert get_project(12345) is None


def test_duplicate_email_is_a_store_error(app):
    new_user()
    with pytest.raises(StoreError):
        new_user('JANE@example.com')
    # the session is usable after the rollback
    assert get_user_by_email('jane@example.com') is not None


def test_projects_by_user(app):
    u = new_user()
    assert get_projects_by_user(u.id) == []
    p = Project(title='Garden', creator_id=u.id, pledge_goal=100)
    db.session.add(p)
    db.session.commit()
    assert [x.id for x in get_projects_by_user(str(u.id))] == [p.id]
    assert get_project(p.id).title == 'Garden'
