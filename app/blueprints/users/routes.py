# app/blueprints/users/routes.py
"""
User account routes: registration, sign in/out and history
"""

from flask import render_template, redirect, url_for, request, current_app, jsonify

from models import generate_password_hash, verify_password, log_action
from decorators import SessionUser, anonymous_required, with_session_user
from store import StoreError, add_user, get_user, get_user_by_email, get_project, get_projects_by_user
from utils import MIN_PASSWORD_LENGTH, is_valid_email, project_view, sanitize, sort_projects_by_creation_date
from . import users_bp

INVALID_CREDENTIALS = 'Invalid email and/or password'


def _system_error(e):
    return jsonify({'error': str(e)}), 500


def _render_signin(errors=None):
    return render_template('users/signin.html', title='Sign In', errors=errors or [],
                           has_errors=bool(errors), logged=False)


@users_bp.route('/signin')
@anonymous_required
def signin_form():
    return _render_signin()


@users_bp.route('/register')
@anonymous_required
def register_form():
    return render_template('users/register.html', title='Register', errors=[], has_errors=False,
                           user={}, logged=False)


@users_bp.route('/signin', methods=['POST'])
def signin():
    """
    Authenticate a user by email and password

    Unknown email and wrong password produce the same message.
    """
    email = request.form.get('email', '')
    password = request.form.get('password', '')

    errors = []
    if not email:
        errors.append('Please enter your email')
    if not password:
        errors.append('Please enter your password')
    if errors:
        return _render_signin(errors)

    try:
        user = get_user_by_email(email.lower())
    except StoreError as e:
        current_app.logger.exception('Sign in lookup failed')
        return _system_error(e)

    if user is None or not verify_password(password, user.password_hash):
        current_app.logger.warning(f'Failed sign in for {email.lower()}')
        return _render_signin([INVALID_CREDENTIALS])

    SessionUser.start(user)
    try:
        log_action(user.id, 'user.signin', 'user', user.id)
    except Exception:
        current_app.logger.exception('Failed to write audit log for user.signin')
    current_app.logger.info(f'User signed in: {user.email}')
    return redirect(url_for('projects.index'))


def validate_registration(form):
    """
    Collect every problem with a registration form, in display order.

    Returns:
        List of error messages (empty when the form is valid)
    """
    errors = []
    email = form.get('email', '')
    password = form.get('password', '')
    password_confirm = form.get('password_confirm', '')

    if not form.get('first_name'):
        errors.append('No first name provided')
    if not form.get('last_name'):
        errors.append('No last name provided')
    if not email:
        errors.append('No email provided')
    elif not is_valid_email(email):
        errors.append('Invalid email')
    if not password:
        errors.append('No password provided')
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f'Password should contain at least {MIN_PASSWORD_LENGTH} characters')
    if not password_confirm:
        errors.append('No password confirmation provided')
    if password_confirm != password:
        errors.append("Passwords don't match")
    if not form.get('city'):
        errors.append('No city provided')
    if not form.get('state'):
        errors.append('No state provided')
    return errors


@users_bp.route('/', methods=['POST'])
def register():
    form = request.form
    errors = validate_registration(form)
    email = form.get('email', '').lower()

    if email:
        try:
            if get_user_by_email(email) is not None:
                errors.append('An account with this email already exists.')
        except StoreError as e:
            current_app.logger.exception('Duplicate email check failed')
            return _system_error(e)

    if errors:
        attempted = {
            'first_name': form.get('first_name', ''),
            'last_name': form.get('last_name', ''),
            'email': email,
            'city': form.get('city', ''),
            'state': form.get('state', ''),
        }
        return render_template('users/register.html', title='Register', errors=errors, has_errors=True,
                               user=attempted, logged=False)

    try:
        password_hash = generate_password_hash(form['password'])
        u = add_user(sanitize(form['first_name']), sanitize(form['last_name']), sanitize(email),
                     password_hash, sanitize(form['city']), sanitize(form['state']))
    except (StoreError, ValueError) as e:
        current_app.logger.exception('Failed to register user')
        return _system_error(e)

    try:
        log_action(u.id, 'user.create', 'user', u.id, 'self-registration')
    except Exception:
        current_app.logger.exception('Failed to write audit log for user.create')
    current_app.logger.info(f'User registered: {u.email}')
    return redirect(url_for('users.signin_form'))


@users_bp.route('/logout')
@with_session_user
def logout(session_user):
    if session_user is None:
        return redirect(url_for('projects.index'))
    try:
        log_action(session_user.user_id, 'user.logout', 'user', session_user.user_id)
    except Exception:
        current_app.logger.exception('Failed to write audit log for user.logout')
    SessionUser.end()
    current_app.logger.info(f'User signed out: {session_user.user_id}')
    return redirect(url_for('projects.index'))


@users_bp.route('/history/<user_id>')
@with_session_user
def history(user_id, session_user):
    """
    Projects created by the user and the projects the user donated to

    Only the owner may see their history; anyone else is sent to the projects listing.
    """
    if session_user is None or str(session_user.user_id) != user_id:
        current_app.logger.info(f'History of user {user_id} refused')
        return redirect(url_for('projects.index'))

    try:
        projects = get_projects_by_user(user_id)
        user = get_user(user_id)
        if user is None:
            raise StoreError(f'User {user_id} not found')

        donated = []
        for donation in user.donated:
            project = get_project(donation.project_id)
            if project is None:
                raise StoreError(f'Project {donation.project_id} not found')
            creator = get_user(project.creator_id)
            if creator is None:
                raise StoreError(f'User {project.creator_id} not found')
            donated.append({
                'project_id': donation.project_id,
                'amount': donation.amount,
                'project_title': project.title,
                'project_creator': creator.display_name,
            })

        if projects:
            projects = sort_projects_by_creation_date(projects)
        projects = [project_view(p) for p in projects]
    except StoreError as e:
        current_app.logger.exception(f'Failed to load history for user {user_id}')
        return _system_error(e)

    return render_template('users/history.html', title='My Projects', has_projects=bool(projects),
                           projects=projects, has_donated=bool(donated), donated=donated,
                           logged=True, session_user=session_user)
