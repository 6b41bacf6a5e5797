# app/blueprints/projects/routes.py
"""
Projects listing and detail pages
"""

from flask import render_template, abort, current_app, jsonify

from decorators import with_session_user
from store import StoreError, get_all_projects, get_project
from utils import project_view, sort_projects_by_creation_date
from . import projects_bp


@projects_bp.route('')
@with_session_user
def index(session_user):
    try:
        projects = sort_projects_by_creation_date(get_all_projects())
    except StoreError as e:
        current_app.logger.exception('Failed to load projects')
        return jsonify({'error': str(e)}), 500
    return render_template('projects/index.html', title='Projects',
                           projects=[project_view(p) for p in projects],
                           logged=session_user is not None, session_user=session_user)


@projects_bp.route('/<int:project_id>')
@with_session_user
def detail(project_id, session_user):
    try:
        project = get_project(project_id)
    except StoreError as e:
        current_app.logger.exception(f'Failed to load project {project_id}')
        return jsonify({'error': str(e)}), 500
    if project is None:
        abort(404)
    return render_template('projects/detail.html', title=project.title, project=project_view(project),
                           logged=session_user is not None, session_user=session_user)
