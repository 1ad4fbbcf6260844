from flask import Blueprint, request, g
from qc_tool.constants import (QC_ERRORS, PROJECTS, TRACKER_PROJECTS, TIME_SLOTS, ROLES,
                               ROLE_MANAGER, ROLE_QC_AGENT)
from qc_tool.services.permissions import allowed_views
from qc_tool.middleware.auth_middleware import token_required
from qc_tool.utils.responses import success_response, error_response

lookup_bp = Blueprint('lookups', __name__)


@lookup_bp.route('/lookups/qc-errors', methods=['GET'])
@token_required
def lookup_qc_errors():
    items = QC_ERRORS
    if request.args.get('category'):
        items = [e for e in items if e['category'] == request.args['category']]
    return success_response(data=items)


@lookup_bp.route('/lookups/projects', methods=['GET'])
@token_required
def lookup_projects():
    return success_response(data=PROJECTS)


@lookup_bp.route('/lookups/tracker-projects', methods=['GET'])
@token_required
def lookup_tracker_projects():
    return success_response(data=TRACKER_PROJECTS)


@lookup_bp.route('/lookups/time-slots', methods=['GET'])
@token_required
def lookup_time_slots():
    return success_response(data=TIME_SLOTS)


@lookup_bp.route('/lookups/users', methods=['GET'])
@token_required
def lookup_users():
    """Names for the form dropdowns. ``role=QC_CHECKER`` lists QC agents and managers."""
    users = g.store.get_users()
    role = request.args.get('role')
    if role == 'QC_CHECKER':
        users = [u for u in users if u['role'] in (ROLE_QC_AGENT, ROLE_MANAGER)]
    elif role:
        if role not in ROLES:
            return error_response(f'Unknown role "{role}"', 400)
        users = [u for u in users if u['role'] == role]
    return success_response(data=[{'id': u['id'], 'name': u['name'], 'role': u['role']} for u in users])


@lookup_bp.route('/lookups/views', methods=['GET'])
@token_required
def lookup_views():
    return success_response(data=allowed_views(g.current_user))
