from flask import Blueprint, request, g
from marshmallow import ValidationError
from qc_tool.extensions import db
from qc_tool.constants import ROLE_ADMIN, KEY_USERS
from qc_tool.models.audit import AuditLog
from qc_tool.schemas.user_schema import UserSchema, RoleChangeSchema
from qc_tool.services import permissions
from qc_tool.services.user_service import add_user, remove_user, change_role
from qc_tool.middleware.auth_middleware import token_required, role_required
from qc_tool.utils.responses import success_response, validation_error

user_bp = Blueprint('users', __name__)
user_schema = UserSchema()


@user_bp.route('/users', methods=['GET'])
@token_required
@role_required(ROLE_ADMIN)
def get_users():
    users = g.store.get_users()
    role = request.args.get('role')
    if role:
        users = [u for u in users if u['role'] == role]
    return success_response(data=[{
        **u, 'can_remove': permissions.can_remove_user(g.current_user, u, users),
    } for u in users])


@user_bp.route('/users', methods=['POST'])
@token_required
@role_required(ROLE_ADMIN)
def create_user():
    try:
        data = user_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    user = add_user(g.store, data['name'], data['role'], g.current_user)
    AuditLog.log(KEY_USERS, user['id'], 'INSERT', new_data=user)
    db.session.commit()
    return success_response(data=user, message='User added', status_code=201)


@user_bp.route('/users/<user_id>/role', methods=['PUT'])
@token_required
@role_required(ROLE_ADMIN)
def update_user_role(user_id):
    try:
        data = RoleChangeSchema().load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error(e.messages)
    user, old = change_role(g.store, user_id, data['role'], g.current_user)
    AuditLog.log(KEY_USERS, user_id, 'UPDATE', old_data=old, new_data=user)
    db.session.commit()
    return success_response(data=user, message='Role updated')


@user_bp.route('/users/<user_id>', methods=['DELETE'])
@token_required
@role_required(ROLE_ADMIN)
def delete_user(user_id):
    user = remove_user(g.store, user_id, g.current_user)
    AuditLog.log(KEY_USERS, user_id, 'DELETE', old_data=user)
    db.session.commit()
    return success_response(message=f'User {user["name"]} removed')
