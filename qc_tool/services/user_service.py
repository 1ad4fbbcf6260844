"""Admin user management over the stored user list."""
import logging
from uuid import uuid4

from qc_tool.services import permissions
from qc_tool.utils.exceptions import PermissionDenied, NotFound, Conflict

logger = logging.getLogger(__name__)


def _find(users, user_id):
    user = next((u for u in users if u['id'] == user_id), None)
    if not user:
        raise NotFound('User not found')
    return user


def add_user(store, name, role, actor):
    if not permissions.can_manage_users(actor):
        raise PermissionDenied('Only administrators can add users')
    users = store.get_users()
    if any(u['name'].lower() == name.lower() for u in users):
        raise Conflict(f'A user named "{name}" already exists')
    user = {'id': uuid4().hex[:9], 'name': name, 'role': role}
    users.append(user)
    store.update_users(users)
    logger.info('User %s (%s) added by %s', name, role, actor['name'])
    return user


def remove_user(store, user_id, actor):
    users = store.get_users()
    target = _find(users, user_id)
    if not permissions.can_manage_users(actor):
        raise PermissionDenied('Only administrators can manage users')
    if not permissions.can_remove_user(actor, target, users):
        raise PermissionDenied('The last remaining administrator cannot be removed')
    store.update_users([u for u in users if u['id'] != user_id])
    logger.info('User %s removed by %s', target['name'], actor['name'])
    return target


def change_role(store, user_id, new_role, actor):
    users = store.get_users()
    target = _find(users, user_id)
    if not permissions.can_manage_users(actor):
        raise PermissionDenied('Only administrators can manage users')
    if not permissions.can_change_role(actor, target, new_role, users):
        raise PermissionDenied('The last remaining administrator cannot be demoted')
    old_role = target['role']
    updated = {**target, 'role': new_role}
    store.update_users([updated if u['id'] == user_id else u for u in users])
    logger.info('User %s role changed %s -> %s by %s', target['name'], old_role, new_role, actor['name'])
    return updated, target
