"""Permission predicates, one per user-facing action."""
from datetime import date

from qc_tool.constants import (ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT, ROLE_AGENT,
                               VIEW_ROLES)

POWER_ROLES = (ROLE_ADMIN, ROLE_MANAGER)


def is_power_user(user):
    return user['role'] in POWER_ROLES


def owns_record(user, record):
    if record.get('agent_id'):
        return record['agent_id'] == user['id']
    return record.get('agent_name') == user['name']


def can_view_record(user, record):
    if user['role'] == ROLE_AGENT:
        return owns_record(user, record)
    return True


def can_create_record(user):
    return user['role'] != ROLE_AGENT


def can_edit_record(user, record):
    return user['role'] != ROLE_AGENT


def can_delete_record(user, record):
    return user['role'] in (ROLE_ADMIN, ROLE_MANAGER, ROLE_QC_AGENT)


def can_review_record(user, record):
    return user['role'] == ROLE_AGENT and owns_record(user, record)


def can_export(user):
    return user['role'] in POWER_ROLES


def can_modify_production(user, record, today=None):
    """Entries dated today are open to everyone; older ones need an admin or manager."""
    today = today or date.today().isoformat()
    return record['date'] == today or is_power_user(user)


def can_log_production_for(user, target_user_id):
    return target_user_id == user['id'] or is_power_user(user)


def can_manage_users(user):
    return user['role'] == ROLE_ADMIN


def _is_sole_admin(target, users):
    admins = [u for u in users if u['role'] == ROLE_ADMIN]
    return target['role'] == ROLE_ADMIN and len(admins) <= 1


def can_remove_user(actor, target, users):
    return can_manage_users(actor) and not _is_sole_admin(target, users)


def can_change_role(actor, target, new_role, users):
    if not can_manage_users(actor):
        return False
    if new_role != ROLE_ADMIN and _is_sole_admin(target, users):
        return False
    return True


def can_access_view(user, view):
    return user['role'] in VIEW_ROLES.get(view, ())


def allowed_views(user):
    return [view for view in VIEW_ROLES if can_access_view(user, view)]
