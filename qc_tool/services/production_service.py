"""Production tracker: daily output entries against project targets."""
import logging
from collections import OrderedDict
from datetime import date, datetime, timezone
from uuid import uuid4

from qc_tool.constants import TRACKER_PROJECTS, PRODUCTION_CAP_MULTIPLIER
from qc_tool.services import permissions
from qc_tool.services.scoring import round1
from qc_tool.utils.exceptions import ServiceError, PermissionDenied, NotFound

logger = logging.getLogger(__name__)


def default_target(project_name):
    project = next((p for p in TRACKER_PROJECTS if p['name'] == project_name), None)
    return project['target'] if project else 0


def validate_production(actual_count, target):
    """Returns a list of error dicts (empty when the count is acceptable)."""
    errors = []
    if actual_count < 0:
        errors.append({'field': 'actual_count', 'message': 'Production cannot be negative.'})
    elif target > 0 and actual_count > target * PRODUCTION_CAP_MULTIPLIER:
        max_allowed = target * PRODUCTION_CAP_MULTIPLIER
        errors.append({
            'field': 'actual_count',
            'message': f'Production count ({actual_count}) cannot exceed double the target ({max_allowed}).',
        })
    return errors


def save_production_record(store, payload, actor, editing_id=None, today=None):
    today = today or date.today().isoformat()
    existing = None
    if editing_id:
        existing = store.get_production_record(editing_id)
        if not existing:
            raise NotFound('Production record not found')
        if not permissions.can_modify_production(actor, existing, today):
            raise PermissionDenied('You do not have permission to edit records from previous days.')
        if not permissions.can_log_production_for(actor, existing['user_id']):
            raise PermissionDenied('You can only edit your own production entries')

    user_id = payload.get('user_id') or (existing['user_id'] if existing else actor['id'])
    if not permissions.can_log_production_for(actor, user_id):
        raise PermissionDenied('You can only log production for yourself')
    user = store.get_user(user_id)
    if not user:
        raise ServiceError('Invalid user', errors=[{'field': 'user_id', 'message': 'User not found'}])

    record_date = str(payload['date'])
    target = payload.get('target')
    if target is None:
        target = default_target(payload['project_name'])
    actual_count = payload['actual_count']
    errors = validate_production(actual_count, target)
    if errors:
        raise ServiceError(errors[0]['message'], errors=errors)

    record = {
        'id': existing['id'] if existing else uuid4().hex[:12],
        'user_id': user['id'],
        'user_name': user['name'],
        'date': record_date,
        'project_name': payload['project_name'],
        'target': target,
        'actual_count': actual_count,
        'created_at': existing['created_at'] if existing else datetime.now(timezone.utc).isoformat(),
    }
    store.save_production_record(record)
    logger.info('Production record %s saved for %s on %s (%d/%d)',
                record['id'], user['name'], record_date, actual_count, target)
    return record, existing


def delete_production_record(store, record_id, actor, today=None):
    record = store.get_production_record(record_id)
    if not record:
        raise NotFound('Production record not found')
    if not permissions.can_modify_production(actor, record, today):
        raise PermissionDenied('Only Admins and Managers can delete records from previous days.')
    if not permissions.can_log_production_for(actor, record['user_id']):
        raise PermissionDenied('You can only delete your own production entries')
    store.delete_production_record(record_id)
    return record


def daily_summary(records, user_id):
    """Per-date totals for one user, newest date first."""
    groups = OrderedDict()
    for r in records:
        if r['user_id'] != user_id:
            continue
        g = groups.setdefault(r['date'], {
            'date': r['date'], 'total_target': 0, 'total_actual': 0,
            'entry_count': 0, 'sum_quotient': 0.0,
        })
        g['total_target'] += r['target']
        g['total_actual'] += r['actual_count']
        g['entry_count'] += 1
        g['sum_quotient'] += r['actual_count'] / r['target'] if r['target'] > 0 else 0
    for g in groups.values():
        g['sum_quotient'] = round(g['sum_quotient'], 4)
        g['efficiency'] = round1(g['sum_quotient'] / g['entry_count'] * 100)
    return sorted(groups.values(), key=lambda g: g['date'], reverse=True)


def day_breakdown(records, user_id, day):
    entries = [r for r in records if r['user_id'] == user_id and r['date'] == day]
    return sorted(entries, key=lambda r: r['created_at'], reverse=True)
