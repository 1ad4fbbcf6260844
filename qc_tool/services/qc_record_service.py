"""QC audit record rules: validation, scoring, slot exclusivity and rework linkage."""
import logging
from datetime import datetime, timezone
from uuid import uuid4

from qc_tool.constants import ROLE_AGENT, REVIEW_PENDING, REVIEW_DISPUTED
from qc_tool.services import permissions
from qc_tool.services.sampling import code_in_range
from qc_tool.services.scoring import (rescore_sample, calculate_average_score,
                                      resolve_manual_score)
from qc_tool.utils.exceptions import ServiceError, PermissionDenied, NotFound, Conflict

logger = logging.getLogger(__name__)


def _now():
    return datetime.now(timezone.utc).isoformat()


def resolve_original_score(record, existing=None):
    """Score of the first non-rework submission for this record.

    A rework edit inherits the stored original score (or the stored average
    when no original was kept); every other save starts a new baseline.
    """
    if existing is not None and record.get('rework_status'):
        if existing.get('original_score') is not None:
            return existing['original_score']
        return existing.get('avg_score')
    return record['avg_score']


def _same_agent(a, b):
    if a.get('agent_id') and b.get('agent_id'):
        return a['agent_id'] == b['agent_id']
    return a.get('agent_name') == b.get('agent_name')


def find_slot_conflict(records, candidate, editing_id=None):
    for r in records:
        if editing_id and r['id'] == editing_id:
            continue
        if (_same_agent(r, candidate) and r['date'] == candidate['date']
                and r['time_slot'] == candidate['time_slot']):
            return r
    return None


def check_slot_available(records, candidate, editing_id=None):
    """One evaluation per agent, date and time slot."""
    conflict = find_slot_conflict(records, candidate, editing_id)
    if conflict:
        raise Conflict(
            f'Duplicate slot: {candidate["agent_name"]} already has an evaluation '
            f'for the {candidate["time_slot"]} slot on {candidate["date"]}',
            errors=[{'field': 'time_slot', 'message': f'{candidate["time_slot"]} slot already used'}])


def _resolve_agent(users, payload):
    agent = None
    if payload.get('agent_id'):
        agent = next((u for u in users if u['id'] == payload['agent_id']), None)
    elif payload.get('agent_name'):
        agent = next((u for u in users if u['name'] == payload['agent_name']), None)
    if not agent or agent['role'] != ROLE_AGENT:
        raise ServiceError('Please choose a valid agent',
                           errors=[{'field': 'agent_id', 'message': 'Invalid agent'}])
    return agent


def _check_samples_in_range(samples, payload):
    start = payload.get('qc_code_range_start')
    end = payload.get('qc_code_range_end')
    if not (start and end):
        return
    outside = [s['qc_code'] for s in samples if not code_in_range(s['qc_code'], start, end)]
    if outside:
        raise ServiceError(f'Sample codes outside the range {start} to {end}: {", ".join(outside)}',
                           errors=[{'field': 'sub_samples', 'message': f'{code} is outside the QC code range'}
                                   for code in outside])


def build_record(payload, users, existing=None):
    """Turn a validated form payload into a fully scored record dict."""
    if not (payload.get('notes') or '').strip():
        raise ServiceError('Feedback comments are mandatory.',
                           errors=[{'field': 'notes', 'message': 'Notes are required'}])
    samples = [rescore_sample(s) for s in payload.get('sub_samples') or []]
    if not samples and not payload.get('no_work'):
        raise ServiceError('Please generate 10% sampling records first.',
                           errors=[{'field': 'sub_samples', 'message': 'At least 1 sample required'}])
    _check_samples_in_range(samples, payload)

    agent = _resolve_agent(users, payload)
    manual_enabled = bool(payload.get('manual_enabled'))
    manual_score = resolve_manual_score(manual_enabled, payload.get('manual_score'),
                                        payload.get('manual_errors'))

    record = {
        'id': existing['id'] if existing else uuid4().hex[:12],
        'date': str(payload['date']),
        'time_slot': payload['time_slot'],
        'agent_id': agent['id'],
        'agent_name': agent['name'],
        'tl_name': payload.get('tl_name') or '',
        'manager_name': payload.get('manager_name') or '',
        'qc_checker_name': payload.get('qc_checker_name') or '',
        'project_name': payload['project_name'],
        'task_name': payload.get('task_name') or '',
        'rework_status': bool(payload.get('rework_status')),
        'no_work': bool(payload.get('no_work')),
        'no_attachment': bool(payload.get('no_attachment')),
        'notes': payload['notes'],
        'qc_code_range_start': payload.get('qc_code_range_start') or '',
        'qc_code_range_end': payload.get('qc_code_range_end') or '',
        'sub_samples': samples,
        'manual_enabled': manual_enabled,
        'manual_score': manual_score,
        'manual_errors': list(dict.fromkeys(payload.get('manual_errors') or [])),
        'manual_notes': payload.get('manual_notes') or '',
        'avg_score': calculate_average_score(samples, manual_score, manual_enabled),
        'agent_review_status': existing.get('agent_review_status', REVIEW_PENDING) if existing else REVIEW_PENDING,
        'agent_review_note': existing.get('agent_review_note') if existing else None,
    }
    record['original_score'] = resolve_original_score(record, existing)
    now = _now()
    record['created_at'] = existing.get('created_at', now) if existing else now
    record['updated_at'] = now
    return record


def save_qc_record(store, payload, actor, editing_id=None):
    """Create a record, or re-submit the one identified by ``editing_id``."""
    existing = None
    if editing_id:
        existing = store.get_record(editing_id)
        if not existing:
            raise NotFound('QC record not found')
        if not permissions.can_edit_record(actor, existing):
            raise PermissionDenied('You do not have permission to edit QC records')
    elif not permissions.can_create_record(actor):
        raise PermissionDenied('You do not have permission to submit QC records')

    if not payload.get('qc_checker_name'):
        payload = {**payload, 'qc_checker_name': actor['name']}
    record = build_record(payload, store.get_users(), existing)
    check_slot_available(store.get_records(), record, editing_id)
    store.save_record(record)
    logger.info('QC record %s %s by %s (avg %.1f, original %s, rework %s)',
                record['id'], 'updated' if existing else 'created', actor['name'],
                record['avg_score'], record['original_score'], record['rework_status'])
    return record, existing


def delete_qc_record(store, record_id, actor):
    record = store.get_record(record_id)
    if not record:
        raise NotFound('QC record not found')
    if not permissions.can_delete_record(actor, record):
        raise PermissionDenied('You do not have permission to delete QC records')
    store.delete_record(record_id)
    logger.info('QC record %s deleted by %s', record_id, actor['name'])
    return record


def get_visible_record(store, record_id, actor):
    record = store.get_record(record_id)
    if not record or not permissions.can_view_record(actor, record):
        raise NotFound('QC record not found')
    return record


def review_qc_record(store, record_id, actor, status, note=None):
    """Agent acknowledgement or dispute of their own audit."""
    record = get_visible_record(store, record_id, actor)
    if not permissions.can_review_record(actor, record):
        raise PermissionDenied('Only the audited agent can review this record')
    if status == REVIEW_DISPUTED and not (note or '').strip():
        raise ServiceError('A note is required when disputing a score',
                           errors=[{'field': 'agent_review_note', 'message': 'Required for disputes'}])
    updated = {**record, 'agent_review_status': status, 'agent_review_note': note,
               'updated_at': _now()}
    store.save_record(updated)
    return updated, record


def filter_records(records, actor, search=None, project=None, agent=None):
    """Report-table view: visible to the actor, filtered, newest first."""
    term = (search or '').lower()
    result = []
    for r in records:
        if not permissions.can_view_record(actor, r):
            continue
        if term and term not in r['agent_name'].lower() and term not in r['project_name'].lower():
            continue
        if project and project != 'All' and r['project_name'] != project:
            continue
        if agent and agent != 'All' and agent not in (r.get('agent_id'), r['agent_name']):
            continue
        result.append(r)
    return sorted(result, key=lambda r: r.get('created_at') or '', reverse=True)
