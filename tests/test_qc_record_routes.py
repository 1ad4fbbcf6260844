import csv
import io

from qc_tool.models.audit import AuditLog
from tests.conftest import (make_payload, ADMIN_ID, MANAGER_ID, QC_AGENT_ID, AGENT_ID,
                            OTHER_AGENT_ID)


def _create(client, headers, user_id=QC_AGENT_ID, **overrides):
    return client.post('/api/v1/qc-records', json=make_payload(**overrides), headers=headers(user_id))


def test_create_record(client, headers, db_store):
    res = _create(client, headers, sub_samples=[
        {'qc_code': 'Altrum/02', 'errors': ['fmt1']},
        {'qc_code': 'Altrum/07', 'errors': []},
    ])
    assert res.status_code == 201
    record = res.get_json()['data']
    assert record['avg_score'] == 97.5
    assert record['original_score'] == 97.5
    assert record['agent_name'] == 'Jash'
    assert record['qc_checker_name'] == 'Jimil'
    assert db_store().get_record(record['id']) is not None

    audit = AuditLog.query.filter_by(record_id=record['id']).one()
    assert audit.action == 'INSERT'
    assert audit.user_id == QC_AGENT_ID


def test_agent_cannot_create(client, headers):
    assert _create(client, headers, user_id=AGENT_ID).status_code == 403


def test_schema_errors_are_field_level(client, headers):
    res = _create(client, headers, time_slot='9 AM', project_name='Nope')
    assert res.status_code == 400
    fields = {e['field'] for e in res.get_json()['errors']}
    assert {'time_slot', 'project_name'} <= fields


def test_unknown_error_id_rejected(client, headers):
    res = _create(client, headers, sub_samples=[{'qc_code': 'Altrum/02', 'errors': ['bogus']}])
    assert res.status_code == 400


def test_non_numeric_range_rejected(client, headers):
    res = _create(client, headers, qc_code_range_end='Altrum/end')
    assert res.status_code == 400
    assert res.get_json()['errors'][0]['field'] == 'qc_code_range_end'


def test_missing_notes_is_a_business_error(client, headers):
    res = _create(client, headers, notes='')
    assert res.status_code == 400
    assert res.get_json()['message'] == 'Feedback comments are mandatory.'


def test_duplicate_slot_conflict(client, headers, db_store):
    _create(client, headers)
    res = _create(client, headers, task_name='Second')
    assert res.status_code == 409
    assert res.get_json()['errors'][0]['field'] == 'time_slot'
    assert len(db_store().get_records()) == 1


def test_rework_update_keeps_original(client, headers):
    record = _create(client, headers, manual_enabled=True, manual_score=84).get_json()['data']
    assert record['avg_score'] == 92.0

    payload = make_payload(manual_enabled=True, manual_score=94, rework_status=True)
    res = client.put(f'/api/v1/qc-records/{record["id"]}', json={**record, **payload},
                     headers=headers(QC_AGENT_ID))
    assert res.status_code == 200
    updated = res.get_json()['data']
    assert updated['avg_score'] == 97.0
    assert updated['original_score'] == 92.0

    audit = AuditLog.query.filter_by(record_id=record['id'], action='UPDATE').one()
    assert 'avg_score' in audit.changed_fields
    assert 'original_score' not in audit.changed_fields


def test_update_missing_record(client, headers):
    res = client.put('/api/v1/qc-records/missing', json=make_payload(), headers=headers(ADMIN_ID))
    assert res.status_code == 404


def test_list_is_scoped_for_agents(client, headers):
    _create(client, headers)
    _create(client, headers, agent_id=OTHER_AGENT_ID)

    res = client.get('/api/v1/qc-records', headers=headers(MANAGER_ID))
    body = res.get_json()
    assert body['meta']['total'] == 2
    assert all(r['can_edit'] and r['can_delete'] for r in body['data'])

    res = client.get('/api/v1/qc-records', headers=headers(AGENT_ID))
    data = res.get_json()['data']
    assert [r['agent_name'] for r in data] == ['Jash']
    assert not data[0]['can_edit']


def test_list_filters_and_paginates(client, headers):
    for slot in ('12 PM', '4 PM', '6 PM'):
        _create(client, headers, time_slot=slot)
    _create(client, headers, agent_id=OTHER_AGENT_ID, project_name='Mfund')

    res = client.get('/api/v1/qc-records?project=Mfund', headers=headers(MANAGER_ID))
    assert res.get_json()['meta']['total'] == 1

    res = client.get('/api/v1/qc-records?search=jash&per_page=2&page=2', headers=headers(MANAGER_ID))
    body = res.get_json()
    assert body['meta']['total'] == 3
    assert len(body['data']) == 1
    assert body['meta']['has_prev'] is True


def test_get_single_record_visibility(client, headers):
    record = _create(client, headers).get_json()['data']
    assert client.get(f'/api/v1/qc-records/{record["id"]}', headers=headers(AGENT_ID)).status_code == 200
    assert client.get(f'/api/v1/qc-records/{record["id"]}',
                      headers=headers(OTHER_AGENT_ID)).status_code == 404


def test_delete_record(client, headers, db_store):
    record = _create(client, headers).get_json()['data']
    assert client.delete(f'/api/v1/qc-records/{record["id"]}', headers=headers(AGENT_ID)).status_code == 403
    res = client.delete(f'/api/v1/qc-records/{record["id"]}', headers=headers(MANAGER_ID))
    assert res.status_code == 200
    assert db_store().get_records() == []
    assert AuditLog.query.filter_by(record_id=record['id'], action='DELETE').count() == 1


def test_agent_review(client, headers):
    record = _create(client, headers).get_json()['data']
    url = f'/api/v1/qc-records/{record["id"]}/review'

    res = client.put(url, json={'agent_review_status': 'DISPUTED'}, headers=headers(AGENT_ID))
    assert res.status_code == 400

    res = client.put(url, json={'agent_review_status': 'DISPUTED', 'agent_review_note': 'Check sample 4'},
                     headers=headers(AGENT_ID))
    assert res.status_code == 200
    assert res.get_json()['data']['agent_review_status'] == 'DISPUTED'

    assert client.put(url, json={'agent_review_status': 'ACKNOWLEDGED'},
                      headers=headers(OTHER_AGENT_ID)).status_code == 404
    assert client.put(url, json={'agent_review_status': 'ACKNOWLEDGED'},
                      headers=headers(QC_AGENT_ID)).status_code == 403


def test_export_csv(client, headers):
    _create(client, headers, no_work=True, sub_samples=[])
    _create(client, headers, time_slot='4 PM', rework_status=True)

    res = client.get('/api/v1/qc-records/export', headers=headers(MANAGER_ID))
    assert res.status_code == 200
    assert res.mimetype == 'text/csv'
    assert 'attachment; filename=QC_Report_' in res.headers['Content-Disposition']

    rows = list(csv.reader(io.StringIO(res.get_data(as_text=True))))
    assert rows[0][0] == 'Date'
    assert len(rows) == 3
    scores = sorted(row[5] for row in rows[1:])
    assert scores == ['100.0', 'N/A']


def test_export_is_for_admins_and_managers(client, headers):
    assert client.get('/api/v1/qc-records/export', headers=headers(QC_AGENT_ID)).status_code == 403
    assert client.get('/api/v1/qc-records/export', headers=headers(ADMIN_ID)).status_code == 200


def test_sample_outside_range_rejected(client, headers, db_store):
    res = _create(client, headers, sub_samples=[{'qc_code': 'Mfund/04', 'errors': []}])
    assert res.status_code == 400
    assert res.get_json()['errors'][0]['field'] == 'sub_samples'
    assert db_store().get_records() == []
