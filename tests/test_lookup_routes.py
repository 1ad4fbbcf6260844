from tests.conftest import make_payload, MANAGER_ID, QC_AGENT_ID, AGENT_ID, OTHER_AGENT_ID


def test_qc_errors(client, headers):
    res = client.get('/api/v1/lookups/qc-errors', headers=headers(AGENT_ID))
    assert len(res.get_json()['data']) == 8

    res = client.get('/api/v1/lookups/qc-errors?category=FORMATTING', headers=headers(AGENT_ID))
    assert [e['id'] for e in res.get_json()['data']] == ['fmt1', 'fmt2', 'fmt3']


def test_static_lookups(client, headers):
    assert client.get('/api/v1/lookups/projects', headers=headers(AGENT_ID)).get_json()['data'] == \
        ['Moveeasy', 'Mfund', 'Altrum']
    assert client.get('/api/v1/lookups/time-slots', headers=headers(AGENT_ID)).get_json()['data'] == \
        ['12 PM', '4 PM', '6 PM']
    tracker = client.get('/api/v1/lookups/tracker-projects', headers=headers(AGENT_ID)).get_json()['data']
    assert {'name': 'Training', 'target': 0} in tracker


def test_user_lookups(client, headers):
    res = client.get('/api/v1/lookups/users?role=AGENT', headers=headers(QC_AGENT_ID))
    assert [u['name'] for u in res.get_json()['data']] == ['Jash', 'Chaitanya', 'Priyanshu', 'Vivek', 'Manas']

    res = client.get('/api/v1/lookups/users?role=QC_CHECKER', headers=headers(QC_AGENT_ID))
    assert {u['role'] for u in res.get_json()['data']} == {'QC_AGENT', 'MANAGER'}

    res = client.get('/api/v1/lookups/users?role=CEO', headers=headers(QC_AGENT_ID))
    assert res.status_code == 400


def test_views(client, headers):
    res = client.get('/api/v1/lookups/views', headers=headers(AGENT_ID))
    assert res.get_json()['data'] == ['Dashboard', 'Report table', 'Production Tracker']


def test_dashboard(client, headers):
    client.post('/api/v1/qc-records', json=make_payload(manual_enabled=True, manual_score=80),
                headers=headers(QC_AGENT_ID))
    client.post('/api/v1/qc-records',
                json=make_payload(agent_id=OTHER_AGENT_ID, project_name='Mfund'),
                headers=headers(QC_AGENT_ID))

    url = '/api/v1/dashboard?start_date=2024-01-01&end_date=2024-01-31'
    data = client.get(url, headers=headers(MANAGER_ID)).get_json()['data']
    assert data['record_count'] == 2
    assert data['kpis'] == {'avg_score': 95.0, 'active_projects_count': 2, 'active_agents_count': 2}
    assert data['score_trend'] == [{'date': '2024-01-01', 'Chaitanya': 100.0, 'Jash': 90.0}]

    data = client.get(f'{url}&agent={OTHER_AGENT_ID}', headers=headers(MANAGER_ID)).get_json()['data']
    assert data['record_count'] == 1

    data = client.get(url, headers=headers(AGENT_ID)).get_json()['data']
    assert data['record_count'] == 1
    assert data['agent_project_performance'][0]['name'] == 'Jash - Altrum'


def test_dashboard_defaults_to_today(client, headers):
    client.post('/api/v1/qc-records', json=make_payload(), headers=headers(QC_AGENT_ID))
    data = client.get('/api/v1/dashboard', headers=headers(MANAGER_ID)).get_json()['data']
    assert data['record_count'] == 0
    assert data['kpis']['avg_score'] == 0.0
