"""Shared fixtures: testing app on in-memory SQLite, client and per-user headers."""
import pytest

from qc_tool import create_app
from qc_tool.extensions import db
from qc_tool.repository import InMemoryRepository
from qc_tool.services.store import Store, get_store

ADMIN_ID = 'u10'
MANAGER_ID = 'u1'
QC_AGENT_ID = 'u3'
AGENT_ID = 'u5'  # Jash
OTHER_AGENT_ID = 'u6'  # Chaitanya


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        get_store().get_users()
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def headers(app):
    """``headers('u10')`` builds auth headers for a seeded user."""
    def _headers(user_id):
        return {
            'Authorization': f'Bearer {app.config["API_SECRET_TOKEN"]}',
            'X-User-Id': user_id,
        }
    return _headers


@pytest.fixture
def db_store(app):
    """Store over the test database, with the session cache cleared."""
    def _store():
        db.session.expire_all()
        return get_store()
    return _store


@pytest.fixture
def memory_store():
    store = Store(InMemoryRepository())
    store.get_users()
    return store


@pytest.fixture
def users(memory_store):
    return {u['id']: u for u in memory_store.get_users()}


def make_payload(**overrides):
    """A valid QC form payload for Jash with one clean sample."""
    payload = {
        'date': '2024-01-01',
        'time_slot': '12 PM',
        'agent_id': AGENT_ID,
        'project_name': 'Altrum',
        'task_name': 'Bi listing',
        'notes': 'Looks good overall',
        'qc_code_range_start': 'Altrum/01',
        'qc_code_range_end': 'Altrum/10',
        'sub_samples': [{'qc_code': 'Altrum/04', 'errors': []}],
    }
    payload.update(overrides)
    return payload
