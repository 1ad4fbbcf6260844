from qc_tool.constants import INITIAL_USERS, KEY_USERS, KEY_RECORDS
from qc_tool.models.kv_store import KeyValueEntry
from qc_tool.repository import InMemoryRepository, SQLAlchemyRepository
from qc_tool.services.store import Store


def test_users_seeded_on_first_read():
    repo = InMemoryRepository()
    store = Store(repo)
    assert store.get_users() == INITIAL_USERS
    assert KEY_USERS in repo.keys()


def test_existing_users_are_not_reseeded():
    repo = InMemoryRepository({KEY_USERS: [{'id': 'x1', 'name': 'Solo', 'role': 'ADMIN'}]})
    store = Store(repo)
    assert [u['id'] for u in store.get_users()] == ['x1']


def test_empty_user_list_stays_empty():
    store = Store(InMemoryRepository({KEY_USERS: []}))
    assert store.get_users() == []


def test_missing_collections_read_as_empty():
    store = Store(InMemoryRepository())
    assert store.get_records() == []
    assert store.get_production_records() == []
    assert store.get_current_user() is None


def test_save_record_upserts_by_id():
    store = Store(InMemoryRepository())
    store.save_record({'id': 'a', 'avg_score': 90})
    store.save_record({'id': 'b', 'avg_score': 80})
    store.save_record({'id': 'a', 'avg_score': 95})
    assert store.get_records() == [{'id': 'a', 'avg_score': 95}, {'id': 'b', 'avg_score': 80}]

    store.delete_record('a')
    assert store.get_record('a') is None
    assert store.get_record('b') == {'id': 'b', 'avg_score': 80}


def test_returned_values_are_copies():
    store = Store(InMemoryRepository())
    store.save_record({'id': 'a', 'sub_samples': []})
    store.get_records()[0]['sub_samples'].append('junk')
    assert store.get_record('a')['sub_samples'] == []


def test_current_user_set_and_cleared():
    store = Store(InMemoryRepository())
    store.set_current_user({'id': 'u1', 'name': 'Mohsin', 'role': 'MANAGER'})
    assert store.get_current_user()['id'] == 'u1'
    store.set_current_user(None)
    assert store.get_current_user() is None


def test_sqlalchemy_repository_round_trip(app, db_store):
    from qc_tool.extensions import db

    repo = SQLAlchemyRepository()
    repo.set(KEY_RECORDS, [{'id': 'r1', 'avg_score': 92.0}])
    db.session.commit()
    assert db.session.get(KeyValueEntry, KEY_RECORDS) is not None

    store = db_store()
    record = store.get_record('r1')
    record['avg_score'] = 97.0
    store.save_record(record)
    db.session.commit()
    assert db_store().get_record('r1')['avg_score'] == 97.0

    repo.delete(KEY_RECORDS)
    db.session.commit()
    assert db_store().get_records() == []


def test_database_store_seeds_users(app, db_store):
    assert [u['id'] for u in db_store().get_users()] == [u['id'] for u in INITIAL_USERS]
