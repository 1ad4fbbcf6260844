import pytest

from qc_tool.services import permissions
from tests.conftest import ADMIN_ID, MANAGER_ID, QC_AGENT_ID, AGENT_ID, OTHER_AGENT_ID

JASH_RECORD = {'id': 'r1', 'agent_id': AGENT_ID, 'agent_name': 'Jash', 'date': '2024-01-01'}


@pytest.mark.parametrize('user_id,create,delete,export', [
    (ADMIN_ID, True, True, True),
    (MANAGER_ID, True, True, True),
    (QC_AGENT_ID, True, True, False),
    (AGENT_ID, False, False, False),
])
def test_record_matrix(users, user_id, create, delete, export):
    user = users[user_id]
    assert permissions.can_create_record(user) is create
    assert permissions.can_edit_record(user, JASH_RECORD) is create
    assert permissions.can_delete_record(user, JASH_RECORD) is delete
    assert permissions.can_export(user) is export


def test_agents_only_see_their_own_records(users):
    assert permissions.can_view_record(users[AGENT_ID], JASH_RECORD)
    assert not permissions.can_view_record(users[OTHER_AGENT_ID], JASH_RECORD)
    assert permissions.can_view_record(users[QC_AGENT_ID], JASH_RECORD)


def test_ownership_falls_back_to_agent_name(users):
    legacy = {'id': 'r0', 'agent_name': 'Jash'}
    assert permissions.owns_record(users[AGENT_ID], legacy)
    assert not permissions.owns_record(users[OTHER_AGENT_ID], legacy)


def test_only_the_audited_agent_reviews(users):
    assert permissions.can_review_record(users[AGENT_ID], JASH_RECORD)
    assert not permissions.can_review_record(users[OTHER_AGENT_ID], JASH_RECORD)
    assert not permissions.can_review_record(users[MANAGER_ID], JASH_RECORD)


def test_production_modification_window(users):
    today = {'date': '2024-03-15'}
    yesterday = {'date': '2024-03-14'}
    assert permissions.can_modify_production(users[AGENT_ID], today, '2024-03-15')
    assert not permissions.can_modify_production(users[AGENT_ID], yesterday, '2024-03-15')
    assert not permissions.can_modify_production(users[QC_AGENT_ID], yesterday, '2024-03-15')
    assert permissions.can_modify_production(users[MANAGER_ID], yesterday, '2024-03-15')
    assert permissions.can_modify_production(users[ADMIN_ID], yesterday, '2024-03-15')


def test_production_logging_for_others(users):
    assert permissions.can_log_production_for(users[AGENT_ID], AGENT_ID)
    assert not permissions.can_log_production_for(users[AGENT_ID], OTHER_AGENT_ID)
    assert permissions.can_log_production_for(users[MANAGER_ID], OTHER_AGENT_ID)


def test_sole_admin_is_protected(memory_store, users):
    roster = memory_store.get_users()
    admin = users[ADMIN_ID]
    assert not permissions.can_remove_user(admin, admin, roster)
    assert not permissions.can_change_role(admin, admin, 'MANAGER', roster)
    assert permissions.can_change_role(admin, admin, 'ADMIN', roster)
    assert permissions.can_remove_user(admin, users[AGENT_ID], roster)

    roster.append({'id': 'u11', 'name': 'Second Admin', 'role': 'ADMIN'})
    assert permissions.can_remove_user(admin, admin, roster)


def test_only_admins_manage_users(memory_store, users):
    roster = memory_store.get_users()
    assert not permissions.can_remove_user(users[MANAGER_ID], users[AGENT_ID], roster)
    assert not permissions.can_change_role(users[MANAGER_ID], users[AGENT_ID], 'QC_AGENT', roster)


@pytest.mark.parametrize('user_id,views', [
    (ADMIN_ID, ['Dashboard', 'Qc form', 'Report table', 'Production Tracker', 'Admin']),
    (MANAGER_ID, ['Dashboard', 'Qc form', 'Report table', 'Production Tracker']),
    (QC_AGENT_ID, ['Dashboard', 'Qc form', 'Report table', 'Production Tracker']),
    (AGENT_ID, ['Dashboard', 'Report table', 'Production Tracker']),
])
def test_allowed_views(users, user_id, views):
    assert permissions.allowed_views(users[user_id]) == views


def test_unknown_view_is_closed(users):
    assert not permissions.can_access_view(users[ADMIN_ID], 'Billing')
