"""Collection-level persistence for users, QC records, production records and the session."""
from qc_tool.constants import (INITIAL_USERS, KEY_USERS, KEY_RECORDS, KEY_PRODUCTION,
                               KEY_CURRENT_USER)
from qc_tool.repository import SQLAlchemyRepository


class Store:
    """Read-modify-write access to the persisted collections.

    Every collection is a JSON list under one key of the injected repository.
    There is no locking; the last write wins.
    """

    def __init__(self, repository):
        self.repository = repository

    # ── Users ──

    def get_users(self):
        users = self.repository.get(KEY_USERS)
        if users is None:
            self.repository.set(KEY_USERS, INITIAL_USERS)
            return [dict(u) for u in INITIAL_USERS]
        return users

    def update_users(self, users):
        self.repository.set(KEY_USERS, users)

    def get_user(self, user_id):
        return next((u for u in self.get_users() if u['id'] == user_id), None)

    # ── QC records ──

    def get_records(self):
        return self.repository.get(KEY_RECORDS, [])

    def get_record(self, record_id):
        return next((r for r in self.get_records() if r['id'] == record_id), None)

    def save_record(self, record):
        self.repository.set(KEY_RECORDS, _upsert(self.get_records(), record))

    def delete_record(self, record_id):
        records = [r for r in self.get_records() if r['id'] != record_id]
        self.repository.set(KEY_RECORDS, records)

    # ── Production records ──

    def get_production_records(self):
        return self.repository.get(KEY_PRODUCTION, [])

    def get_production_record(self, record_id):
        return next((r for r in self.get_production_records() if r['id'] == record_id), None)

    def save_production_record(self, record):
        self.repository.set(KEY_PRODUCTION, _upsert(self.get_production_records(), record))

    def delete_production_record(self, record_id):
        records = [r for r in self.get_production_records() if r['id'] != record_id]
        self.repository.set(KEY_PRODUCTION, records)

    # ── Session ──

    def get_current_user(self):
        return self.repository.get(KEY_CURRENT_USER)

    def set_current_user(self, user):
        if user:
            self.repository.set(KEY_CURRENT_USER, user)
        else:
            self.repository.delete(KEY_CURRENT_USER)


def _upsert(items, item):
    for i, existing in enumerate(items):
        if existing['id'] == item['id']:
            items[i] = item
            return items
    items.append(item)
    return items


def get_store():
    """Store bound to the application database session."""
    return Store(SQLAlchemyRepository())
