"""Key-value repositories backing the QC tool store.

A repository only knows how to read, write and remove a JSON-serializable
value under a string key. The store layer builds collections on top of it.
"""
import copy

from sqlalchemy.orm.attributes import flag_modified

from qc_tool.extensions import db
from qc_tool.models.kv_store import KeyValueEntry


class Repository:
    """Read/write by key. Values are plain JSON-compatible Python objects."""

    def get(self, key, default=None):
        raise NotImplementedError

    def set(self, key, value):
        raise NotImplementedError

    def delete(self, key):
        raise NotImplementedError


class InMemoryRepository(Repository):
    def __init__(self, initial=None):
        self._data = copy.deepcopy(initial) if initial else {}

    def get(self, key, default=None):
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key, value):
        self._data[key] = copy.deepcopy(value)

    def delete(self, key):
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)


class SQLAlchemyRepository(Repository):
    """Stores each key as one row of ``qc_kv_store``. Callers own the commit."""

    def __init__(self, session=None):
        self.session = session or db.session

    def get(self, key, default=None):
        entry = self.session.get(KeyValueEntry, key)
        if entry is None:
            return default
        return copy.deepcopy(entry.value)

    def set(self, key, value):
        entry = self.session.get(KeyValueEntry, key)
        if entry is None:
            entry = KeyValueEntry(key=key, value=copy.deepcopy(value))
            self.session.add(entry)
        else:
            entry.value = copy.deepcopy(value)
            flag_modified(entry, 'value')
        self.session.flush()

    def delete(self, key):
        entry = self.session.get(KeyValueEntry, key)
        if entry is not None:
            self.session.delete(entry)
            self.session.flush()
