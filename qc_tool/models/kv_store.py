from qc_tool.extensions import db
from datetime import datetime, timezone


class KeyValueEntry(db.Model):
    """One JSON-serialized collection (users, QC records, ...) stored under a fixed key."""
    __tablename__ = 'qc_kv_store'

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.JSON)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                           onupdate=lambda: datetime.now(timezone.utc))
