from qc_tool.extensions import db
from datetime import datetime, timezone
from flask import g, request, has_request_context


class AuditLog(db.Model):
    __tablename__ = 'qc_audit_log'

    id = db.Column(db.Integer, primary_key=True)
    collection = db.Column(db.String(100), nullable=False)
    record_id = db.Column(db.String(100), nullable=False)
    action = db.Column(db.String(20), nullable=False)
    old_data = db.Column(db.JSON)
    new_data = db.Column(db.JSON)
    changed_fields = db.Column(db.JSON)
    user_id = db.Column(db.String(100))
    user_name = db.Column(db.String(200))
    user_role = db.Column(db.String(50))
    user_ip = db.Column(db.String(50))
    action_timestamp = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    @staticmethod
    def log(collection, record_id, action, old_data=None, new_data=None):
        """Log an audit entry. Call within request context."""
        user = getattr(g, 'current_user', None) or {}
        changed_fields = None
        if isinstance(old_data, dict) and isinstance(new_data, dict):
            changed_fields = sorted(
                key for key in set(old_data) | set(new_data)
                if str(old_data.get(key)) != str(new_data.get(key))
            ) or None
        entry = AuditLog(
            collection=collection,
            record_id=str(record_id),
            action=action,
            old_data=old_data,
            new_data=new_data,
            changed_fields=changed_fields,
            user_id=user.get('id'),
            user_name=user.get('name'),
            user_role=user.get('role'),
            user_ip=request.remote_addr if has_request_context() else None,
        )
        db.session.add(entry)
