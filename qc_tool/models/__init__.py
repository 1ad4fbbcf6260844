from qc_tool.models.kv_store import KeyValueEntry
from qc_tool.models.audit import AuditLog
