"""
Audit log sink.

`record` is fire-and-forget: a failed insert is logged and never reaches the
caller, so callers invoke it only after their own transaction has committed.
"""
import logging
import uuid

from .models import AuditLog

logger = logging.getLogger(__name__)


def _json_safe(value):
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_json_safe(v) for v in value]
    if isinstance(value, uuid.UUID):
        return str(value)
    return value


def record(action_type, entity_type=None, entity_id=None, details=None, actor=None):
    """Best-effort insert into `audit_logs`. Returns the row, or None on failure."""
    try:
        return AuditLog.objects.create(
            user=actor,
            action_type=action_type,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            details=_json_safe(details or {}),
        )
    except Exception as e:
        logger.exception('Failed to insert audit log %s: %s', action_type, e)
        return None
