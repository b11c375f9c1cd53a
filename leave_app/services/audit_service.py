"""
Audit logging service
"""
from typing import Optional, Dict, Any
from sqlalchemy.orm import Session
from leave_app.models.audit_log import AuditLog
from leave_app.utils.datetime_utils import now_utc
from leave_app.utils.json_serializer import to_json_safe


def log_audit(
    db: Session,
    actor_id: Optional[str],
    action: str,
    entity_type: str,
    entity_id: Optional[Any] = None,
    meta: Optional[Dict[str, Any]] = None,
) -> AuditLog:
    """
    Stage an audit log entry in the caller's transaction

    The entry is only added to the session. It is written by the caller's
    commit together with the change it describes, and discarded on rollback.

    Args:
        db: Database session
        actor_id: Employee ID of the user performing the action (None for system actions)
        action: Action type (e.g., "LEAVE_CREATE", "LEAVE_STATUS_UPDATE", "LEAVE_DELETE")
        entity_type: Type of entity (e.g., "leave", "employee", "holidays")
        entity_id: ID of the affected entity (optional)
        meta: Additional metadata as dictionary (optional)

    Returns:
        Pending AuditLog instance
    """
    audit_log = AuditLog(
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id) if entity_id is not None else None,
        meta_json=to_json_safe(meta) if meta is not None else None,
        created_at=now_utc(),
    )
    db.add(audit_log)
    return audit_log
