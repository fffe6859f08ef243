from flask import g
from store_cms.extensions import db
from store_cms.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[object],
    payload: dict | None = None
) -> AuditLog:
    """
    Stage an audit row in the current transaction.
    The actor is taken from ``g.actor_id`` when the caller set one.
    """
    log = AuditLog()

    log.actor_id = g.get("actor_id")
    log.action = action
    log.entity_type = entity_type
    log.entity_id = str(entity_id)
    log.payload = payload or {}

    db.session.add(log)
    return log
