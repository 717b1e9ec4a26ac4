from flask import current_app
from vsm.extensions import db
from vsm.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: str,
    actor_id: Optional[str] = None,
    payload: dict | None = None
):
    log = AuditLog()

    log.actor_id = actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)

    current_app.logger.info(
        "%s %s=%s by %s", action, entity_type, entity_id, actor_id or "anonymous"
    )
