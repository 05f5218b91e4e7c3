from typing import Optional
from storefront.extensions import db
from storefront.models.audit_log import AuditLog


def log_action(
    *,
    tenant_id: str,
    actor_id: str,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    """Add an audit row to the current transaction; the caller commits."""
    log = AuditLog()

    log.tenant_id = tenant_id
    log.actor_id = actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
