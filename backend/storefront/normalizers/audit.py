from typing import Any, Dict
from storefront.models.audit_log import AuditLog

# Human readable lines for the builder's activity feed
ACTION_SUMMARIES = {
    "store.create": "Storefront created",
    "store.save_draft": "Draft saved",
    "store.publish": "Published version {version}",
    "store.unpublish": "Storefront unpublished",
}


def summarize_action(action: str, payload: Dict[str, Any]) -> str:
    template = ACTION_SUMMARIES.get(action)
    if template is None:
        return action

    try:
        return template.format(**payload)
    except KeyError:
        return template.split(" {")[0]


def normalize_audit_log(log: AuditLog) -> Dict[str, Any]:
    """
    One store activity entry as API JSON.

    `summary` is derived from the action and payload; unknown actions fall
    back to the raw action name.
    """
    payload = log.payload or {}

    return {
        "id": log.id,
        "actor_id": log.actor_id,
        "action": log.action,
        "summary": summarize_action(log.action, payload),
        "store_id": log.entity_id,
        "payload": payload,
        "created_at": log.created_at.isoformat() if log.created_at else None,
    }
