from storefront.domain.document import Document
from storefront.utils.audit import log_action
from storefront.utils.transaction import transactional
from .lookup import require_store


def save_draft(
    *,
    tenant_id: str,
    actor_id: str,
    document: Document,
) -> None:
    """
    Persist the editing document without changing public visibility.

    Responsibilities:
    - Replace layout and theme JSON
    - Audit logging
    """
    with transactional():
        store = require_store(tenant_id, for_update=True)

        store.layout_config = document.layout_config()
        store.theme_config = document.theme.to_dict()

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="store.save_draft",
            entity_type="store",
            entity_id=store.id,
            payload={"sections": len(document.sections)},
        )
