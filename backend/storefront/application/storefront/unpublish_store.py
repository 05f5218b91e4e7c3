from storefront.domain.lifecycle.store import assert_store_transition, store_status
from storefront.utils.audit import log_action
from storefront.utils.transaction import transactional
from .lookup import require_store


def unpublish_store(
    *,
    tenant_id: str,
    actor_id: str,
) -> None:
    """
    Returns a published store to draft. Layout and versions are kept.
    """
    with transactional():
        store = require_store(tenant_id, for_update=True)

        assert_store_transition(
            from_status=store_status(store.is_public),
            to_status="draft",
        )
        store.is_public = False

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="store.unpublish",
            entity_type="store",
            entity_id=store.id,
            payload={},
        )
