from storefront.extensions import db
from storefront.models.store_version import StoreVersion
from storefront.domain.document import Document
from storefront.domain.invariants.document import assert_publishable
from storefront.domain.lifecycle.store import assert_store_transition, store_status
from storefront.utils.audit import log_action
from storefront.utils.transaction import transactional
from storefront.utils.versioning import next_version
from .lookup import require_store


def publish_store(
    *,
    tenant_id: str,
    actor_id: str,
    document: Document,
) -> int:
    """
    Saves the document, makes the store public and records an immutable
    version snapshot.

    Responsibilities:
    - transactional boundary
    - lifecycle and invariant enforcement
    - version creation
    - audit logging
    """
    assert_publishable(document)

    with transactional():
        # Row-level lock keeps version numbers sequential
        store = require_store(tenant_id, for_update=True)

        assert_store_transition(
            from_status=store_status(store.is_public),
            to_status="published",
        )

        store.layout_config = document.layout_config()
        store.theme_config = document.theme.to_dict()
        store.is_public = True

        version = StoreVersion()
        version.store_id = store.id
        version.tenant_id = tenant_id
        version.version = next_version(store.id, tenant_id)
        version.status = "published"
        version.snapshot = document.to_dict()
        version.created_by = actor_id

        db.session.add(version)
        db.session.flush()

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="store.publish",
            entity_type="store",
            entity_id=store.id,
            payload={"version": version.version},
        )

    return version.version
