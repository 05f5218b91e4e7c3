from sqlalchemy.exc import IntegrityError
from storefront.extensions import db
from storefront.models.store import Store
from storefront.domain.document import ThemeConfig, DEFAULT_THEME
from storefront.domain.exceptions import ConflictError, ValidationError
from storefront.utils.audit import log_action
from storefront.utils.transaction import transactional
from .lookup import find_store


def create_store(
    *,
    tenant_id: str,
    actor_id: str,
    store_name: str,
    slug: str,
    theme: ThemeConfig = DEFAULT_THEME,
) -> Store:
    """
    Create a tenant's storefront as a private draft with an empty layout.

    Edge cases handled:
    - Missing store name
    - Tenant already owns a storefront
    - Slug taken between validation and insert (unique constraint)
    """
    if not store_name or not store_name.strip():
        raise ValidationError("Store name is required", field="store_name")

    if find_store(tenant_id):
        raise ConflictError("This tenant already has a storefront")

    store = Store()
    store.tenant_id = tenant_id
    store.store_name = store_name.strip()
    store.slug = slug
    store.layout_config = []
    store.theme_config = theme.to_dict()
    store.is_active = True
    store.is_public = False  # start as draft

    try:
        with transactional():
            db.session.add(store)
            db.session.flush()  # ensures store.id is available

            log_action(
                tenant_id=tenant_id,
                actor_id=actor_id,
                action="store.create",
                entity_type="store",
                entity_id=store.id,
                payload={"store_name": store.store_name, "slug": store.slug},
            )

        return store

    except IntegrityError as exc:
        raise ConflictError("This slug is already taken", field="slug") from exc
