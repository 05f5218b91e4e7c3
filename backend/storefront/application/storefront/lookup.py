from typing import Optional
from sqlalchemy import select
from storefront.extensions import db
from storefront.models.store import Store
from storefront.domain.exceptions import NotFoundError


def find_store(tenant_id: str, *, for_update: bool = False) -> Optional[Store]:
    query = select(Store).where(Store.tenant_id == tenant_id)
    if for_update:
        query = query.with_for_update()

    return db.session.execute(query).scalar_one_or_none()


def require_store(tenant_id: str, *, for_update: bool = False) -> Store:
    store = find_store(tenant_id, for_update=for_update)
    if not store:
        raise NotFoundError("Storefront not found")
    return store
