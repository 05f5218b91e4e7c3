import logging
from functools import wraps
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError

from storefront.application.storefront import (
    create_store,
    publish_store,
    require_store,
    save_draft,
    unpublish_store,
)
from storefront.domain.document import Document
from storefront.domain.exceptions import GatewayError, NotFoundError
from storefront.extensions import db
from storefront.models.store import Store
from storefront.models.store_version import StoreVersion
from .base import PersistenceGateway

logger = logging.getLogger(__name__)


def gateway_call(fn):
    """Turn storage failures into GatewayError; builder errors pass through."""
    @wraps(fn)
    def wrapper(self, *args, **kwargs):
        try:
            return fn(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.error(
                "Storefront storage call %s failed for tenant %s: %s",
                fn.__name__, self.context.tenant_id, exc,
            )
            raise GatewayError("Storefront storage is unavailable. Please try again.") from exc
    return wrapper


class SqlAlchemyGateway(PersistenceGateway):
    """Gateway backed by the Flask-SQLAlchemy session of the current app."""

    @gateway_call
    def load_document(self) -> Document:
        store = require_store(self.context.tenant_id)
        return Document.from_layout(store.layout_config, store.theme_config)

    @gateway_call
    def save_draft(self, document: Document) -> None:
        save_draft(
            tenant_id=self.context.tenant_id,
            actor_id=self.context.actor_id,
            document=document,
        )

    @gateway_call
    def publish(self, document: Document) -> int:
        return publish_store(
            tenant_id=self.context.tenant_id,
            actor_id=self.context.actor_id,
            document=document,
        )

    @gateway_call
    def unpublish(self) -> None:
        unpublish_store(
            tenant_id=self.context.tenant_id,
            actor_id=self.context.actor_id,
        )

    @gateway_call
    def check_slug_available(self, slug: str) -> bool:
        return Store.query.filter_by(slug=slug).first() is None

    @gateway_call
    def create_store(self, name: str, slug: str) -> str:
        store = create_store(
            tenant_id=self.context.tenant_id,
            actor_id=self.context.actor_id,
            store_name=name,
            slug=slug,
        )
        return store.id

    @gateway_call
    def get_store(self) -> Dict[str, Any]:
        store = require_store(self.context.tenant_id)
        return {
            "id": store.id,
            "tenant_id": store.tenant_id,
            "store_name": store.store_name,
            "slug": store.slug,
            "is_active": store.is_active,
            "is_public": store.is_public,
            "created_at": store.created_at,
            "updated_at": store.updated_at,
        }

    @gateway_call
    def list_versions(self) -> List[Dict[str, Any]]:
        store = require_store(self.context.tenant_id)

        versions = (
            StoreVersion.query
            .filter_by(store_id=store.id, tenant_id=self.context.tenant_id)
            .order_by(StoreVersion.version.desc())
            .all()
        )
        return [
            {
                "version": v.version,
                "status": v.status,
                "created_by": v.created_by,
                "created_at": v.created_at,
            }
            for v in versions
        ]

    @gateway_call
    def get_version(self, version: int) -> Document:
        store = require_store(self.context.tenant_id)
        pv = StoreVersion.query.filter_by(
            store_id=store.id,
            tenant_id=self.context.tenant_id,
            version=version,
        ).first()

        if not pv:
            raise NotFoundError(f"Storefront version {version} not found")

        return Document.from_dict(pv.snapshot)
