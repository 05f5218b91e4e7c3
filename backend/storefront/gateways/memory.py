import copy
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from storefront.domain.document import DEFAULT_THEME, Document
from storefront.domain.exceptions import ConflictError, NotFoundError
from storefront.domain.invariants.document import assert_publishable
from storefront.domain.lifecycle.store import assert_store_transition, store_status
from .base import PersistenceGateway, SessionContext

logger = logging.getLogger(__name__)


class MemoryBackend:
    """Process-local store rows shared by every InMemoryGateway using it."""

    def __init__(self):
        self.stores: Dict[str, Dict[str, Any]] = {}  # tenant_id -> store row
        self.versions: Dict[str, List[Dict[str, Any]]] = {}  # store_id -> versions
        self.lock = threading.Lock()

    def store_for(self, tenant_id: str) -> Optional[Dict[str, Any]]:
        return self.stores.get(tenant_id)

    def slug_taken(self, slug: str) -> bool:
        return any(store["slug"] == slug for store in self.stores.values())


class InMemoryGateway(PersistenceGateway):
    def __init__(self, context: SessionContext, backend: Optional[MemoryBackend] = None):
        super().__init__(context)
        self.backend = backend or MemoryBackend()

    def _require_store(self) -> Dict[str, Any]:
        store = self.backend.store_for(self.context.tenant_id)
        if store is None:
            raise NotFoundError("Storefront not found")
        return store

    def _touch(self, store: Dict[str, Any]) -> None:
        store["updated_at"] = datetime.now(timezone.utc)

    def load_document(self) -> Document:
        store = self._require_store()
        return Document.from_layout(
            copy.deepcopy(store["layout_config"]),
            copy.deepcopy(store["theme_config"]),
        )

    def save_draft(self, document: Document) -> None:
        with self.backend.lock:
            store = self._require_store()
            store["layout_config"] = document.layout_config()
            store["theme_config"] = document.theme.to_dict()
            self._touch(store)

        logger.info("Saved storefront draft for tenant %s", self.context.tenant_id)

    def publish(self, document: Document) -> int:
        assert_publishable(document)

        with self.backend.lock:
            store = self._require_store()
            assert_store_transition(
                from_status=store_status(store["is_public"]),
                to_status="published",
            )
            store["layout_config"] = document.layout_config()
            store["theme_config"] = document.theme.to_dict()
            store["is_public"] = True
            self._touch(store)

            versions = self.backend.versions.setdefault(store["id"], [])
            version = len(versions) + 1
            versions.append({
                "version": version,
                "status": "published",
                "snapshot": document.to_dict(),
                "created_by": self.context.actor_id,
                "created_at": store["updated_at"],
            })

        logger.info("Published storefront %s version %s", store["id"], version)
        return version

    def unpublish(self) -> None:
        with self.backend.lock:
            store = self._require_store()
            assert_store_transition(
                from_status=store_status(store["is_public"]),
                to_status="draft",
            )
            store["is_public"] = False
            self._touch(store)

    def check_slug_available(self, slug: str) -> bool:
        return not self.backend.slug_taken(slug)

    def create_store(self, name: str, slug: str) -> str:
        with self.backend.lock:
            if self.backend.store_for(self.context.tenant_id) is not None:
                raise ConflictError("This tenant already has a storefront")
            if self.backend.slug_taken(slug):
                raise ConflictError("This slug is already taken", field="slug")

            now = datetime.now(timezone.utc)
            store = {
                "id": str(uuid.uuid4()),
                "tenant_id": self.context.tenant_id,
                "store_name": name,
                "slug": slug,
                "layout_config": [],
                "theme_config": DEFAULT_THEME.to_dict(),
                "is_active": True,
                "is_public": False,
                "created_at": now,
                "updated_at": now,
            }
            self.backend.stores[self.context.tenant_id] = store

        return store["id"]

    def get_store(self) -> Dict[str, Any]:
        return copy.deepcopy(self._require_store())

    def list_versions(self) -> List[Dict[str, Any]]:
        store = self._require_store()
        versions = self.backend.versions.get(store["id"], [])
        return [
            {key: v[key] for key in ("version", "status", "created_by", "created_at")}
            for v in sorted(versions, key=lambda v: v["version"], reverse=True)
        ]

    def get_version(self, version: int) -> Document:
        store = self._require_store()
        for v in self.backend.versions.get(store["id"], []):
            if v["version"] == version:
                return Document.from_dict(copy.deepcopy(v["snapshot"]))
        raise NotFoundError(f"Storefront version {version} not found")
