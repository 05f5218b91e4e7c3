from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List
from storefront.domain.document import Document


@dataclass(frozen=True)
class SessionContext:
    """Who is editing, passed explicitly instead of read from request globals."""
    tenant_id: str
    actor_id: str
    role: str = "admin"


class PersistenceGateway(ABC):
    """
    Storage boundary for one tenant's storefront.

    Implementations raise NotFoundError when the tenant has no store and
    GatewayError for storage failures; they never retry.
    """

    def __init__(self, context: SessionContext):
        self.context = context

    @abstractmethod
    def load_document(self) -> Document:
        ...

    @abstractmethod
    def save_draft(self, document: Document) -> None:
        ...

    @abstractmethod
    def publish(self, document: Document) -> int:
        """Save, make the store public and return the new version number."""

    @abstractmethod
    def unpublish(self) -> None:
        ...

    @abstractmethod
    def check_slug_available(self, slug: str) -> bool:
        ...

    @abstractmethod
    def create_store(self, name: str, slug: str) -> str:
        ...

    @abstractmethod
    def get_store(self) -> Dict[str, Any]:
        ...

    @abstractmethod
    def list_versions(self) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def get_version(self, version: int) -> Document:
        ...
