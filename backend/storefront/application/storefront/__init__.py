from .create_store import create_store
from .save_draft import save_draft
from .publish_store import publish_store
from .unpublish_store import unpublish_store
from .lookup import find_store, require_store

__all__ = [
    "create_store",
    "save_draft",
    "publish_store",
    "unpublish_store",
    "find_store",
    "require_store",
]
