from datetime import datetime
from typing import Any, Dict


def _iso(value):
    return value.isoformat() if isinstance(value, datetime) else value


def normalize_store(store: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": store["id"],
        "store_name": store["store_name"],
        "slug": store["slug"],
        "status": "published" if store["is_public"] else "draft",
        "is_active": store["is_active"],
        "created_at": _iso(store.get("created_at")),
        "updated_at": _iso(store.get("updated_at")),
    }


def normalize_version(version: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "version": version["version"],
        "status": version["status"],
        "created_by": version.get("created_by"),
        "created_at": _iso(version.get("created_at")),
    }
