from flask import current_app

from .base import PersistenceGateway, SessionContext
from .database import SqlAlchemyGateway
from .memory import InMemoryGateway, MemoryBackend


def build_gateway(context: SessionContext) -> PersistenceGateway:
    """Gateway for the configured BUILDER_GATEWAY backend."""
    kind = current_app.config.get("BUILDER_GATEWAY", "sqlalchemy")

    if kind == "memory":
        backend = current_app.extensions.setdefault("builder_memory_backend", MemoryBackend())
        return InMemoryGateway(context, backend=backend)

    if kind == "sqlalchemy":
        return SqlAlchemyGateway(context)

    raise RuntimeError(f"Unknown BUILDER_GATEWAY: {kind}")


__all__ = [
    "PersistenceGateway",
    "SessionContext",
    "SqlAlchemyGateway",
    "InMemoryGateway",
    "MemoryBackend",
    "build_gateway",
]
