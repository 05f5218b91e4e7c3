from flask import current_app, g
from flask_jwt_extended import get_jwt, get_jwt_identity
from storefront.application.builder import BuilderSession
from storefront.gateways import SessionContext, build_gateway


def current_context() -> SessionContext:
    return SessionContext(
        tenant_id=g.current_tenant.id,
        actor_id=get_jwt_identity(),
        role=get_jwt().get("role", "user"),
    )


def current_session() -> BuilderSession:
    registry = current_app.extensions["builder_sessions"]
    return registry.get_or_load(current_context(), build_gateway)


def discard_session() -> None:
    current_app.extensions["builder_sessions"].discard(current_context())
