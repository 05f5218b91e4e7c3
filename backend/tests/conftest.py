import pytest
from flask_jwt_extended import create_access_token

from storefront import create_app
from storefront.extensions import db
from storefront.gateways import InMemoryGateway, MemoryBackend, SessionContext
from storefront.models import Tenant, User


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def tenant(app):
    tenant = Tenant(name="Green Leaf", slug="green-leaf")
    db.session.add(tenant)
    db.session.commit()
    return tenant


def _user(tenant, email, role):
    user = User(tenant_id=tenant.id, email=email, role=role)
    user.set_password("correct-horse")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def admin(tenant):
    return _user(tenant, "admin@greenleaf.test", "admin")


@pytest.fixture
def staff(tenant):
    return _user(tenant, "staff@greenleaf.test", "user")


def _headers(tenant, user):
    token = create_access_token(
        identity=user.id,
        additional_claims={"tenant_id": tenant.id, "role": user.role},
    )
    return {"Authorization": f"Bearer {token}", "X-Tenant-ID": tenant.id}


@pytest.fixture
def auth_headers(tenant, admin):
    return _headers(tenant, admin)


@pytest.fixture
def staff_headers(tenant, staff):
    return _headers(tenant, staff)


@pytest.fixture
def context():
    return SessionContext(tenant_id="tenant-1", actor_id="user-1")


@pytest.fixture
def memory_backend():
    return MemoryBackend()


@pytest.fixture
def memory_gateway(context, memory_backend):
    return InMemoryGateway(context, backend=memory_backend)
