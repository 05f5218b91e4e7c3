from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class Store(BaseModel, TenantMixin):
    __tablename__ = "stores"

    store_name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True, index=True)

    layout_config = db.Column(db.JSON, nullable=False, default=list)  # ordered sections
    theme_config = db.Column(db.JSON, nullable=False, default=dict)

    is_active = db.Column(db.Boolean, default=True)
    is_public = db.Column(db.Boolean, default=False, index=True)

    __table_args__ = (
        db.UniqueConstraint("tenant_id", name="uq_store_per_tenant"),
    )

    versions = db.relationship(
        "StoreVersion",
        back_populates="store",
        order_by="StoreVersion.version",
        cascade="all, delete-orphan"
    )
