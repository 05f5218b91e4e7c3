from storefront.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin


class StoreVersion(BaseModel, TenantMixin):
    __tablename__ = "store_versions"

    store_id = db.Column(
        db.String(36),
        db.ForeignKey("stores.id"),
        nullable=False
    )

    version = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False)
    # published

    snapshot = db.Column(db.JSON, nullable=False)

    created_by = db.Column(db.String(36), nullable=True)

    store = db.relationship("Store", back_populates="versions")

    __table_args__ = (
        db.UniqueConstraint("store_id", "version", name="uq_store_version"),
        db.Index("idx_store_version_store", "store_id"),
    )
