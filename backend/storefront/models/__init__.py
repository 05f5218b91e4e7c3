from .tenant import Tenant
from .user import User
from .store import Store
from .store_version import StoreVersion
from .audit_log import AuditLog

__all__ = ["Tenant", "User", "Store", "StoreVersion", "AuditLog"]
