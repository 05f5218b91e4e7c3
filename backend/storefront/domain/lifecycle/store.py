from typing import Set
from storefront.domain.exceptions import ValidationError

# Explicit allowed state transitions
ALLOWED_STORE_TRANSITIONS: dict[str, Set[str]] = {
    "draft": {"published"},
    "published": {"published", "draft"},  # republish stores a new version
}


def store_status(is_public: bool) -> str:
    return "published" if is_public else "draft"


def assert_store_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards storefront visibility transitions.
    Single source of truth for publish/unpublish.
    """
    allowed = ALLOWED_STORE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise ValidationError(
            f"Illegal storefront transition: {from_status} → {to_status}"
        )
