import re
from typing import Optional
from storefront.domain.exceptions import ConflictError, ValidationError

SLUG_MIN_LENGTH = 3
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def generate_slug(name: str) -> str:
    """
    Suggest a slug from a display name.

    The result is only a suggestion and still has to pass validate_slug.
    """
    slug = (name or "").lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def check_slug_format(slug: Optional[str]) -> None:
    if slug is not None and not isinstance(slug, str):
        raise ValidationError("Slug must be a string", field="slug")

    if not slug or len(slug) < SLUG_MIN_LENGTH:
        raise ValidationError(
            f"Slug must be at least {SLUG_MIN_LENGTH} characters",
            field="slug",
        )

    if not SLUG_PATTERN.match(slug):
        raise ValidationError(
            "Slug can only contain lowercase letters, numbers, and hyphens",
            field="slug",
        )


def validate_slug(slug: str, gateway) -> str:
    """
    Run the slug rules in order, stopping at the first failure:
    length, allowed characters, then availability via the gateway.
    """
    check_slug_format(slug)

    if not gateway.check_slug_available(slug):
        raise ConflictError("This slug is already taken", field="slug")

    return slug
