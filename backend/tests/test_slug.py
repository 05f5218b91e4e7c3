import pytest

from storefront.domain.exceptions import ConflictError, ValidationError
from storefront.domain.slug import generate_slug, validate_slug


class SlugDirectory:
    def __init__(self, *taken):
        self.taken = set(taken)
        self.checked = []

    def check_slug_available(self, slug):
        self.checked.append(slug)
        return slug not in self.taken


@pytest.mark.parametrize("name, expected", [
    ("My Store!", "my-store"),
    ("  Green   Leaf  Co ", "green-leaf-co"),
    ("Kush -- Corner", "kush-corner"),
    ("***", ""),
])
def test_generate_slug(name, expected):
    assert generate_slug(name) == expected


def test_too_short_slug_is_rejected_before_lookup():
    directory = SlugDirectory()

    with pytest.raises(ValidationError, match="at least 3 characters") as exc:
        validate_slug("ab", directory)

    assert exc.value.field == "slug"
    assert directory.checked == []


@pytest.mark.parametrize("slug", ["My Store!", "-leading", "trailing-", "double--hyphen", "UPPER"])
def test_invalid_characters_are_rejected(slug):
    with pytest.raises(ValidationError, match="lowercase letters, numbers, and hyphens"):
        validate_slug(slug, SlugDirectory())


def test_suggested_slug_passes_format_rules():
    assert validate_slug(generate_slug("My Store!"), SlugDirectory()) == "my-store"


def test_taken_slug_is_a_conflict():
    with pytest.raises(ConflictError, match="already taken"):
        validate_slug("my-store", SlugDirectory("my-store"))


def test_available_slug_is_accepted():
    directory = SlugDirectory("my-store")

    assert validate_slug("green-leaf-99", directory) == "green-leaf-99"
    assert directory.checked == ["green-leaf-99"]


@pytest.mark.parametrize("slug", [12345, ["green-leaf"], {"slug": "green-leaf"}])
def test_non_string_slug_is_rejected(slug):
    directory = SlugDirectory()

    with pytest.raises(ValidationError, match="must be a string") as exc:
        validate_slug(slug, directory)

    assert exc.value.field == "slug"
    assert directory.checked == []


def test_missing_slug_counts_as_too_short():
    with pytest.raises(ValidationError, match="at least 3 characters"):
        validate_slug(None, SlugDirectory())
