from typing import Any, Iterable, Mapping
from storefront.domain.exceptions import InvariantViolation


def assert_section_payload(data: Any) -> None:
    if not isinstance(data, Mapping):
        raise InvariantViolation(f"Section must be an object, got {type(data).__name__}.")

    if not data.get("id") or not isinstance(data["id"], str):
        raise InvariantViolation("Section must have a string id.")

    if not data.get("type") or not isinstance(data["type"], str):
        raise InvariantViolation(f"Section {data['id']} must have a type.")

    for field in ("content", "styles"):
        value = data.get(field)
        if value is not None and not isinstance(value, Mapping):
            raise InvariantViolation(
                f"Section {data['id']} {field} must be an object."
            )


def assert_unique_section_ids(sections: Iterable[Any]) -> None:
    seen = set()
    for section in sections:
        if section.id in seen:
            raise InvariantViolation(f"Duplicate section id: {section.id}")
        seen.add(section.id)


def assert_publishable(document) -> None:
    if not document.sections:
        raise InvariantViolation("Cannot publish a storefront without sections.")

    assert_unique_section_ids(document.sections)
