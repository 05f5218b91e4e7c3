"""
Pure transforms over a storefront Document.

Every function returns a new Document and leaves its input untouched. When
an operation targets a section id that is not in the document, the input
document itself is returned, so callers can detect a no-op with `is`.
"""
from __future__ import annotations

import copy
from dataclasses import replace
from typing import Any, Optional, Tuple

from storefront.domain.document import Document, SectionRecord, new_section_id
from storefront.domain.sections import TEMPLATES, section_defaults

EDITABLE_FIELDS = ("content", "styles")


def create_section(section_type: str) -> SectionRecord:
    defaults = section_defaults(section_type)
    return SectionRecord(
        id=new_section_id(),
        type=section_type,
        content=defaults["content"],
        styles=defaults["styles"],
        visible=True,
    )


def add_section(document: Document, section_type: str) -> Tuple[Document, str]:
    section = create_section(section_type)
    return document.with_sections(document.sections + (section,)), section.id


def remove_section(document: Document, section_id: str) -> Document:
    if document.index_of(section_id) is None:
        return document

    return document.with_sections(s for s in document.sections if s.id != section_id)


def duplicate_section(document: Document, section_id: str) -> Tuple[Document, Optional[str]]:
    index = document.index_of(section_id)
    if index is None:
        return document, None

    original = document.sections[index]
    duplicated = replace(
        original,
        id=new_section_id(),
        content=copy.deepcopy(original.content),
        styles=copy.deepcopy(original.styles),
    )

    sections = list(document.sections)
    sections.insert(index + 1, duplicated)
    return document.with_sections(sections), duplicated.id


def toggle_visibility(document: Document, section_id: str) -> Document:
    if document.index_of(section_id) is None:
        return document

    return document.with_sections(
        replace(s, visible=not (True if s.visible is None else s.visible))
        if s.id == section_id else s
        for s in document.sections
    )


def update_field(
    document: Document,
    section_id: str,
    field: str,
    key: str,
    value: Any,
) -> Document:
    """Set `section.<field>[key] = value` on a copy of the matching section."""
    if field not in EDITABLE_FIELDS:
        raise ValueError(f"Cannot update section field: {field}")

    if document.index_of(section_id) is None:
        return document

    def _updated(section: SectionRecord) -> SectionRecord:
        values = dict(getattr(section, field))
        values[key] = copy.deepcopy(value)
        return replace(section, **{field: values})

    return document.with_sections(
        _updated(s) if s.id == section_id else s
        for s in document.sections
    )


def move_section(document: Document, section_id: str, to_index: int) -> Document:
    """
    Relocate a section to `to_index`, clamped to the list bounds.

    Relative order of all other sections is preserved.
    """
    from_index = document.index_of(section_id)
    if from_index is None:
        return document

    to_index = max(0, min(to_index, len(document.sections) - 1))
    if to_index == from_index:
        return document

    sections = list(document.sections)
    section = sections.pop(from_index)
    sections.insert(to_index, section)
    return document.with_sections(sections)


def apply_template(document: Document, template_key: str) -> Document:
    """Replace every section with fresh ones from a named template."""
    template = TEMPLATES.get(template_key)
    if template is None:
        raise ValueError(f"Unknown template: {template_key}")

    return document.with_sections(create_section(t) for t in template["sections"])
