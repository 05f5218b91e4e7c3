from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from storefront.domain.invariants.document import (
    assert_section_payload,
    assert_unique_section_ids,
)

THEME_COLOR_KEYS = ("primary", "secondary", "accent", "background", "text")


def new_section_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class SectionRecord:
    """
    One visual block of a storefront page.

    Records are treated as values: transforms build new records instead of
    mutating `content` or `styles` of an existing one, so history snapshots
    can share them safely.
    """
    id: str
    type: str
    content: Dict[str, Any] = field(default_factory=dict)
    styles: Dict[str, Any] = field(default_factory=dict)
    visible: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "content": copy.deepcopy(self.content),
            "styles": copy.deepcopy(self.styles),
            "visible": self.visible,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SectionRecord":
        assert_section_payload(data)
        visible = data.get("visible")

        return cls(
            id=data["id"],
            type=data["type"],
            content=copy.deepcopy(dict(data.get("content") or {})),
            styles=copy.deepcopy(dict(data.get("styles") or {})),
            visible=True if visible is None else bool(visible),
        )


@dataclass(frozen=True)
class ThemeConfig:
    colors: Dict[str, str]
    typography: Dict[str, str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colors": dict(self.colors),
            "typography": dict(self.typography),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ThemeConfig":
        # Stored themes may be partial; missing fields fall back to defaults
        data = data or {}
        colors = dict(DEFAULT_THEME.colors)
        colors.update({
            key: value
            for key, value in (data.get("colors") or {}).items()
            if key in THEME_COLOR_KEYS
        })
        typography = dict(DEFAULT_THEME.typography)
        typography.update(data.get("typography") or {})

        return cls(colors=colors, typography=typography)


DEFAULT_THEME = ThemeConfig(
    colors={
        "primary": "#000000",
        "secondary": "#ffffff",
        "accent": "#3b82f6",
        "background": "#ffffff",
        "text": "#000000",
    },
    typography={"fontFamily": "Inter"},
)


@dataclass(frozen=True)
class Document:
    """Ordered sections plus the theme of one storefront."""
    sections: Tuple[SectionRecord, ...] = ()
    theme: ThemeConfig = DEFAULT_THEME

    def index_of(self, section_id: str) -> Optional[int]:
        for index, section in enumerate(self.sections):
            if section.id == section_id:
                return index
        return None

    def get(self, section_id: str) -> Optional[SectionRecord]:
        index = self.index_of(section_id)
        return None if index is None else self.sections[index]

    @property
    def section_ids(self) -> List[str]:
        return [section.id for section in self.sections]

    @property
    def section_types(self) -> List[str]:
        return [section.type for section in self.sections]

    def with_sections(self, sections: Iterable[SectionRecord]) -> "Document":
        return replace(self, sections=tuple(sections))

    def with_theme(self, theme: ThemeConfig) -> "Document":
        return replace(self, theme=theme)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sections": self.layout_config(),
            "theme": self.theme.to_dict(),
        }

    def layout_config(self) -> List[Dict[str, Any]]:
        return [section.to_dict() for section in self.sections]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        return cls.from_layout(data.get("sections"), data.get("theme"))

    @classmethod
    def from_layout(cls, layout_config: Any, theme_config: Any = None) -> "Document":
        """
        Build a document from persisted layout/theme JSON.

        A layout that is not a list is treated as an empty page.
        """
        raw_sections = layout_config if isinstance(layout_config, list) else []
        sections = tuple(SectionRecord.from_dict(s) for s in raw_sections)
        assert_unique_section_ids(sections)

        theme = ThemeConfig.from_dict(theme_config if isinstance(theme_config, dict) else None)
        return cls(sections=sections, theme=theme)
