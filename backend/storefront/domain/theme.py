import re
from typing import Any, Dict, Optional
from storefront.domain.document import THEME_COLOR_KEYS, ThemeConfig
from storefront.domain.exceptions import ValidationError

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

TYPOGRAPHY_KEYS = ("fontFamily",)

# Preset palettes use `foreground` for the text colour and a CSS font stack
THEME_PRESETS: Dict[str, Dict[str, Any]] = {
    "minimalist": {
        "name": "Minimalist",
        "colors": {
            "primary": "#111827",
            "secondary": "#f3f4f6",
            "accent": "#3b82f6",
            "background": "#ffffff",
            "foreground": "#111827",
        },
        "typography": {"fontFamily": "Inter, system-ui, sans-serif"},
    },
    "dark-mode": {
        "name": "Dark Mode",
        "colors": {
            "primary": "#10b981",
            "secondary": "#1f2937",
            "accent": "#34d399",
            "background": "#0a0a0a",
            "foreground": "#f9fafb",
        },
        "typography": {"fontFamily": "Inter, system-ui, sans-serif"},
    },
    "strain-focused": {
        "name": "Strain Focused",
        "colors": {
            "primary": "#15803d",
            "secondary": "#ecfccb",
            "accent": "#a3e635",
            "background": "#f7fee7",
            "foreground": "#1a2e05",
        },
        "typography": {"fontFamily": "Poppins, sans-serif"},
    },
    "luxury": {
        "name": "Luxury",
        "colors": {
            "primary": "#b08d57",
            "secondary": "#1c1917",
            "accent": "#d4af37",
            "background": "#0c0a09",
            "foreground": "#fafaf9",
        },
        "typography": {"fontFamily": "Playfair Display, Georgia, serif"},
    },
}


def preset_theme(preset_id: str) -> ThemeConfig:
    """Build a ThemeConfig from a named preset, replacing the theme wholesale."""
    preset = THEME_PRESETS.get(preset_id)
    if preset is None:
        raise ValidationError(f"Unknown theme preset: {preset_id}", field="preset")

    colors = preset["colors"]
    return ThemeConfig(
        colors={
            "primary": colors["primary"],
            "secondary": colors["secondary"],
            "accent": colors["accent"],
            "background": colors["background"],
            "text": colors["foreground"],
        },
        typography={
            "fontFamily": preset["typography"]["fontFamily"].split(",")[0].strip(),
        },
    )


def patch_theme(theme: ThemeConfig, group: str, key: str, value: Any) -> ThemeConfig:
    if group == "colors":
        if key not in THEME_COLOR_KEYS:
            raise ValidationError(f"Unknown theme color: {key}", field=key)
        if not isinstance(value, str) or not HEX_COLOR.match(value):
            raise ValidationError(f"Invalid color value for {key}: {value!r}", field=key)

        return ThemeConfig(colors={**theme.colors, key: value}, typography=dict(theme.typography))

    if group == "typography":
        if key not in TYPOGRAPHY_KEYS:
            raise ValidationError(f"Unknown typography setting: {key}", field=key)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("Font family cannot be empty", field=key)

        return ThemeConfig(colors=dict(theme.colors), typography={**theme.typography, key: value.strip()})

    raise ValidationError(f"Unknown theme group: {group}", field="group")


def matching_preset(theme: ThemeConfig) -> Optional[str]:
    """Id of the preset that produces exactly `theme`, if any."""
    for preset_id in THEME_PRESETS:
        if preset_theme(preset_id) == theme:
            return preset_id
    return None
