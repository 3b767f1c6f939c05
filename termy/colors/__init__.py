"""Themes and palette resolution."""

from .palette import ANSI_NAMES, SLOT_NAMES, ColorPalette, Rgb, canonical_slot
from .resolver import PaletteResolution, load_color_import, resolve_palette
from .themes import (
    BUILTIN_THEME_IDS,
    DEFAULT_THEME,
    builtin_theme,
    canonical_theme_id,
    normalize_theme_id,
)

__all__ = [
    "ANSI_NAMES",
    "BUILTIN_THEME_IDS",
    "DEFAULT_THEME",
    "SLOT_NAMES",
    "ColorPalette",
    "PaletteResolution",
    "Rgb",
    "builtin_theme",
    "canonical_slot",
    "canonical_theme_id",
    "load_color_import",
    "normalize_theme_id",
    "resolve_palette",
]
