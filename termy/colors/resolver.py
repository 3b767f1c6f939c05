"""Merge a base theme with user color overrides."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..diagnostics import Diagnostic, DiagnosticKind, parse_warning
from .palette import ColorPalette, Rgb, canonical_slot
from .themes import DEFAULT_THEME, builtin_theme, canonical_theme_id

logger = logging.getLogger(__name__)


class PaletteResolution(BaseModel):
    """Final palette plus whatever was skipped while building it."""

    model_config = ConfigDict(frozen=True)

    theme: str = Field(description="Built-in theme the palette started from")
    palette: ColorPalette
    diagnostics: tuple[Diagnostic, ...] = Field(default=())


def _apply_entries(
    overrides: dict[str, Rgb],
    entries: dict[str, Any],
    origin: str,
    diagnostics: list[Diagnostic],
) -> None:
    for key, value in entries.items():
        if key.startswith("$"):
            continue

        slot = canonical_slot(key)
        if slot is None:
            diagnostics.append(parse_warning(f"{origin}: unknown color key '{key}'"))
            continue

        color = Rgb.from_hex(value) if isinstance(value, str) else None
        if color is None:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.INVALID_COLOR_VALUE,
                    message=f"{origin}: '{key}' must be #RRGGBB, got {value!r}",
                )
            )
            continue

        overrides[slot] = color


def resolve_palette(
    theme: str,
    colors: Optional[dict[str, str]] = None,
    imported: Optional[dict[str, Any]] = None,
) -> PaletteResolution:
    """Build the palette for a theme name with overrides applied.

    Args:
        theme: Theme name as written in the config
        colors: Raw ``[colors]`` entries
        imported: Decoded JSON object from a color import

    Returns:
        PaletteResolution whose palette defines every slot
    """
    diagnostics: list[Diagnostic] = []

    theme_id = canonical_theme_id(theme)
    if theme_id is None:
        diagnostics.append(
            Diagnostic(
                kind=DiagnosticKind.UNKNOWN_THEME,
                message=f"unknown theme '{theme}', using '{DEFAULT_THEME}'",
            )
        )
        theme_id = DEFAULT_THEME

    overrides: dict[str, Rgb] = {}
    if colors:
        _apply_entries(overrides, colors, "[colors]", diagnostics)
    if imported:
        _apply_entries(overrides, imported, "color import", diagnostics)

    palette = builtin_theme(theme_id).with_slots(overrides)
    return PaletteResolution(theme=theme_id, palette=palette, diagnostics=tuple(diagnostics))


def load_color_import(path: Path) -> tuple[dict[str, Any], list[Diagnostic]]:
    """Read a JSON color import file.

    Never raises for bad input: problems come back as diagnostics together
    with an empty mapping.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        return {}, [parse_warning(f"failed to read color import {path}: {e}")]
    except UnicodeDecodeError as e:
        return {}, [parse_warning(f"color import {path} is not valid UTF-8: {e}")]
    except json.JSONDecodeError as e:
        return {}, [parse_warning(f"invalid JSON in color import {path}: {e}")]

    if not isinstance(data, dict):
        return {}, [parse_warning(f"color import {path} must contain a JSON object")]

    logger.debug("Loaded %d color import entries from %s", len(data), path)
    return data, []
