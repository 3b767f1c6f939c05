"""Color palette model and slot aliases."""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


ANSI_NAMES = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "bright_black",
    "bright_red",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "bright_white",
)

# Canonical slot order used for listings and [colors] sections
SLOT_NAMES = ("foreground", "background", "cursor") + ANSI_NAMES


def _build_aliases() -> dict[str, str]:
    aliases = {
        "foreground": "foreground",
        "fg": "foreground",
        "background": "background",
        "bg": "background",
        "cursor": "cursor",
    }
    for index, name in enumerate(ANSI_NAMES):
        aliases[name] = name
        aliases[f"color{index}"] = name
        if name.startswith("bright_"):
            aliases[name.replace("_", "")] = name
    return aliases


SLOT_ALIASES = _build_aliases()

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def canonical_slot(key: str) -> Optional[str]:
    """Resolve a user-facing color key (``fg``, ``color9``...) to its slot name."""
    return SLOT_ALIASES.get(key.strip().lower())


class Rgb(BaseModel):
    """An opaque 24-bit color."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    @classmethod
    def from_hex(cls, value: str) -> Optional["Rgb"]:
        """Parse exactly ``#RRGGBB``; returns None for anything else."""
        match = _HEX_COLOR.match(value.strip())
        if not match:
            return None
        r, g, b = (int(part, 16) for part in match.groups())
        return cls(r=r, g=g, b=b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_floats(self) -> tuple[float, float, float]:
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)


def rgb(r: int, g: int, b: int) -> Rgb:
    return Rgb(r=r, g=g, b=b)


class ColorPalette(BaseModel):
    """A complete terminal palette: every slot always holds a color."""

    model_config = ConfigDict(frozen=True)

    foreground: Rgb
    background: Rgb
    cursor: Rgb
    ansi: tuple[Rgb, ...] = Field(min_length=16, max_length=16)

    def slot(self, name: str) -> Rgb:
        """Look up a slot by canonical name or alias.

        Raises:
            KeyError: If the name is not a palette slot
        """
        slot = canonical_slot(name)
        if slot is None:
            raise KeyError(name)
        if slot in ("foreground", "background", "cursor"):
            return getattr(self, slot)
        return self.ansi[ANSI_NAMES.index(slot)]

    def with_slots(self, overrides: dict[str, Rgb]) -> "ColorPalette":
        """Return a copy with canonical slots replaced."""
        ansi = list(self.ansi)
        fields = {}
        for slot, color in overrides.items():
            if slot in ("foreground", "background", "cursor"):
                fields[slot] = color
            else:
                ansi[ANSI_NAMES.index(slot)] = color
        return self.model_copy(update={**fields, "ansi": tuple(ansi)})

    def items(self) -> list[tuple[str, Rgb]]:
        """All slots in canonical order."""
        return [(name, self.slot(name)) for name in SLOT_NAMES]
