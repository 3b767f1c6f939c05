"""Built-in color themes."""

import re
from typing import Optional

from .palette import ColorPalette, rgb


DEFAULT_THEME = "termy"

BUILTIN_THEME_IDS = (
    "termy",
    "tokyo-night",
    "catppuccin-mocha",
    "dracula",
    "gruvbox-dark",
    "nord",
    "solarized-dark",
    "one-dark",
    "monokai",
    "material-dark",
    "palenight",
    "tomorrow-night",
    "oceanic-next",
)

# Lookup keys have every separator removed
_THEME_LOOKUP = {
    "termy": "termy",
    "default": "termy",
    "tokyonight": "tokyo-night",
    "catppuccin": "catppuccin-mocha",
    "catppuccinmocha": "catppuccin-mocha",
    "dracula": "dracula",
    "gruvbox": "gruvbox-dark",
    "gruvboxdark": "gruvbox-dark",
    "nord": "nord",
    "solarized": "solarized-dark",
    "solarizeddark": "solarized-dark",
    "one": "one-dark",
    "onedark": "one-dark",
    "monokai": "monokai",
    "material": "material-dark",
    "materialdark": "material-dark",
    "palenight": "palenight",
    "tomorrow": "tomorrow-night",
    "tomorrownight": "tomorrow-night",
    "oceanic": "oceanic-next",
    "oceanicnext": "oceanic-next",
}


def _palette(fg, bg, cursor, ansi) -> ColorPalette:
    return ColorPalette(
        foreground=rgb(*fg),
        background=rgb(*bg),
        cursor=rgb(*cursor),
        ansi=tuple(rgb(*color) for color in ansi),
    )


_THEMES = {
    "termy": _palette(
        (231, 235, 245), (11, 16, 32), (167, 233, 163),
        [
            (11, 16, 32), (241, 184, 197), (167, 233, 163), (255, 229, 163),
            (163, 201, 233), (217, 163, 233), (163, 233, 224), (231, 235, 245),
            (74, 85, 104), (245, 198, 203), (195, 233, 195), (255, 243, 205),
            (195, 217, 233), (233, 195, 245), (195, 245, 240), (255, 255, 255),
        ],
    ),
    "tokyo-night": _palette(
        (192, 202, 245), (26, 27, 38), (192, 202, 245),
        [
            (21, 22, 30), (247, 118, 142), (158, 206, 106), (224, 175, 104),
            (122, 162, 247), (187, 154, 247), (125, 207, 255), (192, 202, 245),
            (65, 72, 104), (247, 118, 142), (158, 206, 106), (224, 175, 104),
            (122, 162, 247), (187, 154, 247), (125, 207, 255), (192, 202, 245),
        ],
    ),
    "catppuccin-mocha": _palette(
        (205, 214, 244), (30, 30, 46), (245, 224, 220),
        [
            (69, 71, 90), (243, 139, 168), (166, 227, 161), (249, 226, 175),
            (137, 180, 250), (203, 166, 247), (148, 226, 213), (186, 194, 222),
            (88, 91, 112), (243, 139, 168), (166, 227, 161), (249, 226, 175),
            (137, 180, 250), (203, 166, 247), (148, 226, 213), (166, 173, 200),
        ],
    ),
    "dracula": _palette(
        (248, 248, 242), (40, 42, 54), (248, 248, 242),
        [
            (33, 34, 44), (255, 85, 85), (80, 250, 123), (241, 250, 140),
            (98, 114, 164), (255, 121, 198), (139, 233, 253), (248, 248, 242),
            (68, 71, 90), (255, 110, 110), (105, 255, 148), (255, 255, 165),
            (123, 139, 189), (255, 146, 223), (164, 255, 255), (255, 255, 255),
        ],
    ),
    "gruvbox-dark": _palette(
        (235, 219, 178), (40, 40, 40), (235, 219, 178),
        [
            (40, 40, 40), (204, 36, 29), (152, 151, 26), (215, 153, 33),
            (69, 133, 136), (177, 98, 134), (104, 157, 106), (168, 153, 132),
            (146, 131, 116), (251, 73, 52), (184, 187, 38), (250, 189, 47),
            (131, 165, 152), (211, 134, 155), (142, 192, 124), (235, 219, 178),
        ],
    ),
    "nord": _palette(
        (216, 222, 233), (46, 52, 64), (216, 222, 233),
        [
            (59, 66, 82), (191, 97, 106), (163, 190, 140), (235, 203, 139),
            (129, 161, 193), (180, 142, 173), (136, 192, 208), (229, 233, 240),
            (76, 86, 106), (191, 97, 106), (163, 190, 140), (235, 203, 139),
            (129, 161, 193), (180, 142, 173), (143, 188, 187), (236, 239, 244),
        ],
    ),
    "solarized-dark": _palette(
        (131, 148, 150), (0, 43, 54), (131, 148, 150),
        [
            (7, 54, 66), (220, 50, 47), (133, 153, 0), (181, 137, 0),
            (38, 139, 210), (211, 54, 130), (42, 161, 152), (238, 232, 213),
            (0, 43, 54), (203, 75, 22), (88, 110, 117), (101, 123, 131),
            (131, 148, 150), (108, 113, 196), (147, 161, 161), (253, 246, 227),
        ],
    ),
    "one-dark": _palette(
        (171, 178, 191), (40, 44, 52), (171, 178, 191),
        [
            (40, 44, 52), (224, 108, 117), (152, 195, 121), (229, 192, 123),
            (97, 175, 239), (198, 120, 221), (86, 182, 194), (171, 178, 191),
            (92, 99, 112), (224, 108, 117), (152, 195, 121), (229, 192, 123),
            (97, 175, 239), (198, 120, 221), (86, 182, 194), (255, 255, 255),
        ],
    ),
    "monokai": _palette(
        (248, 248, 242), (39, 40, 34), (248, 248, 242),
        [
            (39, 40, 34), (249, 38, 114), (166, 226, 46), (244, 191, 117),
            (102, 217, 239), (174, 129, 255), (161, 239, 228), (248, 248, 242),
            (117, 113, 94), (249, 38, 114), (166, 226, 46), (244, 191, 117),
            (102, 217, 239), (174, 129, 255), (161, 239, 228), (249, 248, 245),
        ],
    ),
    "material-dark": _palette(
        (238, 255, 255), (38, 50, 56), (238, 255, 255),
        [
            (84, 110, 122), (255, 83, 112), (195, 232, 141), (255, 203, 107),
            (130, 170, 255), (199, 146, 234), (137, 221, 255), (238, 255, 255),
            (84, 110, 122), (255, 83, 112), (195, 232, 141), (255, 203, 107),
            (130, 170, 255), (199, 146, 234), (137, 221, 255), (238, 255, 255),
        ],
    ),
    "palenight": _palette(
        (166, 172, 205), (41, 45, 62), (255, 203, 107),
        [
            (41, 45, 62), (255, 85, 114), (195, 232, 141), (255, 203, 107),
            (130, 170, 255), (199, 146, 234), (137, 221, 255), (166, 172, 205),
            (103, 110, 149), (255, 85, 114), (195, 232, 141), (255, 203, 107),
            (130, 170, 255), (199, 146, 234), (137, 221, 255), (255, 255, 255),
        ],
    ),
    "tomorrow-night": _palette(
        (197, 200, 198), (29, 31, 33), (197, 200, 198),
        [
            (29, 31, 33), (204, 102, 102), (181, 189, 104), (240, 198, 116),
            (129, 162, 190), (178, 148, 187), (138, 190, 183), (197, 200, 198),
            (150, 152, 150), (204, 102, 102), (181, 189, 104), (240, 198, 116),
            (129, 162, 190), (178, 148, 187), (138, 190, 183), (255, 255, 255),
        ],
    ),
    "oceanic-next": _palette(
        (216, 222, 233), (27, 43, 52), (216, 222, 233),
        [
            (27, 43, 52), (236, 95, 103), (153, 199, 148), (250, 200, 99),
            (102, 153, 204), (197, 148, 197), (95, 179, 179), (216, 222, 233),
            (101, 115, 126), (236, 95, 103), (153, 199, 148), (250, 200, 99),
            (102, 153, 204), (197, 148, 197), (95, 179, 179), (255, 255, 255),
        ],
    ),
}


def normalize_theme_id(theme_id: str) -> str:
    """Lower-case a theme id and collapse separators into single dashes.

    ``"  Tokyo Night "`` -> ``"tokyo-night"``
    """
    normalized = re.sub(r"[^a-z0-9\-_ ]", "", theme_id.strip().lower())
    normalized = re.sub(r"[\-_ ]+", "-", normalized)
    return normalized.strip("-")


def canonical_theme_id(theme_id: str) -> Optional[str]:
    """Return the built-in id a name refers to, or None."""
    lookup = normalize_theme_id(theme_id).replace("-", "")
    return _THEME_LOOKUP.get(lookup)


def builtin_theme(theme_id: str) -> Optional[ColorPalette]:
    canonical = canonical_theme_id(theme_id)
    if canonical is None:
        return None
    return _THEMES[canonical]
