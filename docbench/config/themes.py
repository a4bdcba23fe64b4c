"""Fixed catalog of flower-inspired colour palettes.

Selection is by index into :data:`FLOWER_THEMES`; the "magic wheel" picks an
index uniformly at random.  Nothing here is persisted.
"""

from __future__ import annotations

import random

from docbench.models.theme import Theme
from docbench.utils.errors import NotFoundError


def _theme(name: str, primary: str, bg_light: str, bg_dark: str, text_light: str, text_dark: str) -> Theme:
    return Theme(
        name=name,
        primary=primary,
        bg_light=bg_light,
        bg_dark=bg_dark,
        text_light=text_light,
        text_dark=text_dark,
    )


FLOWER_THEMES: tuple[Theme, ...] = (
    _theme("Rose Quartz", "#e91e63", "#ffe4ec", "#330b15", "#880e4f", "#fce4ec"),
    _theme("Lavender Mist", "#9c27b0", "#f3e5f5", "#2a0b33", "#4a148c", "#f3e5f5"),
    _theme("Sunflower Glow", "#fbc02d", "#fff8e1", "#33260b", "#f57f17", "#fffde7"),
    _theme("Cherry Blossom", "#ec407a", "#fde2ea", "#330e19", "#880e4f", "#fce4ec"),
    _theme("Orchid Bloom", "#ab47bc", "#f4e1f7", "#2a0b33", "#4a148c", "#e1bee7"),
    _theme("Peony Pink", "#f06292", "#fde1ee", "#33101f", "#880e4f", "#f8bbd0"),
    _theme("Iris Indigo", "#3f51b5", "#e8eaf6", "#0e1133", "#1a237e", "#c5cae9"),
    _theme("Marigold", "#ffa000", "#fff3e0", "#332100", "#e65100", "#ffe0b2"),
    _theme("Lotus", "#8e24aa", "#f5e1ff", "#220833", "#4a148c", "#e1bee7"),
    _theme("Camellia", "#d81b60", "#fde1ea", "#330515", "#880e4f", "#f8bbd0"),
    _theme("Jasmine", "#43a047", "#e8f5e9", "#0c330e", "#1b5e20", "#c8e6c9"),
    _theme("Tulip Red", "#e53935", "#ffebee", "#330e0e", "#b71c1c", "#ffcdd2"),
    _theme("Dahlia Plum", "#6a1b9a", "#ede7f6", "#1a0633", "#311b92", "#d1c4e9"),
    _theme("Gardenia", "#009688", "#e0f2f1", "#002622", "#004d40", "#b2dfdb"),
    _theme("Hydrangea", "#5c6bc0", "#e3e8fd", "#111533", "#1a237e", "#c5cae9"),
    _theme("Lavatera", "#7b1fa2", "#f2e5ff", "#1e0633", "#4a148c", "#e1bee7"),
    _theme("Primrose", "#f57c00", "#fff3e0", "#331a00", "#e65100", "#ffe0b2"),
    _theme("Bluebell", "#1e88e5", "#e3f2fd", "#051e33", "#0d47a1", "#bbdefb"),
    _theme("Magnolia", "#8d6e63", "#efebe9", "#261d1b", "#3e2723", "#d7ccc8"),
    _theme("Wisteria", "#7e57c2", "#ede7f6", "#1a1233", "#311b92", "#d1c4e9"),
)


def get_theme(index: int) -> Theme:
    """Return the palette at *index*.

    Raises:
        NotFoundError: If *index* is outside the catalog.
    """
    if not 0 <= index < len(FLOWER_THEMES):
        raise NotFoundError(f"Theme index out of range: {index} (0-{len(FLOWER_THEMES) - 1})")
    return FLOWER_THEMES[index]


def random_theme_index(rng: random.Random | None = None) -> int:
    """Spin the wheel: a uniformly random index into the catalog."""
    return (rng or random).randrange(len(FLOWER_THEMES))
