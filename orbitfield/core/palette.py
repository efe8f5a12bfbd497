from __future__ import annotations

import pathlib
from typing import Dict, List, Tuple

import yaml

from orbitfield.errors import ConfigurationError

Color = Tuple[int, int, int]
Palette = List[Color]

BLANK: Color = (255, 255, 255)


def _load_palettes() -> Dict[str, Palette]:
    path = pathlib.Path(__file__).resolve().parent.parent / "content" / "palettes.yaml"
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    out: Dict[str, Palette] = {}
    for name, colors in data.items():
        out[name] = [tuple(int(c) for c in col) for col in colors or []]  # type: ignore[misc]
    return out


PALETTES: Dict[str, Palette] = _load_palettes()


def get_palette(name: str) -> Palette:
    try:
        palette = PALETTES[name]
    except KeyError:
        known = ", ".join(sorted(PALETTES))
        raise ConfigurationError(f"unknown palette {name!r} (known: {known})") from None
    if not palette:
        raise ConfigurationError(f"palette {name!r} is empty")
    return palette


def color_at(palette: Palette, index: int) -> Color:
    """Palette lookup clamped to the last entry."""
    return palette[min(max(index, 0), len(palette) - 1)]
