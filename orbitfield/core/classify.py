from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from orbitfield.config import FieldConfig
from orbitfield.core.complex import Complex
from orbitfield.core.iteration import iterate
from orbitfield.core.palette import Color, Palette, color_at


class EscapeKind(Enum):
    ESCAPED = "escaped"
    BOUNDED = "bounded"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Classification:
    iteration_index: int
    color_index: int
    kind: EscapeKind

    def color(self, palette: Palette) -> Color:
        return color_at(palette, self.color_index)


_DEFAULTS = FieldConfig()


def _escaped(z: Complex, threshold: float) -> bool:
    # per-axis box test, not |z| > 2
    return abs(z.re) > threshold and abs(z.im) > threshold


def classify(
    start: Complex,
    fixed_param: Optional[Complex],
    max_iter: int,
    palette_size: Optional[int] = None,
    config: Optional[FieldConfig] = None,
) -> Classification:
    """
    Escape-time classification of the orbit of ``start``.

    Each step computes z*z + fixed_param (z*z alone when fixed_param is None)
    and stops at the first index where both axes exceed the escape threshold
    or both axes moved less than the convergence threshold. NaN components
    fail every comparison, so such orbits run to max_iter and come back
    EXHAUSTED.

    The color index is the iteration index clamped to the palette; when no
    palette_size is given it is clamped to max_iter.
    """
    cfg = config or _DEFAULTS
    escape = cfg.escape_threshold
    eps = cfg.convergence_threshold
    last_color = (palette_size if palette_size is not None else max_iter + 1) - 1
    last_color = max(last_color, 0)

    z = start
    if _escaped(z, escape):
        return Classification(0, 0, EscapeKind.ESCAPED)

    params = [z] if fixed_param is None else [z, fixed_param]
    for i in range(max_iter):
        prev = params[0]
        params[0] = iterate(params)
        z = params[0]
        if _escaped(z, escape):
            return Classification(i, min(i, last_color), EscapeKind.ESCAPED)
        if abs(z.re - prev.re) < eps and abs(z.im - prev.im) < eps:
            return Classification(i, min(i, last_color), EscapeKind.BOUNDED)
    return Classification(max_iter, last_color, EscapeKind.EXHAUSTED)


def classify_params(
    params: Sequence[Complex],
    max_iter: int,
    palette_size: Optional[int] = None,
    config: Optional[FieldConfig] = None,
) -> Classification:
    """Classify an ordered marker list: params[0] is the start, params[1] the additive term."""
    fixed = params[1] if len(params) > 1 else None
    return classify(params[0], fixed, max_iter, palette_size, config)

