from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

Vec2 = Tuple[float, float]


@dataclass
class PlaneTransform:
    """
    Affine map between canvas pixels and the complex plane.

    The visible plane region is width x height units centred on the origin;
    screen y grows downward, plane y upward.
    """

    canvas_width: int
    canvas_height: int
    width: float = 2.0
    height: float = 2.0
    unit: float = 0.2

    # ---- plane -> screen ----------------------------------------------------

    def norm_x(self, x: float) -> float:
        return x / self.width * self.canvas_width

    def norm_y(self, y: float) -> float:
        return y / self.height * self.canvas_height

    def to_screen(self, x: float, y: float) -> Vec2:
        sx = self.norm_x(x) + self.canvas_width / 2
        sy = -self.norm_y(y) + self.canvas_height / 2
        return sx, sy

    # ---- screen -> plane ----------------------------------------------------

    def to_plane(self, sx: float, sy: float) -> Vec2:
        x = (sx - self.canvas_width / 2) * self.width / self.canvas_width
        y = (sy - self.canvas_height / 2) * -self.height / self.canvas_height
        return x, y

    def on_canvas(self, x: float, y: float) -> bool:
        sx, sy = self.to_screen(x, y)
        return 0 < sx < self.canvas_width and 0 < sy < self.canvas_height

    def pegs(self, span: float) -> List[float]:
        """Axis peg positions at multiples of unit within +/- span/2, origin first."""
        if self.unit <= 0:
            return [0.0]
        out = [0.0]
        n = 1
        while n * self.unit <= span / 2:
            out.append(n * self.unit)
            out.append(-n * self.unit)
            n += 1
        return out
