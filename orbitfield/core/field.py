from __future__ import annotations

from typing import Tuple

import numpy as np

from orbitfield.core.palette import BLANK, Color
from orbitfield.errors import ConfigurationError

RGBA = Tuple[int, int, int, int]

OPAQUE = 255


class FieldBuffer:
    """
    Fixed-size W x H RGBA pixel store plus the fill cursor.

    data is a (height, width, 4) uint8 array, row-major like the screen.
    cursor is the linear index of the next pixel to compute; -1 means the
    current generation has not started, width*height means it is complete.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"field size must be positive (got {width}x{height})")
        self.width = width
        self.height = height
        self.data = np.zeros((height, width, 4), dtype=np.uint8)
        self.cursor = -1
        self.generation = 0
        self._fill_blank()

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def is_complete(self) -> bool:
        return self.cursor >= self.pixel_count

    @property
    def progress(self) -> float:
        return max(0, self.cursor) / self.pixel_count

    def _fill_blank(self) -> None:
        self.data[:] = (*BLANK, OPAQUE)

    def reset(self) -> None:
        """Blank every pixel and rewind the cursor as one step."""
        self._fill_blank()
        self.cursor = -1
        self.generation += 1

    def position(self, index: int) -> Tuple[int, int]:
        """(x, y) of the linear pixel index."""
        y, x = divmod(index, self.width)
        return x, y

    def set_pixel(self, index: int, color: Color, alpha: int = OPAQUE) -> None:
        x, y = self.position(index)
        self.data[y, x] = (*color, alpha)

    def pixel(self, x: int, y: int) -> RGBA:
        r, g, b, a = self.data[y, x]
        return (int(r), int(g), int(b), int(a))

    def tobytes(self) -> bytes:
        return self.data.tobytes()
