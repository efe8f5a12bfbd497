from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, List, Optional, Protocol, Tuple

from orbitfield.config import FieldConfig
from orbitfield.core.classify import classify_params
from orbitfield.core.complex import Complex
from orbitfield.core.field import FieldBuffer
from orbitfield.core.iteration import Iterator
from orbitfield.core.palette import Palette
from orbitfield.errors import ConfigurationError
from orbitfield.state.markers import Marker, MarkerSet

logger = logging.getLogger(__name__)


class VariableMarker(Enum):
    """Which marker is swept across the pixel grid."""

    A = "A"
    B = "B"

    @classmethod
    def parse(cls, name: "str | VariableMarker") -> "VariableMarker":
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().upper())
        except ValueError:
            raise ConfigurationError(f"variable marker must be A or B (got {name!r})") from None

    @property
    def other(self) -> "VariableMarker":
        return VariableMarker.B if self is VariableMarker.A else VariableMarker.A

    @property
    def index(self) -> int:
        """Position of this marker in the recurrence parameters."""
        return 0 if self is VariableMarker.A else 1


class PlaneMapper(Protocol):
    def to_plane(self, sx: float, sy: float) -> Tuple[float, float]:
        ...


def _now_ms() -> float:
    return time.perf_counter() * 1000.0


class FieldScheduler:
    """
    Fills a FieldBuffer a bounded batch at a time.

    tick() is meant to be called from the frame loop; it returns as soon as
    its wall-clock budget is spent or pixel_batch pixels were computed,
    leaving the cursor where the next tick resumes.
    """

    def __init__(
        self,
        buffer: FieldBuffer,
        markers: MarkerSet,
        mapper: PlaneMapper,
        palette: Palette,
        config: Optional[FieldConfig] = None,
        variable: "VariableMarker | str" = VariableMarker.A,
    ) -> None:
        if not palette:
            raise ConfigurationError("palette is empty")
        self.buffer = buffer
        self.markers = markers
        self.iterator = Iterator(markers.markers)
        self.mapper = mapper
        self.palette = palette
        self.config = config or FieldConfig()
        self.variable = VariableMarker.parse(variable)
        markers.register_update(self.on_marker_update)

    # ---- parameters ---------------------------------------------------------

    @property
    def max_iter(self) -> int:
        if self.config.max_iter is not None:
            return self.config.max_iter
        return len(self.palette)

    @property
    def single_marker(self) -> bool:
        return len(self.iterator.markers) == 1

    def variable_index(self) -> int:
        # a lone marker is always the variable one
        if self.single_marker:
            return 0
        return self.variable.index

    def variable_marker(self) -> Marker:
        return self.iterator.markers[self.variable_index()]

    def variable_name(self) -> str:
        return self.variable_marker().name

    def params_for(self, point: Complex) -> List[Complex]:
        params = self.iterator.params()
        params[self.variable_index()] = point
        return params

    # ---- invalidation -------------------------------------------------------

    def invalidate(self) -> None:
        self.buffer.reset()
        logger.debug(
            "field invalidated (generation %d, variable=%s)",
            self.buffer.generation, self.variable_name(),
        )

    def on_marker_update(self, marker: Marker) -> None:
        if marker is self.variable_marker():
            return
        self.invalidate()

    def set_variable(self, choice: "VariableMarker | str") -> None:
        choice = VariableMarker.parse(choice)
        if choice is self.variable or self.single_marker:
            return
        self.variable = choice
        self.invalidate()

    def toggle_variable(self) -> VariableMarker:
        self.set_variable(self.variable.other)
        return self.variable

    # ---- computation --------------------------------------------------------

    def compute_next_pixel(self) -> bool:
        """Compute the pixel under the cursor; False once the field is complete."""
        buf = self.buffer
        if buf.cursor < 0:
            buf.cursor = 0
        if buf.cursor >= buf.pixel_count:
            return False

        index = buf.cursor
        x, y = buf.position(index)
        px, py = self.mapper.to_plane(x, y)
        result = classify_params(
            self.params_for(Complex(px, py)),
            self.max_iter,
            len(self.palette),
            self.config,
        )
        buf.set_pixel(index, result.color(self.palette))
        buf.cursor = index + 1
        return True

    def tick(self, now_fn: Optional[Callable[[], float]] = None, budget_ms: Optional[float] = None) -> int:
        """Advance the fill; returns the number of pixels computed."""
        now = now_fn or _now_ms
        budget = self.config.batch_interval_ms if budget_ms is None else budget_ms
        was_complete = self.buffer.is_complete
        start = now()
        done = 0
        for _ in range(self.config.pixel_batch):
            if now() - start > budget:
                break
            if not self.compute_next_pixel():
                break
            done += 1
        if not was_complete and self.buffer.is_complete:
            logger.debug("field generation %d complete", self.buffer.generation)
        return done

    @property
    def is_complete(self) -> bool:
        return self.buffer.is_complete

    @property
    def progress(self) -> float:
        return self.buffer.progress
