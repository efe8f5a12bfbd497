from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from orbitfield.errors import ConfigurationError


@dataclass
class FieldConfig:
    pixel_batch: int = 100000      # safety cap on pixels per tick
    batch_interval_ms: int = 10    # wall-clock budget per tick
    escape_threshold: float = 1.0  # per-axis, both axes must exceed it
    convergence_threshold: float = 0.01
    max_iter: Optional[int] = None  # None: palette length


@dataclass
class ToyConfig:
    view_width: int = 600
    view_height: int = 600
    fps: int = 60
    # visible region of the complex plane, centred on the origin
    plane_width: float = 2.0
    plane_height: float = 2.0
    plane_unit: float = 0.2        # axis peg spacing
    # orbit line tracing
    max_iter: int = 1000
    iter_radius: int = 1
    iter_line_width: int = 1
    variable_marker: str = "A"
    marker_a: Tuple[float, float] = (0.1, 0.2)
    marker_b: Tuple[float, float] = (-0.3, -0.5)
    palette: str = "indigo"
    debug_log_path: str = "debug.log"
    field: FieldConfig = field(default_factory=FieldConfig)

    def validate(self) -> "ToyConfig":
        for name in ("view_width", "view_height", "fps", "max_iter", "iter_radius", "iter_line_width"):
            _check_number(name, getattr(self, name), integral=True)
        for name in ("plane_width", "plane_height", "plane_unit"):
            _check_number(name, getattr(self, name))
        for name in ("pixel_batch", "batch_interval_ms"):
            _check_number(f"field.{name}", getattr(self.field, name), integral=True)
        for name in ("escape_threshold", "convergence_threshold"):
            _check_number(f"field.{name}", getattr(self.field, name))
        if self.field.max_iter is not None:
            _check_number("field.max_iter", self.field.max_iter, integral=True)

        if self.view_width <= 0 or self.view_height <= 0:
            raise ConfigurationError(
                f"canvas size must be positive (got {self.view_width}x{self.view_height})"
            )
        if self.plane_width <= 0 or self.plane_height <= 0:
            raise ConfigurationError("plane width and height must be positive")
        if self.plane_unit <= 0:
            raise ConfigurationError("plane_unit must be positive")
        if self.fps <= 0:
            raise ConfigurationError("fps must be positive")
        if min(self.max_iter, self.iter_radius, self.iter_line_width) < 0:
            raise ConfigurationError("max_iter, iter_radius and iter_line_width cannot be negative")
        if str(self.variable_marker).strip().upper() not in ("A", "B"):
            raise ConfigurationError(f"variable_marker must be A or B (got {self.variable_marker!r})")
        if self.field.pixel_batch <= 0:
            raise ConfigurationError("field.pixel_batch must be at least 1")
        if self.field.batch_interval_ms < 0:
            raise ConfigurationError("field.batch_interval_ms cannot be negative")
        if self.field.max_iter is not None and self.field.max_iter < 0:
            raise ConfigurationError("field.max_iter cannot be negative")
        return self


def _check_number(name: str, value: Any, integral: bool = False) -> None:
    kinds = int if integral else (int, float)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, kinds):
        kind = "an integer" if integral else "a number"
        raise ConfigurationError(f"{name} must be {kind} (got {value!r})")


def _merge(base, overrides: Dict[str, Any], where: str):
    known = {f.name for f in fields(base)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(f"unknown {where} keys: {', '.join(unknown)}")
    values: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key == "field" and isinstance(base, ToyConfig):
            values[key] = _merge(base.field, value or {}, "field")
        elif key in ("marker_a", "marker_b"):
            values[key] = (float(value[0]), float(value[1]))
        else:
            values[key] = value
    return replace(base, **values)


def load_config(path: Optional[Path | str] = None) -> ToyConfig:
    """Build a ToyConfig, optionally overriding defaults from a YAML file."""
    cfg = ToyConfig()
    if path is None:
        return cfg.validate()
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")
    return _merge(cfg, data, "config").validate()
