from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Tuple

from orbitfield.core.complex import Complex
from orbitfield.errors import ConfigurationError

Color = Tuple[int, int, int]

RED = (220, 40, 40)
GREEN = (40, 160, 60)


@dataclass
class Marker:
    name: str
    x: float
    y: float
    color: Color = RED
    radius: int = 5       # screen pixels
    selected: bool = False

    @property
    def value(self) -> Complex:
        return Complex(self.x, self.y)

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y


MarkerListener = Callable[[Marker], None]


@dataclass
class MarkerSet:
    """
    Ordered draggable markers. Order matters: the first marker is the orbit
    start, the second the additive term of the recurrence.

    Listeners hear about committed moves only (drag release or move()),
    not about every intermediate drag position.
    """

    markers: List[Marker] = field(default_factory=list)
    listeners: List[MarkerListener] = field(default_factory=list)

    def __post_init__(self) -> None:
        seen = set()
        for m in self.markers:
            if m.name in seen:
                raise ConfigurationError(f"duplicate marker name {m.name!r}")
            seen.add(m.name)

    def __iter__(self) -> Iterator[Marker]:
        return iter(self.markers)

    def __len__(self) -> int:
        return len(self.markers)

    def get(self, name: str) -> Marker:
        for m in self.markers:
            if m.name == name:
                return m
        raise ConfigurationError(f"no marker named {name!r}")

    def register_update(self, fn: MarkerListener) -> None:
        self.listeners.append(fn)

    def notify(self, marker: Marker) -> None:
        for fn in list(self.listeners):
            fn(marker)

    def move(self, name: str, x: float, y: float) -> Marker:
        marker = self.get(name)
        marker.move_to(x, y)
        self.notify(marker)
        return marker


def default_markers(a: Tuple[float, float] = (0.1, 0.2), b: Tuple[float, float] = (-0.3, -0.5)) -> MarkerSet:
    return MarkerSet([
        Marker("A", a[0], a[1], RED),
        Marker("B", b[0], b[1], GREEN),
    ])
