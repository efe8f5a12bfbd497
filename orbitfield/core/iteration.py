from __future__ import annotations

from typing import Iterator as _Iter, List, Sequence

from orbitfield.core.complex import Complex
from orbitfield.errors import ConfigurationError

# orbit tracing stops once a point is this close to 0 on both axes
STOP_DISTANCE = 0.01


def iterate(params: Sequence[Complex]) -> Complex:
    """One step of the recurrence: z*z, plus c when a second value is given."""
    z = params[0]
    res = z.multiply(z)
    if len(params) > 1:
        res = res.add(params[1])
    return res


def trace_orbit(
    params: Sequence[Complex],
    max_iter: int,
    stop_distance: float = STOP_DISTANCE,
) -> _Iter[Complex]:
    """
    Yield successive orbit points starting from params[0].

    The point that lands within stop_distance of the origin (on both axes)
    is yielded, then tracing stops.
    """
    values = list(params)
    for _ in range(max_iter):
        values[0] = iterate(values)
        z = values[0]
        yield z
        if abs(z.re) < stop_distance and abs(z.im) < stop_distance:
            return


class Iterator:
    """Ordered markers feeding the recurrence: markers[0] is the orbit start."""

    def __init__(self, markers: Sequence) -> None:
        self.markers = list(markers)
        if not self.markers:
            raise ConfigurationError("Iterator needs at least 1 marker to iterate")

    def params(self) -> List[Complex]:
        return [m.value for m in self.markers]

    def trace(self, max_iter: int) -> List[Complex]:
        return list(trace_orbit(self.params(), max_iter))
