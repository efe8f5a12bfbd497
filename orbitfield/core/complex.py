from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Complex:
    """Immutable complex value. Overflow to inf/nan is allowed."""

    re: float
    im: float

    def add(self, other: "Complex") -> "Complex":
        return Complex(self.re + other.re, self.im + other.im)

    def multiply(self, other: "Complex") -> "Complex":
        return Complex(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    __add__ = add
    __mul__ = multiply
