import os

# headless pygame for any test that touches the display or fonts
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from orbitfield.config import FieldConfig, ToyConfig


class FrozenClock:
    """now_fn that never advances, so only pixel_batch bounds a tick."""

    def __call__(self) -> float:
        return 0.0


class SteppingClock:
    """now_fn that advances by step ms on every call."""

    def __init__(self, step: float = 1.0) -> None:
        self.t = 0.0
        self.step = step

    def __call__(self) -> float:
        value = self.t
        self.t += self.step
        return value


@pytest.fixture
def frozen_clock():
    return FrozenClock()


@pytest.fixture
def stepping_clock():
    return SteppingClock()


@pytest.fixture
def small_config():
    return ToyConfig(view_width=40, view_height=30, field=FieldConfig(pixel_batch=100))
