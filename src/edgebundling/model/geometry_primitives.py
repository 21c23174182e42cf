"""
Geometric Primitives for the radial diagram.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from edgebundling.utils import FULL_CIRCLE_DEG

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Point:
    """A point in screen coordinates (y grows downwards, as in SVG)."""
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y])

    def to_polar(self) -> PolarPoint:
        """Angle in degrees clockwise from 12 o'clock, normalised to [0, 360)."""
        radius = math.hypot(self.x, self.y)
        if radius == 0.0:
            return PolarPoint(angle=0.0, radius=0.0)
        angle = math.degrees(math.atan2(self.x, -self.y)) % FULL_CIRCLE_DEG
        return PolarPoint(angle=angle, radius=radius)


@dataclass(frozen=True)
class PolarPoint:
    """Angle in degrees (clockwise from 12 o'clock) and radius."""
    angle: float
    radius: float

    def to_cartesian(self) -> Point:
        a = math.radians(self.angle)
        return Point(self.radius * math.sin(a), -self.radius * math.cos(a))
