"""
Geometry Utilities
===================
Distance, circle overlap and boundary policies (clamp and toroidal wrap).
"""

from dataclasses import dataclass
from typing import Tuple
import math


@dataclass
class Bounds:
    """Extent of the play canvas. Origin is the top-left corner."""
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2, self.height / 2


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    """Get Euclidean distance between two points."""
    return math.hypot(ax - bx, ay - by)


def circles_overlap(a, b) -> bool:
    """
    Check whether two circular entities overlap.

    Both arguments need x, y and radius. Touching edges do not count.
    """
    return distance(a.x, a.y, b.x, b.y) < a.radius + b.radius


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds."""
    return lo if value < lo else hi if value > hi else value


def normalize(x: float, y: float) -> Tuple[float, float]:
    """Normalize a vector to unit length. The zero vector stays zero."""
    length = math.hypot(x, y)
    if length > 0:
        return x / length, y / length
    return 0.0, 0.0


def wrap(value: float, extent: float, margin: float) -> float:
    """
    Toroidal wrap along one axis.

    Leaving past -margin reappears at extent + margin and vice versa.
    """
    if value < -margin:
        return extent + margin
    if value > extent + margin:
        return -margin
    return value
