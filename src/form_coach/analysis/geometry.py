"""
2-D geometry helpers over keypoint positions.

All functions are total: callers check for missing joints before calling.
Positions use the analysis frame, where y grows upward (a joint higher on
the body has a larger y).
"""

from typing import NamedTuple

import numpy as np


class Point(NamedTuple):
    x: float
    y: float


def midpoint(a: Point, b: Point) -> Point:
    """Arithmetic mean of two points."""
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(a.x - b.x, a.y - b.y))


def angle_from_vertical(top: Point, bottom: Point) -> float:
    """
    Signed angle (radians) of the segment bottom -> top from the vertical axis.

    Magnitude near 0 means the two points are vertically aligned.
    """
    return float(np.arctan2(top.x - bottom.x, top.y - bottom.y))


def clamped_score(deviation: float, tolerance: float) -> float:
    """Map a non-negative deviation to [0, 1]: 1 at zero, 0 at or past tolerance."""
    return max(0.0, 1.0 - deviation / tolerance)
