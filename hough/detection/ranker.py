"""Ordering of detected circles."""

from typing import Iterable, List

from hough.detection.circle_detector import Circle


def rank_circles(circles: Iterable[Circle]) -> List[Circle]:
    """Sort by radius, largest first; equal radii by ascending x then y."""
    return sorted(circles, key=lambda c: (-c.radius, c.x, c.y))
