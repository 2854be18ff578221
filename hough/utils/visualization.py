"""Visualization utilities for debugging and display."""

import cv2
import numpy as np
from typing import Iterable, Tuple


def draw_circles(image: np.ndarray, circles: Iterable[Tuple[int, int, int]],
                color: Tuple[int, int, int] = (0, 0, 255),
                thickness: int = 2) -> np.ndarray:
    """Draw circle outlines on a copy of the image."""
    output = image.copy()
    for x, y, r in circles:
        cv2.circle(output, (int(x), int(y)), int(r), color, thickness)
    return output
