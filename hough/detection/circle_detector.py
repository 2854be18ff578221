"""Circle detection using Hough Circle Transform."""

import cv2
import numpy as np
from typing import List, NamedTuple

from hough.config import DetectionParameters
from hough.exceptions import DetectionEngineError


class Circle(NamedTuple):
    """Circle centre and radius in pixels."""
    x: int
    y: int
    radius: int


class CircleDetector:
    """Detects circular openings with the OpenCV gradient Hough transform."""

    def detect(self, gray: np.ndarray, params: DetectionParameters) -> List[Circle]:
        """
        Detect circles in a prepared single-channel buffer.

        param1 is the upper Canny threshold (OpenCV uses half of it as the
        lower one) and param2 the accumulator vote threshold. Of two centres
        closer than min_dist only the one with more votes is kept.

        Args:
            gray: Single-channel uint8 buffer
            params: Detection parameters

        Returns:
            Candidate circles in the buffer's own coordinates, unordered
        """
        if not isinstance(gray, np.ndarray) or gray.ndim != 2 or gray.dtype != np.uint8:
            shape = getattr(gray, 'shape', None)
            raise DetectionEngineError(f"expected a 2-D uint8 buffer, got shape {shape}")
        if gray.size == 0:
            raise DetectionEngineError("cannot search an empty buffer")

        try:
            circles = cv2.HoughCircles(gray, cv2.HOUGH_GRADIENT, params.dp, params.min_dist,
                                       param1=params.param1, param2=params.param2,
                                       minRadius=params.min_radius,
                                       maxRadius=params.max_radius)
        except cv2.error as e:
            raise DetectionEngineError(f"HoughCircles failed: {e}") from e

        if circles is None:
            return []

        # Truncate toward zero, as the float results are cast to int pixels.
        return [Circle(int(x), int(y), int(r)) for x, y, r in circles[0, :, :3]]
