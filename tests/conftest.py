"""Shared fixtures: synthetic frames with known circles."""

import cv2
import numpy as np
import pytest

from hough.config import DetectionParameters

# (x, y, radius) of the rings drawn on the synthetic frame
SYNTHETIC_CIRCLES = [(150, 200, 45), (330, 240, 40), (500, 150, 37)]


def draw_frame(circles=SYNTHETIC_CIRCLES, size=(480, 640)):
    """Dark BGR frame with bright ring outlines."""
    frame = np.full((size[0], size[1], 3), 30, dtype=np.uint8)
    for x, y, r in circles:
        cv2.circle(frame, (x, y), r, (200, 200, 200), 2)
    return frame


@pytest.fixture
def synthetic_frame():
    return draw_frame()


@pytest.fixture
def blank_frame():
    return np.full((480, 640, 3), 128, dtype=np.uint8)


@pytest.fixture
def cup_params():
    """Parameters used for cup openings: dp=1, min_dist=min_radius=35."""
    return DetectionParameters(dp=1, min_dist=35, param1=60, param2=25,
                               min_radius=35, max_radius=50, skip_blur=True)
