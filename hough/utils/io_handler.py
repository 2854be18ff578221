"""I/O handling for images and JSON output."""

import cv2
import json
import numpy as np
from pathlib import Path
from typing import Iterable

from hough.exceptions import DiagnosticWriteError, ImageUnavailable


def save_detections(output_path: str, detections: Iterable, **metadata):
    """
    Write detections as JSON.

    Args:
        output_path: Destination file, parent directories are created
        detections: Detection objects (anything with to_dict())
        **metadata: Extra top-level keys, e.g. image path and parameters
    """
    results = dict(metadata)
    results["detections"] = [det.to_dict() for det in detections]
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2)


def save_image(image: np.ndarray, output_path: str):
    """Save image to file, raising DiagnosticWriteError on failure."""
    try:
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        ok = cv2.imwrite(output_path, image)
    except (OSError, cv2.error) as e:
        raise DiagnosticWriteError(f"failed to save image to {output_path}: {e}") from e
    if not ok:
        raise DiagnosticWriteError(f"failed to save image to {output_path}")


def load_image(image_path: str) -> np.ndarray:
    """Load a BGR image from file."""
    image = cv2.imread(image_path)
    if image is None:
        raise ImageUnavailable(f"failed to load image from {image_path}")
    return image
