"""
Diagnostic sinks for intermediate pipeline artifacts.

The pipeline hands the blurred gray buffer and the accepted circles (in
cropped coordinates, with the cropped colour buffer) to a sink. Sinks decide
what to do with them; the pipeline itself never touches the file system.
"""

import logging
from pathlib import Path
from typing import List, Optional

import numpy as np

from hough.detection.circle_detector import Circle
from hough.exceptions import DiagnosticWriteError
from hough.utils.io_handler import save_image
from hough.utils.visualization import draw_circles

logger = logging.getLogger(__name__)

ANNOTATION_COLOR = (0, 0, 255)  # red, BGR
ANNOTATION_THICKNESS = 2


class DiagnosticSink:
    """Sink that ignores every artifact."""

    def blurred(self, gray: np.ndarray):
        """Receive the gray buffer after median blurring."""
        pass

    def annotated(self, color: np.ndarray, circles: List[Circle]):
        """Receive the cropped colour buffer and the accepted circles."""
        pass


def annotate(color: np.ndarray, circles: List[Circle]) -> np.ndarray:
    return draw_circles(color, circles, ANNOTATION_COLOR, ANNOTATION_THICKNESS)


class MemoryDiagnosticSink(DiagnosticSink):
    """Keeps the latest artifacts in memory."""

    def __init__(self):
        self.blurred_image: Optional[np.ndarray] = None
        self.annotated_image: Optional[np.ndarray] = None

    def blurred(self, gray: np.ndarray):
        self.blurred_image = gray.copy()

    def annotated(self, color: np.ndarray, circles: List[Circle]):
        self.annotated_image = annotate(color, circles)


class FileDiagnosticSink(DiagnosticSink):
    """
    Writes artifacts to image files.

    Args:
        output_path: Destination of the annotated image, "" to disable
        blur_path: Destination of the blurred buffer, None to disable
        strict: Raise DiagnosticWriteError instead of logging a warning

    Two calls sharing a sink's paths race on the files; give concurrent
    calls their own paths.
    """

    def __init__(self, output_path: str = "", blur_path: Optional[str] = None,
                 strict: bool = False):
        self.output_path = output_path
        self.blur_path = blur_path
        self.strict = strict
        self.errors: List[str] = []

    def blurred(self, gray: np.ndarray):
        if self.blur_path:
            self._write(gray, self.blur_path)

    def annotated(self, color: np.ndarray, circles: List[Circle]):
        if self.output_path:
            self._write(annotate(color, circles), self.output_path)

    def _write(self, image: np.ndarray, path: str):
        try:
            save_image(image, path)
        except DiagnosticWriteError as e:
            if self.strict:
                raise
            self.errors.append(str(e))
            logger.warning("Diagnostic artifact not written: %s", e)
        else:
            logger.debug("Wrote diagnostic artifact %s", path)


def blur_path_for(output_path: str) -> str:
    """Path for the blurred artifact that accompanies an annotated image."""
    if not output_path:
        return "blurred.jpg"
    path = Path(output_path)
    return str(path.with_name(f"{path.stem}-blurred{path.suffix or '.jpg'}"))
