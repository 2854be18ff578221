"""
Hough Core Processor
Main entry point for circle detection
"""

import logging
from typing import List, Optional

import numpy as np

from hough.config import DetectionParameters
from hough.detection.candidate_filter import CandidateFilter
from hough.detection.circle_detector import Circle, CircleDetector
from hough.detection.formatter import Detection, DetectionFormatter
from hough.detection.ranker import rank_circles
from hough.diagnostics import DiagnosticSink, FileDiagnosticSink, blur_path_for
from hough.exceptions import InvalidConfig
from hough.preprocessing.image_preprocessor import ImagePreprocessor, validate_image
from hough.utils.metrics import PerformanceMetrics

logger = logging.getLogger(__name__)


class HoughProcessor:
    """
    Runs the detection pipeline: crop, gray, blur, Hough search, radius gate,
    offset remap, ranking and formatting.

    The processor keeps no per-call state, so one instance can serve
    concurrent calls on different images.
    """

    def __init__(self, preprocessor: ImagePreprocessor = None,
                 detector: CircleDetector = None,
                 candidate_filter: CandidateFilter = None,
                 formatter: DetectionFormatter = None):
        self.preprocessor = preprocessor or ImagePreprocessor()
        self.detector = detector or CircleDetector()
        self.candidate_filter = candidate_filter or CandidateFilter()
        self.formatter = formatter or DetectionFormatter()

    def find_circles(self, image: np.ndarray, params: DetectionParameters,
                     add_offset: bool = True,
                     sink: Optional[DiagnosticSink] = None) -> List[Circle]:
        """
        Find circles in an image, largest first.

        Args:
            image: Input BGR image, never modified
            params: Detection parameters
            add_offset: Express centres in original-image coordinates
            sink: Optional receiver of intermediate artifacts

        Returns:
            Circles with radius >= the filter threshold, ranked by radius
        """
        validate_image(image)
        height, width = image.shape[:2]
        if params.crop is not None and not params.crop.fits(width, height):
            raise InvalidConfig(
                f"crop {params.crop.corners} does not fit in a {width}x{height} image"
            )

        metrics = PerformanceMetrics()

        metrics.start_timer('preprocess')
        prepared = self.preprocessor.prepare(image, params, sink)
        metrics.stop_timer('preprocess')

        metrics.start_timer('hough')
        candidates = self.detector.detect(prepared.gray, params)
        metrics.stop_timer('hough')

        kept = self.candidate_filter.keep(candidates)
        if sink is not None:
            sink.annotated(prepared.color, kept)

        circles = self.candidate_filter.apply(kept, params, add_offset)
        ranked = rank_circles(circles)

        logger.debug("%d candidates, %d kept (%s)", len(candidates), len(ranked),
                     metrics.format_summary())
        return ranked

    def detect(self, image: np.ndarray, params: DetectionParameters,
               add_offset: bool) -> List[Detection]:
        """
        Detect circles and return them as bounding-box detections.

        Args:
            image: Input BGR image
            params: Detection parameters
            add_offset: Express boxes in original-image coordinates when
                a crop is set

        Returns:
            Detections labelled circle-0, circle-1, ... by descending radius
        """
        _check_flag('add_offset', add_offset)
        return self.formatter.format(self.find_circles(image, params, add_offset))

    def detect_with_diagnostics(self, image: np.ndarray, params: DetectionParameters,
                                add_offset: bool, output_path: str,
                                output_blur: bool = False,
                                strict: bool = False) -> List[Detection]:
        """
        Detect circles and write diagnostic images.

        Args:
            image: Input BGR image
            params: Detection parameters
            add_offset: Express boxes in original-image coordinates
            output_path: Annotated image destination, "" to skip it
            output_blur: Also write the blurred buffer next to output_path
            strict: Fail the call when an artifact cannot be written

        Returns:
            Detections, as from detect()
        """
        _check_flag('add_offset', add_offset)
        sink = FileDiagnosticSink(
            output_path=output_path,
            blur_path=blur_path_for(output_path) if output_blur else None,
            strict=strict,
        )
        circles = self.find_circles(image, params, add_offset, sink)
        return self.formatter.format(circles)


def _check_flag(name: str, value):
    if not isinstance(value, bool):
        raise TypeError(f"{name} must be a bool, got {type(value).__name__}")


def detect_circles(image: np.ndarray, params: DetectionParameters,
                   add_offset: bool = True) -> List[Detection]:
    """Convenience function running a default HoughProcessor."""
    return HoughProcessor().detect(image, params, add_offset)
