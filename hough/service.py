"""
Circle detection service bound to an image source.

Thin glue between a host framework and HoughProcessor: resolves the
configured camera among the host's dependencies, pulls colour frames from it
and exposes the detection calls the host invokes.
"""

import logging
from typing import Any, Dict, List, Mapping, NamedTuple

import numpy as np

from hough.config import ServiceConfig
from hough.core import HoughProcessor
from hough.detection.formatter import Detection
from hough.diagnostics import MemoryDiagnosticSink
from hough.exceptions import ImageUnavailable

logger = logging.getLogger(__name__)

COLOR_SOURCE = "color"


class NamedImage(NamedTuple):
    """A frame tagged with the stream it came from (e.g. "color", "depth")."""
    source_name: str
    image: np.ndarray


class CaptureResult(NamedTuple):
    """Annotated cropped frame and the detections drawn on it."""
    image: np.ndarray
    detections: List[Detection]


class CircleDetectionService:
    """Detection service for one configured camera."""

    def __init__(self, config: ServiceConfig, source, processor: HoughProcessor = None):
        """
        Initialize the service.

        Args:
            config: Service configuration
            source: Object with an images() method returning NamedImage items
            processor: Pipeline to run (default HoughProcessor)
        """
        config.validate()
        self.config = config
        self.source = source
        self.processor = processor or HoughProcessor()

    @classmethod
    def from_dependencies(cls, config: ServiceConfig,
                          dependencies: Mapping[str, Any]) -> "CircleDetectionService":
        """Build a service, resolving the configured camera by name."""
        (camera_name,) = config.validate()
        if camera_name not in dependencies:
            raise ImageUnavailable(f"camera {camera_name!r} not found among dependencies")
        return cls(config, dependencies[camera_name])

    def get_image(self) -> np.ndarray:
        """Fetch the colour frame from the source."""
        try:
            images = self.source.images()
        except ImageUnavailable:
            raise
        except Exception as e:
            raise ImageUnavailable(f"camera {self.config.camera_name!r} failed: {e}") from e

        for named in images:
            if named.source_name == COLOR_SOURCE:
                return named.image
        raise ImageUnavailable(
            f"camera {self.config.camera_name!r} returned no {COLOR_SOURCE!r} image"
        )

    def detections(self, image: np.ndarray, add_offset: bool) -> List[Detection]:
        """Detect circles in a caller-supplied image."""
        return self.processor.detect(image, self.config.parameters, add_offset)

    def detections_from_camera(self) -> List[Detection]:
        """Detect circles in the current camera frame, in full-frame coordinates."""
        return self.detections(self.get_image(), add_offset=True)

    def capture_all_from_camera(self) -> CaptureResult:
        """
        Grab a frame and return it annotated together with its detections.

        The annotated image is the cropped frame, so detections are left in
        cropped coordinates to line up with it.
        """
        image = self.get_image()
        sink = MemoryDiagnosticSink()
        circles = self.processor.find_circles(image, self.config.parameters,
                                              add_offset=False, sink=sink)
        detections = self.processor.formatter.format(circles)
        logger.info("Captured %d circles from %s", len(detections), self.config.camera_name)
        return CaptureResult(image=sink.annotated_image, detections=detections)

    def get_properties(self) -> Dict[str, bool]:
        return {
            "detections_supported": True,
            "classifications_supported": False,
            "object_point_clouds_supported": False,
        }
