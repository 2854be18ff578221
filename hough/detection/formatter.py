"""Conversion of ranked circles into bounding-box detections."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Tuple

from hough.detection.circle_detector import Circle

# Hough voting gives no calibrated score, every returned circle is "detected"
DETECTION_CONFIDENCE = 1.0


@dataclass(frozen=True)
class Detection:
    """Axis-aligned bounding box with a label and confidence."""
    x_min: int
    y_min: int
    x_max: int
    y_max: int
    confidence: float
    label: str

    @property
    def box(self) -> Tuple[int, int, int, int]:
        return self.x_min, self.y_min, self.x_max, self.y_max

    @property
    def width(self) -> int:
        return self.x_max - self.x_min

    @property
    def height(self) -> int:
        return self.y_max - self.y_min

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DetectionFormatter:
    """Formats circles as square detections."""

    def __init__(self, confidence: float = DETECTION_CONFIDENCE, label_prefix: str = "circle"):
        self.confidence = confidence
        self.label_prefix = label_prefix

    def format(self, circles: Iterable[Circle]) -> List[Detection]:
        """
        Map each circle to a detection, keeping order.

        Args:
            circles: Ranked circles

        Returns:
            Detections labelled "<prefix>-<index>" with a box of side 2 * radius
        """
        return [self.to_detection(c, i) for i, c in enumerate(circles)]

    def to_detection(self, circle: Circle, index: int) -> Detection:
        x, y, r = circle
        return Detection(
            x_min=x - r,
            y_min=y - r,
            x_max=x + r,
            y_max=y + r,
            confidence=self.confidence,
            label=f"{self.label_prefix}-{index}",
        )
