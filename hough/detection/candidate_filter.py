"""Radius gating and crop-offset remapping for candidate circles."""

from typing import Iterable, List, Optional

from hough.config import CropRegion, DetectionParameters
from hough.detection.circle_detector import Circle

# circles with radii smaller than this are ignored
MIN_CIRCLE_RADIUS = 18


class CandidateFilter:
    """Drops small candidates and maps centres back to the uncropped image."""

    def __init__(self, min_radius: int = MIN_CIRCLE_RADIUS):
        self.min_radius = min_radius

    def apply(self, circles: Iterable[Circle], params: DetectionParameters,
              add_offset: bool = True) -> List[Circle]:
        """
        Filter candidates and optionally add the crop origin to their centres.

        Args:
            circles: Raw candidates in cropped-buffer coordinates
            params: Detection parameters (crop is used)
            add_offset: Express centres in original-image coordinates

        Returns:
            Surviving circles in input order
        """
        kept = self.keep(circles)
        if add_offset:
            kept = remap(kept, params.crop)
        return kept

    def keep(self, circles: Iterable[Circle]) -> List[Circle]:
        """Keep circles whose radius is at least the threshold."""
        return [c for c in circles if c.radius >= self.min_radius]


def remap(circles: Iterable[Circle], crop: Optional[CropRegion]) -> List[Circle]:
    """Translate centres by the crop origin; no-op without a crop."""
    if crop is None:
        return list(circles)
    ox, oy = crop.origin
    return [Circle(c.x + ox, c.y + oy, c.radius) for c in circles]
