"""
Image Preprocessing Module
Crops, converts and denoises a colour frame before the circle transform
"""

from typing import NamedTuple, Optional

import cv2
import numpy as np

from hough.config import CropRegion, DetectionParameters
from hough.exceptions import ImageFormatError, InvalidConfig


class PreparedImage(NamedTuple):
    """Cropped colour buffer and the single-channel buffer searched for circles."""
    color: np.ndarray
    gray: np.ndarray


class ImagePreprocessor:
    """Prepares frames for circle detection."""

    def __init__(self, blur_kernel: int = 15):
        """
        Initialize image preprocessor.

        Args:
            blur_kernel: Aperture of the median filter (odd, > 1)
        """
        if (not isinstance(blur_kernel, int) or isinstance(blur_kernel, bool)
                or blur_kernel < 3 or blur_kernel % 2 == 0):
            raise InvalidConfig(f"blur_kernel must be an odd integer >= 3, got {blur_kernel!r}")
        self.blur_kernel = blur_kernel

    def prepare(self, image: np.ndarray, params: DetectionParameters,
                sink=None) -> PreparedImage:
        """
        Crop, convert to gray and optionally blur an image.

        Args:
            image: Input BGR, BGRA or single-channel image
            params: Detection parameters (crop and skip_blur are used)
            sink: Optional diagnostic sink receiving the blurred buffer

        Returns:
            PreparedImage with the cropped colour buffer and the gray buffer
        """
        validate_image(image)

        cropped = crop_image(image, params.crop)
        gray = to_gray(cropped)

        if not params.skip_blur:
            gray = cv2.medianBlur(gray, self.blur_kernel)
            if sink is not None:
                sink.blurred(gray)

        return PreparedImage(color=to_bgr(cropped), gray=gray)


def validate_image(image: np.ndarray):
    """Raise ImageFormatError unless image is a non-empty 8-bit pixel grid."""
    if not isinstance(image, np.ndarray):
        raise ImageFormatError(f"expected a numpy array, got {type(image).__name__}")
    if image.ndim not in (2, 3):
        raise ImageFormatError(f"expected a 2-D pixel grid, got shape {image.shape}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ImageFormatError(f"image has zero size: {image.shape}")
    if image.ndim == 3 and image.shape[2] not in (1, 3, 4):
        raise ImageFormatError(f"unsupported channel count: {image.shape[2]}")
    if image.dtype != np.uint8:
        raise ImageFormatError(f"expected 8-bit pixels, got {image.dtype}")


def crop_image(image: np.ndarray, crop: Optional[CropRegion]) -> np.ndarray:
    """Return a copy of the crop rectangle, or of the whole image."""
    if crop is None:
        return image.copy()
    x, y, x_max, y_max = crop.corners
    return image[y:y_max, x:x_max].copy()


def to_gray(image: np.ndarray) -> np.ndarray:
    """Convert to a single channel using OpenCV's luma weights."""
    if image.ndim == 2:
        return image
    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0].copy()
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def to_bgr(image: np.ndarray) -> np.ndarray:
    """Convert to a 3-channel BGR buffer for annotation."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    channels = image.shape[2]
    if channels == 1:
        return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2BGR)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return image


def prepare_image(image: np.ndarray, params: DetectionParameters,
                  blur_kernel: int = 15) -> np.ndarray:
    """
    Convenience function returning only the gray buffer.

    Args:
        image: Input BGR image
        params: Detection parameters
        blur_kernel: Median filter aperture

    Returns:
        Single-channel uint8 buffer in crop coordinates
    """
    preprocessor = ImagePreprocessor(blur_kernel)
    return preprocessor.prepare(image, params).gray
