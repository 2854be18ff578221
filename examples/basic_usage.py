"""Basic usage example for circle detection."""

import cv2
from hough.config import CropRegion, DetectionParameters
from hough.core import HoughProcessor
from hough.utils.io_handler import save_image
from hough.utils.visualization import draw_circles


def main():
    """Detect cup openings in one frame and save an annotated copy."""
    image_path = "test_data/frames/cups.jpg"
    image = cv2.imread(image_path)

    if image is None:
        print(f"Error: Could not load image from {image_path}")
        return

    params = DetectionParameters(
        dp=1, min_dist=35, param1=60, param2=25,
        min_radius=35, max_radius=50, skip_blur=True,
        crop=CropRegion.from_corners(115, 0, 600, 440),
    )

    print("Detecting circles...")
    processor = HoughProcessor()
    circles = processor.find_circles(image, params, add_offset=True)
    print(f"Detected {len(circles)} circles")

    for det in processor.formatter.format(circles):
        print(f"  {det.label}: {det.box}")

    output_path = "output/basic_detection.jpg"
    save_image(draw_circles(image, circles), output_path)
    print(f"Results saved to {output_path}")


if __name__ == "__main__":
    main()
