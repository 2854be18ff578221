"""Batch processing example for multiple frames."""

import cv2
from pathlib import Path
from hough.config import load_config
from hough.core import HoughProcessor
from hough.exceptions import HoughError
from hough.utils.io_handler import save_detections
from hough.utils.logger import setup_logger


def main():
    """Detect circles in every frame of a directory."""
    logger = setup_logger('batch_processor')

    config = load_config("config/hough.yaml")
    processor = HoughProcessor()

    frames_dir = Path("test_data/frames")
    frame_files = sorted(frames_dir.glob("*.jpg"))

    logger.info(f"Processing {len(frame_files)} frames...")

    for i, frame_path in enumerate(frame_files):
        logger.info(f"Processing frame {i+1}/{len(frame_files)}: {frame_path.name}")

        image = cv2.imread(str(frame_path))
        if image is None:
            logger.warning(f"Could not load {frame_path}")
            continue

        try:
            detections = processor.detect(image, config.parameters, add_offset=True)
        except HoughError as e:
            logger.warning(f"Skipping {frame_path.name}: {e}")
            continue

        save_detections(f"output/{frame_path.stem}.json", detections,
                        frame_name=frame_path.name)

    logger.info("Batch processing complete!")


if __name__ == "__main__":
    main()
