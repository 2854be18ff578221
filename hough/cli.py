"""
Command-line circle detection on a single image.

Example:
    hough-detect frame.jpg --crop 115 0 600 440 --skip-blur --output out/frame.jpg
"""

import argparse
import logging
import sys
from typing import List, Optional

from hough.config import DetectionParameters, CropRegion, load_config
from hough.core import HoughProcessor
from hough.exceptions import HoughError
from hough.utils.io_handler import load_image, save_detections
from hough.utils.logger import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hough-detect",
        description="Detect circular openings in an image with the Hough transform.",
    )
    parser.add_argument("image", help="Path to the input image")
    parser.add_argument("--config", help="YAML file with detection parameters")
    parser.add_argument("--crop", nargs=4, type=int, metavar=("X0", "Y0", "X1", "Y1"),
                        help="Search only inside this rectangle")
    parser.add_argument("--skip-blur", action="store_true", help="Disable median blurring")
    parser.add_argument("--no-offset", action="store_true",
                        help="Report boxes in cropped coordinates")
    parser.add_argument("--output", default="", help="Write the annotated crop here")
    parser.add_argument("--output-blur", action="store_true",
                        help="Also write the blurred buffer")
    parser.add_argument("--strict", action="store_true",
                        help="Fail if a diagnostic image cannot be written")
    parser.add_argument("--json", dest="json_path", help="Save detections as JSON")
    parser.add_argument("--log-file", help="Also log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def resolve_parameters(args: argparse.Namespace) -> DetectionParameters:
    """Parameters from --config (or defaults) with command-line overrides."""
    if args.config:
        values = load_config(args.config).parameters.to_dict()
    else:
        values = DetectionParameters.defaults().to_dict()

    if args.crop:
        values["crop"] = list(CropRegion.from_corners(*args.crop).corners)
    if args.skip_blur:
        values["skip_blur"] = True
    return DetectionParameters.from_dict(values)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger(
        'hough',
        log_level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )

    try:
        params = resolve_parameters(args)
        image = load_image(args.image)
        processor = HoughProcessor()
        add_offset = not args.no_offset
        if args.output or args.output_blur:
            detections = processor.detect_with_diagnostics(
                image, params, add_offset, args.output,
                output_blur=args.output_blur, strict=args.strict,
            )
        else:
            detections = processor.detect(image, params, add_offset)
    except HoughError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    logger.info("Detected %d circles in %s", len(detections), args.image)
    for det in detections:
        print(f"{det.label}: box=({det.x_min}, {det.y_min}, {det.x_max}, {det.y_max}) "
              f"confidence={det.confidence:.2f}")

    if args.json_path:
        save_detections(args.json_path, detections,
                        image=args.image, parameters=params.to_dict())
        logger.info("Results saved to %s", args.json_path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
