"""
Hough circle detection

Finds circular openings (cups, bottles) in colour frames and reports them as
bounding-box detections.
"""

from .config import CropRegion, DetectionParameters, ServiceConfig, load_config
from .core import HoughProcessor, detect_circles
from .detection.circle_detector import Circle
from .detection.formatter import Detection

__all__ = [
    'Circle',
    'CropRegion',
    'Detection',
    'DetectionParameters',
    'HoughProcessor',
    'ServiceConfig',
    'detect_circles',
    'load_config',
]
__version__ = '1.0.0'
