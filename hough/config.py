"""
Configuration management for circle detection
"""

from dataclasses import dataclass, field
from numbers import Integral, Real
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from hough.exceptions import InvalidConfig


DEFAULT_CONFIG = {
    "preprocessing": {
        "blur_kernel": 15,
        "min_circle_radius": 18
    },
    "detection": {
        "dp": 1.0,
        "min_dist": 8.0,
        "param1": 60.0,
        "param2": 25.0,
        "min_radius": 35,
        "max_radius": 50,
        "skip_blur": False
    }
}

FLOAT_FIELDS = ("dp", "min_dist", "param1", "param2")
INT_FIELDS = ("min_radius", "max_radius")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class CropRegion:
    """Axis-aligned rectangle in original-image coordinates."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            if not _is_integer(value):
                raise InvalidConfig(f"crop {name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))
        if self.x < 0 or self.y < 0:
            raise InvalidConfig(f"crop origin must be non-negative, got ({self.x}, {self.y})")
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfig(
                f"crop extent must be positive, got {self.width}x{self.height}"
            )

    @classmethod
    def from_corners(cls, x_min: int, y_min: int, x_max: int, y_max: int) -> "CropRegion":
        """Build from the top-left corner and the exclusive bottom-right corner."""
        return cls(x_min, y_min, x_max - x_min, y_max - y_min)

    @property
    def origin(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def corners(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.x + self.width, self.y + self.height

    def fits(self, width: int, height: int) -> bool:
        """Check the whole rectangle lies inside an image of the given size."""
        return self.x + self.width <= width and self.y + self.height <= height


@dataclass(frozen=True)
class DetectionParameters:
    """
    Parameters for one detection call.

    dp, min_dist, param1 and param2 are passed straight to
    cv2.HoughCircles; min_radius/max_radius bound the radius search.
    """

    dp: float
    min_dist: float
    param1: float
    param2: float
    min_radius: int
    max_radius: int
    skip_blur: bool = False
    crop: Optional[CropRegion] = None

    def __post_init__(self):
        for name in FLOAT_FIELDS:
            value = getattr(self, name)
            if not _is_number(value) or value <= 0:
                raise InvalidConfig(f"{name} must be a number > 0, got {value!r}")
        for name in INT_FIELDS:
            value = getattr(self, name)
            if not _is_integer(value) or value <= 0:
                raise InvalidConfig(f"{name} must be an integer > 0, got {value!r}")
            object.__setattr__(self, name, int(value))
        if self.min_radius > self.max_radius:
            raise InvalidConfig(
                f"min_radius ({self.min_radius}) must not exceed max_radius ({self.max_radius})"
            )
        if not isinstance(self.skip_blur, bool):
            raise InvalidConfig(f"skip_blur must be a boolean, got {self.skip_blur!r}")
        if self.crop is not None and not isinstance(self.crop, CropRegion):
            raise InvalidConfig(f"crop must be a CropRegion, got {self.crop!r}")

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "DetectionParameters":
        """
        Parse detection parameters from a configuration mapping.

        Args:
            config: Mapping with dp, min_dist, param1, param2, min_radius,
                max_radius and optionally skip_blur and crop
                ([x_min, y_min, x_max, y_max])

        Returns:
            Validated DetectionParameters
        """
        missing = [name for name in FLOAT_FIELDS + INT_FIELDS if config.get(name) is None]
        if missing:
            raise InvalidConfig(f"missing required parameters: {', '.join(missing)}")

        return cls(
            dp=config["dp"],
            min_dist=config["min_dist"],
            param1=config["param1"],
            param2=config["param2"],
            min_radius=config["min_radius"],
            max_radius=config["max_radius"],
            skip_blur=config.get("skip_blur", False),
            crop=parse_crop(config.get("crop")),
        )

    @classmethod
    def defaults(cls, **overrides) -> "DetectionParameters":
        """Build parameters from DEFAULT_CONFIG with selected fields replaced."""
        values = dict(DEFAULT_CONFIG["detection"])
        values.update(overrides)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        values = {
            "dp": self.dp,
            "min_dist": self.min_dist,
            "param1": self.param1,
            "param2": self.param2,
            "min_radius": self.min_radius,
            "max_radius": self.max_radius,
            "skip_blur": self.skip_blur,
        }
        if self.crop is not None:
            values["crop"] = list(self.crop.corners)
        return values


def parse_crop(value: Any) -> Optional[CropRegion]:
    """Parse a crop given as [x_min, y_min, x_max, y_max]."""
    if value is None:
        return None
    if isinstance(value, CropRegion):
        return value
    if not isinstance(value, Sequence) or isinstance(value, str) or len(value) != 4:
        raise InvalidConfig(f"crop must be [x_min, y_min, x_max, y_max], got {value!r}")
    return CropRegion.from_corners(*value)


@dataclass(frozen=True)
class ServiceConfig:
    """Configuration for the detection service: image source plus parameters."""

    camera_name: str
    parameters: DetectionParameters = field(default_factory=DetectionParameters.defaults)

    def validate(self) -> List[str]:
        """Validate the config and return the names of its implicit dependencies."""
        if not isinstance(self.camera_name, str) or not self.camera_name:
            raise InvalidConfig('expected "camera_name" attribute for circle detector')
        return [self.camera_name]

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "ServiceConfig":
        service_config = cls(
            camera_name=config.get("camera_name", ""),
            parameters=DetectionParameters.from_dict(config),
        )
        service_config.validate()
        return service_config


def load_config(path: str) -> ServiceConfig:
    """
    Load a service configuration from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated ServiceConfig
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise InvalidConfig(f"cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise InvalidConfig(f"malformed YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise InvalidConfig(f"config file {Path(path).name} must contain a mapping")

    return ServiceConfig.from_dict(raw)
