"""Tests for config module."""

import numpy as np
import pytest
from hough.config import (DEFAULT_CONFIG, CropRegion, DetectionParameters,
                          ServiceConfig, load_config, parse_crop)
from hough.exceptions import InvalidConfig


VALID = {
    "dp": 1, "min_dist": 8, "param1": 60, "param2": 25,
    "min_radius": 35, "max_radius": 50,
}


class TestDefaultConfig:
    """Test default configuration."""

    def test_detection_defaults(self):
        """Test the detection defaults match the documented values."""
        detect = DEFAULT_CONFIG['detection']
        assert detect['dp'] == 1.0
        assert detect['min_dist'] == 8.0
        assert detect['param1'] == 60.0
        assert detect['param2'] == 25.0
        assert detect['min_radius'] == 35
        assert detect['max_radius'] == 50

    def test_preprocessing_defaults(self):
        """Test preprocessing constants."""
        assert DEFAULT_CONFIG['preprocessing']['blur_kernel'] == 15
        assert DEFAULT_CONFIG['preprocessing']['min_circle_radius'] == 18

    def test_defaults_with_override(self):
        """Test overriding a single default."""
        params = DetectionParameters.defaults(min_dist=35)
        assert params.min_dist == 35
        assert params.param1 == 60.0
        assert params.crop is None
        assert params.skip_blur is False


class TestDetectionParameters:
    """Test parameter validation."""

    def test_from_dict(self):
        """Test parsing a valid mapping."""
        params = DetectionParameters.from_dict(dict(VALID, skip_blur=True, crop=[115, 0, 600, 440]))
        assert params.skip_blur is True
        assert params.crop == CropRegion(115, 0, 485, 440)

    @pytest.mark.parametrize("name", ["dp", "min_dist", "param1", "param2",
                                      "min_radius", "max_radius"])
    def test_missing_field(self, name):
        """Test every required field must be present."""
        values = dict(VALID)
        del values[name]
        with pytest.raises(InvalidConfig, match=name):
            DetectionParameters.from_dict(values)

    @pytest.mark.parametrize("name", ["dp", "min_dist", "param1", "param2",
                                      "min_radius", "max_radius"])
    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_field(self, name, value):
        """Test zero and negative values are rejected."""
        with pytest.raises(InvalidConfig, match=name):
            DetectionParameters.from_dict(dict(VALID, **{name: value}))

    def test_min_radius_above_max(self):
        """Test min_radius must not exceed max_radius."""
        with pytest.raises(InvalidConfig, match="min_radius"):
            DetectionParameters.from_dict(dict(VALID, min_radius=60))

    def test_equal_radius_bounds_allowed(self):
        """Test min_radius == max_radius is valid."""
        params = DetectionParameters.from_dict(dict(VALID, min_radius=40, max_radius=40))
        assert params.min_radius == params.max_radius

    def test_non_integer_radius(self):
        """Test radii must be integers."""
        with pytest.raises(InvalidConfig):
            DetectionParameters.from_dict(dict(VALID, min_radius=35.5))

    def test_numpy_integers_accepted(self):
        """Test numpy integer radii are accepted and stored as ints."""
        params = DetectionParameters.from_dict(
            dict(VALID, min_radius=np.int64(35), max_radius=np.int32(50)))
        assert params.min_radius == 35
        assert type(params.min_radius) is int
        assert type(params.max_radius) is int

    def test_bool_is_not_a_number(self):
        """Test booleans are not accepted as numbers."""
        with pytest.raises(InvalidConfig):
            DetectionParameters.from_dict(dict(VALID, dp=True))

    def test_parameters_are_immutable(self):
        """Test parameters cannot be changed after construction."""
        params = DetectionParameters.from_dict(VALID)
        with pytest.raises(AttributeError):
            params.dp = 2

    def test_to_dict_round_trip(self):
        """Test to_dict output parses back to equal parameters."""
        params = DetectionParameters.from_dict(dict(VALID, crop=[10, 20, 110, 220]))
        assert DetectionParameters.from_dict(params.to_dict()) == params


class TestCropRegion:
    """Test crop rectangle handling."""

    def test_from_corners(self):
        """Test corner form converts to origin and extent."""
        crop = CropRegion.from_corners(115, 0, 600, 440)
        assert crop.origin == (115, 0)
        assert (crop.width, crop.height) == (485, 440)
        assert crop.corners == (115, 0, 600, 440)

    def test_numpy_corners_accepted(self):
        """Test crop corners given as numpy integers."""
        crop = CropRegion.from_corners(*np.array([115, 0, 600, 440], dtype=np.int64))
        assert crop.corners == (115, 0, 600, 440)
        assert type(crop.x) is int

    def test_empty_extent_rejected(self):
        """Test zero-sized crops are rejected."""
        with pytest.raises(InvalidConfig):
            CropRegion.from_corners(10, 10, 10, 50)

    def test_negative_origin_rejected(self):
        """Test origin must be inside the image."""
        with pytest.raises(InvalidConfig):
            CropRegion(-1, 0, 10, 10)

    def test_fits(self):
        """Test bounds check against an image size."""
        crop = CropRegion.from_corners(115, 0, 600, 440)
        assert crop.fits(640, 480)
        assert crop.fits(600, 440)
        assert not crop.fits(599, 480)

    def test_parse_crop_malformed(self):
        """Test malformed crop values."""
        assert parse_crop(None) is None
        with pytest.raises(InvalidConfig):
            parse_crop([1, 2, 3])
        with pytest.raises(InvalidConfig):
            parse_crop("0 0 10 10")


class TestServiceConfig:
    """Test service configuration and YAML loading."""

    def test_validate_returns_dependencies(self):
        """Test the camera name is reported as a dependency."""
        config = ServiceConfig("cam", DetectionParameters.from_dict(VALID))
        assert config.validate() == ["cam"]

    def test_empty_camera_name(self):
        """Test an empty camera name is rejected."""
        with pytest.raises(InvalidConfig, match="camera_name"):
            ServiceConfig.from_dict(VALID)

    def test_load_config(self, tmp_path):
        """Test loading a YAML config file."""
        path = tmp_path / "hough.yaml"
        path.write_text(
            "camera_name: cam\n"
            "dp: 1\nmin_dist: 35\nparam1: 60\nparam2: 25\n"
            "min_radius: 35\nmax_radius: 50\n"
            "skip_blur: true\ncrop: [115, 0, 600, 440]\n"
        )
        config = load_config(str(path))
        assert config.camera_name == "cam"
        assert config.parameters.min_dist == 35
        assert config.parameters.skip_blur is True
        assert config.parameters.crop.origin == (115, 0)

    def test_load_config_missing_file(self, tmp_path):
        """Test a missing file raises InvalidConfig."""
        with pytest.raises(InvalidConfig):
            load_config(str(tmp_path / "missing.yaml"))

    def test_load_config_malformed_yaml(self, tmp_path):
        """Test malformed YAML raises InvalidConfig."""
        path = tmp_path / "bad.yaml"
        path.write_text("dp: [1, 2\n")
        with pytest.raises(InvalidConfig):
            load_config(str(path))

    def test_load_config_not_a_mapping(self, tmp_path):
        """Test a YAML list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InvalidConfig):
            load_config(str(path))
