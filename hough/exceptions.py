"""Exceptions raised by the circle detection pipeline."""


class HoughError(Exception):
    """Base error for circle detection."""
    pass


class InvalidConfig(HoughError):
    """A parameter is missing, out of range, or inconsistent."""
    pass


class ImageUnavailable(HoughError):
    """The image source could not supply a colour frame."""
    pass


class ImageFormatError(HoughError):
    """The input cannot be interpreted as a 2-D pixel grid."""
    pass


class DetectionEngineError(HoughError):
    """The circle transform failed inside OpenCV."""
    pass


class DiagnosticWriteError(HoughError):
    """A diagnostic artifact could not be written."""
    pass
