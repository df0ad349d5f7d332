# radar/exceptions.py


class RadarError(Exception):
    """Base class for all errors raised by the radar models."""


class ValidationError(RadarError, ValueError):
    """Malformed timing or geometry parameter (non-finite, NaN, negative)."""


class DimensionMismatchError(RadarError, ValueError):
    """Steering-vector frequency arguments of different lengths."""


class UnsupportedGeometryError(RadarError):
    """Operation needs an array aperture but the antenna has none."""


class UnsupportedSourceTypeError(RadarError):
    """No interference model is defined for the given clutter/jammer type."""
