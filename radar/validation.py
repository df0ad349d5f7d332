# radar/validation.py

import numpy as np

from radar.exceptions import ValidationError


def assert_finite_nonnegative(x, name: str) -> float:
    """
    Assert that x is a finite, non-NaN, non-negative real scalar and return it as float.
    """
    try:
        value = float(x)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a real scalar, got {type(x).__name__}")
    if not np.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def assert_positive(x, name: str) -> float:
    """
    Assert that x is a finite, strictly positive real scalar.
    """
    value = assert_finite_nonnegative(x, name)
    if value == 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def assert_nonnegative_int(x, name: str) -> int:
    value = assert_finite_nonnegative(x, name)
    if value != int(value):
        raise ValidationError(f"{name} must be an integer, got {value}")
    return int(value)


def assert_vector3(x, name: str) -> np.ndarray:
    """
    Assert that x is a finite 3-vector and return it as a float ndarray.
    """
    arr = np.asarray(x, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValidationError(f"{name} must be a 3-vector, got shape {np.shape(x)}")
    if not np.all(np.isfinite(arr)):
        raise ValidationError(f"{name} must be finite, got {arr}")
    return arr


def assert_finite(x, name: str) -> np.ndarray:
    """Assert that every element of x is finite and non-NaN."""
    arr = np.asarray(x, dtype=float)
    if not np.all(np.isfinite(arr)):
        raise ValidationError(f"{name} must be finite, got {arr}")
    return arr
