# radar/antenna.py
"""
Antenna geometry.

Two antenna variants share one contract: ``has_aperture`` tells the caller
whether a spatial steering vector exists. A ``SingleElementAntenna`` has
none (its spatial factor is the scalar 1), a ``UniformLinearArray`` has N
elements spaced ``element_spacing`` metres apart along its axis.
"""

from __future__ import annotations

import numpy as np
import scipy.constants as sc

from radar.steering import spatial_steering_vector
from radar.units import Power, Scale, as_power
from radar.validation import assert_finite_nonnegative, assert_nonnegative_int, assert_positive


class AntennaElement:
    """
    Gain-pattern contract consumed by the radar models.

    gain: peak element gain (tagged)
    norm_power_gain(az, el): normalized power pattern in [0, 1], angles in radians
    """

    def __init__(self, gain=Power(0.0, Scale.DB)):
        self.gain = as_power(gain, Scale.DB)

    def norm_power_gain(self, azimuth, elevation) -> np.ndarray:
        raise NotImplementedError


class IsotropicElement(AntennaElement):

    def norm_power_gain(self, azimuth, elevation) -> np.ndarray:
        az, el = np.broadcast_arrays(np.asarray(azimuth, dtype=float),
                                     np.asarray(elevation, dtype=float))
        return np.ones(az.shape)


class CosineElement(AntennaElement):
    """cos^p element pattern, zero behind the array face."""

    def __init__(self, gain=Power(0.0, Scale.DB), exponent: float = 1.5):
        super().__init__(gain)
        self.exponent = assert_finite_nonnegative(exponent, "exponent")

    def norm_power_gain(self, azimuth, elevation) -> np.ndarray:
        az = np.asarray(azimuth, dtype=float)
        el = np.asarray(elevation, dtype=float)
        pattern = np.clip(np.cos(az), 0.0, None) * np.clip(np.cos(el), 0.0, None)
        return pattern ** self.exponent


class SingleElementAntenna:
    has_aperture = False

    def __init__(self, element: AntennaElement, center_freq: float):
        self.element = element
        self.center_freq = center_freq

    @property
    def num_elements(self) -> int:
        return 1

    @property
    def gain_element(self) -> Power:
        return self.element.gain

    @property
    def center_freq(self) -> float:
        return self._center_freq

    @center_freq.setter
    def center_freq(self, val):
        val = assert_positive(val, "center_freq")
        self._center_freq = val
        self._wavelength = sc.c / val

    @property
    def wavelength(self) -> float:
        return self._wavelength

    @wavelength.setter
    def wavelength(self, val):
        val = assert_positive(val, "wavelength")
        self._wavelength = val
        self._center_freq = sc.c / val


class UniformLinearArray(SingleElementAntenna):
    has_aperture = True

    def __init__(self, element: AntennaElement, num_elements: int,
                 element_spacing: float, center_freq: float):
        super().__init__(element, center_freq)
        self._num_elements = assert_nonnegative_int(num_elements, "num_elements")
        self.element_spacing = assert_finite_nonnegative(element_spacing, "element_spacing")

    @classmethod
    def half_wavelength(cls, element: AntennaElement, num_elements: int, center_freq: float):
        return cls(element, num_elements, sc.c / center_freq / 2, center_freq)

    @property
    def num_elements(self) -> int:
        return self._num_elements

    @num_elements.setter
    def num_elements(self, val):
        self._num_elements = assert_nonnegative_int(val, "num_elements")

    def spatial_frequency(self, azimuth, elevation) -> np.ndarray:
        """Normalized spatial frequency d/lambda*cos(el)*sin(az), angles in radians."""
        return (self.element_spacing / self.wavelength
                * np.cos(np.asarray(elevation, dtype=float))
                * np.sin(np.asarray(azimuth, dtype=float)))

    def spatial_steering_vector(self, freq_spatial) -> np.ndarray:
        return spatial_steering_vector(freq_spatial, self.num_elements)
