# interference/clutter.py

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

import numpy as np

from radar.exceptions import UnsupportedSourceTypeError
from radar.steering import space_time_steering_vector
from radar.units import Angle, Power, as_angle, as_power
from radar.validation import assert_finite


class Clutter:
    """
    Contract for clutter models consumed by the SMI estimator:

        num_patches
        cnr(radar)        -> Power, one clutter-to-noise ratio per patch
        covariance(radar) -> (Rc, Vc): (MN x MN) covariance, (MN x P) steering vectors
        normalized()      -> copy in linear units / radians
    """

    @property
    def num_patches(self) -> int:
        return 0

    def cnr(self, radar) -> Power:
        raise UnsupportedSourceTypeError(f"{type(self).__name__} has no CNR model")

    def covariance(self, radar) -> Tuple[np.ndarray, np.ndarray]:
        raise UnsupportedSourceTypeError(f"{type(self).__name__} has no covariance model")

    def normalized(self) -> "Clutter":
        return self


@dataclass
class ClutterRing(Clutter):
    """
    Discrete clutter patches at one range ring, seen by a side-looking array
    whose platform velocity lies along the array axis.

    patch_cnr is either one CNR for every patch or one per patch; it is
    weighted by the element pattern in each patch direction.
    """

    azimuth: Angle
    elevation: Angle
    patch_cnr: Power

    def __post_init__(self):
        self.azimuth = as_angle(self.azimuth)
        self.elevation = as_angle(self.elevation)
        assert_finite(self.azimuth.value, "azimuth")
        assert_finite(self.elevation.value, "elevation")
        self.patch_cnr = as_power(self.patch_cnr)

    @property
    def num_patches(self) -> int:
        return int(np.size(self.azimuth.value))

    def normalized(self) -> "ClutterRing":
        return replace(
            self,
            azimuth=self.azimuth.to_radians(),
            elevation=self.elevation.to_radians(),
            patch_cnr=self.patch_cnr.to_linear(),
        )

    def _angles(self):
        az = np.atleast_1d(self.azimuth.radians)
        el = np.broadcast_to(self.elevation.radians, az.shape)
        return az, el

    def cnr(self, radar) -> Power:
        az, el = self._angles()
        pattern = radar.antenna.element.norm_power_gain(az, el)
        cnr = np.broadcast_to(self.patch_cnr.linear, az.shape) * pattern
        return Power(cnr).to_scale(self.patch_cnr.scale)

    def steering_vectors(self, radar) -> np.ndarray:
        """Space-time steering vector of every patch, shape (M*N, P)."""
        az, el = self._angles()
        if radar.antenna.has_aperture:
            freq_spatial = radar.antenna.spatial_frequency(az, el)
        else:
            freq_spatial = np.zeros_like(az)
        platform_speed = np.linalg.norm(radar.velocity)
        freq_doppler = 2 * platform_speed / radar.wavelength * np.cos(el) * np.sin(az)
        return space_time_steering_vector(radar, freq_spatial, freq_doppler)

    def covariance(self, radar) -> Tuple[np.ndarray, np.ndarray]:
        """
        Clairvoyant clutter covariance, Rc = noise * sum_k cnr_k v_k v_k^H.
        """
        vc = self.steering_vectors(radar)
        cnr = np.atleast_1d(self.cnr(radar).linear)
        rc = radar.power_noise_linear * (vc * cnr[None, :]) @ vc.conj().T
        return rc, vc
