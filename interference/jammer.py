# interference/jammer.py

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, Tuple

import numpy as np

from radar.exceptions import UnsupportedSourceTypeError
from radar.units import Angle, Power, as_angle, as_power
from radar.validation import assert_finite, assert_positive


@dataclass
class Jammer:
    """
    Noise jammer seen from the radar.

    eff_radiated_power is a power spectral density (W/Hz); the received
    jamming power scales with the receiver bandwidth.
    """

    azimuth: Angle
    elevation: Angle
    range: float
    eff_radiated_power: Power

    def __post_init__(self):
        self.azimuth = as_angle(self.azimuth)
        self.elevation = as_angle(self.elevation)
        assert_finite(self.azimuth.value, "azimuth")
        assert_finite(self.elevation.value, "elevation")
        self.range = assert_positive(self.range, "range")
        self.eff_radiated_power = as_power(self.eff_radiated_power)

    def normalized(self) -> "Jammer":
        return replace(
            self,
            azimuth=self.azimuth.to_radians(),
            elevation=self.elevation.to_radians(),
            eff_radiated_power=self.eff_radiated_power.to_linear(),
        )

    def jnr(self, radar) -> Power:
        raise UnsupportedSourceTypeError(
            f"JNR is only modeled for barrage jammers, got {type(self).__name__}"
        )


class BarrageJammer(Jammer):

    def jnr(self, radar) -> Power:
        """
        Jammer-to-noise ratio per element, per pulse:

            J0 = ERP * B * g * lambda^2 / ((4*pi)^2 * R^2 * L)
            JNR = J0 / (k*T*B*F)

        Returned in the scale of eff_radiated_power.
        """
        work = radar.normalized()
        jammer = self.normalized()
        g = (work.antenna.element.norm_power_gain(jammer.azimuth.radians, jammer.elevation.radians)
             * work.antenna.element.gain.linear)
        j0 = (jammer.eff_radiated_power.linear * work.bandwidth * g * work.wavelength ** 2
              / ((4 * np.pi) ** 2 * jammer.range ** 2 * work.loss_system.linear))
        return Power(float(j0 / work.power_noise_linear)).to_scale(self.eff_radiated_power.scale)


def jammer_jnr(jammers: Sequence[Jammer], radar) -> np.ndarray:
    """Linear JNR of every jammer in the list."""
    return np.array([j.jnr(radar).linear for j in jammers], dtype=float)


def jammer_steering_vectors(jammers: Sequence[Jammer], radar) -> np.ndarray:
    """Spatial steering vector of every jammer, shape (N, J)."""
    az = np.array([j.azimuth.radians for j in jammers], dtype=float)
    el = np.array([j.elevation.radians for j in jammers], dtype=float)
    if not radar.antenna.has_aperture:
        return np.ones((1, az.size), dtype=complex)
    return radar.antenna.spatial_steering_vector(radar.antenna.spatial_frequency(az, el))


def jammer_covariance(jammers: Sequence[Jammer], radar) -> Tuple[np.ndarray, np.ndarray]:
    """
    Clairvoyant jammer covariance, assuming jammers uncorrelated in time:

        Rj = I_M kron (Aj * diag(noise * JNR) * Aj^H)
    """
    work = radar.normalized()
    jammers = [j.normalized() for j in jammers]
    aj = jammer_steering_vectors(jammers, work)
    source_cov = work.power_noise_linear * np.diag(jammer_jnr(jammers, work))
    spatial_cov = aj @ source_cov @ aj.conj().T
    rj = np.kron(np.eye(work.num_pulses), spatial_cov)
    return rj, aj
