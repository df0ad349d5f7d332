# radar/system.py

from __future__ import annotations

import copy
from typing import Optional

import numpy as np
import scipy.constants as sc

from radar.exceptions import UnsupportedGeometryError
from radar.timing import PulseTiming
from radar.units import Power, Scale, as_power
from radar.validation import assert_finite_nonnegative, assert_positive, assert_vector3
from radar.waveform import Waveform

# 4/3 earth model for radar horizon
EFFECTIVE_EARTH_RADIUS = 4 / 3 * 6371e3


class RadarSystem:
    """
    Monostatic pulsed-Doppler radar.

    Power quantities (loss_system, noise_fig, element gain) carry their own
    scale tags. ``scale`` is the caller's convention for outputs such as
    ``power_noise``, received power and SNR.
    """

    def __init__(
        self,
        antenna,
        waveform: Waveform,
        timing: PulseTiming,
        position=(0.0, 0.0, 0.0),
        velocity=(0.0, 0.0, 0.0),
        tx_power: float = 1.0,
        loss_system=Power(0.0, Scale.DB),
        noise_fig=Power(0.0, Scale.DB),
        temperature_noise: float = 290.0,
        bandwidth: Optional[float] = None,
        scale: Scale = Scale.DB,
    ):
        self.antenna = antenna
        self.waveform = waveform
        self.timing = timing
        self.position = assert_vector3(position, "position")
        self.velocity = assert_vector3(velocity, "velocity")
        self.tx_power = assert_finite_nonnegative(tx_power, "tx_power")
        self.loss_system = as_power(loss_system, Scale.DB)
        self.noise_fig = as_power(noise_fig, Scale.DB)
        self.temperature_noise = assert_finite_nonnegative(temperature_noise, "temperature_noise")
        self._bandwidth = None if bandwidth is None else assert_positive(bandwidth, "bandwidth")
        self.scale = Scale.parse(scale)

    # -----------------------
    # Unit normalization
    # -----------------------
    def normalized(self) -> "RadarSystem":
        """Working copy with every tagged quantity in linear units."""
        radar = copy.deepcopy(self)
        radar.loss_system = radar.loss_system.to_linear()
        radar.noise_fig = radar.noise_fig.to_linear()
        radar.antenna.element.gain = radar.antenna.element.gain.to_linear()
        radar.scale = Scale.LINEAR
        return radar

    def to_output_scale(self, power_linear):
        if self.scale is Scale.DB:
            return 10 * np.log10(power_linear)
        return power_linear

    # -----------------------
    # Delegated geometry/timing
    # -----------------------
    @property
    def wavelength(self) -> float:
        return self.antenna.wavelength

    @property
    def center_freq(self) -> float:
        return self.antenna.center_freq

    @property
    def prf(self) -> float:
        return self.timing.prf

    @prf.setter
    def prf(self, val):
        self.timing.prf = val

    @property
    def pri(self) -> float:
        return self.timing.pri

    @pri.setter
    def pri(self, val):
        self.timing.pri = val

    @property
    def num_pulses(self) -> int:
        return self.timing.num_pulses

    @property
    def num_elements(self) -> int:
        return self.antenna.num_elements

    @property
    def bandwidth(self) -> float:
        # Complex baseband: receiver bandwidth defaults to the sample rate
        if self._bandwidth is None:
            return self.waveform.samp_rate
        return self._bandwidth

    @bandwidth.setter
    def bandwidth(self, val):
        self._bandwidth = None if val is None else assert_positive(val, "bandwidth")

    # -----------------------
    # Derived limits
    # -----------------------
    @property
    def range_unambig(self) -> float:
        return self.timing.range_unambig

    @property
    def doppler_unambig(self) -> float:
        return self.timing.doppler_unambig

    @property
    def velocity_unambig(self) -> float:
        return self.timing.velocity_unambig(self.wavelength)

    @property
    def range_resolution(self) -> float:
        return PulseTiming.range_resolution(self.bandwidth)

    @property
    def range_horizon(self) -> float:
        h = self.position[2]
        return float(np.sqrt(2 * EFFECTIVE_EARTH_RADIUS * h + h ** 2))

    @property
    def power_noise(self) -> float:
        """Thermal noise power kTBF, in ``scale``."""
        return self.to_output_scale(self.power_noise_linear)

    @property
    def power_noise_linear(self) -> float:
        return sc.k * self.temperature_noise * self.bandwidth * self.noise_fig.linear

    # -----------------------
    # Clutter geometry
    # -----------------------
    def clutter_beta(self) -> float:
        """Half inter-element spacings traversed by the platform in one PRI."""
        if not self.antenna.has_aperture:
            raise UnsupportedGeometryError("clutter_beta requires an antenna array")
        return 2 * np.linalg.norm(self.velocity) * self.pri / self.antenna.element_spacing

    def clutter_rank(self) -> int:
        """Brennan's rule: N + (M - 1) * beta, rounded half up."""
        if not self.antenna.has_aperture:
            raise UnsupportedGeometryError("clutter_rank requires an antenna array")
        return int(np.floor(self.num_elements + (self.num_pulses - 1) * self.clutter_beta() + 0.5))
