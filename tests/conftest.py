import numpy as np
import pytest

from radar.antenna import IsotropicElement, SingleElementAntenna, UniformLinearArray
from radar.system import RadarSystem
from radar.timing import PulseTiming
from radar.units import Power, Scale
from radar.waveform import rect_waveform


@pytest.fixture
def make_radar():
    """Factory for small test radars (ULA, rectangular pulse, radar at origin)."""

    def _make(
        num_elements=8,
        num_pulses=16,
        prf=1000.0,
        wavelength=0.03,
        pulse_width=5e-6,
        samp_rate=1e6,
        waveform=None,
        element=None,
        single_element=False,
        tx_power=1.0,
        velocity=(0.0, 0.0, 0.0),
        loss_system=Power(0.0, Scale.DB),
        noise_fig=Power(0.0, Scale.DB),
        scale=Scale.LINEAR,
    ):
        element = IsotropicElement(Power(0.0, Scale.DB)) if element is None else element
        if single_element:
            antenna = SingleElementAntenna(element, center_freq=1e9)
        else:
            antenna = UniformLinearArray(element, num_elements, wavelength / 2, center_freq=1e9)
        antenna.wavelength = wavelength
        waveform = rect_waveform(pulse_width, samp_rate) if waveform is None else waveform
        return RadarSystem(
            antenna=antenna,
            waveform=waveform,
            timing=PulseTiming(prf=prf, num_pulses=num_pulses),
            velocity=velocity,
            tx_power=tx_power,
            loss_system=loss_system,
            noise_fig=noise_fig,
            scale=scale,
        )

    return _make


@pytest.fixture
def rng():
    return np.random.default_rng(42)
