# radar/waveform.py

from dataclasses import dataclass

import numpy as np

from radar.validation import assert_positive


@dataclass(frozen=True)
class Waveform:
    data: np.ndarray          # complex baseband samples of one pulse
    pulse_width: float        # seconds
    samp_rate: float          # Hz

    def __post_init__(self):
        data = np.asarray(self.data, dtype=complex).reshape(-1)
        data.setflags(write=False)
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "pulse_width", assert_positive(self.pulse_width, "pulse_width"))
        object.__setattr__(self, "samp_rate", assert_positive(self.samp_rate, "samp_rate"))

    @property
    def num_samples(self) -> int:
        return self.data.size


def rect_waveform(pulse_width: float, samp_rate: float) -> Waveform:
    """Unmodulated rectangular pulse."""
    n = int(round(pulse_width * samp_rate))
    return Waveform(np.ones(n, dtype=complex), pulse_width, samp_rate)


def lfm_waveform(bandwidth: float, pulse_width: float, samp_rate: float,
                 up_chirp: bool = True) -> Waveform:
    """
    Linear FM chirp centred at baseband:
        s(t) = exp(j*pi*k*t^2),  k = B/T,  t in [-T/2, T/2)
    """
    n = int(round(pulse_width * samp_rate))
    t = np.arange(n) / samp_rate - pulse_width / 2
    k = bandwidth / pulse_width
    if not up_chirp:
        k = -k
    return Waveform(np.exp(1j * np.pi * k * t * t), pulse_width, samp_rate)
