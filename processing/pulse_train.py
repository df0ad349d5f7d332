# processing/pulse_train.py
"""
Transmit pulse train and its matched filter.

One pulse of L samples is the waveform followed by zeros out to one PRI:
round((pri - pulse_width) * samp_rate) trailing zeros.
"""

import numpy as np

from radar.exceptions import DimensionMismatchError


def round_half_up(x):
    """Round to nearest integer with halves away from zero (x >= 0)."""
    return int(np.floor(x + 0.5))


def padded_pulse(radar) -> np.ndarray:
    wf = radar.waveform
    num_zeros = max(0, round_half_up((radar.pri - wf.pulse_width) * wf.samp_rate))
    return np.concatenate([wf.data, np.zeros(num_zeros, dtype=complex)])


def pulse_burst_waveform(radar) -> np.ndarray:
    """
    Returns:
        pulses: complex ndarray, shape (L*M,), M padded pulses back to back
    """
    return np.tile(padded_pulse(radar), radar.num_pulses)


def pulse_matrix(radar) -> np.ndarray:
    """
    Returns:
        pulses: complex ndarray, shape (L, M), one padded pulse per column
    """
    return np.tile(padded_pulse(radar)[:, None], (1, radar.num_pulses))


def pulse_burst_matched_filter(radar) -> np.ndarray:
    """Time-reversed conjugate of the full burst."""
    return np.conj(pulse_burst_waveform(radar))[::-1]


def as_pulse_matrix(data, num_pulses: int):
    """
    View data as an L x M matrix with one pulse per column.

    An L x M matrix passes through. A flat length-L*M burst, either 1D or a
    single (L*M, 1) column, is split into consecutive pulses. Returns the
    matrix and whether the input was reshaped; callers restore the input
    shape with ``reshape(data.shape, order="F")``.
    """
    data = np.asarray(data)
    if data.ndim == 2 and data.shape[1] == num_pulses:
        return data, False
    if data.ndim > 2 or (data.ndim == 2 and data.shape[1] != 1):
        raise DimensionMismatchError(
            f"expected {num_pulses} pulse columns or a flat burst, got shape {data.shape}"
        )
    flat = data.reshape(-1)
    if num_pulses == 0 or flat.size % num_pulses != 0:
        raise DimensionMismatchError(
            f"burst of {flat.size} samples does not split into {num_pulses} pulses"
        )
    return flat.reshape((flat.size // num_pulses, num_pulses), order="F"), True
