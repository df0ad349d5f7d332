# processing/fft_processing.py

from typing import Optional, Tuple

import numpy as np
import scipy.constants as sc
from scipy.signal import get_window

from processing.pulse_train import as_pulse_matrix


def apply_window(signal: np.ndarray, window_type: str = "hann") -> np.ndarray:
    """
    Taper a 1D or 2D signal along its last axis with any window known to
    scipy.signal.get_window ("hann", "hamming", ("kaiser", 8), ...).
    """
    window = get_window(window_type, signal.shape[-1], fftbins=False)
    return signal * window


def matched_filter_response(radar, data: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Pulse compression of each pulse with the radar's (unit-norm) waveform.

    Parameters:
        data: flat L*M burst or L x M matrix of fast-time samples

    Returns:
        mf_resp: complex ndarray, shape (L + Lw - 1, M)
        range_axis: ranges (m) of each output row; range 0 is the row where a
                    zero-delay echo fully overlaps the filter
    """
    pulses, _ = as_pulse_matrix(data, radar.num_pulses)
    waveform = radar.waveform.data
    waveform_len = waveform.size
    mf_len = waveform_len + pulses.shape[0] - 1

    # Zero-pad filter and data to the linear convolution length
    mf = np.zeros(mf_len, dtype=complex)
    mf[:waveform_len] = np.conj(waveform / np.linalg.norm(waveform))[::-1]
    padded = np.zeros((mf_len, pulses.shape[1]), dtype=complex)
    padded[:pulses.shape[0]] = pulses

    mf_resp = np.fft.ifft(np.fft.fft(padded, axis=0) * np.fft.fft(mf)[:, None], axis=0)

    idx = np.arange(1, mf_len + 1)
    time_axis = (idx - waveform_len) / radar.waveform.samp_rate
    range_axis = time_axis * (sc.c / 2)
    return mf_resp, range_axis


def doppler_processing(radar, data: np.ndarray, oversampling: int = 1,
                       window: Optional[str] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    FFT across slow-time (pulses) of matched-filter output.

    Parameters:
        data: P x M matched filter output (or flat P*M)
        oversampling: Doppler FFT length is M * oversampling
        window: optional taper applied across pulses before the FFT

    Returns:
        rd_map: complex ndarray, shape (P, M * oversampling), zero Doppler centred
        velocity_axis: velocity (m/s) of each Doppler bin, from -v_unambig
    """
    pulses, _ = as_pulse_matrix(data, radar.num_pulses)
    if window is not None:
        pulses = apply_window(pulses, window)

    n_fft = radar.num_pulses * int(oversampling)
    rd_map = np.fft.fftshift(np.fft.fft(pulses, n=n_fft, axis=1), axes=1)

    v_unambig = radar.velocity_unambig
    velocity_step = 2 * v_unambig / n_fft
    velocity_axis = -v_unambig + velocity_step * np.arange(n_fft)
    return rd_map, velocity_axis


def range_doppler_map(radar, data: np.ndarray, oversampling: int = 1,
                      window: Optional[str] = None):
    """
    Matched filter then Doppler processing.

    Returns:
        rd_map, range_axis, velocity_axis
    """
    mf_resp, range_axis = matched_filter_response(radar, data)
    rd_map, velocity_axis = doppler_processing(radar, mf_resp, oversampling, window)
    return rd_map, range_axis, velocity_axis
