# radar/steering.py
"""
Spatial, temporal and space-time steering vectors.

Each function accepts a scalar or a length-L sequence of frequencies and
returns a matrix with one column per frequency, so a scalar input yields a
single-column result rather than an error.
"""

import numpy as np

from radar.exceptions import DimensionMismatchError


def _as_row(freq) -> np.ndarray:
    return np.atleast_1d(np.asarray(freq, dtype=float)).reshape(-1)


def spatial_steering_vector(freq_spatial, num_elements: int) -> np.ndarray:
    """
    Parameters:
        freq_spatial: normalized spatial frequencies, shape (L,) or scalar
        num_elements: N

    Returns:
        a: complex ndarray, shape (N, L), a[n, i] = exp(j*2*pi*fs_i*n)
    """
    freq_spatial = _as_row(freq_spatial)
    n = np.arange(num_elements)[:, None]
    return np.exp(1j * 2 * np.pi * freq_spatial[None, :] * n)


def temporal_steering_vector(radar, freq_doppler) -> np.ndarray:
    """
    Temporal steering vector to UNNORMALIZED Doppler frequencies (Hz).

    Returns:
        b: complex ndarray, shape (M, L), b[m, i] = exp(j*2*pi*fd_i/prf*m)
    """
    freq_doppler = _as_row(freq_doppler)
    m = np.arange(radar.num_pulses)[:, None]
    return np.exp(1j * 2 * np.pi * freq_doppler[None, :] / radar.prf * m)


def space_time_steering_vector(radar, freq_spatial, freq_doppler) -> np.ndarray:
    """
    Space-time steering vectors, column i = kron(b_i, a_i).

    Returns:
        v: complex ndarray, shape (M*N, L)
    """
    freq_spatial = _as_row(freq_spatial)
    freq_doppler = _as_row(freq_doppler)
    if freq_spatial.size != freq_doppler.size:
        raise DimensionMismatchError(
            f"freq_spatial has {freq_spatial.size} entries, freq_doppler has {freq_doppler.size}"
        )

    b = temporal_steering_vector(radar, freq_doppler)
    if not radar.antenna.has_aperture:
        # No spatial aperture: the spatial factor is the scalar 1
        return b

    a = radar.antenna.spatial_steering_vector(freq_spatial)
    num_pulses, num_elements = b.shape[0], a.shape[0]
    # Column-wise Kronecker product: v[m*N + n, i] = b[m, i] * a[n, i]
    v = b[:, None, :] * a[None, :, :]
    return v.reshape(num_pulses * num_elements, freq_spatial.size)
