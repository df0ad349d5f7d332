# radar/ambiguity.py
"""
Fold true geometric range and Doppler into what the radar measures.

All functions take a list of targets and return one value per target.
"""

import numpy as np


def _positions(targets) -> np.ndarray:
    return np.array([t.position for t in targets], dtype=float).reshape(-1, 3)


def _velocities(targets) -> np.ndarray:
    return np.array([t.velocity for t in targets], dtype=float).reshape(-1, 3)


def true_range(radar, targets) -> np.ndarray:
    return np.linalg.norm(_positions(targets) - radar.position, axis=1)


def measured_range(radar, targets) -> np.ndarray:
    return np.mod(true_range(radar, targets), radar.range_unambig)


def fold_doppler(true_doppler, prf: float) -> np.ndarray:
    """
    Fold Doppler shifts into [-prf/2, prf/2).

    |fd| < prf/2 is passed through; otherwise fd mod prf is used when it is
    below prf/2 and shifted down by prf when it is not.
    """
    true_doppler = np.atleast_1d(np.asarray(true_doppler, dtype=float))
    aliased = np.mod(true_doppler, prf)
    folded = np.where(aliased < prf / 2, aliased, aliased - prf)
    return np.where(np.abs(true_doppler) < prf / 2, true_doppler, folded)


def true_doppler(radar, targets) -> np.ndarray:
    # Positive Doppler is motion towards the radar
    los = _positions(targets) - radar.position
    los = los / np.linalg.norm(los, axis=1, keepdims=True)
    radial_velocity = np.sum(_velocities(targets) * los, axis=1)
    return -2 * radial_velocity / radar.wavelength


def measured_doppler(radar, targets) -> np.ndarray:
    return fold_doppler(true_doppler(radar, targets), radar.prf)


def measured_velocity(radar, targets) -> np.ndarray:
    return measured_doppler(radar, targets) * radar.wavelength / 2


def round_trip_phase(radar, targets) -> np.ndarray:
    phase = -4 * np.pi * measured_range(radar, targets) / radar.wavelength
    return np.mod(phase, 2 * np.pi)
