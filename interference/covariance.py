# interference/covariance.py
"""
Sample-matrix (SMI) estimate of the clutter + jammer + noise covariance.

Snapshots are drawn for every Monte-Carlo trial at once: each column of the
snapshot matrix is an independent realization, so vectorizing over the
snapshot index is equivalent to looping over it.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from diagnostics.logger import logger
from diagnostics.metrics import MetricsRegistry, Timer, SMI_LATENCY, SNAPSHOTS_DRAWN
from interference.clutter import Clutter
from interference.jammer import Jammer, jammer_jnr, jammer_steering_vectors
from radar.exceptions import UnsupportedSourceTypeError, ValidationError
from radar.validation import assert_nonnegative_int


def _complex_gaussian(rng: np.random.Generator, shape) -> np.ndarray:
    return rng.standard_normal(shape) + 1j * rng.standard_normal(shape)


def interference_snapshots(
    radar,
    clutter: Optional[Clutter] = None,
    jammers: Sequence[Jammer] = (),
    num_snapshots: int = 1,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Monte-Carlo space-time interference snapshots.

    Per snapshot:
        clutter: every patch gets a complex Gaussian amplitude scaled by
                 sqrt(noise)/2 * CNR, constant over elements and pulses
        noise:   complex Gaussian scaled by sqrt(noise)/2 on all M*N channels
        jammers: temporally white complex Gaussian amplitude per pulse,
                 scaled by sqrt(noise)/2 * JNR, times the spatial steering vector

    Returns:
        snapshots: complex ndarray, shape (M*N, num_snapshots)
    """
    num_snapshots = assert_nonnegative_int(num_snapshots, "num_snapshots")
    if num_snapshots == 0:
        raise ValidationError("num_snapshots must be at least 1")
    rng = np.random.default_rng() if rng is None else rng

    # All computation in linear units and radians, on copies
    work = radar.normalized()
    for jammer in jammers:
        if not isinstance(jammer, Jammer):
            raise UnsupportedSourceTypeError(f"Unsupported jammer type: {type(jammer).__name__}")
    jammers = [j.normalized() for j in jammers]
    if clutter is not None:
        if not isinstance(clutter, Clutter):
            raise UnsupportedSourceTypeError(f"Unsupported clutter type: {type(clutter).__name__}")
        clutter = clutter.normalized()

    num_pulses = work.num_pulses
    num_elements = work.num_elements
    amp = np.sqrt(work.power_noise_linear) / 2

    # Noise contribution
    snapshots = amp * _complex_gaussian(rng, (num_pulses * num_elements, num_snapshots))

    # Jammer contribution
    if jammers:
        jnr = jammer_jnr(jammers, work)
        aj = jammer_steering_vectors(jammers, work)
        jam_temporal = (amp * jnr)[:, None, None] * _complex_gaussian(
            rng, (len(jammers), num_pulses, num_snapshots)
        )
        # Sum over jammers of kron(temporal amplitude, spatial steering vector)
        jam = np.einsum("jmk,nj->mnk", jam_temporal, aj)
        snapshots += jam.reshape(num_pulses * num_elements, num_snapshots)

    # Clutter contribution
    if clutter is not None and clutter.num_patches > 0:
        _, vc = clutter.covariance(work)
        cnr = np.atleast_1d(clutter.cnr(work).linear)
        clut_amp = (amp * cnr)[:, None] * _complex_gaussian(rng, (clutter.num_patches, num_snapshots))
        snapshots += vc @ clut_amp

    logger.debug(
        "Drew %d interference snapshots (M=%d, N=%d, jammers=%d, patches=%d)",
        num_snapshots, num_pulses, num_elements, len(jammers),
        0 if clutter is None else clutter.num_patches,
    )
    return snapshots


def sample_covariance(snapshots: np.ndarray) -> np.ndarray:
    """
    Sample covariance of the snapshot columns with the mean subtracted:

        Ru = (1/K) * S S^H - mean

    The mean column vector is subtracted from every column of the outer
    product average (not mean * mean^H).
    """
    snapshots = np.asarray(snapshots)
    num_snapshots = snapshots.shape[1]
    mean = np.sum(snapshots, axis=1) / num_snapshots
    return snapshots @ snapshots.conj().T / num_snapshots - mean[:, None]


def smi_covariance(
    radar,
    clutter: Optional[Clutter] = None,
    jammers: Sequence[Jammer] = (),
    num_snapshots: int = 1,
    rng: Optional[np.random.Generator] = None,
    *,
    metrics: MetricsRegistry | None = None,
) -> np.ndarray:
    """
    Interference covariance estimated from num_snapshots space-time snapshots.

    Returns:
        Ru: complex ndarray, shape (M*N, M*N)
    """
    with Timer(metrics, SMI_LATENCY):
        snapshots = interference_snapshots(radar, clutter, jammers, num_snapshots, rng)
        ru = sample_covariance(snapshots)

    if metrics is not None:
        metrics.inc(SNAPSHOTS_DRAWN, num_snapshots)
    logger.info("SMI covariance estimated from %d snapshots, size %dx%d",
                num_snapshots, ru.shape[0], ru.shape[1])
    return ru
