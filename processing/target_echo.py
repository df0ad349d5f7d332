# processing/target_echo.py

from __future__ import annotations

import copy
from typing import Sequence

import numpy as np
import scipy.constants as sc

from diagnostics.logger import logger
from diagnostics.metrics import MetricsRegistry, TARGETS_VISIBLE
from processing.pulse_train import as_pulse_matrix, round_half_up
from radar.ambiguity import measured_doppler, measured_range, true_range
from radar.power_budget import received_power


def delay_sequence(data: np.ndarray, delay: float) -> np.ndarray:
    """
    Delay a 1D sequence by round(delay) samples.

    Leading samples are zero-filled; samples pushed past the end of the
    original length are dropped.
    """
    data = np.asarray(data)
    delay = round_half_up(delay)
    out = np.zeros(data.shape, dtype=complex)
    if delay < data.shape[0]:
        out[delay:] = data[:data.shape[0] - delay]
    return out


def simulate_targets(radar, targets: Sequence, data: np.ndarray,
                     *, metrics: MetricsRegistry | None = None) -> np.ndarray:
    """
    Inject delayed, Doppler-shifted, RRE-scaled echoes of each target into
    the received pulses.

    Parameters:
        targets: targets with position, velocity and rcs (never mutated)
        data: flat L*M pulse burst or L x M pulse matrix

    Returns:
        out: target response with the same shape as data

    Pulses are processed in order because targets move by velocity*pri
    after each one. A target beyond k unambiguous ranges only contributes
    from pulse k+1 onwards.
    """
    work = radar.normalized()
    data = np.asarray(data)
    pulses, reshaped = as_pulse_matrix(data, work.num_pulses)
    out = np.zeros(pulses.shape, dtype=complex)

    # Working copies: positions advance during the burst
    sim_targets = [copy.deepcopy(t) for t in targets]
    if not sim_targets:
        return out.reshape(data.shape, order="F") if reshaped else out

    samp_rate = work.waveform.samp_rate
    num_visible = 0
    for m in range(1, work.num_pulses + 1):
        true_ranges = true_range(work, sim_targets)
        delays = 2 * measured_range(work, sim_targets) / sc.c * samp_rate
        doppler_shifts = np.exp(1j * 2 * np.pi * measured_doppler(work, sim_targets) * work.pri * m)
        amplitude = np.sqrt(received_power(work, sim_targets))

        visible = np.flatnonzero(true_ranges < work.range_unambig * m)
        for jj in visible:
            echo = delay_sequence(pulses[:, m - 1], delays[jj])
            out[:, m - 1] += echo * doppler_shifts[jj] * amplitude[jj]
        num_visible = visible.size

        for tgt in sim_targets:
            tgt.position = tgt.position + tgt.velocity * work.pri

    if metrics is not None:
        metrics.set_gauge(TARGETS_VISIBLE, num_visible)
    logger.debug("Simulated %d targets over %d pulses, %d visible in the last pulse",
                 len(sim_targets), work.num_pulses, num_visible)

    if reshaped:
        return out.reshape(data.shape, order="F")
    return out
