# processing/pipeline.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from processing.fft_processing import matched_filter_response, doppler_processing
from processing.detection import cfar_2d, suppress_to_local_max
from processing.pulse_train import pulse_matrix
from processing.target_echo import simulate_targets
from radar.signal_generator import add_thermal_noise

from diagnostics.logger import logger
from diagnostics.metrics import (
    MetricsRegistry,
    Timer,
    CPI_LATENCY,
    CFAR_DETECTIONS,
)


@dataclass
class CPIResult:
    rd_map: np.ndarray          # complex, (range bins, Doppler bins)
    range_axis: np.ndarray      # m
    velocity_axis: np.ndarray   # m/s
    power_map: np.ndarray       # |rd_map|^2
    detections: np.ndarray      # bool, same shape as power_map

    def detection_cells(self) -> np.ndarray:
        """(range_m, velocity_mps) of every detection, shape (K, 2)."""
        rows, cols = np.nonzero(self.detections)
        return np.column_stack((self.range_axis[rows], self.velocity_axis[cols]))


def simulate_cpi(
    radar,
    targets: Sequence,
    rng: Optional[np.random.Generator] = None,
    add_noise: bool = True,
    *,
    metrics: MetricsRegistry | None = None,
) -> np.ndarray:
    """
    Received fast-time data for one CPI: target echoes of the transmitted
    pulse matrix plus receiver noise.

    Returns:
        data: complex ndarray, shape (L, M)
    """
    data = simulate_targets(radar, targets, pulse_matrix(radar), metrics=metrics)
    if add_noise:
        data = add_thermal_noise(radar, data, rng)
    return data


def process_cpi(
    radar,
    data: np.ndarray,
    oversampling: int = 1,
    guard_cells=(1, 1),
    training_cells=(4, 4),
    pfa: float = 1e-6,
    window: Optional[str] = None,
    *,
    metrics: MetricsRegistry | None = None,
) -> CPIResult:
    """
    CPI signal processing chain.

    Steps:
        1. Matched filter (pulse compression)
        2. Doppler FFT
        3. Power conversion
        4. CFAR detection
        5. Local-max suppression
    """
    with Timer(metrics, CPI_LATENCY):
        mf_resp, range_axis = matched_filter_response(radar, data)
        rd_map, velocity_axis = doppler_processing(radar, mf_resp, oversampling, window)
        power_map = np.abs(rd_map) ** 2
        raw_detections = cfar_2d(
            power_map,
            guard_cells=guard_cells,
            training_cells=training_cells,
            pfa=pfa,
        )
        detections = suppress_to_local_max(raw_detections, power_map)

    num_detections = int(np.count_nonzero(detections))
    if metrics is not None:
        metrics.inc(CFAR_DETECTIONS, num_detections)
    logger.info("CPI processed: %dx%d range-Doppler map, %d detections",
                rd_map.shape[0], rd_map.shape[1], num_detections)

    return CPIResult(rd_map, range_axis, velocity_axis, power_map, detections)


def run_cpi(radar, targets: Sequence, rng: Optional[np.random.Generator] = None,
            add_noise: bool = True, *, metrics: MetricsRegistry | None = None,
            **processing_kwargs) -> CPIResult:
    """simulate_cpi followed by process_cpi."""
    data = simulate_cpi(radar, targets, rng, add_noise, metrics=metrics)
    return process_cpi(radar, data, metrics=metrics, **processing_kwargs)
