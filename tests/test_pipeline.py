import numpy as np
import pytest

from diagnostics.metrics import (
    MetricsRegistry,
    CFAR_DETECTIONS,
    CPI_LATENCY,
    TARGETS_VISIBLE,
)
from processing.pipeline import process_cpi, run_cpi, simulate_cpi
from radar.antenna import IsotropicElement
from radar.signal_generator import Target
from radar.units import Power, Scale
from radar.waveform import lfm_waveform


@pytest.fixture
def chirp_radar(make_radar):
    return make_radar(
        num_elements=4,
        num_pulses=16,
        prf=5000,
        waveform=lfm_waveform(5e6, 10e-6, 10e6),
        element=IsotropicElement(Power(30.0, Scale.DB)),
        tx_power=1e6,
    )


def test_pipeline_detects_known_target(chirp_radar, rng):
    # 625 Hz Doppler: exactly bin 2 of 16, i.e. column 10 after fftshift
    target = Target([3000.0, 0.0, 0.0], [-9.375, 0.0, 0.0], rcs=1.0)
    metrics = MetricsRegistry()

    result = run_cpi(chirp_radar, [target], rng=rng, metrics=metrics,
                     training_cells=(4, 3), pfa=1e-6)

    assert result.detections.shape == result.power_map.shape
    row, col = np.unravel_index(np.argmax(result.power_map), result.power_map.shape)
    assert result.range_axis[row] == pytest.approx(3000.0, abs=15.0)
    assert col == 10
    assert result.velocity_axis[col] == pytest.approx(9.375)
    assert result.detections[row, col]

    cells = result.detection_cells()
    assert cells.shape[1] == 2
    assert np.any((np.abs(cells[:, 0] - 3000.0) < 15.0) & np.isclose(cells[:, 1], 9.375))

    assert metrics.counter(CFAR_DETECTIONS) == np.count_nonzero(result.detections)
    assert metrics.gauge(TARGETS_VISIBLE) == 1.0
    assert metrics.snapshot()["timers"][CPI_LATENCY]["count"] == 1


def test_simulate_cpi_shapes_and_noise(chirp_radar, rng):
    clean = simulate_cpi(chirp_radar, [], rng=rng, add_noise=False)
    noisy = simulate_cpi(chirp_radar, [], rng=rng)

    assert clean.shape == (2000, 16)
    assert not np.any(clean)
    assert np.mean(np.abs(noisy) ** 2) == pytest.approx(chirp_radar.power_noise_linear, rel=0.05)


def test_process_cpi_with_oversampling_and_window(chirp_radar):
    data = np.zeros((2000, 16), dtype=complex)

    result = process_cpi(chirp_radar, data, oversampling=2, window="hann")

    assert result.rd_map.shape == (2000 + 100 - 1, 32)
    assert result.velocity_axis.shape == (32,)
    assert not np.any(result.detections)


def test_stationary_target_peaks_at_zero_velocity(chirp_radar):
    target = Target([6000.0, 0.0, 0.0], [0.0, 0.0, 0.0], rcs=1.0)

    result = run_cpi(chirp_radar, [target], add_noise=False)

    _, col = np.unravel_index(np.argmax(result.power_map), result.power_map.shape)
    assert col == chirp_radar.num_pulses // 2
    assert result.velocity_axis[col] == pytest.approx(0.0, abs=1e-9)
