import numpy as np
import pytest

from radar.ambiguity import (
    fold_doppler,
    measured_doppler,
    measured_range,
    measured_velocity,
    round_trip_phase,
    true_doppler,
    true_range,
)
from radar.signal_generator import Target


def _radial_target(range_m, radial_velocity):
    return Target(position=[range_m, 0, 0], velocity=[radial_velocity, 0, 0], rcs=1.0)


def test_true_range_is_euclidean(make_radar):
    radar = make_radar()
    targets = [Target([3, 4, 0], [0, 0, 0], 1.0), Target([0, 0, 12], [0, 0, 0], 1.0)]
    np.testing.assert_allclose(true_range(radar, targets), [5.0, 12.0])


def test_measured_range_within_unambiguous_interval(make_radar):
    radar = make_radar(prf=5000.0)
    rng = np.random.default_rng(0)
    targets = [Target(rng.uniform(-2e5, 2e5, 3), [0, 0, 0], 1.0) for _ in range(50)]

    ranges = measured_range(radar, targets)
    assert np.all(ranges >= 0)
    assert np.all(ranges < radar.range_unambig)


def test_measured_range_folds(make_radar):
    radar = make_radar(prf=1000.0)
    ru = radar.range_unambig
    np.testing.assert_allclose(measured_range(radar, [_radial_target(2.25 * ru, 0)]), [0.25 * ru])


def test_closing_target_sign(make_radar):
    radar = make_radar(prf=1000.0, wavelength=0.03)
    # Moving towards the radar: v.r_hat = -3 m/s -> +200 Hz
    np.testing.assert_allclose(true_doppler(radar, [_radial_target(1e3, -3.0)]), [200.0])
    np.testing.assert_allclose(measured_velocity(radar, [_radial_target(1e3, -3.0)]), [3.0])


def test_unambiguous_doppler_passes_through(make_radar):
    radar = make_radar(prf=1000.0, wavelength=0.03)
    np.testing.assert_allclose(measured_doppler(radar, [_radial_target(1e3, 6.0)]), [-400.0])


@pytest.mark.parametrize("k", [-3, -1, 1, 2, 7])
def test_measured_doppler_is_periodic_in_prf(make_radar, k):
    radar = make_radar(prf=1000.0, wavelength=0.03)
    base = 123.4
    # true Doppler -2 v / lambda -> v = -fd * lambda / 2
    targets = [
        _radial_target(1e3, -base * radar.wavelength / 2),
        _radial_target(1e3, -(base + k * radar.prf) * radar.wavelength / 2),
    ]
    doppler = measured_doppler(radar, targets)
    assert doppler[0] == pytest.approx(base)
    assert doppler[1] == pytest.approx(doppler[0], abs=1e-6)


def test_fold_doppler_interval():
    prf = 1000.0
    folded = fold_doppler(np.linspace(-5000, 5000, 1001), prf)
    assert np.all(folded >= -prf / 2)
    assert np.all(folded < prf / 2)


def test_fold_doppler_half_prf_boundary():
    # Exactly +/- prf/2 is not "unambiguous" (strict <) and folds to -prf/2
    np.testing.assert_allclose(fold_doppler([500.0, -500.0], 1000.0), [-500.0, -500.0])
    # Just inside is passed through unchanged
    np.testing.assert_allclose(fold_doppler([499.9, -499.9], 1000.0), [499.9, -499.9])
    # 700 Hz aliases to -300 Hz, 1300 Hz to 300 Hz
    np.testing.assert_allclose(fold_doppler([700.0, 1300.0], 1000.0), [-300.0, 300.0])


def test_round_trip_phase_range(make_radar):
    radar = make_radar(prf=1000.0)
    targets = [_radial_target(r, 0.0) for r in np.linspace(10.0, 5e5, 37)]
    phase = round_trip_phase(radar, targets)
    assert np.all(phase >= 0)
    assert np.all(phase < 2 * np.pi)

    expected = np.mod(-4 * np.pi * measured_range(radar, targets) / radar.wavelength, 2 * np.pi)
    np.testing.assert_allclose(phase, expected)
