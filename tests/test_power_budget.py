import numpy as np
import pytest

from radar.antenna import CosineElement
from radar.exceptions import UnsupportedGeometryError
from radar.power_budget import cart2sph, received_power, snr
from radar.signal_generator import Target
from radar.units import Power, Scale


def _expected_power(tx_power, gain, wavelength, rcs, loss, r):
    return tx_power * gain ** 2 * wavelength ** 2 * rcs / ((4 * np.pi) ** 3 * loss * r ** 4)


def test_cart2sph():
    az, el = cart2sph(np.array([0.0, 1.0]), np.array([1.0, 0.0]), np.array([0.0, 1.0]))
    np.testing.assert_allclose(az, [np.pi / 2, 0.0])
    np.testing.assert_allclose(el, [0.0, np.pi / 4])


def test_received_power_matches_range_equation(make_radar):
    radar = make_radar(
        tx_power=1e3,
        loss_system=Power(3.0, Scale.DB),
        element=CosineElement(Power(10.0, Scale.DB), exponent=1.0),
        scale=Scale.LINEAR,
    )
    targets = [
        Target([1e4, 0, 0], [0, 0, 0], rcs=2.0),
        Target([1e4, 1e4, 0], [5, 0, 0], rcs=1.0),
    ]

    power = received_power(radar, targets)

    gain = 10.0 * np.array([1.0, np.cos(np.pi / 4)])
    ranges = np.array([1e4, np.sqrt(2) * 1e4])
    expected = _expected_power(1e3, gain, radar.wavelength, np.array([2.0, 1.0]),
                               10 ** 0.3, ranges)
    np.testing.assert_allclose(power, expected, rtol=1e-12)


def test_received_power_uses_true_range(make_radar):
    radar = make_radar(prf=10e3, scale=Scale.LINEAR)
    far = 2.5 * radar.range_unambig
    power = received_power(radar, [Target([far, 0, 0], [0, 0, 0], 1.0)])
    expected = _expected_power(1.0, 1.0, radar.wavelength, 1.0, 1.0, far)
    np.testing.assert_allclose(power, [expected])


def test_received_power_db_boundary(make_radar):
    linear = make_radar(scale=Scale.LINEAR, tx_power=50.0)
    in_db = make_radar(scale=Scale.DB, tx_power=50.0)
    targets = [Target([2e3, 100, 0], [0, 0, 0], 3.0)]

    np.testing.assert_allclose(received_power(in_db, targets),
                               10 * np.log10(received_power(linear, targets)))
    # Working copies only: the caller's radar keeps its units
    assert in_db.scale is Scale.DB
    assert in_db.loss_system.scale is Scale.DB


def test_snr_linear_and_db(make_radar):
    linear = make_radar(scale=Scale.LINEAR, tx_power=1e6, noise_fig=Power(4.0, Scale.DB))
    in_db = make_radar(scale=Scale.DB, tx_power=1e6, noise_fig=Power(4.0, Scale.DB))
    targets = [Target([5e3, 0, 0], [0, 0, 0], 10.0)]

    snr_lin = snr(linear, targets)
    np.testing.assert_allclose(snr_lin, received_power(linear, targets) / linear.power_noise)
    np.testing.assert_allclose(snr(in_db, targets), 10 * np.log10(snr_lin))


def test_received_power_requires_array(make_radar):
    radar = make_radar(single_element=True)
    with pytest.raises(UnsupportedGeometryError):
        received_power(radar, [Target([1e3, 0, 0], [0, 0, 0], 1.0)])
